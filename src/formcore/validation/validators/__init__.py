"""Built-in schema validators for formcore.

This module provides the named validators a field's schema can reference
without any registration.
"""

from formcore.validation.validators.builtins import (
    BUILTIN_VALIDATORS,
    EMAIL_PATTERN,
    NUMERIC_PATTERN,
)

__all__ = [
    "BUILTIN_VALIDATORS",
    "EMAIL_PATTERN",
    "NUMERIC_PATTERN",
]
