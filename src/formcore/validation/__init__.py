"""formcore validation system.

Each field is checked in three steps, stopping at the first failure:
- Required: non-empty value
- Schema: named validators from the ValidatorRegistry (lt, gt, email, ...)
- Custom: the field's own validator function

Usage:
    from formcore.validation import ValidatorRegistry, schema_validator

    @schema_validator("startsWith", message=lambda ctx: f"Must start with {ctx.expected}")
    def starts_with(value, prefix):
        return value.startswith(prefix)
"""

from formcore.validation.engine import ValidationEngine, is_empty, validate_field
from formcore.validation.registry import ValidatorRegistry, schema_validator
from formcore.validation.types import (
    CustomRule,
    CustomValidationError,
    CustomValidator,
    FieldError,
    FieldRules,
    MessageContext,
    RequiredFieldError,
    RequiredRule,
    SchemaRule,
    SchemaValidator,
    SchemaViolationError,
    ValidatableField,
    ValidatorRule,
)

__all__ = [
    # Types
    "CustomRule",
    "CustomValidationError",
    "CustomValidator",
    "FieldError",
    "FieldRules",
    "MessageContext",
    "RequiredFieldError",
    "RequiredRule",
    "SchemaRule",
    "SchemaValidator",
    "SchemaViolationError",
    "ValidatableField",
    "ValidatorRule",
    # Registry
    "ValidatorRegistry",
    "schema_validator",
    # Engine
    "ValidationEngine",
    "is_empty",
    "validate_field",
]
