"""Built-in schema validators.

Length comparisons, parameterized by an integer bound:
- lt, gt, lte, gte, len

Format checks, enabled with a truthy param (``email: true``):
- email, numeric

Length checks measure a string's characters or a list's items. Format
checks on a list require every item to match.
"""

import re
from typing import Any, Callable

from formcore.validation.types import MessageContext, SchemaValidator


# =============================================================================
# Format Patterns
# =============================================================================

# Anything containing an "@"
EMAIL_PATTERN = re.compile(r".*@.*", re.DOTALL)

NUMERIC_PATTERN = re.compile(r"\d+", re.ASCII)


# =============================================================================
# Helpers
# =============================================================================


def _length(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, (str, list, tuple)):
        return len(value)
    return len(str(value))


def _unit(value: Any) -> str:
    return "items" if isinstance(value, (list, tuple)) else "characters"


def _length_validator(
    name: str,
    compare: Callable[[int, int], bool],
    template: str,
) -> SchemaValidator:
    def predicate(value: Any, bound: Any) -> bool:
        return compare(_length(value), int(bound))

    def message(ctx: MessageContext) -> str:
        return template.format(expected=ctx.expected, unit=_unit(ctx.value))

    return SchemaValidator(name=name, predicate=predicate, message=message)


def _format_validator(
    name: str,
    pattern: re.Pattern[str],
    text: str,
) -> SchemaValidator:
    def predicate(value: Any, enabled: Any) -> bool:
        if enabled is False:
            return True
        items = value if isinstance(value, (list, tuple)) else [value]
        return all(
            isinstance(item, str) and pattern.fullmatch(item) is not None
            for item in items
        )

    return SchemaValidator(name=name, predicate=predicate, message=lambda ctx: text)


# =============================================================================
# Built-in Set
# =============================================================================

BUILTIN_VALIDATORS: tuple[SchemaValidator, ...] = (
    _length_validator("lt", lambda n, b: n < b, "Must be fewer than {expected} {unit}"),
    _length_validator("gt", lambda n, b: n > b, "Must be more than {expected} {unit}"),
    _length_validator("lte", lambda n, b: n <= b, "Must be at most {expected} {unit}"),
    _length_validator("gte", lambda n, b: n >= b, "Must be at least {expected} {unit}"),
    _length_validator("len", lambda n, b: n == b, "Must be exactly {expected} {unit}"),
    _format_validator("email", EMAIL_PATTERN, "Invalid email address"),
    _format_validator("numeric", NUMERIC_PATTERN, "Must be a numeric value"),
)
