"""Core types for the formcore validation system.

This module defines the values that flow through field validation:
- FieldError and its variants: the result of a failed check
- ValidatorRule variants: Required, Schema(name, param), Custom(fn)
- FieldRules: the rule set registered for one field
- SchemaValidator: a named, parameterized registry entry
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol


# =============================================================================
# Field Errors
# =============================================================================


@dataclass(frozen=True)
class FieldError:
    """A single field validation failure.

    Attributes:
        message: Human-readable message shown next to the field
        code: Machine-readable error code (e.g., "REQUIRED")
        field: Field id this error relates to
    """

    message: str
    code: str = "INVALID"
    field: str | None = None

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "field": self.field,
        }


@dataclass(frozen=True)
class RequiredFieldError(FieldError):
    """Empty value on a required field."""

    code: str = "REQUIRED"


@dataclass(frozen=True)
class SchemaViolationError(FieldError):
    """A named schema validator rejected the value."""

    code: str = "SCHEMA"
    rule: str = ""
    expected: str = ""

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["rule"] = self.rule
        result["expected"] = self.expected
        return result


@dataclass(frozen=True)
class CustomValidationError(FieldError):
    """A user-supplied validator signaled failure."""

    code: str = "CUSTOM"


# =============================================================================
# Rules
# =============================================================================

# A custom validator returns None (or True) to pass. Anything else is a
# failure payload: a string, a FieldError, or an object with a `message`.
CustomValidator = Callable[[Any], Any]


@dataclass(frozen=True)
class RequiredRule:
    pass


@dataclass(frozen=True)
class SchemaRule:
    name: str
    param: Any


@dataclass(frozen=True)
class CustomRule:
    fn: CustomValidator


ValidatorRule = RequiredRule | SchemaRule | CustomRule


@dataclass
class FieldRules:
    """Rules registered for a single field.

    Attributes:
        required: Field must have a non-empty value
        schema: Named validator -> param, evaluated in insertion order
        validate: Optional custom validator, evaluated last
    """

    required: bool = False
    schema: dict[str, Any] = field(default_factory=dict)
    validate: CustomValidator | None = None

    def iter_rules(self) -> Iterator[ValidatorRule]:
        """Yield rules in evaluation order: Required, Schema, Custom."""
        if self.required:
            yield RequiredRule()
        for name, param in self.schema.items():
            yield SchemaRule(name, param)
        if self.validate is not None:
            yield CustomRule(self.validate)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FieldRules":
        """Create FieldRules from a YAML/JSON dict (custom validators excluded)."""
        return cls(
            required=bool(data.get("required", False)),
            schema=dict(data.get("schema") or {}),
        )


class ValidatableField(Protocol):
    """Anything the validation engine can check: an id plus its rules."""

    id: str
    rules: FieldRules


# =============================================================================
# Registry Entries
# =============================================================================


@dataclass(frozen=True)
class MessageContext:
    """Context handed to a validator's message function."""

    expected: str
    value: Any


@dataclass(frozen=True)
class SchemaValidator:
    """A named, parameterized predicate with its default message.

    Attributes:
        name: Registry key referenced from a field's schema (e.g., "gt")
        predicate: (value, param) -> bool, True when the value passes
        message: (MessageContext) -> str, used when the predicate fails
    """

    name: str
    predicate: Callable[[Any, Any], bool]
    message: Callable[[MessageContext], str]

    def check(self, value: Any, param: Any) -> bool:
        return bool(self.predicate(value, param))

    def format_message(self, param: Any, value: Any) -> str:
        return self.message(MessageContext(expected=str(param), value=value))
