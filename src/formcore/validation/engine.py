"""Validation engine for formcore.

Evaluates one field's value against its rules. Checks run cheapest first
and the first failure wins:
1. Required: the value must not be empty
2. Schema: named validators from the ValidatorRegistry, in declared order
3. Custom: the field's own validator function

Unknown validator names and misconfigured params fail open: the rule is
logged and skipped so a typo never locks a form.
"""

import logging
from typing import Any

from formcore.config import I18n
from formcore.validation.registry import ValidatorRegistry
from formcore.validation.types import (
    CustomRule,
    CustomValidationError,
    CustomValidator,
    FieldError,
    RequiredFieldError,
    RequiredRule,
    SchemaRule,
    SchemaViolationError,
    ValidatableField,
)

logger = logging.getLogger(__name__)


def is_empty(value: Any) -> bool:
    """Check if a value counts as missing for a required field."""
    if value is None:
        return True
    if isinstance(value, str) and value == "":
        return True
    if isinstance(value, (list, tuple)) and len(value) == 0:
        return True
    return False


class ValidationEngine:
    """Runs a field's rules against a value.

    Attributes:
        i18n: Source of the required and invalid messages
        registry: Where schema rule names are resolved
    """

    def __init__(
        self,
        i18n: I18n | None = None,
        registry: type[ValidatorRegistry] = ValidatorRegistry,
    ):
        self.i18n = i18n or I18n()
        self.registry = registry

    def validate_field(self, field: ValidatableField, value: Any) -> FieldError | None:
        """Validate a value for a field.

        Args:
            field: The field whose rules apply
            value: The value to check (usually the field's current value)

        Returns:
            The first failure, or None if the value passes every rule
        """
        for rule in field.rules.iter_rules():
            if isinstance(rule, RequiredRule):
                error = self._check_required(field.id, value)
            elif isinstance(rule, SchemaRule):
                error = self._check_schema(field.id, rule, value)
            elif isinstance(rule, CustomRule):
                error = self._check_custom(field.id, rule.fn, value)
            else:
                raise TypeError(f"Unsupported rule type: {type(rule).__name__}")

            if error is not None:
                return error
        return None

    def _check_required(self, field_id: str, value: Any) -> FieldError | None:
        if is_empty(value):
            return RequiredFieldError(
                message=self.i18n.required_for(field_id),
                field=field_id,
            )
        return None

    def _check_schema(self, field_id: str, rule: SchemaRule, value: Any) -> FieldError | None:
        validator = self.registry.resolve(rule.name)
        if validator is None:
            logger.warning(
                "Unknown validator '%s' on field '%s', skipping rule",
                rule.name,
                field_id,
            )
            return None

        if rule.param is None:
            logger.warning(
                "Validator '%s' on field '%s' has no value configured, skipping rule",
                rule.name,
                field_id,
            )
            return None

        try:
            passed = validator.check(value, rule.param)
        except Exception as e:
            logger.warning(
                "Validator '%s' on field '%s' could not be evaluated with %r: %s",
                rule.name,
                field_id,
                rule.param,
                e,
            )
            return None

        if passed:
            return None

        return SchemaViolationError(
            message=validator.format_message(rule.param, value),
            field=field_id,
            rule=rule.name,
            expected=str(rule.param),
        )

    def _check_custom(
        self, field_id: str, fn: CustomValidator, value: Any
    ) -> FieldError | None:
        try:
            outcome = fn(value)
        except Exception as e:
            # Raising counts as a failure
            logger.debug("Custom validator on field '%s' raised: %r", field_id, e)
            outcome = e

        if outcome is None or outcome is True:
            return None
        return CustomValidationError(
            message=self._failure_message(field_id, outcome),
            field=field_id,
        )

    def _failure_message(self, field_id: str, outcome: Any) -> str:
        """Extract a message from a custom validator's failure payload."""
        if isinstance(outcome, FieldError):
            return outcome.message or self.i18n.invalid_for(field_id)
        if isinstance(outcome, str):
            return outcome or self.i18n.invalid_for(field_id)

        message = getattr(outcome, "message", None)
        if isinstance(message, str) and message:
            return message
        if isinstance(outcome, Exception) and str(outcome):
            return str(outcome)
        return self.i18n.invalid_for(field_id)


def validate_field(
    field: ValidatableField,
    value: Any,
    i18n: I18n | None = None,
) -> FieldError | None:
    """Validate a value for a field with the process-wide registry."""
    return ValidationEngine(i18n).validate_field(field, value)
