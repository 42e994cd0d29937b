"""Validator registry for formcore.

Provides registration and lookup for named schema validators:
- Built-in validators (lt, gt, lte, gte, len, email, numeric)
- Custom validators (application-specific, explicitly registered)

The registry is process-wide and only grows. Built-ins cannot be removed
or replaced.
"""

import logging
from typing import Any, Callable

from formcore.validation.types import MessageContext, SchemaValidator
from formcore.validation.validators.builtins import BUILTIN_VALIDATORS

logger = logging.getLogger(__name__)

_BUILTIN_NAMES = frozenset(v.name for v in BUILTIN_VALIDATORS)


class ValidatorRegistry:
    """Registry of named schema validators.

    Example:
        # Register a custom validator
        ValidatorRegistry.register(SchemaValidator(
            name="startsWith",
            predicate=lambda value, prefix: value.startswith(prefix),
            message=lambda ctx: f"Must start with {ctx.expected}",
        ))

        # Later, resolve from a field's schema
        validator = ValidatorRegistry.resolve("startsWith")
    """

    _validators: dict[str, SchemaValidator] = {v.name: v for v in BUILTIN_VALIDATORS}

    @classmethod
    def register(cls, validator: SchemaValidator) -> bool:
        """Register a validator under its name.

        An existing entry is never replaced. Registering a name that is
        already taken keeps the original and logs a warning, unless it is
        the very same entry.

        Args:
            validator: The validator to add

        Returns:
            True if the validator was added
        """
        existing = cls._validators.get(validator.name)
        if existing is not None:
            if existing is not validator:
                logger.warning(
                    "Validator '%s' is already registered, keeping the existing entry",
                    validator.name,
                )
            return False
        cls._validators[validator.name] = validator
        logger.debug("Registered validator '%s'", validator.name)
        return True

    @classmethod
    def resolve(cls, name: str) -> SchemaValidator | None:
        """Look up a validator by exact name. Returns None if unknown."""
        return cls._validators.get(name)

    @classmethod
    def get(cls, name: str) -> SchemaValidator:
        """Get a registered validator by name.

        Raises:
            ValueError: If validator is not registered
        """
        validator = cls._validators.get(name)
        if validator is None:
            raise ValueError(
                f"Validator '{name}' is not registered. "
                "Available validators: " + ", ".join(cls.list_registered())
            )
        return validator

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name in cls._validators

    @classmethod
    def is_builtin(cls, name: str) -> bool:
        return name in _BUILTIN_NAMES

    @classmethod
    def list_registered(cls) -> list[str]:
        """List all registered validator names."""
        return sorted(cls._validators.keys())

    @classmethod
    def reset(cls) -> None:
        """Drop custom validators, keeping the built-ins. Primarily for testing."""
        cls._validators = {v.name: v for v in BUILTIN_VALIDATORS}


def schema_validator(
    name: str,
    message: str | Callable[[MessageContext], str] = "Invalid value",
) -> Callable[[Callable[[Any, Any], bool]], Callable[[Any, Any], bool]]:
    """Decorator to register a predicate as a schema validator.

    Usage:
        @schema_validator("startsWith", message=lambda ctx: f"Must start with {ctx.expected}")
        def starts_with(value, prefix):
            return value.startswith(prefix)
    """
    format_message = message if callable(message) else (lambda ctx: message)

    def decorator(fn: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
        ValidatorRegistry.register(
            SchemaValidator(name=name, predicate=fn, message=format_message)
        )
        return fn

    return decorator
