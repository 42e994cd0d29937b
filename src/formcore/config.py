"""Form options and i18n configuration."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_REQUIRED_MESSAGE = "This field is required"
DEFAULT_INVALID_MESSAGE = "Invalid value"


@dataclass(frozen=True)
class MessageTable:
    """A message configured either once for the whole form or per field id.

    Resolution for a field: per-field entry, then the form-wide default,
    then the caller's fallback.
    """

    default: str | None = None
    per_field: Mapping[str, str] = field(default_factory=dict)

    def resolve(self, field_id: str, fallback: str) -> str:
        message = self.per_field.get(field_id)
        if message:
            return message
        if self.default:
            return self.default
        return fallback

    @classmethod
    def from_value(cls, value: "str | Mapping[str, str] | MessageTable | None") -> "MessageTable":
        """Accept a plain string, a {field_id: message} mapping, or None."""
        if value is None:
            return cls()
        if isinstance(value, MessageTable):
            return value
        if isinstance(value, str):
            return cls(default=value)
        if isinstance(value, Mapping):
            return cls(per_field={str(k): str(v) for k, v in value.items()})
        raise TypeError(
            f"Message must be a string or a mapping of field id to string, got {type(value).__name__}"
        )


@dataclass(frozen=True)
class I18n:
    """User-facing strings for one form.

    Attributes:
        cancel_label: Text of the cancel affordance
        submit_label: Text of the submit affordance
        required_message: Shown when a required field is empty
        invalid_message: Shown when a custom validator fails without a message
    """

    cancel_label: str = "Cancel"
    submit_label: str = "Submit"
    required_message: MessageTable = field(default_factory=MessageTable)
    invalid_message: MessageTable = field(default_factory=MessageTable)

    def required_for(self, field_id: str) -> str:
        return self.required_message.resolve(field_id, DEFAULT_REQUIRED_MESSAGE)

    def invalid_for(self, field_id: str) -> str:
        return self.invalid_message.resolve(field_id, DEFAULT_INVALID_MESSAGE)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "I18n":
        """Create I18n from YAML/JSON dict.

        Keys: cancel, submit, required, invalid. ``required`` and ``invalid``
        take a string or a mapping of field id to string.
        """
        data = data or {}
        _log_unknown_keys("i18n", data, {"cancel", "submit", "required", "invalid"})
        return cls(
            cancel_label=data.get("cancel") or "Cancel",
            submit_label=data.get("submit") or "Submit",
            required_message=MessageTable.from_value(data.get("required")),
            invalid_message=MessageTable.from_value(data.get("invalid")),
        )


@dataclass(frozen=True)
class FormOptions:
    """Per-form configuration surface.

    Attributes:
        show_required_sign: Render a marker next to required fields
        initial_focus_field_id: Field the rendering layer should focus on mount
        custom_buttons: Rendering layer supplies its own submit/cancel buttons
        i18n: User-facing strings
    """

    show_required_sign: bool = True
    initial_focus_field_id: str | None = None
    custom_buttons: bool = False
    i18n: I18n = field(default_factory=I18n)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "FormOptions":
        """Create FormOptions from YAML/JSON dict."""
        data = data or {}
        _log_unknown_keys(
            "options",
            data,
            {"showRequiredSign", "initialFocus", "customButtons", "i18n"},
        )
        return cls(
            show_required_sign=bool(data.get("showRequiredSign", True)),
            initial_focus_field_id=data.get("initialFocus"),
            custom_buttons=bool(data.get("customButtons", False)),
            i18n=I18n.from_dict(data.get("i18n")),
        )


def _log_unknown_keys(section: str, data: dict[str, Any], known: set[str]) -> None:
    for key in data:
        if key not in known:
            logger.debug("Ignoring unknown %s key '%s'", section, key)
