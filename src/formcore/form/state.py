"""Form state: the single mutable record of one form instance."""

from dataclasses import dataclass, field
from typing import Any

from formcore.config import FormOptions
from formcore.form.events import EventChannel, FormEvent, FormEventType
from formcore.validation.types import CustomValidator, FieldError, FieldRules


@dataclass
class Field:
    """One registered input.

    Attributes:
        id: Form-unique field id
        value: Current value (string, list of strings, or list of file blobs)
        rules: Required flag, schema rules and custom validator
        error: Current error, or None when the field is valid
        generation: Registration counter; changes when the field is re-registered
    """

    id: str
    value: Any = ""
    rules: FieldRules = field(default_factory=FieldRules)
    error: str | FieldError | None = None
    generation: int = 0

    @property
    def required(self) -> bool:
        return self.rules.required

    @property
    def schema_rules(self) -> dict[str, Any]:
        return self.rules.schema

    @property
    def custom_validator(self) -> CustomValidator | None:
        return self.rules.validate


@dataclass
class FormState:
    """Full mutable state of one form.

    Mutate only through FieldRegistry and SubmissionController; both go
    through the setters here or emit their own events, so subscribers see
    every change.

    Attributes:
        id: Form id
        fields: Field id -> Field, in registration order
        global_error: Form-wide error from the submit handler
        submitting: True while the submit handler is running
        options: Form configuration
        events: Change notification channel
    """

    id: str
    fields: dict[str, Field] = field(default_factory=dict)
    global_error: str | BaseException | None = None
    submitting: bool = False
    options: FormOptions = field(default_factory=FormOptions)
    events: EventChannel = field(default_factory=EventChannel, repr=False)

    def notify(self, event_type: FormEventType, field_id: str | None = None) -> None:
        self.events.emit(FormEvent(type=event_type, form_id=self.id, field_id=field_id))

    def set_global_error(self, error: str | BaseException | None) -> None:
        self.global_error = error
        self.notify(FormEventType.GLOBAL_ERROR_CHANGED)

    def set_submitting(self, submitting: bool) -> None:
        self.submitting = submitting
        self.notify(FormEventType.SUBMITTING_CHANGED)

    def values(self) -> dict[str, Any]:
        """Snapshot of every field's current value."""
        return {
            field_id: list(f.value) if isinstance(f.value, list) else f.value
            for field_id, f in self.fields.items()
        }
