"""Field registry: per-field value, rule and error bookkeeping.

Fields register on mount and unregister on unmount. Registration is
idempotent so a rendering layer that re-registers on every render does
not reset the stored value.
"""

import itertools
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from formcore.errors import UnknownFieldError
from formcore.form.events import FormEventType
from formcore.form.state import Field, FormState
from formcore.validation.types import FieldError, FieldRules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldToken:
    """Identifies one registration of a field.

    A validation result is applied through its token, so results computed
    for a field that has since been unregistered (or re-registered) are
    dropped instead of written.
    """

    field_id: str
    generation: int


class FieldRegistry:
    """Registers fields into a FormState and mutates them.

    Every mutation emits a FormEvent on the state's channel.
    """

    _generations = itertools.count(1)

    def __init__(self, state: FormState):
        self.state = state

    def register(
        self,
        field_id: str,
        initial_value: Any = "",
        rules: FieldRules | None = None,
        error: str | FieldError | None = None,
    ) -> bool:
        """Register a field.

        Idempotent: if the id is already registered nothing changes.

        Args:
            field_id: Form-unique id
            initial_value: Starting value
            rules: Validation rules (defaults to none)
            error: Error to show from the start, e.g. supplied by the server

        Returns:
            True if the field was newly registered
        """
        if field_id in self.state.fields:
            logger.debug(
                "Field '%s' already registered on form '%s', ignoring",
                field_id,
                self.state.id,
            )
            return False

        self.state.fields[field_id] = Field(
            id=field_id,
            value=initial_value,
            rules=rules or FieldRules(),
            error=error,
            generation=next(self._generations),
        )
        logger.debug("Registered field '%s' on form '%s'", field_id, self.state.id)
        self.state.notify(FormEventType.FIELD_REGISTERED, field_id)
        return True

    def unregister(self, field_id: str) -> bool:
        """Remove a field. Pending results for it become stale.

        Returns:
            True if the field was registered
        """
        if self.state.fields.pop(field_id, None) is None:
            return False
        logger.debug("Unregistered field '%s' from form '%s'", field_id, self.state.id)
        self.state.notify(FormEventType.FIELD_UNREGISTERED, field_id)
        return True

    def set_value(self, field_id: str, value: Any) -> None:
        """Overwrite a field's value. Does not validate."""
        self.get(field_id).value = value
        self.state.notify(FormEventType.VALUE_CHANGED, field_id)

    def set_error(self, field_id: str, error: str | FieldError | None) -> None:
        """Overwrite a field's error slot (None clears it)."""
        self.get(field_id).error = error
        self.state.notify(FormEventType.ERROR_CHANGED, field_id)

    def get(self, field_id: str) -> Field:
        field = self.state.fields.get(field_id)
        if field is None:
            raise UnknownFieldError(self.state.id, field_id)
        return field

    def token(self, field_id: str) -> FieldToken:
        return FieldToken(field_id, self.get(field_id).generation)

    def is_current(self, token: FieldToken) -> bool:
        field = self.state.fields.get(token.field_id)
        return field is not None and field.generation == token.generation

    def apply_error(self, token: FieldToken, error: str | FieldError | None) -> bool:
        """Write a validation result if its field registration is still live.

        Returns:
            True if the error was written, False if it was discarded
        """
        if not self.is_current(token):
            logger.debug(
                "Discarding validation result for stale field '%s' on form '%s'",
                token.field_id,
                self.state.id,
            )
            return False
        self.set_error(token.field_id, error)
        return True

    def values(self) -> dict[str, Any]:
        return self.state.values()

    def __contains__(self, field_id: object) -> bool:
        return field_id in self.state.fields

    def __iter__(self) -> Iterator[Field]:
        return iter(list(self.state.fields.values()))

    def __len__(self) -> int:
        return len(self.state.fields)
