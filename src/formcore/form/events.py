"""Change notification channel for form state.

Every mutation of a form emits a FormEvent. A rendering layer subscribes
once and re-reads whatever state it needs when an event arrives.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)


class FormEventType(Enum):
    """What changed."""

    FIELD_REGISTERED = "fieldRegistered"
    FIELD_UNREGISTERED = "fieldUnregistered"
    VALUE_CHANGED = "valueChanged"
    ERROR_CHANGED = "errorChanged"
    GLOBAL_ERROR_CHANGED = "globalErrorChanged"
    SUBMITTING_CHANGED = "submittingChanged"
    STATUS_CHANGED = "statusChanged"


@dataclass(frozen=True)
class FormEvent:
    """A single state change.

    Attributes:
        type: Kind of change
        form_id: Form that changed
        field_id: Field that changed, or None for form-level changes
    """

    type: FormEventType
    form_id: str
    field_id: str | None = None


Listener = Callable[[FormEvent], None]


class EventChannel:
    """Fan-out of form events to subscribers, in subscription order."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Add a listener. Returns a function that removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, event: FormEvent) -> None:
        # Copy: listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                # The mutation already happened; a failing listener is only logged
                logger.error(
                    "Form listener failed on %s for form '%s': %s",
                    event.type.value,
                    event.form_id,
                    e,
                )

    def __len__(self) -> int:
        return len(self._listeners)
