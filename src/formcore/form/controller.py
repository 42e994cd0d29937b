"""Submission controller for formcore.

Orchestrates the submit transaction:
1. Validate every registered field, in registration order
2. Write failures to their fields and clear errors on fields that now pass
3. If anything failed, stop: the submit handler never sees invalid input
4. Otherwise run the submit handler and record its failure as the global error

Only one transaction runs per form at a time.
"""

import inspect
import logging
from collections.abc import Awaitable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

from formcore.errors import SubmissionError
from formcore.form.events import FormEventType
from formcore.form.registry import FieldRegistry, FieldToken
from formcore.form.state import FormState
from formcore.validation.engine import ValidationEngine
from formcore.validation.types import FieldError

if TYPE_CHECKING:
    from formcore.form.form import Form

logger = logging.getLogger(__name__)

# Handler signature: (values, form) -> None, sync or async
SubmitHandler = Callable[[dict[str, Any], "Form"], Awaitable[None] | None]


class SubmissionStatus(Enum):
    """Where the controller is in the submit transaction."""

    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"


class SubmitOutcome(Enum):
    """How a submit call ended.

    SUCCESS: Handler ran and returned
    BLOCKED: At least one field failed validation; handler not called
    FAILED: Handler raised; its message is the global error
    REJECTED: Another submission was already in progress
    """

    SUCCESS = "success"
    BLOCKED = "blocked"
    FAILED = "failed"
    REJECTED = "rejected"


@dataclass
class SubmitResult:
    """Result of one submit call.

    Attributes:
        outcome: How the transaction ended
        errors: Field id -> error for fields that failed validation
        error: The handler failure, when outcome is FAILED
    """

    outcome: SubmitOutcome
    errors: dict[str, FieldError] = field(default_factory=dict)
    error: SubmissionError | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is SubmitOutcome.SUCCESS


class SubmissionController:
    """Runs validate-then-submit transactions for one form.

    Attributes:
        state: The form's state
        fields: Registry used for every field write
        engine: Validates single fields
        handler: External submit handler
        context: Object handed to the handler next to the values (the Form)
    """

    def __init__(
        self,
        state: FormState,
        fields: FieldRegistry,
        engine: ValidationEngine,
        handler: SubmitHandler,
        context: Any = None,
    ):
        self.state = state
        self.fields = fields
        self.engine = engine
        self.handler = handler
        self.context = context
        self._status = SubmissionStatus.IDLE

    @property
    def status(self) -> SubmissionStatus:
        return self._status

    def _set_status(self, status: SubmissionStatus) -> None:
        self._status = status
        self.state.notify(FormEventType.STATUS_CHANGED)

    def validate_all(self) -> dict[str, FieldError]:
        """Validate every registered field and update their errors.

        Fields are checked in registration order. Skipped while a submit
        transaction is in progress; the transaction runs its own pass.

        Returns:
            Field id -> error for each field that failed
        """
        if self._status is not SubmissionStatus.IDLE:
            logger.debug(
                "Skipping validation of form '%s' during %s",
                self.state.id,
                self._status.value,
            )
            return {}
        return self._validate_pass()

    def _validate_pass(self) -> dict[str, FieldError]:
        """Validate a snapshot of the fields.

        A result for a field that was unregistered while the pass ran is
        discarded.
        """
        errors: dict[str, FieldError] = {}

        for current in self.fields:
            token = FieldToken(current.id, current.generation)
            error = self.engine.validate_field(current, current.value)
            if self.fields.apply_error(token, error) and error is not None:
                errors[current.id] = error

        return errors

    def revalidate(self, field_id: str) -> FieldError | None:
        """Re-run validation for one field and update its error.

        Skipped while a submit transaction is in progress.
        """
        if self._status is not SubmissionStatus.IDLE:
            logger.debug(
                "Skipping re-validation of '%s' on form '%s' during %s",
                field_id,
                self.state.id,
                self._status.value,
            )
            return None

        token = self.fields.token(field_id)
        current = self.fields.get(field_id)
        error = self.engine.validate_field(current, current.value)
        self.fields.apply_error(token, error)
        return error

    async def submit(self) -> SubmitResult:
        """Run one submit transaction.

        Returns:
            SubmitResult describing how the transaction ended. Field failures
            and handler failures are reported here, never raised.
        """
        if self._status is not SubmissionStatus.IDLE or self.state.submitting:
            logger.warning(
                "Form '%s' is already submitting, ignoring submit",
                self.state.id,
            )
            return SubmitResult(outcome=SubmitOutcome.REJECTED)

        self._set_status(SubmissionStatus.VALIDATING)
        try:
            errors = self._validate_pass()
        except BaseException:
            self._set_status(SubmissionStatus.IDLE)
            raise

        if errors:
            logger.debug(
                "Submit of form '%s' blocked by %d invalid field(s): %s",
                self.state.id,
                len(errors),
                ", ".join(errors),
            )
            self.state.set_submitting(False)
            self._set_status(SubmissionStatus.IDLE)
            return SubmitResult(outcome=SubmitOutcome.BLOCKED, errors=errors)

        self._set_status(SubmissionStatus.SUBMITTING)
        self.state.set_global_error(None)
        self.state.set_submitting(True)

        result = SubmitResult(outcome=SubmitOutcome.SUCCESS)
        try:
            pending = self.handler(self.fields.values(), self.context)
            if inspect.isawaitable(pending):
                await pending
        except Exception as e:
            failure = SubmissionError(e)
            logger.error("Submit handler for form '%s' failed: %s", self.state.id, failure.message)
            self.state.set_global_error(failure.message)
            result = SubmitResult(outcome=SubmitOutcome.FAILED, error=failure)
        finally:
            self.state.set_submitting(False)
            self._set_status(SubmissionStatus.IDLE)

        return result
