"""The binding contract a rendering layer uses for one form instance."""

import logging
from typing import Any, Callable

from formcore.config import FormOptions, I18n
from formcore.form.controller import (
    SubmissionController,
    SubmissionStatus,
    SubmitHandler,
    SubmitResult,
)
from formcore.form.events import Listener
from formcore.form.registry import FieldRegistry
from formcore.form.state import FormState
from formcore.validation.engine import ValidationEngine
from formcore.validation.types import CustomValidator, FieldError, FieldRules

logger = logging.getLogger(__name__)


class Form:
    """One mounted form.

    Owns the FormState and routes every write through the FieldRegistry or
    the SubmissionController. Reads are free.

    Example:
        async def save(values, form):
            if values["username"] == "taken":
                form.set_global_error("That name is taken")

        form = Form("signup", on_submit=save)
        form.register_field("username", required=True, schema={"gt": 3})
        form.on_value_change("username", "alice")
        result = await form.submit()
    """

    def __init__(
        self,
        form_id: str,
        on_submit: SubmitHandler,
        *,
        on_cancel: Callable[[], None] | None = None,
        options: FormOptions | None = None,
    ):
        self.state = FormState(id=form_id, options=options or FormOptions())
        self.fields = FieldRegistry(self.state)
        self.engine = ValidationEngine(self.state.options.i18n)
        self.controller = SubmissionController(
            self.state,
            self.fields,
            self.engine,
            on_submit,
            context=self,
        )
        self._on_cancel = on_cancel

    @property
    def id(self) -> str:
        return self.state.id

    @property
    def options(self) -> FormOptions:
        return self.state.options

    @property
    def i18n(self) -> I18n:
        return self.state.options.i18n

    # -- fields ---------------------------------------------------------------

    def register_field(
        self,
        field_id: str,
        initial_value: Any = "",
        *,
        required: bool = False,
        schema: dict[str, Any] | None = None,
        validate: CustomValidator | None = None,
        error: str | FieldError | None = None,
    ) -> bool:
        """Register a field on mount. Repeated calls for the same id are ignored."""
        rules = FieldRules(required=required, schema=dict(schema or {}), validate=validate)
        return self.fields.register(field_id, initial_value, rules, error=error)

    def unregister_field(self, field_id: str) -> bool:
        return self.fields.unregister(field_id)

    def on_value_change(self, field_id: str, value: Any) -> None:
        """Store a new value; re-validate the field if it currently shows an error."""
        had_error = self.fields.get(field_id).error is not None
        self.fields.set_value(field_id, value)
        if had_error:
            self.controller.revalidate(field_id)

    def get_field_value(self, field_id: str) -> Any:
        return self.fields.get(field_id).value

    def get_field_error(self, field_id: str) -> str | None:
        field = self.state.fields.get(field_id)
        if field is None or field.error is None:
            return None
        return str(field.error) or self.i18n.invalid_for(field_id)

    def set_field_error(self, field_id: str, error: str | FieldError | None) -> None:
        self.fields.set_error(field_id, error)

    @property
    def values(self) -> dict[str, Any]:
        return self.fields.values()

    # -- form-level state -----------------------------------------------------

    def get_global_error(self) -> str | BaseException | None:
        return self.state.global_error

    def set_global_error(self, error: str | BaseException | None) -> None:
        self.state.set_global_error(error)

    def is_submitting(self) -> bool:
        return self.state.submitting

    @property
    def status(self) -> SubmissionStatus:
        return self.controller.status

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Get notified of every state change. Returns an unsubscribe function."""
        return self.state.events.subscribe(listener)

    # -- actions --------------------------------------------------------------

    def validate(self) -> dict[str, FieldError]:
        """Validate all fields without submitting."""
        return self.controller.validate_all()

    async def submit(self) -> SubmitResult:
        return await self.controller.submit()

    @property
    def can_cancel(self) -> bool:
        return self._on_cancel is not None

    def cancel_form(self) -> bool:
        """Invoke the cancel callback.

        Returns:
            False if the form has no cancel callback
        """
        if self._on_cancel is None:
            logger.debug("Form '%s' has no cancel callback", self.id)
            return False
        self._on_cancel()
        return True
