"""Exceptions raised by formcore.

Field-level validation failures are never raised; they are returned as
FieldError values (see formcore.validation.types) and stored per field.
The exceptions here cover programming errors, bad configuration and
submit handler failures.
"""


class FormcoreError(Exception):
    """Base class for all formcore exceptions."""


class UnknownFieldError(FormcoreError, KeyError):
    """Raised when writing to a field id that is not registered."""

    def __init__(self, form_id: str, field_id: str):
        self.form_id = form_id
        self.field_id = field_id
        super().__init__(f"Field '{field_id}' is not registered on form '{form_id}'")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return self.args[0]


class FormDefinitionError(FormcoreError):
    """Raised when a form definition file cannot be loaded."""


class SubmissionError(FormcoreError):
    """Failure of the external submit handler.

    Attributes:
        cause: The exception raised by the handler
        message: String form stored as the form's global error
    """

    def __init__(self, cause: BaseException):
        self.cause = cause
        self.message = str(cause) or type(cause).__name__
        super().__init__(self.message)
