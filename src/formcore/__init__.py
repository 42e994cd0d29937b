"""formcore: framework-agnostic form orchestration.

Tracks field values, runs per-field and whole-form validation and drives
the submit lifecycle (validate, call the submit handler, report success or
failure) for any rendering layer.

Usage:
    from formcore import Form

    async def save(values, form):
        ...

    form = Form("login", on_submit=save)
    form.register_field("email", required=True, schema={"email": True})
    form.on_value_change("email", "me@example.com")
    result = await form.submit()
"""

from formcore.config import FormOptions, I18n, MessageTable
from formcore.definitions import (
    DefinitionIssue,
    FieldDefinition,
    FormDefinition,
    build_form,
    load_definition,
    validate_definition_file,
)
from formcore.errors import (
    FormcoreError,
    FormDefinitionError,
    SubmissionError,
    UnknownFieldError,
)
from formcore.form import (
    Field,
    FieldRegistry,
    Form,
    FormEvent,
    FormEventType,
    FormState,
    SubmissionController,
    SubmissionStatus,
    SubmitOutcome,
    SubmitResult,
)
from formcore.validation import (
    CustomValidationError,
    FieldError,
    FieldRules,
    RequiredFieldError,
    SchemaValidator,
    SchemaViolationError,
    ValidationEngine,
    ValidatorRegistry,
    schema_validator,
    validate_field,
)

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "FormOptions",
    "I18n",
    "MessageTable",
    # Definitions
    "DefinitionIssue",
    "FieldDefinition",
    "FormDefinition",
    "build_form",
    "load_definition",
    "validate_definition_file",
    # Errors
    "FormcoreError",
    "FormDefinitionError",
    "SubmissionError",
    "UnknownFieldError",
    # Form
    "Field",
    "FieldRegistry",
    "Form",
    "FormEvent",
    "FormEventType",
    "FormState",
    "SubmissionController",
    "SubmissionStatus",
    "SubmitOutcome",
    "SubmitResult",
    # Validation
    "CustomValidationError",
    "FieldError",
    "FieldRules",
    "RequiredFieldError",
    "SchemaValidator",
    "SchemaViolationError",
    "ValidationEngine",
    "ValidatorRegistry",
    "schema_validator",
    "validate_field",
]
