"""Form state, field registry and submission for formcore.

Usage:
    from formcore.form import Form

    form = Form("login", on_submit=handle_login)
    form.register_field("email", required=True, schema={"email": True})
"""

from formcore.form.controller import (
    SubmissionController,
    SubmissionStatus,
    SubmitHandler,
    SubmitOutcome,
    SubmitResult,
)
from formcore.form.events import EventChannel, FormEvent, FormEventType, Listener
from formcore.form.form import Form
from formcore.form.registry import FieldRegistry, FieldToken
from formcore.form.state import Field, FormState

__all__ = [
    # State
    "Field",
    "FormState",
    # Events
    "EventChannel",
    "FormEvent",
    "FormEventType",
    "Listener",
    # Registry
    "FieldRegistry",
    "FieldToken",
    # Submission
    "SubmissionController",
    "SubmissionStatus",
    "SubmitHandler",
    "SubmitOutcome",
    "SubmitResult",
    # Binding contract
    "Form",
]
