"""
definitions.py: declarative form definitions loaded from YAML.

A definition file describes one form:

    form:
      id: signup
      options:
        initialFocus: username
        i18n:
          required:
            username: Pick a username
      fields:
        - id: username
          required: true
          schema: {gt: 3}
        - id: email
          schema: {email: true}

Files are checked against a bundled JSON Schema, then semantically
(duplicate ids, unknown validators, focus target).

Usage:
    from formcore.definitions import build_form, load_definition

    definition = load_definition(Path("forms/signup.yaml"))
    form = build_form(definition, on_submit=save)
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from formcore.config import FormOptions
from formcore.errors import FormDefinitionError
from formcore.form.controller import SubmitHandler
from formcore.form.form import Form
from formcore.validation.registry import ValidatorRegistry
from formcore.validation.types import FieldRules

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).parent / "schemas" / "form.schema.json"


# ---------------------------------------------------------------------------
# Public data types
# ---------------------------------------------------------------------------


@dataclass
class DefinitionIssue:
    """A single finding for a form definition file."""

    file: Path
    message: str
    path: str = ""          # location within the document, e.g. "form/fields[0]"
    severity: str = "error" # "error" | "warning"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[{self.severity.upper()}] {self.file}{loc}: {self.message}"


@dataclass
class FieldDefinition:
    """One field of a form definition."""

    id: str
    default: str | list[str] = ""
    required: bool = False
    schema: dict[str, Any] = field(default_factory=dict)
    label: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FieldDefinition:
        return cls(
            id=data["id"],
            default=data.get("default", ""),
            required=bool(data.get("required", False)),
            schema=dict(data.get("schema") or {}),
            label=data.get("label"),
        )

    def to_rules(self) -> FieldRules:
        return FieldRules(required=self.required, schema=dict(self.schema))


@dataclass
class FormDefinition:
    """A whole form: id, options and fields in registration order."""

    id: str
    options: FormOptions = field(default_factory=FormOptions)
    fields: list[FieldDefinition] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FormDefinition:
        """Create a FormDefinition from the ``form`` mapping of a definition file."""
        return cls(
            id=data["id"],
            options=FormOptions.from_dict(data.get("options")),
            fields=[FieldDefinition.from_dict(f) for f in data.get("fields") or []],
        )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_schema() -> dict[str, Any]:
    with _SCHEMA_PATH.open() as fh:
        return json.load(fh)


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def _read_yaml(path: Path) -> tuple[Any, list[DefinitionIssue]]:
    try:
        with path.open() as fh:
            raw = yaml.safe_load(fh)
    except OSError as exc:
        return None, [DefinitionIssue(file=path, message=f"Cannot read file: {exc}")]
    except yaml.YAMLError as exc:
        return None, [DefinitionIssue(file=path, message=f"YAML parse error: {exc}")]

    if raw is None:
        return None, [
            DefinitionIssue(file=path, message="File is empty or contains only whitespace")
        ]
    return raw, []


def _semantic_issues(path: Path, form: dict[str, Any]) -> list[DefinitionIssue]:
    issues: list[DefinitionIssue] = []
    seen: set[str] = set()

    for index, field_data in enumerate(form.get("fields") or []):
        field_id = field_data["id"]
        if field_id in seen:
            issues.append(DefinitionIssue(
                file=path,
                message=f"Duplicate field id '{field_id}'",
                path=f"form/fields[{index}]/id",
            ))
        seen.add(field_id)

        for name in (field_data.get("schema") or {}):
            if not ValidatorRegistry.is_registered(name):
                issues.append(DefinitionIssue(
                    file=path,
                    message=f"Unknown validator '{name}' will be ignored",
                    path=f"form/fields[{index}]/schema/{name}",
                    severity="warning",
                ))

    focus = (form.get("options") or {}).get("initialFocus")
    if focus is not None and focus not in seen:
        issues.append(DefinitionIssue(
            file=path,
            message=f"initialFocus refers to unknown field '{focus}'",
            path="form/options/initialFocus",
            severity="warning",
        ))

    return issues


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_definition_file(path: Path) -> list[DefinitionIssue]:
    """
    Validate a form definition file.

    Structural errors come from the JSON Schema; semantic checks only run
    when the structure is valid.

    Returns:
        A list of :class:`DefinitionIssue` objects (empty on success).
    """
    raw, issues = _read_yaml(path)
    if issues:
        return issues

    validator = Draft202012Validator(_load_schema())
    for error in sorted(validator.iter_errors(raw), key=lambda e: [str(p) for p in e.path]):
        issues.append(
            DefinitionIssue(file=path, message=error.message, path=_json_path(error))
        )
    if issues:
        return issues

    return _semantic_issues(path, raw["form"])


def load_definition(path: Path) -> FormDefinition:
    """
    Load and validate a form definition file.

    Warnings are logged; errors abort.

    Raises:
        FormDefinitionError: If the file has any error-severity issue.
    """
    issues = validate_definition_file(path)
    errors = [i for i in issues if i.severity == "error"]
    for issue in issues:
        if issue.severity != "error":
            logger.warning("%s", issue)
    if errors:
        raise FormDefinitionError(
            f"Invalid form definition {path}:\n" + "\n".join(str(e) for e in errors)
        )

    with path.open() as fh:
        raw = yaml.safe_load(fh)
    return FormDefinition.from_dict(raw["form"])


def build_form(
    definition: FormDefinition,
    on_submit: SubmitHandler,
    on_cancel: Callable[[], None] | None = None,
) -> Form:
    """Create a Form and register every field of the definition, in order."""
    form = Form(
        definition.id,
        on_submit,
        on_cancel=on_cancel,
        options=definition.options,
    )
    for field_def in definition.fields:
        default = field_def.default
        form.fields.register(
            field_def.id,
            list(default) if isinstance(default, list) else default,
            field_def.to_rules(),
        )
    return form
