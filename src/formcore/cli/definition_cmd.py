"""Form definition CLI commands: check, validate, validators."""

from pathlib import Path

import click
import yaml

from formcore.definitions import build_form, load_definition, validate_definition_file
from formcore.errors import FormDefinitionError
from formcore.validation.registry import ValidatorRegistry


def _as_form_value(value):
    """Form values are strings or lists of strings; YAML may hand us numbers."""
    if value is None:
        return ""
    if isinstance(value, list):
        return [str(item) for item in value]
    return str(value)


def _echo_issues(issues) -> int:
    """Print issues coloured by severity. Returns the number of errors."""
    errors = 0
    for issue in issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour))
        if issue.severity == "error":
            errors += 1
    return errors


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors.",
)
def check(path: Path, strict: bool):
    """Check a form definition file against the schema."""
    issues = validate_definition_file(path)
    errors = _echo_issues(issues)
    warnings = len(issues) - errors

    if errors or (strict and warnings):
        click.echo(
            click.style(
                f"\n{errors} error(s) found"
                + (f", {warnings} warning(s)" if warnings else ""),
                fg="red",
                bold=True,
            )
        )
        raise SystemExit(1)

    definition = load_definition(path)
    click.echo(f"Form '{definition.id}' ({len(definition.fields)} fields)")
    for field_def in definition.fields:
        flags = " required" if field_def.required else ""
        rules = ", ".join(f"{k}={v}" for k, v in field_def.schema.items())
        label = f" ({field_def.label})" if field_def.label else ""
        click.echo(f"  ✓ {field_def.id}{label}{flags}" + (f" [{rules}]" if rules else ""))

    click.echo(click.style("\nForm definition is valid.", fg="green", bold=True))


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--values",
    "values_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML mapping of field id to value.",
)
def validate(path: Path, values_path: Path):
    """Validate a set of values against a form definition."""
    try:
        definition = load_definition(path)
    except FormDefinitionError as e:
        click.echo(click.style(str(e), fg="red"), err=True)
        raise SystemExit(1)

    try:
        with values_path.open() as fh:
            values = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        click.echo(click.style(f"YAML parse error: {exc}", fg="red"), err=True)
        raise SystemExit(1)
    if not isinstance(values, dict):
        click.echo(click.style("Values file must contain a mapping", fg="red"), err=True)
        raise SystemExit(1)

    form = build_form(definition, on_submit=lambda values, form: None)
    for key, value in values.items():
        field_id = str(key)
        if field_id not in form.fields:
            click.echo(
                click.style(f"Ignoring value for unknown field '{field_id}'", fg="yellow"),
                err=True,
            )
            continue
        form.on_value_change(field_id, _as_form_value(value))

    errors = form.validate()

    if errors:
        for field_id, error in errors.items():
            click.echo(click.style(f"  ✗ {field_id}: {error}", fg="red"))
        click.echo(
            click.style(f"\n{len(errors)} invalid field(s)", fg="red", bold=True)
        )
        raise SystemExit(1)

    click.echo(click.style("All values are valid.", fg="green", bold=True))


@click.command()
def validators():
    """List the registered schema validators."""
    for name in ValidatorRegistry.list_registered():
        marker = " (built-in)" if ValidatorRegistry.is_builtin(name) else ""
        click.echo(f"{name}{marker}")
