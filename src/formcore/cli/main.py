"""formcore CLI entry point."""

import logging

import click


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool):
    """formcore: form definition and validation tooling."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
from formcore.cli.definition_cmd import check, validate, validators  # noqa: E402

cli.add_command(check)
cli.add_command(validate)
cli.add_command(validators)
