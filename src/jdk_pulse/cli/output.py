"""Output routing for the CLI.

Human-facing text goes to stderr; machine-readable output (JSON, text meant
for ``eval``) goes to stdout so it can be piped.
"""

import click


def user_output(message: str = "", *, nl: bool = True) -> None:
    click.echo(message, err=True, nl=nl)


def machine_output(message: str = "", *, nl: bool = True) -> None:
    click.echo(message, nl=nl)
