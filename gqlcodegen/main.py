"""CLI entry point for gqlcodegen."""

from __future__ import annotations

import click

from gqlcodegen.commands.generate.cmd import generate
from gqlcodegen.commands.inspect.cmd import inspect


@click.group()
@click.version_option(version="0.1.0", prog_name="gqlcodegen")
def cli() -> None:
    """Generate GraphQL documents for PostGraphile APIs."""


cli.add_command(generate)
cli.add_command(inspect)


if __name__ == "__main__":
    cli()
