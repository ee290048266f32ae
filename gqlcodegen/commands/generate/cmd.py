"""CLI command for the generate stage."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import click

from gqlcodegen.helpers.console import console, setup_logging
from gqlcodegen.helpers.naming import DOCUMENT_CONVENTIONS


@click.command()
@click.option("-c", "--config", "config_path", type=click.Path(exists=True), default=None, help="Config file (.json, .yaml)")
@click.option("--schema", default=None, help="Schema file (SDL or introspection JSON)")
@click.option("--endpoint", default=None, help="GraphQL endpoint to introspect")
@click.option("--authorization", default=None, help="Authorization header for the endpoint")
@click.option("-o", "--output", default=None, help="Output root directory")
@click.option("--format", "fmt", type=click.Choice(["gql", "ts"]), default=None, help="Document format")
@click.option(
    "--convention",
    type=click.Choice(DOCUMENT_CONVENTIONS),
    default=None,
    help="File naming convention",
)
@click.option(
    "--mutation-input-mode",
    type=click.Choice(["expanded", "model", "raw", "patchCollapsed"]),
    default=None,
    help="How mutation inputs become variables",
)
@click.option("--dry-run", is_flag=True, default=False, help="Print the files instead of writing them")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Debug logging")
def generate(
    config_path: str | None,
    schema: str | None,
    endpoint: str | None,
    authorization: str | None,
    output: str | None,
    fmt: str | None,
    convention: str | None,
    mutation_input_mode: str | None,
    dry_run: bool,
    verbose: bool,
) -> None:
    """Generate GraphQL operation documents from a PostGraphile schema."""
    from gqlcodegen.commands.generate.pipeline import run_codegen
    from gqlcodegen.formats.codegen_options import (
        ConfigError,
        GraphQLCodegenOptions,
        load_codegen_options,
        merge_codegen_options,
    )
    from gqlcodegen.schema.introspection import IntrospectionError

    setup_logging(verbose)

    overrides: dict[str, Any] = {}
    input_overrides = {
        k: v for k, v in (("schema", schema), ("endpoint", endpoint), ("authorization", authorization)) if v
    }
    if input_overrides:
        overrides["input"] = input_overrides
    if output:
        overrides["output"] = {"root": output}
    documents = {k: v for k, v in (("format", fmt), ("convention", convention)) if v}
    if documents:
        overrides["documents"] = documents
    if mutation_input_mode:
        overrides["selection"] = {"mutationInputMode": mutation_input_mode}

    try:
        base = load_codegen_options(config_path) if config_path else GraphQLCodegenOptions()
        options = merge_codegen_options(base, overrides)
        cwd = Path(config_path).parent if config_path else Path.cwd()
        if schema:
            # A schema given on the command line is relative to where we run.
            options.input.schema_path = str(Path(schema).resolve())
        if output:
            options.output.root = str(Path(output).resolve())

        def on_progress(msg: str) -> None:
            console.print(f"  {msg}")

        console.print("[bold]Generating GraphQL documents...[/bold]")
        result = run_codegen(options, cwd=cwd, on_progress=on_progress, dry_run=dry_run)
    except (ConfigError, IntrospectionError) as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    for d in result.diagnostics:
        if d.level != "info":
            color = "red" if d.level == "error" else "yellow"
            console.print(f"[{color}]{d.level}: {d.operation}: {d.message}[/{color}]")

    if dry_run:
        for name, contents in sorted(result.files.items()):
            console.print(f"[bold cyan]# {name}[/bold cyan]")
            console.print(contents, markup=False, highlight=False)
        console.print(f"[green]{len(result.files)} files (dry run, nothing written)[/green]")
    else:
        console.print(f"[green]Wrote {len(result.files)} files to {result.operations_dir}[/green]")
