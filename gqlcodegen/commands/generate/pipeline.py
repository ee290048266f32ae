"""Orchestrator for the generate command.

Loads the schema, infers tables and their operations, builds every document
and lays the printed documents out as operation files.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from gqlcodegen.codegen.gql import generate
from gqlcodegen.codegen.operations import Diagnostics
from gqlcodegen.codegen.output import (
    apply_query_filters,
    build_operation_files,
    print_ast_map,
    write_operation_files,
)
from gqlcodegen.codegen.select import build_gql_map
from gqlcodegen.formats.codegen_options import ConfigError, GraphQLCodegenOptions
from gqlcodegen.schema.infer_tables import infer_custom_mutations, infer_tables_from_introspection
from gqlcodegen.schema.introspection import TypeIndex, fetch_introspection, load_introspection
from gqlcodegen.schema.types import CleanTable


@dataclass
class CodegenResult:
    root: Path
    operations_dir: Path
    files: dict[str, str] = field(default_factory=lambda: dict[str, str]())
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    tables: list[CleanTable] = field(default_factory=lambda: list[CleanTable]())


def load_schema(options: GraphQLCodegenOptions, cwd: Path) -> dict[str, Any]:
    """Introspection from the configured endpoint, else from the schema file."""
    source = options.input
    if source.endpoint:
        return fetch_introspection(source.endpoint, source.headers, source.authorization)
    if source.schema_path:
        return load_introspection(cwd / source.schema_path)
    raise ConfigError("No schema source: set input.schema or input.endpoint")


def run_codegen(
    options: GraphQLCodegenOptions,
    cwd: str | Path = ".",
    on_progress: Callable[[str], None] | None = None,
    dry_run: bool = False,
) -> CodegenResult:
    """Generate operation documents as configured by ``options``.

    Nothing is written when ``dry_run`` is set; the file contents are still
    returned in the result.
    """

    def progress(msg: str) -> None:
        if on_progress:
            on_progress(msg)

    base = Path(cwd)
    root = base / options.output.root
    result = CodegenResult(root=root, operations_dir=root / options.output.operations_dir)

    # Step 1: Schema
    introspection = load_schema(options, base)
    type_index = TypeIndex.from_introspection(introspection)
    progress(f"Loaded schema with {len(type_index.by_name)} types")

    # Step 2: Tables and their operations
    result.tables = infer_tables_from_introspection(introspection)
    progress(f"Inferred {len(result.tables)} tables")

    gql_map = build_gql_map(result.tables)
    if options.custom_mutations:
        for key, defn in infer_custom_mutations(introspection, result.tables).items():
            gql_map.setdefault(key, defn)

    documents = options.documents
    gql_map = apply_query_filters(
        gql_map, documents.allow_queries, documents.exclude_queries, documents.exclude_patterns
    )
    progress(f"Building {len(gql_map)} operations")

    # Step 3: Documents
    generated = generate(
        gql_map,
        options.selection.to_selection_config(),
        options.type_name_overrides or None,
        type_index,
    )
    result.diagnostics = generated.diagnostics

    result.files = build_operation_files(
        print_ast_map(generated.ast_map), documents.format, documents.convention
    )

    # Step 4: Files
    if not dry_run:
        write_operation_files(result.files, result.operations_dir)
        progress(f"Wrote {len(result.files)} files to {result.operations_dir}")
    return result
