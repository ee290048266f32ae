"""Print generated operations and lay them out as files."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Literal

from graphql import print_ast

from gqlcodegen.codegen.operations import AstMap, GqlMap
from gqlcodegen.helpers.naming import document_filename

logger = logging.getLogger(__name__)

DocumentFormat = Literal["gql", "ts"]

__all__ = [
    "DocumentFormat",
    "apply_query_filters",
    "build_operation_files",
    "document_filename",
    "print_ast_map",
    "write_operation_files",
]


def print_ast_map(ast_map: AstMap) -> dict[str, str]:
    return {key: print_ast(entry.ast) for key, entry in ast_map.items()}


def _compile_patterns(patterns: list[str]) -> list[re.Pattern[str]]:
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            logger.warning("Ignoring invalid exclude pattern %r: %s", pattern, e)
    return compiled


def apply_query_filters(
    gql_map: GqlMap,
    allow_queries: list[str] | None = None,
    exclude_queries: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
) -> GqlMap:
    """Keep the operations allowed by name, then drop excluded names and pattern matches."""
    allowed = set(allow_queries or ())
    excluded = set(exclude_queries or ())
    patterns = _compile_patterns(list(exclude_patterns or ()))

    filtered: GqlMap = {}
    for key, defn in gql_map.items():
        if allowed and key not in allowed:
            continue
        if key in excluded:
            continue
        if any(p.search(key) for p in patterns):
            continue
        filtered[key] = defn
    return filtered


def build_operation_files(
    docs: dict[str, str],
    fmt: DocumentFormat = "gql",
    convention: str = "dashed",
) -> dict[str, str]:
    """File name -> contents for every printed document.

    ``gql`` writes the bare document; ``ts`` wraps it in a ``graphql-tag``
    export and adds an ``index.ts`` re-exporting every module.
    """
    files: dict[str, str] = {}
    for key, doc in docs.items():
        base = document_filename(key, convention)
        if fmt == "ts":
            files[f"{base}.ts"] = f"import gql from 'graphql-tag'\nexport const {key} = gql`\n{doc}\n`"
        else:
            files[f"{base}.gql"] = doc

    if fmt == "ts" and files:
        exports = sorted(f"export * from './{name[: -len('.ts')]}'" for name in files)
        files["index.ts"] = "\n".join(exports)
    return files


def write_operation_files(files: dict[str, str], directory: str | Path) -> list[Path]:
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for name, contents in files.items():
        path = out_dir / name
        path.write_text(contents)
        written.append(path)
    logger.debug("Wrote %d files to %s", len(written), out_dir)
    return written
