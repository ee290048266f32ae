"""Pydantic models for the codegen configuration file (.json / .yaml).

Keys are accepted in snake_case or in camelCase (``typeNameOverrides``,
``mutationInputMode``, ...).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic.alias_generators import to_camel

from gqlcodegen.codegen.operations import SelectionConfig
from gqlcodegen.helpers.naming import DocumentConvention


class ConfigError(Exception):
    """The configuration file is missing, unreadable or invalid."""


class _Options(BaseModel):
    model_config = {"populate_by_name": True, "alias_generator": to_camel, "extra": "forbid"}


class InputOptions(_Options):
    schema_path: str | None = Field(default=None, alias="schema")
    endpoint: str | None = None
    headers: dict[str, str] = Field(default_factory=dict)
    authorization: str | None = None


class OutputOptions(_Options):
    root: str = "graphql/codegen/dist"
    operations_dir: str = "operations"


class DocumentsOptions(_Options):
    format: Literal["gql", "ts"] = "gql"
    convention: DocumentConvention = "dashed"
    allow_queries: list[str] = Field(default_factory=list)
    exclude_queries: list[str] = Field(default_factory=list)
    exclude_patterns: list[str] = Field(default_factory=list)


class SelectionOptionsConfig(_Options):
    default_mutation_model_fields: list[str] = Field(default_factory=list)
    model_fields: dict[str, list[str]] = Field(default_factory=dict)
    mutation_input_mode: Literal["expanded", "model", "raw", "patchCollapsed"] = "expanded"
    connection_style: Literal["nodes", "edges"] = "edges"
    force_model_output: bool = False

    def to_selection_config(self) -> SelectionConfig:
        return SelectionConfig(
            default_mutation_model_fields=list(self.default_mutation_model_fields),
            model_fields={k: list(v) for k, v in self.model_fields.items()},
            mutation_input_mode=self.mutation_input_mode,
            connection_style=self.connection_style,
            force_model_output=self.force_model_output,
        )


class GraphQLCodegenOptions(_Options):
    input: InputOptions = Field(default_factory=InputOptions)
    output: OutputOptions = Field(default_factory=OutputOptions)
    documents: DocumentsOptions = Field(default_factory=DocumentsOptions)
    selection: SelectionOptionsConfig = Field(default_factory=SelectionOptionsConfig)
    type_name_overrides: dict[str, str] = Field(default_factory=dict)
    custom_mutations: bool = True


def _validate(data: Any, source: str) -> GraphQLCodegenOptions:
    try:
        return GraphQLCodegenOptions.model_validate(data or {})
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {source}:\n{e}") from e


def load_codegen_options(path: str | Path) -> GraphQLCodegenOptions:
    p = Path(path)
    try:
        text = p.read_text()
    except OSError as e:
        raise ConfigError(f"Cannot read config file {p}: {e}") from e

    try:
        if p.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        elif p.suffix == ".json":
            data = json.loads(text)
        else:
            raise ConfigError(f"Unsupported config format {p.suffix!r} (expected .json, .yaml or .yml)")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot parse config file {p}: {e}") from e

    if data is not None and not isinstance(data, dict):
        raise ConfigError(f"Config file {p} must contain a mapping")
    return _validate(data, str(p))


def _deep_merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    # Lists from overrides replace the base list.
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_codegen_options(
    base: GraphQLCodegenOptions,
    overrides: GraphQLCodegenOptions | dict[str, Any],
) -> GraphQLCodegenOptions:
    """Overlay ``overrides`` on ``base`` section by section.

    Only fields explicitly set in ``overrides`` win, so a partial override
    leaves the rest of each section untouched.
    """
    if isinstance(overrides, GraphQLCodegenOptions):
        override_data = overrides.model_dump(exclude_unset=True)
    else:
        override_data = _validate(overrides, "overrides").model_dump(exclude_unset=True)
    return _validate(_deep_merge(base.model_dump(), override_data), "merged configuration")
