"""Operation descriptors consumed by the query/mutation builders.

A ``GqlMap`` maps a root field name (``users``, ``createUser``, ...) to the
``GqlField`` describing it: what kind of operation it is, which model it
belongs to, the shape of its input and what to select on the way back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, cast

from graphql.language.ast import DocumentNode, FieldNode

logger = logging.getLogger(__name__)


class QueryType(str, Enum):
    MUTATION = "mutation"
    GET_ONE = "getOne"
    GET_MANY = "getMany"


class MutationKind(str, Enum):
    CREATE = "create"
    PATCH = "patch"
    DELETE = "delete"
    CUSTOM = "custom"


MutationInputMode = Literal["expanded", "model", "raw", "patchCollapsed"]
ConnectionStyle = Literal["nodes", "edges"]


@dataclass
class FieldProperty:
    """One property of an operation's arguments, possibly with nested properties.

    ``type`` is a bare type name or an introspection type reference.
    """

    name: str
    type: Any = None
    is_not_null: bool = False
    is_array: bool = False
    is_array_not_null: bool = False
    properties: dict[str, FieldProperty] | None = None


@dataclass
class FlatField:
    """A nested selection: ``name { ...selection }``."""

    name: str
    selection: list[SelectionItem] = field(default_factory=lambda: list[SelectionItem]())
    qtype: str | None = None


# Prebuilt field nodes carry the subfield selection of complex columns.
SelectionItem = str | FlatField | FieldNode


@dataclass
class MutationOutput:
    name: str
    kind: str  # SCALAR, OBJECT, ...


@dataclass
class GqlField:
    qtype: str
    mutation_type: str | None = None
    model: str | None = None
    properties: dict[str, FieldProperty] = field(default_factory=lambda: dict[str, FieldProperty]())
    outputs: list[MutationOutput] = field(default_factory=lambda: list[MutationOutput]())
    output_type: str | None = None  # payload type name of a mutation
    selection: list[SelectionItem] = field(default_factory=lambda: list[SelectionItem]())

    @property
    def query_type(self) -> QueryType | None:
        try:
            return QueryType(self.qtype)
        except ValueError:
            return None

    @property
    def mutation_kind(self) -> MutationKind:
        if self.mutation_type in ("create", "patch", "delete"):
            return MutationKind(self.mutation_type)
        return MutationKind.CUSTOM

    def input_properties(self) -> dict[str, FieldProperty] | None:
        """Sub-properties of the ``input`` argument, or None when absent."""
        input_prop = self.properties.get("input")
        if input_prop is None:
            return None
        return input_prop.properties


GqlMap = dict[str, GqlField]


@dataclass
class AstEntry:
    name: str
    ast: DocumentNode


AstMap = dict[str, AstEntry]


@dataclass
class SelectionConfig:
    """Knobs controlling generated operation shapes."""

    default_mutation_model_fields: list[str] = field(default_factory=lambda: list[str]())
    model_fields: dict[str, list[str]] = field(default_factory=lambda: dict[str, list[str]]())
    mutation_input_mode: MutationInputMode = "expanded"
    connection_style: ConnectionStyle = "edges"
    force_model_output: bool = False


# -- Diagnostics --------------------------------------------------------------

DiagnosticLevel = Literal["info", "warning", "error"]

_LOG_LEVELS = {"info": logging.INFO, "warning": logging.WARNING, "error": logging.ERROR}


@dataclass
class Diagnostic:
    level: DiagnosticLevel
    operation: str
    message: str


class Diagnostics(list[Diagnostic]):
    """Diagnostics collected during generation, also forwarded to logging."""

    def add(self, level: DiagnosticLevel, operation: str, message: str) -> None:
        self.append(Diagnostic(level, operation, message))
        logger.log(_LOG_LEVELS[level], "%s: %s", operation, message)

    def info(self, operation: str, message: str) -> None:
        self.add("info", operation, message)

    def warning(self, operation: str, message: str) -> None:
        self.add("warning", operation, message)


# -- JSON loading -------------------------------------------------------------


def _property_from_dict(name: str, data: Any) -> FieldProperty:
    if not isinstance(data, dict):
        return FieldProperty(name=name, type=data)
    d = cast(dict[str, Any], data)
    nested = d.get("properties")
    return FieldProperty(
        name=name,
        type=d.get("type"),
        is_not_null=bool(d.get("isNotNull", d.get("is_not_null", False))),
        is_array=bool(d.get("isArray", d.get("is_array", False))),
        is_array_not_null=bool(d.get("isArrayNotNull", d.get("is_array_not_null", False))),
        properties=_properties_from_dict(cast(dict[str, Any], nested)) if isinstance(nested, dict) else None,
    )


def _properties_from_dict(data: dict[str, Any]) -> dict[str, FieldProperty]:
    return {name: _property_from_dict(name, value) for name, value in data.items()}


def _selection_from_list(items: list[Any]) -> list[SelectionItem]:
    selection: list[SelectionItem] = []
    for item in items:
        if isinstance(item, str):
            selection.append(item)
        elif isinstance(item, dict) and "name" in item:
            d = cast(dict[str, Any], item)
            selection.append(
                FlatField(
                    name=d["name"],
                    selection=_selection_from_list(cast(list[Any], d.get("selection") or [])),
                    qtype=d.get("qtype"),
                )
            )
    return selection


def gql_field_from_dict(data: dict[str, Any]) -> GqlField:
    outputs: list[MutationOutput] = []
    for out in data.get("outputs") or []:
        out_type = out.get("type") or {}
        outputs.append(MutationOutput(name=out["name"], kind=out_type.get("kind", "")))
    output = data.get("output")
    return GqlField(
        qtype=data.get("qtype", ""),
        mutation_type=data.get("mutationType", data.get("mutation_type")),
        model=data.get("model"),
        properties=_properties_from_dict(data.get("properties") or {}),
        outputs=outputs,
        output_type=output.get("name") if isinstance(output, dict) else data.get("outputType"),
        selection=_selection_from_list(data.get("selection") or []),
    )


def gql_map_from_dict(data: dict[str, Any]) -> GqlMap:
    """Parse the camelCase operation map produced by the introspection step."""
    return {name: gql_field_from_dict(cast(dict[str, Any], defn)) for name, defn in data.items()}
