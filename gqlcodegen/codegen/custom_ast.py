"""Field nodes for columns whose GraphQL type needs a subfield selection.

PostGIS geometries and PostgreSQL intervals are exposed as object types, so
selecting them bare is a validation error. Everything else is a leaf field.
"""

from __future__ import annotations

from typing import Any

from graphql.language.ast import FieldNode

from gqlcodegen.codegen import gql_ast as t
from gqlcodegen.schema.types import CleanField

COMPLEX_TYPES = frozenset(
    {"GeometryPoint", "Interval", "GeometryGeometryCollection", "GeoJSON"}
)

INTERVAL_FIELDS = ("days", "hours", "minutes", "months", "seconds", "years")


def _leaves(names: tuple[str, ...] | list[str]) -> list[FieldNode]:
    return [t.field(n) for n in names]


def geometry_point_ast(name: str) -> FieldNode:
    return t.field(name, selections=_leaves(["x", "y"]))


def geometry_collection_ast(name: str) -> FieldNode:
    """``name { geometries { ... on GeometryPoint { x y } } }``"""
    point = t.inline_fragment("GeometryPoint", _leaves(["x", "y"]))
    return t.field(name, selections=[t.field("geometries", selections=[point])])


def geometry_ast(name: str) -> FieldNode:
    return t.field(name, selections=_leaves(["geojson"]))


def interval_ast(name: str) -> FieldNode:
    return t.field(name, selections=_leaves(INTERVAL_FIELDS))


def get_custom_ast(meta_field: Any) -> FieldNode | None:
    """Field node chosen by the column's PostgreSQL type alone."""
    if meta_field is None:
        return None
    pg_type = getattr(meta_field.type, "pg_type", None)
    if pg_type == "geometry":
        return geometry_ast(meta_field.name)
    if pg_type == "interval":
        return interval_ast(meta_field.name)
    return t.field(meta_field.name)


def get_custom_ast_for_clean_field(clean_field: CleanField) -> FieldNode:
    """Field node for a table column.

    The GraphQL type name wins over the PostgreSQL type, so a
    ``geometry(Point)`` column exposed as ``GeometryPoint`` selects ``{x y}``
    rather than ``{geojson}``.
    """
    name = clean_field.name
    gql_type = clean_field.type.gql_type
    pg_type = clean_field.type.pg_type

    if gql_type == "GeometryPoint":
        return geometry_point_ast(name)
    if gql_type == "Interval":
        return interval_ast(name)
    if gql_type == "GeometryGeometryCollection":
        return geometry_collection_ast(name)

    if pg_type == "geometry":
        return geometry_ast(name)
    if pg_type == "interval":
        return interval_ast(name)

    # GeoJSON columns without PostGIS metadata still need a selection.
    if gql_type == "GeoJSON":
        return geometry_ast(name)

    return t.field(name)


def requires_subfield_selection(clean_field: CleanField) -> bool:
    return clean_field.type.gql_type in COMPLEX_TYPES


def is_interval_type(obj: Any) -> bool:
    """True for a mapping carrying every interval component."""
    if not isinstance(obj, dict) or not obj:
        return False
    return all(key in obj for key in INTERVAL_FIELDS)
