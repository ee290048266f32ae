"""Resolve introspection type references to names and GraphQL type nodes.

A type may arrive in three shapes: a bare type name (``"UUID"``), an
introspection reference (``CleanTypeRef`` or its ``{kind, name, ofType}``
dict form), or anything else. Resolution never raises. When no name can be
found the result is marked unresolved and carries ``UNRESOLVED_TYPE_NAME``
so that it still prints as a valid document.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, cast

from graphql.language.ast import (
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    TypeNode,
)

from gqlcodegen.codegen import gql_ast as t
from gqlcodegen.schema.types import CleanTypeRef

UNRESOLVED_TYPE_NAME = "JSON"


@dataclass(frozen=True)
class TypeResolution:
    """Outcome of resolving a type name.

    ``resolved`` is False only when nothing usable was found. A schema that
    declares its own ``JSON`` scalar resolves normally.
    """

    name: str
    resolved: bool = True


UNRESOLVED = TypeResolution(UNRESOLVED_TYPE_NAME, resolved=False)


def _ref_attr(ref: Any, attr: str) -> Any:
    if isinstance(ref, dict):
        data = cast(dict[str, Any], ref)
        if attr == "of_type":
            return data.get("ofType", data.get("of_type"))
        return data.get(attr)
    return getattr(ref, attr, None)


def _override(base: str, overrides: dict[str, str] | None) -> str:
    if overrides and overrides.get(base):
        return overrides[base]
    return base


def resolve_type(type_: Any, overrides: dict[str, str] | None = None) -> TypeResolution:
    if isinstance(type_, str):
        if not type_:
            return UNRESOLVED
        return TypeResolution(_override(type_, overrides))

    if type_ is None or isinstance(type_, (int, float, bool, list, tuple)):
        return UNRESOLVED

    direct = _ref_attr(type_, "name")
    if isinstance(direct, str) and direct:
        return TypeResolution(direct)

    ref = type_
    while ref is not None and _ref_attr(ref, "of_type") is not None:
        ref = _ref_attr(ref, "of_type")
    base = _ref_attr(ref, "name") if ref is not None else None
    if isinstance(base, str) and base:
        return TypeResolution(_override(base, overrides))
    return UNRESOLVED


def resolve_type_name(name: str, type_: Any, overrides: dict[str, str] | None = None) -> str:
    """Best-effort type name for the property ``name``; ``"JSON"`` when unknown."""
    return resolve_type(type_, overrides).name


def ref_to_type_node(ref: Any, overrides: dict[str, str] | None = None) -> TypeNode | None:
    """Mirror a type reference's NON_NULL/LIST wrapping as a type node.

    >>> from graphql import print_ast
    >>> ref = CleanTypeRef("NON_NULL", of_type=CleanTypeRef("LIST", of_type=CleanTypeRef("SCALAR", "Int")))
    >>> print_ast(ref_to_type_node(ref))
    '[Int]!'
    """
    if ref is None:
        return None
    kind = _ref_attr(ref, "kind")
    if kind == "NON_NULL":
        inner = ref_to_type_node(_ref_attr(ref, "of_type"), overrides)
        return t.non_null_type(inner) if inner is not None else None
    if kind == "LIST":
        inner = ref_to_type_node(_ref_attr(ref, "of_type"), overrides)
        return t.list_type(inner) if inner is not None else None
    base = _ref_attr(ref, "name")
    if not base:
        return None
    return t.named_type(_override(base, overrides))


def ref_to_named_type_name(ref: Any) -> str | None:
    """Name of the innermost named type, or None."""
    while ref is not None and _ref_attr(ref, "kind") in ("NON_NULL", "LIST"):
        ref = _ref_attr(ref, "of_type")
    if ref is None:
        return None
    return _ref_attr(ref, "name") or None


def ref_named_kind(ref: Any) -> str | None:
    """Kind of the innermost named type (SCALAR, OBJECT, ...)."""
    while ref is not None and _ref_attr(ref, "kind") in ("NON_NULL", "LIST"):
        ref = _ref_attr(ref, "of_type")
    if ref is None:
        return None
    return _ref_attr(ref, "kind")


def extract_named_type_name(node: TypeNode | None) -> str | None:
    while isinstance(node, (NonNullTypeNode, ListTypeNode)):
        node = node.type
    if isinstance(node, NamedTypeNode):
        return node.name.value
    return None


def wrap_type_node(
    type_name: str,
    is_not_null: bool = False,
    is_array: bool = False,
    is_array_not_null: bool = False,
) -> TypeNode:
    """Build a type node from per-field flags: ``T``, ``T!``, ``[T!]``, ``[T!]!``."""
    node: TypeNode = t.named_type(type_name)
    if is_not_null:
        node = t.non_null_type(node)
    if is_array:
        node = t.list_type(node)
        if is_array_not_null:
            node = t.non_null_type(node)
    return node
