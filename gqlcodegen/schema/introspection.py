"""Load GraphQL introspection and index its types.

Introspection comes from an SDL file (built with graphql-core), a saved
introspection JSON file, or a live endpoint. Everything downstream works on
the plain ``{"__schema": {...}}`` dict.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, cast

import requests
from graphql import build_schema, get_introspection_query
from graphql.error import GraphQLError
from graphql.utilities import introspection_from_schema

from gqlcodegen.schema.types import (
    CleanArgument,
    CleanObjectField,
    CleanTypeRef,
    ResolvedType,
    TypeRegistry,
    clean_type_ref_from_dict,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class IntrospectionError(Exception):
    """The schema could not be read or fetched."""


def introspection_from_sdl(sdl: str) -> dict[str, Any]:
    try:
        schema = build_schema(sdl)
    except (GraphQLError, TypeError) as e:
        raise IntrospectionError(f"Invalid schema SDL: {e}") from e
    return cast(dict[str, Any], introspection_from_schema(schema))


def _unwrap(data: Any) -> dict[str, Any]:
    """Accept ``{"__schema": ...}`` with or without a ``{"data": ...}`` envelope."""
    if isinstance(data, dict) and "data" in data and isinstance(data["data"], dict):
        data = data["data"]
    if not isinstance(data, dict) or "__schema" not in data:
        raise IntrospectionError("Introspection result has no '__schema' key")
    return cast(dict[str, Any], data)


def load_introspection(path: str | Path) -> dict[str, Any]:
    """Read introspection from a ``.json`` file or an SDL file (``.graphql``, ``.gql``, ...)."""
    p = Path(path)
    try:
        text = p.read_text()
    except OSError as e:
        raise IntrospectionError(f"Cannot read schema file {p}: {e}") from e

    if p.suffix == ".json":
        try:
            return _unwrap(json.loads(text))
        except json.JSONDecodeError as e:
            raise IntrospectionError(f"Invalid JSON in {p}: {e}") from e
    return introspection_from_sdl(text)


def fetch_introspection(
    endpoint: str,
    headers: dict[str, str] | None = None,
    authorization: str | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> dict[str, Any]:
    """POST the standard introspection query to ``endpoint``."""
    request_headers = {"Content-Type": "application/json", **(headers or {})}
    if authorization:
        request_headers["Authorization"] = authorization

    logger.debug("Fetching introspection from %s", endpoint)
    try:
        response = requests.post(
            endpoint,
            json={"query": get_introspection_query()},
            headers=request_headers,
            timeout=timeout,
        )
        response.raise_for_status()
    except requests.RequestException as e:
        raise IntrospectionError(f"Failed to fetch schema from {endpoint}: {e}") from e

    try:
        body = response.json()
    except ValueError as e:
        raise IntrospectionError(f"Endpoint {endpoint} did not return JSON") from e

    if isinstance(body, dict) and body.get("errors") and not body.get("data"):
        first = cast(list[dict[str, Any]], body["errors"])[0]
        raise IntrospectionError(f"Introspection failed: {first.get('message', first)}")
    return _unwrap(body)


def _required_ref(data: Any) -> CleanTypeRef:
    return clean_type_ref_from_dict(data) or CleanTypeRef(kind="SCALAR", name=None)


def build_type_registry(types: list[dict[str, Any]]) -> TypeRegistry:
    """Index introspection types by name, skipping ``__`` built-ins."""
    registry: TypeRegistry = {}
    for typ in types:
        name = typ.get("name") or ""
        if not name or name.startswith("__"):
            continue
        kind = typ.get("kind", "")
        resolved = ResolvedType(kind=kind, name=name, description=typ.get("description"))
        if kind == "ENUM":
            resolved.enum_values = [v["name"] for v in typ.get("enumValues") or []]
        if kind == "UNION":
            resolved.possible_types = [p["name"] for p in typ.get("possibleTypes") or []]
        if kind in ("OBJECT", "INTERFACE"):
            resolved.fields = [
                CleanObjectField(
                    name=f["name"],
                    type=_required_ref(f.get("type")),
                    description=f.get("description"),
                )
                for f in typ.get("fields") or []
            ]
        if kind == "INPUT_OBJECT":
            resolved.input_fields = [
                CleanArgument(
                    name=f["name"],
                    type=_required_ref(f.get("type")),
                    default_value=f.get("defaultValue"),
                    description=f.get("description"),
                )
                for f in typ.get("inputFields") or []
            ]
        registry[name] = resolved
    return registry


class TypeIndex:
    """Read-only lookups over the type registry."""

    def __init__(self, registry: TypeRegistry):
        self.by_name = registry

    @classmethod
    def from_introspection(cls, introspection: dict[str, Any]) -> TypeIndex:
        schema = cast(dict[str, Any], introspection.get("__schema") or {})
        return cls(build_type_registry(schema.get("types") or []))

    def get_input_field_type(self, type_name: str, field_name: str) -> CleanTypeRef | None:
        """Declared type of ``type_name.field_name``; only input object types are searched."""
        typ = self.by_name.get(type_name)
        if typ is None or typ.kind != "INPUT_OBJECT":
            return None
        for f in typ.input_fields:
            if f.name == field_name:
                return f.type
        return None

    def __contains__(self, type_name: object) -> bool:
        return type_name in self.by_name
