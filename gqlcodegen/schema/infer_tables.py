"""Infer PostGraphile tables from standard GraphQL introspection.

PostGraphile names things predictably, so the table layer can be recovered
without its ``_meta`` query:

- ``{Plural}Connection`` types identify entities (``UsersConnection`` -> ``User``)
- connection-typed fields are hasMany relations, or manyToMany when the field
  name reads ``{rights}By{Junction}{Key}And{Key}``
- entity-typed fields are belongsTo relations
- ``{plural}``/``{singular}`` queries and ``create``/``update``/``delete``
  mutations name the operations
"""

from __future__ import annotations

import logging
import re
from typing import Any, cast

from gqlcodegen.codegen.operations import FieldProperty, GqlField, GqlMap, MutationOutput
from gqlcodegen.codegen.type_resolver import ref_named_kind, ref_to_named_type_name
from gqlcodegen.helpers.naming import lc_first, pluralize, singularize, uc_first
from gqlcodegen.schema.types import (
    CleanBelongsToRelation,
    CleanField,
    CleanFieldType,
    CleanHasManyRelation,
    CleanManyToManyRelation,
    CleanRelations,
    CleanTable,
    CleanTypeRef,
    ConstraintInfo,
    TableConstraints,
    TableInflection,
    TableQueryNames,
    clean_type_ref_from_dict,
)

logger = logging.getLogger(__name__)

CONNECTION = re.compile(r"^(.+)Connection$")
MANY_TO_MANY_RIGHT = re.compile(r"^([a-z]+)By", re.IGNORECASE)
MANY_TO_MANY_JUNCTION = re.compile(r"By([A-Z][a-z]+(?:[A-Z][a-z]+)*?)(?:[A-Z][a-z]+Id)")

BUILTIN_TYPES = frozenset(
    {
        "Query",
        "Mutation",
        "Subscription",
        "String",
        "Int",
        "Float",
        "Boolean",
        "ID",
        "Node",
        "PageInfo",
        "Cursor",
        "UUID",
        "Datetime",
        "Date",
        "Time",
        "JSON",
        "BigInt",
        "BigFloat",
    }
)

TypeMap = dict[str, dict[str, Any]]


def _type_map(introspection: dict[str, Any]) -> TypeMap:
    schema = cast(dict[str, Any], introspection.get("__schema") or {})
    return {t["name"]: t for t in schema.get("types") or [] if t.get("name")}


def _root_fields(introspection: dict[str, Any], types: TypeMap, root: str) -> list[dict[str, Any]]:
    schema = cast(dict[str, Any], introspection.get("__schema") or {})
    root_type = schema.get(root)
    if not root_type:
        return []
    return list(types.get(root_type.get("name", ""), {}).get("fields") or [])


def _ref(field: dict[str, Any]) -> CleanTypeRef | None:
    return clean_type_ref_from_dict(field.get("type"))


def _is_list(ref: CleanTypeRef | None) -> bool:
    while ref is not None:
        if ref.kind == "LIST":
            return True
        ref = ref.of_type
    return False


def _field_type(ref: CleanTypeRef | None) -> CleanFieldType:
    return CleanFieldType(
        gql_type=ref_to_named_type_name(ref) or "Unknown",
        is_array=_is_list(ref),
        is_not_null=ref is not None and ref.kind == "NON_NULL",
    )


def _is_entity(type_name: str, types: TypeMap) -> bool:
    return f"{pluralize(type_name)}Connection" in types


def detect_entity_types(types: TypeMap) -> list[str]:
    """Entity names in schema order, one per ``{Plural}Connection`` with a matching type."""
    entities: list[str] = []
    for name in types:
        if name.startswith("__") or name in BUILTIN_TYPES:
            continue
        match = CONNECTION.match(name)
        if not match:
            continue
        singular = singularize(match.group(1))
        if singular in types and singular not in entities:
            entities.append(singular)
    return entities


def _entity_fields(entity: dict[str, Any], types: TypeMap) -> list[CleanField]:
    fields: list[CleanField] = []
    for f in entity.get("fields") or []:
        ref = _ref(f)
        base = ref_to_named_type_name(ref)
        if not base:
            continue
        if types.get(base, {}).get("kind") == "OBJECT" and (
            base.endswith("Connection") or _is_entity(base, types)
        ):
            continue
        fields.append(CleanField(name=f["name"], type=_field_type(ref)))
    return fields


def _relations(entity: dict[str, Any], types: TypeMap) -> CleanRelations:
    relations = CleanRelations()
    for f in entity.get("fields") or []:
        base = ref_to_named_type_name(_ref(f))
        if not base:
            continue
        name = f["name"]
        if base.endswith("Connection"):
            match = CONNECTION.match(base)
            related = singularize(match.group(1) if match else base)
            if "By" in name and "And" in name:
                prefix = MANY_TO_MANY_RIGHT.match(name)
                junction = MANY_TO_MANY_JUNCTION.search(name)
                relations.many_to_many.append(
                    CleanManyToManyRelation(
                        field_name=name,
                        right_table=singularize(uc_first(prefix.group(1))) if prefix else related,
                        junction_table=junction.group(1) if junction else "Unknown",
                        type=base,
                    )
                )
            else:
                relations.has_many.append(
                    CleanHasManyRelation(field_name=name, referenced_by_table=related, type=base)
                )
        elif _is_entity(base, types):
            relations.belongs_to.append(
                CleanBelongsToRelation(field_name=name, references_table=base, type=base)
            )
    return relations


def _match_queries(entity: str, query_fields: list[dict[str, Any]]) -> tuple[str | None, str | None]:
    plural = pluralize(entity)
    connection = f"{plural}Connection"
    all_name: str | None = None
    one_name: str | None = None
    for f in query_fields:
        returns = ref_to_named_type_name(_ref(f))
        if returns == connection and (all_name is None or f["name"] == lc_first(plural)):
            all_name = f["name"]
        if returns == entity:
            has_id_arg = any(a["name"].lower().endswith("id") for a in f.get("args") or [])
            if has_id_arg and (one_name is None or f["name"] == lc_first(entity)):
                one_name = f["name"]
    return all_name, one_name


def _match_mutations(entity: str, mutation_fields: list[dict[str, Any]]) -> dict[str, str | None]:
    found: dict[str, str | None] = {"create": None, "update": None, "delete": None}
    names = {f["name"] for f in mutation_fields}
    if f"create{entity}" in names:
        found["create"] = f"create{entity}"
    for op in ("update", "delete"):
        exact = f"{op}{entity}"
        if exact in names:
            found[op] = exact
        elif f"{exact}ById" in names:
            found[op] = f"{exact}ById"
    return found


def _constraints(entity: str, types: TypeMap) -> TableConstraints:
    constraints = TableConstraints()
    candidates = [
        (types.get(f"Update{entity}Input") or types.get(f"Delete{entity}Input") or {}).get("inputFields"),
        types.get(entity, {}).get("fields"),
    ]
    for members in candidates:
        by_name = {f["name"]: f for f in members or []}
        key = by_name.get("id") or by_name.get("nodeId")
        if key is not None:
            constraints.primary_key.append(
                ConstraintInfo(name="primary", fields=[CleanField(key["name"], _field_type(_ref(key)))])
            )
            break
    return constraints


def find_order_by_type(entity: str, plural: str, types: TypeMap) -> str | None:
    """The ``OrderBy`` enum PostGraphile generated for ``entity``, allowing for custom plurals."""
    standard = f"{plural}OrderBy"
    if standard in types:
        return standard
    for candidate in (f"{entity}sOrderBy", f"{entity}esOrderBy", f"{entity}OrderBy"):
        if types.get(candidate, {}).get("kind") == "ENUM":
            return candidate
    for name, typ in types.items():
        if typ.get("kind") == "ENUM" and name.endswith("OrderBy") and singularize(name[: -len("OrderBy")]) == entity:
            return name
    return None


def _inflection(entity: str, types: TypeMap) -> TableInflection:
    plural = pluralize(entity)
    return TableInflection(
        all_rows=lc_first(plural),
        condition_type=f"{entity}Condition",
        connection=f"{plural}Connection",
        create_field=f"create{entity}",
        create_input_type=f"Create{entity}Input",
        create_payload_type=f"Create{entity}Payload",
        delete_payload_type=f"Delete{entity}Payload",
        edge=f"{plural}Edge",
        filter_type=f"{entity}Filter" if f"{entity}Filter" in types else None,
        input_type=f"{entity}Input",
        order_by_type=find_order_by_type(entity, plural, types) or f"{plural}OrderBy",
        patch_type=f"{entity}Patch" if f"{entity}Patch" in types else None,
        table_field_name=lc_first(entity),
        table_type=entity,
        update_payload_type=f"Update{entity}Payload" if f"Update{entity}Payload" in types else None,
        delete_by_primary_key=f"delete{entity}",
        update_by_primary_key=f"update{entity}",
    )


def infer_tables_from_introspection(introspection: dict[str, Any]) -> list[CleanTable]:
    """Tables for every entity that has at least one real query or mutation."""
    types = _type_map(introspection)
    query_fields = _root_fields(introspection, types, "queryType")
    mutation_fields = _root_fields(introspection, types, "mutationType")

    tables: list[CleanTable] = []
    for entity in detect_entity_types(types):
        entity_type = types[entity]
        all_name, one_name = _match_queries(entity, query_fields)
        mutations = _match_mutations(entity, mutation_fields)
        if not (all_name or one_name or any(mutations.values())):
            logger.debug("Skipping %s: no queries or mutations", entity)
            continue
        tables.append(
            CleanTable(
                name=entity,
                fields=_entity_fields(entity_type, types),
                relations=_relations(entity_type, types),
                inflection=_inflection(entity, types),
                query=TableQueryNames(
                    all=all_name or lc_first(pluralize(entity)),
                    one=one_name or lc_first(entity),
                    create=mutations["create"] or f"create{entity}",
                    update=mutations["update"],
                    delete=mutations["delete"],
                ),
                constraints=_constraints(entity, types),
            )
        )
    return tables


# -- Custom mutations ---------------------------------------------------------


def _input_property(arg: dict[str, Any], types: TypeMap, depth: int = 0) -> FieldProperty:
    ref = _ref(arg)
    named = ref_to_named_type_name(ref)
    nested = None
    named_type = types.get(named or "", {})
    # Two levels cover ``input.<model>.<column>`` and ``input.patch.<column>``.
    if named_type.get("kind") == "INPUT_OBJECT" and depth < 2:
        nested = {
            f["name"]: _input_property(f, types, depth + 1) for f in named_type.get("inputFields") or []
        }
    is_array = _is_list(ref)
    return FieldProperty(
        name=arg["name"],
        type=named,
        is_not_null=(ref is not None and ref.kind == "NON_NULL") if not is_array else _inner_not_null(ref),
        is_array=is_array,
        is_array_not_null=is_array and ref is not None and ref.kind == "NON_NULL",
        properties=nested,
    )


def _inner_not_null(ref: CleanTypeRef | None) -> bool:
    while ref is not None and ref.kind != "LIST":
        ref = ref.of_type
    return ref is not None and ref.of_type is not None and ref.of_type.kind == "NON_NULL"


def infer_custom_mutations(introspection: dict[str, Any], tables: list[CleanTable]) -> GqlMap:
    """Descriptors for mutations that are not a table's create/update/delete."""
    types = _type_map(introspection)
    known = {
        name
        for table in tables
        if table.query
        for name in (table.query.create, table.query.update, table.query.delete)
        if name
    }
    entities = {table.name for table in tables}

    gql_map: GqlMap = {}
    for f in _root_fields(introspection, types, "mutationType"):
        if f["name"] in known:
            continue
        input_arg = next((a for a in f.get("args") or [] if a["name"] == "input"), None)
        payload_name = ref_to_named_type_name(_ref(f))
        payload = types.get(payload_name or "", {})

        model = None
        outputs: list[MutationOutput] = []
        for out in payload.get("fields") or []:
            out_ref = _ref(out)
            named = ref_to_named_type_name(out_ref)
            if named in entities and model is None:
                model = named
            if out["name"] != "clientMutationId" and ref_named_kind(out_ref) == "SCALAR":
                outputs.append(MutationOutput(name=out["name"], kind="SCALAR"))

        properties = {"input": _input_property(input_arg, types)} if input_arg else {}
        gql_map[f["name"]] = GqlField(
            qtype="mutation",
            mutation_type=f["name"],
            model=model,
            properties=properties,
            outputs=outputs,
            output_type=payload_name,
        )
    return gql_map
