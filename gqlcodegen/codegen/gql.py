"""Build GraphQL query and mutation documents from operation descriptors.

Every builder is a pure function of its descriptor (and optional type index):
it returns an ``AstEntry`` holding the derived operation name and a
graphql-core ``DocumentNode``, or ``None`` when the descriptor cannot produce
an operation.

Mutation variables are typed from the schema when a type index is available
and from the descriptor's flags otherwise. When any variable type cannot be
resolved at all, the whole mutation switches to raw mode: a single
``$input: <InputType>!`` variable passed straight through as ``input``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from graphql.language.ast import (
    ArgumentNode,
    DocumentNode,
    FieldNode,
    SelectionNode,
    TypeNode,
    VariableDefinitionNode,
)

from gqlcodegen.codegen import gql_ast as t
from gqlcodegen.codegen.operations import (
    AstEntry,
    AstMap,
    Diagnostics,
    FieldProperty,
    FlatField,
    GqlField,
    GqlMap,
    MutationKind,
    QueryType,
    SelectionConfig,
    SelectionItem,
)
from gqlcodegen.codegen.type_resolver import (
    ref_named_kind,
    ref_to_named_type_name,
    ref_to_type_node,
    resolve_type,
    wrap_type_node,
)
from gqlcodegen.helpers.naming import camelize, join_camelized, singularize, uc_first, underscore
from gqlcodegen.schema.types import ResolvedType

if TYPE_CHECKING:
    from gqlcodegen.schema.introspection import TypeIndex

logger = logging.getLogger(__name__)

NON_MUTABLE_PROPS = frozenset({"id", "createdAt", "createdBy", "updatedAt", "updatedBy"})

PAGE_INFO_FIELDS = ("hasNextPage", "hasPreviousPage", "endCursor", "startCursor")

_ID_SUPPRESSED_MODEL = re.compile(r"Extension$", re.IGNORECASE)

Overrides = dict[str, str] | None

# A variable's type node, and whether its named type was actually found.
ResolvedVariable = tuple[TypeNode, bool]


def is_id_suppressed_model(name: str | None) -> bool:
    """Models named ``*Extension`` share their parent's id and never select ``id``."""
    return bool(name) and _ID_SUPPRESSED_MODEL.search(name or "") is not None


def model_name_for(model: str) -> str:
    """``Users`` -> ``user``; the field name of a model in mutation payloads."""
    return camelize(singularize(model), lower_first=True)


# -- Selections ---------------------------------------------------------------


def get_selections(query: GqlField, fields: list[str] | None = None) -> list[FieldNode]:
    """Field nodes for ``query.selection``, restricted to ``fields`` when given.

    String items are leaf fields and ``FieldNode`` items (complex columns)
    are used as they are. ``FlatField`` items nest; a nested ``getMany``
    becomes a small edges connection (``first: 3``). The ``fields``
    restriction and the ``*Extension`` id drop apply at every nesting level.
    """
    wanted = set(fields or ())
    drop_id = is_id_suppressed_model(query.model)

    def keep(item: SelectionItem) -> bool:
        if isinstance(item, FlatField):
            return not wanted or item.name in wanted
        name = item if isinstance(item, str) else item.name.value
        if drop_id and name == "id":
            return False
        return not wanted or name in wanted

    def map_items(items: list[SelectionItem]) -> list[FieldNode]:
        return [map_item(item) for item in items if keep(item)]

    def map_item(item: SelectionItem) -> FieldNode:
        if isinstance(item, str):
            return t.field(item)
        if isinstance(item, FieldNode):
            return item
        children = map_items(item.selection)
        if item.qtype == QueryType.GET_MANY.value:
            node = t.field("node", selections=children)
            edges = t.field("edges", selections=[t.field("cursor"), node])
            return t.field(item.name, args=[t.argument("first", t.int_value(3))], selections=[edges])
        return t.field(item.name, selections=children)

    return map_items(query.selection)


# -- Queries ------------------------------------------------------------------


def _connection(
    operation_name: str,
    selections: list[FieldNode],
    args: Iterable[ArgumentNode] = (),
    shape: str = "edges",
) -> FieldNode:
    page_info = t.field("pageInfo", selections=[t.field(n) for n in PAGE_INFO_FIELDS])
    if shape == "nodes":
        items = t.field("nodes", selections=selections)
    else:
        items = t.field(
            "edges",
            selections=[t.field("cursor"), t.field("node", selections=selections)],
        )
    return t.field(
        operation_name,
        args=args,
        selections=[t.field("totalCount"), page_info, items],
    )


def _pagination_variables(order: Iterable[str], query: GqlField, operation_name: str) -> list[VariableDefinitionNode]:
    singular = query.model or ""
    plural = uc_first(operation_name)
    defs = [
        t.variable_definition(n, t.named_type("Cursor" if n in ("after", "before") else "Int"))
        for n in order
    ]
    defs.append(t.variable_definition("condition", t.named_type(f"{singular}Condition")))
    defs.append(t.variable_definition("filter", t.named_type(f"{singular}Filter")))
    defs.append(
        t.variable_definition(
            "orderBy", t.list_type(t.non_null_type(t.named_type(f"{plural}OrderBy")))
        )
    )
    return defs


_PAGINATION_ARGS = ("first", "last", "offset", "after", "before", "condition", "filter", "orderBy")


def get_many(operation_name: str, query: GqlField, fields: list[str] | None = None) -> AstEntry:
    """``query getUsersQueryAll { users { totalCount pageInfo {...} edges { cursor node {...} } } }``"""
    query_name = join_camelized("get", underscore(operation_name), "query", "all")
    op = t.query(query_name, [_connection(operation_name, get_selections(query, fields))])
    return AstEntry(query_name, t.document(op))


def get_many_paginated_edges(operation_name: str, query: GqlField, fields: list[str] | None = None) -> AstEntry:
    query_name = join_camelized("get", underscore(operation_name), "paginated")
    variables = _pagination_variables(("first", "last", "offset", "after", "before"), query, operation_name)
    args = [t.variable_argument(n) for n in _PAGINATION_ARGS]
    op = t.query(
        query_name,
        [_connection(operation_name, get_selections(query, fields), args)],
        variables,
    )
    return AstEntry(query_name, t.document(op))


def get_many_paginated_nodes(operation_name: str, query: GqlField, fields: list[str] | None = None) -> AstEntry:
    query_name = join_camelized("get", underscore(operation_name), "query")
    variables = _pagination_variables(("first", "last", "after", "before", "offset"), query, operation_name)
    args = [t.variable_argument(n) for n in _PAGINATION_ARGS]
    op = t.query(
        query_name,
        [_connection(operation_name, get_selections(query, fields), args, shape="nodes")],
        variables,
    )
    return AstEntry(query_name, t.document(op))


def get_order_by_enums(operation_name: str, query: GqlField) -> AstEntry:
    """Introspect the values of ``<Plural>OrderBy``."""
    query_name = join_camelized("get", underscore(operation_name), "Order", "By", "Enums")
    order_by = f"{uc_first(operation_name)}OrderBy"
    type_field = t.field(
        "__type",
        args=[t.argument("name", t.string_value(order_by))],
        selections=[t.field("enumValues", selections=[t.field("name")])],
    )
    return AstEntry(query_name, t.document(t.query(query_name, [type_field])))


def get_fragment(operation_name: str, query: GqlField) -> AstEntry:
    model = query.model or ""
    fragment_name = join_camelized(underscore(model), "Fragment")
    fragment = t.fragment_definition(fragment_name, model, get_selections(query))
    return AstEntry(fragment_name, t.document(fragment))


def get_one(
    operation_name: str,
    query: GqlField,
    fields: list[str] | None = None,
    type_name_overrides: Overrides = None,
) -> AstEntry:
    """Single-row query; every non-null property becomes a variable and argument."""
    query_name = join_camelized("get", underscore(operation_name), "query")
    required = [p for p in query.properties.values() if p.is_not_null]

    variables = [
        t.variable_definition(
            p.name,
            wrap_type_node(
                resolve_type(p.type, type_name_overrides).name,
                p.is_not_null,
                p.is_array,
                p.is_array_not_null,
            ),
        )
        for p in required
    ]
    args = [t.variable_argument(p.name) for p in required]
    root = t.field(operation_name, args=args, selections=get_selections(query, fields))
    return AstEntry(query_name, t.document(t.query(query_name, [root], variables)))


# -- Mutations ----------------------------------------------------------------


def create_gql_mutation(
    operation_name: str,
    mutation_name: str,
    select_args: list[ArgumentNode],
    selections: list[SelectionNode],
    variable_definitions: list[VariableDefinitionNode],
    model_name: str | None = None,
    use_model: bool = True,
) -> DocumentNode:
    """Wrap selections in ``mutation <name>(...) { <operation>(...) { ... } }``.

    With a ``model_name`` and ``use_model`` the selections nest one level
    further, under the model field.
    """
    inner: list[SelectionNode] = selections
    if model_name and use_model:
        inner = [t.field(model_name, selections=selections)]
    root = t.field(operation_name, args=select_args, selections=inner)
    return t.document(t.mutation(mutation_name, [root], variable_definitions))


def _fold_variables(
    attrs: list[FieldProperty],
    resolve: Callable[[FieldProperty], ResolvedVariable],
) -> tuple[list[VariableDefinitionNode], int]:
    """Variable definitions for ``attrs`` and how many had no resolvable type."""
    resolved = [(attr.name, *resolve(attr)) for attr in attrs]
    definitions = [t.variable_definition(name, node) for name, node, _ in resolved]
    unresolved = sum(1 for _, _, ok in resolved if not ok)
    return definitions, unresolved


def _raw_input(input_type_name: str) -> tuple[list[VariableDefinitionNode], list[ArgumentNode]]:
    variables = [t.variable_definition("input", t.non_null_type(t.named_type(input_type_name)))]
    return variables, [t.variable_argument("input")]


def _input_type_name(mutation: GqlField, overrides: Overrides) -> str:
    input_prop = mutation.properties.get("input")
    return resolve_type(input_prop.type if input_prop else None, overrides).name


def _registry_type(type_index: TypeIndex | None, name: str | None) -> ResolvedType | None:
    if type_index is None or not name:
        return None
    return type_index.by_name.get(name)


def _scalar_field_names(model_type: ResolvedType | None) -> list[str]:
    if model_type is None:
        return []
    return [f.name for f in model_type.fields if ref_named_kind(f.type) in ("SCALAR", "ENUM")]


def _dedupe(names: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(names))


def _missing_input(mutation_name: str, diagnostics: Diagnostics | None) -> None:
    message = "no input field for mutation"
    if diagnostics is not None:
        diagnostics.warning(mutation_name, message)
    else:
        logger.warning("%s: %s", mutation_name, message)


def _flag_type(prop: FieldProperty, overrides: Overrides) -> ResolvedVariable:
    resolution = resolve_type(prop.type, overrides)
    node = wrap_type_node(resolution.name, prop.is_not_null, prop.is_array, prop.is_array_not_null)
    return node, resolution.resolved


def _registry_or_flags(
    type_index: TypeIndex | None,
    input_type_name: str | None,
    overrides: Overrides,
    fallback: Callable[[FieldProperty], ResolvedVariable],
) -> Callable[[FieldProperty], ResolvedVariable]:
    """Type a property from ``input_type_name``'s declared field, else from ``fallback``."""

    def resolve(prop: FieldProperty) -> ResolvedVariable:
        if type_index is not None and input_type_name:
            node = ref_to_type_node(type_index.get_input_field_type(input_type_name, prop.name), overrides)
            if node is not None:
                return node, True
        return fallback(prop)

    return resolve


def create_one(
    operation_name: str,
    mutation: GqlField,
    selection: SelectionConfig | None = None,
    type_name_overrides: Overrides = None,
    type_index: TypeIndex | None = None,
    diagnostics: Diagnostics | None = None,
) -> AstEntry | None:
    """``createUser(input: {user: {email: $email, ...}}) { user { id } clientMutationId }``"""
    mutation_name = join_camelized(underscore(operation_name), "mutation")
    input_props = mutation.input_properties()
    if input_props is None:
        _missing_input(mutation_name, diagnostics)
        return None

    model = mutation.model or ""
    model_name = model_name_for(model)
    input_type_name = _input_type_name(mutation, type_name_overrides)

    model_prop = input_props.get(model_name)
    if model_prop is None or model_prop.properties is None:
        if diagnostics is not None:
            diagnostics.warning(mutation_name, f"input has no '{model_name}' object; using raw input")
        attrs: list[FieldProperty] = []
        force_raw = True
    else:
        attrs = [
            p
            for p in model_prop.properties.values()
            if (p.is_not_null if p.name == "id" else p.name not in NON_MUTABLE_PROPS)
        ]
        force_raw = False

    model_input_name = None
    if type_index is not None and input_type_name:
        model_input_name = ref_to_named_type_name(type_index.get_input_field_type(input_type_name, model_name))

    resolve = _registry_or_flags(
        type_index, model_input_name, type_name_overrides, lambda p: _flag_type(p, type_name_overrides)
    )
    variables, unresolved = _fold_variables(attrs, resolve)

    config = selection or SelectionConfig()
    if force_raw or config.mutation_input_mode == "raw" or unresolved > 0:
        variables, args = _raw_input(input_type_name)
    else:
        model_value = t.object_field(model_name, t.variable_object(a.name for a in attrs))
        args = [t.argument("input", t.object_value([model_value]))]

    id_exists = True
    available: list[str] = []
    if type_index is not None:
        model_type = _registry_type(type_index, model)
        id_exists = model_type is not None and any(f.name == "id" for f in model_type.fields)
        available = _scalar_field_names(model_type)

    return_fields = _dedupe(
        [*(["id"] if id_exists else []), *available, *config.default_mutation_model_fields]
    )
    selections: list[SelectionNode] = []
    if return_fields:
        selections.append(t.field(model_name, selections=[t.field(n) for n in return_fields]))
    selections.append(t.field("clientMutationId"))

    ast = create_gql_mutation(
        operation_name, mutation_name, args, selections, variables, use_model=False
    )
    return AstEntry(mutation_name, ast)


def patch_one(
    operation_name: str,
    mutation: GqlField,
    selection: SelectionConfig | None = None,
    type_name_overrides: Overrides = None,
    type_index: TypeIndex | None = None,
    diagnostics: Diagnostics | None = None,
) -> AstEntry | None:
    """``updateUser(input: {id: $id, patch: {...}}) { user { id } clientMutationId }``"""
    mutation_name = join_camelized(underscore(operation_name), "mutation")
    input_props = mutation.input_properties()
    if input_props is None:
        _missing_input(mutation_name, diagnostics)
        return None

    model = mutation.model or ""
    model_name = model_name_for(model)
    config = selection or SelectionConfig()
    collapsed = config.mutation_input_mode == "patchCollapsed"
    patch_type_name = f"{camelize(singularize(model), lower_first=False)}Patch"
    input_type_name = _input_type_name(mutation, type_name_overrides)

    patch_prop = input_props.get("patch")
    patch_by = [p for name, p in input_props.items() if name != "patch"]
    patchers = {p.name for p in patch_by}
    patch_attrs = [
        p
        for p in ((patch_prop.properties or {}) if patch_prop else {}).values()
        if p.name not in NON_MUTABLE_PROPS and p.name not in patchers
    ]

    def patch_fallback(prop: FieldProperty) -> ResolvedVariable:
        resolution = resolve_type(prop.type, type_name_overrides)
        node: TypeNode = t.named_type(resolution.name)
        if prop.is_array:
            node = t.list_type(node)
        if prop.name in patchers:
            node = t.non_null_type(node)
        return node, resolution.resolved

    def resolve_patch_attr(prop: FieldProperty) -> ResolvedVariable:
        patch_type = _registry_type(type_index, patch_type_name)
        if patch_type is not None:
            declared = next((f for f in patch_type.input_fields if f.name == prop.name), None)
            if declared is not None:
                node = ref_to_type_node(declared.type, type_name_overrides)
                if node is not None:
                    return node, True
        return patch_fallback(prop)

    if collapsed:
        patch_variables = [t.variable_definition("patch", t.non_null_type(t.named_type(patch_type_name)))]
        patch_unresolved = 0
    else:
        patch_variables, patch_unresolved = _fold_variables(patch_attrs, resolve_patch_attr)

    resolve_by = _registry_or_flags(
        type_index, input_type_name, type_name_overrides, lambda p: _flag_type(p, type_name_overrides)
    )
    by_variables, by_unresolved = _fold_variables(patch_by, resolve_by)

    if patch_unresolved + by_unresolved > 0:
        variables, args = _raw_input(input_type_name)
    else:
        variables = [*by_variables, *patch_variables]
        patch_value = t.variable("patch") if collapsed else t.variable_object(p.name for p in patch_attrs)
        input_fields = [
            *(t.object_field(p.name, t.variable(p.name)) for p in patch_by),
            t.object_field("patch", patch_value),
        ]
        args = [t.argument("input", t.object_value(input_fields))]

    id_exists = True
    model_type = _registry_type(type_index, model)
    if type_index is not None:
        id_exists = model_type is not None and any(f.name == "id" for f in model_type.fields)
    drop_id = is_id_suppressed_model(model_name) or not id_exists

    extra = config.default_mutation_model_fields
    if model_type is not None:
        declared_fields = {f.name for f in model_type.fields}
        extra = [f for f in extra if f in declared_fields]
    return_fields = _dedupe([*([] if drop_id else ["id"]), *(f for f in extra if not (drop_id and f == "id"))])

    selections: list[SelectionNode] = []
    if return_fields:
        selections.append(t.field(model_name, selections=[t.field(n) for n in return_fields]))
    selections.append(t.field("clientMutationId"))

    ast = create_gql_mutation(
        operation_name, mutation_name, args, selections, variables, use_model=False
    )
    return AstEntry(mutation_name, ast)


def delete_one(
    operation_name: str,
    mutation: GqlField,
    type_name_overrides: Overrides = None,
    type_index: TypeIndex | None = None,
    diagnostics: Diagnostics | None = None,
) -> AstEntry | None:
    """``deleteUser(input: {id: $id}) { clientMutationId }``"""
    mutation_name = join_camelized(underscore(operation_name), "mutation")
    input_props = mutation.input_properties()
    if input_props is None:
        _missing_input(mutation_name, diagnostics)
        return None

    attrs = list(input_props.values())
    input_type_name = _input_type_name(mutation, type_name_overrides)

    def delete_fallback(prop: FieldProperty) -> ResolvedVariable:
        resolution = resolve_type(prop.type, type_name_overrides)
        node: TypeNode = t.named_type(resolution.name)
        if prop.is_not_null:
            node = t.non_null_type(node)
        if prop.is_array:
            node = t.non_null_type(t.list_type(node))
        return node, resolution.resolved

    resolve = _registry_or_flags(type_index, input_type_name, type_name_overrides, delete_fallback)
    variables, unresolved = _fold_variables(attrs, resolve)

    if unresolved > 0:
        variables, args = _raw_input(input_type_name)
    else:
        args = [t.argument("input", t.variable_object(a.name for a in attrs))]

    ast = create_gql_mutation(
        operation_name,
        mutation_name,
        args,
        [t.field("clientMutationId")],
        variables,
        model_name=model_name_for(mutation.model or ""),
        use_model=False,
    )
    return AstEntry(mutation_name, ast)


def _object_output_name(
    mutation: GqlField,
    type_index: TypeIndex | None,
) -> str | None:
    for output in mutation.outputs:
        if output.kind == "OBJECT":
            return output.name

    payload = _registry_type(type_index, mutation.output_type)
    if payload is None:
        return None
    for f in payload.fields:
        if f.name == "clientMutationId":
            continue
        named = ref_to_named_type_name(f.type)
        if named == "Query":
            continue
        if named == mutation.model:
            return f.name
    return None


def create_mutation(
    operation_name: str,
    mutation: GqlField,
    selection: SelectionConfig | None = None,
    type_name_overrides: Overrides = None,
    type_index: TypeIndex | None = None,
    diagnostics: Diagnostics | None = None,
) -> AstEntry | None:
    """A custom mutation: flat ``input`` arguments and a best-effort payload selection."""
    mutation_name = join_camelized(underscore(operation_name), "mutation")
    input_props = mutation.input_properties()
    if input_props is None:
        _missing_input(mutation_name, diagnostics)
        return None

    attrs = list(input_props.values())
    input_type_name = _input_type_name(mutation, type_name_overrides)
    config = selection or SelectionConfig()

    def custom_fallback(prop: FieldProperty) -> ResolvedVariable:
        resolution = resolve_type(prop.type, type_name_overrides)
        node: TypeNode = t.non_null_type(t.named_type(resolution.name))
        if prop.is_array:
            node = t.list_type(node)
            if prop.is_array_not_null:
                node = t.non_null_type(node)
        return node, resolution.resolved

    resolve = _registry_or_flags(type_index, input_type_name, type_name_overrides, custom_fallback)
    variables, unresolved = _fold_variables(attrs, resolve)

    if config.mutation_input_mode == "raw" or not attrs or unresolved > 0:
        variables, args = _raw_input(input_type_name)
    else:
        args = [t.argument("input", t.variable_object(a.name for a in attrs))]

    object_output = _object_output_name(mutation, type_index)
    if object_output is None and config.force_model_output and mutation.model:
        object_output = model_name_for(mutation.model)

    selections: list[SelectionNode] = []
    if object_output:
        model_type = _registry_type(type_index, mutation.model)
        names = _scalar_field_names(model_type) if model_type else list(config.default_mutation_model_fields)
        selections.append(t.field(object_output, selections=[t.field(n) for n in names]))

    scalar_outputs = [o.name for o in mutation.outputs if o.kind == "SCALAR"]
    if scalar_outputs:
        selections.extend(t.field(n) for n in scalar_outputs)
    else:
        selections.append(t.field("clientMutationId"))

    ast = create_gql_mutation(operation_name, mutation_name, args, selections, variables)
    return AstEntry(mutation_name, ast)


# -- Orchestration ------------------------------------------------------------


@dataclass
class GenerateResult:
    ast_map: AstMap = field(default_factory=lambda: AstMap())
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


def _put(ast_map: AstMap, entry: AstEntry | None, operation_name: str, diagnostics: Diagnostics) -> None:
    if entry is None:
        return
    if entry.name in ast_map:
        diagnostics.info(operation_name, f"'{entry.name}' replaces an operation generated earlier")
    ast_map[entry.name] = entry


def generate(
    gql_map: GqlMap,
    selection: SelectionConfig | None = None,
    type_name_overrides: Overrides = None,
    type_index: TypeIndex | None = None,
) -> GenerateResult:
    """Build every operation in ``gql_map``, in key order.

    A ``getMany`` descriptor fans out into its edges query, paginated query,
    order-by enum query and fragment (plus the nodes-shaped query when
    ``connection_style`` is ``nodes``).
    """
    config = selection or SelectionConfig()
    result = GenerateResult()
    ast_map, diagnostics = result.ast_map, result.diagnostics

    for operation_name, defn in gql_map.items():
        qtype = defn.query_type
        fields = config.model_fields.get(defn.model or "") or None

        if qtype is QueryType.MUTATION:
            kind = defn.mutation_kind
            if kind is MutationKind.CREATE:
                entry = create_one(operation_name, defn, config, type_name_overrides, type_index, diagnostics)
            elif kind is MutationKind.PATCH:
                entry = patch_one(operation_name, defn, config, type_name_overrides, type_index, diagnostics)
            elif kind is MutationKind.DELETE:
                entry = delete_one(operation_name, defn, type_name_overrides, type_index, diagnostics)
            else:
                entry = create_mutation(operation_name, defn, config, type_name_overrides, type_index, diagnostics)
            _put(ast_map, entry, operation_name, diagnostics)
        elif qtype is QueryType.GET_MANY:
            entries = [
                get_many(operation_name, defn, fields),
                get_many_paginated_edges(operation_name, defn, fields),
                get_order_by_enums(operation_name, defn),
                get_fragment(operation_name, defn),
            ]
            if config.connection_style == "nodes":
                entries.append(get_many_paginated_nodes(operation_name, defn, fields))
            for entry in entries:
                _put(ast_map, entry, operation_name, diagnostics)
        elif qtype is QueryType.GET_ONE:
            _put(ast_map, get_one(operation_name, defn, fields, type_name_overrides), operation_name, diagnostics)
        else:
            diagnostics.warning(operation_name, f"unknown qtype {defn.qtype!r}, skipped")

    return result


def generate_granular(
    gql_map: GqlMap,
    model: str,
    fields: list[str] | None = None,
    type_name_overrides: Overrides = None,
) -> AstMap:
    """Regenerate only ``model``'s list and single-row queries, selecting ``fields``."""
    ast_map: AstMap = {}
    for operation_name, defn in gql_map.items():
        if defn.model != model:
            continue
        qtype = defn.query_type
        if qtype is QueryType.GET_MANY:
            for entry in (
                get_many(operation_name, defn, fields),
                get_many_paginated_edges(operation_name, defn, fields),
                get_many_paginated_nodes(operation_name, defn, fields),
            ):
                ast_map[entry.name] = entry
        elif qtype is QueryType.GET_ONE:
            entry = get_one(operation_name, defn, fields, type_name_overrides)
            ast_map[entry.name] = entry
    return ast_map
