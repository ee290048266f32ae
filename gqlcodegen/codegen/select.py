"""Table-driven query builders and the table -> operation map.

``build_gql_map`` turns inferred tables into the descriptors ``generate``
consumes. ``build_select``/``build_find_one``/``build_count`` print ready-made
nodes-shaped queries for a single table, honouring field-selection presets
and complex column types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from graphql import print_ast
from graphql.language.ast import ArgumentNode, FieldNode, VariableDefinitionNode

from gqlcodegen.codegen import gql_ast as t
from gqlcodegen.codegen.custom_ast import get_custom_ast_for_clean_field
from gqlcodegen.codegen.field_selector import (
    convert_to_selection_options,
    find_related_table,
    get_non_relational_fields,
    get_relation_info,
)
from gqlcodegen.codegen.gql import model_name_for
from gqlcodegen.codegen.operations import FieldProperty, GqlField, GqlMap, SelectionItem
from gqlcodegen.helpers.naming import camelize, pluralize, uc_first
from gqlcodegen.schema.types import (
    CleanField,
    CleanTable,
    FieldSelection,
    RelationSelection,
    SelectionOptions,
)

DEFAULT_NESTED_RELATION_FIRST = 20


@dataclass
class QueryOptions:
    """Optional arguments of a list query; each one given adds a variable."""

    first: int | None = None
    offset: int | None = None
    after: str | None = None
    before: str | None = None
    where: dict[str, Any] | None = None
    order_by: list[str] | None = None
    include_page_info: bool = False
    field_selection: FieldSelection = None


def to_camel_case_plural(table_name: str) -> str:
    """``ActionGoal`` -> ``actionGoals``, ``Person`` -> ``people``."""
    return pluralize(camelize(table_name, lower_first=True))


def to_order_by_type_name(table_name: str) -> str:
    """``Product`` -> ``ProductsOrderBy``."""
    return f"{uc_first(to_camel_case_plural(table_name))}OrderBy"


# -- Operation map -----------------------------------------------------------


def _key_property(f: CleanField) -> FieldProperty:
    return FieldProperty(name=f.name, type=f.type.gql_type, is_not_null=True, is_array=f.type.is_array)


def _create_property(f: CleanField) -> FieldProperty:
    # Primary key columns carry a default, so create inputs never require them.
    return FieldProperty(
        name=f.name,
        type=f.type.gql_type,
        is_not_null=f.type.is_not_null and f.name != "id",
        is_array=f.type.is_array,
    )


def _patch_property(f: CleanField) -> FieldProperty:
    return FieldProperty(name=f.name, type=f.type.gql_type, is_array=f.type.is_array)


def _selection_items(table: CleanTable, column_names: list[str]) -> list[SelectionItem]:
    """Column names, with complex columns replaced by their subfield selection."""
    items: list[SelectionItem] = []
    for name in column_names:
        node = _column_node(table, name)
        items.append(node if node.selection_set is not None else name)
    return items


def build_gql_map(tables: list[CleanTable]) -> GqlMap:
    """Descriptors for the list, single-row, create, update and delete operations of each table."""
    gql_map: GqlMap = {}
    for table in tables:
        name = table.name
        names = table.query
        column_names = get_non_relational_fields(table)
        selection = _selection_items(table, column_names)
        keys = [_key_property(f) for f in table.primary_key_fields()]
        # Input types never carry the global node id.
        columns = [f for f in table.fields if f.name in column_names and f.name != "nodeId"]

        all_name = names.all if names and names.all else to_camel_case_plural(name)
        gql_map[all_name] = GqlField(qtype="getMany", model=name, selection=list(selection))

        one_name = names.one if names else camelize(name, lower_first=True)
        if one_name:
            gql_map[one_name] = GqlField(
                qtype="getOne",
                model=name,
                properties={k.name: k for k in keys},
                selection=list(selection),
            )

        model_key = model_name_for(name)
        create_name = names.create if names else f"create{name}"
        if create_name:
            model_input = FieldProperty(
                name=model_key,
                type=f"{name}Input",
                is_not_null=True,
                properties={f.name: _create_property(f) for f in columns},
            )
            gql_map[create_name] = GqlField(
                qtype="mutation",
                mutation_type="create",
                model=name,
                properties={
                    "input": FieldProperty(
                        name="input",
                        type=f"Create{name}Input",
                        is_not_null=True,
                        properties={model_key: model_input},
                    )
                },
                output_type=f"Create{name}Payload",
                selection=list(selection),
            )

        update_name = names.update if names else f"update{name}"
        if update_name and keys:
            patch = FieldProperty(
                name="patch",
                type=f"{name}Patch",
                is_not_null=True,
                properties={f.name: _patch_property(f) for f in columns},
            )
            gql_map[update_name] = GqlField(
                qtype="mutation",
                mutation_type="patch",
                model=name,
                properties={
                    "input": FieldProperty(
                        name="input",
                        type=f"Update{name}Input",
                        is_not_null=True,
                        properties={**{k.name: k for k in keys}, "patch": patch},
                    )
                },
                output_type=f"Update{name}Payload",
                selection=list(selection),
            )

        delete_name = names.delete if names else f"delete{name}"
        if delete_name and keys:
            gql_map[delete_name] = GqlField(
                qtype="mutation",
                mutation_type="delete",
                model=name,
                properties={
                    "input": FieldProperty(
                        name="input",
                        type=f"Delete{name}Input",
                        is_not_null=True,
                        properties={k.name: k for k in keys},
                    )
                },
                output_type=f"Delete{name}Payload",
                selection=list(selection),
            )
    return gql_map


# -- Printed queries ----------------------------------------------------------


def _column_node(table: CleanTable | None, name: str) -> FieldNode:
    column = table.get_field(name) if table else None
    if column is not None:
        return get_custom_ast_for_clean_field(column)
    return t.field(name)


def column_selections(table: CleanTable) -> list[FieldNode]:
    """Every non-relational column, with subselections for complex types."""
    return [_column_node(table, n) for n in get_non_relational_fields(table)]


def _field_selections(
    table: CleanTable,
    all_tables: list[CleanTable],
    selection: SelectionOptions | None,
) -> list[FieldNode]:
    if not selection:
        return column_selections(table)

    nodes: list[FieldNode] = []
    for name, option in selection.items():
        if option is True:
            nodes.append(_column_node(table, name))
        elif isinstance(option, RelationSelection) and option.select:
            related = find_related_table(name, table, all_tables)
            nested = [_column_node(related, n) for n, include in option.select.items() if include]
            info = get_relation_info(name, table)
            if info is not None and info.type in ("hasMany", "manyToMany"):
                first = t.argument("first", t.int_value(DEFAULT_NESTED_RELATION_FIRST))
                nodes.append(t.field(name, args=[first], selections=[t.field("nodes", selections=nested)]))
            else:
                nodes.append(t.field(name, selections=nested))
    return nodes


def build_select(
    table: CleanTable,
    all_tables: list[CleanTable],
    options: QueryOptions | None = None,
) -> str:
    """``query usersQuery($first: Int, ...) { users(first: $first, ...) { totalCount nodes {...} } }``"""
    options = options or QueryOptions()
    plural = to_camel_case_plural(table.name)
    selection = convert_to_selection_options(table, list(all_tables), options.field_selection)

    variables: list[VariableDefinitionNode] = []
    args: list[ArgumentNode] = []

    def add(name: str, type_node: Any) -> None:
        variables.append(t.variable_definition(name, type_node))
        args.append(t.variable_argument(name))

    if options.first is not None:
        add("first", t.named_type("Int"))
    if options.offset is not None:
        add("offset", t.named_type("Int"))
    if options.after is not None:
        add("after", t.named_type("Cursor"))
    if options.before is not None:
        add("before", t.named_type("Cursor"))
    if options.where:
        add("filter", t.named_type(f"{table.name}Filter"))
    if options.order_by:
        add("orderBy", t.list_type(t.non_null_type(t.named_type(to_order_by_type_name(table.name)))))

    connection = [
        t.field("totalCount"),
        t.field("nodes", selections=_field_selections(table, list(all_tables), selection)),
    ]
    if options.include_page_info or options.after is not None or options.before is not None:
        connection.append(
            t.field(
                "pageInfo",
                selections=[t.field(n) for n in ("hasNextPage", "hasPreviousPage", "startCursor", "endCursor")],
            )
        )

    root = t.field(plural, args=args, selections=connection)
    return print_ast(t.document(t.query(f"{plural}Query", [root], variables)))


def build_find_one(table: CleanTable) -> str:
    """Single row by primary key, selecting every column."""
    singular = camelize(table.name, lower_first=True)
    keys = table.primary_key_fields()
    key_types = [(k.name, k.type.gql_type) for k in keys] or [("id", "UUID")]

    variables = [t.variable_definition(n, t.non_null_type(t.named_type(ty))) for n, ty in key_types]
    args = [t.variable_argument(n) for n, _ in key_types]
    root = t.field(singular, args=args, selections=column_selections(table))
    return print_ast(t.document(t.query(f"{singular}Query", [root], variables)))


def build_count(table: CleanTable) -> str:
    plural = to_camel_case_plural(table.name)
    variables = [t.variable_definition("filter", t.named_type(f"{table.name}Filter"))]
    root = t.field(plural, args=[t.variable_argument("filter")], selections=[t.field("totalCount")])
    return print_ast(t.document(t.query(f"{plural}CountQuery", [root], variables)))
