"""Table-driven create/update/delete mutations.

Each takes a single ``$input`` variable of the PostGraphile input type and
returns the printed document. Create and update select every non-relational
column of the affected row; delete only selects ``clientMutationId``.
"""

from __future__ import annotations

from graphql import print_ast
from graphql.language.ast import SelectionNode

from gqlcodegen.codegen import gql_ast as t
from gqlcodegen.codegen.select import column_selections
from gqlcodegen.helpers.naming import camelize
from gqlcodegen.schema.types import CleanTable


def _input_mutation(mutation_name: str, input_type: str, selections: list[SelectionNode]) -> str:
    variables = [t.variable_definition("input", t.non_null_type(t.named_type(input_type)))]
    root = t.field(mutation_name, args=[t.variable_argument("input")], selections=selections)
    return print_ast(t.document(t.mutation(f"{mutation_name}Mutation", [root], variables)))


def build_postgraphile_create(table: CleanTable) -> str:
    """``mutation createUserMutation($input: CreateUserInput!) { createUser(input: $input) { user {...} } }``"""
    row = t.field(camelize(table.name, lower_first=True), selections=column_selections(table))
    return _input_mutation(f"create{table.name}", f"Create{table.name}Input", [row])


def build_postgraphile_update(table: CleanTable) -> str:
    row = t.field(camelize(table.name, lower_first=True), selections=column_selections(table))
    return _input_mutation(f"update{table.name}", f"Update{table.name}Input", [row])


def build_postgraphile_delete(table: CleanTable) -> str:
    return _input_mutation(
        f"delete{table.name}", f"Delete{table.name}Input", [t.field("clientMutationId")]
    )
