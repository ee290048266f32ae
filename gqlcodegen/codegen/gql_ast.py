"""Small constructors over graphql-core's AST node classes.

graphql-core nodes take every attribute as a keyword and leave missing ones
as ``None``; these helpers fill in empty tuples so that every document we
build has the same shape as one produced by ``graphql.parse``.
"""

from __future__ import annotations

from collections.abc import Iterable

from graphql.language.ast import (
    ArgumentNode,
    DefinitionNode,
    DocumentNode,
    FieldNode,
    FragmentDefinitionNode,
    InlineFragmentNode,
    IntValueNode,
    ListTypeNode,
    NamedTypeNode,
    NameNode,
    NonNullTypeNode,
    ObjectFieldNode,
    ObjectValueNode,
    OperationDefinitionNode,
    OperationType,
    SelectionNode,
    SelectionSetNode,
    StringValueNode,
    TypeNode,
    ValueNode,
    VariableDefinitionNode,
    VariableNode,
)


def name(value: str) -> NameNode:
    return NameNode(value=value)


def selection_set(selections: Iterable[SelectionNode]) -> SelectionSetNode:
    return SelectionSetNode(selections=tuple(selections))


def field(
    field_name: str,
    args: Iterable[ArgumentNode] = (),
    selections: Iterable[SelectionNode] | None = None,
) -> FieldNode:
    """A field node; ``selections=None`` means a leaf field."""
    return FieldNode(
        alias=None,
        name=name(field_name),
        arguments=tuple(args),
        directives=(),
        selection_set=selection_set(selections) if selections is not None else None,
    )


def inline_fragment(type_name: str, selections: Iterable[SelectionNode]) -> InlineFragmentNode:
    return InlineFragmentNode(
        type_condition=named_type(type_name),
        directives=(),
        selection_set=selection_set(selections),
    )


def variable(var_name: str) -> VariableNode:
    return VariableNode(name=name(var_name))


def argument(arg_name: str, value: ValueNode) -> ArgumentNode:
    return ArgumentNode(name=name(arg_name), value=value)


def variable_argument(arg_name: str) -> ArgumentNode:
    """``arg_name: $arg_name``"""
    return argument(arg_name, variable(arg_name))


def variable_definition(var_name: str, type_: TypeNode) -> VariableDefinitionNode:
    return VariableDefinitionNode(
        variable=variable(var_name),
        type=type_,
        default_value=None,
        directives=(),
    )


def named_type(type_name: str) -> NamedTypeNode:
    return NamedTypeNode(name=name(type_name))


def list_type(inner: TypeNode) -> ListTypeNode:
    return ListTypeNode(type=inner)


def non_null_type(inner: TypeNode) -> NonNullTypeNode:
    return NonNullTypeNode(type=inner)


def object_field(field_name: str, value: ValueNode) -> ObjectFieldNode:
    return ObjectFieldNode(name=name(field_name), value=value)


def object_value(fields: Iterable[ObjectFieldNode]) -> ObjectValueNode:
    return ObjectValueNode(fields=tuple(fields))


def variable_object(names: Iterable[str]) -> ObjectValueNode:
    """``{a: $a, b: $b}``"""
    return object_value(object_field(n, variable(n)) for n in names)


def string_value(value: str) -> StringValueNode:
    return StringValueNode(value=value, block=False)


def int_value(value: int) -> IntValueNode:
    return IntValueNode(value=str(value))


def operation(
    kind: OperationType,
    op_name: str | None,
    selections: Iterable[SelectionNode],
    variable_definitions: Iterable[VariableDefinitionNode] = (),
) -> OperationDefinitionNode:
    return OperationDefinitionNode(
        operation=kind,
        name=name(op_name) if op_name else None,
        variable_definitions=tuple(variable_definitions),
        directives=(),
        selection_set=selection_set(selections),
    )


def query(
    op_name: str | None,
    selections: Iterable[SelectionNode],
    variable_definitions: Iterable[VariableDefinitionNode] = (),
) -> OperationDefinitionNode:
    return operation(OperationType.QUERY, op_name, selections, variable_definitions)


def mutation(
    op_name: str | None,
    selections: Iterable[SelectionNode],
    variable_definitions: Iterable[VariableDefinitionNode] = (),
) -> OperationDefinitionNode:
    return operation(OperationType.MUTATION, op_name, selections, variable_definitions)


def fragment_definition(
    fragment_name: str,
    type_name: str,
    selections: Iterable[SelectionNode],
) -> FragmentDefinitionNode:
    return FragmentDefinitionNode(
        name=name(fragment_name),
        variable_definitions=None,
        type_condition=named_type(type_name),
        directives=(),
        selection_set=selection_set(selections),
    )


def document(*definitions: DefinitionNode) -> DocumentNode:
    return DocumentNode(definitions=tuple(definitions))
