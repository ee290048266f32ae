"""Tests for gqlcodegen/codegen/gql.py."""

from __future__ import annotations

from graphql import NoUnusedFragmentsRule, build_schema, parse, print_ast, specified_rules, validate
from graphql.language.ast import DocumentNode, FieldNode, ObjectValueNode, OperationDefinitionNode

from gqlcodegen.codegen.custom_ast import interval_ast
from gqlcodegen.codegen.gql import (
    create_mutation,
    create_one,
    delete_one,
    generate,
    generate_granular,
    get_fragment,
    get_many,
    get_many_paginated_edges,
    get_many_paginated_nodes,
    get_one,
    get_order_by_enums,
    get_selections,
    is_id_suppressed_model,
    model_name_for,
    patch_one,
)
from gqlcodegen.codegen.operations import (
    AstEntry,
    Diagnostics,
    FieldProperty,
    FlatField,
    GqlField,
    MutationOutput,
    SelectionConfig,
)
from gqlcodegen.codegen.select import build_gql_map
from gqlcodegen.schema.infer_tables import infer_tables_from_introspection
from gqlcodegen.schema.introspection import TypeIndex, introspection_from_sdl
from gqlcodegen.schema.types import (
    CleanHasManyRelation,
    CleanRelations,
    CleanTable,
    TableQueryNames,
)
from tests.conftest import make_field


def _operation(entry: AstEntry) -> OperationDefinitionNode:
    op = entry.ast.definitions[0]
    assert isinstance(op, OperationDefinitionNode)
    return op


def _root(entry: AstEntry) -> FieldNode:
    root = _operation(entry).selection_set.selections[0]
    assert isinstance(root, FieldNode)
    return root


def _variables(entry: AstEntry) -> dict[str, str]:
    return {
        v.variable.name.value: print_ast(v.type)
        for v in _operation(entry).variable_definitions or ()
    }


def _names(node: FieldNode) -> list[str]:
    assert node.selection_set is not None
    return [s.name.value for s in node.selection_set.selections if isinstance(s, FieldNode)]


def _child(node: FieldNode, name: str) -> FieldNode:
    assert node.selection_set is not None
    for s in node.selection_set.selections:
        if isinstance(s, FieldNode) and s.name.value == name:
            return s
    raise AssertionError(f"no field {name}")


def _input_object(entry: AstEntry) -> ObjectValueNode:
    arg = _root(entry).arguments[0]
    assert arg.name.value == "input"
    assert isinstance(arg.value, ObjectValueNode)
    return arg.value


def _object_keys(value: ObjectValueNode) -> list[str]:
    return [f.name.value for f in value.fields]


def _reparses(doc: DocumentNode) -> bool:
    return print_ast(parse(print_ast(doc))) == print_ast(doc)


def _e2e_table() -> CleanTable:
    return CleanTable(
        name="User",
        fields=[make_field("id", "UUID", is_not_null=True), make_field("email"), make_field("name")],
        relations=CleanRelations(has_many=[CleanHasManyRelation(field_name="posts", referenced_by_table="Post")]),
        query=TableQueryNames(
            all="users", one="user", create="createUser", update="updateUser", delete="deleteUser"
        ),
    )


def _create_user(properties: dict[str, FieldProperty], input_type: str = "CreateUserInput") -> GqlField:
    model = FieldProperty(name="user", type="UserInput", is_not_null=True, properties=properties)
    return GqlField(
        qtype="mutation",
        mutation_type="create",
        model="User",
        properties={
            "input": FieldProperty(name="input", type=input_type, is_not_null=True, properties={"user": model})
        },
    )


class TestNaming:
    def test_model_name_for(self) -> None:
        assert model_name_for("User") == "user"
        assert model_name_for("Users") == "user"
        assert model_name_for("ActionGoal") == "actionGoal"

    def test_extension_models_suppress_id(self) -> None:
        assert is_id_suppressed_model("ProfileExtension")
        assert is_id_suppressed_model("profileextension")
        assert not is_id_suppressed_model("Extensions")
        assert not is_id_suppressed_model(None)


class TestGetSelections:
    def test_strings_are_leaves(self) -> None:
        query = GqlField(qtype="getOne", model="User", selection=["id", "email"])
        assert [print_ast(n) for n in get_selections(query)] == ["id", "email"]

    def test_fields_restrict_top_level(self) -> None:
        query = GqlField(qtype="getOne", model="User", selection=["id", "email", "name"])
        assert [n.name.value for n in get_selections(query, ["email"])] == ["email"]

    def test_nested_get_many_becomes_edges(self) -> None:
        query = GqlField(
            qtype="getOne",
            model="User",
            selection=["id", FlatField(name="posts", selection=["title"], qtype="getMany")],
        )
        posts = get_selections(query)[1]
        assert print_ast(posts.arguments[0]) == "first: 3"
        edges = _child(posts, "edges")
        assert _names(edges) == ["cursor", "node"]
        assert _names(_child(edges, "node")) == ["title"]

    def test_nested_object(self) -> None:
        query = GqlField(qtype="getOne", model="Post", selection=[FlatField(name="author", selection=["id"])])
        author = get_selections(query)[0]
        assert author.arguments == ()
        assert _names(author) == ["id"]

    def test_extension_model_drops_id(self) -> None:
        query = GqlField(qtype="getOne", model="ProfileExtension", selection=["id", "bio"])
        assert [n.name.value for n in get_selections(query)] == ["bio"]

    def test_fields_restrict_nested_items(self) -> None:
        query = GqlField(
            qtype="getOne",
            model="User",
            selection=["id", "email", FlatField(name="posts", selection=["id", "title"], qtype="getMany")],
        )
        selections = get_selections(query, ["id", "posts"])
        assert [n.name.value for n in selections] == ["id", "posts"]
        node = _child(_child(selections[1], "edges"), "node")
        assert _names(node) == ["id"]

    def test_extension_model_drops_nested_id(self) -> None:
        query = GqlField(
            qtype="getOne",
            model="ProfileExtension",
            selection=["bio", FlatField(name="profile", selection=["id", "avatarUrl"])],
        )
        profile = get_selections(query)[1]
        assert _names(profile) == ["avatarUrl"]

    def test_field_nodes_are_kept_whole(self) -> None:
        duration = interval_ast("duration")
        query = GqlField(qtype="getOne", model="Event", selection=["id", duration])
        selections = get_selections(query, ["duration"])
        assert selections == [duration]
        assert _names(selections[0]) == ["days", "hours", "minutes", "months", "seconds", "years"]


class TestQueries:
    def setup_method(self) -> None:
        self.users = GqlField(qtype="getMany", model="User", selection=["id", "email"])

    def test_get_many(self) -> None:
        entry = get_many("users", self.users)
        assert entry.name == "getUsersQueryAll"
        root = _root(entry)
        assert _names(root) == ["totalCount", "pageInfo", "edges"]
        assert _names(_child(root, "pageInfo")) == ["hasNextPage", "hasPreviousPage", "endCursor", "startCursor"]
        assert _names(_child(_child(root, "edges"), "node")) == ["id", "email"]
        assert _variables(entry) == {}

    def test_paginated_edges(self) -> None:
        entry = get_many_paginated_edges("users", self.users)
        assert entry.name == "getUsersPaginated"
        assert _variables(entry) == {
            "first": "Int",
            "last": "Int",
            "offset": "Int",
            "after": "Cursor",
            "before": "Cursor",
            "condition": "UserCondition",
            "filter": "UserFilter",
            "orderBy": "[UsersOrderBy!]",
        }
        args = [a.name.value for a in _root(entry).arguments]
        assert args == ["first", "last", "offset", "after", "before", "condition", "filter", "orderBy"]

    def test_paginated_nodes(self) -> None:
        entry = get_many_paginated_nodes("users", self.users)
        assert entry.name == "getUsersQuery"
        root = _root(entry)
        assert "edges" not in _names(root)
        assert _names(_child(root, "nodes")) == ["id", "email"]

    def test_order_by_enums(self) -> None:
        entry = get_order_by_enums("users", self.users)
        assert entry.name == "getUsersOrderByEnums"
        text = print_ast(entry.ast)
        assert '__type(name: "UsersOrderBy")' in text
        assert "enumValues" in text

    def test_fragment(self) -> None:
        entry = get_fragment("users", self.users)
        assert entry.name == "userFragment"
        assert print_ast(entry.ast).startswith("fragment userFragment on User {")

    def test_get_one_variables_from_non_null_properties(self) -> None:
        query = GqlField(
            qtype="getOne",
            model="User",
            properties={
                "id": FieldProperty(name="id", type="UUID", is_not_null=True),
                "tags": FieldProperty(name="tags", type="String", is_not_null=True, is_array=True, is_array_not_null=True),
                "hint": FieldProperty(name="hint", type="String"),
            },
            selection=["id"],
        )
        entry = get_one("user", query)
        assert entry.name == "getUserQuery"
        assert _variables(entry) == {"id": "UUID!", "tags": "[String!]!"}

    def test_get_one_applies_overrides(self) -> None:
        query = GqlField(
            qtype="getOne",
            model="User",
            properties={"id": FieldProperty(name="id", type="UUID", is_not_null=True)},
        )
        entry = get_one("user", query, type_name_overrides={"UUID": "ID"})
        assert _variables(entry) == {"id": "ID!"}

    def test_documents_reparse(self) -> None:
        for entry in (get_many("users", self.users), get_many_paginated_edges("users", self.users)):
            assert _reparses(entry.ast)


class TestEndToEnd:
    def test_create_user_without_registry(self) -> None:
        gql_map = build_gql_map([_e2e_table()])
        entry = create_one("createUser", gql_map["createUser"])

        assert entry is not None
        assert entry.name == "createUserMutation"
        assert _variables(entry) == {"email": "String", "name": "String"}

        user = _input_object(entry).fields[0]
        assert user.name.value == "user"
        assert isinstance(user.value, ObjectValueNode)
        assert _object_keys(user.value) == ["email", "name"]
        assert print_ast(user.value.fields[0].value) == "$email"

        root = _root(entry)
        assert _names(root) == ["user", "clientMutationId"]
        assert _names(_child(root, "user")) == ["id"]

    def test_get_one_with_fields(self) -> None:
        gql_map = build_gql_map([_e2e_table()])
        entry = get_one("user", gql_map["user"], ["id", "email"])
        assert entry.name == "getUserQuery"
        assert _names(_root(entry)) == ["id", "email"]

    def test_extension_patch_has_no_id(self) -> None:
        registry_sdl = """
        type Query { profileExtension(id: Int!): ProfileExtension }
        type ProfileExtension { id: Int! bio: String }
        input ProfileExtensionPatch { bio: String }
        input UpdateProfileExtensionInput { id: Int! patch: ProfileExtensionPatch! }
        type Mutation { updateProfileExtension(input: UpdateProfileExtensionInput!): Boolean }
        """
        index = TypeIndex.from_introspection(introspection_from_sdl(registry_sdl))
        mutation = GqlField(
            qtype="mutation",
            mutation_type="patch",
            model="ProfileExtension",
            properties={
                "input": FieldProperty(
                    name="input",
                    type="UpdateProfileExtensionInput",
                    properties={
                        "id": FieldProperty(name="id", type="Int", is_not_null=True),
                        "patch": FieldProperty(
                            name="patch",
                            type="ProfileExtensionPatch",
                            properties={"bio": FieldProperty(name="bio", type="String")},
                        ),
                    },
                )
            },
        )
        entry = patch_one("updateProfileExtension", mutation, type_index=index)

        assert entry is not None
        root = _root(entry)
        assert _names(root) == ["clientMutationId"]
        assert _variables(entry) == {"id": "Int!", "bio": "String"}


class TestCreateOne:
    def test_non_null_id_is_kept(self) -> None:
        mutation = _create_user(
            {
                "id": FieldProperty(name="id", type="UUID", is_not_null=True),
                "createdAt": FieldProperty(name="createdAt", type="Datetime"),
                "email": FieldProperty(name="email", type="String"),
            }
        )
        entry = create_one("createUser", mutation)
        assert entry is not None
        assert _variables(entry) == {"id": "UUID!", "email": "String"}

    def test_unresolved_attribute_forces_raw_mode(self) -> None:
        mutation = _create_user(
            {
                "email": FieldProperty(name="email", type="String"),
                "settings": FieldProperty(name="settings"),
            }
        )
        entry = create_one("createUser", mutation)
        assert entry is not None
        assert _variables(entry) == {"input": "CreateUserInput!"}
        assert print_ast(_root(entry).arguments[0]) == "input: $input"

    def test_raw_mode_requested(self) -> None:
        mutation = _create_user({"email": FieldProperty(name="email", type="String")})
        entry = create_one("createUser", mutation, SelectionConfig(mutation_input_mode="raw"))
        assert entry is not None
        assert list(_variables(entry)) == ["input"]

    def test_registry_types_prevent_raw_mode(self, blog_index: TypeIndex) -> None:
        mutation = _create_user(
            {
                "email": FieldProperty(name="email"),
                "name": FieldProperty(name="name"),
            }
        )
        entry = create_one("createUser", mutation, type_index=blog_index)
        assert entry is not None
        variables = _variables(entry)
        assert "input" not in variables
        assert variables == {"email": "String!", "name": "String"}

    def test_registry_return_fields(self, blog_index: TypeIndex) -> None:
        mutation = _create_user({"email": FieldProperty(name="email", type="String")})
        config = SelectionConfig(default_mutation_model_fields=["email", "extra"])
        entry = create_one("createUser", mutation, config, type_index=blog_index)
        assert entry is not None
        assert _names(_child(_root(entry), "user")) == ["id", "nodeId", "email", "name", "createdAt", "extra"]

    def test_missing_model_object_uses_raw_input(self) -> None:
        mutation = GqlField(
            qtype="mutation",
            mutation_type="create",
            model="User",
            properties={"input": FieldProperty(name="input", type="CreateUserInput", properties={})},
        )
        diagnostics = Diagnostics()
        entry = create_one("createUser", mutation, diagnostics=diagnostics)
        assert entry is not None
        assert _variables(entry) == {"input": "CreateUserInput!"}
        assert [d.level for d in diagnostics] == ["warning"]

    def test_missing_input_returns_none(self) -> None:
        mutation = GqlField(qtype="mutation", mutation_type="create", model="User")
        assert create_one("createUser", mutation) is None


class TestPatchOne:
    def _update_user(self, key_type: str | None = "UUID", email_type: str | None = "String") -> GqlField:
        return GqlField(
            qtype="mutation",
            mutation_type="patch",
            model="User",
            properties={
                "input": FieldProperty(
                    name="input",
                    type="UpdateUserInput",
                    properties={
                        "id": FieldProperty(name="id", type=key_type, is_not_null=True),
                        "patch": FieldProperty(
                            name="patch",
                            type="UserPatch",
                            properties={
                                "id": FieldProperty(name="id", type="UUID"),
                                "email": FieldProperty(name="email", type=email_type),
                                "tags": FieldProperty(name="tags", type="String", is_array=True),
                                "updatedAt": FieldProperty(name="updatedAt", type="Datetime"),
                            },
                        ),
                    },
                )
            },
        )

    def test_expanded(self) -> None:
        entry = patch_one("updateUser", self._update_user())
        assert entry is not None
        assert entry.name == "updateUserMutation"
        assert _variables(entry) == {"id": "UUID!", "email": "String", "tags": "[String]"}
        value = _input_object(entry)
        assert _object_keys(value) == ["id", "patch"]
        patch = value.fields[1].value
        assert isinstance(patch, ObjectValueNode)
        assert _object_keys(patch) == ["email", "tags"]
        assert _names(_child(_root(entry), "user")) == ["id"]

    def test_collapsed(self) -> None:
        entry = patch_one("updateUser", self._update_user(), SelectionConfig(mutation_input_mode="patchCollapsed"))
        assert entry is not None
        assert _variables(entry) == {"id": "UUID!", "patch": "UserPatch!"}
        assert print_ast(_input_object(entry).fields[1].value) == "$patch"

    def test_registry_filters_default_fields(self, blog_index: TypeIndex) -> None:
        config = SelectionConfig(default_mutation_model_fields=["email", "missing"])
        entry = patch_one("updateUser", self._update_user(), config, type_index=blog_index)
        assert entry is not None
        assert _names(_child(_root(entry), "user")) == ["id", "email"]

    def test_unresolved_patch_attribute_switches_to_raw(self) -> None:
        entry = patch_one("updateUser", self._update_user(email_type=None))
        assert entry is not None
        assert _variables(entry) == {"input": "UpdateUserInput!"}
        assert [print_ast(a) for a in _root(entry).arguments] == ["input: $input"]

    def test_unresolved_key_switches_to_raw(self) -> None:
        entry = patch_one("updateUser", self._update_user(key_type=None))
        assert entry is not None
        assert _variables(entry) == {"input": "UpdateUserInput!"}
        assert [print_ast(a) for a in _root(entry).arguments] == ["input: $input"]
        assert _names(_child(_root(entry), "user")) == ["id"]


class TestDeleteOne:
    def test_returns_client_mutation_id_only(self) -> None:
        mutation = GqlField(
            qtype="mutation",
            mutation_type="delete",
            model="User",
            properties={
                "input": FieldProperty(
                    name="input",
                    type="DeleteUserInput",
                    properties={"id": FieldProperty(name="id", type="UUID", is_not_null=True)},
                )
            },
        )
        entry = delete_one("deleteUser", mutation)
        assert entry is not None
        assert entry.name == "deleteUserMutation"
        assert _variables(entry) == {"id": "UUID!"}
        assert _names(_root(entry)) == ["clientMutationId"]

    def test_array_fallback(self) -> None:
        mutation = GqlField(
            qtype="mutation",
            mutation_type="delete",
            model="Tag",
            properties={
                "input": FieldProperty(
                    name="input",
                    type="DeleteTagsInput",
                    properties={"ids": FieldProperty(name="ids", type="Int", is_not_null=True, is_array=True)},
                )
            },
        )
        entry = delete_one("deleteTags", mutation)
        assert entry is not None
        assert _variables(entry) == {"ids": "[Int!]!"}

    def test_unresolved_key_switches_to_raw(self) -> None:
        mutation = GqlField(
            qtype="mutation",
            mutation_type="delete",
            model="User",
            properties={
                "input": FieldProperty(
                    name="input",
                    type="DeleteUserInput",
                    properties={
                        "id": FieldProperty(name="id", type="UUID", is_not_null=True),
                        "tenant": FieldProperty(name="tenant", is_not_null=True),
                    },
                )
            },
        )
        entry = delete_one("deleteUser", mutation)
        assert entry is not None
        assert _variables(entry) == {"input": "DeleteUserInput!"}
        assert [print_ast(a) for a in _root(entry).arguments] == ["input: $input"]
        assert _names(_root(entry)) == ["clientMutationId"]


class TestCreateMutation:
    def test_custom_mutation_from_registry(self, blog_index: TypeIndex) -> None:
        mutation = GqlField(
            qtype="mutation",
            mutation_type="resetPassword",
            properties={
                "input": FieldProperty(
                    name="input",
                    type="ResetPasswordInput",
                    properties={
                        "userId": FieldProperty(name="userId"),
                        "newPassword": FieldProperty(name="newPassword"),
                    },
                )
            },
            outputs=[MutationOutput(name="success", kind="SCALAR")],
            output_type="ResetPasswordPayload",
        )
        entry = create_mutation("resetPassword", mutation, type_index=blog_index)
        assert entry is not None
        assert entry.name == "resetPasswordMutation"
        assert _variables(entry) == {"userId": "UUID!", "newPassword": "String!"}
        assert _names(_root(entry)) == ["success"]

    def test_fallback_types_are_non_null(self) -> None:
        mutation = GqlField(
            qtype="mutation",
            mutation_type="tagPosts",
            properties={
                "input": FieldProperty(
                    name="input",
                    type="TagPostsInput",
                    properties={
                        "tag": FieldProperty(name="tag", type="String"),
                        "postIds": FieldProperty(name="postIds", type="UUID", is_array=True, is_array_not_null=True),
                    },
                )
            },
        )
        entry = create_mutation("tagPosts", mutation)
        assert entry is not None
        assert _variables(entry) == {"tag": "String!", "postIds": "[UUID!]!"}
        assert _names(_root(entry)) == ["clientMutationId"]

    def test_no_attributes_is_raw(self) -> None:
        mutation = GqlField(
            qtype="mutation",
            mutation_type="refresh",
            properties={"input": FieldProperty(name="input", type="RefreshInput", properties={})},
        )
        entry = create_mutation("refresh", mutation)
        assert entry is not None
        assert _variables(entry) == {"input": "RefreshInput!"}

    def test_payload_model_is_selected(self, blog_index: TypeIndex) -> None:
        mutation = GqlField(
            qtype="mutation",
            mutation_type="createUser",
            model="User",
            properties={
                "input": FieldProperty(
                    name="input", type="CreateUserInput", properties={"user": FieldProperty(name="user")}
                )
            },
            output_type="CreateUserPayload",
        )
        entry = create_mutation("createUser", mutation, type_index=blog_index)
        assert entry is not None
        assert _names(_root(entry)) == ["user", "clientMutationId"]
        assert _names(_child(_root(entry), "user")) == ["nodeId", "id", "email", "name", "createdAt"]

    def test_force_model_output(self) -> None:
        mutation = GqlField(
            qtype="mutation",
            mutation_type="archiveUser",
            model="User",
            properties={
                "input": FieldProperty(
                    name="input", type="ArchiveUserInput", properties={"id": FieldProperty(name="id", type="UUID")}
                )
            },
        )
        config = SelectionConfig(force_model_output=True, default_mutation_model_fields=["id"])
        entry = create_mutation("archiveUser", mutation, config)
        assert entry is not None
        assert _names(_child(_root(entry), "user")) == ["id"]


class TestGenerate:
    def test_fans_out_get_many(self) -> None:
        gql_map = build_gql_map([_e2e_table()])
        result = generate(gql_map)
        assert set(result.ast_map) == {
            "getUsersQueryAll",
            "getUsersPaginated",
            "getUsersOrderByEnums",
            "userFragment",
            "getUserQuery",
            "createUserMutation",
            "updateUserMutation",
            "deleteUserMutation",
        }

    def test_nodes_style_adds_nodes_query(self) -> None:
        gql_map = build_gql_map([_e2e_table()])
        result = generate(gql_map, SelectionConfig(connection_style="nodes"))
        assert "getUsersQuery" in result.ast_map

    def test_model_fields_restrict_queries(self) -> None:
        gql_map = build_gql_map([_e2e_table()])
        result = generate(gql_map, SelectionConfig(model_fields={"User": ["email"]}))
        assert _names(_root(result.ast_map["getUserQuery"])) == ["email"]

    def test_unknown_qtype_is_skipped_with_warning(self) -> None:
        result = generate({"weird": GqlField(qtype="subscription", model="User")})
        assert result.ast_map == {}
        assert [(d.level, d.operation) for d in result.diagnostics] == [("warning", "weird")]

    def test_missing_input_is_skipped(self) -> None:
        gql_map = {
            "createUser": GqlField(qtype="mutation", mutation_type="create", model="User"),
            "user": GqlField(qtype="getOne", model="User", selection=["id"]),
        }
        result = generate(gql_map)
        assert list(result.ast_map) == ["getUserQuery"]
        assert result.diagnostics[0].operation == "createUserMutation"

    def test_idempotent(self, blog_index: TypeIndex) -> None:
        gql_map = build_gql_map([_e2e_table()])
        first = {k: print_ast(v.ast) for k, v in generate(gql_map, type_index=blog_index).ast_map.items()}
        second = {k: print_ast(v.ast) for k, v in generate(gql_map, type_index=blog_index).ast_map.items()}
        assert first == second

    def test_every_document_reparses(self) -> None:
        result = generate(build_gql_map([_e2e_table()]))
        for entry in result.ast_map.values():
            assert _reparses(entry.ast)


class TestGenerateGranular:
    def test_only_model_queries(self) -> None:
        table = _e2e_table()
        other = CleanTable(name="Post", fields=[make_field("id", "UUID", is_not_null=True)])
        gql_map = build_gql_map([table, other])
        ast_map = generate_granular(gql_map, "User", ["id"])
        assert set(ast_map) == {"getUsersQueryAll", "getUsersPaginated", "getUsersQuery", "getUserQuery"}
        assert _names(_root(ast_map["getUserQuery"])) == ["id"]


EVENT_SDL = """
scalar Cursor
scalar Datetime
scalar GeoJSON

type Query {
  events(
    first: Int
    last: Int
    offset: Int
    before: Cursor
    after: Cursor
    orderBy: [EventsOrderBy!]
    condition: EventCondition
    filter: EventFilter
  ): EventsConnection
  event(id: Int!): Event
}

type Mutation {
  createEvent(input: CreateEventInput!): CreateEventPayload
  updateEvent(input: UpdateEventInput!): UpdateEventPayload
  deleteEvent(input: DeleteEventInput!): DeleteEventPayload
}

type Interval {
  seconds: Float
  minutes: Int
  hours: Int
  days: Int
  months: Int
  years: Int
}

input IntervalInput {
  seconds: Float
  minutes: Int
  hours: Int
  days: Int
  months: Int
  years: Int
}

type GeometryPoint {
  x: Float!
  y: Float!
}

type Event {
  id: Int!
  name: String
  startsAt: Datetime
  duration: Interval
  venue: GeometryPoint
}

type EventsConnection {
  nodes: [Event]!
  edges: [EventsEdge!]!
  pageInfo: PageInfo!
  totalCount: Int!
}

type EventsEdge {
  cursor: Cursor
  node: Event
}

type PageInfo {
  hasNextPage: Boolean!
  hasPreviousPage: Boolean!
  startCursor: Cursor
  endCursor: Cursor
}

enum EventsOrderBy {
  NATURAL
  ID_ASC
  ID_DESC
}

input EventCondition {
  id: Int
  name: String
}

input EventFilter {
  name: String
}

input EventInput {
  id: Int
  name: String
  startsAt: Datetime
  duration: IntervalInput
  venue: GeoJSON
}

input EventPatch {
  id: Int
  name: String
  startsAt: Datetime
  duration: IntervalInput
  venue: GeoJSON
}

input CreateEventInput {
  clientMutationId: String
  event: EventInput!
}

input UpdateEventInput {
  clientMutationId: String
  id: Int!
  patch: EventPatch!
}

input DeleteEventInput {
  clientMutationId: String
  id: Int!
}

type CreateEventPayload {
  clientMutationId: String
  event: Event
}

type UpdateEventPayload {
  clientMutationId: String
  event: Event
}

type DeleteEventPayload {
  clientMutationId: String
  event: Event
}
"""


class TestComplexColumns:
    def _generated(self) -> dict[str, AstEntry]:
        introspection = introspection_from_sdl(EVENT_SDL)
        gql_map = build_gql_map(infer_tables_from_introspection(introspection))
        result = generate(
            gql_map,
            SelectionConfig(connection_style="nodes"),
            type_index=TypeIndex.from_introspection(introspection),
        )
        return result.ast_map

    def test_every_document_validates_against_its_schema(self) -> None:
        ast_map = self._generated()
        schema = build_schema(EVENT_SDL)
        # Fragment documents stand alone and are never used by an operation.
        rules = [rule for rule in specified_rules if rule is not NoUnusedFragmentsRule]
        for name, entry in ast_map.items():
            assert validate(schema, entry.ast, rules) == [], name

    def test_interval_and_point_select_subfields(self) -> None:
        ast_map = self._generated()
        event = _root(ast_map["getEventQuery"])
        assert _names(event) == ["id", "name", "startsAt", "duration", "venue"]
        assert _names(_child(event, "duration")) == ["days", "hours", "minutes", "months", "seconds", "years"]
        assert _names(_child(event, "venue")) == ["x", "y"]

        nodes = _child(_root(ast_map["getEventsQuery"]), "nodes")
        assert _names(_child(nodes, "duration")) == ["days", "hours", "minutes", "months", "seconds", "years"]
