"""Shared test fixtures for gqlcodegen tests."""

from __future__ import annotations

from typing import Any

import pytest

from gqlcodegen.schema.introspection import TypeIndex, introspection_from_sdl
from gqlcodegen.schema.types import (
    CleanBelongsToRelation,
    CleanField,
    CleanFieldType,
    CleanHasManyRelation,
    CleanManyToManyRelation,
    CleanRelations,
    CleanTable,
    ConstraintInfo,
    TableConstraints,
    TableQueryNames,
)

# A small PostGraphile-shaped schema: users write posts, plus one custom mutation.
BLOG_SDL = """
scalar Cursor
scalar UUID
scalar Datetime

interface Node {
  nodeId: ID!
}

type Query {
  users(
    first: Int
    last: Int
    offset: Int
    before: Cursor
    after: Cursor
    orderBy: [UsersOrderBy!] = [PRIMARY_KEY_ASC]
    condition: UserCondition
    filter: UserFilter
  ): UsersConnection
  user(id: UUID!): User
  posts(first: Int, offset: Int, orderBy: [PostsOrderBy!], condition: PostCondition): PostsConnection
  post(id: UUID!): Post
}

type User implements Node {
  nodeId: ID!
  id: UUID!
  email: String!
  name: String
  createdAt: Datetime
  postsByAuthorId(first: Int): PostsConnection!
}

type Post implements Node {
  nodeId: ID!
  id: UUID!
  title: String!
  tags: [String]
  authorId: UUID!
  author: User
}

type PageInfo {
  hasNextPage: Boolean!
  hasPreviousPage: Boolean!
  startCursor: Cursor
  endCursor: Cursor
}

type UsersConnection {
  nodes: [User]!
  edges: [UsersEdge!]!
  pageInfo: PageInfo!
  totalCount: Int!
}

type UsersEdge {
  cursor: Cursor
  node: User
}

type PostsConnection {
  nodes: [Post]!
  edges: [PostsEdge!]!
  pageInfo: PageInfo!
  totalCount: Int!
}

type PostsEdge {
  cursor: Cursor
  node: Post
}

enum UsersOrderBy {
  NATURAL
  ID_ASC
  ID_DESC
  PRIMARY_KEY_ASC
}

enum PostsOrderBy {
  NATURAL
  ID_ASC
  ID_DESC
}

input UserCondition {
  id: UUID
  email: String
}

input UserFilter {
  and: [UserFilter!]
}

input PostCondition {
  id: UUID
  authorId: UUID
}

type Mutation {
  createUser(input: CreateUserInput!): CreateUserPayload
  updateUser(input: UpdateUserInput!): UpdateUserPayload
  deleteUser(input: DeleteUserInput!): DeleteUserPayload
  createPost(input: CreatePostInput!): CreatePostPayload
  resetPassword(input: ResetPasswordInput!): ResetPasswordPayload
}

input CreateUserInput {
  clientMutationId: String
  user: UserInput!
}

input UserInput {
  id: UUID
  email: String!
  name: String
  createdAt: Datetime
}

type CreateUserPayload {
  clientMutationId: String
  user: User
  query: Query
}

input UpdateUserInput {
  clientMutationId: String
  id: UUID!
  patch: UserPatch!
}

input UserPatch {
  id: UUID
  email: String
  name: String
  createdAt: Datetime
}

type UpdateUserPayload {
  clientMutationId: String
  user: User
  query: Query
}

input DeleteUserInput {
  clientMutationId: String
  id: UUID!
}

type DeleteUserPayload {
  clientMutationId: String
  user: User
  deletedUserNodeId: ID
  query: Query
}

input CreatePostInput {
  clientMutationId: String
  post: PostInput!
}

input PostInput {
  id: UUID
  title: String!
  tags: [String]
  authorId: UUID!
}

type CreatePostPayload {
  clientMutationId: String
  post: Post
  query: Query
}

input ResetPasswordInput {
  clientMutationId: String
  userId: UUID!
  newPassword: String!
}

type ResetPasswordPayload {
  clientMutationId: String
  success: Boolean
  query: Query
}
"""


@pytest.fixture
def blog_sdl() -> str:
    return BLOG_SDL


@pytest.fixture
def blog_introspection() -> dict[str, Any]:
    return introspection_from_sdl(BLOG_SDL)


@pytest.fixture
def blog_index(blog_introspection: dict[str, Any]) -> TypeIndex:
    return TypeIndex.from_introspection(blog_introspection)


def make_field(
    name: str,
    gql_type: str = "String",
    is_not_null: bool = False,
    is_array: bool = False,
    pg_type: str | None = None,
) -> CleanField:
    return CleanField(
        name=name,
        type=CleanFieldType(gql_type=gql_type, is_not_null=is_not_null, is_array=is_array, pg_type=pg_type),
    )


@pytest.fixture
def user_table() -> CleanTable:
    return CleanTable(
        name="User",
        fields=[
            make_field("id", "UUID", is_not_null=True),
            make_field("email", "String", is_not_null=True),
            make_field("name"),
            make_field("username"),
            make_field("bio"),
            make_field("avatarUrl"),
            make_field("createdAt", "Datetime"),
            make_field("location", "GeometryPoint", pg_type="geometry"),
            make_field("posts", "PostsConnection"),
            make_field("organization", "Organization"),
        ],
        relations=CleanRelations(
            belongs_to=[CleanBelongsToRelation(field_name="organization", references_table="Organization")],
            has_many=[CleanHasManyRelation(field_name="posts", referenced_by_table="Post")],
            many_to_many=[
                CleanManyToManyRelation(field_name="groups", right_table="Group", junction_table="UserGroup")
            ],
        ),
        query=TableQueryNames(
            all="users", one="user", create="createUser", update="updateUser", delete="deleteUser"
        ),
        constraints=TableConstraints(
            primary_key=[ConstraintInfo(name="primary", fields=[make_field("id", "UUID", is_not_null=True)])]
        ),
    )


@pytest.fixture
def post_table() -> CleanTable:
    return CleanTable(
        name="Post",
        fields=[
            make_field("id", "UUID", is_not_null=True),
            make_field("title", is_not_null=True),
            make_field("body"),
            make_field("authorId", "UUID"),
        ],
    )


@pytest.fixture
def organization_table() -> CleanTable:
    return CleanTable(
        name="Organization",
        fields=[make_field("id", "UUID", is_not_null=True), make_field("name"), make_field("slug")],
    )


@pytest.fixture
def all_tables(user_table: CleanTable, post_table: CleanTable, organization_table: CleanTable) -> list[CleanTable]:
    return [user_table, post_table, organization_table]
