"""Schema types passed between introspection and the code generators.

Three layers of types:
1. Clean tables: normalized PostGraphile table metadata (fields + relations)
2. Type references: introspection type refs with NON_NULL/LIST wrapping
3. Type registry: every named schema type, keyed by name
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, cast

WRAPPER_KINDS = ("NON_NULL", "LIST")

# -- Clean tables ------------------------------------------------------------


@dataclass
class CleanFieldType:
    """Type information for a table column."""

    gql_type: str
    is_array: bool = False
    is_not_null: bool = False
    modifier: str | int | None = None
    pg_alias: str | None = None
    pg_type: str | None = None  # native PostgreSQL type, e.g. "geometry"
    subtype: str | None = None
    typmod: int | None = None


@dataclass
class CleanField:
    name: str
    type: CleanFieldType


@dataclass
class CleanBelongsToRelation:
    """Foreign key on this table."""

    field_name: str | None
    references_table: str
    is_unique: bool = False
    type: str | None = None
    keys: list[CleanField] = field(default_factory=lambda: list[CleanField]())


@dataclass
class CleanHasOneRelation:
    """Unique foreign key on the other table."""

    field_name: str | None
    referenced_by_table: str
    is_unique: bool = True
    type: str | None = None
    keys: list[CleanField] = field(default_factory=lambda: list[CleanField]())


@dataclass
class CleanHasManyRelation:
    """Non-unique foreign key on the other table."""

    field_name: str | None
    referenced_by_table: str
    is_unique: bool = False
    type: str | None = None
    keys: list[CleanField] = field(default_factory=lambda: list[CleanField]())


@dataclass
class CleanManyToManyRelation:
    """Relation through a junction table."""

    field_name: str | None
    right_table: str
    junction_table: str = ""
    type: str | None = None


@dataclass
class CleanRelations:
    belongs_to: list[CleanBelongsToRelation] = field(
        default_factory=lambda: list[CleanBelongsToRelation]()
    )
    has_one: list[CleanHasOneRelation] = field(
        default_factory=lambda: list[CleanHasOneRelation]()
    )
    has_many: list[CleanHasManyRelation] = field(
        default_factory=lambda: list[CleanHasManyRelation]()
    )
    many_to_many: list[CleanManyToManyRelation] = field(
        default_factory=lambda: list[CleanManyToManyRelation]()
    )


@dataclass
class TableQueryNames:
    """Operation names resolved from introspection."""

    all: str
    one: str | None = None
    create: str | None = None
    update: str | None = None
    delete: str | None = None


@dataclass
class TableInflection:
    """PostGraphile-generated type and field names for a table."""

    all_rows: str
    condition_type: str
    connection: str
    create_field: str
    create_input_type: str
    create_payload_type: str
    delete_payload_type: str
    edge: str
    filter_type: str | None
    input_type: str
    order_by_type: str
    patch_type: str | None
    table_field_name: str
    table_type: str
    update_payload_type: str | None = None
    delete_by_primary_key: str | None = None
    update_by_primary_key: str | None = None


@dataclass
class ConstraintInfo:
    name: str
    fields: list[CleanField] = field(default_factory=lambda: list[CleanField]())


@dataclass
class TableConstraints:
    primary_key: list[ConstraintInfo] = field(default_factory=lambda: list[ConstraintInfo]())
    foreign_key: list[ConstraintInfo] = field(default_factory=lambda: list[ConstraintInfo]())
    unique: list[ConstraintInfo] = field(default_factory=lambda: list[ConstraintInfo]())


@dataclass
class CleanTable:
    """A database table as exposed through the GraphQL API.

    Produced once by introspection and never mutated by the generators.
    """

    name: str
    fields: list[CleanField] = field(default_factory=lambda: list[CleanField]())
    relations: CleanRelations = field(default_factory=CleanRelations)
    inflection: TableInflection | None = None
    query: TableQueryNames | None = None
    constraints: TableConstraints | None = None

    def get_field(self, name: str) -> CleanField | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def primary_key_fields(self) -> list[CleanField]:
        """Primary key columns, falling back to an ``id`` column."""
        if self.constraints and self.constraints.primary_key:
            return list(self.constraints.primary_key[0].fields)
        id_field = self.get_field("id")
        return [id_field] if id_field else []


# -- Type references and registry ---------------------------------------------


@dataclass
class CleanTypeRef:
    """A possibly wrapped type reference, e.g. ``[String!]!``."""

    kind: str  # SCALAR, OBJECT, INPUT_OBJECT, ENUM, INTERFACE, UNION, LIST, NON_NULL
    name: str | None = None
    of_type: CleanTypeRef | None = None

    def named(self) -> CleanTypeRef:
        """Follow the wrapper chain down to the named type."""
        ref = self
        while ref.of_type is not None:
            ref = ref.of_type
        return ref


@dataclass
class CleanObjectField:
    name: str
    type: CleanTypeRef
    description: str | None = None


@dataclass
class CleanArgument:
    name: str
    type: CleanTypeRef
    default_value: str | None = None
    description: str | None = None


@dataclass
class ResolvedType:
    """A named schema type with its members populated."""

    kind: str  # SCALAR, OBJECT, INPUT_OBJECT, ENUM, INTERFACE, UNION
    name: str
    description: str | None = None
    fields: list[CleanObjectField] = field(default_factory=lambda: list[CleanObjectField]())
    input_fields: list[CleanArgument] = field(default_factory=lambda: list[CleanArgument]())
    enum_values: list[str] = field(default_factory=lambda: list[str]())
    possible_types: list[str] = field(default_factory=lambda: list[str]())


TypeRegistry = dict[str, ResolvedType]


# -- Field selection ----------------------------------------------------------


@dataclass
class SimpleFieldSelection:
    """Custom field selection: explicit fields, relations, exclusions."""

    select: list[str] | None = None
    include: dict[str, bool | list[str]] | None = None
    include_relations: list[str] | None = None
    exclude: list[str] | None = None
    max_depth: Any = None


FieldSelection = str | SimpleFieldSelection | None


@dataclass
class RelationSelection:
    """Nested selection for a relation field."""

    select: dict[str, bool] = field(default_factory=lambda: dict[str, bool]())
    variables: dict[str, Any] = field(default_factory=lambda: dict[str, Any]())


SelectionOptions = dict[str, "bool | RelationSelection"]


# -- JSON loaders -------------------------------------------------------------


def clean_type_ref_from_dict(data: dict[str, Any] | None) -> CleanTypeRef | None:
    """Build a CleanTypeRef from an introspection ``{kind, name, ofType}`` dict."""
    if not data:
        return None
    of_type = cast(dict[str, Any] | None, data.get("ofType", data.get("of_type")))
    return CleanTypeRef(
        kind=str(data.get("kind") or ""),
        name=data.get("name"),
        of_type=clean_type_ref_from_dict(of_type),
    )


def _field_from_dict(data: dict[str, Any]) -> CleanField:
    type_data = cast(dict[str, Any], data.get("type") or {})
    return CleanField(
        name=data["name"],
        type=CleanFieldType(
            gql_type=type_data.get("gqlType") or type_data.get("gql_type") or "String",
            is_array=bool(type_data.get("isArray", type_data.get("is_array", False))),
            is_not_null=bool(type_data.get("isNotNull", type_data.get("is_not_null", False))),
            modifier=type_data.get("modifier"),
            pg_alias=type_data.get("pgAlias"),
            pg_type=type_data.get("pgType", type_data.get("pg_type")),
            subtype=type_data.get("subtype"),
            typmod=type_data.get("typmod"),
        ),
    )


def _get(data: dict[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    if camel in data:
        return data[camel]
    return data.get(snake, default)


def clean_table_from_dict(data: dict[str, Any]) -> CleanTable:
    """Build a CleanTable from the camelCase JSON shape of ``_meta`` tables."""
    rels = cast(dict[str, Any], data.get("relations") or {})

    def keys(rel: dict[str, Any]) -> list[CleanField]:
        return [_field_from_dict(k) for k in rel.get("keys") or []]

    relations = CleanRelations(
        belongs_to=[
            CleanBelongsToRelation(
                field_name=_get(r, "fieldName", "field_name"),
                references_table=_get(r, "referencesTable", "references_table", ""),
                is_unique=bool(_get(r, "isUnique", "is_unique", False)),
                type=r.get("type"),
                keys=keys(r),
            )
            for r in _get(rels, "belongsTo", "belongs_to", []) or []
        ],
        has_one=[
            CleanHasOneRelation(
                field_name=_get(r, "fieldName", "field_name"),
                referenced_by_table=_get(r, "referencedByTable", "referenced_by_table", ""),
                is_unique=bool(_get(r, "isUnique", "is_unique", True)),
                type=r.get("type"),
                keys=keys(r),
            )
            for r in _get(rels, "hasOne", "has_one", []) or []
        ],
        has_many=[
            CleanHasManyRelation(
                field_name=_get(r, "fieldName", "field_name"),
                referenced_by_table=_get(r, "referencedByTable", "referenced_by_table", ""),
                is_unique=bool(_get(r, "isUnique", "is_unique", False)),
                type=r.get("type"),
                keys=keys(r),
            )
            for r in _get(rels, "hasMany", "has_many", []) or []
        ],
        many_to_many=[
            CleanManyToManyRelation(
                field_name=_get(r, "fieldName", "field_name"),
                right_table=_get(r, "rightTable", "right_table", ""),
                junction_table=_get(r, "junctionTable", "junction_table", ""),
                type=r.get("type"),
            )
            for r in _get(rels, "manyToMany", "many_to_many", []) or []
        ],
    )

    query = None
    query_data = cast(dict[str, Any] | None, data.get("query"))
    if query_data:
        query = TableQueryNames(
            all=query_data.get("all") or "",
            one=query_data.get("one"),
            create=query_data.get("create"),
            update=query_data.get("update"),
            delete=query_data.get("delete"),
        )

    constraints = None
    constraint_data = cast(dict[str, Any] | None, data.get("constraints"))
    if constraint_data:
        constraints = TableConstraints(
            primary_key=[
                ConstraintInfo(name=c.get("name", "primary"), fields=[_field_from_dict(f) for f in c.get("fields") or []])
                for c in _get(constraint_data, "primaryKey", "primary_key", []) or []
            ],
        )

    return CleanTable(
        name=data["name"],
        fields=[_field_from_dict(f) for f in data.get("fields") or []],
        relations=relations,
        query=query,
        constraints=constraints,
    )


def tables_from_json(data: Any) -> list[CleanTable]:
    """Accept either a list of tables or ``{"tables": [...]}``."""
    if isinstance(data, dict):
        data = cast(dict[str, Any], data).get("tables") or []
    return [clean_table_from_dict(cast(dict[str, Any], t)) for t in cast(list[Any], data)]
