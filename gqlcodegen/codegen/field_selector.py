"""Turn field-selection presets and custom specs into per-table field maps.

A selection is either a preset name (``minimal``, ``display``, ``all``,
``full``) or a ``SimpleFieldSelection``. The result maps each selected field
to ``True`` or, for relations, to a nested ``RelationSelection``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Literal, cast

from gqlcodegen.schema.types import (
    CleanTable,
    FieldSelection,
    RelationSelection,
    SelectionOptions,
    SimpleFieldSelection,
)

logger = logging.getLogger(__name__)

PRESETS = ("minimal", "display", "all", "full")

MAX_RELATED_FIELDS = 8

# Display-oriented columns picked first when previewing a related row.
PREFERRED_RELATED_FIELDS = (
    "displayName",
    "fullName",
    "preferredName",
    "nickname",
    "firstName",
    "lastName",
    "username",
    "email",
    "name",
    "title",
    "label",
    "slug",
    "code",
    "createdAt",
    "updatedAt",
)

RelationKind = Literal["belongsTo", "hasOne", "hasMany", "manyToMany"]


@dataclass
class RelationInfo:
    field_name: str
    type: RelationKind
    referenced_table: str | None = None


@dataclass
class SelectionValidation:
    is_valid: bool
    errors: list[str] = field(default_factory=lambda: list[str]())


def as_field_selection(value: Any) -> FieldSelection:
    """Coerce a config value (preset name or camelCase mapping) to a FieldSelection."""
    if value is None or isinstance(value, (str, SimpleFieldSelection)):
        return value
    if isinstance(value, dict):
        data = cast(dict[str, Any], value)
        return SimpleFieldSelection(
            select=data.get("select"),
            include=data.get("include"),
            include_relations=data.get("includeRelations", data.get("include_relations")),
            exclude=data.get("exclude"),
            max_depth=data.get("maxDepth", data.get("max_depth")),
        )
    raise TypeError(f"unsupported field selection: {value!r}")


def convert_to_selection_options(
    table: CleanTable,
    all_tables: list[CleanTable],
    selection: FieldSelection = None,
) -> SelectionOptions | None:
    if not selection:
        return _preset_options(table, "display")
    if isinstance(selection, str):
        return _preset_options(table, selection)
    return _custom_options(table, all_tables, selection)


def _preset_options(table: CleanTable, preset: str) -> SelectionOptions:
    if preset == "minimal":
        names = get_non_relational_fields(table)[:3]
    elif preset == "all":
        names = get_non_relational_fields(table)
    elif preset == "full":
        names = [f.name for f in table.fields]
    else:
        if preset != "display":
            logger.debug("Unknown selection preset %r, using 'display'", preset)
        names = _display_fields(table)
    return {name: True for name in names}


def _display_fields(table: CleanTable) -> list[str]:
    names = get_non_relational_fields(table)
    return names[: max(5, len(names) // 2)]


def _custom_options(
    table: CleanTable,
    all_tables: list[CleanTable],
    selection: SimpleFieldSelection,
) -> SelectionOptions:
    options: SelectionOptions = {}

    base = selection.select if selection.select is not None else get_non_relational_fields(table)
    table_field_names = {f.name for f in table.fields}
    for name in base:
        if name in table_field_names:
            options[name] = True

    for relation in selection.include_relations or []:
        if is_relational_field(relation, table):
            options[relation] = RelationSelection(
                select=_related_table_scalar_fields(relation, table, all_tables)
            )

    for relation, wanted in (selection.include or {}).items():
        if not is_relational_field(relation, table):
            continue
        if wanted is True:
            options[relation] = RelationSelection(
                select=_related_table_scalar_fields(relation, table, all_tables)
            )
        elif isinstance(wanted, list):
            options[relation] = RelationSelection(select={name: True for name in wanted})

    for name in selection.exclude or []:
        options.pop(name, None)

    return options


def get_non_relational_fields(table: CleanTable) -> list[str]:
    return [f.name for f in table.fields if not is_relational_field(f.name, table)]


def is_relational_field(field_name: str, table: CleanTable) -> bool:
    return get_relation_info(field_name, table) is not None


def get_relation_info(field_name: str, table: CleanTable) -> RelationInfo | None:
    """Relation category and target table of ``field_name``, if it is a relation."""
    for info in get_available_relations(table):
        if info.field_name == field_name:
            return info
    return None


def get_available_relations(table: CleanTable) -> list[RelationInfo]:
    rels = table.relations
    relations: list[RelationInfo] = []
    for rel in rels.belongs_to:
        if rel.field_name:
            relations.append(RelationInfo(rel.field_name, "belongsTo", rel.references_table or None))
    for rel in rels.has_one:
        if rel.field_name:
            relations.append(RelationInfo(rel.field_name, "hasOne", rel.referenced_by_table or None))
    for rel in rels.has_many:
        if rel.field_name:
            relations.append(RelationInfo(rel.field_name, "hasMany", rel.referenced_by_table or None))
    for rel in rels.many_to_many:
        if rel.field_name:
            relations.append(RelationInfo(rel.field_name, "manyToMany", rel.right_table or None))
    return relations


def find_related_table(
    relation_field: str,
    table: CleanTable,
    all_tables: list[CleanTable],
) -> CleanTable | None:
    info = get_relation_info(relation_field, table)
    if info is None or not info.referenced_table:
        return None
    for candidate in all_tables:
        if candidate.name == info.referenced_table:
            return candidate
    return None


def _related_table_scalar_fields(
    relation_field: str,
    table: CleanTable,
    all_tables: list[CleanTable],
) -> dict[str, bool]:
    related = find_related_table(relation_field, table, all_tables)
    if related is None:
        return {}

    scalars = get_non_relational_fields(related)
    included: list[str] = []

    def push(name: str) -> None:
        if name in scalars and name not in included and len(included) < MAX_RELATED_FIELDS:
            included.append(name)

    push("id")
    push("nodeId")
    for name in PREFERRED_RELATED_FIELDS:
        push(name)
    for name in scalars:
        push(name)

    return {name: True for name in included}


def validate_field_selection(selection: FieldSelection, table: CleanTable) -> SelectionValidation:
    """Check a custom selection against the table. Presets are always valid."""
    if selection is None or isinstance(selection, str):
        return SelectionValidation(is_valid=True)

    errors: list[str] = []
    table_field_names = {f.name for f in table.fields}

    for name in selection.select or []:
        if name not in table_field_names:
            errors.append(f"Field '{name}' does not exist in table '{table.name}'")

    for name in selection.include_relations or []:
        if not is_relational_field(name, table):
            errors.append(f"Field '{name}' is not a relational field in table '{table.name}'")

    for name in selection.include or {}:
        if not is_relational_field(name, table):
            errors.append(f"Field '{name}' is not a relational field in table '{table.name}'")

    for name in selection.exclude or []:
        if name not in table_field_names:
            errors.append(f"Exclude field '{name}' does not exist in table '{table.name}'")

    if selection.max_depth is not None:
        depth = selection.max_depth
        if isinstance(depth, bool) or not isinstance(depth, (int, float)) or not 0 <= depth <= 5:
            errors.append("maxDepth must be a number between 0 and 5")

    return SelectionValidation(is_valid=not errors, errors=errors)
