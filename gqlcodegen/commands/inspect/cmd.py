"""CLI command for inspecting the tables inferred from a schema."""

from __future__ import annotations

import sys

import click
from rich.table import Table

from gqlcodegen.helpers.console import console, truncate
from gqlcodegen.schema.types import CleanTable


@click.command()
@click.argument("schema_path", type=click.Path(exists=True))
@click.option("--table", "table_name", default=None, help="Show details for a specific table")
def inspect(schema_path: str, table_name: str | None) -> None:
    """Inspect the tables inferred from a schema file."""
    from gqlcodegen.schema.infer_tables import infer_tables_from_introspection
    from gqlcodegen.schema.introspection import IntrospectionError, load_introspection

    try:
        tables = infer_tables_from_introspection(load_introspection(schema_path))
    except IntrospectionError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    if table_name:
        table = next((t for t in tables if t.name == table_name), None)
        if table is None:
            console.print(f"[red]Table {table_name} not found[/red]")
            sys.exit(1)
        _inspect_table(table)
    else:
        _inspect_summary(tables)


def _inspect_summary(tables: list[CleanTable]) -> None:
    table = Table(title=f"Tables ({len(tables)})")
    table.add_column("Name", style="cyan")
    table.add_column("Fields", justify="right")
    table.add_column("Relations", justify="right")
    table.add_column("List query")
    table.add_column("Mutations")

    for t in tables:
        r = t.relations
        relation_count = len(r.belongs_to) + len(r.has_one) + len(r.has_many) + len(r.many_to_many)
        mutations = [m for m in (t.query.create, t.query.update, t.query.delete) if m] if t.query else []
        table.add_row(
            t.name,
            str(len(t.fields)),
            str(relation_count),
            t.query.all if t.query else "",
            truncate(", ".join(mutations), 60),
        )
    console.print(table)


def _inspect_table(t: CleanTable) -> None:
    console.print(f"[bold]Table: {t.name}[/bold]")
    if t.query:
        console.print(f"  Queries: {t.query.all}, {t.query.one}")
        mutations = [m for m in (t.query.create, t.query.update, t.query.delete) if m]
        console.print(f"  Mutations: {', '.join(mutations) or '-'}")
    keys = [f.name for f in t.primary_key_fields()]
    console.print(f"  Primary key: {', '.join(keys) or '-'}")
    console.print()

    fields = Table(title="Fields")
    fields.add_column("Name", style="cyan")
    fields.add_column("Type")
    fields.add_column("Array", justify="center")
    for f in t.fields:
        fields.add_row(f.name, f.type.gql_type, "yes" if f.type.is_array else "")
    console.print(fields)

    relations = Table(title="Relations")
    relations.add_column("Field", style="cyan")
    relations.add_column("Kind")
    relations.add_column("Table")
    for b in t.relations.belongs_to:
        relations.add_row(b.field_name, "belongsTo", b.references_table)
    for h in t.relations.has_one:
        relations.add_row(h.field_name, "hasOne", h.referenced_by_table)
    for m in t.relations.has_many:
        relations.add_row(m.field_name, "hasMany", m.referenced_by_table)
    for mm in t.relations.many_to_many:
        relations.add_row(mm.field_name, "manyToMany", f"{mm.right_table} (via {mm.junction_table})")
    if relations.row_count:
        console.print(relations)
