"""DDL generation utilities for PostgreSQL."""

from __future__ import annotations
import re
from typing import Dict, List
from pathlib import Path
import yaml

from .exceptions import ExportFailed
from .models import ColumnEstimate, Schema
from .value_kind import ValueKind

SQL_TYPES: Dict[ValueKind, str] = {
    ValueKind.INTEGER: "integer",
    ValueKind.FLOAT: "numeric",
    ValueKind.TEXT: "text",
    ValueKind.BOOLEAN: "boolean",
    ValueKind.DATE: "date",
    ValueKind.TIMESTAMP: "timestamp",
    # Only reachable for estimates built by hand; finalize() never yields it
    ValueKind.NULL: "text",
}

PLAIN_IDENTIFIER = re.compile(r'[a-z_][a-z0-9_$]*')


def quote_identifier(name: str) -> str:
    """Double-quote a name unless it is a plain lower-case identifier."""
    if PLAIN_IDENTIFIER.fullmatch(name):
        return name
    return '"' + name.replace('"', '""') + '"'


def sql_type(kind: ValueKind) -> str:
    return SQL_TYPES[kind]


def column_definition(column: ColumnEstimate) -> str:
    col_def = f"{quote_identifier(column.name)} {sql_type(column.kind)}"
    if not column.nullable:
        col_def += " not null"
    return col_def


def drop_table_sql(table_name: str) -> str:
    return f"drop table if exists {quote_identifier(table_name)};"


def create_table_sql(table_name: str, schema: Schema, drop: bool = False) -> str:
    """
    Generate the create table statement for a schema.

    One column per line, indented four spaces. With ``drop`` the
    statement is preceded by ``drop table if exists``.
    """
    columns = ",\n".join(f"    {column_definition(col)}" for col in schema.columns)
    ddl = f"create table {quote_identifier(table_name)} (\n{columns}\n);"
    if drop:
        ddl = f"{drop_table_sql(table_name)}\n{ddl}"
    return ddl


def schema_to_yaml_records(schema: Schema) -> List[Dict]:
    return [
        {"name": col.name, "type": sql_type(col.kind), "nullable": col.nullable}
        for col in schema.columns
    ]


def export_schema_yaml(table_name: str, schema: Schema, output_dir: str) -> Path:
    """Write schema definition to YAML file."""
    path = Path(output_dir) / f"{table_name.lower()}_schema.yaml"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(schema_to_yaml_records(schema), f, sort_keys=False)
    except OSError as e:
        raise ExportFailed(str(path), e.strerror or str(e))
    return path
