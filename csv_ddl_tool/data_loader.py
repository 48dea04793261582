"""Bulk-load directive for the generated table."""

from __future__ import annotations
from pathlib import Path
from typing import Sequence

from .ddl_generator import quote_identifier


def sql_literal(value: str) -> str:
    """Single-quoted SQL string literal."""
    return "'" + value.replace("'", "''") + "'"


def copy_from_file_sql(
    table_name: str,
    source_path: Path,
    columns: Sequence[str],
    delimiter: str = ",",
    has_header: bool = True,
    null_sentinel: str = "",
) -> str:
    """
    psql ``\\copy`` that loads the source file into the table.

    The column list pins the load to the inferred column order, which
    matters when names came from ``--columns`` rather than the header.
    """
    column_list = ", ".join(quote_identifier(name) for name in columns)
    delimiter_literal = "E'\\t'" if delimiter == "\t" else sql_literal(delimiter)
    options = [
        "format csv",
        f"delimiter {delimiter_literal}",
        f"header {'true' if has_header else 'false'}",
        f"null {sql_literal(null_sentinel)}",
    ]
    return (
        f"\\copy {quote_identifier(table_name)} ({column_list}) "
        f"from {sql_literal(str(source_path))} with ({', '.join(options)});"
    )
