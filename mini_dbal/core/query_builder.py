"""SQL statement skeletons for the CRUD operations.

Every builder emits `:name` placeholders; the engine rewrites them into the
dialect's paramstyle right before execution. Sub-query fragments are raw SQL
supplied by the caller and appended verbatim.
"""

from __future__ import annotations

from typing import Optional, Sequence

from .contracts import DialectPort
from .params import MARKER


def _with_sub_query(sql: str, sub_query: str) -> str:
    sub_query = sub_query.strip()
    if sub_query:
        sql = f"{sql} {sub_query}"
    return f"{sql};"


def compile_select(
    dialect: DialectPort,
    table: str,
    sub_query: str = "",
    columns: Optional[Sequence[str]] = None,
) -> str:
    """Compile `SELECT <columns|*> FROM <table> <sub_query>;`."""

    column_sql = ", ".join(dialect.q(col) for col in columns) if columns else "*"
    return _with_sub_query(f"SELECT {column_sql} FROM {dialect.q(table)}", sub_query)


def compile_insert(dialect: DialectPort, table: str, names: Sequence[str]) -> str:
    """Compile an `INSERT` binding one parameter per column.

    Args:
        dialect: SQL dialect used for identifier quoting.
        table: Target table.
        names: Normalized column names, which double as parameter names.

    Returns:
        SQL statement. `DEFAULT VALUES` form when no column is given.
    """

    table_sql = dialect.q(table)
    if not names:
        return f"INSERT INTO {table_sql} DEFAULT VALUES;"

    column_sql = ", ".join(dialect.q(name) for name in names)
    placeholders = ", ".join(f"{MARKER}{name}" for name in names)
    return f"INSERT INTO {table_sql} ({column_sql}) VALUES ({placeholders});"


def compile_update(
    dialect: DialectPort, table: str, names: Sequence[str], sub_query: str = ""
) -> str:
    """Compile `UPDATE <table> SET <col> = :<col>, ... <sub_query>;`."""

    set_clause = ", ".join(f"{dialect.q(name)} = {MARKER}{name}" for name in names)
    return _with_sub_query(f"UPDATE {dialect.q(table)} SET {set_clause}", sub_query)


def compile_delete(dialect: DialectPort, table: str, sub_query: str = "") -> str:
    """Compile `DELETE FROM <table> <sub_query>;`."""

    return _with_sub_query(f"DELETE FROM {dialect.q(table)}", sub_query)
