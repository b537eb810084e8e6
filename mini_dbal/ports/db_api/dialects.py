"""Concrete SQL dialect implementations for DB-API adapters."""

from __future__ import annotations

import re
from typing import List

# Quoted literals, identifiers and comments (including MySQL ``#`` comments)
# are matched first so that placeholders inside them are left alone.
_NAMED_PARAM_RE = re.compile(
    r"""
    (?P<squote>'(?:[^'\\]|\\.|'')*') |
    (?P<dquote>"(?:[^"\\]|\\.|"")*") |
    (?P<bquote>`[^`]*`) |
    (?P<line_comment>--[^\r\n]*) |
    (?P<hash_comment>\#[^\r\n]*) |
    (?P<block_comment>/\*(?:[^*]|\*(?!/))*\*/) |
    (?P<cast>::\w+) |
    (?P<named>(?<!\w):(?P<name>[A-Za-z_]\w*))
    """,
    re.VERBOSE | re.DOTALL,
)


class Dialect:
    """Base dialect that defines SQL quoting and placeholder behavior."""

    name: str = "generic"
    paramstyle: str = "named"
    quote_char: str = '"'

    def q(self, ident: str) -> str:
        """Quote SQL identifier."""

        escaped = ident.replace(self.quote_char, self.quote_char * 2)
        return f"{self.quote_char}{escaped}{self.quote_char}"

    def placeholder(self, key: str) -> str:
        """Return parameter placeholder for current param style."""

        if self.paramstyle == "named":
            return f":{key}"
        if self.paramstyle == "pyformat":
            return f"%({key})s"
        raise ValueError(f"Unsupported paramstyle: {self.paramstyle}")

    def compile_named(self, sql: str) -> str:
        """Rewrite `:name` placeholders into this dialect's paramstyle.

        Only called for statements that carry parameters.
        """

        if self.paramstyle == "named":
            return sql
        if self.paramstyle != "pyformat":
            raise ValueError(f"Unsupported paramstyle: {self.paramstyle}")

        def _replace(match: re.Match[str]) -> str:
            name = match.group("name")
            if name is not None:
                return self.placeholder(name)
            return match.group(0).replace("%", "%%")

        parts = []
        last = 0
        for match in _NAMED_PARAM_RE.finditer(sql):
            parts.append(sql[last : match.start()].replace("%", "%%"))
            parts.append(_replace(match))
            last = match.end()
        parts.append(sql[last:].replace("%", "%%"))
        return "".join(parts)

    def parameter_names(self, sql: str) -> List[str]:
        """Return `:name` placeholders of `sql` outside literals and comments."""

        names: List[str] = []
        for match in _NAMED_PARAM_RE.finditer(sql):
            name = match.group("name")
            if name is not None and name not in names:
                names.append(name)
        return names

    def truncate_sql(self, table: str) -> str:
        """Return statement removing every row of `table`."""

        return f"TRUNCATE {self.q(table)};"

    def foreign_key_check_sql(self, enabled: bool) -> str:
        """Return session statement toggling foreign-key enforcement."""

        return f"SET FOREIGN_KEY_CHECKS={int(enabled)};"


class SQLiteDialect(Dialect):
    """SQLite dialect (`:name` parameters, no `TRUNCATE`)."""

    name = "sqlite"
    paramstyle = "named"
    quote_char = '"'

    def truncate_sql(self, table: str) -> str:
        return f"DELETE FROM {self.q(table)};"

    def foreign_key_check_sql(self, enabled: bool) -> str:
        return f"PRAGMA foreign_keys = {'ON' if enabled else 'OFF'};"


class MySQLDialect(Dialect):
    """MySQL dialect (`%(name)s` parameters, backtick identifiers)."""

    name = "mysql"
    paramstyle = "pyformat"
    quote_char = "`"
