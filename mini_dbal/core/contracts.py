"""Core port contracts used by the engine and statement builders."""

from __future__ import annotations

from typing import Any, List, Protocol


class DialectPort(Protocol):
    """Dialect behavior required by statement compilation."""

    name: str
    paramstyle: str

    def q(self, ident: str) -> str: ...

    def placeholder(self, key: str) -> str: ...

    def compile_named(self, sql: str) -> str: ...

    def parameter_names(self, sql: str) -> List[str]: ...

    def truncate_sql(self, table: str) -> str: ...

    def foreign_key_check_sql(self, enabled: bool) -> str: ...


class ConnectionPort(Protocol):
    """Subset of a DB-API 2.0 connection used by the engine."""

    def cursor(self) -> Any: ...

    def close(self) -> None: ...
