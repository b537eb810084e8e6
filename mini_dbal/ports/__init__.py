"""Public port exports for concrete adapter implementations."""

from .db_api import DB, DSN, Dialect, MySQLDialect, Mysql, MysqlSocket, SQLiteDialect, Settings, Sqlite, SqliteMemory

__all__ = [
    "DB",
    "DSN",
    "Dialect",
    "SQLiteDialect",
    "MySQLDialect",
    "Mysql",
    "MysqlSocket",
    "Settings",
    "Sqlite",
    "SqliteMemory",
]
