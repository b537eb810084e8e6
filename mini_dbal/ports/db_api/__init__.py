"""DB-API engine, DSN descriptors, and dialect exports."""

from .database import DB
from .dialects import Dialect, MySQLDialect, SQLiteDialect
from .dsn import DSN, Mysql, MysqlSocket, Sqlite, SqliteMemory, parse_dsn
from .settings import Settings

__all__ = [
    "DB",
    "DSN",
    "Dialect",
    "Mysql",
    "MySQLDialect",
    "MysqlSocket",
    "SQLiteDialect",
    "Settings",
    "Sqlite",
    "SqliteMemory",
    "parse_dsn",
]
