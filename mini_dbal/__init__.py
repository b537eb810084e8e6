"""Minimal data-access layer over DB-API drivers."""

from .core import (
    BindKind,
    ConnectionClosed,
    DBError,
    DriverError,
    FetchStyle,
    InvalidArgument,
    InvalidDataType,
    InvalidFetchStyle,
    InvalidNamedParameter,
    ParameterKeyCollision,
    Record,
)
from .ports import DB, DSN, Dialect, MySQLDialect, Mysql, MysqlSocket, SQLiteDialect, Settings, Sqlite, SqliteMemory
from .ports.db_api import dsn

__all__ = [
    "DB",
    "DSN",
    "BindKind",
    "ConnectionClosed",
    "DBError",
    "Dialect",
    "DriverError",
    "FetchStyle",
    "InvalidArgument",
    "InvalidDataType",
    "InvalidFetchStyle",
    "InvalidNamedParameter",
    "MySQLDialect",
    "Mysql",
    "MysqlSocket",
    "ParameterKeyCollision",
    "Record",
    "SQLiteDialect",
    "Settings",
    "Sqlite",
    "SqliteMemory",
    "dsn",
]
