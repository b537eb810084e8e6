"""Connection string value objects for the supported backends.

Each descriptor renders exactly one canonical DSN string:

- ``mysql:host=HOST;dbname=DB;port=PORT;charset=CHARSET``
- ``mysql:unix_socket=SOCK;dbname=DB;charset=CHARSET``
- ``sqlite:FILENAME``
- ``sqlite::memory:``

Descriptors are frozen dataclasses, so they can be shared freely and used as
dictionary keys.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ...core.errors import InvalidArgument

DEFAULT_CHARSET = "UTF8"


class DSN(ABC):
    """Base class for DSN descriptors."""

    driver: str = ""

    @abstractmethod
    def to_string(self) -> str:
        """Return canonical DSN string."""

    @abstractmethod
    def connect_kwargs(self) -> Dict[str, Any]:
        """Return keyword arguments for the driver's `connect` call."""

    def __str__(self) -> str:
        return self.to_string()


@dataclass(frozen=True)
class Mysql(DSN):
    """MySQL over TCP."""

    database: str
    host: str
    port: Optional[int] = None
    charset: str = DEFAULT_CHARSET

    driver = "mysql"

    def to_string(self) -> str:
        dsn = f"mysql:host={self.host};dbname={self.database};"
        if self.port is not None:
            dsn += f"port={self.port};"
        dsn += f"charset={self.charset};"
        return dsn.rstrip(";")

    def connect_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "host": self.host,
            "database": self.database,
            "charset": self.charset.lower(),
        }
        if self.port is not None:
            kwargs["port"] = self.port
        return kwargs


@dataclass(frozen=True)
class MysqlSocket(DSN):
    """MySQL over a unix domain socket."""

    database: str
    socket: str
    charset: str = DEFAULT_CHARSET

    driver = "mysql"

    def to_string(self) -> str:
        return f"mysql:unix_socket={self.socket};dbname={self.database};charset={self.charset}"

    def connect_kwargs(self) -> Dict[str, Any]:
        return {
            "unix_socket": self.socket,
            "database": self.database,
            "charset": self.charset.lower(),
        }


@dataclass(frozen=True)
class Sqlite(DSN):
    """File-backed SQLite database."""

    filename: str

    driver = "sqlite"

    def to_string(self) -> str:
        return f"sqlite:{self.filename}"

    def connect_kwargs(self) -> Dict[str, Any]:
        return {"database": self.filename}


@dataclass(frozen=True)
class SqliteMemory(DSN):
    """Private in-memory SQLite database."""

    driver = "sqlite"

    def to_string(self) -> str:
        return "sqlite::memory:"

    def connect_kwargs(self) -> Dict[str, Any]:
        return {"database": ":memory:"}


def mysql(
    database: str, host: str, port: Optional[int] = None, charset: str = DEFAULT_CHARSET
) -> Mysql:
    return Mysql(database, host, port, charset)


def mysql_socket(database: str, socket: str, charset: str = DEFAULT_CHARSET) -> MysqlSocket:
    return MysqlSocket(database, socket, charset)


def sqlite(filename: str) -> Sqlite:
    return Sqlite(filename)


def sqlite_memory() -> SqliteMemory:
    return SqliteMemory()


def parse_dsn(text: str) -> DSN:
    """Parse a canonical DSN string back into its descriptor.

    Args:
        text: DSN string in one of the canonical forms.

    Returns:
        Matching DSN descriptor.

    Raises:
        InvalidArgument: Unknown driver prefix or missing required segment.
    """

    driver, sep, rest = text.partition(":")
    if not sep:
        raise InvalidArgument(f"DSN has no driver prefix: {text!r}")

    if driver == "sqlite":
        if rest == ":memory:":
            return SqliteMemory()
        if not rest:
            raise InvalidArgument("sqlite DSN requires a filename.")
        return Sqlite(rest)

    if driver != "mysql":
        raise InvalidArgument(f"Unsupported DSN driver: {driver!r}")

    segments: Dict[str, str] = {}
    for part in rest.split(";"):
        if not part:
            continue
        key, eq, value = part.partition("=")
        if not eq:
            raise InvalidArgument(f"Malformed DSN segment: {part!r}")
        segments[key.strip()] = value.strip()

    database = segments.get("dbname")
    if not database:
        raise InvalidArgument("mysql DSN requires dbname.")
    charset = segments.get("charset", DEFAULT_CHARSET)

    if "unix_socket" in segments:
        return MysqlSocket(database, segments["unix_socket"], charset)

    host = segments.get("host")
    if not host:
        raise InvalidArgument("mysql DSN requires host or unix_socket.")
    port: Optional[int] = None
    if "port" in segments:
        try:
            port = int(segments["port"])
        except ValueError:
            raise InvalidArgument(f"mysql DSN port must be an integer: {segments['port']!r}") from None
    return Mysql(database, host, port, charset)
