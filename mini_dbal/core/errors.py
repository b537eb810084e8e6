"""Exception hierarchy raised by the data-access layer.

Driver exceptions never escape unwrapped: they surface as `DriverError` with
the original exception chained as ``__cause__``.
"""

from __future__ import annotations

from typing import Any, Optional


class DBError(Exception):
    """Base exception for all mini-dbal errors."""


class DriverError(DBError):
    """Raised when the underlying DB-API driver reports a failure."""

    def __init__(self, message: str, code: Any = None) -> None:
        self.message = message
        self.code = code
        super().__init__(message)

    @classmethod
    def from_exception(cls, exc: BaseException) -> DriverError:
        """Copy message and code verbatim from a driver exception."""

        return cls(_driver_message(exc), _driver_code(exc))


class ConnectionClosed(DBError, RuntimeError):
    """Raised when an operation is attempted on a closed connection."""

    def __init__(self) -> None:
        super().__init__("connection is closed")


class InvalidArgument(DBError, ValueError):
    """Raised when a caller-supplied argument is rejected before execution."""


class InvalidFetchStyle(InvalidArgument):
    """Raised when a fetch style is not one of the supported styles."""

    def __init__(self, style: Any) -> None:
        self.style = style
        super().__init__(f"Illegal fetch style: {style!r}")


class InvalidNamedParameter(InvalidArgument):
    """Raised when parameters are not a mapping keyed by name."""

    def __init__(self, detail: str = "") -> None:
        message = "Given data must have named parameters"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ParameterKeyCollision(InvalidArgument):
    """Raised when `update` data and sub-query parameters share a key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(
            f"Parameter key collision, key '{key}' exists in data and sub query parameters."
        )


class InvalidDataType(DBError, TypeError):
    """Raised when a bind value has a type with no bind kind."""

    def __init__(self, key: str, type_name: str) -> None:
        self.key = key
        self.type_name = type_name
        super().__init__(
            f"Illegal data type for key '{key}', data type given '{type_name}'"
        )


def _driver_code(exc: BaseException) -> Optional[Any]:
    # sqlite3 (3.11+) exposes the extended result code.
    code = getattr(exc, "sqlite_errorcode", None)
    if code is not None:
        return code
    # pymysql: args == (errno, message).
    args = getattr(exc, "args", ())
    if args and isinstance(args[0], int) and not isinstance(args[0], bool):
        return args[0]
    return None


def _driver_message(exc: BaseException) -> str:
    args = getattr(exc, "args", ())
    if len(args) >= 2 and isinstance(args[0], int) and isinstance(args[1], str):
        return args[1]
    return str(exc)
