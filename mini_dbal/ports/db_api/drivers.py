"""Open DB-API connections for DSN descriptors.

`sqlite` DSNs use the standard library `sqlite3` module; `mysql` DSNs use
`pymysql`, imported on first use.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from ...core.errors import DriverError, InvalidArgument
from .dialects import Dialect, MySQLDialect, SQLiteDialect
from .dsn import DSN

logger = logging.getLogger(__name__)

_DRIVER_MODULES = {
    "sqlite": ("sqlite3", "sqlite3 ships with CPython"),
    "mysql": ("pymysql", "Install with `pip install pymysql`."),
}

# Autocommit by default: each statement takes effect as soon as it returns.
DEFAULT_OPTIONS: Dict[str, Dict[str, Any]] = {
    "sqlite": {"isolation_level": None},
    "mysql": {"autocommit": True},
}

_DIALECTS: Dict[str, Type[Dialect]] = {
    "sqlite": SQLiteDialect,
    "mysql": MySQLDialect,
}


def _require_known(driver: str) -> None:
    if driver not in _DRIVER_MODULES:
        raise InvalidArgument(f"Unsupported DSN driver: {driver!r}")


def load_driver(driver: str) -> Any:
    """Import and return the DB-API module for a DSN driver prefix."""

    _require_known(driver)
    module_name, hint = _DRIVER_MODULES[driver]
    try:
        return importlib.import_module(module_name)
    except ImportError as exc:  # pragma: no cover - env dependent
        raise ImportError(f"{module_name} is required for {driver} DSNs. {hint}") from exc


def dialect_for(dsn: DSN) -> Dialect:
    """Return the dialect matching the DSN driver prefix."""

    _require_known(dsn.driver)
    return _DIALECTS[dsn.driver]()


def connect_kwargs(
    dsn: DSN,
    username: str = "",
    password: str = "",
    options: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Build `connect` keyword arguments: DSN fields, credentials, options.

    Caller options override the driver defaults.
    """

    _require_known(dsn.driver)
    kwargs = dsn.connect_kwargs()
    if dsn.driver == "mysql":
        kwargs["user"] = username
        kwargs["password"] = password
    kwargs.update(DEFAULT_OPTIONS[dsn.driver])
    kwargs.update(options or {})
    return kwargs


def connect(
    dsn: DSN,
    username: str = "",
    password: str = "",
    options: Optional[Mapping[str, Any]] = None,
) -> Tuple[Any, Dialect]:
    """Open a connection for `dsn`.

    Returns:
        The DB-API connection and its dialect.

    Raises:
        DriverError: The driver refused the connection.
    """

    module = load_driver(dsn.driver)
    kwargs = connect_kwargs(dsn, username, password, options)
    try:
        conn = module.connect(**kwargs)
    except module.Error as exc:
        raise DriverError.from_exception(exc) from exc
    logger.info("Opened %s connection", dsn.driver)
    return conn, dialect_for(dsn)
