"""Query engine over one DB-API connection."""

from __future__ import annotations

import contextlib
import logging
from typing import Any, Iterator, List, Mapping, Optional, Tuple, Type

from ...core.contracts import ConnectionPort
from ...core.errors import ConnectionClosed, DBError, DriverError, InvalidArgument
from ...core.params import bind_params, driver_params, merge_params, normalize_params
from ...core.query_builder import (
    compile_delete,
    compile_insert,
    compile_select,
    compile_update,
)
from ...core.rows import FetchStyle, FetchStyleInput, fetch_all, fetch_one, normalize_fetch_style
from ...core.types import Columns, MaybeRow, QueryParams, Rows
from . import drivers
from .dialects import Dialect
from .dsn import DSN
from .settings import Settings

logger = logging.getLogger(__name__)


def _close_cursor(cur: Any) -> None:
    close = getattr(cur, "close", None)
    if callable(close):
        close()


class DB:
    """CRUD helpers and named-parameter execution over one connection.

    The engine owns its connection: `close()` (or leaving a ``with`` block)
    releases it and every later call raises `ConnectionClosed`. One engine is
    meant for one caller at a time; it does no locking.
    """

    def __init__(
        self,
        dsn: DSN,
        username: str = "",
        password: str = "",
        options: Optional[Mapping[str, Any]] = None,
    ):
        """Open a connection for `dsn`.

        Args:
            dsn: DSN descriptor of the target database.
            username: Login user, ignored by SQLite.
            password: Login password, ignored by SQLite.
            options: Extra driver `connect` keyword arguments, merged over the
                autocommit defaults.

        Raises:
            DriverError: The driver could not open the connection.
        """

        conn, dialect = drivers.connect(dsn, username, password, options)
        self._setup(conn, dialect, (drivers.load_driver(dsn.driver).Error,))

    @classmethod
    def from_connection(cls, conn: ConnectionPort, dialect: Dialect) -> DB:
        """Wrap an already open DB-API connection.

        Driver errors are recognized through the connection's ``Error``
        attribute. Connections without one have their exceptions propagate
        unwrapped.
        """

        db = cls.__new__(cls)
        error_type = getattr(conn, "Error", None)
        error_types: Tuple[Type[BaseException], ...] = ()
        if isinstance(error_type, type) and issubclass(error_type, Exception):
            error_types = (error_type,)
        db._setup(conn, dialect, error_types)
        return db

    @classmethod
    def from_settings(cls, settings: Settings) -> DB:
        """Open a connection described by `settings` and apply its fetch style."""

        db = cls(settings.dsn, settings.username, settings.password, settings.options)
        db.set_fetch_style(settings.fetch_style)
        return db

    def _setup(
        self,
        conn: ConnectionPort,
        dialect: Dialect,
        error_types: Tuple[Type[BaseException], ...],
    ) -> None:
        self.conn: Any | None = conn
        self.dialect = dialect
        self._error_types = error_types
        self._fetch_style = FetchStyle.OBJ
        self._closed = False

    def _require_open_connection(self) -> Any:
        if self._closed or self.conn is None:
            raise ConnectionClosed()
        return self.conn

    @contextlib.contextmanager
    def _driver_errors(self) -> Iterator[None]:
        try:
            yield
        except DBError:
            raise
        except self._error_types as exc:
            raise DriverError.from_exception(exc) from exc

    @property
    def connection(self) -> Any:
        """Underlying DB-API connection."""

        return self._require_open_connection()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def fetch_style(self) -> FetchStyle:
        return self._fetch_style

    def set_fetch_style(self, style: FetchStyleInput) -> None:
        """Set default row shape for `fetch`/`fetch_all`.

        Raises:
            InvalidFetchStyle: `style` is not a `FetchStyle` member or name.
        """

        self._fetch_style = normalize_fetch_style(style)

    def _resolve_style(self, style: Optional[FetchStyleInput]) -> FetchStyle:
        if style is None:
            return self._fetch_style
        return normalize_fetch_style(style)

    def execute(self, sql: str, parameters: QueryParams = None) -> Any:
        """Execute SQL with named parameters and return the cursor.

        Keys may be given with or without the leading ``:``. Every value must
        be ``int``, ``bool``, ``None`` or ``str``.

        Raises:
            InvalidNamedParameter: `parameters` is not a name-keyed mapping.
            InvalidDataType: A value has an unsupported type.
            DriverError: The driver rejected the statement.
        """

        conn = self._require_open_connection()
        bound = bind_params(parameters)
        names = [p.name for p in bound]
        logger.debug("Executing %s with parameters %s", sql, names)
        if bound and self.dialect.paramstyle != "named":
            # Every placeholder needs a value before `%` formatting.
            missing = [name for name in self.dialect.parameter_names(sql) if name not in names]
            if missing:
                raise DriverError(
                    "No value supplied for parameter(s): "
                    + ", ".join(f":{name}" for name in missing)
                )
        with self._driver_errors():
            cur = conn.cursor()
            try:
                if bound:
                    cur.execute(self.dialect.compile_named(sql), driver_params(bound))
                else:
                    cur.execute(sql)
            except BaseException:
                _close_cursor(cur)
                raise
        return cur

    def query(self, sql: str, parameters: QueryParams = None) -> Any:
        """Alias of `execute`."""

        return self.execute(sql, parameters)

    def _raw_query(self, sql: str) -> None:
        conn = self._require_open_connection()
        logger.debug("Executing raw %s", sql)
        with self._driver_errors():
            cur = conn.cursor()
            try:
                cur.execute(sql)
            finally:
                _close_cursor(cur)

    def fetch(
        self,
        table: str,
        sub_query: str = "",
        parameters: QueryParams = None,
        columns: Columns = None,
        *,
        style: Optional[FetchStyleInput] = None,
    ) -> MaybeRow:
        """Return the first row of ``SELECT ... FROM table sub_query``, or `None`."""

        row_style = self._resolve_style(style)
        cur = self.execute(compile_select(self.dialect, table, sub_query, columns), parameters)
        with self._driver_errors():
            return fetch_one(cur, row_style)

    def fetch_all(
        self,
        table: str,
        sub_query: str = "",
        parameters: QueryParams = None,
        columns: Columns = None,
        *,
        style: Optional[FetchStyleInput] = None,
    ) -> Rows:
        """Return every row of ``SELECT ... FROM table sub_query``."""

        row_style = self._resolve_style(style)
        cur = self.execute(compile_select(self.dialect, table, sub_query, columns), parameters)
        with self._driver_errors():
            return fetch_all(cur, row_style)

    def insert(self, table: str, data: QueryParams) -> None:
        """Insert one row; each key of `data` is a column and a parameter name."""

        params = normalize_params(data)
        self.execute(compile_insert(self.dialect, table, list(params)), params)

    def update(
        self,
        table: str,
        data: QueryParams,
        sub_query: str = "",
        parameters: QueryParams = None,
    ) -> None:
        """Update rows matched by `sub_query`.

        Raises:
            InvalidArgument: `data` is empty.
            ParameterKeyCollision: A key of `data` is also a key of
                `parameters`; nothing is executed.
        """

        names: List[str] = list(normalize_params(data))
        if not names:
            raise InvalidArgument("Cannot UPDATE without data.")
        merged = merge_params(data, parameters)
        self.execute(compile_update(self.dialect, table, names, sub_query), merged)

    def delete(self, table: str, sub_query: str = "", parameters: QueryParams = None) -> None:
        """Delete rows matched by `sub_query` (every row when empty)."""

        self.execute(compile_delete(self.dialect, table, sub_query), parameters)

    def set_foreign_key_check(self, enabled: bool) -> None:
        """Turn session foreign-key enforcement on or off."""

        self._raw_query(self.dialect.foreign_key_check_sql(enabled))

    @contextlib.contextmanager
    def foreign_key_checks_disabled(self) -> Iterator[None]:
        """Disable foreign-key checks for the block, re-enabling on every exit."""

        self.set_foreign_key_check(False)
        try:
            yield
        except BaseException:
            try:
                self.set_foreign_key_check(True)
            except DBError:
                logger.warning("Failed to re-enable foreign key checks", exc_info=True)
            raise
        self.set_foreign_key_check(True)

    def truncate(self, table: str, force: bool = False) -> None:
        """Remove every row of `table`.

        Args:
            table: Table to empty.
            force: Skip foreign-key checks while truncating.
        """

        sql = self.dialect.truncate_sql(table)
        if not force:
            self._raw_query(sql)
            return
        with self.foreign_key_checks_disabled():
            self._raw_query(sql)

    def close(self) -> None:
        """Release the connection. Closing twice is a no-op."""

        if self._closed:
            return
        conn = self.conn
        self._closed = True
        self.conn = None
        if conn is None:
            return
        close = getattr(conn, "close", None)
        if callable(close):
            with self._driver_errors():
                close()
        logger.info("Closed %s connection", self.dialect.name)

    def __enter__(self) -> DB:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()
