"""Row shapes selectable through `FetchStyle`."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .errors import InvalidFetchStyle


class FetchStyle(str, Enum):
    """Shape in which result rows are returned.

    - `ASSOC`: dict keyed by column name.
    - `BOTH`: dict keyed by column name and by 0-based column position.
    - `BOUND`: the driver's own row object, untouched.
    - `LAZY`: `Record` allowing attribute, key and index access.
    - `NAMED`: like `ASSOC`, but duplicated column names keep every value in a list.
    - `NUM`: tuple of values.
    - `OBJ`: `SimpleNamespace` with one attribute per column.
    """

    ASSOC = "assoc"
    BOTH = "both"
    BOUND = "bound"
    LAZY = "lazy"
    NAMED = "named"
    NUM = "num"
    OBJ = "obj"


FetchStyleInput = Union[FetchStyle, str]


def normalize_fetch_style(style: Any) -> FetchStyle:
    """Return `FetchStyle` for an enum member or its name/value string."""

    if isinstance(style, FetchStyle):
        return style
    if isinstance(style, str):
        key = style.strip().lower()
        for member in FetchStyle:
            if key == member.value:
                return member
    raise InvalidFetchStyle(style)


class Record:
    """Read-only row accessible as ``row.col``, ``row["col"]`` or ``row[0]``."""

    __slots__ = ("_columns", "_values")

    def __init__(self, columns: Sequence[str], values: Sequence[Any]):
        self._columns = tuple(columns)
        self._values = tuple(values)

    def __getitem__(self, key: Union[int, str]) -> Any:
        if isinstance(key, int):
            return self._values[key]
        try:
            return self._values[self._columns.index(key)]
        except ValueError:
            raise KeyError(key) from None

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__") or name in self.__slots__:
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name) from None

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self):
        return iter(self._values)

    def keys(self) -> Tuple[str, ...]:
        return self._columns

    def as_dict(self) -> Dict[str, Any]:
        return dict(zip(self._columns, self._values))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Record):
            return self._columns == other._columns and self._values == other._values
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._columns, self._values))

    def __repr__(self) -> str:
        fields = ", ".join(f"{col}={val!r}" for col, val in zip(self._columns, self._values))
        return f"Record({fields})"


def column_names(cursor: Any) -> List[str]:
    """Return result column names from `cursor.description`."""

    desc = getattr(cursor, "description", None)
    if not desc:
        raise TypeError("Cursor has no description; cannot name result columns.")
    return [d[0] for d in desc]


def _row_values(row: Any, columns: Sequence[str]) -> Tuple[Any, ...]:
    if isinstance(row, (tuple, list)):
        return tuple(row)
    if isinstance(row, Mapping):
        return tuple(row[col] for col in columns)
    try:
        return tuple(row)
    except TypeError:
        raise TypeError(f"Unsupported row type: {type(row)}") from None


def shape_row(row: Any, columns: Sequence[str], style: FetchStyle) -> Any:
    """Materialize one driver row in the requested style."""

    if style is FetchStyle.BOUND:
        return row

    values = _row_values(row, columns)
    if style is FetchStyle.NUM:
        return values
    if style is FetchStyle.ASSOC:
        return dict(zip(columns, values))
    if style is FetchStyle.OBJ:
        return SimpleNamespace(**dict(zip(columns, values)))
    if style is FetchStyle.LAZY:
        return Record(columns, values)
    if style is FetchStyle.BOTH:
        both: Dict[Union[str, int], Any] = {}
        for index, (col, value) in enumerate(zip(columns, values)):
            both[col] = value
            both[index] = value
        return both
    if style is FetchStyle.NAMED:
        named: Dict[str, Any] = {}
        for col, value in zip(columns, values):
            if col not in named:
                named[col] = value
            elif isinstance(named[col], list):
                named[col].append(value)
            else:
                named[col] = [named[col], value]
        return named
    raise InvalidFetchStyle(style)


def fetch_one(cursor: Any, style: FetchStyle) -> Optional[Any]:
    """Fetch the next row from `cursor`, `None` when exhausted."""

    row = cursor.fetchone()
    if row is None:
        return None
    return shape_row(row, column_names(cursor), style)


def fetch_all(cursor: Any, style: FetchStyle) -> List[Any]:
    """Fetch every remaining row from `cursor`."""

    rows = cursor.fetchall()
    if not rows:
        return []
    columns = column_names(cursor)
    return [shape_row(row, columns, style) for row in rows]
