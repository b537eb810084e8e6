"""Public core API for parameter binding, row shapes, and statement building."""

from .errors import (
    ConnectionClosed,
    DBError,
    DriverError,
    InvalidArgument,
    InvalidDataType,
    InvalidFetchStyle,
    InvalidNamedParameter,
    ParameterKeyCollision,
)
from .params import BindKind, BoundParam, bind_params, merge_params, normalize_key
from .query_builder import compile_delete, compile_insert, compile_select, compile_update
from .rows import FetchStyle, Record, normalize_fetch_style

__all__ = [
    "BindKind",
    "BoundParam",
    "ConnectionClosed",
    "DBError",
    "DriverError",
    "FetchStyle",
    "InvalidArgument",
    "InvalidDataType",
    "InvalidFetchStyle",
    "InvalidNamedParameter",
    "ParameterKeyCollision",
    "Record",
    "bind_params",
    "compile_delete",
    "compile_insert",
    "compile_select",
    "compile_update",
    "merge_params",
    "normalize_fetch_style",
    "normalize_key",
]
