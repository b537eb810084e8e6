"""Shared core type aliases used across contracts, engine, and ports."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Union

BindValue = Union[int, bool, None, str]
QueryParams = Optional[Mapping[str, Any]]
Columns = Optional[Sequence[str]]

Row = Any
Rows = List[Row]
MaybeRow = Optional[Row]
