"""Named parameter normalization, bind-kind inference, and merging.

Parameter keys may be written with or without the leading ``:`` marker;
``{"id": 1}`` and ``{":id": 1}`` name the same parameter. Values are limited to
``int``, ``bool``, ``None`` and ``str``; every accepted value is wrapped in a
`BoundParam` carrying its `BindKind`, so nothing else can reach the driver.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

from .errors import InvalidDataType, InvalidNamedParameter, ParameterKeyCollision
from .types import BindValue, QueryParams

MARKER = ":"


class BindKind(str, Enum):
    """Native bind type of one parameter."""

    INTEGER = "integer"
    BOOLEAN = "boolean"
    NULL = "null"
    STRING = "string"


def normalize_key(key: Any) -> str:
    """Strip leading bind markers from a parameter key."""

    if not isinstance(key, str):
        raise InvalidNamedParameter(f"key {key!r} is not a string")
    name = key.lstrip(MARKER)
    if not name:
        raise InvalidNamedParameter(f"key {key!r} has no name")
    return name


def infer_kind(key: str, value: Any) -> BindKind:
    """Map a runtime value to its bind kind.

    Raises:
        InvalidDataType: Value type has no bind kind (float, bytes, containers, ...).
    """

    # bool first: it is a subclass of int.
    if isinstance(value, bool):
        return BindKind.BOOLEAN
    if isinstance(value, int):
        return BindKind.INTEGER
    if value is None:
        return BindKind.NULL
    if isinstance(value, str):
        return BindKind.STRING
    raise InvalidDataType(key, type(value).__name__)


@dataclass(frozen=True)
class BoundParam:
    """One named parameter with its inferred bind kind."""

    name: str
    value: BindValue
    kind: BindKind

    @classmethod
    def of(cls, key: str, value: Any) -> BoundParam:
        name = normalize_key(key)
        return cls(name, value, infer_kind(name, value))

    @property
    def placeholder(self) -> str:
        return f"{MARKER}{self.name}"


def require_named(parameters: QueryParams) -> Mapping[str, Any]:
    """Return `parameters` as a mapping, rejecting positional collections."""

    if parameters is None:
        return {}
    if not isinstance(parameters, Mapping):
        raise InvalidNamedParameter(f"got {type(parameters).__name__}")
    return parameters


def normalize_params(parameters: QueryParams) -> Dict[str, Any]:
    """Normalize every key of one parameter mapping.

    Raises:
        ParameterKeyCollision: Two keys normalize to the same name.
    """

    normalized: Dict[str, Any] = {}
    for key, value in require_named(parameters).items():
        name = normalize_key(key)
        if name in normalized:
            raise ParameterKeyCollision(name)
        normalized[name] = value
    return normalized


def bind_params(parameters: QueryParams) -> List[BoundParam]:
    """Normalize keys and infer the bind kind of every value."""

    return [BoundParam.of(name, value) for name, value in normalize_params(parameters).items()]


def merge_params(data: QueryParams, parameters: QueryParams) -> Dict[str, Any]:
    """Merge `update` data with sub-query parameters.

    Keys are compared after normalization, so ``"id"`` in one mapping and
    ``":id"`` in the other collide.

    Raises:
        ParameterKeyCollision: A name appears in both mappings.
    """

    merged = normalize_params(data)
    for name, value in normalize_params(parameters).items():
        if name in merged:
            raise ParameterKeyCollision(name)
        merged[name] = value
    return merged


def driver_params(bound: List[BoundParam]) -> Dict[str, BindValue]:
    """Return the plain name -> value mapping passed to DB-API `execute`."""

    return {param.name: param.value for param in bound}
