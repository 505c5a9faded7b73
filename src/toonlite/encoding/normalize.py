"""Bring host values into the JSON data model before encoding."""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Mapping
from datetime import date, time
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel

from toonlite.contracts.common import CyclicStructureError, UnsupportedTypeError
from toonlite.encoding.primitives import format_number


def normalize_value(value: Any) -> Any:
    """Return ``value`` as plain None/bool/int/float/str/list/dict.

    Raises:
        CyclicStructureError: a list or mapping contains itself.
        UnsupportedTypeError: a value has no JSON counterpart.
    """
    return _normalize(value, set(), "$")


def _normalize(value: Any, active: set[int], path: str) -> Any:
    if value is None:
        return None
    if isinstance(value, Enum):
        return _normalize(value.value, active, path)
    if isinstance(value, str):
        return str(value)
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return float(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            return math.nan
        if value == value.to_integral_value():
            return int(value)
        return float(value)
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, BaseModel):
        return _normalize(value.model_dump(mode="json"), active, path)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _normalize(
            {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}, active, path
        )

    if isinstance(value, (list, tuple, Mapping)):
        marker = id(value)
        if marker in active:
            raise CyclicStructureError(f"Cyclic reference at {path}")
        active.add(marker)
        try:
            if isinstance(value, Mapping):
                return {
                    _normalize_key(k, path): _normalize(v, active, f"{path}.{k}")
                    for k, v in value.items()
                }
            return [_normalize(v, active, f"{path}[{i}]") for i, v in enumerate(value)]
        finally:
            active.discard(marker)

    raise UnsupportedTypeError(f"Cannot encode {type(value).__name__} at {path}")


def _normalize_key(key: Any, path: str) -> str:
    if isinstance(key, str):
        return str(key)
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    if isinstance(key, (int, float)):
        return format_number(key)
    raise UnsupportedTypeError(f"Cannot use {type(key).__name__} as a key at {path}")
