"""Detect arrays of objects that can be rendered as a table."""

from __future__ import annotations

from typing import Any, NamedTuple

from toonlite.encoding.primitives import is_primitive


class UniformityVerdict(NamedTuple):
    is_uniform: bool
    keys: list[str] | None = None


NOT_UNIFORM = UniformityVerdict(False)


def is_uniform_object_array(arr: list[Any]) -> UniformityVerdict:
    """Check that every element is an object with the same keys and only scalars.

    Column order comes from the first element; the others may list the same
    keys in any order.
    """
    if not arr:
        return NOT_UNIFORM
    if not all(isinstance(item, dict) for item in arr):
        return NOT_UNIFORM

    keys = list(arr[0].keys())
    for item in arr:
        if len(item) != len(keys) or any(key not in item for key in keys):
            return NOT_UNIFORM

    for item in arr:
        if not all(is_primitive(item[key]) for key in keys):
            return NOT_UNIFORM

    return UniformityVerdict(True, keys)
