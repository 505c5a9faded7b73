"""Flatten nested objects into one level of short compound keys.

``{"customer": {"name": "Ann"}, "items": [{"sku": "A"}]}`` becomes
``{"c_n": "Ann", "i0_s": "A"}``. Segments are joined with ``_``, which most
tokenizers fold into the next word where ``.`` costs a token of its own.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from toonlite.encoding.keys import shorten_key

DEFAULT_MAX_DEPTH = 10


class KeyCollision(BaseModel):
    """Two source paths that flattened to the same key; the later one won."""

    model_config = ConfigDict(frozen=True)

    key: str
    first_path: str
    second_path: str


class _FlattenState:
    __slots__ = ("out", "sources", "collisions")

    def __init__(self) -> None:
        self.out: dict[str, Any] = {}
        self.sources: dict[str, str] = {}
        self.collisions: list[KeyCollision] = []

    def store(self, key: str, value: Any, path: list[str]) -> None:
        source = ".".join(path)
        if key in self.out:
            self.collisions.append(KeyCollision(key=key, first_path=self.sources[key], second_path=source))
        self.out[key] = value
        self.sources[key] = source


def flatten_object(
    obj: dict[str, Any],
    prefix: str = "",
    max_depth: int = DEFAULT_MAX_DEPTH,
    *,
    collisions: list[KeyCollision] | None = None,
) -> dict[str, Any]:
    """Flatten ``obj`` into a single-level mapping.

    Later keys that collide with earlier ones overwrite them. Pass a list as
    ``collisions`` to have every overwrite appended to it.
    """
    state = _FlattenState()
    _flatten(obj, prefix, max_depth, [], state)
    if collisions is not None:
        collisions.extend(state.collisions)
    return state.out


def _flatten(
    obj: dict[str, Any], prefix: str, max_depth: int, path: list[str], state: _FlattenState
) -> None:
    for key, value in obj.items():
        short = shorten_key(key, prefix)
        new_key = f"{prefix}_{short}" if prefix else short
        here = [*path, key]

        if isinstance(value, list):
            if value and max_depth > 0:
                _flatten_list(value, new_key, max_depth, here, state)
            else:
                state.store(new_key, value, here)
        elif isinstance(value, dict):
            _flatten(value, new_key, max_depth, here, state)
        else:
            state.store(new_key, value, here)


def _flatten_list(
    items: list[Any], base: str, max_depth: int, path: list[str], state: _FlattenState
) -> None:
    for index, item in enumerate(items):
        indexed = f"{base}{index}"
        item_path = [*path, str(index)]
        if isinstance(item, dict):
            _flatten(item, indexed, max_depth - 1, item_path, state)
        elif isinstance(item, list):
            for sub_index, sub_item in enumerate(item):
                sub_key = f"{indexed}_{sub_index}"
                sub_path = [*item_path, str(sub_index)]
                if isinstance(sub_item, dict):
                    _flatten(sub_item, sub_key, max_depth - 1, sub_path, state)
                else:
                    state.store(sub_key, sub_item, sub_path)
        else:
            state.store(indexed, item, item_path)


def find_flatten_collisions(
    rows: list[Any], max_depth: int = DEFAULT_MAX_DEPTH
) -> list[KeyCollision]:
    """Collect flatten collisions for every object in ``rows``."""
    found: list[KeyCollision] = []
    for row in rows:
        if isinstance(row, dict):
            flatten_object(row, max_depth=max_depth, collisions=found)
    return found
