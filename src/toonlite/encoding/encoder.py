"""Core TOON encoding: arrays, tables, objects, and the ``encode`` entry point.

Output shapes:

- ``key:value`` pairs joined by ``,`` for objects, ``key{...}`` for nesting
- ``key[N]a,b,c`` for list-form arrays, ``[0]`` when empty
- ``key[N]{col1,col2}:`` followed by one delimited row per element for
  uniform arrays of objects
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

from toonlite.contracts.common import KeyCollisionError
from toonlite.contracts.options import EncodeOptions
from toonlite.encoding.flatten import KeyCollision, flatten_object
from toonlite.encoding.normalize import normalize_value
from toonlite.encoding.primitives import encode_primitive, is_primitive, null_token
from toonlite.encoding.quoting import encode_key, escape_quotes, looks_like_literal
from toonlite.encoding.uniform import is_uniform_object_array

DEFAULT_OPTIONS = EncodeOptions()

OptionsLike = Union[EncodeOptions, Mapping[str, Any], None]


def coerce_options(options: OptionsLike) -> EncodeOptions:
    """Accept an ``EncodeOptions``, a mapping of option fields, or ``None``."""
    if options is None:
        return DEFAULT_OPTIONS
    if isinstance(options, EncodeOptions):
        return options
    return EncodeOptions.model_validate(dict(options))


def encode(value: Any, options: OptionsLike = None) -> str:
    """Encode a value into TOON text.

    Args:
        value: JSON-like value. Tuples, mappings, pydantic models, dataclasses,
            dates, decimals and enums are converted first.
        options: Encoding options, a mapping of option fields, or ``None``.

    Returns:
        TOON-formatted string.

    Raises:
        UnsupportedTypeError: the value holds something with no JSON form.
        CyclicStructureError: the value contains itself.
        KeyCollisionError: ``strict_keys`` is set and flattening lost a column.
    """
    opts = coerce_options(options)
    return encode_value(normalize_value(value), opts)



def encode_value(
    value: Any,
    options: EncodeOptions,
    *,
    collisions: list[KeyCollision] | None = None,
) -> str:
    """Encode an already-normalized value.

    Flattening collisions found along the way are appended to ``collisions``
    when a list is given.
    """
    if value is None:
        return null_token(options)
    if isinstance(value, list):
        return encode_array(value, "", options, collisions=collisions)
    if isinstance(value, dict):
        return encode_object(value, options, collisions=collisions)
    return encode_primitive(value, options)


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------
def encode_array(
    arr: list[Any],
    key_name: str = "",
    options: EncodeOptions = DEFAULT_OPTIONS,
    *,
    collisions: list[KeyCollision] | None = None,
) -> str:
    """Encode an array, as a table when its shape allows."""
    return _encode_array(arr, key_name, options, collisions)[0]


def _encode_array(
    arr: list[Any],
    key_name: str,
    options: EncodeOptions,
    collisions: list[KeyCollision] | None,
) -> tuple[str, bool]:
    """Return the rendering and whether it carries its own ``key[N]{...}:`` header."""
    if not arr:
        return "[0]", False

    if options.tabular:
        if options.flatten and all(isinstance(item, dict) for item in arr):
            rows, keys = flatten_rows(arr, options, collisions=collisions)
            return encode_tabular(rows, keys, key_name, options, collisions=collisions), bool(key_name)

        verdict = is_uniform_object_array(arr)
        if verdict.is_uniform and verdict.keys:
            return encode_tabular(arr, verdict.keys, key_name, options), bool(key_name)

    return encode_list(arr, options, collisions=collisions), False


def encode_list(
    arr: list[Any],
    options: EncodeOptions,
    *,
    collisions: list[KeyCollision] | None = None,
) -> str:
    values: list[str] = []
    for item in arr:
        if isinstance(item, list):
            values.append(_encode_array(item, "", options, collisions)[0])
        elif isinstance(item, dict):
            values.append(f"{{{encode_object(item, options, collisions=collisions)}}}")
        else:
            values.append(encode_primitive(item, options))
    space = " " if options.readable else ""
    return f"[{len(arr)}]{space}{options.separator.join(values)}"


def flatten_rows(
    arr: list[dict[str, Any]],
    options: EncodeOptions,
    *,
    collisions: list[KeyCollision] | None = None,
) -> tuple[list[dict[str, Any]], list[str]]:
    """Flatten each object and pad the rows to the union of their keys.

    Raises:
        KeyCollisionError: ``strict_keys`` is set and two source paths landed
            on the same column.
    """
    found: list[KeyCollision] = []
    flattened = [
        flatten_object(item, max_depth=options.max_flatten_depth, collisions=found)
        for item in arr
    ]
    if found and options.strict_keys:
        first = found[0]
        raise KeyCollisionError(
            f"Flattened key '{first.key}' produced by both "
            f"'{first.first_path}' and '{first.second_path}'"
        )
    if collisions is not None:
        collisions.extend(found)

    keys: dict[str, None] = {}
    for row in flattened:
        keys.update(dict.fromkeys(row))
    all_keys = list(keys)
    rows = [{key: row.get(key) for key in all_keys} for row in flattened]
    return rows, all_keys


def encode_tabular(
    rows: list[dict[str, Any]],
    keys: list[str],
    key_name: str = "",
    options: EncodeOptions = DEFAULT_OPTIONS,
    *,
    collisions: list[KeyCollision] | None = None,
) -> str:
    """Render rows as a header plus one delimited line per row.

    With a ``key_name`` the header is ``key[N]{a,b}:`` and the column names are
    not repeated; without one the first line is the delimited column names.
    """
    delimiter = options.table_delimiter
    lines = [
        delimiter.join(
            encode_cell(row[key], options, delimiter, collisions=collisions) for key in keys
        )
        for row in rows
    ]
    if key_name:
        header = f"{key_name}[{len(rows)}]{{{','.join(keys)}}}:"
    else:
        header = delimiter.join(keys)
    return "\n".join([header, *lines])


def encode_cell(
    value: Any,
    options: EncodeOptions,
    delimiter: str,
    *,
    collisions: list[KeyCollision] | None = None,
) -> str:
    """Encode one table cell.

    Quoting is looser than for inline values since a cell only has to stand
    apart from its neighbours. Empty strings and text holding the delimiter
    stay quoted. Line breaks are always escaped and quoted so each row stays
    on one line.
    """
    if not is_primitive(value):
        if not value:
            return null_token(options)
        if isinstance(value, dict):
            return f"{{{encode_object(value, options, collisions=collisions)}}}"
        return encode_list(value, options, collisions=collisions)

    if isinstance(value, str) and ("\n" in value or "\r" in value):
        escaped = escape_quotes(value).replace("\n", "\\n").replace("\r", "\\r")
        return f'"{escaped}"'

    encoded = encode_primitive(value, options, delimiter)
    if len(encoded) >= 2 and encoded[0] == '"' and encoded[-1] == '"':
        inner = encoded[1:-1]
        if (
            inner
            and "\t" not in inner
            and '"' not in inner
            and delimiter not in inner
            and not looks_like_literal(inner)
        ):
            return inner
    return encoded


# ---------------------------------------------------------------------------
# Objects
# ---------------------------------------------------------------------------
def encode_object(
    obj: dict[str, Any],
    options: EncodeOptions = DEFAULT_OPTIONS,
    *,
    collisions: list[KeyCollision] | None = None,
) -> str:
    """Encode an object as ``key:value`` pairs. Empty objects give ``""``."""
    pairs: list[str] = []
    for key, value in obj.items():
        pairs.append(_encode_pair(key, value, options, collisions))
    return options.separator.join(pairs)


def _encode_pair(
    key: str,
    value: Any,
    options: EncodeOptions,
    collisions: list[KeyCollision] | None,
) -> str:
    encoded_key = encode_key(key)

    if isinstance(value, list):
        rendered, has_header = _encode_array(value, key, options, collisions)
        if has_header:
            return rendered
        return f"{encoded_key}{rendered}"

    if isinstance(value, dict):
        nested = encode_object(value, options, collisions=collisions)
        if not nested:
            return encoded_key
        return f"{encoded_key}{{{nested}}}"

    space = " " if options.readable else ""
    return f"{encoded_key}:{space}{encode_primitive(value, options)}"
