"""Rendering of null, boolean, number, and string values."""

from __future__ import annotations

import math
from typing import Any

from toonlite.contracts.options import EncodeOptions
from toonlite.encoding.quoting import needs_quoting, quote

# Integral floats below this print without exponent or fraction.
_PLAIN_FLOAT_LIMIT = 1e21


def null_token(options: EncodeOptions) -> str:
    return "~" if options.compact_null else "null"


def format_number(n: int | float) -> str:
    """Shortest textual form of a number that reads back to the same value."""
    if isinstance(n, int):
        return str(int(n))
    if n.is_integer() and abs(n) < _PLAIN_FLOAT_LIMIT:
        return str(int(n))
    return repr(n)


def is_primitive(value: Any) -> bool:
    return value is None or isinstance(value, (str, int, float, bool))


def encode_primitive(value: Any, options: EncodeOptions, delimiter: str | None = None) -> str:
    """Render a scalar.

    ``delimiter`` overrides the options' value delimiter; the tabular renderer
    passes its cell delimiter here.
    """
    if value is None:
        return null_token(options)

    if isinstance(value, bool):
        if options.compact_booleans:
            return "1" if value else "0"
        return "true" if value else "false"

    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return null_token(options)
        return format_number(value)

    if isinstance(value, str):
        if needs_quoting(value, delimiter or options.value_delimiter):
            return quote(value)
        return value

    raise TypeError(f"Not a primitive value: {type(value).__name__}")
