"""Decide when a string must be wrapped in quotes to stay unambiguous."""

from __future__ import annotations

import re

NUMERIC_LITERAL = re.compile(r"-?[0-9]+(\.[0-9]+)?([eE][+-]?[0-9]+)?")
RESERVED_LITERALS = frozenset({"true", "false", "null"})
STRUCTURAL_CHARS = frozenset(":[]{}")


def looks_like_literal(text: str) -> bool:
    """True if ``text`` would read back as a boolean, null, or number."""
    return text in RESERVED_LITERALS or NUMERIC_LITERAL.fullmatch(text) is not None


def needs_quoting(text: str, delimiter: str = "\t") -> bool:
    """Check whether ``text`` needs quotes under the given delimiter.

    With tabs, plain spaces are left bare since the tab already separates
    values. With commas and pipes a space is ambiguous (readable mode puts one
    after every separator), so it forces quotes.
    """
    if text == "":
        return True

    if delimiter == "\t":
        if any(c in STRUCTURAL_CHARS or c == "\t" or c == "|" for c in text):
            return True
    else:
        if any(c in STRUCTURAL_CHARS or c == delimiter for c in text):
            return True
        if " " in text:
            return True

    return looks_like_literal(text)


def escape_quotes(text: str) -> str:
    return text.replace('"', '\\"')


def quote(text: str) -> str:
    return f'"{escape_quotes(text)}"'


def encode_key(key: str) -> str:
    """Render an object key, quoting it like a value when ambiguous."""
    if " " in key or needs_quoting(key):
        return quote(key)
    return key
