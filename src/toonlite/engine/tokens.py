"""Token counters passed to the stats helpers.

A counter is any ``Callable[[str], int]``. Nothing here is cached at module
level; callers hold on to the counter they build.
"""

from __future__ import annotations

import math
from typing import Callable

TokenCounter = Callable[[str], int]


def approx_token_count(text: str) -> int:
    """Estimate tokens as one per four characters."""
    return math.ceil(len(text) / 4)


def tiktoken_counter(encoding: str = "cl100k_base") -> TokenCounter:
    """Build a counter backed by a ``tiktoken`` encoding.

    Requires the ``tokens`` extra. ``encoding`` may also be a model name such
    as ``gpt-4``.
    """
    import tiktoken

    try:
        enc = tiktoken.get_encoding(encoding)
    except ValueError:
        enc = tiktoken.encoding_for_model(encoding)

    def count(text: str) -> int:
        return len(enc.encode(text, disallowed_special=()))

    return count
