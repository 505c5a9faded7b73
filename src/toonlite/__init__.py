"""toonlite - Token-Oriented Object Notation encoder for LLM prompts.

Renders JSON-like values in a compact notation that needs far fewer tokens
than JSON while staying readable::

    >>> encode({"tags": ["jazz", "chill", "lofi"]})
    'tags[3]jazz,chill,lofi'
    >>> encode({"users": [{"id": 1, "name": "Alice"}]}, FOR_LLM)
    'users[1]{id,name}:\\n1\\tAlice'
"""

from toonlite.contracts.common import (
    CyclicStructureError,
    EncodingError,
    KeyCollisionError,
    UnsupportedTypeError,
)
from toonlite.contracts.options import Delimiter, EncodeOptions
from toonlite.encoding.encoder import encode
from toonlite.presets import (
    FOR_COMPATIBILITY,
    FOR_DEBUGGING,
    FOR_LLM,
    FOR_LLM_NESTED,
    PRESETS,
    get_preset,
    resolve_options,
)

__version__ = "0.3.0"
__all__ = [
    "CyclicStructureError",
    "Delimiter",
    "EncodeOptions",
    "EncodingError",
    "FOR_COMPATIBILITY",
    "FOR_DEBUGGING",
    "FOR_LLM",
    "FOR_LLM_NESTED",
    "KeyCollisionError",
    "PRESETS",
    "UnsupportedTypeError",
    "encode",
    "get_preset",
    "resolve_options",
]
