"""The TOON encoding engine."""

from toonlite.encoding.encoder import (
    coerce_options,
    encode,
    encode_array,
    encode_object,
    encode_tabular,
    encode_value,
)
from toonlite.encoding.flatten import KeyCollision, find_flatten_collisions, flatten_object
from toonlite.encoding.keys import shorten_key
from toonlite.encoding.normalize import normalize_value
from toonlite.encoding.primitives import encode_primitive
from toonlite.encoding.quoting import needs_quoting
from toonlite.encoding.uniform import UniformityVerdict, is_uniform_object_array

__all__ = [
    "KeyCollision",
    "UniformityVerdict",
    "coerce_options",
    "encode",
    "encode_array",
    "encode_object",
    "encode_primitive",
    "encode_tabular",
    "encode_value",
    "find_flatten_collisions",
    "flatten_object",
    "is_uniform_object_array",
    "needs_quoting",
    "normalize_value",
    "shorten_key",
]
