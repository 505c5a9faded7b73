"""Pydantic models for options, envelopes, and command results."""

from toonlite.contracts.common import (
    CyclicStructureError,
    EncodingError,
    ErrorDetail,
    KeyCollisionError,
    Metrics,
    ResponseEnvelope,
    Target,
    UnsupportedTypeError,
    WarningDetail,
)
from toonlite.contracts.options import Delimiter, EncodeOptions
from toonlite.contracts.responses import (
    ComparisonReport,
    EncodeResult,
    FormatStats,
    PresetInfo,
)

__all__ = [
    "ComparisonReport",
    "CyclicStructureError",
    "Delimiter",
    "EncodeOptions",
    "EncodeResult",
    "EncodingError",
    "ErrorDetail",
    "FormatStats",
    "KeyCollisionError",
    "Metrics",
    "PresetInfo",
    "ResponseEnvelope",
    "Target",
    "UnsupportedTypeError",
    "WarningDetail",
]
