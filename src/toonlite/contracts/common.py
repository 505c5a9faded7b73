"""Common Pydantic models: response envelope, errors, warnings, metrics."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class EncodingError(Exception):
    """Base class for failures raised while encoding a value."""

    code = "ERR_ENCODING"


class UnsupportedTypeError(EncodingError):
    """Raised when a value is outside the JSON data model."""

    code = "ERR_UNSUPPORTED_TYPE"


class CyclicStructureError(EncodingError):
    """Raised when a list or mapping contains itself."""

    code = "ERR_CYCLIC_STRUCTURE"


class KeyCollisionError(EncodingError):
    """Raised in strict mode when two source paths flatten to one column."""

    code = "ERR_KEY_COLLISION"


class Target(BaseModel):
    """Identifies the input and preset a command operated on."""

    file: str | None = None
    preset: str | None = None


class WarningDetail(BaseModel):
    """Structured warning."""

    code: str
    message: str
    path: str | None = None


class ErrorDetail(BaseModel):
    """Structured error."""

    code: str
    message: str
    details: dict[str, Any] | None = None


class Metrics(BaseModel):
    """Execution metrics."""

    duration_ms: int = 0


class ResponseEnvelope(BaseModel):
    """Standard response envelope returned by every command."""

    ok: bool = True
    command: str = ""
    target: Target = Field(default_factory=Target)
    result: Any = None
    warnings: list[WarningDetail] = Field(default_factory=list)
    errors: list[ErrorDetail] = Field(default_factory=list)
    metrics: Metrics = Field(default_factory=Metrics)
