"""Command dispatch and response envelope helpers."""

from __future__ import annotations

import sys
from typing import Any

import orjson
import yaml
from pydantic import ValidationError

from toonlite.contracts.common import (
    EncodingError,
    ErrorDetail,
    Metrics,
    ResponseEnvelope,
    Target,
    WarningDetail,
)
from toonlite.encoding.flatten import KeyCollision

# Exit code mapping
EXIT_CODES = {
    "success": 0,
    "validation": 10,
    "io": 50,
    "unsupported": 70,
    "internal": 90,
}

VALIDATION_CODE_MARKERS = (
    "VALIDATION",
    "INVALID",
    "PARSE",
    "CYCLIC",
    "KEY_COLLISION",
    "PRESET",
    "USAGE",
    "MISSING_",
)

IO_CODE_MARKERS = ("FILE_EXISTS", "NOT_FOUND", "ERR_IO")


def success_envelope(
    command: str,
    result: Any,
    *,
    target: Target | None = None,
    warnings: list | None = None,
    duration_ms: int = 0,
) -> ResponseEnvelope:
    return ResponseEnvelope(
        ok=True,
        command=command,
        target=target or Target(),
        result=result,
        warnings=warnings or [],
        metrics=Metrics(duration_ms=duration_ms),
    )


def error_envelope(
    command: str,
    code: str,
    message: str,
    *,
    target: Target | None = None,
    details: dict | None = None,
    duration_ms: int = 0,
) -> ResponseEnvelope:
    return ResponseEnvelope(
        ok=False,
        command=command,
        target=target or Target(),
        errors=[ErrorDetail(code=code, message=message, details=details)],
        metrics=Metrics(duration_ms=duration_ms),
    )


def error_code_for(exc: BaseException) -> str:
    """Map an exception raised while handling a command to an error code."""
    if isinstance(exc, EncodingError):
        return exc.code
    if isinstance(exc, ValidationError):
        return "ERR_OPTIONS_INVALID"
    if isinstance(exc, FileNotFoundError):
        return "ERR_INPUT_NOT_FOUND"
    if isinstance(exc, OSError):
        return "ERR_IO"
    if isinstance(exc, (ValueError, yaml.YAMLError)):
        return "ERR_INPUT_INVALID"
    return "ERR_INTERNAL"


def collision_warnings(collisions: list[KeyCollision]) -> list[WarningDetail]:
    return [
        WarningDetail(
            code="WARN_FLATTEN_COLLISION",
            message=f"Column '{c.key}' from '{c.second_path}' overwrote '{c.first_path}'",
            path=c.second_path,
        )
        for c in collisions
    ]


def output_json(envelope: ResponseEnvelope) -> str:
    """Serialize envelope to JSON string using orjson."""
    data = envelope.model_dump(mode="json")
    return orjson.dumps(data, option=orjson.OPT_INDENT_2).decode()


def print_response(envelope: ResponseEnvelope) -> None:
    """Print response as JSON to stdout."""
    sys.stdout.write(output_json(envelope) + "\n")


def exit_code_for(envelope: ResponseEnvelope) -> int:
    """Determine exit code from envelope errors."""
    if envelope.ok:
        return 0
    if not envelope.errors:
        return EXIT_CODES["internal"]
    code = envelope.errors[0].code.upper()
    if "UNSUPPORTED" in code:
        return EXIT_CODES["unsupported"]
    if any(marker in code for marker in IO_CODE_MARKERS):
        return EXIT_CODES["io"]
    if any(marker in code for marker in VALIDATION_CODE_MARKERS):
        return EXIT_CODES["validation"]
    return EXIT_CODES["internal"]
