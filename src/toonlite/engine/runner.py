"""Command bodies shared by the CLI and the stdio server."""

from __future__ import annotations

from typing import Any

import orjson

from toonlite.contracts.common import ResponseEnvelope, Target
from toonlite.contracts.options import EncodeOptions
from toonlite.contracts.responses import EncodeResult, PresetInfo
from toonlite.encoding.encoder import encode_value
from toonlite.encoding.flatten import KeyCollision
from toonlite.encoding.normalize import normalize_value
from toonlite.engine.dispatcher import (
    collision_warnings,
    error_code_for,
    error_envelope,
    success_envelope,
)
from toonlite.engine.stats import compare_formats
from toonlite.engine.tokens import TokenCounter, approx_token_count
from toonlite.observe.events import EventEmitter, Timer
from toonlite.presets import PRESETS

_DELIMITER_LABELS = {",": "comma", "\t": "tab", "|": "pipe", None: "default"}


def run_encode(
    value: Any,
    options: EncodeOptions,
    *,
    target: Target | None = None,
    count_tokens: TokenCounter = approx_token_count,
    emitter: EventEmitter | None = None,
) -> tuple[ResponseEnvelope, str | None]:
    """Encode ``value`` and wrap the outcome in an envelope.

    Returns the envelope and the TOON text (``None`` on failure).
    """
    emitter = emitter or EventEmitter()
    emitter.emit("encode.start", {"options": options.model_dump()})
    with Timer() as timer:
        try:
            data = normalize_value(value)
            collisions: list[KeyCollision] = []
            text = encode_value(data, options, collisions=collisions)
            json_text = orjson.dumps(data).decode()
        except Exception as e:
            code = error_code_for(e)
            emitter.emit("encode.error", {"code": code, "message": str(e)})
            return error_envelope("encode", code, str(e), target=target), None

    result = EncodeResult(
        toon=text,
        chars=len(text),
        tokens=count_tokens(text),
        json_tokens=count_tokens(json_text),
    )
    emitter.emit(
        "encode.done",
        {"chars": result.chars, "tokens": result.tokens, "json_tokens": result.json_tokens},
    )
    env = success_envelope(
        "encode",
        result.model_dump(),
        target=target,
        warnings=collision_warnings(collisions),
        duration_ms=timer.elapsed_ms,
    )
    return env, text


def run_stats(
    value: Any,
    *,
    target: Target | None = None,
    count_tokens: TokenCounter = approx_token_count,
    counter_name: str = "approx",
    emitter: EventEmitter | None = None,
) -> ResponseEnvelope:
    emitter = emitter or EventEmitter()
    with Timer() as timer:
        try:
            report = compare_formats(value, count_tokens, counter_name=counter_name)
        except Exception as e:
            code = error_code_for(e)
            emitter.emit("stats.error", {"code": code, "message": str(e)})
            return error_envelope("stats", code, str(e), target=target)
    best = report.best()
    emitter.emit("stats.done", {"best": best.format if best else None})
    return success_envelope("stats", report.model_dump(), target=target, duration_ms=timer.elapsed_ms)


def preset_table() -> list[PresetInfo]:
    return [
        PresetInfo(
            name=name,
            compact_booleans=opts.compact_booleans,
            compact_null=opts.compact_null,
            delimiter=_DELIMITER_LABELS[opts.delimiter],
            tabular=opts.tabular,
            flatten=opts.flatten,
            readable=opts.readable,
        )
        for name, opts in PRESETS.items()
    ]
