"""Compare the token cost of a value rendered as JSON and as TOON."""

from __future__ import annotations

from typing import Any

import orjson

from toonlite.contracts.options import EncodeOptions
from toonlite.contracts.responses import ComparisonReport, FormatStats
from toonlite.encoding.encoder import encode_value
from toonlite.encoding.normalize import normalize_value
from toonlite.engine.tokens import TokenCounter, approx_token_count
from toonlite.presets import FOR_LLM, FOR_LLM_NESTED

BASELINE = "json-pretty"

TOON_VARIANTS: dict[str, EncodeOptions] = {
    "toon": EncodeOptions(),
    "toon-llm": FOR_LLM,
    "toon-llm-nested": FOR_LLM_NESTED,
}


def render_formats(value: Any) -> dict[str, str]:
    """Render ``value`` in every compared format, baseline first."""
    data = normalize_value(value)
    rendered = {
        BASELINE: orjson.dumps(data, option=orjson.OPT_INDENT_2).decode(),
        "json-compact": orjson.dumps(data).decode(),
    }
    for name, options in TOON_VARIANTS.items():
        rendered[name] = encode_value(data, options)
    return rendered


def compare_formats(
    value: Any,
    count_tokens: TokenCounter = approx_token_count,
    *,
    counter_name: str = "approx",
) -> ComparisonReport:
    """Count tokens for each rendering and the saving against pretty JSON."""
    rendered = render_formats(value)
    baseline_tokens = count_tokens(rendered[BASELINE])

    formats: list[FormatStats] = []
    for name, text in rendered.items():
        tokens = count_tokens(text)
        savings = 0.0
        if baseline_tokens:
            savings = round((baseline_tokens - tokens) / baseline_tokens * 100, 1)
        formats.append(FormatStats(format=name, chars=len(text), tokens=tokens, savings_pct=savings))

    return ComparisonReport(counter=counter_name, baseline=BASELINE, formats=formats)
