"""Command-specific result models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class EncodeResult(BaseModel):
    """Result of ``toon encode``."""

    toon: str
    chars: int = 0
    tokens: int = 0
    json_tokens: int = 0
    out_path: str | None = None


class FormatStats(BaseModel):
    """Size of one rendering of a value."""

    format: str
    chars: int
    tokens: int
    savings_pct: float = 0.0


class ComparisonReport(BaseModel):
    """Token comparison of one value across renderings."""

    counter: str
    baseline: str = "json-pretty"
    formats: list[FormatStats] = Field(default_factory=list)

    def best(self) -> FormatStats | None:
        if not self.formats:
            return None
        return min(self.formats, key=lambda f: f.tokens)


class PresetInfo(BaseModel):
    """One row of ``toon presets``."""

    name: str
    compact_booleans: bool
    compact_null: bool
    delimiter: str
    tabular: bool
    flatten: bool
    readable: bool
