"""Named option presets and option resolution."""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from toonlite.contracts.options import EncodeOptions
from toonlite.io.fileops import load_data

FOR_LLM = EncodeOptions(
    compact_booleans=True,
    compact_null=True,
    delimiter="\t",
    tabular=True,
    flatten=False,
    readable=False,
)

# Flattens nested rows (orders with customers and line items) into one table.
FOR_LLM_NESTED = EncodeOptions(
    compact_booleans=True,
    compact_null=True,
    delimiter="\t",
    tabular=True,
    flatten=True,
    readable=False,
)

FOR_DEBUGGING = EncodeOptions(
    compact_booleans=False,
    compact_null=False,
    delimiter=",",
    tabular=True,
    flatten=False,
    readable=True,
)

FOR_COMPATIBILITY = EncodeOptions(
    compact_booleans=False,
    compact_null=False,
    delimiter=",",
    tabular=True,
    flatten=False,
    readable=False,
)

PRESETS: Mapping[str, EncodeOptions] = MappingProxyType({
    "for-llm": FOR_LLM,
    "for-llm-nested": FOR_LLM_NESTED,
    "for-debugging": FOR_DEBUGGING,
    "for-compatibility": FOR_COMPATIBILITY,
})


def get_preset(name: str) -> EncodeOptions:
    """Look up a preset by name (``for-llm``, ``forLLM`` and ``for_llm`` all work)."""
    key = _preset_key(name)
    for preset_name, preset in PRESETS.items():
        if _preset_key(preset_name) == key:
            return preset
    raise ValueError(f"Unknown preset: '{name}'. Available: {', '.join(PRESETS)}")


def _preset_key(name: str) -> str:
    return name.replace("-", "").replace("_", "").lower()


def load_options_file(path: str | Path) -> dict[str, Any]:
    """Read option fields from a YAML or JSON file."""
    data = load_data(path)
    if not isinstance(data, dict):
        raise ValueError("Options file must contain a mapping/object.")
    return data


def resolve_options(
    preset: str | None = None,
    overrides: Mapping[str, Any] | None = None,
    config_file: str | Path | None = None,
) -> EncodeOptions:
    """Merge defaults, a preset, an options file, and explicit overrides.

    Later sources win. ``None`` values in ``overrides`` are ignored so CLI
    flags that were not given leave earlier settings alone.
    """
    base = get_preset(preset) if preset else EncodeOptions()
    merged: dict[str, Any] = base.model_dump()
    if config_file is not None:
        merged.update(_by_field_name(load_options_file(config_file)))
    if overrides:
        merged.update(_by_field_name({k: v for k, v in overrides.items() if v is not None}))
    return EncodeOptions.model_validate(merged)


def _by_field_name(data: Mapping[str, Any]) -> dict[str, Any]:
    """Translate camelCase aliases to field names so dict merges line up."""
    aliases = {
        (field.alias or name): name for name, field in EncodeOptions.model_fields.items()
    }
    return {aliases.get(k, k): v for k, v in data.items()}
