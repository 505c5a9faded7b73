"""File operations: input loading, atomic write."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any

import orjson
import yaml

YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def read_text_safe(path: str | Path) -> str:
    """Read a text file with UTF-8 BOM tolerance.

    Uses ``utf-8-sig`` encoding which silently strips a leading BOM when
    present, while reading plain UTF-8 correctly.
    """
    return Path(path).read_text(encoding="utf-8-sig")


def parse_data(text: str, *, fmt: str = "json") -> Any:
    """Parse JSON or YAML text into Python values."""
    if fmt == "yaml":
        return yaml.safe_load(text)
    if fmt != "json":
        raise ValueError(f"Unsupported input format: {fmt}")
    return orjson.loads(text)


def load_data(path: str | Path) -> Any:
    """Load a JSON or YAML document, choosing the parser by file suffix."""
    p = Path(path)
    fmt = "yaml" if p.suffix.lower() in YAML_SUFFIXES else "json"
    return parse_data(read_text_safe(p), fmt=fmt)


def atomic_write(target: str | Path, text: str, *, encoding: str = "utf-8") -> Path:
    """Write TOON text to ``target`` so readers never see a partial file.

    The text goes to a hidden sibling temp file first, which then replaces
    ``target`` in one rename. The temp file is removed if anything fails.
    """
    target = Path(target)
    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=".toon_tmp_", suffix=".toon")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, target)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise
    return target
