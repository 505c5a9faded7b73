"""Encoding options model."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Delimiter = Literal[",", "\t", "|"]

DELIMITER_NAMES: dict[str, str] = {
    "comma": ",",
    "tab": "\t",
    "pipe": "|",
}


class EncodeOptions(BaseModel):
    """Immutable configuration consumed at every level of an encode call.

    ``delimiter`` left as ``None`` means "unspecified": scalars and list-form
    arrays then split on commas while tabular blocks use tabs.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    compact_booleans: bool = False
    compact_null: bool = False
    readable: bool = False
    delimiter: Optional[Delimiter] = None
    tabular: bool = True
    flatten: bool = False
    max_flatten_depth: int = Field(default=10, ge=0)
    strict_keys: bool = False

    @field_validator("delimiter", mode="before")
    @classmethod
    def resolve_delimiter_name(cls, v: object) -> object:
        if isinstance(v, str) and v.lower() in DELIMITER_NAMES:
            return DELIMITER_NAMES[v.lower()]
        return v

    @property
    def value_delimiter(self) -> str:
        """Delimiter used when quoting scalars outside tabular blocks."""
        return self.delimiter or ","

    @property
    def table_delimiter(self) -> str:
        """Delimiter used between cells of a tabular block."""
        return self.delimiter if self.delimiter is not None else "\t"

    @property
    def separator(self) -> str:
        return ", " if self.readable else ","
