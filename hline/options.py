"""Options model for a single scan run."""

from __future__ import annotations

from typing import Optional

import click
from pydantic import BaseModel, Field, field_validator

from hline.core.sink import DEFAULT_MATCH_COLOR

CASE_INSENSITIVE_FLAG = "(?i)"


class ScanOptions(BaseModel):
    """What to scan, for what, and how to show it."""

    pattern: str = Field(..., description="Regular expression to highlight")
    filename: Optional[str] = Field(
        default=None, description="File to scan; None or '-' reads stdin"
    )
    ignore_case: bool = Field(default=False, description="Match case-insensitively")
    ok_if_binary: bool = Field(
        default=False, description="Scan the input even if it looks binary"
    )
    match_color: str = Field(
        default=DEFAULT_MATCH_COLOR, description="Color name for matched lines"
    )

    @field_validator("match_color")
    @classmethod
    def _check_color(cls, value: str) -> str:
        try:
            click.style("", fg=value)
        except (TypeError, ValueError) as err:
            raise ValueError(f"unknown color {value!r}") from err
        return value

    @property
    def effective_pattern(self) -> str:
        """The pattern as it will be compiled, with case folding applied."""
        if self.ignore_case:
            return make_pattern_case_insensitive(self.pattern)
        return self.pattern


def make_pattern_case_insensitive(pattern: str) -> str:
    return f"{CASE_INSENSITIVE_FLAG}{pattern}"


__all__ = ["ScanOptions", "make_pattern_case_insensitive"]
