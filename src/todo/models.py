"""Data models for the line-oriented record store."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Record:
    """A single non-empty line of the database file."""

    index: int      # 1-based position among non-empty lines
    text: str

    def format(self) -> str:
        return f"{self.index}. {self.text}"
