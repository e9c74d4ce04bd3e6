"""Rectangular image areas measured in columns and lines."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Area:
    """A rectangle spanning [min_column, max_column) x [min_line, max_line)."""

    min_column: int = 0
    max_column: int = 0
    min_line: int = 0
    max_line: int = 0

    def width(self) -> int:
        return self.max_column - self.min_column

    def height(self) -> int:
        return self.max_line - self.min_line

    def is_empty(self) -> bool:
        """True when both width and height are zero."""
        return self.width() == 0 and self.height() == 0

    def intersection(self, other: Area) -> Area:
        return Area(
            min_column=max(self.min_column, other.min_column),
            max_column=min(self.max_column, other.max_column),
            min_line=max(self.min_line, other.min_line),
            max_line=min(self.max_line, other.max_line),
        )

    def union(self, other: Area) -> Area:
        return Area(
            min_column=min(self.min_column, other.min_column),
            max_column=max(self.max_column, other.max_column),
            min_line=min(self.min_line, other.min_line),
            max_line=max(self.max_line, other.max_line),
        )

    def __str__(self) -> str:
        column = f"+{self.min_column}" if self.min_column >= 0 else str(self.min_column)
        line = f"+{self.min_line}" if self.min_line >= 0 else str(self.min_line)
        return f"({self.width()}x{self.height()}{column}{line})"