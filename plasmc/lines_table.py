"""Mapping between byte offsets and line/column positions."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class LinesTable:
    """Start offsets of every line in a source file.

    The first line always starts at offset 0. Lines and columns are 1-based.
    """

    _offsets: List[int] = field(default_factory=lambda: [0])

    def offsets(self) -> List[int]:
        """Return the start offsets of all lines."""
        return list(self._offsets)

    def __len__(self) -> int:
        return len(self._offsets)

    def is_empty(self) -> bool:
        """Return True if no line beyond the first has been recorded."""
        return len(self) == 1

    def add_line(self, start_offset: int) -> None:
        """Record that a new line begins at ``start_offset``."""
        self._offsets.append(start_offset)

    def last(self) -> int:
        """Return the start offset of the last recorded line."""
        return self._offsets[-1] if self._offsets else 0

    def line_index(self, offset: int) -> int:
        """Return the 0-based index of the line containing ``offset``."""
        return max(bisect_right(self._offsets, offset) - 1, 0)

    def line(self, offset: int) -> int:
        """Return the 1-based line number containing ``offset``."""
        return self.line_index(offset) + 1

    def column(self, offset: int) -> int:
        """Return the 1-based column of ``offset`` within its line."""
        return offset - self._offsets[self.line_index(offset)] + 1

    def offset(self, line: int) -> Optional[int]:
        """Return the start offset of 1-based ``line``, or None if out of range."""
        if 1 <= line <= len(self._offsets):
            return self._offsets[line - 1]
        return None