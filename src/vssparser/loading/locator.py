#!/usr/bin/env python3
"""
VSSPARSER LOCATOR - Location Index (Phase 2)
--------------------------------------------
Merges the loaded line table into one newline-terminated buffer and keeps
the cumulative offset of every line boundary. The parser only ever knows how
much of the buffer is left to read (the 'tail'); this index turns that back
into the SourceLine it came from.

Author: VssParser Team
Date: 2026-01-16
"""

from bisect import bisect_right
from typing import List, Sequence, Tuple

from vssparser.core.models import SourceLine


class LocationIndex:
    """
    Immutable once built. Offsets are counted in characters of the decoded
    text, the same unit the parser advances in.
    """

    def __init__(self, lines: Tuple[SourceLine, ...], offsets: Tuple[int, ...], buffer: str):
        self.lines = lines
        self.offsets = offsets      # offsets[i] = length consumed through line i, terminator included
        self.buffer = buffer

    @classmethod
    def build(cls, lines: Sequence[SourceLine]) -> "LocationIndex":
        offsets: List[int] = []
        chunks: List[str] = []
        count = 0
        for line in lines:
            count += len(line.text) + 1
            offsets.append(count)
            chunks.append(line.text)
            chunks.append("\n")
        return cls(tuple(lines), tuple(offsets), "".join(chunks))

    @property
    def total_length(self) -> int:
        return self.offsets[-1] if self.offsets else 0

    def __len__(self) -> int:
        return len(self.lines)

    def lookup(self, tail_length: int) -> int:
        """Line index holding the first unread character of a tail."""
        if not self.offsets:
            return 0
        head = self.total_length - tail_length if tail_length < self.total_length else 0
        # first cumulative offset strictly greater than head
        idx = bisect_right(self.offsets, head)
        return min(idx, len(self.offsets) - 1)

    def locate(self, position: int) -> int:
        """Same as lookup(), for an absolute buffer position."""
        return self.lookup(len(self.buffer) - position)

    def line_at(self, index: int) -> SourceLine:
        return self.lines[index]

    def describe(self, index: int) -> str:
        """'dir/file.vspec:12' for a line index."""
        line = self.lines[index]
        return f"{line.source.path}:{line.lineno}"

    def excerpt(self, position: int) -> str:
        """The rest of the line at 'position', stripped of indentation."""
        end = self.buffer.find("\n", position)
        if end == -1:
            end = len(self.buffer)
        text = self.buffer[position:end].strip()
        if not text:
            index = self.locate(position)
            if self.lines:
                text = self.lines[index].text.strip()
        return text
