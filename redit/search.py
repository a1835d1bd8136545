"""Literal, case-sensitive text search with wraparound."""

from dataclasses import dataclass
from typing import NamedTuple, Optional

from .model import Buffer, CursorPosition


@dataclass
class SearchState:
    query: Optional[str] = None
    highlight: bool = False

    def set(self, query: str):
        self.query = query
        self.highlight = True

    def clear(self):
        self.query = None
        self.highlight = False


class Found(NamedTuple):
    position: CursorPosition
    wrapped: bool


def find_next(buffer: Buffer, query: str,
              origin: Optional[CursorPosition] = None) -> Optional[Found]:
    """Find the first match after `origin`, wrapping to the document start.

    After wrapping the scan stops at the origin itself, so a match starting
    exactly there is found last.
    """
    if not query:
        return None
    origin = origin or buffer.cursor
    lines = buffer.lines
    start_row = origin.row

    idx = lines[start_row].find(query, origin.column + 1)
    if idx != -1:
        return Found(CursorPosition(idx, start_row), False)
    for row in range(start_row + 1, len(lines)):
        idx = lines[row].find(query)
        if idx != -1:
            return Found(CursorPosition(idx, row), False)
    for row in range(0, start_row + 1):
        idx = lines[row].find(query)
        if idx != -1 and (row < start_row or idx <= origin.column):
            return Found(CursorPosition(idx, row), True)
    return None


def find_previous(buffer: Buffer, query: str,
                  origin: Optional[CursorPosition] = None) -> Optional[Found]:
    """Find the last match before `origin`, wrapping to the document end."""
    if not query:
        return None
    origin = origin or buffer.cursor
    lines = buffer.lines
    start_row = origin.row

    if origin.column > 0:
        # Match must start before the origin column
        idx = lines[start_row].rfind(query, 0, origin.column - 1 + len(query))
        if idx != -1:
            return Found(CursorPosition(idx, start_row), False)
    for row in range(start_row - 1, -1, -1):
        idx = lines[row].rfind(query)
        if idx != -1:
            return Found(CursorPosition(idx, row), False)
    for row in range(len(lines) - 1, start_row - 1, -1):
        idx = lines[row].rfind(query)
        if idx != -1 and (row > start_row or idx >= origin.column):
            return Found(CursorPosition(idx, row), True)
    return None


def match_columns(line: str, query: Optional[str]) -> list[tuple[int, int]]:
    """Column ranges of every non-overlapping match on a line, for highlighting."""
    if not query:
        return []
    ranges = []
    idx = line.find(query)
    while idx != -1:
        ranges.append((idx, idx + len(query)))
        idx = line.find(query, idx + len(query))
    return ranges
