"""Viewport scrolling and the read-only frame handed to the renderer."""

from dataclasses import dataclass, field
from typing import Optional

from .constants import EditorConstants
from .model import Buffer, CursorPosition


class Viewport:
    """Vertical window into the buffer.

    Only a top-row offset is kept. Long lines are truncated by the renderer;
    there is no horizontal offset and no wrapping.
    """

    ENOUGH = "enough"

    def __init__(self, buffer: Buffer, height: int = 24,
                 top_margin: int = EditorConstants.DEFAULT_SCROLL_MARGIN,
                 bottom_margin: int = EditorConstants.DEFAULT_SCROLL_MARGIN):
        self.buffer = buffer
        self.height = max(1, height)
        self.top_margin = top_margin
        self.bottom_margin = bottom_margin
        self.offset = 0

    def resize(self, height: int):
        self.height = max(1, height)
        self.adjust_to_cursor(self.ENOUGH)

    @property
    def max_offset(self) -> int:
        return max(0, self.buffer.line_count - self.height)

    def clamp_offset(self):
        self.offset = max(0, min(self.offset, self.max_offset))

    def _margins(self) -> tuple[int, int]:
        # Margins cannot overlap on tiny windows
        limit = (self.height - 1) // 2
        return min(self.top_margin, limit), min(self.bottom_margin, limit)

    def visible_rows(self) -> range:
        return range(self.offset, min(self.buffer.line_count, self.offset + self.height))

    def contains(self, row: int) -> bool:
        return self.offset <= row < self.offset + self.height

    # --- Cursor movement with scrolling ---

    def move_up(self):
        buffer = self.buffer
        if buffer.cursor.row > 0:
            buffer.cursor.row -= 1
        buffer.clamp_cursor()
        top, _ = self._margins()
        if buffer.cursor.row < self.offset + top:
            self.offset -= 1
        self.clamp_offset()

    def move_down(self):
        buffer = self.buffer
        if buffer.cursor.row + 1 < buffer.line_count:
            buffer.cursor.row += 1
        buffer.clamp_cursor()
        _, bottom = self._margins()
        if buffer.cursor.row > self.offset + self.height - 1 - bottom:
            self.offset += 1
        self.clamp_offset()

    def recenter(self):
        """Put the cursor row in the middle of the window, ignoring margins."""
        self.offset = self.buffer.cursor.row - self.height // 2
        self.clamp_offset()

    def adjust_to_cursor(self, mode: Optional[str] = None):
        """Scroll so the cursor is visible after an arbitrary relocation.

        `"enough"` scrolls the minimum needed to show the cursor; the default
        also keeps the scroll margins clear.
        """
        row = self.buffer.cursor.row
        if mode == self.ENOUGH:
            top = bottom = 0
        else:
            top, bottom = self._margins()
        if row < self.offset + top:
            self.offset = row - top
        elif row > self.offset + self.height - 1 - bottom:
            self.offset = row - self.height + 1 + bottom
        self.clamp_offset()


@dataclass(frozen=True)
class FrameSnapshot:
    """Everything the renderer needs for one frame, captured by value."""

    lines: tuple[str, ...]
    first_row: int
    cursor: CursorPosition
    mode: str
    selection: Optional[tuple[CursorPosition, CursorPosition]] = None
    search_query: Optional[str] = None
    filename: Optional[str] = None
    modified: bool = False
    line_count: int = 1
    status: Optional[str] = None
    prompt: Optional[str] = None
    cursor_visible: bool = True
    show_line_numbers: bool = True
    show_fringe: bool = True
    insert_line_cursor: bool = False
    theme: dict = field(default_factory=dict)
