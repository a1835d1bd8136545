"""Terminal interface using Blessed for display and Curtsies for input."""

import blessed
from typing import Optional
import sys
import select

from .constants import EditorConstants
from .search import match_columns
from .view import FrameSnapshot

BLOCK_CURSOR = "\x1b[2 q"
LINE_CURSOR = "\x1b[6 q"
RESET_CURSOR_COLOR = "\x1b]112\x07"


def selection_columns(frame: FrameSnapshot, row: int, line_length: int) -> Optional[tuple[int, int]]:
    """Column range of the selection on a document row, if any."""
    if frame.selection is None:
        return None
    start, end = frame.selection
    if not start.row <= row <= end.row:
        return None
    begin = start.column if row == start.row else 0
    # Show a selected line break as one highlighted cell past the text
    finish = end.column if row == end.row else line_length + 1
    if finish <= begin:
        return None
    return begin, finish


def cursor_color(frame: FrameSnapshot) -> str:
    """OSC 12 sequence coloring the cursor for the frame's mode, or ''."""
    role = "insert_cursor" if frame.mode == "INSERT" else "normal_cursor"
    color = frame.theme.get(role)
    if not color:
        return ''
    return f"\x1b]12;{color}\x07"


def gutter_width(frame: FrameSnapshot) -> int:
    width = 0
    if frame.show_fringe:
        width += EditorConstants.FRINGE_WIDTH
    if frame.show_line_numbers:
        width += EditorConstants.LINE_NUMBER_WIDTH
    return width


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._curtsies_active: bool = False

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input  # type: ignore
            # Enter raw mode immediately so reads work
            self._curtsies_input = Input(keynames='curtsies')  # type: ignore
            self._curtsies_input.__enter__()
            self._curtsies_active = True

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self._curtsies_input is not None:
            try:
                if self._curtsies_active:
                    self._curtsies_input.__exit__(None, None, None)  # type: ignore
            finally:
                self._curtsies_input = None
                self._curtsies_active = False
        if self.is_fullscreen:
            print(BLOCK_CURSOR + RESET_CURSOR_COLOR + self.term.exit_fullscreen + self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows."""
        return self.term.height

    @property
    def text_rows(self) -> int:
        """Rows available to the document after the modeline and minibuffer."""
        reserved = EditorConstants.MODELINE_HEIGHT + EditorConstants.MINIBUFFER_HEIGHT
        return max(1, self.term.height - reserved)

    def _style(self, frame: FrameSnapshot, role: str) -> str:
        name = frame.theme.get(role)
        if not name:
            return ''
        return str(getattr(self.term, name))

    def compose_line(self, frame: FrameSnapshot, row: int, line: str, width: int) -> str:
        """Render one document line, truncated to `width` and padded."""
        normal = self.term.normal
        text = line[:width].ljust(width)
        selected = selection_columns(frame, row, len(line))
        matches = match_columns(line, frame.search_query) if frame.search_query else []
        sel_style = self._style(frame, 'selection') or self.term.reverse
        search_style = self._style(frame, 'search') or self.term.underline
        text_style = self._style(frame, 'text')

        out = [text_style]
        current = None
        for i, ch in enumerate(text):
            if selected and selected[0] <= i < selected[1]:
                style = sel_style
            elif any(a <= i < b for a, b in matches):
                style = search_style
            else:
                style = text_style
            if style != current:
                out.append(normal + style)
                current = style
            out.append(ch)
        out.append(normal)
        return ''.join(out)

    def compose_gutter(self, frame: FrameSnapshot, row: int) -> str:
        parts = []
        if frame.show_fringe:
            parts.append(self._style(frame, 'fringe') + ' ' * EditorConstants.FRINGE_WIDTH)
        if frame.show_line_numbers:
            role = 'current_line_number' if row == frame.cursor.row else 'line_number'
            number = str(row + 1).rjust(EditorConstants.LINE_NUMBER_WIDTH - 1) + ' '
            parts.append(self._style(frame, role) + number)
        return ''.join(parts) + self.term.normal

    def compose_modeline(self, frame: FrameSnapshot, width: int) -> str:
        name = frame.filename or "[No Name]"
        flag = " [+]" if frame.modified else ""
        left = f" {frame.mode}  {name}{flag}"
        right = f"{frame.cursor.row + 1}:{frame.cursor.column} / {frame.line_count} "
        pad = max(1, width - len(left) - len(right))
        return self._style(frame, 'modeline') + (left + ' ' * pad + right)[:width] + self.term.normal

    def draw_frame(self, frame: FrameSnapshot):
        """Draw a full frame. Never writes back into the editor."""
        term = self.term
        width = term.width
        rows = self.text_rows
        gutter = gutter_width(frame) if frame.lines else 0
        out = [term.home + term.clear]

        for y in range(rows):
            row = frame.first_row + y
            out.append(term.move(y, 0))
            if y < len(frame.lines):
                if gutter:
                    out.append(self.compose_gutter(frame, row))
                out.append(self.compose_line(frame, row, frame.lines[y], max(0, width - gutter)))
            else:
                out.append('~')

        out.append(term.move(rows, 0) + self.compose_modeline(frame, width))
        minibuffer = frame.prompt if frame.prompt is not None else (frame.status or '')
        out.append(term.move(rows + 1, 0) + self._style(frame, 'minibuffer')
                   + minibuffer[:width] + term.normal)

        if frame.prompt is not None:
            out.append(term.move(rows + 1, min(len(frame.prompt), width - 1)))
            out.append(term.normal_cursor)
        elif frame.cursor_visible:
            cursor_y = frame.cursor.row - frame.first_row
            cursor_x = min(frame.cursor.column + gutter, width - 1)
            shape = LINE_CURSOR if frame.insert_line_cursor and frame.mode == "INSERT" else BLOCK_CURSOR
            out.append(term.move(cursor_y, cursor_x) + shape + cursor_color(frame) + term.normal_cursor)
        else:
            out.append(term.hide_cursor)
        print(''.join(out), end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies token as a string, or None on timeout.
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            return str(next(self._curtsies_input))  # blocks
        r, _, _ = select.select([sys.stdin], [], [], float(timeout))
        if not r:
            return None
        return str(next(self._curtsies_input))
