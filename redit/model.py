"""Document and cursor model: the buffer every other component edits through."""

from dataclasses import dataclass
from typing import Optional

from .constants import EditorConstants


@dataclass
class CursorPosition:
    column: int = 0
    row: int = 0

    def __lt__(self, other):
        if self.row != other.row:
            return self.row < other.row
        return self.column < other.column

    def __ge__(self, other):
        return not self < other

    def copy(self) -> "CursorPosition":
        return CursorPosition(self.column, self.row)


def leading_whitespace(line: str) -> str:
    return line[:len(line) - len(line.lstrip())]


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == '_'


class Buffer:
    """The open document as a list of lines plus the caret.

    Every mutation leaves the cursor inside the document: the row indexes an
    existing line and the column is at most the length of that line (the
    column may sit just past the last character). Requests that make no
    sense at the current position are no-ops rather than errors.
    """

    lines: list[str]
    cursor: CursorPosition

    def __init__(self, lines: Optional[list[str]] = None,
                 indent_width: int = EditorConstants.DEFAULT_INDENT_WIDTH,
                 electric_pairs: bool = True,
                 pairs: Optional[dict[str, str]] = None):
        self.lines = list(lines) if lines else [""]
        self.cursor = CursorPosition()
        self.indent_width = indent_width
        self.electric_pairs = electric_pairs
        self.pairs = dict(EditorConstants.DEFAULT_PAIRS if pairs is None else pairs)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def current_line(self) -> str:
        return self.lines[self.cursor.row]

    def clamp_cursor(self):
        """Pull the cursor back inside the document."""
        if not self.lines:
            self.lines = [""]
        self.cursor.row = max(0, min(self.cursor.row, len(self.lines) - 1))
        self.cursor.column = max(0, min(self.cursor.column, len(self.lines[self.cursor.row])))

    def set_cursor(self, column: int, row: int):
        self.cursor = CursorPosition(column, row)
        self.clamp_cursor()

    def replace_contents(self, lines: list[str], cursor: Optional[CursorPosition] = None):
        """Swap in a whole new document (file open, undo/redo)."""
        self.lines = list(lines) if lines else [""]
        self.cursor = cursor.copy() if cursor is not None else CursorPosition()
        self.clamp_cursor()

    # --- Primitive edits ---

    def insert_char(self, ch: str):
        """Insert a character at the cursor, pairing delimiters when enabled."""
        row, col = self.cursor.row, self.cursor.column
        line = self.lines[row]
        closer = self.pairs.get(ch) if self.electric_pairs else None
        inserted = ch + closer if closer else ch
        self.lines[row] = line[:col] + inserted + line[col:]
        self.cursor.column = col + 1

    def insert_text(self, text: str, position: Optional[CursorPosition] = None) -> CursorPosition:
        """Splice possibly multi-line text in at a position.

        Returns the position just past the inserted text. The cursor is not
        moved; callers decide where it lands.
        """
        if position is None:
            position = self.cursor
        row = max(0, min(position.row, len(self.lines) - 1))
        line = self.lines[row]
        col = max(0, min(position.column, len(line)))
        parts = text.split('\n')
        before, after = line[:col], line[col:]
        parts[0] = before + parts[0]
        end = CursorPosition(len(parts[-1]), row + len(parts) - 1)
        parts[-1] += after
        self.lines[row:row + 1] = parts
        return end

    def backspace(self):
        """Delete the character before the cursor, joining lines at column 0."""
        row, col = self.cursor.row, self.cursor.column
        line = self.lines[row]
        if col > 0:
            prev = line[col - 1]
            following = line[col] if col < len(line) else None
            if (self.electric_pairs and following is not None
                    and self.pairs.get(prev) == following):
                # Empty pair: remove opener and closer together
                self.lines[row] = line[:col - 1] + line[col + 1:]
            else:
                self.lines[row] = line[:col - 1] + line[col:]
            self.cursor.column = col - 1
        elif row > 0:
            previous = self.lines[row - 1]
            self.lines[row - 1] = previous + line
            del self.lines[row]
            self.cursor = CursorPosition(len(previous), row - 1)

    def delete_at_cursor(self):
        """Delete the character under the cursor, or the line itself when empty."""
        row, col = self.cursor.row, self.cursor.column
        line = self.lines[row]
        if line:
            if col < len(line):
                self.lines[row] = line[:col] + line[col + 1:]
            self.clamp_cursor()
        elif len(self.lines) > 1:
            del self.lines[row]
            self.clamp_cursor()

    def split_line_at_cursor(self):
        row, col = self.cursor.row, self.cursor.column
        line = self.lines[row]
        self.lines[row] = line[:col]
        self.lines.insert(row + 1, line[col:])
        self.cursor = CursorPosition(0, row + 1)

    def join_next_line(self):
        """Append the next line onto this one, separated by a single space."""
        row = self.cursor.row
        if row + 1 >= len(self.lines):
            return
        current = self.lines[row]
        appended = self.lines[row + 1].lstrip()
        separator = " " if appended and current and not current[-1].isspace() else ""
        self.lines[row] = current + separator + appended
        del self.lines[row + 1]
        self.cursor.column = len(current)

    def open_line(self, above: bool = False):
        """Insert an indented blank line below (or above) the cursor line.

        The new line copies the reference line's leading whitespace and the
        cursor is left at its end. Switching to Insert mode is the caller's job.
        """
        row = self.cursor.row
        indent = leading_whitespace(self.lines[row])
        target = row if above else row + 1
        self.lines.insert(target, indent)
        self.cursor = CursorPosition(len(indent), target)

    def brace_depth(self, row: int) -> int:
        """Net {/} balance of every line above `row`, floored at zero."""
        depth = 0
        for line in self.lines[:row]:
            depth += line.count('{') - line.count('}')
        return max(0, depth)

    def indent_current_line(self):
        """Reindent the cursor line from brace balance.

        A textual heuristic: braces inside strings or comments are counted too.
        """
        row = self.cursor.row
        content = self.lines[row].lstrip()
        depth = self.brace_depth(row)
        if content.startswith('}'):
            depth = max(0, depth - 1)
        indent = " " * (depth * self.indent_width)
        self.lines[row] = indent + content
        self.cursor.column = len(indent)

    # --- Ranges ---

    def text_range(self, start: CursorPosition, end: CursorPosition) -> str:
        """Text between two ordered positions, lines joined with newlines."""
        if start.row == end.row:
            return self.lines[start.row][start.column:end.column]
        result = [self.lines[start.row][start.column:]]
        result.extend(self.lines[start.row + 1:end.row])
        result.append(self.lines[end.row][:end.column])
        return '\n'.join(result)

    def delete_range(self, start: CursorPosition, end: CursorPosition) -> str:
        """Remove text between two ordered positions and return it.

        Partial first and last lines are merged; the cursor lands on `start`.
        """
        removed = self.text_range(start, end)
        head = self.lines[start.row][:start.column]
        tail = self.lines[end.row][end.column:]
        self.lines[start.row:end.row + 1] = [head + tail]
        self.cursor = start.copy()
        self.clamp_cursor()
        return removed

    def remove_line(self, row: int) -> str:
        """Remove a whole line, keeping at least one (empty) line."""
        removed = self.lines[row]
        if len(self.lines) > 1:
            del self.lines[row]
        else:
            self.lines[0] = ""
        self.clamp_cursor()
        return removed

    # --- Horizontal motion ---

    def move_left(self):
        if self.cursor.column > 0:
            self.cursor.column -= 1

    def move_right(self):
        if self.cursor.column < len(self.current_line):
            self.cursor.column += 1

    def move_line_start(self):
        self.cursor.column = 0

    def move_line_end(self):
        self.cursor.column = len(self.current_line)

    def move_first_non_blank(self):
        self.cursor.column = len(leading_whitespace(self.current_line))

    def next_word(self):
        """Move to the start of the next word, crossing lines."""
        row, col = self.cursor.row, self.cursor.column
        line = self.lines[row]
        if col < len(line) and _is_word_char(line[col]):
            while col < len(line) and _is_word_char(line[col]):
                col += 1
        elif col < len(line) and not line[col].isspace():
            col += 1
        while True:
            while col < len(line) and line[col].isspace():
                col += 1
            if col < len(line) or row + 1 >= len(self.lines):
                break
            row += 1
            line = self.lines[row]
            col = 0
        self.cursor = CursorPosition(col, row)

    def previous_word(self):
        """Move to the start of the previous word, crossing lines."""
        row, col = self.cursor.row, self.cursor.column
        line = self.lines[row]
        while True:
            while col > 0 and line[col - 1].isspace():
                col -= 1
            if col > 0 or row == 0:
                break
            row -= 1
            line = self.lines[row]
            col = len(line)
        if col > 0 and _is_word_char(line[col - 1]):
            while col > 0 and _is_word_char(line[col - 1]):
                col -= 1
        elif col > 0:
            col -= 1
        self.cursor = CursorPosition(col, row)
