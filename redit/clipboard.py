"""Single-register clipboard: kill, yank and paste."""

import logging
from dataclasses import dataclass
from enum import Enum

from .model import Buffer, CursorPosition

logger = logging.getLogger(__name__)


class RegisterKind(Enum):
    CHARACTER = "character"
    LINE = "line"


class PastePosition(Enum):
    BEFORE = "before"
    AFTER = "after"


@dataclass
class ClipboardRegister:
    """The one clipboard slot shared by every mode for the whole session.

    Each write replaces the previous contents. With `mirror_system` on, writes
    are also copied to the system clipboard through pyperclip; reads always
    come from the register.
    """

    text: str = ""
    kind: RegisterKind = RegisterKind.CHARACTER
    mirror_system: bool = False

    def write(self, text: str, kind: RegisterKind):
        self.text = text
        self.kind = kind
        if self.mirror_system:
            self._copy_to_system(text)

    @property
    def is_empty(self) -> bool:
        return self.text == "" and self.kind is RegisterKind.CHARACTER

    @staticmethod
    def _copy_to_system(text: str) -> None:
        import pyperclip
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            # No clipboard mechanism on this system; the register still holds the text
            logger.info(f"System clipboard unavailable: {e}")


def kill_line(buffer: Buffer, register: ClipboardRegister):
    """Cut from the cursor to end of line, or the whole line when at its end."""
    row, col = buffer.cursor.row, buffer.cursor.column
    line = buffer.lines[row]
    if col < len(line):
        register.write(line[col:], RegisterKind.CHARACTER)
        buffer.lines[row] = line[:col]
    else:
        register.write(buffer.remove_line(row), RegisterKind.LINE)


def yank_line(buffer: Buffer, register: ClipboardRegister):
    register.write(buffer.current_line, RegisterKind.LINE)


def paste(buffer: Buffer, register: ClipboardRegister, where: PastePosition) -> bool:
    """Insert the register contents relative to the cursor.

    Line-wise text becomes whole lines above or below the cursor line, with
    the cursor at column 0 of the first one. Character-wise text is spliced
    in at the cursor (before) or one column later (after), and the cursor
    ends on the last inserted character.
    """
    if register.is_empty:
        return False
    if register.kind is RegisterKind.LINE:
        new_lines = register.text.split('\n')
        row = buffer.cursor.row if where is PastePosition.BEFORE else buffer.cursor.row + 1
        buffer.lines[row:row] = new_lines
        buffer.cursor = CursorPosition(0, row)
        return True

    col = buffer.cursor.column
    line_len = len(buffer.current_line)
    if where is PastePosition.AFTER:
        # At end of line this appends rather than skipping a column
        col = min(col + 1, line_len)
    end = buffer.insert_text(register.text, CursorPosition(col, buffer.cursor.row))
    if register.text:
        if end.column > 0:
            buffer.cursor = CursorPosition(end.column - 1, end.row)
        else:
            buffer.cursor = end
    buffer.clamp_cursor()
    return True
