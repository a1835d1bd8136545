"""Visual-mode selection: an anchored span over the buffer."""

from dataclasses import dataclass

from .model import Buffer, CursorPosition


@dataclass
class Selection:
    """Anchor and active end of a Visual-mode span.

    The anchor is fixed when Visual mode starts; cursor movement only updates
    the active end. Ordering happens when the span is used, never on storage.
    The span runs from the earlier position up to, but not including, the
    later one.
    """

    anchor: CursorPosition
    active: CursorPosition

    @classmethod
    def at(cls, position: CursorPosition) -> "Selection":
        return cls(anchor=position.copy(), active=position.copy())

    def update(self, position: CursorPosition):
        self.active = position.copy()

    def normalized(self) -> tuple[CursorPosition, CursorPosition]:
        if self.active < self.anchor:
            return self.active.copy(), self.anchor.copy()
        return self.anchor.copy(), self.active.copy()

    @property
    def is_empty(self) -> bool:
        return self.anchor == self.active

    def text(self, buffer: Buffer) -> str:
        start, end = self._clamped(buffer)
        return buffer.text_range(start, end)

    def delete(self, buffer: Buffer) -> str:
        """Remove the span from the buffer, leaving the cursor at its start."""
        start, end = self._clamped(buffer)
        return buffer.delete_range(start, end)

    def _clamped(self, buffer: Buffer) -> tuple[CursorPosition, CursorPosition]:
        start, end = self.normalized()
        last = buffer.line_count - 1
        for pos in (start, end):
            pos.row = max(0, min(pos.row, last))
            pos.column = max(0, min(pos.column, len(buffer.lines[pos.row])))
        return start, end
