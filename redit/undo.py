from dataclasses import dataclass

from .model import Buffer, CursorPosition


@dataclass
class Snapshot:
    lines: list[str]
    cursor: CursorPosition

    @classmethod
    def of(cls, buffer: Buffer) -> "Snapshot":
        return cls(lines=list(buffer.lines), cursor=buffer.cursor.copy())

    def matches(self, buffer: Buffer) -> bool:
        return self.lines == buffer.lines and self.cursor == buffer.cursor


class History:
    """Linear undo history of full-buffer snapshots.

    `index` points at the snapshot matching the live buffer. Snapshots past
    it are only reachable through redo and are dropped by the next new edit.
    """

    def __init__(self, buffer: Buffer, max_entries: int = 500):
        self.buffer = buffer
        self._max_entries = max_entries
        self._snapshots: list[Snapshot] = []
        self.index = 0
        self.reset()

    def __len__(self):
        return len(self._snapshots)

    def reset(self):
        """Forget everything; the live buffer becomes the only snapshot."""
        self._snapshots = [Snapshot.of(self.buffer)]
        self.index = 0

    def snapshot(self) -> bool:
        """Record the live state after a complete edit.

        Returns False when the live state already equals the current snapshot.
        """
        if self._snapshots[self.index].matches(self.buffer):
            return False
        # Any new edit invalidates redo history
        del self._snapshots[self.index + 1:]
        self._snapshots.append(Snapshot.of(self.buffer))
        # Cap history
        if len(self._snapshots) > self._max_entries:
            self._snapshots.pop(0)
        self.index = len(self._snapshots) - 1
        return True

    def can_undo(self) -> bool:
        return self.index > 0

    def can_redo(self) -> bool:
        return self.index + 1 < len(self._snapshots)

    def undo(self) -> bool:
        if not self.can_undo():
            return False
        self.index -= 1
        self._restore()
        return True

    def redo(self) -> bool:
        if not self.can_redo():
            return False
        self.index += 1
        self._restore()
        return True

    def sync_cursor(self):
        """Record where the cursor is now, without adding an undo step.

        Called before an edit so that undoing it puts the cursor back where
        the user left it rather than where the previous edit did.
        """
        current = self._snapshots[self.index]
        if current.lines == self.buffer.lines:
            current.cursor = self.buffer.cursor.copy()

    def _restore(self):
        snap = self._snapshots[self.index]
        self.buffer.replace_contents(snap.lines, snap.cursor)
