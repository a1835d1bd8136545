"""Test Visual-mode selection spans."""

import unittest
from redit.clipboard import ClipboardRegister, PastePosition, RegisterKind, paste
from redit.model import Buffer, CursorPosition
from redit.selection import Selection


class TestSelection(unittest.TestCase):
    """Test selection operations."""

    def setUp(self):
        self.buffer = Buffer(["The quick brown fox", "jumps over the lazy dog"])

    def test_selection_starts_collapsed(self):
        selection = Selection.at(CursorPosition(4, 0))

        self.assertEqual(selection.anchor, CursorPosition(4, 0))
        self.assertEqual(selection.active, CursorPosition(4, 0))
        self.assertTrue(selection.is_empty)

    def test_update_moves_only_active_end(self):
        selection = Selection.at(CursorPosition(4, 0))
        selection.update(CursorPosition(9, 0))
        selection.update(CursorPosition(2, 1))

        self.assertEqual(selection.anchor, CursorPosition(4, 0))
        self.assertEqual(selection.active, CursorPosition(2, 1))

    def test_selection_does_not_alias_cursor(self):
        cursor = CursorPosition(4, 0)
        selection = Selection.at(cursor)
        cursor.column = 10

        self.assertEqual(selection.anchor, CursorPosition(4, 0))

    def test_normalized_orders_backward_selection(self):
        selection = Selection(anchor=CursorPosition(3, 1), active=CursorPosition(4, 0))

        start, end = selection.normalized()
        self.assertEqual(start, CursorPosition(4, 0))
        self.assertEqual(end, CursorPosition(3, 1))
        # Stored ends are left as they were
        self.assertEqual(selection.anchor, CursorPosition(3, 1))

    def test_text_across_lines(self):
        buffer = Buffer(["ab", "cd"])
        selection = Selection(anchor=CursorPosition(1, 0), active=CursorPosition(1, 1))

        self.assertEqual(selection.text(buffer), "b\nc")

    def test_text_single_line(self):
        selection = Selection(anchor=CursorPosition(9, 0), active=CursorPosition(4, 0))

        self.assertEqual(selection.text(self.buffer), "quick")

    def test_text_of_collapsed_selection_is_empty(self):
        selection = Selection.at(CursorPosition(4, 0))

        self.assertEqual(selection.text(self.buffer), "")

    def test_delete_merges_partial_lines(self):
        selection = Selection(anchor=CursorPosition(10, 0), active=CursorPosition(6, 1))

        removed = selection.delete(self.buffer)
        self.assertEqual(removed, "brown fox\njumps ")
        self.assertEqual(self.buffer.lines, ["The quick over the lazy dog"])
        self.assertEqual(self.buffer.cursor, CursorPosition(10, 0))

    def test_delete_then_paste_before_restores_document(self):
        original = list(self.buffer.lines)
        register = ClipboardRegister()
        selection = Selection(anchor=CursorPosition(6, 1), active=CursorPosition(4, 0))

        register.write(selection.delete(self.buffer), RegisterKind.CHARACTER)
        paste(self.buffer, register, PastePosition.BEFORE)
        self.assertEqual(self.buffer.lines, original)

    def test_stale_positions_are_clamped(self):
        selection = Selection(anchor=CursorPosition(0, 0), active=CursorPosition(99, 7))

        self.assertEqual(selection.text(Buffer(["ab", "cd"])), "ab\ncd")


if __name__ == '__main__':
    unittest.main()
