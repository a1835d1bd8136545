"""Test the buffer primitives and cursor clamping."""

import pytest
from redit.model import Buffer, CursorPosition, leading_whitespace


def create_buffer(lines, column=0, row=0, **kwargs):
    """Create a buffer with the cursor at (column, row)."""
    buffer = Buffer(lines, **kwargs)
    buffer.set_cursor(column, row)
    return buffer


def assert_cursor_in_bounds(buffer):
    assert 0 <= buffer.cursor.row < buffer.line_count
    assert 0 <= buffer.cursor.column <= len(buffer.lines[buffer.cursor.row])


def test_split_line_at_end_of_line():
    buffer = create_buffer(["abc", "def"], column=3, row=0)

    buffer.split_line_at_cursor()
    assert buffer.lines == ["abc", "", "def"]
    assert buffer.cursor == CursorPosition(0, 1)


def test_split_line_in_middle():
    buffer = create_buffer(["hello world"], column=5)

    buffer.split_line_at_cursor()
    assert buffer.lines == ["hello", " world"]
    assert buffer.cursor == CursorPosition(0, 1)


def test_backspace_at_line_start_joins_lines():
    buffer = create_buffer(["abc", "def"], column=0, row=1)

    buffer.backspace()
    assert buffer.lines == ["abcdef"]
    assert buffer.cursor == CursorPosition(3, 0)


def test_backspace_removes_previous_character():
    buffer = create_buffer(["abc"], column=2)

    buffer.backspace()
    assert buffer.lines == ["ac"]
    assert buffer.cursor.column == 1


def test_backspace_at_document_start_is_noop():
    buffer = create_buffer(["abc", "def"])

    buffer.backspace()
    assert buffer.lines == ["abc", "def"]
    assert buffer.cursor == CursorPosition(0, 0)


def test_backspace_removes_empty_pair_together():
    buffer = create_buffer([""])
    buffer.insert_char('(')
    assert buffer.lines == ["()"]

    buffer.backspace()
    assert buffer.lines == [""]
    assert buffer.cursor.column == 0


def test_backspace_keeps_closer_of_non_empty_pair():
    buffer = create_buffer(["(a)"], column=1)

    buffer.backspace()
    assert buffer.lines == ["a)"]


def test_backspace_without_pairing_removes_one_character():
    buffer = create_buffer(["()"], column=1, electric_pairs=False)

    buffer.backspace()
    assert buffer.lines == [")"]


def test_insert_char_advances_cursor():
    buffer = create_buffer(["ac"], column=1)

    buffer.insert_char('b')
    assert buffer.lines == ["abc"]
    assert buffer.cursor.column == 2


def test_insert_char_electric_pair():
    buffer = create_buffer(["x"], column=1)

    buffer.insert_char('[')
    assert buffer.lines == ["x[]"]
    assert buffer.cursor.column == 2


def test_insert_char_without_pairing():
    buffer = create_buffer([""], electric_pairs=False)

    buffer.insert_char('{')
    assert buffer.lines == ["{"]
    assert buffer.cursor.column == 1


def test_insert_char_custom_pairs():
    buffer = create_buffer([""], pairs={'<': '>'})

    buffer.insert_char('<')
    buffer.insert_char('(')
    assert buffer.lines == ["<(>"]


def test_delete_at_cursor_removes_character():
    buffer = create_buffer(["abc"], column=1)

    buffer.delete_at_cursor()
    assert buffer.lines == ["ac"]
    assert buffer.cursor.column == 1


def test_delete_at_cursor_on_last_character_clamps():
    buffer = create_buffer(["abc"], column=2)

    buffer.delete_at_cursor()
    assert buffer.lines == ["ab"]
    assert buffer.cursor.column == 2


def test_delete_at_cursor_end_of_line_is_noop():
    buffer = create_buffer(["abc", "def"], column=3)

    buffer.delete_at_cursor()
    assert buffer.lines == ["abc", "def"]


def test_delete_at_cursor_removes_empty_line():
    buffer = create_buffer(["a", "", "b"], row=1)

    buffer.delete_at_cursor()
    assert buffer.lines == ["a", "b"]
    assert buffer.cursor == CursorPosition(0, 1)


def test_delete_at_cursor_removes_empty_last_line():
    buffer = create_buffer(["a", ""], row=1)

    buffer.delete_at_cursor()
    assert buffer.lines == ["a"]
    assert buffer.cursor == CursorPosition(0, 0)


def test_delete_at_cursor_keeps_only_empty_line():
    buffer = create_buffer([""])

    buffer.delete_at_cursor()
    assert buffer.lines == [""]


def test_join_next_line_strips_indent_and_adds_space():
    buffer = create_buffer(["foo", "    bar"])

    buffer.join_next_line()
    assert buffer.lines == ["foo bar"]
    assert buffer.cursor.column == 3


def test_join_next_line_no_space_after_whitespace():
    buffer = create_buffer(["foo ", "bar"])

    buffer.join_next_line()
    assert buffer.lines == ["foo bar"]


def test_join_next_line_with_blank_next_line():
    buffer = create_buffer(["foo", "   ", "baz"])

    buffer.join_next_line()
    assert buffer.lines == ["foo", "baz"]


def test_join_next_line_onto_empty_line():
    buffer = create_buffer(["", "bar"])

    buffer.join_next_line()
    assert buffer.lines == ["bar"]
    assert buffer.cursor.column == 0


def test_join_on_last_line_is_noop():
    buffer = create_buffer(["foo", "bar"], row=1)

    buffer.join_next_line()
    assert buffer.lines == ["foo", "bar"]


def test_open_line_below_copies_indentation():
    buffer = create_buffer(["    if x:", "y"], column=2)

    buffer.open_line()
    assert buffer.lines == ["    if x:", "    ", "y"]
    assert buffer.cursor == CursorPosition(4, 1)


def test_open_line_above():
    buffer = create_buffer(["a", "\tb"], row=1)

    buffer.open_line(above=True)
    assert buffer.lines == ["a", "\t", "\tb"]
    assert buffer.cursor == CursorPosition(1, 1)


def test_indent_closing_brace_dedents():
    buffer = create_buffer(["  {", "x", "}"], row=2, indent_width=2)

    buffer.indent_current_line()
    assert buffer.lines[2] == "}"
    assert buffer.cursor == CursorPosition(0, 2)


def test_indent_inside_block():
    buffer = create_buffer(["  {", "x", "}"], row=1, indent_width=2)

    buffer.indent_current_line()
    assert buffer.lines[1] == "  x"
    assert buffer.cursor == CursorPosition(2, 1)


def test_indent_nested_blocks():
    buffer = create_buffer(["fn {", "if {", "        deep", "}", "}"], row=2)

    buffer.indent_current_line()
    assert buffer.lines[2] == "        deep"
    buffer.set_cursor(0, 1)
    buffer.indent_current_line()
    assert buffer.lines[1] == "    if {"


def test_indent_depth_never_negative():
    buffer = create_buffer(["}", "}", "   x"], row=2)

    buffer.indent_current_line()
    assert buffer.lines[2] == "x"


def test_indent_counts_braces_in_strings():
    # Textual heuristic: the brace inside the string still counts
    buffer = create_buffer(['s = "{"', "x"], row=1, indent_width=2)

    buffer.indent_current_line()
    assert buffer.lines[1] == "  x"


def test_insert_text_multiline_returns_end():
    buffer = create_buffer(["hello world"], column=5)

    end = buffer.insert_text(",\nbig")
    assert buffer.lines == ["hello,", "big world"]
    assert end == CursorPosition(3, 1)
    # The cursor itself is not moved
    assert buffer.cursor == CursorPosition(5, 0)


def test_delete_range_merges_lines():
    buffer = create_buffer(["hello", "big", "world"])

    removed = buffer.delete_range(CursorPosition(2, 0), CursorPosition(3, 2))
    assert removed == "llo\nbig\nwor"
    assert buffer.lines == ["held"]
    assert buffer.cursor == CursorPosition(2, 0)


def test_remove_line_keeps_one_line():
    buffer = create_buffer(["only"])

    assert buffer.remove_line(0) == "only"
    assert buffer.lines == [""]


def test_replace_contents_clamps_cursor():
    buffer = create_buffer(["a"])

    buffer.replace_contents(["abc", "de"], CursorPosition(10, 5))
    assert buffer.cursor == CursorPosition(2, 1)


def test_empty_line_list_becomes_single_empty_line():
    buffer = Buffer([])
    assert buffer.lines == [""]
    assert buffer.line_count == 1


def test_cursor_stays_in_bounds_over_edit_sequence():
    buffer = create_buffer(["int main() {", "  return 0;", "}"], column=5, row=1)
    operations = [
        lambda b: b.insert_char('('),
        lambda b: b.split_line_at_cursor(),
        lambda b: b.backspace(),
        lambda b: b.backspace(),
        lambda b: b.delete_at_cursor(),
        lambda b: b.join_next_line(),
        lambda b: b.move_line_end(),
        lambda b: b.split_line_at_cursor(),
        lambda b: b.indent_current_line(),
        lambda b: b.delete_at_cursor(),
        lambda b: b.open_line(above=True),
        lambda b: b.backspace(),
        lambda b: b.backspace(),
        lambda b: b.join_next_line(),
        lambda b: b.remove_line(b.cursor.row),
        lambda b: b.remove_line(b.cursor.row),
        lambda b: b.remove_line(b.cursor.row),
        lambda b: b.delete_at_cursor(),
        lambda b: b.backspace(),
    ]
    for operation in operations:
        operation(buffer)
        assert_cursor_in_bounds(buffer)


@pytest.mark.parametrize("column,expected", [(0, 4), (4, 11), (11, 13), (13, 16)])
def test_next_word(column, expected):
    buffer = create_buffer(["foo bar_baz, qux"], column=column)

    buffer.next_word()
    assert buffer.cursor.column == expected


def test_next_word_crosses_lines():
    buffer = create_buffer(["foo", "  bar"])

    buffer.next_word()
    assert buffer.cursor == CursorPosition(2, 1)


def test_previous_word_crosses_lines():
    buffer = create_buffer(["foo", "  bar"], column=2, row=1)

    buffer.previous_word()
    assert buffer.cursor == CursorPosition(0, 0)


def test_previous_word_within_line():
    buffer = create_buffer(["foo bar baz"], column=9)

    buffer.previous_word()
    assert buffer.cursor.column == 8
    buffer.previous_word()
    assert buffer.cursor.column == 4


def test_horizontal_motion_clamps():
    buffer = create_buffer(["  ab"])

    buffer.move_left()
    assert buffer.cursor.column == 0
    buffer.move_first_non_blank()
    assert buffer.cursor.column == 2
    buffer.move_line_end()
    buffer.move_right()
    assert buffer.cursor.column == 4
    buffer.move_line_start()
    assert buffer.cursor.column == 0


def test_leading_whitespace():
    assert leading_whitespace("  \tx y") == "  \t"
    assert leading_whitespace("   ") == "   "
    assert leading_whitespace("x") == ""


def test_cursor_ordering():
    assert CursorPosition(5, 0) < CursorPosition(0, 1)
    assert CursorPosition(1, 2) < CursorPosition(2, 2)
    assert CursorPosition(2, 2) >= CursorPosition(2, 2)
    assert not CursorPosition(0, 3) < CursorPosition(9, 2)
