import pytest

from selection import CursorState, Direction, JumpTarget
from workbook import MAX_COLUMNS, MAX_ROWS, Address, Workbook


@pytest.mark.parametrize("direction", list(Direction))
@pytest.mark.parametrize(
    "start",
    [Address(1, 1), Address(1, MAX_COLUMNS), Address(MAX_ROWS, 1), Address(MAX_ROWS, MAX_COLUMNS), Address(7, 7)],
)
def test_move_stays_in_bounds(start, direction):
    cursor = CursorState(start)
    cursor.move(direction)
    assert 1 <= cursor.focus.row <= MAX_ROWS
    assert 1 <= cursor.focus.col <= MAX_COLUMNS
    assert cursor.selection() is None


def test_move_at_edge_clamps_and_is_idempotent():
    cursor = CursorState(Address(1, 1))
    cursor.move(Direction.UP)
    cursor.move(Direction.UP)
    assert cursor.focus == Address(1, 1)


def test_extend_keeps_anchor_and_grows_rectangle():
    cursor = CursorState(Address(2, 2))
    cursor.move(Direction.RIGHT, extend=True)
    cursor.move(Direction.RIGHT, extend=True)
    cursor.move(Direction.DOWN, extend=True)
    assert cursor.anchor == Address(2, 2)
    area = cursor.selection()
    assert (area.top, area.left, area.bottom, area.right) == (2, 2, 3, 4)


def test_extend_back_to_anchor_collapses():
    cursor = CursorState(Address(5, 5))
    cursor.move(Direction.DOWN, extend=True)
    cursor.move(Direction.UP, extend=True)
    assert cursor.selection() is None
    assert cursor.target_range().size == 1
    assert cursor.focus == Address(5, 5)


def test_plain_move_collapses_selection():
    cursor = CursorState(Address(5, 5))
    cursor.move(Direction.DOWN, extend=True)
    cursor.move(Direction.LEFT)
    assert cursor.selection() is None
    assert cursor.focus == Address(6, 4)


def test_jumps_use_used_range():
    book = Workbook.blank()
    sheet = book.sheet(0)
    sheet.set_cell(Address(10, 4), "x")
    cursor = CursorState(Address(3, 2))
    cursor.move(Direction.RIGHT, extend=True)

    cursor.jump(JumpTarget.LAST_USED_COLUMN, sheet)
    assert cursor.focus == Address(3, 4)
    assert cursor.selection() is None

    cursor.jump(JumpTarget.LAST_USED_CELL, sheet)
    assert cursor.focus == Address(10, 4)

    cursor.jump(JumpTarget.ROW_START, sheet)
    assert cursor.focus == Address(10, 1)

    cursor.move_to(Address(10, 3))
    cursor.jump(JumpTarget.COLUMN_START, sheet)
    assert cursor.focus == Address(1, 3)

    cursor.move_to(Address(8, 8))
    cursor.jump(JumpTarget.DOCUMENT_START, sheet)
    assert cursor.focus == Address(1, 1)


def test_jump_on_empty_sheet_stays_at_origin():
    sheet = Workbook.blank().sheet(0)
    cursor = CursorState(Address(4, 4))
    cursor.jump(JumpTarget.LAST_USED_CELL, sheet)
    assert cursor.focus == Address(1, 1)


def test_scroll_into_view_moves_window_just_enough():
    cursor = CursorState(Address(1, 1))
    cursor.move_to(Address(30, 12))
    cursor.scroll_into_view(10, lambda left: 5)
    assert cursor.top_row == 21
    assert cursor.left_col == 8

    cursor.move_to(Address(25, 9))
    cursor.scroll_into_view(10, lambda left: 5)
    assert (cursor.top_row, cursor.left_col) == (21, 8)

    cursor.move_to(Address(2, 2))
    cursor.scroll_into_view(10, lambda left: 5)
    assert (cursor.top_row, cursor.left_col) == (2, 2)
