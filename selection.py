from enum import Enum
from typing import Callable

from workbook import MAX_COLUMNS, MAX_ROWS, Address, CellRange, Sheet


class Direction(Enum):
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)


class JumpTarget(Enum):
    ROW_START = "row_start"
    COLUMN_START = "column_start"
    LAST_USED_COLUMN = "last_used_column"
    LAST_USED_CELL = "last_used_cell"
    DOCUMENT_START = "document_start"


class CursorState:
    """Focus cell, optional selection anchor and viewport origin for one sheet."""

    def __init__(self, focus: Address | None = None):
        self.focus = focus or Address(1, 1)
        self.anchor: Address | None = None
        # 1-based top-left of the visible grid window
        self.top_row = 1
        self.left_col = 1

    def selection(self) -> CellRange | None:
        if self.anchor is None or self.anchor == self.focus:
            return None
        return CellRange.spanning(self.anchor, self.focus)

    def target_range(self) -> CellRange:
        return self.selection() or CellRange.spanning(self.focus, self.focus)

    def clear_selection(self):
        self.anchor = None

    def move(self, direction: Direction, extend: bool = False):
        d_row, d_col = direction.value
        if extend:
            if self.anchor is None:
                self.anchor = self.focus
        else:
            self.anchor = None
        self.focus = self.focus.offset(d_row, d_col)

    def move_to(self, addr: Address):
        self.anchor = None
        self.focus = addr

    def jump(self, target: JumpTarget, sheet: Sheet):
        max_row, max_col = sheet.used_range()
        row, col = self.focus.row, self.focus.col
        if target is JumpTarget.ROW_START:
            col = 1
        elif target is JumpTarget.COLUMN_START:
            row = 1
        elif target is JumpTarget.LAST_USED_COLUMN:
            col = max(1, max_col)
        elif target is JumpTarget.LAST_USED_CELL:
            row, col = max(1, max_row), max(1, max_col)
        elif target is JumpTarget.DOCUMENT_START:
            row, col = 1, 1
        self.move_to(Address.clamped(row, col))

    # ---------- viewport ----------
    def scroll_into_view(self, visible_rows: int, visible_cols_from: Callable[[int], int]):
        """Shift the window just enough that focus is on screen.

        visible_cols_from(left_col) returns how many columns fit when the
        window starts at left_col (widths differ per column).
        """
        visible_rows = max(1, visible_rows)
        row, col = self.focus.row, self.focus.col

        if row < self.top_row:
            self.top_row = row
        elif row >= self.top_row + visible_rows:
            self.top_row = row - visible_rows + 1
        self.top_row = max(1, min(self.top_row, MAX_ROWS))

        if col < self.left_col:
            self.left_col = col
        else:
            while col >= self.left_col + max(1, visible_cols_from(self.left_col)):
                self.left_col += 1
        self.left_col = max(1, min(self.left_col, MAX_COLUMNS))
