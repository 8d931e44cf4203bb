from dataclasses import dataclass

from openpyxl.utils import get_column_letter

from dispatcher import Editing, SheetSelect
from workbook import MAX_COLUMNS, MAX_ROWS, Address, StyleTag

# one blank column between cells
COLUMN_GAP = 1
# width of the row-number gutter
ROW_LABEL_WIDTH = 6


@dataclass(frozen=True)
class VisibleColumn:
    index: int
    label: str
    width: int


@dataclass(frozen=True)
class RenderCell:
    text: str
    style: StyleTag
    cursor: bool = False
    selected: bool = False
    formula: bool = False


@dataclass(frozen=True)
class RenderModel:
    """Everything the screen needs for one tick, detached from the session."""

    sheet_name: str
    sheet_index: int
    sheet_count: int
    rows: tuple[int, ...]
    columns: tuple[VisibleColumn, ...]
    cells: tuple[tuple[RenderCell, ...], ...]
    focus: Address
    selection: tuple[int, int, int, int] | None
    mode: str
    edit_text: str | None
    edit_caret: int
    selector_names: tuple[str, ...]
    selector_index: int
    status_message: str | None
    dirty: bool
    path: str | None

    @property
    def focus_label(self) -> str:
        return self.focus.label

    def cell_at(self, row: int, col: int) -> RenderCell | None:
        try:
            r = self.rows.index(row)
        except ValueError:
            return None
        for c, column in enumerate(self.columns):
            if column.index == col:
                return self.cells[r][c]
        return None


def _columns_that_fit(session, left_col: int, width: int) -> int:
    available = max(1, width - ROW_LABEL_WIDTH)
    used = 0
    count = 0
    for col in range(left_col, MAX_COLUMNS + 1):
        w = session.widths.width(session.sheet, col) + COLUMN_GAP
        if count and used + w > available:
            break
        used += w
        count += 1
    return count


def build(session, rows: int, width: int) -> RenderModel:
    """Snapshot the session for a grid area of `rows` lines and `width` cells.

    rows excludes the header line. Scrolls the active cursor into view first.
    """
    sheet = session.sheet
    cursor = session.cursor
    rows = max(1, rows)
    cursor.scroll_into_view(rows, lambda left: _columns_that_fit(session, left, width))

    n_cols = _columns_that_fit(session, cursor.left_col, width)
    columns = tuple(
        VisibleColumn(col, get_column_letter(col), session.widths.width(sheet, col))
        for col in range(cursor.left_col, min(MAX_COLUMNS, cursor.left_col + n_cols - 1) + 1)
    )
    row_numbers = tuple(range(cursor.top_row, min(MAX_ROWS, cursor.top_row + rows - 1) + 1))

    selected = cursor.selection()
    grid = []
    for r in row_numbers:
        line = []
        for column in columns:
            cell = sheet.get_cell(Address(r, column.index))
            line.append(
                RenderCell(
                    text=cell.display_text(),
                    style=cell.style,
                    cursor=(r, column.index) == (cursor.focus.row, cursor.focus.col),
                    selected=selected is not None and selected.contains(r, column.index),
                    formula=cell.is_formula,
                )
            )
        grid.append(tuple(line))

    mode = session.mode
    edit_text, edit_caret = None, 0
    if isinstance(mode, Editing):
        edit_text, edit_caret = mode.buffer.working, mode.buffer.caret
    selector_names, selector_index = (), 0
    if isinstance(mode, SheetSelect):
        selector_names, selector_index = mode.selector.names, mode.selector.index

    bounds = None
    if selected is not None:
        bounds = (selected.top, selected.left, selected.bottom, selected.right)

    return RenderModel(
        sheet_name=sheet.name,
        sheet_index=session.navigator.active,
        sheet_count=len(session.workbook),
        rows=row_numbers,
        columns=columns,
        cells=tuple(grid),
        focus=cursor.focus,
        selection=bounds,
        mode=mode.name,
        edit_text=edit_text,
        edit_caret=edit_caret,
        selector_names=tuple(selector_names),
        selector_index=selector_index,
        status_message=session.status_message,
        dirty=session.dirty,
        path=session.path,
    )
