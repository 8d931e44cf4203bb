import datetime as dt
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator

import pandas as pd
from openpyxl.utils import get_column_letter

logger = logging.getLogger(__name__)

# Old Excel (XLS) limits
MAX_ROWS = 65536
MAX_COLUMNS = 256
DEFAULT_SHEET_NAME = "Sheet1"

DEFAULT_COLUMN_WIDTH = 10
COLUMN_WIDTH_STEP = 2
MIN_COLUMN_WIDTH = 3
MAX_COLUMN_WIDTH = 50


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


@dataclass(frozen=True, order=True)
class Address:
    """1-based (row, col) coordinate; ordering is row-major."""

    row: int
    col: int

    def __post_init__(self):
        if not (1 <= self.row <= MAX_ROWS and 1 <= self.col <= MAX_COLUMNS):
            raise ValueError(f"Address out of range: ({self.row}, {self.col})")

    @classmethod
    def clamped(cls, row: int, col: int) -> "Address":
        return cls(clamp(row, 1, MAX_ROWS), clamp(col, 1, MAX_COLUMNS))

    def offset(self, d_row: int, d_col: int) -> "Address":
        return Address.clamped(self.row + d_row, self.col + d_col)

    @property
    def label(self) -> str:
        return f"{get_column_letter(self.col)}{self.row}"


@dataclass(frozen=True)
class CellRange:
    """Inclusive rectangle between two addresses."""

    top: int
    left: int
    bottom: int
    right: int

    @classmethod
    def spanning(cls, a: Address, b: Address) -> "CellRange":
        return cls(
            min(a.row, b.row), min(a.col, b.col), max(a.row, b.row), max(a.col, b.col)
        )

    @property
    def height(self) -> int:
        return self.bottom - self.top + 1

    @property
    def width(self) -> int:
        return self.right - self.left + 1

    @property
    def size(self) -> int:
        return self.height * self.width

    def contains(self, row: int, col: int) -> bool:
        return self.top <= row <= self.bottom and self.left <= col <= self.right

    def columns(self) -> range:
        return range(self.left, self.right + 1)

    def addresses(self) -> Iterator[Address]:
        for r in range(self.top, self.bottom + 1):
            for c in range(self.left, self.right + 1):
                yield Address(r, c)

    @property
    def label(self) -> str:
        first = Address(self.top, self.left).label
        if self.size == 1:
            return first
        return f"{first}:{Address(self.bottom, self.right).label}"


class StyleTag(Enum):
    NONE = 1
    HIGHLIGHT_A = 2  # yellow background
    ACCENT_TEXT_A = 3  # red text
    ACCENT_TEXT_B = 4  # green text
    HIGHLIGHT_B = 5  # blue background
    ACCENT_TEXT_C = 6  # magenta text

    @property
    def label(self) -> str:
        return _STYLE_LABELS[self]


_STYLE_LABELS = {
    StyleTag.NONE: "cleared",
    StyleTag.HIGHLIGHT_A: "yellow bg",
    StyleTag.ACCENT_TEXT_A: "red text",
    StyleTag.ACCENT_TEXT_B: "green text",
    StyleTag.HIGHLIGHT_B: "blue bg",
    StyleTag.ACCENT_TEXT_C: "magenta text",
}


def is_empty_value(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def format_value(value: Any) -> str:
    if is_empty_value(value):
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, dt.datetime):
        if value.time() == dt.time(0, 0):
            return value.strftime("%Y-%m-%d")
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if isinstance(value, dt.date):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, dt.time):
        return value.strftime("%H:%M:%S")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass
class Cell:
    """One stored cell.

    formula is set only for formulas read from a file; value then holds the
    result cached by the program that wrote it, or None when there is none.
    """

    value: Any = None
    style: StyleTag = StyleTag.NONE
    formula: str | None = None

    @property
    def is_blank(self) -> bool:
        return (
            is_empty_value(self.value)
            and self.style is StyleTag.NONE
            and self.formula is None
        )

    @property
    def is_formula(self) -> bool:
        return self.formula is not None

    def display_text(self) -> str:
        if self.formula is not None and is_empty_value(self.value):
            return "=..."
        return format_value(self.value)

    def copy(self) -> "Cell":
        return Cell(self.value, self.style, self.formula)


EMPTY_CELL = Cell()


class Sheet:
    """Sparse cell storage for one worksheet."""

    def __init__(self, name: str, workbook: "Workbook | None" = None):
        self.name = name
        self.cells: dict[tuple[int, int], Cell] = {}
        self.column_widths: dict[int, int] = {}
        self._max_row = 0
        self._max_col = 0
        self._workbook = workbook

    def __repr__(self):
        return f"Sheet({self.name!r}, cells={len(self.cells)})"

    def _touch(self):
        if self._workbook is not None:
            self._workbook.dirty = True

    def _grow(self, row: int, col: int):
        self._max_row = max(self._max_row, row)
        self._max_col = max(self._max_col, col)

    def _store(self, addr: Address, cell: Cell):
        key = (addr.row, addr.col)
        if cell.is_blank:
            self.cells.pop(key, None)
        else:
            self.cells[key] = cell
            self._grow(addr.row, addr.col)
        self._touch()

    # ---------- cells ----------
    def get_cell(self, addr: Address) -> Cell:
        return self.cells.get((addr.row, addr.col), EMPTY_CELL)

    def set_cell(self, addr: Address, value: Any):
        current = self.get_cell(addr)
        if is_empty_value(value):
            value = None
        self._store(addr, Cell(value, current.style))

    def set_style(self, addr: Address, tag: StyleTag):
        current = self.get_cell(addr)
        self._store(addr, Cell(current.value, tag, current.formula))

    def set_formula(self, addr: Address, formula: str, cached: Any = None):
        current = self.get_cell(addr)
        if is_empty_value(cached):
            cached = None
        self._store(addr, Cell(cached, current.style, formula))

    def put(self, addr: Address, cell: Cell):
        """Write value and style together."""
        self._store(addr, cell.copy())

    def iter_cells(self) -> Iterator[tuple[Address, Cell]]:
        for (r, c), cell in sorted(self.cells.items()):
            yield Address(r, c), cell

    # ---------- bounds ----------
    def used_range(self) -> tuple[int, int]:
        return self._max_row, self._max_col

    def recompute_used_range(self) -> tuple[int, int]:
        self._max_row = max((r for r, _ in self.cells), default=0)
        self._max_col = max((c for _, c in self.cells), default=0)
        return self.used_range()

    # ---------- widths ----------
    def column_width(self, col: int, default: int = DEFAULT_COLUMN_WIDTH) -> int:
        return self.column_widths.get(col, default)

    def set_column_width(self, col: int, width: int | None):
        if width is None:
            self.column_widths.pop(col, None)
        else:
            self.column_widths[col] = width
        self._touch()

    # ---------- export ----------
    def to_frame(self) -> pd.DataFrame:
        rows, cols = self.used_range()
        data = [["" for _ in range(cols)] for _ in range(rows)]
        for (r, c), cell in self.cells.items():
            if r <= rows and c <= cols:
                data[r - 1][c - 1] = cell.display_text()
        return pd.DataFrame(data, columns=[get_column_letter(c) for c in range(1, cols + 1)])


class Workbook:
    """Ordered sheets plus the dirty flag used to decide whether a save is due."""

    def __init__(self, sheet_names: list[str] | None = None):
        self.sheets: list[Sheet] = []
        self.dirty = False
        for name in sheet_names or []:
            self.add_sheet(name)
        self.dirty = False

    @classmethod
    def blank(cls) -> "Workbook":
        return cls([DEFAULT_SHEET_NAME])

    def __len__(self):
        return len(self.sheets)

    def mark_clean(self):
        self.dirty = False

    def sheet_names(self) -> list[str]:
        return [s.name for s in self.sheets]

    def sheet(self, index: int) -> Sheet:
        return self.sheets[index]

    def sheet_by_name(self, name: str) -> Sheet:
        for sheet in self.sheets:
            if sheet.name == name:
                return sheet
        raise KeyError(name)

    def _next_free_name(self) -> str:
        taken = set(self.sheet_names())
        n = len(self.sheets) + 1
        while f"Sheet{n}" in taken:
            n += 1
        return f"Sheet{n}"

    def _check_name(self, name: str, ignore: Sheet | None = None):
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Sheet name must not be empty")
        for sheet in self.sheets:
            if sheet is not ignore and sheet.name == name:
                raise ValueError(f"Duplicate sheet name: {name}")

    def add_sheet(self, name: str | None = None, index: int | None = None) -> Sheet:
        if name is None:
            name = self._next_free_name()
        self._check_name(name)
        sheet = Sheet(name, self)
        if index is None:
            self.sheets.append(sheet)
        else:
            self.sheets.insert(clamp(index, 0, len(self.sheets)), sheet)
        self.dirty = True
        logger.debug("Added sheet %s", name)
        return sheet

    def remove_sheet(self, name: str) -> Sheet:
        if len(self.sheets) <= 1:
            raise ValueError("A workbook needs at least one sheet")
        sheet = self.sheet_by_name(name)
        self.sheets.remove(sheet)
        sheet._workbook = None
        self.dirty = True
        logger.debug("Removed sheet %s", name)
        return sheet

    def rename_sheet(self, old: str, new: str) -> Sheet:
        sheet = self.sheet_by_name(old)
        if old == new:
            return sheet
        self._check_name(new, ignore=sheet)
        sheet.name = new
        self.dirty = True
        return sheet

    # ---------- convenience (sheet, addr) API ----------
    def get_cell(self, sheet: Sheet, addr: Address) -> Cell:
        return sheet.get_cell(addr)

    def set_cell(self, sheet: Sheet, addr: Address, value: Any):
        sheet.set_cell(addr, value)

    def set_style(self, sheet: Sheet, addr: Address, tag: StyleTag):
        sheet.set_style(addr, tag)

    def used_range(self, sheet: Sheet) -> tuple[int, int]:
        return sheet.used_range()

    def column_width(self, sheet: Sheet, col: int) -> int:
        return sheet.column_width(col)
