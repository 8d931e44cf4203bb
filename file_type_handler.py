import csv
import logging
import os
import re
import shutil
import tempfile

import openpyxl
import pandas as pd
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import column_index_from_string, get_column_letter

from cell_coercion import coerce_cell_text
from workbook import (
    MAX_COLUMN_WIDTH,
    MAX_COLUMNS,
    MAX_ROWS,
    MIN_COLUMN_WIDTH,
    Address,
    Sheet,
    StyleTag,
    Workbook,
    format_value,
    is_empty_value,
)

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = {".xlsx", ".csv"}
_HEX_RE = re.compile(r"[0-9A-F]{6}([0-9A-F]{2})?")

# Saved colours; loading also accepts the plain palette variants.
_FILLS = {
    StyleTag.HIGHLIGHT_A: "FFFFEF00",
    StyleTag.HIGHLIGHT_B: "FF0000FE",
}
_FONTS = {
    StyleTag.ACCENT_TEXT_A: "FFFF0001",
    StyleTag.ACCENT_TEXT_B: "FF008001",
    StyleTag.ACCENT_TEXT_C: "FFFF00FE",
}
_FILL_VARIANTS = {
    "FFFFFF00": StyleTag.HIGHLIGHT_A,
    "FFFFEF00": StyleTag.HIGHLIGHT_A,
    "FF0000FF": StyleTag.HIGHLIGHT_B,
    "FF0000FE": StyleTag.HIGHLIGHT_B,
    "FF00BFFF": StyleTag.HIGHLIGHT_B,
}
_FONT_VARIANTS = {
    "FFFF0000": StyleTag.ACCENT_TEXT_A,
    "FFFF0001": StyleTag.ACCENT_TEXT_A,
    "FF008000": StyleTag.ACCENT_TEXT_B,
    "FF008001": StyleTag.ACCENT_TEXT_B,
    "FF00FF00": StyleTag.ACCENT_TEXT_B,
    "FFFF00FF": StyleTag.ACCENT_TEXT_C,
    "FFFF00FE": StyleTag.ACCENT_TEXT_C,
}
_HIGHLIGHT_TEXT = {
    StyleTag.HIGHLIGHT_A: "FF000001",
    StyleTag.HIGHLIGHT_B: "FFFFFFFE",
}


class PersistenceError(Exception):
    def __init__(self, path, message):
        super().__init__(message)
        self.path = path


class UnsupportedFileType(PersistenceError):
    pass


class LoadError(PersistenceError):
    pass


class SaveError(PersistenceError):
    pass


def _normalize_argb(rgb) -> str | None:
    """Opaque AARRGGBB form of an openpyxl colour, or None for theme/indexed colours."""
    if not isinstance(rgb, str):
        return None
    rgb = rgb.strip().lstrip("#").upper()
    if not _HEX_RE.fullmatch(rgb):
        return None
    return "FF" + rgb[-6:]


def style_from_openpyxl(cell) -> StyleTag:
    fill = getattr(cell, "fill", None)
    if fill is not None and getattr(fill, "fill_type", None) == "solid":
        argb = _normalize_argb(getattr(fill.fgColor, "rgb", None))
        if argb in _FILL_VARIANTS:
            return _FILL_VARIANTS[argb]
    font = getattr(cell, "font", None)
    color = getattr(font, "color", None) if font is not None else None
    if color is not None:
        argb = _normalize_argb(getattr(color, "rgb", None))
        if argb in _FONT_VARIANTS:
            return _FONT_VARIANTS[argb]
    return StyleTag.NONE


def style_to_openpyxl(cell, tag: StyleTag):
    if tag in _FILLS:
        argb = _FILLS[tag]
        cell.fill = PatternFill(start_color=argb, end_color=argb, fill_type="solid")
        cell.font = Font(color=_HIGHLIGHT_TEXT[tag])
    elif tag in _FONTS:
        cell.font = Font(color=_FONTS[tag])


def csv_field_value(text: str):
    """Typed value for a CSV field, kept as text unless it prints back unchanged."""
    value = coerce_cell_text(text)
    if value is None or isinstance(value, str):
        return value
    if format_value(value) != text:
        return text
    return value


class FileTypeHandler:
    """Reads and writes a Workbook for one path, picking the codec by extension."""

    def __init__(self, path: str):
        self.path = path
        _, ext = os.path.splitext(path)
        self.ext = ext.lower()

        if self.ext not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFileType(path, "Unsupported file type (use .xlsx or .csv)")

    def load_or_create(self) -> Workbook:
        if not os.path.exists(self.path) or os.path.getsize(self.path) == 0:
            logger.info("%s does not exist yet; starting a blank workbook", self.path)
            return Workbook.blank()

        if self.ext == ".csv":
            workbook = self._load_csv()
        else:
            workbook = self._load_excel()
        for sheet in workbook.sheets:
            sheet.recompute_used_range()
        workbook.mark_clean()
        logger.info("Loaded %s (%d sheet(s))", self.path, len(workbook))
        return workbook

    def save(self, workbook: Workbook) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(suffix=self.ext, dir=directory)
            os.close(fd)
            if self.ext == ".csv":
                self._write_csv(workbook, tmp_path)
            else:
                self._write_excel(workbook, tmp_path)
            self._copy_permissions(tmp_path)
            os.replace(tmp_path, self.path)
        except Exception as exc:
            # the target is only ever replaced whole
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise SaveError(self.path, str(exc) or type(exc).__name__) from exc
        logger.info("Saved %s", self.path)

    def _copy_permissions(self, tmp_path: str):
        # mkstemp files are 0600; keep the document's own mode
        if os.path.exists(self.path):
            shutil.copymode(self.path, tmp_path)
        else:
            umask = os.umask(0)
            os.umask(umask)
            os.chmod(tmp_path, 0o666 & ~umask)

    # ---------- xlsx ----------
    def _load_excel(self) -> Workbook:
        try:
            book = openpyxl.load_workbook(self.path)
            # second pass for the results the writing program cached
            cached = openpyxl.load_workbook(self.path, data_only=True)
        except Exception as exc:
            raise LoadError(self.path, f"Failed to read file: {exc}") from exc

        workbook = Workbook()
        try:
            for ws in book.worksheets:
                sheet = workbook.add_sheet(ws.title)
                self._read_worksheet(ws, sheet, cached[ws.title])
        finally:
            book.close()
            cached.close()
        if len(workbook) == 0:
            return Workbook.blank()
        return workbook

    def _read_worksheet(self, ws, sheet: Sheet, cached_ws):
        for row in ws.iter_rows():
            for cell in row:
                r, c = cell.row, cell.column
                if r is None or c is None or r > MAX_ROWS or c > MAX_COLUMNS:
                    continue
                addr = Address(r, c)
                tag = style_from_openpyxl(cell)
                if cell.data_type == "f":
                    # array formulas come back as objects carrying .text
                    formula = str(getattr(cell.value, "text", cell.value))
                    if not formula.startswith("="):
                        formula = "=" + formula
                    sheet.set_formula(addr, formula, cached_ws.cell(row=r, column=c).value)
                elif not is_empty_value(cell.value):
                    sheet.set_cell(addr, cell.value)
                if tag is not StyleTag.NONE:
                    sheet.set_style(addr, tag)

        for letter, dim in ws.column_dimensions.items():
            width = getattr(dim, "width", None)
            if not width or not getattr(dim, "customWidth", False):
                continue
            start = dim.min or column_index_from_string(letter)
            end = dim.max or start
            clamped = max(MIN_COLUMN_WIDTH, min(MAX_COLUMN_WIDTH, int(round(width))))
            for col in range(start, min(end, MAX_COLUMNS) + 1):
                sheet.column_widths[col] = clamped

    def _write_excel(self, workbook: Workbook, target: str):
        book = openpyxl.Workbook()
        book.remove(book.active)
        for sheet in workbook.sheets:
            ws = book.create_sheet(title=sheet.name)
            for addr, cell in sheet.iter_cells():
                out = ws.cell(row=addr.row, column=addr.col)
                if cell.is_formula:
                    out.value = cell.formula
                elif not is_empty_value(cell.value):
                    out.value = cell.value
                    if isinstance(cell.value, str) and cell.value.startswith("="):
                        # typed text, not a formula
                        out.data_type = "s"
                style_to_openpyxl(out, cell.style)
            for col, width in sorted(sheet.column_widths.items()):
                ws.column_dimensions[get_column_letter(col)].width = width
        book.save(target)

    # ---------- csv ----------
    def _csv_width(self) -> int:
        with open(self.path, newline="", encoding="utf-8") as f:
            return max((len(row) for row in csv.reader(f)), default=0)

    def _load_csv(self) -> Workbook:
        try:
            width = self._csv_width()
            if width == 0:
                return Workbook.blank()
            # naming every column pads short rows instead of rejecting long ones
            df = pd.read_csv(
                self.path,
                header=None,
                names=list(range(width)),
                dtype=str,
                keep_default_na=False,
                encoding="utf-8",
            ).fillna("")
        except pd.errors.EmptyDataError:
            return Workbook.blank()
        except (pd.errors.ParserError, csv.Error, UnicodeDecodeError, OSError) as exc:
            raise LoadError(self.path, f"Failed to read file: {exc}") from exc

        workbook = Workbook.blank()
        sheet = workbook.sheet(0)
        n_rows = min(len(df), MAX_ROWS)
        n_cols = min(df.shape[1], MAX_COLUMNS)
        for r in range(n_rows):
            for c in range(n_cols):
                value = csv_field_value(df.iat[r, c])
                if value is not None:
                    sheet.set_cell(Address(r + 1, c + 1), value)
        return workbook

    def _write_csv(self, workbook: Workbook, target: str):
        df = workbook.sheet(0).to_frame()
        df.to_csv(target, header=False, index=False)


def load(path: str) -> Workbook:
    return FileTypeHandler(path).load_or_create()


def save(workbook: Workbook, path: str) -> None:
    FileTypeHandler(path).save(workbook)
