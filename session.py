import logging

from clipboard import Clipboard, mirror_to_system
from column_widths import ColumnWidthManager
from dispatcher import Action, Browse, Command, Editing, Mode, SheetSelect, resolve
from edit_buffer import EditBuffer
from events import KeyEvent
from file_type_handler import SaveError
from selection import CursorState
from sheet_navigator import SheetNavigator
import style_marker
from workbook import Sheet, Workbook

logger = logging.getLogger(__name__)


class GridSession:
    """Owns one workbook and applies one keystroke at a time to it."""

    def __init__(self, workbook: Workbook, path=None, persistence=None, config=None):
        self.workbook = workbook
        self.path = path
        self.persistence = persistence
        self.config = config or {}

        self.mode: Mode = Browse()
        self.clipboard = Clipboard()
        self.navigator = SheetNavigator(workbook)
        self.widths = ColumnWidthManager.from_config(self.config)
        self._cursors: dict[Sheet, CursorState] = {}

        self.status_message: str | None = None
        self.quit_requested = False

        self._handlers = {
            Command.IGNORE: lambda arg: None,
            Command.MOVE: lambda arg: self.cursor.move(arg, extend=False),
            Command.EXTEND: lambda arg: self.cursor.move(arg, extend=True),
            Command.JUMP: lambda arg: self.cursor.jump(arg, self.sheet),
            Command.CLEAR_SELECTION: lambda arg: self.cursor.clear_selection(),
            Command.COPY: self._copy,
            Command.PASTE: self._paste,
            Command.MARK: self._mark,
            Command.WIDEN_COLUMN: self._widen,
            Command.NARROW_COLUMN: self._narrow,
            Command.SWITCH_SHEET: self._switch_sheet,
            Command.OPEN_SELECTOR: self._open_selector,
            Command.ENTER_EDIT: self._enter_edit,
            Command.SAVE: lambda arg: self.save(),
            Command.QUIT: self._quit,
            Command.INSERT_TEXT: lambda arg: self.edit_buffer.insert(arg),
            Command.BACKSPACE: lambda arg: self.edit_buffer.backspace(),
            Command.DELETE: lambda arg: self.edit_buffer.delete(),
            Command.CARET: self._caret,
            Command.COMMIT: self._commit,
            Command.CANCEL_EDIT: self._cancel_edit,
            Command.SELECTOR_MOVE: lambda arg: self.mode.selector.move(arg),
            Command.SELECTOR_CONFIRM: self._confirm_selector,
            Command.SELECTOR_CANCEL: self._leave_selector,
        }

    # ---------- state accessors ----------
    @property
    def sheet(self) -> Sheet:
        return self.navigator.sheet

    @property
    def cursor(self) -> CursorState:
        return self.cursor_for(self.sheet)

    def cursor_for(self, sheet: Sheet) -> CursorState:
        if sheet not in self._cursors:
            self._cursors[sheet] = CursorState()
        return self._cursors[sheet]

    @property
    def edit_buffer(self) -> EditBuffer | None:
        return self.mode.buffer if isinstance(self.mode, Editing) else None

    @property
    def dirty(self) -> bool:
        return self.workbook.dirty

    def _set_status(self, msg: str):
        self.status_message = msg

    # ---------- input ----------
    def handle(self, event: KeyEvent) -> Action:
        self.status_message = None
        action = resolve(self.mode, event)
        if action.command is not Command.IGNORE:
            logger.debug("%s -> %s(%s)", self.mode.name, action.command.name, action.arg)
        self._handlers[action.command](action.arg)
        return action

    # ---------- clipboard ----------
    def _copy(self, _arg=None):
        count = self.clipboard.copy(self.sheet, self.cursor.target_range())
        self._set_status(f"Copied {count} cell(s)")
        argv = self.config.get("CLIPBOARD_INTERFACE_COMMAND")
        if argv and not mirror_to_system(self.clipboard, argv):
            self._set_status(f"Copied {count} cell(s); system clipboard failed")

    def _paste(self, _arg=None):
        if self.clipboard.empty:
            self._set_status("Clipboard is empty")
            return
        rows, cols = self.clipboard.paste(self.sheet, self.cursor.focus)
        self._set_status(f"Pasted {rows}x{cols} cells")

    # ---------- styling / widths ----------
    def _mark(self, tag):
        count = style_marker.apply(self.sheet, self.cursor.target_range(), tag)
        self._set_status(f"Marked {count} cell(s): {tag.label}")

    def _widen(self, _arg=None):
        columns = self.cursor.target_range().columns()
        if self.widths.expand(self.sheet, columns):
            self._set_status(f"Column width at maximum ({self.widths.maximum})")

    def _narrow(self, _arg=None):
        columns = self.cursor.target_range().columns()
        if self.widths.reduce(self.sheet, columns):
            self._set_status(f"Column width at minimum ({self.widths.minimum})")

    # ---------- sheets ----------
    def _switch_sheet(self, delta):
        if self.navigator.switch(delta):
            self._set_status(f"Sheet: {self.sheet.name}")

    def _open_selector(self, _arg=None):
        self.mode = SheetSelect(self.navigator.open_selector())

    def _confirm_selector(self, _arg=None):
        self.navigator.select(self.mode.selector.index)
        self._leave_selector()

    def _leave_selector(self, _arg=None):
        self.mode = Browse()

    # ---------- editing ----------
    def _enter_edit(self, _arg=None):
        focus = self.cursor.focus
        cell = self.sheet.get_cell(focus)
        if cell.is_formula:
            self._set_status(f"Formula (read-only): {cell.formula}")
            return
        self.cursor.clear_selection()
        self.mode = Editing(EditBuffer.open(self.sheet, focus))

    def _caret(self, where):
        buf = self.edit_buffer
        {
            "left": buf.caret_left,
            "right": buf.caret_right,
            "home": buf.caret_home,
            "end": buf.caret_end,
        }[where]()

    def _commit(self, direction):
        buf = self.edit_buffer
        if buf.commit(self.sheet):
            logger.debug("Committed %s on %s", buf.target.label, self.sheet.name)
        self.mode = Browse()
        self.cursor.move_to(buf.target)
        self.cursor.move(direction, extend=False)

    def _cancel_edit(self, _arg=None):
        self.mode = Browse()

    # ---------- persistence ----------
    def save(self) -> bool:
        if self.persistence is None or not self.path:
            self._set_status("Save failed: no file path")
            return False
        try:
            self.persistence.save(self.workbook, self.path)
        except SaveError as exc:
            logger.warning("Save of %s failed: %s", self.path, exc)
            self._set_status(f"Save failed: {exc}")
            return False
        self.workbook.mark_clean()
        self._set_status(f"Saved: {self.path}")
        return True

    def _quit(self, _arg=None):
        self.quit_requested = True
