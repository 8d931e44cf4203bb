"""Mode-guarded mapping from keystrokes to commands.

The three modes form a closed set. ``resolve`` is total: every
(mode, event) pair yields an Action, and anything a mode does not accept
yields ``Command.IGNORE``.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from edit_buffer import EditBuffer
from events import KeyEvent
from selection import Direction, JumpTarget
from sheet_navigator import SheetSelector
from style_marker import TAG_KEYS


@dataclass
class Browse:
    name = "BROWSE"


@dataclass
class Editing:
    buffer: EditBuffer
    name = "EDIT"


@dataclass
class SheetSelect:
    selector: SheetSelector
    name = "SHEETS"


Mode = Browse | Editing | SheetSelect


class Command(Enum):
    IGNORE = auto()
    # browse
    MOVE = auto()
    EXTEND = auto()
    JUMP = auto()
    CLEAR_SELECTION = auto()
    COPY = auto()
    PASTE = auto()
    MARK = auto()
    WIDEN_COLUMN = auto()
    NARROW_COLUMN = auto()
    SWITCH_SHEET = auto()
    OPEN_SELECTOR = auto()
    ENTER_EDIT = auto()
    SAVE = auto()
    QUIT = auto()
    # editing
    INSERT_TEXT = auto()
    BACKSPACE = auto()
    DELETE = auto()
    CARET = auto()
    COMMIT = auto()
    CANCEL_EDIT = auto()
    # sheet selector
    SELECTOR_MOVE = auto()
    SELECTOR_CONFIRM = auto()
    SELECTOR_CANCEL = auto()


@dataclass(frozen=True)
class Action:
    command: Command
    arg: Any = None


IGNORE = Action(Command.IGNORE)

_ARROWS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}

# FPS-style movement; uppercase extends the selection
_WASD = {
    "w": Direction.UP,
    "a": Direction.LEFT,
    "s": Direction.DOWN,
    "d": Direction.RIGHT,
}

_BROWSE_KEYS = {
    "enter": Action(Command.MOVE, Direction.DOWN),
    "tab": Action(Command.MOVE, Direction.RIGHT),
    "backtab": Action(Command.MOVE, Direction.LEFT),
    "home": Action(Command.JUMP, JumpTarget.ROW_START),
    "end": Action(Command.JUMP, JumpTarget.LAST_USED_COLUMN),
    "escape": Action(Command.CLEAR_SELECTION),
    "pageup": Action(Command.SWITCH_SHEET, -1),
    "pagedown": Action(Command.SWITCH_SHEET, 1),
    "f2": Action(Command.ENTER_EDIT),
    "f4": Action(Command.OPEN_SELECTOR),
    "f5": Action(Command.COPY),
    "f6": Action(Command.PASTE),
}

_BROWSE_CTRL_KEYS = {
    "home": Action(Command.JUMP, JumpTarget.DOCUMENT_START),
    "end": Action(Command.JUMP, JumpTarget.LAST_USED_CELL),
    "up": Action(Command.JUMP, JumpTarget.COLUMN_START),
}

_BROWSE_CHARS = {
    "c": Action(Command.COPY),
    "v": Action(Command.PASTE),
    "e": Action(Command.WIDEN_COLUMN),
    "r": Action(Command.NARROW_COLUMN),
}

_BROWSE_CTRL_CHARS = {
    "s": Action(Command.SAVE),
    "w": Action(Command.QUIT),
    "q": Action(Command.QUIT),
    "c": Action(Command.QUIT),
}

_EDIT_KEYS = {
    "enter": Action(Command.COMMIT, Direction.DOWN),
    "tab": Action(Command.COMMIT, Direction.RIGHT),
    "backtab": Action(Command.COMMIT, Direction.LEFT),
    "escape": Action(Command.CANCEL_EDIT),
    "backspace": Action(Command.BACKSPACE),
    "delete": Action(Command.DELETE),
    "left": Action(Command.CARET, "left"),
    "right": Action(Command.CARET, "right"),
    "home": Action(Command.CARET, "home"),
    "end": Action(Command.CARET, "end"),
}

_SELECT_KEYS = {
    "up": Action(Command.SELECTOR_MOVE, -1),
    "down": Action(Command.SELECTOR_MOVE, 1),
    "enter": Action(Command.SELECTOR_CONFIRM),
    "escape": Action(Command.SELECTOR_CANCEL),
}

_SELECT_CHARS = {
    "w": Action(Command.SELECTOR_MOVE, -1),
    "s": Action(Command.SELECTOR_MOVE, 1),
}


def _resolve_browse(event: KeyEvent) -> Action:
    if event.key == "char" and event.char:
        if event.ctrl:
            return _BROWSE_CTRL_CHARS.get(event.char, IGNORE)
        lowered = event.char.lower()
        if lowered in _WASD:
            command = Command.EXTEND if event.shift else Command.MOVE
            return Action(command, _WASD[lowered])
        if event.char in TAG_KEYS:
            return Action(Command.MARK, TAG_KEYS[event.char])
        return _BROWSE_CHARS.get(event.char, IGNORE)

    if event.key in _ARROWS and not event.ctrl:
        command = Command.EXTEND if event.shift else Command.MOVE
        return Action(command, _ARROWS[event.key])
    if event.ctrl:
        return _BROWSE_CTRL_KEYS.get(event.key, IGNORE)
    return _BROWSE_KEYS.get(event.key, IGNORE)


def _resolve_editing(event: KeyEvent) -> Action:
    if event.key == "char":
        if event.ctrl or not event.char:
            return IGNORE
        return Action(Command.INSERT_TEXT, event.char)
    if event.ctrl:
        return IGNORE
    return _EDIT_KEYS.get(event.key, IGNORE)


def _resolve_sheet_select(event: KeyEvent) -> Action:
    if event.ctrl:
        return IGNORE
    if event.key == "char":
        return _SELECT_CHARS.get(event.char, IGNORE)
    return _SELECT_KEYS.get(event.key, IGNORE)


def resolve(mode: Mode, event: KeyEvent) -> Action:
    if isinstance(mode, Editing):
        return _resolve_editing(event)
    if isinstance(mode, SheetSelect):
        return _resolve_sheet_select(event)
    return _resolve_browse(event)
