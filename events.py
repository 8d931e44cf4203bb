import curses
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyEvent:
    """Terminal-independent keystroke.

    key is a symbolic name ("up", "enter", "f2", ...) or "char" for a
    printable character / Ctrl+letter, in which case char holds the letter.
    """

    key: str
    char: str | None = None
    shift: bool = False
    ctrl: bool = False

    @classmethod
    def of_char(cls, char: str) -> "KeyEvent":
        return cls("char", char, shift=char.isalpha() and char.isupper())

    @classmethod
    def ctrl_char(cls, letter: str) -> "KeyEvent":
        return cls("char", letter.lower(), ctrl=True)


UNKNOWN = KeyEvent("unknown")

_CURSES_KEYS = {
    curses.KEY_UP: ("up", False),
    curses.KEY_DOWN: ("down", False),
    curses.KEY_LEFT: ("left", False),
    curses.KEY_RIGHT: ("right", False),
    curses.KEY_SR: ("up", True),
    curses.KEY_SF: ("down", True),
    curses.KEY_SLEFT: ("left", True),
    curses.KEY_SRIGHT: ("right", True),
    curses.KEY_HOME: ("home", False),
    curses.KEY_END: ("end", False),
    curses.KEY_PPAGE: ("pageup", False),
    curses.KEY_NPAGE: ("pagedown", False),
    curses.KEY_ENTER: ("enter", False),
    curses.KEY_BTAB: ("backtab", False),
    curses.KEY_BACKSPACE: ("backspace", False),
    curses.KEY_DC: ("delete", False),
}

# xterm-style modified keys that only have a terminfo name
_KEYNAMES = {
    "kHOM5": KeyEvent("home", ctrl=True),
    "kEND5": KeyEvent("end", ctrl=True),
    "kUP5": KeyEvent("up", ctrl=True),
    "kUP2": KeyEvent("up", shift=True),
    "kDN2": KeyEvent("down", shift=True),
    "kLFT2": KeyEvent("left", shift=True),
    "kRIT2": KeyEvent("right", shift=True),
}


def _keyname(ch: int) -> str | None:
    try:
        return curses.keyname(ch).decode("ascii", errors="replace")
    except (curses.error, ValueError):
        return None


def from_curses(ch: int | str, keyname=_keyname) -> KeyEvent | None:
    """Translate a get_wch() result; None means "no input this tick".

    get_wch() hands back characters as str (already decoded, so "é" arrives
    whole) and special keys as int codes.
    """
    if isinstance(ch, str):
        if len(ch) != 1:
            return UNKNOWN
        if ch.isprintable():
            return KeyEvent.of_char(ch)
        ch = ord(ch)
    if ch == -1:
        return None
    if ch in (10, 13):
        return KeyEvent("enter")
    if ch == 9:
        return KeyEvent("tab")
    if ch == 27:
        return KeyEvent("escape")
    if ch in (8, 127):
        return KeyEvent("backspace")
    if ch in _CURSES_KEYS:
        key, shift = _CURSES_KEYS[ch]
        return KeyEvent(key, shift=shift)
    if curses.KEY_F0 < ch <= curses.KEY_F0 + 12:
        return KeyEvent(f"f{ch - curses.KEY_F0}")
    if 1 <= ch <= 26:
        return KeyEvent.ctrl_char(chr(ch + 96))
    if 32 <= ch <= 126:
        return KeyEvent.of_char(chr(ch))

    name = keyname(ch)
    if name in _KEYNAMES:
        return _KEYNAMES[name]
    return UNKNOWN
