from dataclasses import dataclass
from typing import Any

from cell_coercion import coerce_cell_text
from workbook import Address, Sheet, format_value


@dataclass
class EditBuffer:
    """Working copy of one cell while the dispatcher is in Editing mode."""

    target: Address
    original: Any
    working: str
    caret: int

    @classmethod
    def open(cls, sheet: Sheet, target: Address) -> "EditBuffer":
        original = sheet.get_cell(target).value
        text = format_value(original)
        return cls(target=target, original=original, working=text, caret=len(text))

    @property
    def original_text(self) -> str:
        return format_value(self.original)

    @property
    def changed(self) -> bool:
        return self.working != self.original_text

    # ---------- text entry ----------
    def insert(self, text: str):
        if not text:
            return
        self.working = self.working[: self.caret] + text + self.working[self.caret :]
        self.caret += len(text)

    def backspace(self):
        if self.caret > 0:
            self.working = self.working[: self.caret - 1] + self.working[self.caret :]
            self.caret -= 1

    def delete(self):
        if self.caret < len(self.working):
            self.working = self.working[: self.caret] + self.working[self.caret + 1 :]

    def caret_left(self):
        self.caret = max(0, self.caret - 1)

    def caret_right(self):
        self.caret = min(len(self.working), self.caret + 1)

    def caret_home(self):
        self.caret = 0

    def caret_end(self):
        self.caret = len(self.working)

    # ---------- exit ----------
    def commit(self, sheet: Sheet) -> bool:
        """Write the working text into the sheet; False when nothing changed."""
        if not self.changed:
            return False
        sheet.set_cell(self.target, coerce_cell_text(self.working, self.original))
        return True
