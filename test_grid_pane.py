import curses
from unittest.mock import patch

import pytest

import render_model
from grid_pane import FORMULA_ATTR, GridPane, fit_text
from render_model import RenderCell
from session import GridSession
from workbook import Address, StyleTag, Workbook


class FakeWin:
    def __init__(self, h=6, w=40):
        self.h, self.w = h, w
        self.calls = []

    def getmaxyx(self):
        return self.h, self.w

    def erase(self):
        pass

    def refresh(self):
        pass

    def addnstr(self, y, x, text, n, attr=0):
        self.calls.append((y, x, text[:n], attr))


@pytest.fixture
def pane():
    # no initscr in tests: run without colour pairs
    with patch("curses.start_color", side_effect=curses.error):
        return GridPane()


def _formula_session():
    book = Workbook.blank()
    sheet = book.sheet(0)
    sheet.set_cell(Address(1, 1), 2)
    sheet.set_cell(Address(1, 2), 4)
    sheet.set_formula(Address(1, 3), "=A1+B1", 6)
    sheet.set_formula(Address(2, 3), "=NOW()")
    book.mark_clean()
    return GridSession(book)


def test_fit_text_pads_and_truncates():
    assert fit_text("abc", 5) == "abc  "
    assert fit_text("abcdefgh", 5) == "abcd~"
    assert fit_text("two\nlines", 9) == "two lines"
    assert fit_text("x", 0) == ""


def test_render_model_flags_formula_cells():
    model = render_model.build(_formula_session(), rows=3, width=60)
    assert model.cell_at(1, 3).formula
    assert model.cell_at(1, 3).text == "6"
    assert model.cell_at(2, 3).text == "=..."
    assert not model.cell_at(1, 1).formula


def test_formula_cells_get_their_own_attribute(pane):
    plain = RenderCell("2", StyleTag.NONE)
    formula = RenderCell("6", StyleTag.NONE, formula=True)
    assert pane.cell_attr(plain) & FORMULA_ATTR == 0
    assert pane.cell_attr(formula) & FORMULA_ATTR == FORMULA_ATTR
    under_cursor = RenderCell("6", StyleTag.NONE, cursor=True, formula=True)
    assert pane.cell_attr(under_cursor) & curses.A_REVERSE


def test_draw_uses_formula_attribute(pane):
    model = render_model.build(_formula_session(), rows=3, width=60)
    win = FakeWin(h=4, w=60)
    pane.draw(win, model)

    cells = {(y, text.strip()): attr for y, _, text, attr in win.calls}
    assert cells[(1, "6")] & FORMULA_ATTR == FORMULA_ATTR
    assert cells[(1, "4")] & FORMULA_ATTR == 0
    assert cells[(2, "=...")] & FORMULA_ATTR == FORMULA_ATTR
