import curses
import logging

import events
import render_model
from grid_pane import GridPane
from quit_prompt import QuitPrompt
from screen_layout import ScreenLayout
from sheet_overlay import SheetOverlay
from status_bar import caret_column, render_status

logger = logging.getLogger(__name__)


class Orchestrator:
    """Curses loop: read a key, hand it to the session, redraw."""

    def __init__(self, stdscr, session):
        self.stdscr = stdscr
        curses.raw()
        self.stdscr.keypad(True)
        self.stdscr.nodelay(False)
        self.stdscr.timeout(100)

        self.session = session
        self.layout = ScreenLayout(stdscr)
        self.grid = GridPane()
        self.overlay = SheetOverlay(self.layout)
        self.quit_prompt = QuitPrompt(session)
        self.exit_requested = False

    # ---------------- UI ----------------

    def _relayout(self):
        curses.update_lines_cols()
        self.layout = ScreenLayout(self.stdscr)
        self.overlay.layout = self.layout
        self.stdscr.clear()
        self.stdscr.refresh()

    def redraw(self):
        model = render_model.build(self.session, self.layout.grid_rows, self.layout.W)

        self.grid.draw(self.layout.table_win, model)

        sw = self.layout.status_win
        sw.erase()
        _, w = sw.getmaxyx()
        if self.quit_prompt.active:
            self.quit_prompt.draw(sw)
        else:
            try:
                sw.addnstr(0, 0, render_status(model, w), w)
            except curses.error:
                pass

        caret = caret_column(model, w)
        try:
            curses.curs_set(1 if caret is not None else 0)
            if caret is not None:
                sw.move(0, caret)
        except curses.error:
            pass
        sw.refresh()

        if model.selector_names:
            self.overlay.draw(model)

    # ---------------- main loop ----------------

    def _read_key(self):
        try:
            return self.stdscr.get_wch()
        except curses.error:
            # timeout with no input
            return -1

    def _after_command(self):
        if not self.session.quit_requested:
            return
        if self.session.dirty:
            self.quit_prompt.start()
        else:
            self.exit_requested = True

    def run(self):
        self.stdscr.clear()
        self.stdscr.refresh()
        self.redraw()

        while not self.exit_requested:
            ch = self._read_key()

            if ch == curses.KEY_RESIZE:
                self._relayout()
                self.redraw()
                continue

            event = events.from_curses(ch)
            if event is None:
                continue

            if self.quit_prompt.active:
                self.quit_prompt.handle(event)
                if self.quit_prompt.exit_requested:
                    self.exit_requested = True
            else:
                self.session.handle(event)
                self._after_command()

            if not self.exit_requested:
                self.redraw()

        logger.info("Leaving editor (unsaved changes: %s)", self.session.dirty)
