import curses

from events import KeyEvent

PROMPT = "Unsaved changes. Save before quitting? (y)es / (n)o / Esc"


class QuitPrompt:
    """Asks what to do with unsaved changes when the user quits."""

    def __init__(self, session):
        self.session = session
        self.active = False
        self.exit_requested = False

    def start(self):
        self.active = True
        self.exit_requested = False

    def _close(self):
        self.active = False
        self.session.quit_requested = False

    def handle(self, event: KeyEvent):
        if not self.active:
            return

        if event.key == "char" and not event.ctrl and event.char in ("y", "Y"):
            self._close()
            if self.session.save():
                self.exit_requested = True
            return

        if event.key == "char" and not event.ctrl and event.char in ("n", "N"):
            self.active = False
            self.exit_requested = True
            return

        if event.key == "escape":
            self._close()
            self.session.status_message = "Quit canceled"
            return

    def draw(self, win):
        _, w = win.getmaxyx()
        try:
            win.addnstr(0, 0, f" {PROMPT}".ljust(w), w, curses.A_BOLD)
        except curses.error:
            pass
        win.refresh()
