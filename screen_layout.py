import curses


class ScreenLayout:
    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.H, self.W = stdscr.getmaxyx()

        # layout: grid (main, header line included), status bar (1 line)
        self.status_h = 1
        self.table_h = max(2, self.H - self.status_h)

        self.table_win = curses.newwin(self.table_h, self.W, 0, 0)
        # grid pane must never own cursor
        self.table_win.leaveok(True)

        self.status_win = curses.newwin(self.status_h, self.W, min(self.table_h, self.H - 1), 0)

    @property
    def grid_rows(self) -> int:
        """Data rows the grid can show below its header line."""
        return max(1, self.table_h - 1)

    def overlay_win(self, lines: int):
        """Centered modal window over the grid region, sized for `lines` entries."""
        max_h = max(3, self.table_h - 2)
        h = max(3, min(lines + 2, max_h))
        w = max(10, min(self.W - 4, 40))
        y = max(0, (self.table_h - h) // 2)
        x = max(0, (self.W - w) // 2)
        win = curses.newwin(h, w, y, x)
        # overlay should never own cursor
        win.leaveok(True)
        return win
