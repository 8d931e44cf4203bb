import curses

from render_model import COLUMN_GAP, ROW_LABEL_WIDTH, RenderCell, RenderModel
from workbook import StyleTag

# not every curses build has italics
FORMULA_ATTR = getattr(curses, "A_ITALIC", 0) | curses.A_DIM


def fit_text(text: str, width: int) -> str:
    """Pad or cut `text` to exactly `width` characters; cut text ends in '~'."""
    if width <= 0:
        return ""
    text = text.replace("\n", " ")
    if len(text) > width:
        return text[: width - 1] + "~"
    return text.ljust(width)


class GridPane:
    PAIR_CELL_TEXT = 1
    PAIR_HEADER = 2
    # one pair per StyleTag, starting here
    PAIR_STYLE_BASE = 10

    STYLE_COLORS = {
        StyleTag.HIGHLIGHT_A: (curses.COLOR_BLACK, curses.COLOR_YELLOW),
        StyleTag.ACCENT_TEXT_A: (curses.COLOR_RED, -1),
        StyleTag.ACCENT_TEXT_B: (curses.COLOR_GREEN, -1),
        StyleTag.HIGHLIGHT_B: (curses.COLOR_WHITE, curses.COLOR_BLUE),
        StyleTag.ACCENT_TEXT_C: (curses.COLOR_MAGENTA, -1),
    }

    def __init__(self):
        self.colors = False
        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(self.PAIR_CELL_TEXT, curses.COLOR_WHITE, -1)
            curses.init_pair(self.PAIR_HEADER, curses.COLOR_CYAN, -1)
            for tag, (fg, bg) in self.STYLE_COLORS.items():
                curses.init_pair(self.PAIR_STYLE_BASE + tag.value, fg, bg)
            self.colors = True
        except curses.error:
            pass

    def _pair(self, pair: int) -> int:
        return curses.color_pair(pair) if self.colors else 0

    def style_attr(self, tag: StyleTag) -> int:
        if tag is StyleTag.NONE:
            return self._pair(self.PAIR_CELL_TEXT)
        return self._pair(self.PAIR_STYLE_BASE + tag.value)

    def cell_attr(self, cell: RenderCell) -> int:
        attr = self.style_attr(cell.style)
        if cell.formula:
            # read-only look
            attr |= FORMULA_ATTR
        if cell.cursor:
            attr |= curses.A_REVERSE
        elif cell.selected:
            attr |= curses.A_STANDOUT
        return attr

    # ---------- rendering ----------
    def draw(self, win, model: RenderModel):
        win.erase()
        h, w = win.getmaxyx()

        # header
        header_attr = self._pair(self.PAIR_HEADER) | curses.A_BOLD
        self._put(win, 0, 0, model.focus_label.ljust(ROW_LABEL_WIDTH), ROW_LABEL_WIDTH, header_attr)
        x = ROW_LABEL_WIDTH
        for column in model.columns:
            if x >= w:
                break
            label = column.label.center(column.width)
            self._put(win, 0, x, fit_text(label, column.width), w - x, header_attr)
            x += column.width + COLUMN_GAP

        # rows
        for y, (row, line) in enumerate(zip(model.rows, model.cells), start=1):
            if y >= h:
                break
            self._put(win, y, 0, str(row).rjust(ROW_LABEL_WIDTH - 1), ROW_LABEL_WIDTH, header_attr)
            x = ROW_LABEL_WIDTH
            for column, cell in zip(model.columns, line):
                if x >= w:
                    break
                text = cell.text
                if cell.cursor and model.edit_text is not None:
                    text = model.edit_text
                self._put(win, y, x, fit_text(text, column.width), w - x, self.cell_attr(cell))
                x += column.width + COLUMN_GAP

        win.refresh()

    @staticmethod
    def _put(win, y, x, text, limit, attr=0):
        try:
            win.addnstr(y, x, text, max(0, limit), attr)
        except curses.error:
            # bottom-right corner writes raise after drawing
            pass
