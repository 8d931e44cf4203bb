import curses

from render_model import RenderModel


def visible_window(count: int, index: int, rows: int) -> range:
    """Slice of list positions to show so the highlighted entry stays visible."""
    rows = max(1, rows)
    start = 0
    if index >= rows:
        start = index - rows + 1
    return range(start, min(count, start + rows))


def selector_line(model: RenderModel, idx: int) -> str:
    """'>' marks the highlighted entry, '*' the sheet currently open."""
    marker = ">" if idx == model.selector_index else " "
    active = "*" if idx == model.sheet_index else " "
    return f"{marker}{active} {idx + 1}. {model.selector_names[idx]}"


class SheetOverlay:
    """Boxed list of sheet names drawn while the selector is open."""

    def __init__(self, layout):
        self.layout = layout

    def draw(self, model: RenderModel):
        names = model.selector_names
        if not names:
            return
        win = self.layout.overlay_win(len(names))
        win.erase()
        h, w = win.getmaxyx()
        win.box()
        try:
            win.addnstr(0, 2, " Sheets ", w - 4, curses.A_BOLD)
        except curses.error:
            pass

        for y, idx in enumerate(visible_window(len(names), model.selector_index, h - 2), start=1):
            attr = curses.A_REVERSE if idx == model.selector_index else 0
            try:
                win.addnstr(y, 1, selector_line(model, idx).ljust(w - 2), w - 2, attr)
            except curses.error:
                pass

        win.refresh()
