from workbook import CellRange, Sheet, StyleTag

# number keys 1..6 in the order the tags are offered
TAG_KEYS = {
    "1": StyleTag.NONE,
    "2": StyleTag.HIGHLIGHT_A,
    "3": StyleTag.ACCENT_TEXT_A,
    "4": StyleTag.ACCENT_TEXT_B,
    "5": StyleTag.HIGHLIGHT_B,
    "6": StyleTag.ACCENT_TEXT_C,
}


def apply(sheet: Sheet, area: CellRange, tag: StyleTag) -> int:
    """Set tag on every cell in area; NONE resets to the default look."""
    count = 0
    for addr in area.addresses():
        sheet.set_style(addr, tag)
        count += 1
    return count
