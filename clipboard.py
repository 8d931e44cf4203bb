import logging
import subprocess

import pandas as pd

from workbook import MAX_COLUMNS, MAX_ROWS, Address, Cell, CellRange, Sheet

logger = logging.getLogger(__name__)


class Clipboard:
    """Detached rectangular snapshot of cells."""

    def __init__(self):
        self.rows: list[list[Cell]] = []

    @property
    def empty(self) -> bool:
        return not self.rows

    @property
    def shape(self) -> tuple[int, int]:
        if not self.rows:
            return 0, 0
        return len(self.rows), len(self.rows[0])

    def copy(self, sheet: Sheet, area: CellRange) -> int:
        self.rows = [
            [sheet.get_cell(Address(r, c)).copy() for c in area.columns()]
            for r in range(area.top, area.bottom + 1)
        ]
        logger.debug("Copied %s from %s", area.label, sheet.name)
        return area.size

    def paste(self, sheet: Sheet, origin: Address) -> tuple[int, int]:
        """Write the snapshot with its top-left at origin; returns the written shape."""
        if self.empty:
            return 0, 0
        height, width = self.shape
        height = min(height, MAX_ROWS - origin.row + 1)
        width = min(width, MAX_COLUMNS - origin.col + 1)
        for dr in range(height):
            for dc in range(width):
                sheet.put(Address(origin.row + dr, origin.col + dc), self.rows[dr][dc])
        logger.debug("Pasted %dx%d at %s on %s", height, width, origin.label, sheet.name)
        return height, width

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([[cell.display_text() for cell in row] for row in self.rows])


def mirror_to_system(clipboard: Clipboard, argv: list[str] | None) -> bool:
    """Pipe the snapshot as TSV to an external clipboard command."""
    if not argv or clipboard.empty:
        return False
    tsv_data = clipboard.to_frame().to_csv(sep="\t", index=False, header=False)
    try:
        subprocess.run(argv, input=tsv_data, text=True, check=True, timeout=5)
    except (OSError, subprocess.SubprocessError) as exc:
        logger.warning("Clipboard command %s failed: %s", argv, exc)
        return False
    return True
