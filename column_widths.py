from workbook import (
    COLUMN_WIDTH_STEP,
    DEFAULT_COLUMN_WIDTH,
    MAX_COLUMN_WIDTH,
    MIN_COLUMN_WIDTH,
    Sheet,
)


class ColumnWidthManager:
    def __init__(
        self,
        default: int = DEFAULT_COLUMN_WIDTH,
        step: int = COLUMN_WIDTH_STEP,
        minimum: int = MIN_COLUMN_WIDTH,
        maximum: int = MAX_COLUMN_WIDTH,
    ):
        self.default = default
        self.step = step
        self.minimum = minimum
        self.maximum = maximum

    @classmethod
    def from_config(cls, cfg: dict | None) -> "ColumnWidthManager":
        widths = (cfg or {}).get("COLUMN_WIDTH") or {}
        return cls(
            default=widths.get("default", DEFAULT_COLUMN_WIDTH),
            step=widths.get("step", COLUMN_WIDTH_STEP),
            minimum=widths.get("min", MIN_COLUMN_WIDTH),
            maximum=widths.get("max", MAX_COLUMN_WIDTH),
        )

    def clamp(self, width) -> int:
        return max(self.minimum, min(self.maximum, int(round(width))))

    def width(self, sheet: Sheet, col: int) -> int:
        return self.clamp(sheet.column_width(col, self.default))

    def _adjust(self, sheet: Sheet, columns, delta: int) -> bool:
        """Returns True when a column ends up at the bound it was pushed towards."""
        bound = self.maximum if delta > 0 else self.minimum
        hit_bound = False
        for col in columns:
            current = self.width(sheet, col)
            new_width = self.clamp(current + delta)
            if new_width != current:
                sheet.set_column_width(col, new_width)
            if new_width == bound:
                hit_bound = True
        return hit_bound

    def expand(self, sheet: Sheet, columns) -> bool:
        return self._adjust(sheet, columns, self.step)

    def reduce(self, sheet: Sheet, columns) -> bool:
        return self._adjust(sheet, columns, -self.step)
