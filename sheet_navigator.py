from workbook import Sheet, Workbook


class SheetNavigator:
    """Active-sheet index over the workbook's ordered sheets (no wrap-around)."""

    def __init__(self, workbook: Workbook, active: int = 0):
        self.workbook = workbook
        self.active = max(0, min(active, len(workbook) - 1))

    @property
    def sheet(self) -> Sheet:
        self._clamp()
        return self.workbook.sheet(self.active)

    def _clamp(self):
        self.active = max(0, min(self.active, len(self.workbook) - 1))

    def switch(self, relative: int) -> bool:
        self._clamp()
        target = self.active + relative
        if target < 0 or target >= len(self.workbook):
            return False
        self.active = target
        return True

    def select(self, index: int) -> bool:
        if not 0 <= index < len(self.workbook):
            return False
        self.active = index
        return True

    def open_selector(self) -> "SheetSelector":
        self._clamp()
        return SheetSelector(self.workbook.sheet_names(), self.active)


class SheetSelector:
    """Highlight position inside the sheet list overlay."""

    def __init__(self, names: list[str], index: int):
        self.names = tuple(names)
        self.index = max(0, min(index, len(self.names) - 1))

    def move(self, delta: int):
        self.index = max(0, min(len(self.names) - 1, self.index + delta))
