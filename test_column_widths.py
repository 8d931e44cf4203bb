import unittest

from column_widths import ColumnWidthManager
from workbook import CellRange, Workbook


class ColumnWidthTests(unittest.TestCase):
    def setUp(self):
        self.sheet = Workbook.blank().sheet(0)
        self.widths = ColumnWidthManager()

    def test_expand_and_reduce_by_step(self):
        self.assertFalse(self.widths.expand(self.sheet, [2]))
        self.assertEqual(self.widths.width(self.sheet, 2), 12)
        self.widths.reduce(self.sheet, [2])
        self.widths.reduce(self.sheet, [2])
        self.assertEqual(self.widths.width(self.sheet, 2), 8)
        self.assertEqual(self.widths.width(self.sheet, 3), 10)

    def test_never_leaves_bounds(self):
        for _ in range(100):
            self.widths.expand(self.sheet, [1])
            self.assertLessEqual(self.widths.width(self.sheet, 1), 50)
        self.assertTrue(self.widths.expand(self.sheet, [1]))
        for _ in range(100):
            self.widths.reduce(self.sheet, [1])
            self.assertGreaterEqual(self.widths.width(self.sheet, 1), 3)
        self.assertTrue(self.widths.reduce(self.sheet, [1]))

    def test_selection_adjusts_every_column(self):
        self.widths.expand(self.sheet, CellRange(1, 2, 4, 4).columns())
        self.assertEqual([self.widths.width(self.sheet, c) for c in (1, 2, 3, 4, 5)], [10, 12, 12, 12, 10])

    def test_from_config(self):
        widths = ColumnWidthManager.from_config(
            {"COLUMN_WIDTH": {"default": 8, "step": 4, "min": 4, "max": 16}}
        )
        self.assertEqual(widths.width(self.sheet, 1), 8)
        widths.expand(self.sheet, [1])
        widths.expand(self.sheet, [1])
        self.assertEqual(widths.width(self.sheet, 1), 16)
