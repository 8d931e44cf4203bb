import unittest

from edit_buffer import EditBuffer
from workbook import Address, StyleTag, Workbook


class EditBufferTests(unittest.TestCase):
    def setUp(self):
        self.book = Workbook.blank()
        self.sheet = self.book.sheet(0)
        self.sheet.set_cell(Address(1, 1), "X")
        self.book.mark_clean()

    def test_open_captures_original(self):
        buf = EditBuffer.open(self.sheet, Address(1, 1))
        self.assertEqual(buf.original, "X")
        self.assertEqual(buf.working, "X")
        self.assertEqual(buf.caret, 1)
        self.assertFalse(buf.changed)

    def test_typing_appends_and_commit_writes(self):
        buf = EditBuffer.open(self.sheet, Address(1, 1))
        buf.insert("Y")
        self.assertTrue(buf.commit(self.sheet))
        self.assertEqual(self.sheet.get_cell(Address(1, 1)).value, "XY")
        self.assertTrue(self.book.dirty)

    def test_unchanged_commit_is_not_a_mutation(self):
        buf = EditBuffer.open(self.sheet, Address(1, 1))
        buf.insert("Y")
        buf.backspace()
        self.assertFalse(buf.commit(self.sheet))
        self.assertFalse(self.book.dirty)

    def test_caret_editing(self):
        buf = EditBuffer.open(self.sheet, Address(2, 2))
        buf.insert("acd")
        buf.caret_left()
        buf.caret_left()
        buf.insert("b")
        self.assertEqual(buf.working, "abcd")
        buf.caret_home()
        buf.delete()
        self.assertEqual(buf.working, "bcd")
        buf.caret_left()
        self.assertEqual(buf.caret, 0)
        buf.caret_end()
        buf.caret_right()
        self.assertEqual(buf.caret, 3)
        buf.backspace()
        self.assertEqual(buf.working, "bc")

    def test_numeric_text_becomes_number(self):
        buf = EditBuffer.open(self.sheet, Address(2, 1))
        buf.insert("12")
        buf.commit(self.sheet)
        self.assertEqual(self.sheet.get_cell(Address(2, 1)).value, 12)

    def test_clearing_text_keeps_style(self):
        self.sheet.set_style(Address(1, 1), StyleTag.ACCENT_TEXT_A)
        buf = EditBuffer.open(self.sheet, Address(1, 1))
        buf.backspace()
        buf.commit(self.sheet)
        cell = self.sheet.get_cell(Address(1, 1))
        self.assertIsNone(cell.value)
        self.assertIs(cell.style, StyleTag.ACCENT_TEXT_A)
