"""Tests for the single-line editing core."""

import unittest

from wrapedit.model import CursorMotion, TextField, nearest_boundary


class TestTextFieldEditing(unittest.TestCase):

    def setUp(self):
        self.field = TextField("hello")

    def test_cursor_starts_at_zero(self):
        self.assertEqual(self.field.cursor, 0)

    def test_insert_and_backspace(self):
        self.field.set_cursor(5)
        self.field.insert(" world")
        self.assertEqual(self.field.text, "hello world")
        self.assertEqual(self.field.cursor, 11)
        self.field.backspace()
        self.assertEqual(self.field.text, "hello worl")
        self.assertEqual(self.field.cursor, 10)

    def test_backspace_at_start_does_nothing(self):
        self.field.backspace()
        self.assertEqual(self.field.text, "hello")

    def test_delete_forward(self):
        self.field.delete_forward()
        self.assertEqual(self.field.text, "ello")
        self.field.set_cursor(4)
        self.field.delete_forward()
        self.assertEqual(self.field.text, "ello")

    def test_insert_replaces_selection(self):
        self.field.set_selection(0, 5)
        self.assertEqual(self.field.get_selection(), "hello")
        self.field.insert("HOWDY")
        self.assertEqual(self.field.text, "HOWDY")
        self.assertEqual(self.field.cursor, 5)
        self.assertFalse(self.field.has_selection)

    def test_set_cursor_clamps(self):
        self.field.set_cursor(99)
        self.assertEqual(self.field.cursor, 5)
        self.field.set_cursor(-3)
        self.assertEqual(self.field.cursor, 0)

    def test_empty_selection_is_cleared(self):
        self.field.set_selection(2, 2)
        self.assertFalse(self.field.has_selection)
        self.assertEqual(self.field.cursor, 2)

    def test_line_breaks_filtered_without_write_enters(self):
        self.field.set_cursor(5)
        self.field.insert("\nthere")
        self.assertEqual(self.field.text, "hellothere")

    def test_line_breaks_kept_with_write_enters(self):
        self.field.write_enters = True
        self.field.set_cursor(5)
        self.field.insert("\n")
        self.assertEqual(self.field.text, "hello\n")

    def test_max_length(self):
        self.field.max_length = 7
        self.field.append_text(" world")
        self.assertEqual(self.field.text, "hello w")
        self.field.set_text("abcdefghij")
        self.assertEqual(self.field.text, "abcdefg")

    def test_change_listener_fires_once_per_change(self):
        calls = []
        self.field.add_change_listener(lambda: calls.append(1))
        self.field.set_text("other")
        self.assertEqual(len(calls), 1)
        self.field.set_text("other")
        self.assertEqual(len(calls), 1)
        self.field.insert("x")
        self.assertEqual(len(calls), 2)


class TestClipboard(unittest.TestCase):

    def test_cut_and_paste(self):
        field = TextField("hello world")
        field.set_selection(5, 11)
        self.assertTrue(field.cut())
        self.assertEqual(field.text, "hello")
        self.assertEqual(field.clipboard, " world")
        field.set_cursor(0)
        field.paste()
        self.assertEqual(field.text, " worldhello")

    def test_copy_without_selection(self):
        field = TextField("hello")
        self.assertFalse(field.copy())
        self.assertEqual(field.clipboard, "")

    def test_select_all(self):
        field = TextField("hello")
        field.select_all()
        self.assertEqual(field.get_selection(), "hello")
        self.assertEqual(field.cursor, 5)


class TestCursorMotion(unittest.TestCase):

    def test_word_jump_forward_and_back(self):
        field = TextField("hello big world")
        field.move_cursor(True, True)
        self.assertEqual(field.cursor, 5)
        field.move_cursor(True, True)
        self.assertEqual(field.cursor, 9)
        field.move_cursor(False, True)
        self.assertEqual(field.cursor, 6)

    def test_single_steps_clamp(self):
        field = TextField("ab")
        field.move_cursor(False, False)
        self.assertEqual(field.cursor, 0)
        field.go_end(False)
        field.move_cursor(True, False)
        self.assertEqual(field.cursor, 2)

    def test_combining_mark_continues_word(self):
        field = TextField("cafe\u0301 bar")
        self.assertTrue(field.continue_cursor(4, 0))
        field.move_cursor(True, True)
        self.assertEqual(field.cursor, 5)

    def test_continue_cursor_out_of_range(self):
        field = TextField("ab")
        self.assertFalse(CursorMotion().continue_cursor(field, 2, 0))
        self.assertFalse(CursorMotion().continue_cursor(field, 0, -1))

    def test_letter_under_cursor(self):
        field = TextField("hello")
        self.assertEqual(field.letter_under_cursor(2.4), 2)
        self.assertEqual(field.letter_under_cursor(2.6), 3)
        self.assertEqual(field.letter_under_cursor(99), 5)
        self.assertEqual(field.letter_under_cursor(-1), 0)


def test_nearest_boundary_tie_goes_to_earlier():
    positions = [0.0, 1.0, 2.0, 3.0]
    assert nearest_boundary(positions, 0, 3, 1.5) == 1
    assert nearest_boundary(positions, 1, 3, 0.2) == 1


def test_pref_height_of_field():
    assert TextField().get_pref_height() == 1.0
