"""Tests for cursor tracking across wrapped lines."""

import pytest

from wrapedit.style import Background, TextAreaStyle
from wrapedit.view import TextArea

THREE_LINES = "hello world\nhi\nhello again"


def make_area(text, width=20, height=5, background=None):
    return TextArea(text, style=TextAreaStyle(background=background), width=width, height=height)


def test_line_breaks_follow_width():
    area = make_area("hello world foobar", width=11)
    assert area.line_breaks.as_pairs() == [(0, 12), (12, 18)]
    area.set_size(20, 5)
    assert area.line_breaks.as_pairs() == [(0, 18)]


def test_background_insets_reduce_width():
    area = make_area("aaaa bbbb", width=7, background=Background(left=1, right=1))
    assert area.get_available_width() == 5
    assert area.line_breaks.as_pairs() == [(0, 5), (5, 9)]


def test_recompute_only_after_change():
    area = make_area("hello world")
    assert area.wrap.recompute_count == 0
    area.get_lines()
    area.get_lines()
    assert area.wrap.recompute_count == 1
    area.field.insert("x")
    area.get_lines()
    assert area.wrap.recompute_count == 2
    area.set_size(20, 5)
    area.get_lines()
    assert area.wrap.recompute_count == 2


def test_get_lines():
    assert make_area("").get_lines() == 0
    assert make_area("a\n").get_lines() == 2
    assert make_area(THREE_LINES).get_lines() == 3


def test_set_cursor_clamps():
    area = make_area("hello")
    area.set_cursor(100)
    assert area.cursor == 5
    area.set_cursor(-5)
    assert area.cursor == 0


class TestVerticalMovement:

    def test_column_is_remembered(self):
        area = make_area(THREE_LINES)
        area.set_cursor(8)
        area.move_cursor_line(1)
        # "hi" is shorter than the remembered column
        assert area.cursor == 14
        assert area.get_cursor_line() == 1
        assert area.move_offset == 8
        area.move_cursor_line(2)
        assert area.cursor == 23
        area.move_cursor_line(1)
        area.move_cursor_line(0)
        assert area.cursor == 8

    def test_round_trip_across_soft_wrap(self):
        area = make_area("hello world foobar", width=11)
        area.set_cursor(3)
        area.move_cursor_line(1)
        assert area.cursor == 15
        area.move_cursor_line(0)
        assert area.cursor == 3

    def test_above_first_line(self):
        area = make_area(THREE_LINES)
        area.set_cursor(20)
        area.move_cursor_line(-1)
        assert area.cursor == 0
        assert area.cursor_line == 0
        assert area.move_offset is None

    def test_below_last_line(self):
        area = make_area(THREE_LINES)
        area.set_cursor(3)
        area.move_cursor_line(5)
        assert area.cursor == len(THREE_LINES)
        assert area.cursor_line == 2
        assert area.move_offset is None

    def test_empty_text(self):
        area = make_area("")
        area.move_cursor_line(1)
        assert area.cursor == 0
        assert area.cursor_line == 0

    def test_trailing_newline_line(self):
        area = make_area("ab\n")
        area.set_cursor(3)
        assert area.get_cursor_line() == 1
        area.move_cursor_line(0)
        assert area.cursor == 0
        area.move_cursor_line(1)
        assert area.cursor == 3
        assert area.letter_under_cursor(5) == 3


class TestSoftWrapSeam:
    """"aaaa bbbb" at width 5 wraps as (0, 5), (5, 9); index 5 is on both lines."""

    def setup_method(self):
        self.area = make_area("aaaa bbbb", width=5)

    def test_stepping_onto_seam_keeps_line(self):
        self.area.set_cursor(4)
        self.area.move_cursor(True)
        assert self.area.cursor == 5
        assert self.area.get_cursor_line() == 0

    def test_stepping_across_seam_changes_only_line(self):
        self.area.set_cursor(4)
        self.area.move_cursor(True)
        self.area.move_cursor(True)
        assert self.area.cursor == 5
        assert self.area.get_cursor_line() == 1
        self.area.move_cursor(False)
        assert self.area.cursor == 5
        assert self.area.get_cursor_line() == 0
        self.area.move_cursor(False)
        assert self.area.cursor == 4

    def test_home_and_end_of_wrapped_line(self):
        self.area.set_cursor(7)
        assert self.area.get_cursor_line() == 1
        self.area.go_home()
        self.area.show_cursor()
        assert self.area.cursor == 5
        assert self.area.get_cursor_line() == 1
        self.area.go_end()
        assert self.area.cursor == 9
        self.area.go_home(jump=True)
        assert self.area.cursor == 0
        self.area.go_end(jump=True)
        assert self.area.cursor == 9

    def test_end_of_first_line_stays_on_it(self):
        self.area.set_cursor(2)
        self.area.go_end()
        self.area.show_cursor()
        assert self.area.cursor == 5
        assert self.area.get_cursor_line() == 0


def test_word_jump_stops_at_forced_break():
    area = make_area("abcdefg", width=3)
    area.move_cursor(True, jump=True)
    assert area.cursor == 3
    assert area.get_cursor_line() == 0


def test_word_jump_on_single_line():
    area = make_area("hello world")
    area.move_cursor(True, jump=True)
    assert area.cursor == 5
    area.move_cursor(True, jump=True)
    assert area.cursor == 11
    area.move_cursor(False, jump=True)
    assert area.cursor == 6


class TestScrolling:

    def setup_method(self):
        self.text = "\n".join(str(i) for i in range(10))

    def test_window_follows_cursor(self):
        area = make_area(self.text, width=5, height=3)
        assert area.get_lines_showing() == 3
        area.set_cursor(len(self.text))
        assert area.get_cursor_line() == 9
        assert area.get_first_line_showing() == 7
        area.set_cursor(0)
        assert area.get_first_line_showing() == 0

    def test_page_down_and_up(self):
        area = make_area(self.text, width=5, height=3)
        area.page_down()
        assert area.get_cursor_line() == 3
        assert area.cursor == 6
        assert area.get_first_line_showing() == 1
        area.page_up()
        assert area.get_cursor_line() == 0
        assert area.get_first_line_showing() == 0

    def test_zero_height_keeps_window(self):
        area = make_area(self.text, width=5, height=0)
        assert area.get_lines_showing() == 0
        area.set_cursor(len(self.text))
        assert area.get_cursor_line() == 9
        assert area.get_first_line_showing() == 0

    def test_visible_lines(self):
        area = make_area(self.text, width=5, height=3)
        area.set_cursor(len(self.text))
        assert area.visible_lines() == [(7, "7"), (8, "8"), (9, "9")]


class TestPreferredHeight:

    def test_rows(self):
        area = make_area("x")
        area.set_pref_rows(3)
        assert area.get_pref_height() == 3.0

    def test_rows_with_background(self):
        area = make_area("x", background=Background(top=1, bottom=1, min_height=10))
        area.set_pref_rows(3)
        assert area.get_pref_height() == 10.0
        area.style.background = Background(top=1, bottom=1)
        assert area.get_pref_height() == 5.0

    def test_no_rows_sizes_like_field(self):
        assert make_area("x").get_pref_height() == pytest.approx(1.0)


class TestSeamAwayFromCurrentLine:
    """"aaaa bbbb cccc dddd" at width 5 wraps as (0, 5), (5, 10), (10, 15), (15, 19)."""

    def test_set_cursor_onto_distant_seam(self):
        area = make_area("aaaa bbbb cccc", width=5)
        area.set_cursor(10)
        assert area.get_cursor_line() == 1
        assert area.cursor_offset() == 5

    def test_edit_lands_cursor_on_seam(self):
        from wrapedit.commands import CommandRegistry
        from wrapedit.keyboard import KeyEvent, KeyType

        area = make_area("aaaa bbbb cccc dddd", width=5)
        area.set_cursor(19)
        assert area.get_cursor_line() == 3
        # Select back from 10 to 5 without touching the tracked line
        area.field.set_selection(10, 5)
        CommandRegistry().execute(area, KeyEvent(KeyType.SPECIAL, 'backspace', '\x7f'))
        assert area.text == "aaaa cccc dddd"
        assert area.cursor == 5
        assert area.get_cursor_line() == 0
        assert 0 <= area.get_cursor_line() < area.get_lines()

    def test_backspace_keeps_line_in_range(self):
        area = make_area("eec", width=1)
        area.set_cursor(3)
        assert area.get_cursor_line() == 2
        area.field.set_cursor(2)
        area.field.backspace()
        area.show_cursor()
        assert area.line_breaks.as_pairs() == [(0, 1), (1, 2)]
        assert area.cursor == 1
        assert area.get_cursor_line() in (0, 1)
        assert area.get_cursor_line() < area.get_lines()
