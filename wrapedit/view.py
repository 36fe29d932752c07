"""Multi-line text area on top of the single-line TextField.

TextArea wraps the field's text with a WrapEngine and keeps the cursor's
wrapped line, the remembered column for vertical moves and the scroll
window in sync with the linear cursor. Coordinates follow the host's
drawing convention: x grows to the right from the widget's left edge and
y grows upwards from its bottom edge.
"""

from __future__ import annotations

import math
from typing import NamedTuple, Optional

from .metrics import FontMetrics
from .model import CursorMotion, TextField, nearest_boundary
from .style import TextAreaStyle
from .wrap import LineBreakTable, WrapEngine, line_count, newline_at_end


class SelectionSpan(NamedTuple):
    """Highlighted part of one visible wrapped line.

    x is relative to the start of the line, y is the offset of the line's
    top below the first visible line.
    """
    line: int
    start: int
    end: int
    x: float
    y: float
    width: float
    height: float


class WrappedMotion(CursorMotion):
    """Cursor rules that know about the wrapped lines of a TextArea."""

    def __init__(self, area: "TextArea"):
        self.area = area

    def continues_word(self, field: TextField, index: int, offset: int) -> bool:
        """The plain word-character rule, ignoring wrapped lines."""
        return super().continue_cursor(field, index, offset)

    def continue_cursor(self, field: TextField, index: int, offset: int) -> bool:
        # Word jumps also stop on the seam of a soft wrap
        table = self.area.wrap.table
        pos = table.boundary_index(index + offset)
        return super().continue_cursor(field, index, offset) and (
            pos >= table.boundary_count - 2
            or table.boundary(pos + 1) != index
            or table.boundary(pos + 1) == table.boundary(pos + 2))

    def move_cursor(self, field: TextField, forward: bool, jump: bool) -> None:
        area = self.area
        table = area.wrap.table
        count = 1 if forward else -1
        index = area.cursor_line * 2 + count
        if (index >= 0 and index + 1 < table.boundary_count
                and table.boundary(index) == field.cursor
                and table.boundary(index + 1) == field.cursor):
            # The cursor sits on a soft-wrap seam: crossing it only changes the line
            area.cursor_line += count
            if jump:
                super().move_cursor(field, forward, jump)
            area._show_cursor()
        else:
            super().move_cursor(field, forward, jump)
        area._update_current_line()

    def go_home(self, field: TextField, jump: bool) -> None:
        table = self.area.wrap.table
        if jump:
            field.cursor = 0
        elif self.area.cursor_line < len(table):
            field.cursor = table[self.area.cursor_line].start

    def go_end(self, field: TextField, jump: bool) -> None:
        area = self.area
        table = area.wrap.table
        if jump or area.cursor_line >= area._line_total():
            field.cursor = len(field.text)
        elif area.cursor_line < len(table):
            field.cursor = table[area.cursor_line].end

    def letter_under_cursor(self, field: TextField, x: float) -> int:
        area = self.area
        table = area.wrap.table
        if len(table) == 0:
            return 0
        if area.cursor_line >= len(table):
            return len(field.text)
        positions = field.glyph_positions
        start, end = table[area.cursor_line]
        return nearest_boundary(positions, start, end, x + positions[start])


class TextArea:
    """A multiple-line text input, word wrapped to its width.

    Attributes:
        cursor_line: Wrapped line the cursor is on
        first_line_showing: Index of the first line in the scroll window
        lines_showing: Number of lines that fit in the scroll window
        move_offset: Remembered horizontal target of vertical moves,
            relative to the line start, or None when unset
        pref_rows: Preferred number of rows, 0 to size like a single line
    """

    cursor_line: int
    first_line_showing: int
    lines_showing: int
    move_offset: Optional[float]
    pref_rows: float

    def __init__(self, text: str = "", style: Optional[TextAreaStyle] = None,
                 width: float = 0.0, height: float = 0.0):
        self.style = style or TextAreaStyle()
        self._motion = WrappedMotion(self)
        self.field = TextField("", self.style, motion=self._motion)
        self.field.write_enters = True
        self.wrap = WrapEngine()
        self.field.add_change_listener(self.wrap.invalidate)
        self.cursor_line = 0
        self.first_line_showing = 0
        self.lines_showing = 0
        self.move_offset = None
        self.pref_rows = 0.0
        self.width = width
        self.height = height
        self.field.set_text(text)
        self.size_changed()

    # --- Field shortcuts ---

    @property
    def metrics(self) -> FontMetrics:
        return self.style.metrics

    @property
    def text(self) -> str:
        return self.field.text

    @property
    def cursor(self) -> int:
        return self.field.cursor

    @property
    def line_breaks(self) -> LineBreakTable:
        self.calculate_offsets()
        return self.wrap.table

    def set_text(self, text: str) -> None:
        self.field.set_text(text)
        self.move_offset = None
        self.show_cursor()

    def set_cursor(self, position: int) -> None:
        self.field.set_cursor(position)
        self.move_offset = None
        self.show_cursor()

    # --- Layout ---

    def get_available_width(self) -> float:
        background = self.style.background
        insets = background.horizontal if background is not None else 0.0
        return max(0.0, self.width - insets)

    def set_size(self, width: float, height: float) -> None:
        if (width, height) == (self.width, self.height):
            return
        self.width = width
        self.height = height
        self.size_changed()

    def size_changed(self) -> None:
        """Re-wrap on next access and recount the lines that fit."""
        self.wrap.set_width(self.get_available_width())
        self.wrap.invalidate()

        background = self.style.background
        available_height = self.height - (background.vertical if background is not None else 0.0)
        self.lines_showing = max(0, math.floor(available_height / self.metrics.line_height))

    def calculate_offsets(self) -> None:
        """Rebuild the line breaks if the text or the width changed."""
        if self.wrap.ensure(self.field.text, self.metrics, self._word_continues):
            self._show_cursor()

    def _word_continues(self, index: int, offset: int) -> bool:
        return self._motion.continues_word(self.field, index, offset)

    def _line_total(self) -> int:
        return line_count(self.wrap.table, self.field.text)

    def get_lines(self) -> int:
        """Returns total number of lines that the text occupies."""
        self.calculate_offsets()
        return self._line_total()

    def newline_at_end(self) -> bool:
        return newline_at_end(self.field.text)

    def get_cursor_line(self) -> int:
        self.calculate_offsets()
        return self.cursor_line

    def get_first_line_showing(self) -> int:
        self.calculate_offsets()
        return self.first_line_showing

    def get_lines_showing(self) -> int:
        return self.lines_showing

    def set_pref_rows(self, pref_rows: float) -> None:
        """Sets the preferred number of rows, used for the preferred height."""
        self.pref_rows = pref_rows

    def get_pref_height(self) -> float:
        if self.pref_rows <= 0:
            return self.field.get_pref_height()
        pref_height = self.metrics.line_height * self.pref_rows
        background = self.style.background
        if background is not None:
            pref_height = max(pref_height + background.vertical, background.min_height)
        return pref_height

    def get_text_y(self) -> float:
        """Top of the first line of text, measured from the bottom edge."""
        background = self.style.background
        if background is None:
            return self.height
        return self.height - background.top

    # --- Cursor tracking ---

    def letter_under_cursor(self, x: float) -> int:
        """Character boundary on the cursor line nearest to x (relative to the line start)."""
        self.calculate_offsets()
        return self.field.letter_under_cursor(x)

    def move_cursor_line(self, line: int) -> None:
        """Moves the cursor to the given line, keeping its column."""
        self.calculate_offsets()
        field = self.field
        table = self.wrap.table
        lines = self._line_total()
        if line < 0:
            self.cursor_line = 0
            field.cursor = 0
            self.move_offset = None
        elif line >= lines:
            new_line = max(0, lines - 1)
            field.cursor = len(field.text)
            if line > lines or new_line == self.cursor_line:
                self.move_offset = None
            self.cursor_line = new_line
        elif line != self.cursor_line:
            positions = field.glyph_positions
            if self.move_offset is None:
                if self.cursor_line >= len(table):
                    self.move_offset = 0.0
                else:
                    self.move_offset = positions[field.cursor] - positions[table[self.cursor_line].start]
            self.cursor_line = line
            if line >= len(table):
                field.cursor = len(field.text)
            else:
                start, end = table[line]
                field.cursor = start
                while (field.cursor < len(field.text) and field.cursor <= end - 1
                       and positions[field.cursor] - positions[start] < self.move_offset):
                    field.cursor += 1
            self._show_cursor()

    def update_current_line(self) -> None:
        """Updates the current line from the cursor position in the text."""
        self.calculate_offsets()
        self._update_current_line()

    def _update_current_line(self) -> None:
        table = self.wrap.table
        cursor = self.field.cursor
        text = self.field.text
        index = table.boundary_index(cursor)
        line = index // 2
        on_seam = (index % 2 == 1 and index + 1 < table.boundary_count
                   and cursor == table.boundary(index)
                   and table.boundary(index + 1) == cursor)
        # On the seam of a soft wrap (end of a line equal to the start of the
        # next one) either of the two lines is valid; keep the current one
        if on_seam and self.cursor_line in (line, line + 1):
            return
        if line < len(table) or len(text) == 0 or newline_at_end(text):
            self.cursor_line = line

    def show_cursor(self) -> None:
        """Scroll the text area to show the line of the cursor."""
        self.calculate_offsets()
        self._show_cursor()

    def _show_cursor(self) -> None:
        self._update_current_line()
        # Nothing fits; the cursor stays off screen until the area grows
        if self.lines_showing <= 0:
            return
        if self.cursor_line != self.first_line_showing:
            step = 1 if self.cursor_line >= self.first_line_showing else -1
            while (self.first_line_showing > self.cursor_line
                   or self.first_line_showing + self.lines_showing - 1 < self.cursor_line):
                self.first_line_showing += step

    def move_cursor(self, forward: bool, jump: bool = False) -> None:
        """Move one character (or one word with jump) left or right."""
        self.calculate_offsets()
        self.field.move_cursor(forward, jump)

    def go_home(self, jump: bool = False) -> None:
        self.calculate_offsets()
        self.field.go_home(jump)

    def go_end(self, jump: bool = False) -> None:
        self.calculate_offsets()
        self.field.go_end(jump)

    def page_down(self) -> None:
        self.move_cursor_line(self.cursor_line + max(1, self.lines_showing))

    def page_up(self) -> None:
        self.move_cursor_line(self.cursor_line - max(1, self.lines_showing))

    def set_selection(self, selection_start: int, selection_end: int) -> None:
        self.calculate_offsets()
        self.field.set_selection(selection_start, selection_end)
        self._update_current_line()

    # --- Pointer ---

    def set_cursor_position(self, x: float, y: float) -> None:
        """Place the cursor under a point in widget coordinates."""
        self.calculate_offsets()
        self.move_offset = None

        background = self.style.background
        height = self.height
        if background is not None:
            height -= background.top
            x -= background.left
        x = max(0.0, x)
        if background is not None:
            y -= background.top

        line = math.floor((height - y) / self.metrics.line_height) + self.first_line_showing
        self.cursor_line = max(0, min(line, self._line_total() - 1))

        self.field.cursor = self.field.letter_under_cursor(x)
        self._update_current_line()

    def touch_down(self, x: float, y: float, extend: bool = False) -> None:
        """Pointer press: move the cursor, extending the selection with extend."""
        anchor = self.field.cursor
        if not extend:
            self.field.clear_selection()
        self.set_cursor_position(x, y)
        if extend:
            if not self.field.has_selection:
                self.field.selection_start = anchor
            self.field.has_selection = self.field.selection_start != self.field.cursor
        else:
            self.field.selection_start = self.field.cursor
        self._show_cursor()

    def touch_dragged(self, x: float, y: float) -> None:
        """Pointer drag: select from the press position to the pointer."""
        self.set_cursor_position(x, y)
        self.field.has_selection = self.field.selection_start != self.field.cursor
        self._show_cursor()

    # --- Rendering support ---

    def cursor_offset(self) -> float:
        """Caret x relative to the start of its wrapped line."""
        self.calculate_offsets()
        positions = self.field.glyph_positions
        table = self.wrap.table
        if self.field.cursor >= len(positions) or self.cursor_line >= len(table):
            return 0.0
        return positions[self.field.cursor] - positions[table[self.cursor_line].start]

    def get_cursor_x(self) -> float:
        background = self.style.background
        left = background.left if background is not None else 0.0
        return left + self.cursor_offset() + self.metrics.cursor_x

    def get_cursor_y(self) -> float:
        """Bottom of the caret, measured down from the text top."""
        self.calculate_offsets()
        metrics = self.metrics
        return -(-metrics.descent / 2 - (self.cursor_line - self.first_line_showing + 1) * metrics.line_height)

    def visible_lines(self) -> list[tuple[int, str]]:
        """(line index, text) of every wrapped line in the scroll window."""
        self.calculate_offsets()
        table = self.wrap.table
        text = self.field.text
        last = min(len(table), self.first_line_showing + self.lines_showing)
        return [(line, text[table[line].start:table[line].end])
                for line in range(self.first_line_showing, last)]

    def selection_spans(self) -> list[SelectionSpan]:
        """Selected part of each visible wrapped line, for highlight painting."""
        self.calculate_offsets()
        field = self.field
        if not field.has_selection:
            return []
        positions = field.glyph_positions
        table = self.wrap.table
        line_height = self.metrics.line_height
        min_index = min(field.cursor, field.selection_start)
        max_index = max(field.cursor, field.selection_start)

        spans = []
        last = min(len(table), self.first_line_showing + self.lines_showing)
        for line in range(self.first_line_showing, last):
            line_start, line_end = table[line]
            if max_index < line_start or min_index > line_end:
                continue
            start = max(line_start, min_index)
            end = min(line_end, max_index)
            spans.append(SelectionSpan(
                line=line,
                start=start,
                end=end,
                x=positions[start] - positions[line_start],
                y=(line - self.first_line_showing) * line_height,
                width=positions[end] - positions[start],
                height=line_height,
            ))
        return spans
