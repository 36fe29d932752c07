"""Word wrap for a text buffer of arbitrary length.

The wrap is described by a LineBreakTable: one half-open character range
per visual line. Line terminators are never part of a range, so a hard
break leaves a one-character gap between two consecutive lines while a
soft break leaves none.
"""

from __future__ import annotations

import logging
import unicodedata
from typing import Callable, Iterable, Iterator, NamedTuple, Optional

from .metrics import FontMetrics, LayoutPool, is_line_terminator

logger = logging.getLogger(__name__)

Measure = Callable[[int, int], float]
ContinuePredicate = Callable[[int, int], bool]


class LineBreak(NamedTuple):
    start: int
    end: int


class LineBreakTable:
    """Ordered wrapped-line ranges.

    Besides record access, the table can be read as a flat sequence of
    boundaries where boundary 2k is the start and 2k+1 the end of line k.
    The cursor rules that tell a soft-wrap seam from a real line start
    compare neighbouring boundaries, which reads best in that form.
    """

    def __init__(self, lines: Iterable[tuple[int, int]] = ()):
        self._lines: list[LineBreak] = [LineBreak(start, end) for start, end in lines]

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, index: int) -> LineBreak:
        return self._lines[index]

    def __iter__(self) -> Iterator[LineBreak]:
        return iter(self._lines)

    def __eq__(self, other) -> bool:
        if isinstance(other, LineBreakTable):
            return self._lines == other._lines
        return NotImplemented

    def __repr__(self) -> str:
        return f"LineBreakTable({self.as_pairs()!r})"

    def append(self, start: int, end: int) -> None:
        self._lines.append(LineBreak(start, end))

    def clear(self) -> None:
        self._lines.clear()

    def as_pairs(self) -> list[tuple[int, int]]:
        return [(line.start, line.end) for line in self._lines]

    @property
    def boundary_count(self) -> int:
        return len(self._lines) * 2

    def boundary(self, index: int) -> int:
        return self._lines[index // 2][index % 2]

    def boundary_index(self, cursor: int) -> int:
        """First flat boundary index whose value is >= cursor.

        Returns boundary_count when the cursor is past every boundary.
        """
        index = 0
        count = self.boundary_count
        while index < count and cursor > self.boundary(index):
            index += 1
        return index


def newline_at_end(text: str) -> bool:
    """Returns if there's a line terminator at the end of the text."""
    return len(text) != 0 and is_line_terminator(text[-1])


def line_count(table: LineBreakTable, text: str) -> int:
    """Total number of visual lines, including the implicit empty last line."""
    return len(table) + (1 if newline_at_end(text) else 0)


def default_continue(text: str) -> ContinuePredicate:
    """Word-character predicate used when no text field supplies one."""
    def continue_cursor(index: int, offset: int) -> bool:
        ch = text[index + offset]
        return ch.isalnum() or unicodedata.combining(ch) != 0
    return continue_cursor


def _break_before_mark(text: str, line_start: int, end: int) -> int:
    """Move a break so that no line starts with a combining mark."""
    back = end
    while line_start + 1 < back < len(text) and unicodedata.combining(text[back]):
        back -= 1
    if back < len(text) and not unicodedata.combining(text[back]):
        return back
    # The line is a single base character with its marks; break after them
    while end < len(text) and unicodedata.combining(text[end]):
        end += 1
    return end


def compute_line_breaks(text: str, available_width: float, measure: Measure,
                        continue_cursor: ContinuePredicate) -> LineBreakTable:
    """Wrap text into lines no wider than available_width.

    Args:
        text: The whole buffer
        available_width: Maximum line width, in the units of measure
        measure: Width of text[start:end]
        continue_cursor: True when a break may not happen at an index
            (inside a word or before a combining mark)

    Returns:
        The line-break table. A trailing line terminator is not given a
        range of its own; see line_count().
    """
    table = LineBreakTable()
    line_start = 0
    last_space = 0
    for i, ch in enumerate(text):
        if is_line_terminator(ch):
            table.append(line_start, i)
            line_start = i + 1
            last_space = line_start
            continue
        if not continue_cursor(i, 0):
            last_space = i
        if measure(line_start, i + 1) > available_width:
            # No break point after line_start: the word is wider than the line
            if line_start >= last_space:
                last_space = i - 1
            end = _break_before_mark(text, line_start, last_space + 1)
            table.append(line_start, end)
            line_start = end
            last_space = line_start
    if line_start < len(text):
        table.append(line_start, len(text))
    return table


class WrapEngine:
    """Keeps the line-break table of one text area up to date.

    The table is rebuilt only after invalidate() or a width change. The
    owner calls invalidate() from its text-change listener.
    """

    def __init__(self, pool: Optional[LayoutPool] = None):
        self.table = LineBreakTable()
        self.width = 0.0
        self.recompute_count = 0
        self._dirty = True
        self._pool = pool or LayoutPool()

    @property
    def dirty(self) -> bool:
        return self._dirty

    def invalidate(self) -> None:
        self._dirty = True

    def set_width(self, width: float) -> None:
        if width != self.width:
            self.width = width
            self._dirty = True

    def ensure(self, text: str, metrics: FontMetrics,
               continue_cursor: Optional[ContinuePredicate] = None) -> bool:
        """Rebuild the table if it is stale.

        Returns:
            True if the table was rebuilt
        """
        if not self._dirty:
            return False
        self.recompute(text, self.width, metrics, continue_cursor)
        return True

    def recompute(self, text: str, available_width: float, metrics: FontMetrics,
                  continue_cursor: Optional[ContinuePredicate] = None) -> LineBreakTable:
        if continue_cursor is None:
            continue_cursor = default_continue(text)
        with self._pool.obtain() as layout:
            def measure(start: int, end: int) -> float:
                layout.set_text(metrics, text, start, end)
                return layout.width

            self.table = compute_line_breaks(text, available_width, measure, continue_cursor)
        self.width = available_width
        self._dirty = False
        self.recompute_count += 1
        logger.debug(f"Wrapped {len(text)} characters at width {available_width} into {len(self.table)} lines")
        return self.table
