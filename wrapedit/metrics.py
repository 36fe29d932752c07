"""Font metrics for wrapped text layout.

This module defines the font metric providers the layout engine measures
text with, in whatever unit the host draws in (terminal cells or points),
plus the pooled scratch layouts used while the line breaks are rebuilt.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator

from reportlab.pdfbase import pdfmetrics
from wcwidth import wcwidth

from .constants import EditorConstants


class FontLoadError(Exception):
    """Exception raised when a font cannot be loaded."""


def is_line_terminator(ch: str) -> bool:
    return ch in EditorConstants.LINE_TERMINATORS


class FontMetrics(ABC):
    """Glyph advances and vertical metrics of one font.

    Attributes:
        line_height: Distance between two baselines
        descent: Distance from the baseline to the bottom of the glyphs,
            negative when below the baseline
        cap_height: Height of capital letters above the baseline
        cursor_x: Horizontal offset applied when drawing the caret
    """

    line_height: float = 1.0
    descent: float = 0.0
    cap_height: float = 1.0
    cursor_x: float = 0.0

    @abstractmethod
    def advance(self, ch: str) -> float:
        """Return the horizontal advance of a single character."""

    def measure(self, text: str) -> float:
        """Return the width of a run of text."""
        return sum(self.advance(ch) for ch in text)

    @property
    def text_height(self) -> float:
        return self.cap_height - self.descent * 2

    def glyph_positions(self, text: str) -> list[float]:
        """Cumulative advances, one per character boundary.

        The result has len(text) + 1 entries; entry i is the x offset of
        the boundary before character i.
        """
        positions = [0.0]
        x = 0.0
        for ch in text:
            x += self.advance(ch)
            positions.append(x)
        return positions


class CellMetrics(FontMetrics):
    """Terminal cell metrics: every column is `cell_width` wide."""

    def __init__(self, cell_width: float = 1.0, line_height: float = 1.0):
        self.cell_width = cell_width
        self.line_height = line_height
        self.cap_height = line_height
        self.descent = 0.0

    def advance(self, ch: str) -> float:
        if is_line_terminator(ch):
            return 0.0
        if ch == "\t":
            return self.cell_width
        # wcwidth returns -1 for control characters
        return max(wcwidth(ch), 0) * self.cell_width


class PdfFontMetrics(FontMetrics):
    """Proportional metrics of a font registered with reportlab.

    The standard Type 1 fonts (Helvetica, Times-Roman, Courier, ...) are
    available without any font files.
    """

    def __init__(self, font_name: str = "Helvetica", font_size: float = EditorConstants.DEFAULT_FONT_SIZE,
                 leading: float = EditorConstants.DEFAULT_LEADING):
        try:
            pdfmetrics.getFont(font_name)
        except (KeyError, ValueError) as e:
            raise FontLoadError(f"Unknown font: {font_name}") from e
        self.font_name = font_name
        self.font_size = font_size
        ascent, descent = pdfmetrics.getAscentDescent(font_name, font_size)
        self.cap_height = ascent
        self.descent = descent
        self.line_height = font_size * leading

    def advance(self, ch: str) -> float:
        if is_line_terminator(ch):
            return 0.0
        return pdfmetrics.stringWidth(ch, self.font_name, self.font_size)

    def measure(self, text: str) -> float:
        return pdfmetrics.stringWidth(text, self.font_name, self.font_size)


def get_metrics(font_name: str, font_size: float = EditorConstants.DEFAULT_FONT_SIZE) -> FontMetrics:
    """Get font metrics by name.

    Args:
        font_name: "cell" for terminal cells, otherwise a reportlab font name
        font_size: Point size for reportlab fonts

    Returns:
        FontMetrics for the font

    Raises:
        FontLoadError: If reportlab does not know the font.
    """
    if font_name == "cell":
        return CellMetrics()
    return PdfFontMetrics(font_name, font_size)


class GlyphLayout:
    """Scratch measurement of one run of text.

    Carries mutable state between set_text() and the read of `width`, so
    instances are handed out by a LayoutPool and never kept by callers.
    """

    def __init__(self):
        self.width = 0.0
        self.length = 0

    def set_text(self, metrics: FontMetrics, text: str, start: int, end: int) -> None:
        self.width = metrics.measure(text[start:end])
        self.length = end - start

    def reset(self) -> None:
        self.width = 0.0
        self.length = 0


class LayoutPool:
    """Free list of GlyphLayout objects."""

    def __init__(self, max_free: int = EditorConstants.LAYOUT_POOL_SIZE):
        self._free: list[GlyphLayout] = []
        self._max_free = max_free

    @property
    def free_count(self) -> int:
        return len(self._free)

    @contextmanager
    def obtain(self) -> Iterator[GlyphLayout]:
        """Lend a layout for the duration of a with block."""
        layout = self._free.pop() if self._free else GlyphLayout()
        try:
            yield layout
        finally:
            layout.reset()
            if len(self._free) < self._max_free:
                self._free.append(layout)
