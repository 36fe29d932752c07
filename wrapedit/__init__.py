"""wrapedit - A word-wrapping multi-line text editing engine."""

from .metrics import CellMetrics, FontLoadError, FontMetrics, PdfFontMetrics, get_metrics
from .model import CursorMotion, TextField
from .style import Background, TextAreaStyle
from .view import SelectionSpan, TextArea
from .wrap import LineBreak, LineBreakTable, WrapEngine, compute_line_breaks

__all__ = [
    'Background',
    'CellMetrics',
    'CursorMotion',
    'FontLoadError',
    'FontMetrics',
    'LineBreak',
    'LineBreakTable',
    'PdfFontMetrics',
    'SelectionSpan',
    'TextArea',
    'TextAreaStyle',
    'TextField',
    'WrapEngine',
    'compute_line_breaks',
    'get_metrics',
]
