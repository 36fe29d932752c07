"""Visual style of a text area: font metrics and background insets."""

from dataclasses import dataclass, field
from typing import Optional

from .metrics import CellMetrics, FontMetrics


@dataclass(frozen=True)
class Background:
    """Insets of the drawable behind the text.

    Attributes:
        left: Space between the left edge and the text
        right: Space between the text and the right edge
        top: Space above the first line
        bottom: Space below the last line
        min_height: Smallest height the background can be drawn at
    """
    left: float = 0.0
    right: float = 0.0
    top: float = 0.0
    bottom: float = 0.0
    min_height: float = 0.0

    @property
    def horizontal(self) -> float:
        return self.left + self.right

    @property
    def vertical(self) -> float:
        return self.top + self.bottom


@dataclass
class TextAreaStyle:
    metrics: FontMetrics = field(default_factory=CellMetrics)
    background: Optional[Background] = None
