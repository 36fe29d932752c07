"""Single-line editing core.

TextField owns the text buffer, the linear cursor and the selection. The
rules that depend on how the text is laid out (stepping the cursor,
word boundaries, home/end, hit-testing) live in a CursorMotion strategy
so that a multi-line widget can replace them without subclassing.
"""

from __future__ import annotations

import unicodedata
from typing import Callable, Optional

from .metrics import is_line_terminator
from .style import TextAreaStyle


class CursorMotion:
    """Cursor rules of a single line of text.

    Every method receives the field it acts on. Subclasses override the
    rules that change once the text is wrapped.
    """

    def continue_cursor(self, field: "TextField", index: int, offset: int) -> bool:
        """Return True if a word jump may keep going past index + offset."""
        pos = index + offset
        if not 0 <= pos < len(field.text):
            return False
        ch = field.text[pos]
        # Combining marks belong to the previous character
        return field.is_word_character(ch) or unicodedata.combining(ch) != 0

    def move_cursor(self, field: "TextField", forward: bool, jump: bool) -> None:
        limit = len(field.text) if forward else 0
        char_offset = 0 if forward else -1
        step = 1 if forward else -1
        while True:
            field.cursor += step
            in_range = field.cursor < limit if forward else field.cursor > limit
            if not (in_range and jump):
                break
            if not field.continue_cursor(field.cursor, char_offset):
                break
        field.cursor = max(0, min(field.cursor, len(field.text)))

    def go_home(self, field: "TextField", jump: bool) -> None:
        field.cursor = 0

    def go_end(self, field: "TextField", jump: bool) -> None:
        field.cursor = len(field.text)

    def letter_under_cursor(self, field: "TextField", x: float) -> int:
        """Return the character boundary nearest to x (relative to the text start)."""
        positions = field.glyph_positions
        return nearest_boundary(positions, 0, len(positions) - 1, x)


def nearest_boundary(positions: list[float], start: int, end: int, x: float) -> int:
    """Find the boundary in positions[start:end + 1] closest to x.

    x is absolute (same origin as positions). Ties go to the earlier
    boundary.
    """
    i = start
    while i < end:
        if positions[i] > x:
            break
        i += 1
    if i > start and x - positions[i - 1] <= positions[i] - x:
        return i - 1
    return i


class TextField:
    """A text buffer with a linear cursor and an optional selection."""

    def __init__(self, text: str = "", style: Optional[TextAreaStyle] = None,
                 motion: Optional[CursorMotion] = None):
        self.style = style or TextAreaStyle()
        self.motion = motion or CursorMotion()
        self._text = ""
        self.cursor = 0
        self.selection_start = 0
        self.has_selection = False
        self.clipboard = ""  # Internal clipboard for cut/copy/paste
        self.write_enters = False
        self.max_length = 0  # 0 means unlimited
        self._glyph_positions: Optional[list[float]] = None
        self._listeners: list[Callable[[], None]] = []
        self.set_text(text)

    @property
    def text(self) -> str:
        return self._text

    @property
    def glyph_positions(self) -> list[float]:
        """Cumulative advances of the current text, len(text) + 1 entries."""
        if self._glyph_positions is None:
            self._glyph_positions = self.style.metrics.glyph_positions(self._text)
        return self._glyph_positions

    def add_change_listener(self, listener: Callable[[], None]) -> None:
        """Register a callback run after every text mutation."""
        self._listeners.append(listener)

    def _replace_text(self, text: str) -> None:
        if text == self._text:
            return
        self._text = text
        self._glyph_positions = None
        for listener in self._listeners:
            listener()

    def _filter(self, text: str) -> str:
        if self.write_enters:
            return text
        return "".join(ch for ch in text if not is_line_terminator(ch))

    # --- Editing ---

    def set_text(self, text: str) -> None:
        """Replace the whole text and put the cursor at the start."""
        self.clear_selection()
        text = self._filter(text)
        if self.max_length > 0:
            text = text[:self.max_length]
        self._replace_text(text)
        self.cursor = 0

    def append_text(self, text: str) -> None:
        self.clear_selection()
        self.cursor = len(self._text)
        self.insert(text)

    def insert(self, text: str) -> None:
        """Insert text at the cursor, replacing the selection if any."""
        if self.has_selection:
            self._delete_selection()
        text = self._filter(text)
        if self.max_length > 0:
            room = max(0, self.max_length - len(self._text))
            text = text[:room]
        if not text:
            return
        self._replace_text(self._text[:self.cursor] + text + self._text[self.cursor:])
        self.cursor += len(text)

    def backspace(self) -> None:
        """Delete the selection or the character before the cursor."""
        if self.has_selection:
            self._delete_selection()
        elif self.cursor > 0:
            self.cursor -= 1
            self._replace_text(self._text[:self.cursor] + self._text[self.cursor + 1:])

    def delete_forward(self) -> None:
        """Delete the selection or the character at the cursor (Delete key)."""
        if self.has_selection:
            self._delete_selection()
        elif self.cursor < len(self._text):
            self._replace_text(self._text[:self.cursor] + self._text[self.cursor + 1:])

    def _delete_selection(self) -> None:
        start = min(self.cursor, self.selection_start)
        end = max(self.cursor, self.selection_start)
        self.clear_selection()
        self.cursor = start
        self._replace_text(self._text[:start] + self._text[end:])

    # --- Cursor and selection ---

    def set_cursor(self, position: int) -> None:
        self.clear_selection()
        self.cursor = max(0, min(position, len(self._text)))

    def set_selection(self, selection_start: int, selection_end: int) -> None:
        """Select [start, end); the cursor ends up at selection_end."""
        length = len(self._text)
        selection_start = max(0, min(selection_start, length))
        selection_end = max(0, min(selection_end, length))
        if selection_start == selection_end:
            self.clear_selection()
            self.cursor = selection_end
            return
        self.has_selection = True
        self.selection_start = selection_start
        self.cursor = selection_end

    def select_all(self) -> None:
        self.set_selection(0, len(self._text))

    def clear_selection(self) -> None:
        self.has_selection = False

    def start_selection(self) -> None:
        """Anchor a selection at the cursor unless one is already active."""
        if not self.has_selection:
            self.selection_start = self.cursor
            self.has_selection = True

    def get_selection(self) -> str:
        if not self.has_selection:
            return ""
        start = min(self.cursor, self.selection_start)
        end = max(self.cursor, self.selection_start)
        return self._text[start:end]

    def copy(self) -> bool:
        """Copy selected text to clipboard."""
        selected = self.get_selection()
        if selected:
            self.clipboard = selected
            return True
        return False

    def cut(self) -> bool:
        """Cut selected text to clipboard."""
        if self.copy():
            self._delete_selection()
            return True
        return False

    def paste(self) -> None:
        """Paste clipboard at cursor position, replacing any selection."""
        if self.clipboard:
            self.insert(self.clipboard)

    # --- Layout-dependent rules, routed through the motion strategy ---

    def is_word_character(self, ch: str) -> bool:
        return ch.isalnum()

    def continue_cursor(self, index: int, offset: int) -> bool:
        return self.motion.continue_cursor(self, index, offset)

    def move_cursor(self, forward: bool, jump: bool) -> None:
        self.motion.move_cursor(self, forward, jump)

    def go_home(self, jump: bool) -> None:
        self.motion.go_home(self, jump)

    def go_end(self, jump: bool) -> None:
        self.motion.go_end(self, jump)

    def letter_under_cursor(self, x: float) -> int:
        return self.motion.letter_under_cursor(self, x)

    def get_pref_height(self) -> float:
        """Height of one line of text plus the background insets."""
        text_height = self.style.metrics.text_height
        background = self.style.background
        if background is None:
            return text_height
        return max(background.vertical + text_height, background.min_height)
