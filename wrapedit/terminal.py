"""Terminal rendering of a TextArea using Blessed."""

from typing import Optional

import blessed

from .view import TextArea


class TerminalInterface:
    """Handles terminal output using Blessed.

    The text area measures in its font's units; `cell_width` is how many
    of those units one terminal column stands for.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False

    @property
    def width(self) -> int:
        return self.term.width

    @property
    def height(self) -> int:
        return self.term.height

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    def compose_line(self, text: str, view_width: int, selection: Optional[tuple[int, int]]) -> str:
        """Pad a line to the view width and reverse-video the selected columns."""
        display = text.expandtabs(1)[:view_width].ljust(view_width)
        if not selection:
            return display
        start, end = selection
        start = max(0, min(start, view_width))
        end = max(start, min(end, view_width))
        return display[:start] + self.term.reverse + display[start:end] + self.term.normal + display[end:]

    def frame_lines(self, area: TextArea, view_width: int, cell_width: float = 1.0) -> list[str]:
        """Composed screen rows for the area's scroll window."""
        selections = {}
        for span in area.selection_spans():
            start = round(span.x / cell_width)
            end = round((span.x + span.width) / cell_width)
            if end > start:
                selections[span.line] = (start, end)

        rows = []
        for line, text in area.visible_lines():
            rows.append(self.compose_line(text, view_width, selections.get(line)))
        while len(rows) < area.lines_showing:
            rows.append(" " * view_width)
        return rows

    def draw(self, area: TextArea, view_width: int, left_margin: int = 0,
             cell_width: float = 1.0, status: str = ""):
        """Draw the visible lines, the status line and place the cursor."""
        out = [self.term.home]
        for y, row in enumerate(self.frame_lines(area, view_width, cell_width)):
            out.append(self.term.move(y, 0) + self.term.clear_eol)
            out.append(self.term.move(y, left_margin) + row)

        out.append(self.term.move(self.height - 1, 0) + self.term.clear_eol)
        out.append(self.term.reverse + status[:self.width].ljust(self.width) + self.term.normal)

        cursor_y = area.get_cursor_line() - area.get_first_line_showing()
        cursor_x = round(area.cursor_offset() / cell_width)
        out.append(self.term.move(cursor_y, cursor_x + left_margin) + self.term.normal_cursor)
        print(''.join(out), end='', flush=True)
