"""Interactive terminal editor hosting a single TextArea."""

import errno
import logging
import os
import tempfile
from typing import Optional

from .commands import CommandRegistry
from .constants import EditorConstants
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .metrics import get_metrics
from .settings import EditorSettings
from .style import TextAreaStyle
from .terminal import TerminalInterface
from .view import TextArea

logger = logging.getLogger(__name__)


class Editor:
    """Main editor controller: reads keys, edits, redraws."""

    def __init__(self, settings: Optional[EditorSettings] = None,
                 terminal: Optional[TerminalInterface] = None):
        self.settings = settings or EditorSettings()
        metrics = get_metrics(self.settings.font_name, self.settings.font_size)
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal.term)
        self.area = TextArea(style=TextAreaStyle(metrics=metrics))
        self.commands = CommandRegistry()
        # One terminal column stands for the advance of a wide glyph
        self.cell_width = metrics.advance("M") or 1.0
        self.running = False
        self.filename: Optional[str] = None
        self.modified = False
        self.status_message: Optional[str] = None
        self.layout()

    @property
    def view_width(self) -> int:
        return max(1, min(self.settings.width, self.terminal.width))

    @property
    def left_margin(self) -> int:
        return max(0, (self.terminal.width - self.view_width) // 2)

    def layout(self) -> None:
        """Size the text area to the terminal, leaving the status row free."""
        rows = max(0, self.terminal.height - 1)
        if self.settings.pref_rows > 0:
            rows = min(rows, self.settings.pref_rows)
        line_height = self.area.metrics.line_height
        # Half a line of slack so float rounding never loses a row
        self.area.set_size(self.view_width * self.cell_width, (rows + 0.5) * line_height)

    def load_file(self, filename: str) -> None:
        self.filename = filename
        try:
            with open(filename, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            content = ""
            self.status_message = f"New file: {filename}"
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not load {filename}: {e}")
            content = ""
            self.status_message = f"Could not load {filename}: {e}"
        self.area.set_text(content)
        self.modified = False

    def save_file(self) -> bool:
        if not self.filename:
            self.status_message = "No filename; start the editor with a file argument"
            return False
        # Write a temp file in the same directory, then rename it over the
        # target so a failed write never truncates the user's file
        dir_name = os.path.dirname(self.filename) or '.'
        suffix = os.path.splitext(self.filename)[1]
        temp_filename = None
        try:
            with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', dir=dir_name,
                                             suffix=suffix, delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(self.area.text)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_filename, self.filename)
        except OSError as e:
            logger.warning(f"Could not save {self.filename}: {e}")
            if e.errno == errno.ENOSPC:
                self.status_message = EditorConstants.NO_SPACE_MESSAGE
            else:
                self.status_message = EditorConstants.SAVE_FAILED_MESSAGE.format(self.filename, e)
            if temp_filename is not None and os.path.exists(temp_filename):
                try:
                    os.remove(temp_filename)
                except OSError as cleanup_error:
                    logger.warning(f"Could not remove {temp_filename}: {cleanup_error}")
            return False
        self.modified = False
        self.status_message = EditorConstants.SAVED_MESSAGE.format(self.filename)
        return True

    def status_line(self) -> str:
        if self.status_message:
            return self.status_message
        name = self.filename or "[no file]"
        flag = " *" if self.modified else ""
        return (f"{name}{flag}  line {self.area.get_cursor_line() + 1}/{self.area.get_lines()}"
                f"  ^S save  ^Q quit")

    def handle_key(self, key_event: KeyEvent) -> None:
        """Dispatch one key event."""
        self.status_message = None
        if key_event.key_type == KeyType.CTRL and key_event.value == 'q':
            self.running = False
            return
        if key_event.key_type == KeyType.CTRL and key_event.value == 's':
            self.save_file()
            return
        # Without write_enters only typed line breaks are refused; the
        # loaded text keeps its own
        if (not self.settings.write_enters and key_event.key_type == KeyType.SPECIAL
                and key_event.value == 'enter'):
            return
        if self.commands.execute(self.area, key_event):
            self.modified = True

    def draw(self) -> None:
        self.terminal.draw(self.area, self.view_width, self.left_margin,
                           self.cell_width, self.status_line())

    def run(self) -> None:
        """Run the main editor loop."""
        self.terminal.setup()
        self.running = True
        try:
            # raw mode so Ctrl-S and Ctrl-Q reach us instead of flow control
            with self.terminal.term.raw():
                while self.running:
                    self.layout()
                    self.draw()
                    key_event = self.keyboard.get_key_event(timeout=0.5)
                    if key_event is not None:
                        self.handle_key(key_event)
        finally:
            self.terminal.cleanup()
