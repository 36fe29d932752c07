"""Command pattern implementation for text area key handling."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType

if TYPE_CHECKING:
    from .keyboard import KeyEvent
    from .view import TextArea


class AreaCommand(ABC):
    """Base class for text area commands."""

    @abstractmethod
    def execute(self, area: 'TextArea', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            area: TextArea the key was pressed in
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the text
        """
        pass


def _update_selection(area: 'TextArea', key_event: 'KeyEvent') -> None:
    # Shift extends (or starts) the selection, any other motion drops it
    if key_event.is_shift:
        area.field.start_selection()
    else:
        area.field.clear_selection()


class MovementCommand(AreaCommand):
    """Base class for cursor movement commands."""

    def execute(self, area: 'TextArea', key_event: 'KeyEvent') -> bool:
        """Movement commands don't modify the text."""
        _update_selection(area, key_event)
        self._move(area, key_event)
        area.move_offset = None
        area.show_cursor()
        return False

    @abstractmethod
    def _move(self, area: 'TextArea', key_event: 'KeyEvent'):
        """Perform the movement."""
        pass


class VerticalMovementCommand(MovementCommand):
    """Movement that keeps the remembered column."""

    def execute(self, area: 'TextArea', key_event: 'KeyEvent') -> bool:
        _update_selection(area, key_event)
        self._move(area, key_event)
        area.show_cursor()
        return False


def _is_jump(key_event: 'KeyEvent') -> bool:
    # Ctrl-B and Ctrl-F step by character; Ctrl with an arrow or any Alt jumps words
    return key_event.is_alt or (key_event.is_ctrl and key_event.value in ('left', 'right'))


class LeftCommand(MovementCommand):
    def _move(self, area, key_event):
        area.move_cursor(False, _is_jump(key_event))


class RightCommand(MovementCommand):
    def _move(self, area, key_event):
        area.move_cursor(True, _is_jump(key_event))


class HomeCommand(MovementCommand):
    def _move(self, area, key_event):
        area.go_home(key_event.is_ctrl and key_event.value == 'home')


class EndCommand(MovementCommand):
    def _move(self, area, key_event):
        area.go_end(key_event.is_ctrl and key_event.value == 'end')


class UpLineCommand(VerticalMovementCommand):
    def _move(self, area, key_event):
        area.move_cursor_line(area.cursor_line - 1)


class DownLineCommand(VerticalMovementCommand):
    def _move(self, area, key_event):
        area.move_cursor_line(area.cursor_line + 1)


class PageUpCommand(VerticalMovementCommand):
    def _move(self, area, key_event):
        area.page_up()


class PageDownCommand(VerticalMovementCommand):
    def _move(self, area, key_event):
        area.page_down()


class SelectAllCommand(AreaCommand):
    def execute(self, area, key_event):
        area.field.select_all()
        area.move_offset = None
        area.show_cursor()
        return False


class CopyCommand(AreaCommand):
    def execute(self, area, key_event):
        area.field.copy()
        return False


class EditCommand(AreaCommand):
    """Base class for editing commands."""

    def execute(self, area: 'TextArea', key_event: 'KeyEvent') -> bool:
        """Editing commands modify the text."""
        before = area.text
        self._edit(area, key_event)
        area.move_offset = None
        area.show_cursor()
        return area.text != before

    @abstractmethod
    def _edit(self, area: 'TextArea', key_event: 'KeyEvent'):
        """Perform the edit."""
        pass


class InsertTextCommand(EditCommand):
    def _edit(self, area, key_event):
        area.field.insert(key_event.value)


class EnterCommand(EditCommand):
    def _edit(self, area, key_event):
        area.field.insert('\n')


class BackspaceCommand(EditCommand):
    def _edit(self, area, key_event):
        area.field.backspace()


class DeleteCommand(EditCommand):
    def _edit(self, area, key_event):
        area.field.delete_forward()


class CutCommand(EditCommand):
    def _edit(self, area, key_event):
        area.field.cut()


class PasteCommand(EditCommand):
    def _edit(self, area, key_event):
        area.field.paste()


class CommandRegistry:
    """Registry of key bindings for a text area."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], AreaCommand] = {}
        self._register_default_commands()

    def _register_default_commands(self):
        # Movement, with and without shift
        for key_type in (KeyType.SPECIAL, KeyType.SHIFT_SPECIAL):
            self.register((key_type, 'left'), LeftCommand())
            self.register((key_type, 'right'), RightCommand())
            self.register((key_type, 'up'), UpLineCommand())
            self.register((key_type, 'down'), DownLineCommand())
            self.register((key_type, 'home'), HomeCommand())
            self.register((key_type, 'end'), EndCommand())
            self.register((key_type, 'page_up'), PageUpCommand())
            self.register((key_type, 'page_down'), PageDownCommand())

        # Word jumps and text start/end
        self.register((KeyType.CTRL, 'left'), LeftCommand())
        self.register((KeyType.CTRL, 'right'), RightCommand())
        self.register((KeyType.ALT, 'left'), LeftCommand())
        self.register((KeyType.ALT, 'right'), RightCommand())
        self.register((KeyType.ALT, 'b'), LeftCommand())
        self.register((KeyType.ALT, 'f'), RightCommand())
        self.register((KeyType.CTRL, 'home'), HomeCommand())
        self.register((KeyType.CTRL, 'end'), EndCommand())

        # Emacs-style line movement
        self.register((KeyType.CTRL, 'a'), HomeCommand())
        self.register((KeyType.CTRL, 'e'), EndCommand())
        self.register((KeyType.CTRL, 'b'), LeftCommand())
        self.register((KeyType.CTRL, 'f'), RightCommand())
        self.register((KeyType.CTRL, 'p'), UpLineCommand())
        self.register((KeyType.CTRL, 'n'), DownLineCommand())

        # Editing
        self.register((KeyType.SPECIAL, 'enter'), EnterCommand())
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteCommand())
        self.register((KeyType.CTRL, 'd'), DeleteCommand())

        # Clipboard
        self.register((KeyType.CTRL, 'w'), CutCommand())
        self.register((KeyType.ALT, 'w'), CopyCommand())
        self.register((KeyType.CTRL, 'y'), PasteCommand())
        self.register((KeyType.ALT, 'a'), SelectAllCommand())

    def register(self, key: Tuple[KeyType, str], command: AreaCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[AreaCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, area: 'TextArea', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the text was modified
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(area, key_event)

        # Handle regular text input
        if key_event.key_type == KeyType.REGULAR:
            return InsertTextCommand().execute(area, key_event)

        # Unbound keys still forget the remembered column
        area.move_offset = None
        area.show_cursor()
        return False
