"""Keyboard input handling on top of blessed keystrokes."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"
    SHIFT_SPECIAL = "shift_special"  # Shift + arrow keys, etc.


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw key string from blessed
    is_alt: bool = False
    is_ctrl: bool = False
    is_shift: bool = False


SPECIAL_KEYS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace',
    'delete', 'page_up', 'page_down', 'insert', 'escape', 'tab',
}

# Names without modifiers that blessed inherits from curses
_CURSES_NAMES = {
    'KEY_PGUP': ('page_up', set()),
    'KEY_PPAGE': ('page_up', set()),
    'KEY_PGDOWN': ('page_down', set()),
    'KEY_NPAGE': ('page_down', set()),
    'KEY_SLEFT': ('left', {'shift'}),
    'KEY_SRIGHT': ('right', {'shift'}),
    'KEY_SR': ('up', {'shift'}),  # "scroll reverse" is what terminals send for Shift-Up
    'KEY_SF': ('down', {'shift'}),
    'KEY_SHOME': ('home', {'shift'}),
    'KEY_SEND': ('end', {'shift'}),
    'KEY_SDC': ('delete', {'shift'}),
    'KEY_BTAB': ('tab', {'shift'}),
}

_MODIFIERS = {'shift', 'ctrl', 'alt', 'meta'}


def _split_key_name(name: str) -> tuple[str, set]:
    """Split a blessed key name like KEY_CTRL_SHIFT_LEFT into base and modifiers."""
    if name in _CURSES_NAMES:
        base, mods = _CURSES_NAMES[name]
        return base, set(mods)
    parts = name.lower().split('_')
    if parts and parts[0] == 'key':
        parts = parts[1:]
    mods = set()
    while len(parts) > 1 and parts[0] in _MODIFIERS:
        mods.add('alt' if parts[0] == 'meta' else parts[0])
        parts = parts[1:]
    base = '_'.join(parts)
    if base in ('pgup', 'pageup'):
        base = 'page_up'
    elif base in ('pgdown', 'pagedown'):
        base = 'page_down'
    return base, mods


def parse_key(key) -> KeyEvent:
    """Parse a blessed keystroke (or a plain string) into a KeyEvent.

    Args:
        key: blessed.keyboard.Keystroke object or str

    Returns:
        Parsed KeyEvent
    """
    key_str = str(key)
    name = getattr(key, 'name', None)

    if getattr(key, 'is_sequence', False) and name:
        base, mods = _split_key_name(name)
        if base == 'tab' and not mods:
            return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
        is_alt = 'alt' in mods
        is_ctrl = 'ctrl' in mods
        is_shift = 'shift' in mods
        if is_shift and base in SPECIAL_KEYS:
            key_type = KeyType.SHIFT_SPECIAL
        elif is_ctrl:
            key_type = KeyType.CTRL
        elif is_alt:
            key_type = KeyType.ALT
        else:
            key_type = KeyType.SPECIAL
        return KeyEvent(key_type=key_type, value=base, raw=key_str,
                        is_alt=is_alt, is_ctrl=is_ctrl, is_shift=is_shift)

    if len(key_str) == 1:
        o = ord(key_str)
        if key_str in ('\r', '\n'):
            return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
        if key_str == '\t':
            return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
        if o in (0x08, 0x7f):
            return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
        if key_str == '\x1b':
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)
        if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
            ch = chr(ord('a') + o - 1)
            return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, is_ctrl=True)

    # ESC followed by a character is how terminals send Alt-<char>
    if len(key_str) == 2 and key_str[0] == '\x1b':
        return KeyEvent(key_type=KeyType.ALT, value=key_str[1], raw=key_str, is_alt=True)

    return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)


class KeyboardHandler:
    """Reads keystrokes from a blessed terminal and parses them."""

    def __init__(self, terminal):
        """Initialize with a blessed.Terminal."""
        self.terminal = terminal

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        key = self.terminal.inkey(timeout=timeout)
        if not key:
            return None
        return parse_key(key)
