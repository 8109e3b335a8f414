"""Keyboard input handling using curtsies-style tokens."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """A parsed keyboard event."""
    key_type: KeyType
    value: str  # base key, e.g. 'a', 'left', 'backspace'
    raw: str
    is_ctrl: bool = False


def _parse_token(name: str, raw: str) -> KeyEvent:
    """Parse the inside of a '<...>' token such as 'LEFT' or 'Ctrl-b'."""
    parts = name.lower().replace('+', '-').split('-')
    base = parts[-1]
    mods = set(parts[:-1])
    if base == 'esc':
        base = 'escape'

    if base in ('space', 'spacebar') and not mods:
        return KeyEvent(KeyType.REGULAR, ' ', ' ')
    if 'ctrl' in mods and len(base) == 1:
        return KeyEvent(KeyType.CTRL, base, raw, is_ctrl=True)
    return KeyEvent(KeyType.SPECIAL, base, raw)


def parse_key(key) -> KeyEvent:
    """Map a curtsies key name or raw character to a KeyEvent."""
    key_str = str(key)

    if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
        return _parse_token(key_str[1:-1], key_str)

    if len(key_str) == 1:
        o = ord(key_str)
        if o in (10, 13):
            return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
        if o == 27:
            return KeyEvent(KeyType.SPECIAL, 'escape', key_str)
        if o == 127:
            return KeyEvent(KeyType.SPECIAL, 'backspace', key_str)
        if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
            return KeyEvent(KeyType.CTRL, chr(ord('a') + o - 1), key_str, is_ctrl=True)

    return KeyEvent(KeyType.REGULAR, key_str, key_str)


class KeyboardHandler:
    """Reads keys from a terminal interface and parses them."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return parse_key(key)
