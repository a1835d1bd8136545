"""Key events parsed from curtsies key tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"


SPECIAL_KEYS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace', 'delete',
    'page_up', 'page_down', 'insert', 'tab', 'escape',
}

# Alternate spellings curtsies and terminals use for the same key
KEY_ALIASES = {
    'esc': 'escape',
    'pageup': 'page_up',
    'pagedown': 'page_down',
    'return': 'enter',
    'del': 'delete',
}

# Control characters that arrive bare instead of as <...> tokens
CONTROL_CHARS = {
    '\t': 'tab',
    '\r': 'enter',
    '\n': 'enter',
    '\x7f': 'backspace',
    '\x08': 'backspace',
    '\x1b': 'escape',
}

# Ctrl chords that are really editing keys
CTRL_SYNONYMS = {'i': 'tab', 'j': 'enter', 'm': 'enter'}


@dataclass
class KeyEvent:
    key_type: KeyType
    value: str  # 'a', 'left', 'r' for Ctrl-R, ...
    raw: str = ""  # Token as curtsies delivered it

    @property
    def is_escape(self) -> bool:
        return self.key_type == KeyType.SPECIAL and self.value == 'escape'

    @property
    def is_cancel(self) -> bool:
        """Escape-class keys: ESC and Ctrl-G."""
        return self.is_escape or (self.key_type == KeyType.CTRL and self.value == 'g')

    @property
    def is_printable(self) -> bool:
        return self.key_type == KeyType.REGULAR and len(self.value) == 1 and ord(self.value) >= 32


class KeyboardHandler:
    """Turns terminal key tokens into KeyEvents."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Wait up to `timeout` seconds for a key; None when nothing arrived."""
        token = self.terminal.get_key(timeout)
        if not token:
            return None
        return self.parse_key(token)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key token into a KeyEvent.

        Args:
            key: token such as 'a', '<UP>', '<Ctrl-r>', '<Esc+x>'
        """
        token = str(key)
        if len(token) > 2 and token[0] == '<' and token[-1] == '>':
            return self._parse_named(token)
        if token in CONTROL_CHARS:
            return KeyEvent(KeyType.SPECIAL, CONTROL_CHARS[token], token)
        if len(token) == 1 and 1 <= ord(token) <= 26:
            return self._ctrl(chr(ord('a') + ord(token) - 1), token)
        return KeyEvent(KeyType.REGULAR, token, token)

    def _parse_named(self, token: str) -> KeyEvent:
        parts = token[1:-1].lower().replace('+', '-').split('-')
        base = KEY_ALIASES.get(parts[-1], parts[-1])
        mods = set(parts[:-1])
        if mods & {'meta', 'esc'}:
            mods.add('alt')

        if base in ('space', 'spacebar', 'spc') and not mods:
            return KeyEvent(KeyType.REGULAR, ' ', token)
        if 'ctrl' in mods and len(base) == 1:
            return self._ctrl(base, token)
        if 'alt' in mods and (base in SPECIAL_KEYS or len(base) == 1):
            return KeyEvent(KeyType.ALT, base, token)
        # Unknown names are passed on as special keys nobody binds
        return KeyEvent(KeyType.SPECIAL, base, token)

    @staticmethod
    def _ctrl(letter: str, token: str) -> KeyEvent:
        if letter in CTRL_SYNONYMS:
            return KeyEvent(KeyType.SPECIAL, CTRL_SYNONYMS[letter], token)
        return KeyEvent(KeyType.CTRL, letter, token)
