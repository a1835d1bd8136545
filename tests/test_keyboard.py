"""Test keyboard input handling."""

import pytest
from redit.keyboard import KeyboardHandler, KeyEvent, KeyType


class MockTerminal:
    """Mock terminal interface that replays curtsies tokens."""

    def __init__(self, keys=()):
        self._key_queue = list(keys)
        self.timeouts = []

    def get_key(self, timeout=None):
        self.timeouts.append(timeout)
        if self._key_queue:
            return self._key_queue.pop(0)
        return None


@pytest.fixture
def handler():
    return KeyboardHandler(MockTerminal())


@pytest.mark.parametrize("token,key_type,value", [
    ('a', KeyType.REGULAR, 'a'),
    ('Z', KeyType.REGULAR, 'Z'),
    ('é', KeyType.REGULAR, 'é'),
    ('<SPACE>', KeyType.REGULAR, ' '),
    ('<UP>', KeyType.SPECIAL, 'up'),
    ('<LEFT>', KeyType.SPECIAL, 'left'),
    ('<HOME>', KeyType.SPECIAL, 'home'),
    ('<PAGEUP>', KeyType.SPECIAL, 'page_up'),
    ('<DELETE>', KeyType.SPECIAL, 'delete'),
    ('<BACKSPACE>', KeyType.SPECIAL, 'backspace'),
    ('<TAB>', KeyType.SPECIAL, 'tab'),
    ('<ESC>', KeyType.SPECIAL, 'escape'),
    ('<Ctrl-r>', KeyType.CTRL, 'r'),
    ('<Ctrl-k>', KeyType.CTRL, 'k'),
    ('<Ctrl-j>', KeyType.SPECIAL, 'enter'),
    ('<Ctrl-i>', KeyType.SPECIAL, 'tab'),
    ('<Esc+x>', KeyType.ALT, 'x'),
    ('\t', KeyType.SPECIAL, 'tab'),
    ('\r', KeyType.SPECIAL, 'enter'),
    ('\n', KeyType.SPECIAL, 'enter'),
    ('\x7f', KeyType.SPECIAL, 'backspace'),
    ('\x1b', KeyType.SPECIAL, 'escape'),
    ('\x0b', KeyType.CTRL, 'k'),
    ('\x12', KeyType.CTRL, 'r'),
])
def test_parse_key(handler, token, key_type, value):
    event = handler.parse_key(token)

    assert event.key_type == key_type
    assert event.value == value
    assert event.raw == token


def test_escape_and_ctrl_g_cancel():
    assert KeyEvent(KeyType.SPECIAL, 'escape').is_cancel
    assert KeyEvent(KeyType.CTRL, 'g').is_cancel
    assert not KeyEvent(KeyType.CTRL, 'k').is_cancel
    assert not KeyEvent(KeyType.REGULAR, 'g').is_cancel


def test_printable():
    assert KeyEvent(KeyType.REGULAR, 'x').is_printable
    assert KeyEvent(KeyType.REGULAR, ' ').is_printable
    assert not KeyEvent(KeyType.SPECIAL, 'up').is_printable
    assert not KeyEvent(KeyType.CTRL, 'x').is_printable
    assert not KeyEvent(KeyType.REGULAR, '\x00').is_printable


def test_get_key_event_reads_from_terminal():
    terminal = MockTerminal(['<Ctrl-s>', 'q'])
    handler = KeyboardHandler(terminal)

    first = handler.get_key_event(timeout=0)
    second = handler.get_key_event(timeout=0)
    assert (first.key_type, first.value) == (KeyType.CTRL, 's')
    assert (second.key_type, second.value) == (KeyType.REGULAR, 'q')
    assert terminal.timeouts == [0, 0]


def test_get_key_event_timeout_returns_none():
    handler = KeyboardHandler(MockTerminal())

    assert handler.get_key_event(timeout=0.5) is None
