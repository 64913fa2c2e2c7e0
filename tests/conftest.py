"""Shared fixtures: an in-memory display and editor factories."""

import pytest

from linepad.buffer import Buffer
from linepad.editor import Editor
from linepad.keyboard import KeyEvent, KeyType
from linepad.view import Display


class FakeTerminal(Display):
    """Display that records frames instead of writing to a terminal."""

    def __init__(self, width=40, height=10):
        self.width = width
        self.height = height
        self.cells = {}
        self.cursor = (0, 0)
        self.frames = []
        self.invalidated = 0
        self.keys = []

    def size(self):
        return self.width, self.height

    def clear(self):
        self.cells = {}

    def set_cell(self, x, y, ch):
        self.cells[(x, y)] = ch

    def set_cursor(self, x, y):
        self.cursor = (x, y)

    def present(self):
        self.frames.append(dict(self.cells))

    def invalidate_frame(self):
        self.invalidated += 1

    def get_key(self, timeout=None):
        if self.keys:
            return self.keys.pop(0)
        return None

    def row_text(self, y):
        """Text of row y in the last presented frame, trailing blanks removed."""
        frame = self.frames[-1]
        chars = [frame.get((x, y), ' ') for x in range(self.width)]
        return ''.join(chars).rstrip()


def special(name):
    return KeyEvent(key_type=KeyType.SPECIAL, value=name, raw=name)


def ctrl(letter):
    return KeyEvent(key_type=KeyType.CTRL, value=letter, raw=chr(ord(letter) - ord('a') + 1), is_ctrl=True)


def char(ch):
    return KeyEvent(key_type=KeyType.REGULAR, value=ch, raw=ch)


def type_text(editor, text):
    for ch in text:
        editor.handle_key_event(char(ch))


@pytest.fixture
def terminal():
    return FakeTerminal()


@pytest.fixture
def make_editor(terminal):
    """Build an editor on the fake terminal holding the given lines."""
    def _make(lines=(), insert=False):
        editor = Editor(terminal=terminal)
        editor.set_buffer(Buffer(lines))
        if insert:
            editor.handle_key_event(ctrl('i'))
        return editor
    return _make
