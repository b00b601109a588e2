"""
Shared fixtures: a scripted stand-in for the curses window.
"""
import pytest


class FakeWindow:
    """Feeds keys from a list and records everything printed."""

    def __init__(self, keys=(), size=(24, 80)):
        self.keys = list(keys)
        self.size = size
        self.printed = []
        self.cursor = None
        self.cursor_visible = False

    def getch(self):
        if not self.keys:
            return None
        return self.keys.pop(0)

    def get_max_yx(self):
        return self.size

    def clear(self):
        self.printed = []

    def refresh(self):
        pass

    def show_cursor(self, visible=True):
        self.cursor_visible = visible

    def move(self, y, x):
        self.cursor = (y, x)

    def mvprintw(self, y, x, text, colour=None):
        self.printed.append((y, x, text, colour))

    def wrap_print(self, y, x, width, text, colour=None):
        self.printed.append((y, x, text, colour))

    def border(self, top, left, height, width):
        pass

    def fill(self, top, left, height, width, ch=" "):
        pass

    def texts(self):
        return [text for _, _, text, _ in self.printed]


@pytest.fixture
def fake_window():
    return FakeWindow
