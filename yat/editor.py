"""
Single-line text entry with a movable cursor.

The cursor is kept as a byte offset into the UTF-8 encoding of the text and
as a display column; wide characters (CJK, most emoji) take two columns and
combining marks none. The editor draws nothing: the caller feeds it key
events and renders `text` and `column`.
"""
import curses

from wcwidth import wcwidth, wcswidth

COMMIT_KEYS = ("\n", curses.KEY_ENTER)


def char_width(ch: str) -> int:
    w = wcwidth(ch)
    return max(w, 0)


def display_width(text: str) -> int:
    w = wcswidth(text)
    if w < 0:
        return sum(char_width(ch) for ch in text)
    return w


class LineEditor:
    def __init__(self, text: str = ""):
        self.text = text
        self._index = len(text)
        self.offset = len(text.encode("utf-8"))
        self.width = sum(char_width(ch) for ch in text)
        self.column = self.width

    def __repr__(self):
        return f"<LineEditor {self.text!r} offset={self.offset} column={self.column}>"

    def insert(self, ch: str) -> bool:
        if len(ch) != 1 or not ch.isprintable():
            return False
        w = char_width(ch)
        self.text = self.text[:self._index] + ch + self.text[self._index:]
        self._index += 1
        self.offset += len(ch.encode("utf-8"))
        self.column += w
        self.width += w
        return True

    def backspace(self) -> bool:
        if self._index == 0:
            return False
        ch = self.text[self._index - 1]
        w = char_width(ch)
        self.text = self.text[:self._index - 1] + self.text[self._index:]
        self._index -= 1
        self.offset -= len(ch.encode("utf-8"))
        self.column -= w
        self.width -= w
        return True

    def delete_forward(self) -> bool:
        if self._index >= len(self.text):
            return False
        ch = self.text[self._index]
        self.text = self.text[:self._index] + self.text[self._index + 1:]
        self.width -= char_width(ch)
        return True

    def move_left(self) -> bool:
        if self._index == 0:
            return False
        self._index -= 1
        ch = self.text[self._index]
        self.offset -= len(ch.encode("utf-8"))
        self.column -= char_width(ch)
        return True

    def move_right(self) -> bool:
        if self._index >= len(self.text):
            return False
        ch = self.text[self._index]
        self._index += 1
        self.offset += len(ch.encode("utf-8"))
        self.column += char_width(ch)
        return True

    def commit(self) -> str:
        return self.text

    def handle_key(self, key) -> bool:
        """Apply one key event; True means the entry was committed."""
        if key in COMMIT_KEYS:
            return True
        if key == curses.KEY_BACKSPACE:
            self.backspace()
        elif key == curses.KEY_DC:
            self.delete_forward()
        elif key == curses.KEY_LEFT:
            self.move_left()
        elif key == curses.KEY_RIGHT:
            self.move_right()
        elif isinstance(key, str):
            self.insert(key)
        return False
