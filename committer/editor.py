"""Commit message line buffer with a UTF-8 byte cursor.

The buffer stores encoded bytes and moves the cursor in bytes, always
stepping over continuation bytes so it never lands inside a character.
"""

from __future__ import annotations


def is_continuation_byte(byte: int) -> bool:
    """Return whether ``byte`` is a UTF-8 continuation byte (``0b10xxxxxx``)."""
    return (byte & 0xC0) == 0x80


class EditorBuffer:
    """Multi-line text with a single cursor measured in UTF-8 bytes."""

    def __init__(self, text: str = "") -> None:
        self._data = bytearray(text.encode("utf-8"))
        self._cursor = len(self._data)

    @property
    def text(self) -> str:
        return self._data.decode("utf-8")

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._data)

    def is_empty(self) -> bool:
        return not self._data

    def is_char_boundary(self, offset: int) -> bool:
        """Return whether ``offset`` falls between two characters."""
        if offset == 0 or offset == len(self._data):
            return True
        if offset < 0 or offset > len(self._data):
            return False
        return not is_continuation_byte(self._data[offset])

    def _previous_boundary(self) -> int:
        offset = self._cursor - 1
        while offset > 0 and not self.is_char_boundary(offset):
            offset -= 1
        return offset

    def _next_boundary(self) -> int:
        offset = self._cursor + 1
        while offset < len(self._data) and not self.is_char_boundary(offset):
            offset += 1
        return offset

    def insert_char(self, ch: str) -> None:
        """Insert one character at the cursor and move past its encoded bytes."""
        if len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        encoded = ch.encode("utf-8")
        self._data[self._cursor:self._cursor] = encoded
        self._cursor += len(encoded)

    def insert_newline(self) -> None:
        self.insert_char("\n")

    def backspace(self) -> None:
        """Delete the character before the cursor."""
        if self._cursor == 0:
            return
        start = self._previous_boundary()
        del self._data[start:self._cursor]
        self._cursor = start

    def move_left(self) -> None:
        if self._cursor == 0:
            return
        self._cursor = self._previous_boundary()

    def move_right(self) -> None:
        if self._cursor >= len(self._data):
            return
        self._cursor = self._next_boundary()

    def clear(self) -> None:
        self._data.clear()
        self._cursor = 0

    def cursor_line_col(self) -> tuple[int, int]:
        """Return the cursor as ``(line, column)`` counted in characters."""
        before = self._data[:self._cursor].decode("utf-8")
        line = before.count("\n")
        column = len(before) - (before.rfind("\n") + 1)
        return line, column
