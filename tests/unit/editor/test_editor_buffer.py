"""Tests for the commit message buffer.

Covers byte-cursor movement over multi-byte UTF-8 characters, edits at the
buffer edges, and line/column reporting used by the renderer.
"""

from __future__ import annotations

import unittest

from committer.editor import EditorBuffer, is_continuation_byte


class EditorBufferTests(unittest.TestCase):
    def test_insert_ascii_advances_cursor_by_one_byte(self) -> None:
        buffer = EditorBuffer()
        buffer.insert_char("a")
        buffer.insert_char("b")

        self.assertEqual(buffer.text, "ab")
        self.assertEqual(buffer.cursor, 2)

    def test_four_byte_character_then_move_left_lands_before_all_bytes(self) -> None:
        buffer = EditorBuffer()
        buffer.insert_char("😀")
        self.assertEqual(buffer.cursor, 4)

        buffer.move_left()

        self.assertEqual(buffer.cursor, 0)
        self.assertTrue(buffer.is_char_boundary(buffer.cursor))

    def test_move_over_mixed_width_characters(self) -> None:
        buffer = EditorBuffer("aé€")
        self.assertEqual(buffer.cursor, 6)

        buffer.move_left()
        self.assertEqual(buffer.cursor, 3)
        buffer.move_left()
        self.assertEqual(buffer.cursor, 1)
        buffer.move_right()
        self.assertEqual(buffer.cursor, 3)

    def test_backspace_removes_whole_multibyte_character(self) -> None:
        buffer = EditorBuffer("xé")
        buffer.backspace()

        self.assertEqual(buffer.text, "x")
        self.assertEqual(buffer.cursor, 1)

    def test_insert_in_middle_keeps_cursor_after_inserted_character(self) -> None:
        buffer = EditorBuffer("ac")
        buffer.move_left()
        buffer.insert_char("b")

        self.assertEqual(buffer.text, "abc")
        self.assertEqual(buffer.cursor, 2)

    def test_edge_operations_are_noops(self) -> None:
        buffer = EditorBuffer("ab")
        buffer.move_right()
        self.assertEqual(buffer.cursor, 2)

        buffer.move_left()
        buffer.move_left()
        buffer.move_left()
        buffer.backspace()

        self.assertEqual(buffer.cursor, 0)
        self.assertEqual(buffer.text, "ab")

    def test_insert_rejects_more_than_one_character(self) -> None:
        buffer = EditorBuffer()
        with self.assertRaises(ValueError):
            buffer.insert_char("ab")
        with self.assertRaises(ValueError):
            buffer.insert_char("")

    def test_newline_and_cursor_line_col_count_characters(self) -> None:
        buffer = EditorBuffer("subject")
        buffer.insert_newline()
        buffer.insert_char("é")
        buffer.insert_char("x")

        self.assertEqual(buffer.text, "subject\néx")
        self.assertEqual(buffer.cursor_line_col(), (1, 2))

    def test_clear_empties_buffer(self) -> None:
        buffer = EditorBuffer("text")
        buffer.clear()

        self.assertTrue(buffer.is_empty())
        self.assertEqual(buffer.cursor, 0)
        self.assertEqual(len(buffer), 0)

    def test_continuation_byte_detection(self) -> None:
        encoded = "é".encode("utf-8")
        self.assertFalse(is_continuation_byte(encoded[0]))
        self.assertTrue(is_continuation_byte(encoded[1]))
        self.assertFalse(is_continuation_byte(ord("a")))


if __name__ == "__main__":
    unittest.main()
