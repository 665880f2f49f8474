"""Tests for frame composition.

Checks box geometry, the file list markers, the editor cursor, diff
desaturation for unstaged files, and the reverse-video status row.
"""

from __future__ import annotations

import unittest

from committer.ansi import display_width, strip_ansi
from committer.git.status import ChangeKind, FileStatus, StatusSnapshot
from committer.render import (
    RenderContext,
    build_box,
    build_frame,
    build_status_line,
    clamp_left_width,
    compute_left_width,
    context_from_state,
    editor_rows,
    split_left_column,
)
from committer.state import AppState, DiffCacheEntry
from committer.ui_theme import DEFAULT_THEME, PLAIN_THEME


def _snapshot() -> StatusSnapshot:
    return StatusSnapshot.from_files(
        [
            FileStatus("a.txt", unstaged=ChangeKind.MODIFIED),
            FileStatus("b.txt", staged=ChangeKind.ADDED),
            FileStatus("c.txt", staged=ChangeKind.MODIFIED, unstaged=ChangeKind.DELETED),
        ]
    )


def _context(**overrides) -> RenderContext:
    values = dict(
        snapshot=_snapshot(),
        selection=0,
        editor_text="",
        cursor_line=0,
        cursor_col=0,
        cursor_visible=True,
        recent_subjects=("first subject", "second subject"),
        diff_lines=(),
        diff_is_staged=False,
        diff_scroll=0,
        width=100,
        height=20,
        left_width=50,
        branch="main",
        status_message="",
        theme=PLAIN_THEME,
    )
    values.update(overrides)
    return RenderContext(**values)


class LayoutHelperTests(unittest.TestCase):
    def test_left_column_split_is_half_quarter_quarter(self) -> None:
        self.assertEqual(split_left_column(20), (10, 5, 5))
        self.assertEqual(split_left_column(19), (9, 4, 6))

    def test_left_width_defaults_to_half_and_respects_percent(self) -> None:
        self.assertEqual(compute_left_width(100), 50)
        self.assertEqual(compute_left_width(100, 30.0), 30)

    def test_clamp_left_width_keeps_both_panes_usable(self) -> None:
        self.assertEqual(clamp_left_width(100, 5), 20)
        self.assertEqual(clamp_left_width(100, 95), 88)
        self.assertEqual(clamp_left_width(100, 50), 50)

    def test_status_line_pads_between_left_and_right(self) -> None:
        self.assertEqual(build_status_line("left", 20, "right"), "left" + " " * 10 + "right")

    def test_build_box_geometry(self) -> None:
        rows = build_box("T", ["x"], 10, 4, PLAIN_THEME)
        self.assertEqual(
            rows,
            [
                "┌─ T ────┐",
                "│x       │",
                "│        │",
                "└────────┘",
            ],
        )

    def test_build_box_clips_long_titles(self) -> None:
        rows = build_box("A very long title", [], 10, 2, PLAIN_THEME)
        self.assertEqual([display_width(row) for row in rows], [10, 10])


class BuildFrameTests(unittest.TestCase):
    def test_frame_rows_span_full_width(self) -> None:
        frame = build_frame(_context(theme=DEFAULT_THEME))
        rows = frame.split("\r\n")

        self.assertTrue(frame.startswith("\033[H\033[J"))
        self.assertEqual(len(rows), 20)
        for row in rows[:-1]:
            self.assertEqual(display_width(strip_ansi(row)), 100)

    def test_titles_and_recent_commits_are_shown(self) -> None:
        frame = build_frame(_context())

        self.assertIn("Files (Ctrl+W/S", frame)
        self.assertIn("Commit Message (Ctrl+Q to quit)", frame)
        self.assertIn("Recent Commits", frame)
        self.assertIn("Diff (↑↓ to scroll)", frame)
        self.assertIn("#1 first subject", frame)
        self.assertIn("#2 second subject", frame)

    def test_file_markers_reflect_staged_state(self) -> None:
        frame = build_frame(_context())

        self.assertIn(">> [ ] M a.txt", frame)
        self.assertIn("   [x] A b.txt", frame)
        self.assertIn("   [~] M c.txt", frame)

    def test_file_list_scrolls_to_selection(self) -> None:
        files = [FileStatus(f"f{idx:02d}.txt", unstaged=ChangeKind.ADDED) for idx in range(12)]
        frame = build_frame(_context(snapshot=StatusSnapshot.from_files(files), selection=11))

        self.assertIn(">> [ ] A f11.txt", frame)
        self.assertNotIn("f02.txt", frame)

    def test_unstaged_diff_lines_are_desaturated(self) -> None:
        frame = build_frame(_context(diff_lines=("\033[31m-x",), diff_is_staged=False, theme=DEFAULT_THEME))
        self.assertIn("\033[90m\033[37m-x", frame)

    def test_staged_diff_lines_keep_colors(self) -> None:
        frame = build_frame(_context(diff_lines=("\033[31m-x",), diff_is_staged=True, theme=DEFAULT_THEME))
        self.assertIn("\033[31m-x", frame)
        self.assertNotIn("\033[37m-x", frame)

    def test_plain_theme_strips_diff_colors(self) -> None:
        for staged in (False, True):
            frame = build_frame(_context(diff_lines=("\033[31m-x\033[0m",), diff_is_staged=staged))
            self.assertIn("│-x ", frame)
            self.assertNotIn("\033[31m", frame)
            self.assertNotIn("\033[37m", frame)

    def test_diff_scroll_skips_leading_lines(self) -> None:
        lines = tuple(f"line {idx}" for idx in range(5))
        frame = build_frame(_context(diff_lines=lines, diff_is_staged=True, diff_scroll=3))

        self.assertNotIn("line 2", frame)
        self.assertIn("line 3", frame)
        self.assertIn("diff 4/5", frame)

    def test_empty_snapshot_shows_placeholders(self) -> None:
        frame = build_frame(_context(snapshot=StatusSnapshot(), selection=None))
        self.assertIn("No changes", frame)
        self.assertIn("No file selected", frame)

    def test_status_row_shows_branch_counts_and_message(self) -> None:
        frame = build_frame(_context(status_message="staged all files"))
        status = frame.split("\r\n")[-1]

        self.assertTrue(status.startswith("\033[7m"))
        self.assertIn("main  3 changed, 2 staged", status)
        self.assertIn("staged all files", status)


class EditorRenderTests(unittest.TestCase):
    def test_cursor_at_end_of_line_is_underscore(self) -> None:
        frame = build_frame(_context(editor_text="ab", cursor_col=2))
        self.assertIn("ab_", frame)

    def test_cursor_hidden_during_off_phase(self) -> None:
        frame = build_frame(_context(editor_text="ab", cursor_col=2, cursor_visible=False))
        self.assertNotIn("ab_", frame)
        self.assertIn("ab", frame)

    def test_cursor_inside_line_reverses_character(self) -> None:
        frame = build_frame(_context(editor_text="ab", cursor_col=1))
        self.assertIn("a\033[7mb\033[0m", frame)

    def test_default_theme_underlines_end_of_line_cursor(self) -> None:
        frame = build_frame(_context(editor_text="ab", cursor_col=2, theme=DEFAULT_THEME))
        self.assertIn("ab\033[4m_\033[0m", frame)

    def test_rows_scroll_to_cursor_line(self) -> None:
        context = _context(editor_text="l1\nl2\nl3\nl4", cursor_line=3, cursor_col=2)
        self.assertEqual(editor_rows(context, 10, 2), ["l3", "l4_"])

    def test_long_lines_wrap(self) -> None:
        context = _context(editor_text="abcdefghij", cursor_col=10)
        self.assertEqual(editor_rows(context, 4, 5), ["abcd", "efgh", "ij_"])


class ContextFromStateTests(unittest.TestCase):
    def test_context_uses_cached_diff_only_for_current_selection(self) -> None:
        state = AppState(snapshot=_snapshot(), recent_subjects=["one"], branch="dev")
        state.editor.insert_char("x")
        state.diff_cache = DiffCacheEntry(selected_index=0, lines=["+x"], is_staged=False)

        context = context_from_state(state, width=80, height=24, cursor_visible=True)
        self.assertEqual(context.diff_lines, ("+x",))
        self.assertEqual(context.editor_text, "x")
        self.assertEqual((context.cursor_line, context.cursor_col), (0, 1))
        self.assertEqual(context.recent_subjects, ("one",))

        state.selection = 1
        context = context_from_state(state, width=80, height=24, cursor_visible=True)
        self.assertEqual(context.diff_lines, ())


if __name__ == "__main__":
    unittest.main()
