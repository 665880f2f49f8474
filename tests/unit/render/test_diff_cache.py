"""Tests for selection-keyed diff caching.

The cache must only serve lines rendered for the current selection and must
call the renderer again after any selection change or staging refresh.
"""

from __future__ import annotations

import unittest

from committer import actions
from committer.diff.renderer import RenderedDiff
from committer.errors import RepositoryAccessError
from committer.git.status import ChangeKind, FileStatus, StatusSnapshot
from committer.render import DIFF_ERROR_PREFIX, ensure_diff_cache
from committer.state import AppState


class _RecordingRenderer:
    def __init__(self) -> None:
        self.calls: list[tuple[str, int]] = []

    def render(self, repository, file_status: FileStatus, pane_width: int) -> RenderedDiff:
        self.calls.append((file_status.path, pane_width))
        return RenderedDiff(lines=[f"diff of {file_status.path}"], is_staged=file_status.is_staged)


class _FailingRenderer:
    def __init__(self) -> None:
        self.calls = 0

    def render(self, repository, file_status: FileStatus, pane_width: int) -> RenderedDiff:
        self.calls += 1
        raise RepositoryAccessError("git timed out")


def _state() -> AppState:
    return AppState(
        snapshot=StatusSnapshot.from_files(
            [
                FileStatus("a.txt", unstaged=ChangeKind.MODIFIED),
                FileStatus("b.txt", staged=ChangeKind.ADDED),
            ]
        )
    )


class DiffCacheTests(unittest.TestCase):
    def test_cache_hit_skips_renderer(self) -> None:
        state = _state()
        renderer = _RecordingRenderer()

        first = ensure_diff_cache(state, None, renderer, 60)
        second = ensure_diff_cache(state, None, renderer, 60)

        self.assertIs(first, second)
        self.assertEqual(renderer.calls, [("a.txt", 60)])

    def test_selecting_b_then_a_never_reuses_b_lines(self) -> None:
        state = _state()
        renderer = _RecordingRenderer()

        ensure_diff_cache(state, None, renderer, 60)
        actions.select_next(state)
        entry_b = ensure_diff_cache(state, None, renderer, 60)
        actions.select_previous(state)
        entry_a = ensure_diff_cache(state, None, renderer, 60)

        self.assertEqual(entry_b.lines, ["diff of b.txt"])
        self.assertTrue(entry_b.is_staged)
        self.assertEqual(entry_a.lines, ["diff of a.txt"])
        self.assertFalse(entry_a.is_staged)
        self.assertEqual([path for path, _ in renderer.calls], ["a.txt", "b.txt", "a.txt"])

    def test_stale_entry_for_other_index_is_ignored(self) -> None:
        state = _state()
        renderer = _RecordingRenderer()
        ensure_diff_cache(state, None, renderer, 60)

        # Selection moved without going through an action.
        state.selection = 1

        self.assertIsNone(state.cached_diff_for_selection())
        entry = ensure_diff_cache(state, None, renderer, 60)
        self.assertEqual(entry.lines, ["diff of b.txt"])

    def test_empty_snapshot_has_no_diff(self) -> None:
        state = AppState(snapshot=StatusSnapshot())
        renderer = _RecordingRenderer()

        self.assertIsNone(ensure_diff_cache(state, None, renderer, 60))
        self.assertEqual(renderer.calls, [])

    def test_renderer_error_is_cached_as_notice(self) -> None:
        state = _state()
        renderer = _FailingRenderer()

        entry = ensure_diff_cache(state, None, renderer, 60)
        again = ensure_diff_cache(state, None, renderer, 60)

        self.assertIs(entry, again)
        self.assertEqual(entry.lines, [f"{DIFF_ERROR_PREFIX}: git timed out"])
        self.assertFalse(entry.is_staged)
        self.assertEqual(renderer.calls, 1)


if __name__ == "__main__":
    unittest.main()
