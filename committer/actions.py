"""State transitions triggered by UI commands.

Selection and scrolling are pure state updates. Staging commands write the
index through ``committer.git.index`` and then re-query the snapshot.
"""

from __future__ import annotations

import logging
import time

from .git import index as index_ops
from .git.repository import Repository
from .git.status import query_status
from .state import AppState

logger = logging.getLogger(__name__)

STATUS_MESSAGE_SECONDS = 4.0


def set_status_message(state: AppState, message: str, seconds: float = STATUS_MESSAGE_SECONDS) -> None:
    state.status_message = message
    state.status_message_until = time.monotonic() + seconds
    state.dirty = True


def select_next(state: AppState) -> None:
    count = len(state.snapshot)
    if count == 0:
        return
    state.selection = 0 if state.selection is None else (state.selection + 1) % count
    state.diff_scroll = 0
    state.invalidate_diff()


def select_previous(state: AppState) -> None:
    count = len(state.snapshot)
    if count == 0:
        return
    state.selection = count - 1 if state.selection is None else (state.selection - 1) % count
    state.diff_scroll = 0
    state.invalidate_diff()


def scroll_diff_down(state: AppState) -> None:
    state.diff_scroll += 1
    state.dirty = True


def scroll_diff_up(state: AppState) -> None:
    state.diff_scroll = max(0, state.diff_scroll - 1)
    state.dirty = True


def refresh_snapshot(state: AppState, repository: Repository) -> None:
    """Re-query repository status, clamp the selection, and drop the diff cache."""
    state.snapshot = query_status(repository)
    count = len(state.snapshot)
    if count == 0:
        state.selection = None
    elif state.selection is None:
        state.selection = 0
    else:
        state.selection = min(state.selection, count - 1)
    state.invalidate_diff()


def toggle_stage(state: AppState, repository: Repository) -> None:
    """Unstage the selected file when it has a staged side, stage it otherwise."""
    selected = state.selected_file()
    if selected is None:
        return
    if selected.staged is not None:
        index_ops.unstage(repository, selected.path, selected.orig_path)
    else:
        index_ops.stage(repository, selected.path)
    refresh_snapshot(state, repository)


def stage_all_toggle(state: AppState, repository: Repository) -> None:
    if state.snapshot.is_clean():
        return
    staged = index_ops.stage_all_toggle(repository, state.snapshot)
    refresh_snapshot(state, repository)
    set_status_message(state, "staged all files" if staged else "unstaged all files")


def insert_char(state: AppState, ch: str) -> None:
    state.editor.insert_char(ch)
    state.dirty = True


def insert_newline(state: AppState) -> None:
    state.editor.insert_newline()
    state.dirty = True


def backspace(state: AppState) -> None:
    state.editor.backspace()
    state.dirty = True


def move_cursor_left(state: AppState) -> None:
    state.editor.move_left()
    state.dirty = True


def move_cursor_right(state: AppState) -> None:
    state.editor.move_right()
    state.dirty = True
