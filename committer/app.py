"""Application composition for the interactive session.

Builds the initial ``AppState`` from the repository, wires rendering and key
dispatch into the event loop, and returns the final commit message text.
Also formats the plain status listing used outside the TUI.
"""

from __future__ import annotations

import logging
import shutil
import sys

from .config import RuntimeSettings, save_left_pane_percent
from .diff.renderer import DifftasticRenderer
from .git.log import recent_subjects
from .git.repository import Repository
from .git.status import StatusSnapshot
from .keys import KeyHandler
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from .render import (
    DiffRenderer,
    build_frame,
    clamp_left_width,
    compute_left_width,
    context_from_state,
    diff_pane_width,
    ensure_diff_cache,
    format_file_entry,
)
from .state import AppState
from .terminal import TerminalController
from .ui_theme import DEFAULT_THEME, UITheme

logger = logging.getLogger(__name__)

CLEAN_STATUS_TEXT = "Working directory clean"


def _terminal_size() -> tuple[int, int]:
    size = shutil.get_terminal_size((80, 24))
    return size.columns, size.lines


def format_status_lines(snapshot: StatusSnapshot, theme: UITheme = DEFAULT_THEME) -> list[str]:
    """Plain listing of the snapshot, one file per line."""
    if snapshot.is_clean():
        return [f" {theme.checkbox_staged}{CLEAN_STATUS_TEXT}{theme.reset}"]
    return [f" {format_file_entry(file_status, theme)}" for file_status in snapshot]


def build_initial_state(
    repository: Repository,
    snapshot: StatusSnapshot,
    settings: RuntimeSettings,
    columns: int,
) -> AppState:
    return AppState(
        snapshot=snapshot,
        recent_subjects=recent_subjects(repository),
        branch=repository.current_branch(),
        left_width=clamp_left_width(columns, compute_left_width(columns, settings.left_pane_percent)),
    )


def run_ui(
    repository: Repository,
    snapshot: StatusSnapshot,
    settings: RuntimeSettings,
    *,
    theme: UITheme = DEFAULT_THEME,
    renderer: DiffRenderer | None = None,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> str:
    """Run the interactive session and return the composed message."""
    if renderer is None:
        renderer = DifftasticRenderer(
            settings.diff_tool,
            settings.diff_tool_timeout_seconds,
            colorize_fallback=theme.name != "plain",
        )
    if stdin_fd is None:
        stdin_fd = sys.stdin.fileno()
    if stdout_fd is None:
        stdout_fd = sys.stdout.fileno()

    terminal = TerminalController(stdin_fd, stdout_fd)
    columns, _ = _terminal_size()
    state = build_initial_state(repository, snapshot, settings, columns)
    logger.info("session started: %d changed file(s) on %s", len(snapshot), state.branch)

    def render_frame(width: int, height: int, cursor_visible: bool) -> str:
        ensure_diff_cache(state, repository, renderer, diff_pane_width(width, state.left_width))
        context = context_from_state(
            state,
            width=width,
            height=height,
            cursor_visible=cursor_visible,
            theme=theme,
        )
        return build_frame(context)

    def resize_left_pane(delta: int) -> None:
        width, _ = _terminal_size()
        prev_left = state.left_width
        state.left_width = clamp_left_width(width, state.left_width + delta)
        if state.left_width != prev_left:
            save_left_pane_percent(width, state.left_width)
            state.invalidate_diff()

    key_handler = KeyHandler(state, repository, resize_left_pane)
    run_main_loop(
        state=state,
        terminal=terminal,
        stdin_fd=stdin_fd,
        timing=RuntimeLoopTiming(
            poll_timeout_ms=settings.poll_timeout_ms,
            cursor_blink_seconds=settings.cursor_blink_seconds,
        ),
        callbacks=RuntimeLoopCallbacks(
            render_frame=render_frame,
            handle_key=key_handler.handle_key,
            get_terminal_size=_terminal_size,
        ),
    )
    logger.info("session ended")
    return state.editor.text
