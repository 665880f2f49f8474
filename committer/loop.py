"""Blocking-poll event loop.

Each pass refreshes layout, advances the cursor-blink phase, redraws when the
state is dirty, then waits on stdin up to the poll timeout for one key.
"""

from __future__ import annotations

import shutil
import time
from collections.abc import Callable
from dataclasses import dataclass

from .input import read_key
from .render import clamp_left_width
from .state import AppState
from .terminal import TerminalController


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing knobs used by the event loop."""

    poll_timeout_ms: int = 500
    cursor_blink_seconds: float = 0.5


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Hooks the loop calls for rendering and key dispatch."""

    render_frame: Callable[[int, int, bool], str]
    handle_key: Callable[[str], bool]
    get_terminal_size: Callable[[], tuple[int, int]] = lambda: tuple(shutil.get_terminal_size((80, 24)))
    read_key: Callable[[int, int], str] = read_key
    now: Callable[[], float] = time.time
    monotonic: Callable[[], float] = time.monotonic


def cursor_blink_phase(now: float, blink_seconds: float) -> bool:
    """Return ``True`` during the visible half of the blink cycle."""
    return int(now / blink_seconds) % 2 == 0


def normalize_enter(state: AppState, key: str) -> str | None:
    """Fold CR, LF, and CRLF into one ``ENTER``; ``None`` means drop the key."""
    if state.skip_next_lf and key == "ENTER_LF":
        state.skip_next_lf = False
        return None
    if key == "ENTER_CR":
        state.skip_next_lf = True
        return "ENTER"
    state.skip_next_lf = False
    if key == "ENTER_LF":
        return "ENTER"
    return key


def run_main_loop(
    *,
    state: AppState,
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming,
    callbacks: RuntimeLoopCallbacks,
) -> None:
    cursor_visible = True
    last_size: tuple[int, int] | None = None

    with terminal.raw_mode():
        while True:
            columns, lines = callbacks.get_terminal_size()
            if (columns, lines) != last_size:
                if last_size is not None and last_size[0] != columns:
                    # The cached diff was rendered for the old pane width.
                    state.invalidate_diff()
                last_size = (columns, lines)
                state.left_width = clamp_left_width(columns, state.left_width)
                state.dirty = True

            if state.status_message and callbacks.monotonic() >= state.status_message_until:
                state.status_message = ""
                state.dirty = True

            blink_phase = cursor_blink_phase(callbacks.now(), timing.cursor_blink_seconds)
            if blink_phase != cursor_visible:
                cursor_visible = blink_phase
                state.dirty = True

            if state.dirty:
                terminal.write_frame(callbacks.render_frame(columns, lines, cursor_visible))
                state.dirty = False

            key = callbacks.read_key(stdin_fd, timing.poll_timeout_ms)
            if key == "":
                continue
            normalized = normalize_enter(state, key)
            if normalized is None:
                continue
            if callbacks.handle_key(normalized):
                break
