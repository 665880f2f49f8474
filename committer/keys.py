"""Key-token dispatch for the status/commit screen.

Maps decoded key tokens to state transitions. Repository and index errors
raised by a command stop here: they become a status-line message and the
snapshot is re-read so the screen shows what the index really contains.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from . import actions
from .errors import CommitterError, RepositoryAccessError
from .git.repository import Repository
from .state import AppState

logger = logging.getLogger(__name__)

QUIT = "CTRL_Q"
LEFT_PANE_STEP = 2


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single action callback."""

    combos: tuple[str, ...]
    handler: Callable[[], bool | None]


class KeyComboRegistry:
    """Small key-dispatch table keyed by exact token."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], bool | None]] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, key: str) -> bool | None:
        """Invoke bound handler for ``key``; ``None`` means no binding matched."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler()


def run_guarded(state: AppState, repository: Repository, command: Callable[[], None]) -> None:
    """Run a repository command, turning failures into a status message."""
    try:
        command()
    except CommitterError as exc:
        logger.exception("command failed")
        actions.set_status_message(state, f"error: {exc}")
        try:
            actions.refresh_snapshot(state, repository)
        except RepositoryAccessError:
            logger.exception("cannot re-read repository status")


def is_insertable(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


class KeyHandler:
    """Bind key tokens to commands for one session."""

    def __init__(
        self,
        state: AppState,
        repository: Repository,
        resize_left_pane: Callable[[int], None] | None = None,
    ) -> None:
        self.state = state
        self.repository = repository
        self._resize_left_pane = resize_left_pane
        self.registry = KeyComboRegistry().register_bindings(
            KeyComboBinding((QUIT,), lambda: True),
            KeyComboBinding(("DOWN",), lambda: actions.scroll_diff_down(state)),
            KeyComboBinding(("UP",), lambda: actions.scroll_diff_up(state)),
            KeyComboBinding(("CTRL_S",), lambda: actions.select_next(state)),
            KeyComboBinding(("CTRL_W",), lambda: actions.select_previous(state)),
            KeyComboBinding(("CTRL_SPACE",), self._toggle_stage),
            KeyComboBinding(("CTRL_A",), self._stage_all_toggle),
            KeyComboBinding(("LEFT",), lambda: actions.move_cursor_left(state)),
            KeyComboBinding(("RIGHT",), lambda: actions.move_cursor_right(state)),
            KeyComboBinding(("BACKSPACE",), lambda: actions.backspace(state)),
            KeyComboBinding(("ENTER",), lambda: actions.insert_newline(state)),
            KeyComboBinding(("SHIFT_LEFT",), lambda: self._resize(-LEFT_PANE_STEP)),
            KeyComboBinding(("SHIFT_RIGHT",), lambda: self._resize(LEFT_PANE_STEP)),
        )

    def _toggle_stage(self) -> None:
        run_guarded(self.state, self.repository, lambda: actions.toggle_stage(self.state, self.repository))

    def _stage_all_toggle(self) -> None:
        run_guarded(self.state, self.repository, lambda: actions.stage_all_toggle(self.state, self.repository))

    def _resize(self, delta: int) -> None:
        if self._resize_left_pane is not None:
            self._resize_left_pane(delta)

    def handle_key(self, key: str) -> bool:
        """Apply ``key`` to the session; return ``True`` when the loop should exit."""
        result = self.registry.dispatch(key)
        if result is None and is_insertable(key):
            actions.insert_char(self.state, key)
        return bool(result)
