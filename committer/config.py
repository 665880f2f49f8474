"""Persistent JSON config helpers.

Stores the pane-width preset and the runtime settings read at startup.
Malformed or missing values fall back to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "committer"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_DIFF_TOOL = "difft"
DEFAULT_POLL_TIMEOUT_MS = 500
DEFAULT_CURSOR_BLINK_SECONDS = 0.5


@dataclass(frozen=True)
class RuntimeSettings:
    """Config values consumed at startup."""

    theme: str | None = None
    diff_tool: str = DEFAULT_DIFF_TOOL
    diff_tool_timeout_seconds: float | None = None
    poll_timeout_ms: int = DEFAULT_POLL_TIMEOUT_MS
    cursor_blink_seconds: float = DEFAULT_CURSOR_BLINK_SECONDS
    left_pane_percent: float | None = None
    log_file: Path | None = None


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored so a read-only config
    directory never interrupts the session.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("cannot write config %s: %s", CONFIG_PATH, exc)


def _number_in_range(value: object, low: float, high: float) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value < low or value > high:
        return None
    return float(value)


def load_left_pane_percent() -> float | None:
    """Read the left column width percentage, constrained to (0, 100)."""
    value = load_config().get("left_pane_percent")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value <= 0 or value >= 100:
        return None
    return float(value)


def save_left_pane_percent(total_width: int, left_width: int) -> None:
    """Store the left column width as a bounded percentage.

    ``left_width / total_width`` is clamped to ``[1.0, 99.0]`` and rounded to
    two decimals before persisting.
    """
    if total_width <= 0:
        return
    percent = max(1.0, min(99.0, (left_width / total_width) * 100.0))
    config = load_config()
    config["left_pane_percent"] = round(percent, 2)
    save_config(config)


def load_settings() -> RuntimeSettings:
    """Build ``RuntimeSettings`` from the config file, dropping invalid values."""
    data = load_config()

    theme = data.get("theme")
    diff_tool = data.get("diff_tool")
    log_file = data.get("log_file")
    timeout = _number_in_range(data.get("diff_tool_timeout_seconds"), 0.001, 3600.0)
    poll_ms = _number_in_range(data.get("poll_timeout_ms"), 50, 5000)
    blink = _number_in_range(data.get("cursor_blink_seconds"), 0.1, 5.0)

    return RuntimeSettings(
        theme=theme if isinstance(theme, str) and theme.strip() else None,
        diff_tool=diff_tool.strip() if isinstance(diff_tool, str) and diff_tool.strip() else DEFAULT_DIFF_TOOL,
        diff_tool_timeout_seconds=timeout,
        poll_timeout_ms=int(poll_ms) if poll_ms is not None else DEFAULT_POLL_TIMEOUT_MS,
        cursor_blink_seconds=blink if blink is not None else DEFAULT_CURSOR_BLINK_SECONDS,
        left_pane_percent=load_left_pane_percent(),
        log_file=Path(log_file).expanduser() if isinstance(log_file, str) and log_file else None,
    )
