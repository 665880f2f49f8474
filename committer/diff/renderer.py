"""Structural diff rendering through difftastic.

Compares the HEAD blob of a path with its on-disk content by writing both to
scoped temporary files and running ``difft`` on them. Any tool failure turns
into fallback text instead of an error.
"""

from __future__ import annotations

import logging
import subprocess
import tempfile
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from ..errors import DiffToolUnavailable
from ..git.repository import Repository
from ..git.status import FileStatus
from .fallback import build_fallback_lines

logger = logging.getLogger(__name__)

DEFAULT_DIFF_TOOL = "difft"
PANE_BORDER_ALLOWANCE = 4
MIN_DIFF_WIDTH = 40


@dataclass(frozen=True)
class RenderedDiff:
    """Styled diff lines plus the file's staged flag (a display hint)."""

    lines: list[str] = field(default_factory=list)
    is_staged: bool = False


def diff_width_for_pane(pane_width: int) -> int:
    return max(pane_width - PANE_BORDER_ALLOWANCE, MIN_DIFF_WIDTH)


def build_difft_command(command: str, width: int, old_path: Path, new_path: Path) -> list[str]:
    return [
        command,
        "--color=always",
        "--display=inline",
        "--syntax-highlight=on",
        f"--width={width}",
        str(old_path),
        str(new_path),
    ]


class DifftasticRenderer:
    """Render a file's HEAD-vs-worktree diff with an external difftastic binary.

    Any object with a compatible ``render`` method can stand in for this one,
    which keeps the event loop testable without spawning processes.
    """

    def __init__(
        self,
        command: str = DEFAULT_DIFF_TOOL,
        timeout_seconds: float | None = None,
        *,
        colorize_fallback: bool = True,
    ) -> None:
        self.command = command
        self.timeout_seconds = timeout_seconds
        self.colorize_fallback = colorize_fallback

    def render(self, repository: Repository, file_status: FileStatus, pane_width: int) -> RenderedDiff:
        is_staged = file_status.staged is not None
        old = repository.head_blob(file_status.path) or b""
        new = repository.read_worktree(file_status.path) or b""
        width = diff_width_for_pane(pane_width)

        try:
            output = self._run_tool(file_status.path, old, new, width)
        except DiffToolUnavailable as exc:
            logger.warning("diff tool unavailable for %s: %s", file_status.path, exc)
            lines = build_fallback_lines(
                file_status.path,
                old,
                new,
                colorize=self.colorize_fallback,
            )
            return RenderedDiff(lines=lines, is_staged=is_staged)

        return RenderedDiff(lines=output.splitlines(), is_staged=is_staged)

    def _run_tool(self, path: str, old: bytes, new: bytes, width: int) -> str:
        name = PurePosixPath(path).name or "file.txt"
        try:
            with tempfile.TemporaryDirectory(prefix="committer-diff-") as tmp:
                old_path = Path(tmp) / "old" / name
                new_path = Path(tmp) / "new" / name
                old_path.parent.mkdir()
                new_path.parent.mkdir()
                old_path.write_bytes(old)
                new_path.write_bytes(new)

                command = build_difft_command(self.command, width, old_path, new_path)
                logger.debug("running %s", command)
                proc = subprocess.run(
                    command,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.PIPE,
                    check=False,
                    timeout=self.timeout_seconds,
                )
        except (OSError, subprocess.TimeoutExpired) as exc:
            # Covers temp-file setup as well as launching the tool.
            raise DiffToolUnavailable(str(exc)) from exc

        if proc.returncode != 0:
            detail = proc.stderr.decode("utf-8", errors="replace").strip()
            raise DiffToolUnavailable(f"{self.command} exited with status {proc.returncode}: {detail}")
        return proc.stdout.decode("utf-8", errors="replace")
