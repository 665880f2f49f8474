"""Repository handle backed by the git command line.

Discovers the work tree and git dir, runs git commands with consistent
encoding, and reads HEAD tree entries, blobs, and working-tree files.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from ..errors import RepositoryAccessError

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class HeadEntry:
    """One blob entry of the HEAD tree."""

    mode: str
    oid: str
    path: str


def _git_command(cwd: Path, args: list[str]) -> list[str]:
    return ["git", "-C", str(cwd), *args]


class Repository:
    """Open handle on one git work tree."""

    def __init__(self, root: Path, git_dir: Path, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> None:
        self.root = root
        self.git_dir = git_dir
        self.timeout_seconds = timeout_seconds

    @classmethod
    def discover(cls, path: Path, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> Repository:
        """Open the repository containing ``path``.

        Raises ``RepositoryAccessError`` when git is missing, the path does not
        exist, or it is not inside a work tree.
        """
        path = path.resolve()
        if not path.exists():
            raise RepositoryAccessError(f"Path not found: {path}")
        start = path if path.is_dir() else path.parent
        try:
            proc = subprocess.run(
                _git_command(start, ["rev-parse", "--show-toplevel", "--git-dir"]),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=timeout_seconds,
            )
        except FileNotFoundError as exc:
            raise RepositoryAccessError("git is not installed or not on PATH") from exc
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise RepositoryAccessError(f"Cannot run git in {start}: {exc}") from exc

        if proc.returncode != 0:
            detail = proc.stderr.strip() or "not a git repository"
            raise RepositoryAccessError(f"Not in a git repository ({detail})")

        lines = [line.strip() for line in proc.stdout.splitlines() if line.strip()]
        if len(lines) < 2:
            raise RepositoryAccessError(f"Repository has no working directory: {start}")

        root = Path(lines[0]).resolve()
        git_dir_raw = Path(lines[1])
        git_dir = git_dir_raw if git_dir_raw.is_absolute() else (start / git_dir_raw)
        logger.info("opened repository %s", root)
        return cls(root, git_dir.resolve(), timeout_seconds)

    def run_git(
        self,
        args: list[str],
        *,
        input_text: str | None = None,
    ) -> subprocess.CompletedProcess[str]:
        """Run git inside the work tree and return the completed process.

        Non-zero exits are returned to the caller; only a failure to launch git
        raises ``RepositoryAccessError``.
        """
        try:
            return subprocess.run(
                _git_command(self.root, args),
                input=input_text,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="surrogateescape",
                check=False,
                timeout=self.timeout_seconds,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise RepositoryAccessError(f"git {' '.join(args)} failed: {exc}") from exc

    def _run_git_bytes(self, args: list[str]) -> subprocess.CompletedProcess[bytes]:
        try:
            return subprocess.run(
                _git_command(self.root, args),
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                check=False,
                timeout=self.timeout_seconds,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise RepositoryAccessError(f"git {' '.join(args)} failed: {exc}") from exc

    def has_head(self) -> bool:
        """Return whether HEAD points at a commit (false on an unborn branch)."""
        proc = self.run_git(["rev-parse", "--verify", "--quiet", "HEAD^{commit}"])
        return proc.returncode == 0

    def head_entry(self, rel_path: str) -> HeadEntry | None:
        """Return the HEAD tree entry for ``rel_path``, or ``None`` when absent."""
        if not self.has_head():
            return None
        proc = self.run_git(["ls-tree", "-z", "HEAD", "--", rel_path])
        if proc.returncode != 0:
            return None
        for record in proc.stdout.split("\0"):
            if not record:
                continue
            meta, _, entry_path = record.partition("\t")
            parts = meta.split()
            if len(parts) != 3 or entry_path != rel_path:
                continue
            mode, kind, oid = parts
            if kind not in {"blob", "commit"}:
                continue
            return HeadEntry(mode=mode, oid=oid, path=entry_path)
        return None

    def head_blob(self, rel_path: str) -> bytes | None:
        """Return the committed content of ``rel_path``, or ``None`` when absent."""
        entry = self.head_entry(rel_path)
        if entry is None or entry.mode == "160000":
            return None
        proc = self._run_git_bytes(["cat-file", "blob", entry.oid])
        if proc.returncode != 0:
            return None
        return proc.stdout

    def read_worktree(self, rel_path: str) -> bytes | None:
        """Return the on-disk content of ``rel_path``, or ``None`` when missing."""
        target = self.root / rel_path
        try:
            if target.is_symlink():
                return str(target.readlink()).encode("utf-8", errors="surrogateescape")
            if not target.is_file():
                return None
            return target.read_bytes()
        except OSError:
            return None

    def current_branch(self) -> str:
        """Return the checked-out branch name, or ``HEAD`` when detached."""
        proc = self.run_git(["symbolic-ref", "--short", "-q", "HEAD"])
        name = proc.stdout.strip()
        if proc.returncode == 0 and name:
            return name
        return "HEAD"
