"""Staged/unstaged classification of every changed path.

Parses ``git status --porcelain=v2 -z`` into one ``FileStatus`` per path with
independent index-vs-HEAD and worktree-vs-index sides.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterator
from dataclasses import dataclass

from ..errors import RepositoryAccessError
from .repository import Repository

logger = logging.getLogger(__name__)


class ChangeKind(enum.Enum):
    """One side of a path's change."""

    MODIFIED = "M"
    ADDED = "A"
    DELETED = "D"
    RENAMED = "R"
    TYPE_CHANGED = "T"

    @property
    def code(self) -> str:
        return self.value


_STATUS_CODES: dict[str, ChangeKind | None] = {
    ".": None,
    " ": None,
    "M": ChangeKind.MODIFIED,
    "T": ChangeKind.TYPE_CHANGED,
    "A": ChangeKind.ADDED,
    "D": ChangeKind.DELETED,
    "R": ChangeKind.RENAMED,
    # A copy introduces a new path.
    "C": ChangeKind.ADDED,
}


@dataclass(frozen=True)
class FileStatus:
    """Change state of one repository-relative path."""

    path: str
    staged: ChangeKind | None = None
    unstaged: ChangeKind | None = None
    orig_path: str | None = None

    def __post_init__(self) -> None:
        if self.staged is None and self.unstaged is None:
            raise ValueError(f"{self.path!r} has neither a staged nor an unstaged change")

    @property
    def is_staged(self) -> bool:
        return self.staged is not None

    @property
    def is_unstaged(self) -> bool:
        return self.unstaged is not None

    @property
    def is_double_dirty(self) -> bool:
        return self.staged is not None and self.unstaged is not None


@dataclass(frozen=True)
class StatusSnapshot:
    """Immutable, path-sorted list of changed files."""

    files: tuple[FileStatus, ...] = ()

    @classmethod
    def from_files(cls, files: list[FileStatus]) -> StatusSnapshot:
        return cls(tuple(sorted(files, key=lambda item: item.path)))

    def __len__(self) -> int:
        return len(self.files)

    def __getitem__(self, index: int) -> FileStatus:
        return self.files[index]

    def __iter__(self) -> Iterator[FileStatus]:
        return iter(self.files)

    def is_clean(self) -> bool:
        return not self.files

    def has_unstaged(self) -> bool:
        return any(item.unstaged is not None for item in self.files)

    def has_staged(self) -> bool:
        return any(item.staged is not None for item in self.files)

    def staged_count(self) -> int:
        return sum(1 for item in self.files if item.staged is not None)

    def find(self, path: str) -> FileStatus | None:
        return next((item for item in self.files if item.path == path), None)


def _classify(code: str) -> ChangeKind | None:
    return _STATUS_CODES.get(code)


def _make_status(path: str, xy: str, orig_path: str | None = None) -> FileStatus | None:
    staged = _classify(xy[0])
    unstaged = _classify(xy[1])
    if staged is None and unstaged is None:
        return None
    return FileStatus(path=path, staged=staged, unstaged=unstaged, orig_path=orig_path)


def parse_porcelain_v2(output: str) -> list[FileStatus]:
    """Parse NUL-separated porcelain v2 status records.

    Ordinary (``1``), rename/copy (``2``), unmerged (``u``) and untracked
    (``?``) records are kept; ignored (``!``) and header (``#``) records are
    skipped. Unmerged paths are reported as unstaged modifications.
    """
    files: list[FileStatus] = []
    tokens = output.split("\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if not token:
            continue

        kind = token[0]
        if kind == "1":
            fields = token.split(" ", 8)
            if len(fields) < 9:
                continue
            entry = _make_status(fields[8], fields[1])
        elif kind == "2":
            fields = token.split(" ", 9)
            if len(fields) < 10:
                continue
            # The source path follows as its own NUL-terminated token.
            orig_path = tokens[index] if index < len(tokens) else None
            index += 1
            entry = _make_status(fields[9], fields[1], orig_path or None)
        elif kind == "u":
            fields = token.split(" ", 10)
            if len(fields) < 11:
                continue
            entry = FileStatus(path=fields[10], staged=None, unstaged=ChangeKind.MODIFIED)
        elif kind == "?":
            entry = FileStatus(path=token[2:], staged=None, unstaged=ChangeKind.ADDED)
        else:
            continue

        if entry is not None:
            files.append(entry)
    return _merge_same_path(files)


def _merge_same_path(files: list[FileStatus]) -> list[FileStatus]:
    # A path removed from the index but still on disk shows up twice:
    # once as a staged deletion and once as untracked.
    merged: dict[str, FileStatus] = {}
    for entry in files:
        previous = merged.get(entry.path)
        if previous is None:
            merged[entry.path] = entry
            continue
        merged[entry.path] = FileStatus(
            path=entry.path,
            staged=previous.staged or entry.staged,
            unstaged=previous.unstaged or entry.unstaged,
            orig_path=previous.orig_path or entry.orig_path,
        )
    return list(merged.values())


def query_status(repository: Repository) -> StatusSnapshot:
    """Return the current snapshot of changed paths in ``repository``."""
    proc = repository.run_git(
        ["status", "--porcelain=v2", "-z", "--untracked-files=all", "--ignored=no"],
    )
    if proc.returncode != 0:
        detail = proc.stderr.strip() or f"exit status {proc.returncode}"
        raise RepositoryAccessError(f"Cannot query repository status: {detail}")

    snapshot = StatusSnapshot.from_files(parse_porcelain_v2(proc.stdout))
    logger.debug("status query found %d changed paths", len(snapshot))
    return snapshot
