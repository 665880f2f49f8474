"""Stage and unstage paths in the git index.

``unstage`` rewrites an entry from the HEAD tree with zeroed stat data, or
drops it when HEAD does not have the path.
"""

from __future__ import annotations

import logging
import os

from ..errors import IndexWriteError
from .repository import Repository
from .status import StatusSnapshot

logger = logging.getLogger(__name__)


def _check(proc, action: str, path: str) -> None:
    if proc.returncode == 0:
        return
    detail = proc.stderr.strip() or f"exit status {proc.returncode}"
    raise IndexWriteError(f"Cannot {action} {path}: {detail}")


def stage(repository: Repository, path: str) -> None:
    """Record the working-tree version of ``path`` (including deletion) in the index."""
    logger.info("stage %s", path)
    if os.path.lexists(repository.root / path):
        proc = repository.run_git(["--literal-pathspecs", "add", "--all", "--", path])
    else:
        # ``git add`` rejects a pathspec that matches nothing on disk or in the index.
        proc = repository.run_git(["update-index", "--force-remove", "--", path])
    _check(proc, "stage", path)


def _restore_from_head(repository: Repository, path: str) -> None:
    entry = repository.head_entry(path)
    if entry is None:
        proc = repository.run_git(["update-index", "--force-remove", "--", path])
    else:
        # Only mode and blob id matter for status; stat fields are written as zero.
        proc = repository.run_git(
            ["update-index", "--add", "--cacheinfo", f"{entry.mode},{entry.oid},{path}"],
        )
    _check(proc, "unstage", path)


def unstage(repository: Repository, path: str, orig_path: str | None = None) -> None:
    """Reset the index entry of ``path`` (and a rename source) to HEAD."""
    logger.info("unstage %s", path)
    _restore_from_head(repository, path)
    if orig_path and orig_path != path:
        _restore_from_head(repository, orig_path)


def stage_all_toggle(repository: Repository, snapshot: StatusSnapshot) -> bool:
    """Stage everything when any file has an unstaged change, else unstage all.

    Returns ``True`` when files were staged and ``False`` when they were
    unstaged. This is a toggle by majority: calling it twice on a fully
    unstaged set stages everything and then unstages everything again.
    """
    if snapshot.has_unstaged():
        for item in snapshot:
            stage(repository, item.path)
        return True

    for item in snapshot:
        if item.staged is not None:
            unstage(repository, item.path, item.orig_path)
    return False
