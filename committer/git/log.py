"""Recent commit subjects shown as read-only context next to the editor."""

from __future__ import annotations

import logging

from .repository import Repository

logger = logging.getLogger(__name__)

RECENT_SUBJECTS_MAX = 10


def recent_subjects(repository: Repository, limit: int = RECENT_SUBJECTS_MAX) -> list[str]:
    """Return first lines of the newest commits on HEAD, most recent first.

    An unborn branch or a failing ``git log`` yields an empty list.
    """
    if limit <= 0 or not repository.has_head():
        return []
    proc = repository.run_git(["log", f"--max-count={limit}", "--format=%s%x00", "HEAD"])
    if proc.returncode != 0:
        logger.warning("git log failed: %s", proc.stderr.strip())
        return []
    subjects = [record.strip("\n") for record in proc.stdout.split("\0")]
    return [subject for subject in subjects if subject][:limit]
