"""Git access: repository handle, status snapshot, index mutation, log."""

from .index import stage, stage_all_toggle, unstage
from .log import RECENT_SUBJECTS_MAX, recent_subjects
from .repository import HeadEntry, Repository
from .status import ChangeKind, FileStatus, StatusSnapshot, parse_porcelain_v2, query_status

__all__ = [
    "ChangeKind",
    "FileStatus",
    "HeadEntry",
    "RECENT_SUBJECTS_MAX",
    "Repository",
    "StatusSnapshot",
    "parse_porcelain_v2",
    "query_status",
    "recent_subjects",
    "stage",
    "stage_all_toggle",
    "unstage",
]
