from __future__ import annotations

from dataclasses import dataclass, field

from .editor import EditorBuffer
from .git.log import RECENT_SUBJECTS_MAX
from .git.status import FileStatus, StatusSnapshot


@dataclass
class DiffCacheEntry:
    """Rendered diff lines for the file at ``selected_index``."""

    selected_index: int
    lines: list[str]
    is_staged: bool


@dataclass
class AppState:
    snapshot: StatusSnapshot
    selection: int | None = None
    diff_scroll: int = 0
    editor: EditorBuffer = field(default_factory=EditorBuffer)
    recent_subjects: list[str] = field(default_factory=list)
    diff_cache: DiffCacheEntry | None = None
    branch: str = ""
    left_width: int = 40
    status_message: str = ""
    status_message_until: float = 0.0
    dirty: bool = True
    skip_next_lf: bool = False

    def __post_init__(self) -> None:
        self.recent_subjects = list(self.recent_subjects)[:RECENT_SUBJECTS_MAX]
        if self.selection is None and len(self.snapshot) > 0:
            self.selection = 0

    def selected_file(self) -> FileStatus | None:
        if self.selection is None or not 0 <= self.selection < len(self.snapshot):
            return None
        return self.snapshot[self.selection]

    def invalidate_diff(self) -> None:
        self.diff_cache = None
        self.dirty = True

    def cached_diff_for_selection(self) -> DiffCacheEntry | None:
        """Return the cache entry only when it belongs to the current selection."""
        entry = self.diff_cache
        if entry is None or entry.selected_index != self.selection:
            return None
        return entry
