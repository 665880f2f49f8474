"""Frame rendering for the status/commit screen.

``build_frame`` is a pure function of a ``RenderContext`` and returns the full
terminal frame as one string. ``ensure_diff_cache`` is the only step that talks
to the diff renderer, and only when the cache does not match the selection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from .ansi import RESET, clip_ansi_line, display_width, fit_ansi_line, strip_ansi, wrap_ansi_line
from .diff.desaturate import desaturate_line
from .diff.renderer import RenderedDiff
from .errors import CommitterError
from .git.repository import Repository
from .git.status import FileStatus, StatusSnapshot
from .highlight import sanitize_terminal_text
from .state import AppState, DiffCacheEntry
from .ui_theme import DEFAULT_THEME, PLAIN_THEME, UITheme

logger = logging.getLogger(__name__)

FILES_TITLE = "Files (Ctrl+W/S navigate, Ctrl+Space toggle, Ctrl+A stage/unstage all)"
COMMIT_TITLE = "Commit Message (Ctrl+Q to quit)"
RECENT_TITLE = "Recent Commits"
DIFF_TITLE = "Diff (↑↓ to scroll)"
SELECTED_MARKER = ">> "
EMPTY_FILES_TEXT = "No changes"
EMPTY_DIFF_TEXT = "No file selected"
DIFF_ERROR_PREFIX = "Cannot render diff"


class DiffRenderer(Protocol):
    def render(self, repository: Repository, file_status: FileStatus, pane_width: int) -> RenderedDiff:
        ...


@dataclass(frozen=True)
class RenderContext:
    """Everything one frame depends on."""

    snapshot: StatusSnapshot
    selection: int | None
    editor_text: str
    cursor_line: int
    cursor_col: int
    cursor_visible: bool
    recent_subjects: tuple[str, ...]
    diff_lines: tuple[str, ...]
    diff_is_staged: bool
    diff_scroll: int
    width: int
    height: int
    left_width: int
    branch: str = ""
    status_message: str = ""
    theme: UITheme = DEFAULT_THEME


def compute_left_width(total_width: int, percent: float | None = None) -> int:
    """Default left column is half the terminal; ``percent`` overrides it."""
    if percent is None:
        return max(1, total_width // 2)
    return max(1, int(round(total_width * (percent / 100.0))))


def clamp_left_width(total_width: int, desired_left: int) -> int:
    max_possible = max(1, total_width - 2)
    min_left = max(12, min(20, total_width - 12))
    max_left = max(min_left, total_width - 12)
    max_left = min(max_left, max_possible)
    min_left = min(min_left, max_left)
    return max(min_left, min(desired_left, max_left))


def diff_pane_width(total_width: int, left_width: int) -> int:
    return max(1, total_width - left_width)


def split_left_column(body_rows: int) -> tuple[int, int, int]:
    """Split the left column into files/commit/recent heights (50/25/25)."""
    files_rows = body_rows // 2
    commit_rows = body_rows // 4
    recent_rows = body_rows - files_rows - commit_rows
    return files_rows, commit_rows, recent_rows


def ensure_diff_cache(
    state: AppState,
    repository: Repository,
    renderer: DiffRenderer,
    pane_width: int,
) -> DiffCacheEntry | None:
    """Return the diff for the current selection, rendering it on a cache miss."""
    cached = state.cached_diff_for_selection()
    if cached is not None:
        return cached
    selected = state.selected_file()
    if selected is None or state.selection is None:
        state.diff_cache = None
        return None
    logger.debug("rendering diff for %s", selected.path)
    try:
        rendered = renderer.render(repository, selected, pane_width)
    except CommitterError as exc:
        logger.exception("cannot render diff for %s", selected.path)
        rendered = RenderedDiff(
            lines=[f"{DIFF_ERROR_PREFIX}: {sanitize_terminal_text(str(exc))}"],
            is_staged=selected.is_staged,
        )
    state.diff_cache = DiffCacheEntry(
        selected_index=state.selection,
        lines=list(rendered.lines),
        is_staged=rendered.is_staged,
    )
    return state.diff_cache


def context_from_state(
    state: AppState,
    *,
    width: int,
    height: int,
    cursor_visible: bool,
    theme: UITheme = DEFAULT_THEME,
) -> RenderContext:
    cached = state.cached_diff_for_selection()
    line, col = state.editor.cursor_line_col()
    return RenderContext(
        snapshot=state.snapshot,
        selection=state.selection,
        editor_text=state.editor.text,
        cursor_line=line,
        cursor_col=col,
        cursor_visible=cursor_visible,
        recent_subjects=tuple(state.recent_subjects),
        diff_lines=tuple(cached.lines) if cached is not None else (),
        diff_is_staged=cached.is_staged if cached is not None else False,
        diff_scroll=state.diff_scroll,
        width=width,
        height=height,
        left_width=state.left_width,
        branch=state.branch,
        status_message=state.status_message,
        theme=theme,
    )


def build_status_line(left_text: str, width: int, right_text: str = "") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def _paint(style: str, text: str, theme: UITheme) -> str:
    if not style:
        return text
    return f"{style}{text}{theme.reset or RESET}"


def _top_border(title: str, width: int, theme: UITheme) -> str:
    inner = width - 2
    label = clip_ansi_line(f" {title} ", max(0, inner - 1))
    fill = "─" * max(0, inner - 1 - display_width(label))
    left_rule = "─" if inner >= 1 else ""
    return (
        _paint(theme.border, "┌" + left_rule, theme)
        + _paint(theme.title, label, theme)
        + _paint(theme.border, fill + "┐", theme)
    )


def build_box(title: str, content: list[str], width: int, height: int, theme: UITheme) -> list[str]:
    """Return exactly ``height`` rows of ``width`` columns framing ``content``."""
    if height <= 0 or width <= 0:
        return []
    if width < 2:
        return [" " * width for _ in range(height)]
    rows = [_top_border(title, width, theme)]
    if height == 1:
        return rows
    inner = width - 2
    side = _paint(theme.border, "│", theme)
    for idx in range(height - 2):
        text = content[idx] if idx < len(content) else ""
        rows.append(f"{side}{fit_ansi_line(text, inner)}{side}")
    rows.append(_paint(theme.border, "└" + "─" * inner + "┘", theme))
    return rows


def checkbox_for(file_status: FileStatus, theme: UITheme) -> str:
    if file_status.is_double_dirty:
        return _paint(theme.checkbox_partial, "[~]", theme)
    if file_status.is_staged:
        return _paint(theme.checkbox_staged, "[x]", theme)
    return _paint(theme.checkbox_unstaged, "[ ]", theme)


def format_file_entry(file_status: FileStatus, theme: UITheme) -> str:
    """Checkbox, change letter (staged side first), and the path."""
    kind = file_status.staged if file_status.staged is not None else file_status.unstaged
    letter = _paint(theme.change_color(kind), kind.code, theme) if kind is not None else " "
    return f"{checkbox_for(file_status, theme)} {letter} {sanitize_terminal_text(file_status.path)}"


def file_list_rows(context: RenderContext, rows: int) -> list[str]:
    if rows <= 0:
        return []
    theme = context.theme
    if len(context.snapshot) == 0:
        return [_paint(theme.placeholder, EMPTY_FILES_TEXT, theme)]
    start = 0
    if context.selection is not None and context.selection >= rows:
        start = context.selection - rows + 1
    out: list[str] = []
    for idx in range(start, min(len(context.snapshot), start + rows)):
        entry = format_file_entry(context.snapshot[idx], theme)
        if idx == context.selection:
            out.append(_paint(theme.bold, SELECTED_MARKER + entry.replace(RESET, RESET + theme.bold), theme))
        else:
            out.append(" " * len(SELECTED_MARKER) + entry)
    return out


def _editor_cells(context: RenderContext) -> list[list[str]]:
    theme = context.theme
    lines: list[list[str]] = []
    for idx, text in enumerate(context.editor_text.split("\n")):
        cells = list(sanitize_terminal_text(text)) if text else []
        if idx == context.cursor_line:
            if context.cursor_col < len(cells):
                if context.cursor_visible:
                    cells[context.cursor_col] = _paint(theme.editor_cursor, cells[context.cursor_col], theme)
            elif context.cursor_visible:
                cells.append(_paint(theme.editor_cursor_eol, "_", theme))
            else:
                cells.append(" ")
        lines.append(cells)
    return lines


def editor_rows(context: RenderContext, width: int, rows: int) -> list[str]:
    """Wrap the message to ``width`` and scroll so the cursor row stays visible."""
    if rows <= 0 or width <= 0:
        return []
    visual: list[str] = []
    cursor_row = 0
    for line_idx, cells in enumerate(_editor_cells(context)):
        chunk: list[str] = []
        col = 0
        for cell_idx, cell in enumerate(cells):
            w = display_width(cell)
            if col + w > width and chunk:
                visual.append("".join(chunk))
                chunk = []
                col = 0
            if line_idx == context.cursor_line and cell_idx == context.cursor_col:
                cursor_row = len(visual)
            chunk.append(cell)
            col += w
        if line_idx == context.cursor_line and context.cursor_col >= len(cells):
            cursor_row = len(visual)
        visual.append("".join(chunk))
    start = max(0, cursor_row - rows + 1)
    return visual[start:start + rows]


def recent_rows(context: RenderContext, width: int, rows: int) -> list[str]:
    theme = context.theme
    out: list[str] = []
    for idx, subject in enumerate(context.recent_subjects):
        label = _paint(theme.recent_index, f"#{idx + 1} ", theme)
        out.extend(wrap_ansi_line(label + sanitize_terminal_text(subject), max(1, width)))
        if len(out) >= rows:
            break
    return out[:rows]


def diff_rows(context: RenderContext, rows: int) -> list[str]:
    theme = context.theme
    if context.selection is None:
        return [_paint(theme.placeholder, EMPTY_DIFF_TEXT, theme)]
    visible = context.diff_lines[context.diff_scroll:context.diff_scroll + rows]
    if theme.name == PLAIN_THEME.name:
        return [strip_ansi(line) for line in visible]
    if context.diff_is_staged:
        return list(visible)
    return [desaturate_line(line) for line in visible]


def status_text(context: RenderContext) -> tuple[str, str]:
    snapshot = context.snapshot
    branch = context.branch or "HEAD"
    left = f" {branch}  {len(snapshot)} changed, {snapshot.staged_count()} staged"
    if context.status_message:
        left = f"{left}  | {context.status_message}"
    right = ""
    if context.diff_lines:
        first = min(len(context.diff_lines), context.diff_scroll + 1)
        right = f"diff {first}/{len(context.diff_lines)} "
    return left, right


def build_frame(context: RenderContext) -> str:
    """Compose the full frame: boxes row by row, then the status line."""
    width = max(1, context.width)
    body_rows = max(0, context.height - 1)
    left_width = clamp_left_width(width, context.left_width)
    right_width = diff_pane_width(width, left_width)
    theme = context.theme

    files_rows, commit_rows, recent_rows_count = split_left_column(body_rows)
    left: list[str] = []
    left += build_box(FILES_TITLE, file_list_rows(context, files_rows - 2), left_width, files_rows, theme)
    left += build_box(
        COMMIT_TITLE,
        editor_rows(context, left_width - 2, commit_rows - 2),
        left_width,
        commit_rows,
        theme,
    )
    left += build_box(
        RECENT_TITLE,
        recent_rows(context, left_width - 2, recent_rows_count - 2),
        left_width,
        recent_rows_count,
        theme,
    )
    right = build_box(DIFF_TITLE, diff_rows(context, body_rows - 2), right_width, body_rows, theme)

    out: list[str] = ["\033[H\033[J"]
    for row in range(body_rows):
        out.append(left[row] if row < len(left) else " " * left_width)
        out.append(right[row] if row < len(right) else "")
        out.append("\r\n")

    left_status, right_status = status_text(context)
    status = build_status_line(left_status, width, right_status)
    out.append(_paint(theme.reverse or "\033[7m", status, theme))
    return "".join(out)
