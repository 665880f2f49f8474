"""ANSI-aware text measurement and line shaping for boxed panes.

Escape sequences are carried through untouched and never count toward width.
Wide characters take two cells and tabs expand to the next tab stop.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterator

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
RESET = "\033[0m"


def char_display_width(ch: str, col: int) -> int:
    """Cells used by ``ch`` when drawn at column ``col``."""
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def _pieces(text: str) -> Iterator[tuple[str, bool]]:
    """Yield ``(piece, is_escape)``: whole escape sequences or single characters."""
    pos = 0
    for match in ANSI_ESCAPE_RE.finditer(text):
        for ch in text[pos:match.start()]:
            yield ch, False
        yield match.group(0), True
        pos = match.end()
    for ch in text[pos:]:
        yield ch, False


def _cell_text(ch: str, width: int) -> str:
    return " " * width if ch == "\t" else ch


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Cut ``text`` at ``max_cols`` cells, keeping every escape before the cut."""
    if max_cols <= 0:
        return ""
    out: list[str] = []
    col = 0
    for piece, is_escape in _pieces(text):
        if is_escape:
            out.append(piece)
            continue
        width = char_display_width(piece, col)
        if col + width > max_cols:
            break
        out.append(_cell_text(piece, width))
        col += width
    return "".join(out)


def fit_ansi_line(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` cells and pad with spaces.

    Styled text gets a reset before the padding so colors stay inside the pane.
    """
    if width <= 0:
        return ""
    clipped = clip_ansi_line(text, width)
    suffix = RESET if "\x1b" in clipped else ""
    return f"{clipped}{suffix}{' ' * max(0, width - display_width(clipped))}"


def wrap_ansi_line(text: str, width: int) -> list[str]:
    """Break ``text`` into rows of at most ``width`` cells.

    A character wider than ``width`` still gets a row of its own.
    """
    if width <= 0:
        return [""]
    rows: list[str] = []
    chunk: list[str] = []
    col = 0
    for piece, is_escape in _pieces(text):
        if is_escape:
            chunk.append(piece)
            continue
        cells = char_display_width(piece, col)
        if col > 0 and col + cells > width:
            rows.append("".join(chunk))
            chunk = []
            col = 0
            cells = char_display_width(piece, col)
        chunk.append(_cell_text(piece, cells))
        col += cells
    rows.append("".join(chunk))
    return rows
