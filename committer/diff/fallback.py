"""Plain-text diff shown when the structural diff tool cannot run."""

from __future__ import annotations

import difflib

from ..highlight import colorize_diff, sanitize_terminal_text

TOOL_NOT_FOUND_NOTICE = "difftastic (difft) not found in PATH"
INSTALL_HINT = "Install it with: cargo install difftastic"
BINARY_NOTICE = "Binary files differ"


def _decode(content: bytes) -> str:
    return sanitize_terminal_text(content.decode("utf-8", errors="replace"))


def _is_binary(content: bytes) -> bool:
    return b"\0" in content[:8192]


def plain_diff_hunks(path: str, old: bytes, new: bytes) -> list[str]:
    """Return unified-diff hunk lines (without file headers) for old vs new."""
    if _is_binary(old) or _is_binary(new):
        return [BINARY_NOTICE] if old != new else []
    diff = difflib.unified_diff(
        _decode(old).splitlines(),
        _decode(new).splitlines(),
        fromfile=f"a/{path}",
        tofile=f"b/{path}",
        lineterm="",
    )
    # Skip difflib's own ---/+++ header pair.
    return list(diff)[2:]


def build_fallback_lines(
    path: str,
    old: bytes,
    new: bytes,
    *,
    colorize: bool = True,
    style: str = "monokai",
) -> list[str]:
    """Build the not-found notice, a minimal header, and the plain diff hunks."""
    display_path = sanitize_terminal_text(path)
    lines = [
        TOOL_NOT_FOUND_NOTICE,
        INSTALL_HINT,
        "",
        "Showing plain diff instead:",
        "",
        f"--- {display_path}",
        f"+++ {display_path}",
    ]
    hunks = plain_diff_hunks(path, old, new)
    if not hunks:
        return lines
    if colorize and hunks != [BINARY_NOTICE]:
        rendered = colorize_diff("\n".join(hunks) + "\n", style).splitlines()
        if len(rendered) == len(hunks):
            hunks = rendered
    return lines + hunks
