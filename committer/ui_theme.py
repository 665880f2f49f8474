"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (borders, file list, editor, status line).
Diff colors come from difftastic or Pygments and are not themed here.
"""

from __future__ import annotations

from dataclasses import dataclass

from .git.status import ChangeKind


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    border: str
    title: str
    reverse: str
    bold: str
    reset: str
    checkbox_staged: str
    checkbox_partial: str
    checkbox_unstaged: str
    change_modified: str
    change_added: str
    change_deleted: str
    change_renamed: str
    change_type_changed: str
    recent_index: str
    editor_cursor: str
    editor_cursor_eol: str
    placeholder: str

    def change_color(self, kind: ChangeKind) -> str:
        return {
            ChangeKind.MODIFIED: self.change_modified,
            ChangeKind.ADDED: self.change_added,
            ChangeKind.DELETED: self.change_deleted,
            ChangeKind.RENAMED: self.change_renamed,
            ChangeKind.TYPE_CHANGED: self.change_type_changed,
        }[kind]


DEFAULT_THEME = UITheme(
    name="default",
    border="\033[2m",
    title="\033[1;38;5;81m",
    reverse="\033[7m",
    bold="\033[1m",
    reset="\033[0m",
    checkbox_staged="\033[92m",
    checkbox_partial="\033[93m",
    checkbox_unstaged="\033[90m",
    change_modified="\033[93m",
    change_added="\033[92m",
    change_deleted="\033[91m",
    change_renamed="\033[94m",
    change_type_changed="\033[95m",
    recent_index="\033[90m",
    editor_cursor="\033[7m",
    editor_cursor_eol="\033[4m",
    placeholder="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    border="\033[2;38;5;31m",
    title="\033[1;38;5;45m",
    reverse="\033[7m",
    bold="\033[1m",
    reset="\033[0m",
    checkbox_staged="\033[38;5;84m",
    checkbox_partial="\033[38;5;215m",
    checkbox_unstaged="\033[38;5;24m",
    change_modified="\033[38;5;215m",
    change_added="\033[38;5;84m",
    change_deleted="\033[38;5;203m",
    change_renamed="\033[38;5;45m",
    change_type_changed="\033[38;5;141m",
    recent_index="\033[2;38;5;110m",
    editor_cursor="\033[7m",
    editor_cursor_eol="\033[4m",
    placeholder="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    border="",
    title="",
    reverse="",
    bold="",
    reset="",
    checkbox_staged="",
    checkbox_partial="",
    checkbox_unstaged="",
    change_modified="",
    change_added="",
    change_deleted="",
    change_renamed="",
    change_type_changed="",
    recent_index="",
    editor_cursor="\033[7m",
    editor_cursor_eol="",
    placeholder="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
