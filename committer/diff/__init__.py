"""Diff rendering for the selected file."""

from .desaturate import desaturate_line
from .fallback import TOOL_NOT_FOUND_NOTICE, build_fallback_lines
from .renderer import DEFAULT_DIFF_TOOL, DifftasticRenderer, RenderedDiff, build_difft_command, diff_width_for_pane

__all__ = [
    "DEFAULT_DIFF_TOOL",
    "DifftasticRenderer",
    "RenderedDiff",
    "TOOL_NOT_FOUND_NOTICE",
    "build_difft_command",
    "build_fallback_lines",
    "desaturate_line",
    "diff_width_for_pane",
]
