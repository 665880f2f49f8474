"""Gray-scale collapse of styled diff lines.

Unstaged changes are drawn with their colors folded into gray, white, and dark
gray so they read as not-yet-staged. Text attributes survive; backgrounds do not.
"""

from __future__ import annotations

import re

GRAY = "37"
WHITE = "97"
DARK_GRAY = "90"

_SGR_RE = re.compile(r"\x1b\[([0-9;]*)m")

_BASIC_FOREGROUND_TO_GRAY: dict[int, str] = {
    30: DARK_GRAY,
    31: GRAY,
    32: GRAY,
    33: WHITE,
    34: DARK_GRAY,
    35: GRAY,
    36: GRAY,
    37: DARK_GRAY,
    90: DARK_GRAY,
    91: GRAY,
    92: GRAY,
    93: WHITE,
    94: DARK_GRAY,
    95: GRAY,
    96: GRAY,
    97: DARK_GRAY,
}


def _indexed_to_gray(color_index: int) -> str:
    if 0 <= color_index <= 7:
        return _BASIC_FOREGROUND_TO_GRAY[30 + color_index]
    if 8 <= color_index <= 15:
        return _BASIC_FOREGROUND_TO_GRAY[90 + color_index - 8]
    return DARK_GRAY


def _extended_color_length(parts: list[int], index: int) -> int:
    """Return how many params an extended ``38``/``48``/``58`` color spans."""
    if index + 1 >= len(parts):
        return 1
    mode = parts[index + 1]
    if mode == 5:
        return 3
    if mode == 2:
        return 5
    return 2


def desaturate_params(params: str) -> str:
    """Rewrite one SGR parameter string with foregrounds mapped to gray."""
    try:
        parts = [int(part) if part else 0 for part in params.split(";")] if params else [0]
    except ValueError:
        return params

    out: list[str] = []
    index = 0
    while index < len(parts):
        code = parts[index]
        if code == 0:
            out.extend(["0", DARK_GRAY])
            index += 1
        elif code in _BASIC_FOREGROUND_TO_GRAY:
            out.append(_BASIC_FOREGROUND_TO_GRAY[code])
            index += 1
        elif code == 38:
            span = _extended_color_length(parts, index)
            if span == 3 and index + 2 < len(parts):
                out.append(_indexed_to_gray(parts[index + 2]))
            else:
                out.append(DARK_GRAY)
            index += span
        elif code == 39:
            out.append(DARK_GRAY)
            index += 1
        elif code in {48, 58}:
            index += _extended_color_length(parts, index)
        elif 40 <= code <= 49 or 100 <= code <= 107 or code == 59:
            index += 1
        else:
            out.append(str(code))
            index += 1
    return ";".join(out)


def desaturate_line(line: str) -> str:
    """Return ``line`` with every color collapsed toward gray tones."""

    def _rewrite(match: re.Match[str]) -> str:
        params = desaturate_params(match.group(1))
        return f"\033[{params}m" if params else ""

    return f"\033[{DARK_GRAY}m{_SGR_RE.sub(_rewrite, line)}"
