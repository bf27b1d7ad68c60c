"""Human-readable diff between expected and actual output (display only)."""
from __future__ import annotations

import difflib

from .theme import Theme


def render_diff(expected: str, actual: str, theme: Theme) -> str:
    lines: list[str] = []
    for line in difflib.ndiff(expected.split("\n"), actual.split("\n")):
        tag = line[:2]
        if tag == "- ":
            lines.append(theme.paint(line, theme.removed))
        elif tag == "+ ":
            lines.append(theme.paint(line, theme.added))
        elif tag == "? ":
            lines.append(theme.paint(line.rstrip("\n"), theme.hint))
        else:
            lines.append(line)
    return "\n".join(lines)
