"""Whole-file text helpers shared by the executor and the driver."""
from __future__ import annotations

from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def read_text(path: PathLike, *, errors: str = "surrogateescape") -> str:
    """Return the file content rebuilt line by line.

    Lines are split on ``\\n`` with one trailing ``\\r`` removed from each, then
    re-joined with ``\\n``; the final newline of the file is not kept. Bytes that
    are not valid UTF-8 are kept as lone surrogates.
    """

    with open(path, "r", encoding="utf-8", errors=errors, newline="") as handle:
        content = handle.read()
    if not content:
        return ""
    lines = content.split("\n")
    if content.endswith("\n"):
        lines.pop()
    return "\n".join(line[:-1] if line.endswith("\r") else line for line in lines)


def write_text(path: PathLike, content: str) -> None:
    """Create or truncate ``path`` and write ``content`` unchanged."""

    with open(path, "w", encoding="utf-8", errors="surrogateescape", newline="") as handle:
        handle.write(content)
