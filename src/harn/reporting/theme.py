"""Color themes for terminal output."""
from __future__ import annotations

from dataclasses import dataclass

from colorama import Fore, Style


@dataclass(frozen=True)
class Theme:
    """ANSI escape codes used by the terminal reporter and diff renderer."""

    reset: str = Style.RESET_ALL
    name: str = Fore.YELLOW
    accepted: str = Fore.GREEN
    generated: str = Fore.GREEN
    wrong: str = Fore.RED
    error: str = Fore.RED
    timeout: str = Fore.WHITE
    skipped: str = Fore.WHITE
    summary: str = Fore.CYAN
    added: str = Fore.GREEN
    removed: str = Fore.RED
    hint: str = Style.DIM

    @classmethod
    def plain(cls) -> "Theme":
        return cls(
            reset="",
            name="",
            accepted="",
            generated="",
            wrong="",
            error="",
            timeout="",
            skipped="",
            summary="",
            added="",
            removed="",
            hint="",
        )

    def paint(self, text: str, color: str) -> str:
        if not color:
            return text
        return f"{color}{text}{self.reset}"
