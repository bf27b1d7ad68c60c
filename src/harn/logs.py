"""Diagnostics logging setup."""
from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def init_logging(debug: bool = False) -> None:
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
