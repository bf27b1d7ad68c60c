"""Reporting exports."""
from .base import ReportManager, Reporter, RunInfo
from .diff import render_diff
from .json_reporter import JsonReporter
from .terminal import TerminalReporter
from .theme import Theme

__all__ = [
    "ReportManager",
    "Reporter",
    "RunInfo",
    "JsonReporter",
    "TerminalReporter",
    "Theme",
    "render_diff",
]
