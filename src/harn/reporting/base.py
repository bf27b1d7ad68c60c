"""Reporter interface definitions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from harn.core.results import CaseResult, RunSummary


@dataclass(frozen=True)
class RunInfo:
    """What a reporter needs to know before the first case runs."""

    program: str
    pattern: str
    total: int
    timeout_s: float
    generate: bool = False
    hash_mode: bool = False


class Reporter:
    """Interface for output renderers."""

    def on_start(self, info: RunInfo) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def on_case_result(self, result: CaseResult, index: int, total: int) -> None:  # pragma: no cover
        raise NotImplementedError

    def on_complete(self, summary: RunSummary) -> None:  # pragma: no cover
        raise NotImplementedError


class ReportManager:
    """Dispatches lifecycle callbacks to multiple reporters."""

    def __init__(self, reporters: Sequence[Reporter]) -> None:
        self._reporters = list(reporters)

    def start(self, info: RunInfo) -> None:
        for reporter in self._reporters:
            reporter.on_start(info)

    def handle_result(self, result: CaseResult, index: int, total: int) -> None:
        for reporter in self._reporters:
            reporter.on_case_result(result, index, total)

    def complete(self, summary: RunSummary) -> None:
        for reporter in self._reporters:
            reporter.on_complete(summary)

    def reporters(self) -> List[Reporter]:
        return list(self._reporters)
