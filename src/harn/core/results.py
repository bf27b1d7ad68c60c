"""Result data structures produced by the harness runner."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional

from .models import TestCase


class Verdict(str, enum.Enum):
    ACCEPTED = "AC"
    WRONG_ANSWER = "WA"
    TIME_LIMIT_EXCEEDED = "TLE"
    ERROR = "ERR"
    GENERATED = "GEN"
    SKIPPED = "SKIP"


@dataclass
class CaseResult:
    """Outcome of processing a single test case."""

    case: TestCase
    verdict: Verdict
    elapsed_s: Optional[float]
    detail: str
    expected: Optional[str] = None
    actual: Optional[str] = None
    written_path: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.verdict in (Verdict.ACCEPTED, Verdict.GENERATED, Verdict.SKIPPED)


@dataclass
class RunSummary:
    """Aggregate counters for one run, built case by case."""

    generate: bool
    total: int
    results: List[CaseResult] = field(default_factory=list)
    accepted: int = 0
    wrong: int = 0
    timed_out: int = 0
    errors: int = 0
    generated: int = 0
    skipped: int = 0
    total_time_s: float = 0.0

    def record(self, result: CaseResult) -> None:
        self.results.append(result)
        if result.elapsed_s is not None:
            self.total_time_s += result.elapsed_s
        verdict = result.verdict
        if verdict is Verdict.ACCEPTED:
            self.accepted += 1
        elif verdict is Verdict.WRONG_ANSWER:
            self.wrong += 1
        elif verdict is Verdict.TIME_LIMIT_EXCEEDED:
            self.timed_out += 1
        elif verdict is Verdict.ERROR:
            self.errors += 1
        elif verdict is Verdict.GENERATED:
            self.generated += 1
        elif verdict is Verdict.SKIPPED:
            self.skipped += 1

    @property
    def processed(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        if self.generate:
            return self.generated + self.skipped
        return self.accepted

    @property
    def failed(self) -> int:
        return self.total - self.passed

    @property
    def average_time_s(self) -> float:
        if self.total <= 0:
            return 0.0
        return self.total_time_s / self.total

    @property
    def all_passed(self) -> bool:
        return self.passed == self.total
