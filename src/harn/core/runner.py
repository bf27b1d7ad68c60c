"""Harness runner driving execution, generation, and comparison per case."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from harn.utils.durations import format_duration

from .comparator import compare_outputs
from .executor import ExecutionResult, ProgramExecutor
from .files import read_text, write_text
from .models import TestCase
from .results import CaseResult, RunSummary, Verdict

logger = logging.getLogger(__name__)

ResultCallback = Callable[[CaseResult, int, int], None]


@dataclass(frozen=True)
class RunOptions:
    program: str
    timeout_s: float = 30.0
    generate: bool = False
    force: bool = False
    hash_mode: bool = False


class HarnessRunner:
    """Executes a collection of test cases sequentially."""

    def __init__(self, options: RunOptions, *, executor: Optional[ProgramExecutor] = None) -> None:
        self._options = options
        self._executor = executor or ProgramExecutor()

    @property
    def options(self) -> RunOptions:
        return self._options

    def run(
        self,
        cases: Sequence[TestCase],
        *,
        on_result: Optional[ResultCallback] = None,
    ) -> RunSummary:
        summary = RunSummary(generate=self._options.generate, total=len(cases))
        total = len(cases)
        for index, case in enumerate(cases, start=1):
            if self._options.generate:
                result = self._generate_case(case)
            else:
                result = self._check_case(case)
            logger.debug("%s -> %s", case.name, result.verdict.value)
            summary.record(result)
            if on_result:
                on_result(result, index, total)
        return summary

    def _execute(self, case: TestCase) -> ExecutionResult:
        return self._executor.execute(
            self._options.program,
            case.input_path,
            self._options.timeout_s,
            self._options.hash_mode,
        )

    def _failure(self, case: TestCase, execution: ExecutionResult) -> CaseResult:
        if execution.timed_out:
            return CaseResult(
                case=case,
                verdict=Verdict.TIME_LIMIT_EXCEEDED,
                elapsed_s=execution.elapsed_s,
                detail=f"Program exceeded {format_duration(self._options.timeout_s)} timeout",
            )
        return CaseResult(
            case=case,
            verdict=Verdict.ERROR,
            elapsed_s=execution.elapsed_s,
            detail=f"executing program: {execution.error}",
        )

    def _generate_case(self, case: TestCase) -> CaseResult:
        if case.expected_exists() and not self._options.force:
            return CaseResult(
                case=case,
                verdict=Verdict.SKIPPED,
                elapsed_s=None,
                detail=f"Output file {case.expected_path} found, skipping",
            )
        execution = self._execute(case)
        if not execution.ok:
            return self._failure(case, execution)
        try:
            write_text(case.expected_path, execution.output)
        except OSError as exc:
            return CaseResult(
                case=case,
                verdict=Verdict.ERROR,
                elapsed_s=execution.elapsed_s,
                detail=f"failed while writing output: {exc}",
            )
        return CaseResult(
            case=case,
            verdict=Verdict.GENERATED,
            elapsed_s=execution.elapsed_s,
            detail=f"Wrote output file {case.expected_path}",
            written_path=case.expected_path,
        )

    def _check_case(self, case: TestCase) -> CaseResult:
        execution = self._execute(case)
        if not execution.ok:
            return self._failure(case, execution)
        try:
            expected = read_text(case.expected_path)
        except OSError as exc:
            return CaseResult(
                case=case,
                verdict=Verdict.ERROR,
                elapsed_s=execution.elapsed_s,
                detail=f"reading expected output file: {exc}",
                actual=execution.output,
            )
        comparison = compare_outputs(expected, execution.output)
        if comparison.passed:
            verdict = Verdict.ACCEPTED
            detail = "Output matches expected result"
        else:
            verdict = Verdict.WRONG_ANSWER
            detail = "Output doesn't match"
        return CaseResult(
            case=case,
            verdict=verdict,
            elapsed_s=execution.elapsed_s,
            detail=detail,
            expected=comparison.expected,
            actual=comparison.actual,
        )
