"""Terminal reporter rendering per-case lines and the run summary."""
from __future__ import annotations

from typing import Optional

import click

from harn.core.results import CaseResult, RunSummary, Verdict
from harn.utils.durations import format_duration

from .base import Reporter, RunInfo
from .diff import render_diff
from .theme import Theme

RULE = "=" * 50


def _printable(text: Optional[str]) -> str:
    # captured output may carry surrogate-escaped bytes that stdout cannot encode
    return (text or "").encode("utf-8", errors="surrogateescape").decode("utf-8", errors="replace")


class TerminalReporter(Reporter):
    """Human-readable reporter that streams to stdout."""

    def __init__(
        self,
        *,
        theme: Optional[Theme] = None,
        verbose: bool = False,
        silent: bool = False,
    ) -> None:
        self._theme = theme or Theme()
        self._verbose = verbose
        self._silent = silent

    def on_start(self, info: RunInfo) -> None:
        click.echo(
            f'Found {info.total} input files matching pattern "{info.pattern}" '
            f"(timeout: {format_duration(info.timeout_s)})"
        )

    def on_case_result(self, result: CaseResult, index: int, total: int) -> None:
        theme = self._theme
        name = theme.paint(result.case.name, theme.name)
        label = theme.paint(result.verdict.value, self._verdict_color(result.verdict))
        if result.elapsed_s is None:
            click.echo(f"{name} - {label}: {result.detail}")
        else:
            click.echo(f"{name} - {label} [{format_duration(result.elapsed_s)}]: {result.detail}")
        if result.verdict not in (Verdict.ACCEPTED, Verdict.WRONG_ANSWER):
            return
        if self._verbose:
            self._print_full_output(result)
        elif result.verdict is Verdict.WRONG_ANSWER and not self._silent:
            self._print_diff(result)

    def on_complete(self, summary: RunSummary) -> None:
        theme = self._theme
        click.echo("")
        click.echo(theme.paint(RULE, theme.summary))
        if summary.generate:
            click.echo(f"Generated {summary.generated}/{summary.total} new test files")
            click.echo(f"    - {summary.skipped}/{summary.total} tests already exist")
            return
        click.echo(f"Test Results: {summary.passed}/{summary.total} passed")
        click.echo(f"Total execution time: {format_duration(summary.total_time_s, precision=1e-6)}")
        if summary.total > 0:
            click.echo(
                f"Average execution time: {format_duration(summary.average_time_s, precision=1e-6)}"
            )
        if summary.all_passed:
            click.echo(theme.paint("🎉 All tests passed!", theme.accepted))
        else:
            click.echo(theme.paint(f"💥 {summary.failed} test(s) failed", theme.wrong))

    def _verdict_color(self, verdict: Verdict) -> str:
        theme = self._theme
        return {
            Verdict.ACCEPTED: theme.accepted,
            Verdict.GENERATED: theme.generated,
            Verdict.WRONG_ANSWER: theme.wrong,
            Verdict.ERROR: theme.error,
            Verdict.TIME_LIMIT_EXCEEDED: theme.timeout,
            Verdict.SKIPPED: theme.skipped,
        }[verdict]

    def _print_full_output(self, result: CaseResult) -> None:
        click.echo(f" === Expected:\n{_printable(result.expected)}")
        click.echo(" === End Expected:")
        click.echo(f" === Actual:\n{_printable(result.actual)}")
        click.echo(" === End Actual:")

    def _print_diff(self, result: CaseResult) -> None:
        click.echo(" === Diff:")
        click.echo(render_diff(_printable(result.expected), _printable(result.actual), self._theme))
        click.echo(" === End Diff (💡 Use -v flag for full output)")
