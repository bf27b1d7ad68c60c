"""JSON reporter emitting structured run results."""
from __future__ import annotations

import datetime as dt
import json
import pathlib
from typing import Any, Dict, Optional

import click
from jsonschema import validate

from harn.core.results import CaseResult, RunSummary

from .base import Reporter, RunInfo
from .schema import JSON_SCHEMA_V1, SCHEMA_VERSION


class JsonReporter(Reporter):
    """Writes results to a JSON file (or stdout) validated against the schema."""

    def __init__(self, path: Optional[str] = None) -> None:
        self._path = pathlib.Path(path) if path else None
        self._records: list[Dict[str, Any]] = []
        self._info: RunInfo | None = None

    def on_start(self, info: RunInfo) -> None:
        self._info = info
        self._records.clear()

    def on_case_result(self, result: CaseResult, index: int, total: int) -> None:
        self._records.append(_case_to_dict(result))

    def on_complete(self, summary: RunSummary) -> None:
        if self._info is None:
            return
        info = self._info
        payload = {
            "schema_version": SCHEMA_VERSION,
            "generated_at": dt.datetime.now(dt.timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
            "mode": "generate" if summary.generate else "check",
            "program": info.program,
            "pattern": info.pattern,
            "hash_mode": info.hash_mode,
            "timeout_s": info.timeout_s,
            "summary": _build_summary(summary),
            "cases": self._records,
        }
        validate(instance=payload, schema=JSON_SCHEMA_V1)
        text = json.dumps(payload, indent=2)
        if self._path is None:
            click.echo(text)
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise RuntimeError(f"Failed to write JSON report to {self._path}: {exc}") from exc
        click.echo(f"JSON report written to {self._path}", err=True)


def _build_summary(summary: RunSummary) -> Dict[str, Any]:
    return {
        "total": summary.total,
        "passed": summary.passed,
        "failed": summary.failed,
        "accepted": summary.accepted,
        "wrong": summary.wrong,
        "timed_out": summary.timed_out,
        "errors": summary.errors,
        "generated": summary.generated,
        "skipped": summary.skipped,
        "total_time_s": summary.total_time_s,
        "average_time_s": summary.average_time_s,
    }


def _case_to_dict(result: CaseResult) -> Dict[str, Any]:
    return {
        "input": result.case.input_path,
        "expected": result.case.expected_path,
        "verdict": result.verdict.value,
        "detail": result.detail,
        "elapsed_ms": result.elapsed_s * 1000 if result.elapsed_s is not None else None,
    }
