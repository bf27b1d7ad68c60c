"""Comparison of captured program output against the stored expectation."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ComparisonResult:
    """Outcome of comparing one actual output with its expected text."""

    passed: bool
    expected: str
    actual: str


def normalize_output(text: str) -> str:
    """Drop leading and trailing whitespace; interior content is left alone."""

    return text.strip()


def compare_outputs(expected: str, actual: str) -> ComparisonResult:
    passed = normalize_output(actual) == normalize_output(expected)
    return ComparisonResult(passed=passed, expected=expected, actual=actual)
