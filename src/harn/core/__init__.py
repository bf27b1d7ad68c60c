"""Core models and helpers exposed at the package level."""
from .comparator import ComparisonResult, compare_outputs, normalize_output
from .executor import ExecutionResult, Outcome, ProgramExecutor, execute_program
from .files import read_text, write_text
from .models import PatternError, TestCase, discover_cases, resolve_expected_path
from .results import CaseResult, RunSummary, Verdict
from .runner import HarnessRunner, RunOptions

__all__ = [
    "CaseResult",
    "ComparisonResult",
    "ExecutionResult",
    "HarnessRunner",
    "Outcome",
    "PatternError",
    "ProgramExecutor",
    "RunOptions",
    "RunSummary",
    "TestCase",
    "Verdict",
    "compare_outputs",
    "discover_cases",
    "execute_program",
    "normalize_output",
    "read_text",
    "resolve_expected_path",
    "write_text",
]
