from __future__ import annotations

import hashlib
from pathlib import Path

from harn.core import HarnessRunner, RunOptions, TestCase, Verdict, discover_cases
from harn.core.executor import ExecutionResult, Outcome

from conftest import posix_only


class FakeExecutor:
    """Executor stand-in returning canned results in order."""

    def __init__(self, *results: ExecutionResult) -> None:
        self._results = list(results)
        self.calls: list[tuple] = []

    def execute(self, program, input_path, timeout_s, hash_mode=False) -> ExecutionResult:
        self.calls.append((program, input_path, timeout_s, hash_mode))
        return self._results.pop(0)


def _case(tmp_path: Path, name: str = "a", content: str = "", hash_mode: bool = False) -> TestCase:
    path = tmp_path / f"{name}.in"
    path.write_text(content, encoding="utf-8")
    return TestCase.from_input(str(path), hash_mode)


def _ok(output: str, elapsed: float = 0.01) -> ExecutionResult:
    return ExecutionResult(outcome=Outcome.SUCCESS, output=output, elapsed_s=elapsed)


def test_check_mode_accepts_trimmed_match(tmp_path) -> None:
    case = _case(tmp_path)
    Path(case.expected_path).write_text("\n42\n", encoding="utf-8")
    runner = HarnessRunner(RunOptions(program="prog"), executor=FakeExecutor(_ok("42  \n")))
    summary = runner.run([case])
    result = summary.results[0]
    assert result.verdict is Verdict.ACCEPTED
    assert result.detail == "Output matches expected result"
    assert summary.passed == 1
    assert summary.all_passed


def test_check_mode_wrong_answer_keeps_texts(tmp_path) -> None:
    case = _case(tmp_path)
    Path(case.expected_path).write_text("4", encoding="utf-8")
    runner = HarnessRunner(RunOptions(program="prog"), executor=FakeExecutor(_ok("3\n")))
    summary = runner.run([case])
    result = summary.results[0]
    assert result.verdict is Verdict.WRONG_ANSWER
    assert result.expected == "4"
    assert result.actual == "3\n"
    assert summary.failed == 1
    assert not summary.all_passed


def test_check_mode_missing_expected_is_error_not_mismatch(tmp_path) -> None:
    case = _case(tmp_path)
    runner = HarnessRunner(RunOptions(program="prog"), executor=FakeExecutor(_ok("3", elapsed=0.5)))
    summary = runner.run([case])
    result = summary.results[0]
    assert result.verdict is Verdict.ERROR
    assert result.detail.startswith("reading expected output file:")
    assert result.elapsed_s == 0.5
    assert summary.errors == 1
    assert summary.wrong == 0
    assert summary.total_time_s == 0.5


def test_failures_are_classified_and_run_continues(tmp_path) -> None:
    cases = [_case(tmp_path, name) for name in ("a", "b", "c")]
    Path(cases[2].expected_path).write_text("ok", encoding="utf-8")
    executor = FakeExecutor(
        ExecutionResult(outcome=Outcome.TIMEOUT, output="", elapsed_s=1.0, error="deadline exceeded"),
        ExecutionResult(outcome=Outcome.ERROR, output="", elapsed_s=0.25, error="program execution failed: exit status 1"),
        _ok("ok", elapsed=0.25),
    )
    runner = HarnessRunner(RunOptions(program="prog", timeout_s=1.0), executor=executor)
    seen: list[tuple[str, int, int]] = []
    summary = runner.run(cases, on_result=lambda result, index, total: seen.append((result.verdict.value, index, total)))
    assert seen == [("TLE", 1, 3), ("ERR", 2, 3), ("AC", 3, 3)]
    assert summary.results[0].detail == "Program exceeded 1s timeout"
    assert summary.results[1].detail == "executing program: program execution failed: exit status 1"
    assert summary.total_time_s == 1.5
    assert summary.average_time_s == 0.5
    assert summary.passed == 1
    assert [call[1] for call in executor.calls] == [case.input_path for case in cases]


def test_generate_mode_writes_missing_and_skips_existing(tmp_path) -> None:
    new_case = _case(tmp_path, "a")
    old_case = _case(tmp_path, "b")
    Path(old_case.expected_path).write_text("4", encoding="utf-8")
    executor = FakeExecutor(_ok("3"))
    runner = HarnessRunner(RunOptions(program="prog", generate=True), executor=executor)
    summary = runner.run([new_case, old_case])
    assert [r.verdict for r in summary.results] == [Verdict.GENERATED, Verdict.SKIPPED]
    assert Path(new_case.expected_path).read_text(encoding="utf-8") == "3"
    assert Path(old_case.expected_path).read_text(encoding="utf-8") == "4"
    assert summary.results[1].elapsed_s is None
    assert summary.generated == 1
    assert summary.skipped == 1
    assert summary.passed == 2
    assert len(executor.calls) == 1


def test_generate_mode_force_overwrites(tmp_path) -> None:
    case = _case(tmp_path)
    Path(case.expected_path).write_text("4", encoding="utf-8")
    runner = HarnessRunner(RunOptions(program="prog", generate=True, force=True), executor=FakeExecutor(_ok("3")))
    summary = runner.run([case])
    assert summary.results[0].verdict is Verdict.GENERATED
    assert summary.results[0].written_path == case.expected_path
    assert Path(case.expected_path).read_text(encoding="utf-8") == "3"


def test_generate_mode_execution_failure_writes_nothing(tmp_path) -> None:
    case = _case(tmp_path)
    executor = FakeExecutor(ExecutionResult(outcome=Outcome.ERROR, output="", elapsed_s=0.1, error="boom"))
    runner = HarnessRunner(RunOptions(program="prog", generate=True), executor=executor)
    summary = runner.run([case])
    assert summary.results[0].verdict is Verdict.ERROR
    assert not Path(case.expected_path).exists()
    assert summary.generated == 0
    assert summary.skipped == 0
    assert summary.passed == 0


def test_generate_mode_write_failure_is_error(tmp_path) -> None:
    case = TestCase(input_path=str(tmp_path / "a.in"), expected_path=str(tmp_path / "missing-dir" / "a.out"))
    runner = HarnessRunner(RunOptions(program="prog", generate=True), executor=FakeExecutor(_ok("3")))
    summary = runner.run([case])
    result = summary.results[0]
    assert result.verdict is Verdict.ERROR
    assert result.detail.startswith("failed while writing output:")
    assert summary.generated == 0


def test_empty_run_summary() -> None:
    summary = HarnessRunner(RunOptions(program="prog"), executor=FakeExecutor()).run([])
    assert summary.total == 0
    assert summary.average_time_s == 0.0
    assert summary.all_passed


@posix_only
def test_generate_then_check_with_real_program(tmp_path, echo_program) -> None:
    program = echo_program
    (tmp_path / "a.in").write_text("3\n", encoding="utf-8")
    cases = discover_cases(str(tmp_path / "*.in"))

    generated = HarnessRunner(RunOptions(program=str(program), generate=True)).run(cases)
    assert generated.results[0].verdict is Verdict.GENERATED
    assert (tmp_path / "a.out").read_text(encoding="utf-8") == "3"

    again = HarnessRunner(RunOptions(program=str(program), generate=True)).run(cases)
    assert again.results[0].verdict is Verdict.SKIPPED
    assert (tmp_path / "a.out").read_text(encoding="utf-8") == "3"

    checked = HarnessRunner(RunOptions(program=str(program))).run(cases)
    assert checked.results[0].verdict is Verdict.ACCEPTED


@posix_only
def test_hash_round_trip_with_real_program(tmp_path, make_program) -> None:
    program = make_program("import sys\nsys.stdout.write('hello')\n")
    (tmp_path / "a.in").write_text("", encoding="utf-8")
    cases = discover_cases(str(tmp_path / "*.in"), hash_mode=True)

    HarnessRunner(RunOptions(program=str(program), generate=True, hash_mode=True)).run(cases)
    digest = (tmp_path / "a.hash").read_text(encoding="utf-8")
    assert digest == hashlib.sha256(b"hello").hexdigest()

    summary = HarnessRunner(RunOptions(program=str(program), hash_mode=True)).run(cases)
    assert summary.results[0].verdict is Verdict.ACCEPTED


@posix_only
def test_hung_program_is_time_limit_exceeded(tmp_path, make_program) -> None:
    program = make_program("import time\ntime.sleep(60)\n")
    (tmp_path / "a.in").write_text("", encoding="utf-8")
    (tmp_path / "a.out").write_text("x", encoding="utf-8")
    cases = discover_cases(str(tmp_path / "*.in"))
    summary = HarnessRunner(RunOptions(program=str(program), timeout_s=0.1)).run(cases)
    result = summary.results[0]
    assert result.verdict is Verdict.TIME_LIMIT_EXCEEDED
    assert result.detail == "Program exceeded 100ms timeout"
    assert 0.1 <= result.elapsed_s < 10.0


@posix_only
def test_invalid_utf8_output_is_compared_and_generated_byte_for_byte(tmp_path, make_program) -> None:
    program = make_program("import sys\nsys.stdout.buffer.write(b'\\xfe')\n")
    (tmp_path / "a.in").write_text("", encoding="utf-8")
    cases = discover_cases(str(tmp_path / "*.in"))

    (tmp_path / "a.out").write_bytes(b"\xff")
    mismatch = HarnessRunner(RunOptions(program=str(program))).run(cases)
    assert mismatch.results[0].verdict is Verdict.WRONG_ANSWER

    HarnessRunner(RunOptions(program=str(program), generate=True, force=True)).run(cases)
    assert (tmp_path / "a.out").read_bytes() == b"\xfe"

    checked = HarnessRunner(RunOptions(program=str(program))).run(cases)
    assert checked.results[0].verdict is Verdict.ACCEPTED
