"""Runs the target program once per input file under a wall-clock deadline."""
from __future__ import annotations

import enum
import logging
import os
import signal
import subprocess
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Optional, Union

from .files import read_text
from .sinks import make_sink

logger = logging.getLogger(__name__)


class Outcome(str, enum.Enum):
    SUCCESS = "success"
    TIMEOUT = "timeout"
    ERROR = "error"


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of a single program run."""

    outcome: Outcome
    output: str
    elapsed_s: float
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    @property
    def timed_out(self) -> bool:
        return self.outcome is Outcome.TIMEOUT


class _Deadline:
    """Kills the child's process group once ``timeout_s`` has elapsed."""

    def __init__(self, proc: subprocess.Popen, timeout_s: float) -> None:
        self._proc = proc
        self._expired = threading.Event()
        self._timer = threading.Timer(timeout_s, self._expire)
        self._timer.daemon = True

    @property
    def expired(self) -> bool:
        return self._expired.is_set()

    def start(self) -> None:
        self._timer.start()

    def cancel(self) -> None:
        self._timer.cancel()

    def _expire(self) -> None:
        self._expired.set()
        logger.debug("deadline reached for pid %s, killing", self._proc.pid)
        kill_process_group(self._proc)


def kill_process_group(proc: subprocess.Popen) -> None:
    # The child leads its own session; killing the group also reaps helpers
    # (e.g. a shell's ``sleep``) that would otherwise hold stdout open. The
    # group id stays valid while any member is alive, even after the leader
    # has exited.
    try:
        if hasattr(os, "killpg"):
            os.killpg(proc.pid, signal.SIGKILL)
        else:  # pragma: no cover - windows
            proc.kill()
    except ProcessLookupError:
        return
    except PermissionError:
        proc.kill()


def _feed_stdin(stdin: IO[bytes], payload: bytes, errors: list[str]) -> None:
    try:
        stdin.write(payload)
        stdin.flush()
    except BrokenPipeError:
        # The program exited or closed stdin without reading everything.
        pass
    except (OSError, ValueError) as exc:
        errors.append(f"writing stdin: {exc}")
    finally:
        try:
            stdin.close()
        except BrokenPipeError:
            pass
        except OSError as exc:
            errors.append(f"closing stdin: {exc}")


def _describe_exit(returncode: int) -> str:
    if returncode < 0:
        try:
            name = signal.Signals(-returncode).name
        except ValueError:
            name = str(-returncode)
        return f"signal: {name}"
    return f"exit status {returncode}"


class ProgramExecutor:
    """Spawns the program, feeds the input file on stdin and captures stdout."""

    def execute(
        self,
        program: Union[str, Path],
        input_path: Union[str, Path],
        timeout_s: float,
        hash_mode: bool = False,
    ) -> ExecutionResult:
        try:
            content = read_text(input_path)
        except OSError as exc:
            return ExecutionResult(
                outcome=Outcome.ERROR,
                output="",
                elapsed_s=0.0,
                error=f"failed to read input file: {exc}",
            )
        payload = content.encode("utf-8", errors="surrogateescape")
        sink = make_sink(hash_mode)
        failure: Optional[str] = None

        start = time.perf_counter()
        try:
            proc = subprocess.Popen(
                [str(program)],
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            elapsed = time.perf_counter() - start
            return ExecutionResult(
                outcome=Outcome.ERROR,
                output="",
                elapsed_s=elapsed,
                error=f"program execution failed: {exc}",
            )

        logger.debug("started %s (pid %s) for %s", program, proc.pid, input_path)
        feed_errors: list[str] = []
        with proc:
            deadline = _Deadline(proc, timeout_s)
            deadline.start()
            feeder = threading.Thread(
                target=_feed_stdin, args=(proc.stdin, payload, feed_errors), daemon=True
            )
            try:
                feeder.start()
                try:
                    sink.consume(proc.stdout)
                except OSError as exc:
                    failure = f"reading stdout: {exc}"
                if failure is None and deadline.expired:
                    # stdout was held open past the deadline, output is truncated
                    failure = "deadline exceeded"
                returncode = proc.wait()
                feeder.join()
                if returncode != 0:
                    failure = _describe_exit(returncode)
                elif failure is None and feed_errors:
                    failure = feed_errors[0]
            finally:
                deadline.cancel()
                kill_process_group(proc)
                if proc.poll() is None:
                    proc.wait()
        elapsed = time.perf_counter() - start

        if failure is not None:
            if deadline.expired:
                logger.debug("%s timed out after %.3fs", input_path, elapsed)
                return ExecutionResult(
                    outcome=Outcome.TIMEOUT,
                    output="",
                    elapsed_s=elapsed,
                    error="deadline exceeded",
                )
            return ExecutionResult(
                outcome=Outcome.ERROR,
                output="",
                elapsed_s=elapsed,
                error=f"program execution failed: {failure}",
            )
        return ExecutionResult(outcome=Outcome.SUCCESS, output=sink.result(), elapsed_s=elapsed)


def execute_program(
    program: Union[str, Path],
    input_path: Union[str, Path],
    timeout_s: float,
    hash_mode: bool = False,
) -> ExecutionResult:
    """Convenience wrapper around :class:`ProgramExecutor`."""

    return ProgramExecutor().execute(program, input_path, timeout_s, hash_mode)
