import os
import stat
import sys
from pathlib import Path
from typing import Callable

import pytest

ECHO = "import sys\nsys.stdout.write(sys.stdin.read())\n"

posix_only = pytest.mark.skipif(os.name != "posix", reason="needs POSIX executables and process groups")


def _make_executable(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def make_program(tmp_path: Path) -> Callable[..., Path]:
    """Write an executable Python script that runs ``body``."""

    def factory(body: str, name: str = "prog.py") -> Path:
        return _make_executable(tmp_path / name, f"#!{sys.executable}\n{body}")

    return factory


@pytest.fixture
def make_shell(tmp_path: Path) -> Callable[..., Path]:
    def factory(body: str, name: str = "prog.sh") -> Path:
        return _make_executable(tmp_path / name, f"#!/bin/sh\n{body}")

    return factory


@pytest.fixture
def echo_program(make_program) -> Path:
    return make_program(ECHO, name="echo.py")
