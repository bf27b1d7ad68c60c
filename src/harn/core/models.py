"""Test case discovery and expected-file naming."""
from __future__ import annotations

import glob
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

INPUT_SUFFIX = ".in"
OUTPUT_SUFFIX = ".out"
HASH_SUFFIX = ".hash"


class PatternError(ValueError):
    """Raised when a glob pattern is syntactically invalid."""


def resolve_expected_path(input_path: Union[str, Path], hash_mode: bool = False) -> str:
    """Return the companion expected file for ``input_path``.

    ``name.in`` maps to ``name.out`` (or ``name.hash``); a path without the
    ``.in`` suffix simply gets the extension appended.
    """

    text = os.fspath(input_path)
    if text.endswith(INPUT_SUFFIX):
        text = text[: -len(INPUT_SUFFIX)]
    return text + (HASH_SUFFIX if hash_mode else OUTPUT_SUFFIX)


@dataclass(frozen=True)
class TestCase:
    """One input file plus its conventionally named expected file."""

    __test__ = False  # keep pytest from collecting this class

    input_path: str
    expected_path: str
    hash_mode: bool = False

    @classmethod
    def from_input(cls, input_path: Union[str, Path], hash_mode: bool = False) -> "TestCase":
        text = os.fspath(input_path)
        return cls(
            input_path=text,
            expected_path=resolve_expected_path(text, hash_mode),
            hash_mode=hash_mode,
        )

    @property
    def name(self) -> str:
        return self.input_path

    def expected_exists(self) -> bool:
        return os.path.exists(self.expected_path)


def validate_pattern(pattern: str) -> None:
    """Reject patterns with malformed character classes or a dangling escape."""

    index = 0
    length = len(pattern)
    while index < length:
        char = pattern[index]
        if char == "\\" and os.sep != "\\":
            if index + 1 >= length:
                raise PatternError(f"syntax error in pattern {pattern!r}: trailing escape")
            index += 2
            continue
        if char == "[":
            end = index + 1
            if end < length and pattern[end] in "!^":
                end += 1
            if end < length and pattern[end] == "]":
                raise PatternError(f"syntax error in pattern {pattern!r}: empty character class")
            while end < length and pattern[end] != "]":
                end += 1
            if end >= length:
                raise PatternError(f"syntax error in pattern {pattern!r}: unterminated character class")
            index = end + 1
            continue
        index += 1


def discover_cases(pattern: str, hash_mode: bool = False) -> List[TestCase]:
    """Expand ``pattern`` into test cases ordered by path."""

    validate_pattern(pattern)
    matches = sorted(glob.glob(pattern, include_hidden=True))
    return [TestCase.from_input(path, hash_mode) for path in matches if os.path.isfile(path)]
