"""Output sinks that turn a child's stdout stream into a comparable string."""
from __future__ import annotations

import hashlib
from typing import BinaryIO, Protocol

CHUNK_SIZE = 64 * 1024


class OutputSink(Protocol):
    """Protocol all capture strategies follow."""

    def consume(self, stream: BinaryIO) -> None:
        ...

    def result(self) -> str:
        ...


class TextSink:
    """Buffers the whole stream and returns it as text, untrimmed.

    Invalid UTF-8 is kept byte for byte via ``surrogateescape``.
    """

    def __init__(self) -> None:
        self._chunks: list[bytes] = []

    def consume(self, stream: BinaryIO) -> None:
        while True:
            chunk = stream.read(CHUNK_SIZE)
            if not chunk:
                break
            self._chunks.append(chunk)

    def result(self) -> str:
        return b"".join(self._chunks).decode("utf-8", errors="surrogateescape")


class DigestSink:
    """Streams the output through SHA-256 without keeping it in memory."""

    def __init__(self) -> None:
        self._hasher = hashlib.sha256()

    def consume(self, stream: BinaryIO) -> None:
        while True:
            chunk = stream.read(CHUNK_SIZE)
            if not chunk:
                break
            self._hasher.update(chunk)

    def result(self) -> str:
        return self._hasher.hexdigest()


def make_sink(hash_mode: bool) -> OutputSink:
    """Return a fresh sink for one execution."""

    if hash_mode:
        return DigestSink()
    return TextSink()
