"""Shared test fixtures."""

from __future__ import annotations

import io

import pytest


class TrickleReader(io.RawIOBase):
    """Binary stream that returns at most *step* bytes per read."""

    def __init__(self, data: bytes, step: int) -> None:
        self._data = data
        self._pos = 0
        self._step = step
        self.reads = 0
        self.max_request = 0

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        self.reads += 1
        self.max_request = max(self.max_request, size)
        if size < 0:
            size = len(self._data)
        n = min(size, self._step)
        chunk = self._data[self._pos : self._pos + n]
        self._pos += len(chunk)
        return chunk


class ShortWriter(io.RawIOBase):
    """Binary sink that accepts at most *step* bytes per write."""

    def __init__(self, step: int) -> None:
        self._out = bytearray()
        self._step = step
        self.flushes = 0

    def writable(self) -> bool:
        return True

    def write(self, data) -> int:
        chunk = bytes(data[: self._step])
        self._out += chunk
        return len(chunk)

    def flush(self) -> None:
        self.flushes += 1

    def getvalue(self) -> bytes:
        return bytes(self._out)


@pytest.fixture
def trickle():
    """Factory for sources that hand out a few bytes per read."""
    return TrickleReader


@pytest.fixture
def short_writer():
    """Factory for sinks that accept a few bytes per write."""
    return ShortWriter
