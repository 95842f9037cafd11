"""Simultaneous prefix matching of every catalog signature.

The matcher consumes a stream one byte at a time and tracks, for every
signature in parallel, whether the bytes seen so far are still a prefix
of it, match it exactly, or have diverged from it.  All consumed bytes are
kept so they can be replayed by the transcode stage.
"""

from __future__ import annotations

from typing import BinaryIO

from unibom.catalog import MAX_MARKER_LENGTH, SIGNATURES
from unibom.enums import BomType, MatchState
from unibom.errors import InternalError


class PrefixMatcher:
    """Byte-at-a-time matcher over the whole signature catalog.

    The ``NONE`` sentinel starts (and stays) ``COMPLETE``; every other
    signature starts as ``PREFIX``.  States only ever move from ``PREFIX``
    to a terminal state.
    """

    def __init__(self, capacity: int = MAX_MARKER_LENGTH) -> None:
        self._capacity = capacity
        self._buffer = bytearray()
        self._states: list[MatchState] = [MatchState.PREFIX] * len(SIGNATURES)
        self._states[BomType.NONE] = MatchState.COMPLETE
        self._num_complete = 1
        self._num_finished = 1

    def feed(self, byte: int) -> None:
        """Advance every unresolved signature by one byte.

        :param byte: The next byte of the stream, as an int in 0-255.
        :raises InternalError: If more bytes are fed than the buffer holds.
        """
        pos = len(self._buffer)
        if pos >= self._capacity:
            raise InternalError("input buffer overflow")
        for index, sig in enumerate(SIGNATURES):
            state = self._states[index]
            if state is not MatchState.PREFIX:
                continue
            if sig.marker[pos] != byte:
                self._states[index] = MatchState.FAILED
                self._num_finished += 1
            elif len(sig.marker) == pos + 1:
                self._states[index] = MatchState.COMPLETE
                self._num_finished += 1
                self._num_complete += 1
        self._buffer.append(byte)

    def reject(self, bom_type: BomType) -> None:
        """Turn a completed match back into a failed one.

        :raises InternalError: If *bom_type* is the sentinel or did not
            complete.
        """
        if (
            bom_type is BomType.NONE
            or self._states[bom_type] is not MatchState.COMPLETE
        ):
            raise InternalError("invalid match state")
        self._states[bom_type] = MatchState.FAILED
        self._num_complete -= 1

    def consume(self, source: BinaryIO) -> None:
        """Read from *source* until every signature is resolved or EOF."""
        while not self.done:
            chunk = source.read(1)
            if not chunk:
                return
            self.feed(chunk[0])

    @property
    def done(self) -> bool:
        """Whether every signature has reached a terminal state."""
        return self._num_finished == len(SIGNATURES)

    @property
    def num_complete(self) -> int:
        """Number of signatures in the COMPLETE state, sentinel included."""
        return self._num_complete

    @property
    def num_finished(self) -> int:
        """Number of signatures in a terminal state."""
        return self._num_finished

    @property
    def states(self) -> tuple[MatchState, ...]:
        """Current state of every signature, indexed by BomType."""
        return tuple(self._states)

    @property
    def buffer(self) -> bytes:
        """Every byte fed so far."""
        return bytes(self._buffer)
