"""Internal shared utilities for unibom."""

from __future__ import annotations

import io
from collections.abc import Iterable
from typing import BinaryIO

from unibom.catalog import lookup_by_name
from unibom.enums import BomType

#: Default capacity of the transcode input buffer.
DEFAULT_BUFFER_SIZE: int = 1024


def _validate_buffer_size(buffer_size: int) -> None:
    """Raise ValueError if *buffer_size* is not a positive integer."""
    if (
        isinstance(buffer_size, bool)
        or not isinstance(buffer_size, int)
        or buffer_size < 1
    ):
        msg = "buffer_size must be a positive integer"
        raise ValueError(msg)


def _parse_expect(expect: Iterable[str]) -> frozenset[BomType]:
    """Map expected BOM names to types.

    A bare string is treated as a comma-separated list of names.
    """
    if isinstance(expect, str):
        expect = expect.split(",")
    return frozenset(lookup_by_name(name) for name in expect)


def _as_stream(source: BinaryIO | bytes | bytearray) -> BinaryIO:
    if isinstance(source, (bytes, bytearray)):
        return io.BytesIO(source)
    return source
