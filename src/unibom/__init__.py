"""Detect, strip and transcode Unicode byte order marks."""

from __future__ import annotations

from collections.abc import Iterable
from typing import BinaryIO

from unibom._utils import (
    DEFAULT_BUFFER_SIZE,
    _as_stream,
    _parse_expect,
    _validate_buffer_size,
)
from unibom.catalog import bytes_of, list_names, lookup_by_name
from unibom.conversion import Converter
from unibom.enums import BomType, ExitStatus
from unibom.errors import (
    BomError,
    ConversionError,
    IllegalBytesError,
    InternalError,
    UnexpectedBomTypeError,
    UnknownTypeError,
)
from unibom.resolver import resolve
from unibom.transcode import transcode

__version__ = "1.0.0"
__all__ = [
    "BomError",
    "BomType",
    "ConversionError",
    "ExitStatus",
    "IllegalBytesError",
    "InternalError",
    "UnexpectedBomTypeError",
    "UnknownTypeError",
    "detect",
    "list_types",
    "print_bytes",
    "strip",
]


def detect(
    source: BinaryIO | bytes | bytearray,
    expect: Iterable[str] = (),
    prefer32: bool = False,
) -> str:
    """Return the name of the BOM at the start of *source*.

    Only as many bytes as needed to settle the BOM are read.

    :param source: Binary stream or byte string.
    :param expect: Names of acceptable BOM types.  Empty accepts any.
    :param prefer32: Report ``FF FE 00 00`` as UTF-32LE rather than UTF-16LE.
    :returns: The BOM type name, ``"NONE"`` if there is no BOM.
    :raises UnknownTypeError: If *expect* names an unknown type.
    :raises UnexpectedBomTypeError: If the BOM is not one of *expect*.
    """
    expected = _parse_expect(expect)
    resolution = resolve(_as_stream(source), expected, prefer32)
    return resolution.signature.name


def strip(  # noqa: PLR0913
    source: BinaryIO | bytes | bytearray,
    sink: BinaryIO,
    expect: Iterable[str] = (),
    lenient: bool = False,
    prefer32: bool = False,
    utf8: bool = False,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    converter: Converter | None = None,
) -> str:
    """Copy *source* to *sink* without its BOM.

    With *utf8*, the remainder is converted from the BOM's encoding to
    UTF-8.  Streams without a BOM are always copied unchanged.

    :returns: The name of the BOM that was removed.
    :raises IllegalBytesError: If *utf8* is set, *lenient* is not, and the
        input holds a byte sequence invalid in the BOM's encoding.
    """
    _validate_buffer_size(buffer_size)
    expected = _parse_expect(expect)
    stream = _as_stream(source)
    resolution = resolve(stream, expected, prefer32)
    transcode(
        resolution,
        stream,
        sink,
        utf8=utf8,
        lenient=lenient,
        converter=converter,
        buffer_size=buffer_size,
    )
    return resolution.signature.name


def list_types() -> list[str]:
    """Return every supported BOM type name in catalog order."""
    return list_names()


def print_bytes(name: str) -> bytes:
    """Return the byte sequence of the BOM type called *name*.

    :raises UnknownTypeError: If *name* is not a supported type.
    """
    return bytes_of(lookup_by_name(name))
