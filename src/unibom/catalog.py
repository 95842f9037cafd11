"""The fixed catalog of supported BOM signatures."""

from __future__ import annotations

import dataclasses

from unibom.enums import BomType
from unibom.errors import UnknownTypeError


@dataclasses.dataclass(frozen=True, slots=True)
class Signature:
    """A catalog entry pairing a BOM's literal bytes with its encoding.

    *encoding* is ``None`` only for the ``NONE`` sentinel, whose *marker*
    is empty and therefore matches every stream trivially.
    """

    name: str
    encoding: str | None
    marker: bytes


# Indexed by BomType.  UTF-16LE's marker is a prefix of UTF-32LE's; that is
# the only overlap and the resolver settles it.
SIGNATURES: tuple[Signature, ...] = (
    Signature("NONE", None, b""),
    Signature("UTF-7", "UTF-7", b"\x2b\x2f\x76"),
    Signature("UTF-8", "UTF-8", b"\xef\xbb\xbf"),
    Signature("UTF-16BE", "UTF-16BE", b"\xfe\xff"),
    Signature("UTF-16LE", "UTF-16LE", b"\xff\xfe"),
    Signature("UTF-32BE", "UTF-32BE", b"\x00\x00\xfe\xff"),
    Signature("UTF-32LE", "UTF-32LE", b"\xff\xfe\x00\x00"),
    Signature("GB18030", "GB18030", b"\x84\x31\x95\x33"),
)

#: Length of the longest marker; bounds the bytes needed for matching.
MAX_MARKER_LENGTH: int = max(len(sig.marker) for sig in SIGNATURES)

_BY_NAME: dict[str, BomType] = {
    sig.name: BomType(index) for index, sig in enumerate(SIGNATURES)
}


def list_names() -> list[str]:
    """Return the names of all BOM types in catalog order."""
    return [sig.name for sig in SIGNATURES]


def lookup_by_name(name: str) -> BomType:
    """Return the BOM type with exactly this name.

    :raises UnknownTypeError: If no catalog entry has that name.
    """
    try:
        return _BY_NAME[name]
    except KeyError:
        raise UnknownTypeError(name) from None


def get_signature(bom_type: BomType) -> Signature:
    return SIGNATURES[bom_type]


def bytes_of(bom_type: BomType) -> bytes:
    """Return the literal byte sequence of *bom_type*."""
    return SIGNATURES[bom_type].marker
