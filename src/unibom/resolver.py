"""Settle the matcher's per-signature states into a single BOM type."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Collection
from typing import BinaryIO

from unibom.catalog import Signature, get_signature
from unibom.enums import BomType, MatchState
from unibom.errors import InternalError, UnexpectedBomTypeError
from unibom.matcher import PrefixMatcher

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class Resolution:
    """The BOM chosen for a stream plus the bytes read while choosing it."""

    bom_type: BomType
    consumed: bytes

    @property
    def signature(self) -> Signature:
        return get_signature(self.bom_type)

    @property
    def residue(self) -> bytes:
        """Bytes read past the BOM; they start the remainder of the stream."""
        return self.consumed[len(self.signature.marker) :]


def resolve(
    source: BinaryIO,
    expect: Collection[BomType] = (),
    prefer32: bool = False,
) -> Resolution:
    """Read the BOM (if any) from the start of *source*.

    :param source: Binary stream positioned at its first byte.
    :param expect: BOM types the caller accepts.  Empty accepts any type.
    :param prefer32: Resolve ``FF FE 00 00`` as UTF-32LE instead of
        UTF-16LE followed by a NUL character.
    :returns: The resolved :class:`Resolution`.
    :raises UnexpectedBomTypeError: If *expect* is non-empty and does not
        contain the resolved type.
    :raises InternalError: If the catalog yields more than one match.
    """
    matcher = PrefixMatcher()
    matcher.consume(source)
    states = matcher.states

    if (
        states[BomType.UTF_16LE] is MatchState.COMPLETE
        and states[BomType.UTF_32LE] is MatchState.COMPLETE
    ):
        loser = BomType.UTF_16LE if prefer32 else BomType.UTF_32LE
        logger.debug("UTF-16LE/UTF-32LE ambiguity, dropping %s", loser.name)
        matcher.reject(loser)
        states = matcher.states

    if states[BomType.NONE] is not MatchState.COMPLETE:
        raise InternalError("invalid match state")
    matches = [
        index
        for index, state in enumerate(states)
        if index != BomType.NONE and state is MatchState.COMPLETE
    ]
    if len(matches) > 1 or matcher.num_complete != len(matches) + 1:
        raise InternalError(">2 BOM type matches")
    bom_type = BomType(matches[0]) if matches else BomType.NONE

    resolution = Resolution(bom_type, matcher.buffer)
    logger.debug(
        "resolved BOM type %s after %d byte(s)",
        resolution.signature.name,
        len(resolution.consumed),
    )
    if expect and bom_type not in expect:
        raise UnexpectedBomTypeError(resolution.signature.name)
    return resolution
