"""Enumerations for unibom."""

import enum


class BomType(enum.IntEnum):
    """Index of each BOM type in the signature catalog.

    ``NONE`` is the sentinel for "no BOM" and always sits at index 0.
    """

    NONE = 0
    UTF_7 = 1
    UTF_8 = 2
    UTF_16BE = 3
    UTF_16LE = 4
    UTF_32BE = 5
    UTF_32LE = 6
    GB18030 = 7


class MatchState(enum.Enum):
    """Per-signature state while matching a stream prefix."""

    PREFIX = "prefix"
    COMPLETE = "complete"
    FAILED = "failed"


class ConversionOutcome(enum.Enum):
    """Result kind of a single conversion call."""

    OK = "ok"
    INCOMPLETE = "incomplete"
    INVALID = "invalid"
    OTHER = "other"


class ExitStatus(enum.IntEnum):
    """Process exit statuses of the ``bom`` command."""

    OK = 0
    FAILURE = 1
    EXPECT_FAIL = 2
    ILLEGAL_BYTES = 3
