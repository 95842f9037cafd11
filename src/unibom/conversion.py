"""Text conversion service used by the transcode pipeline.

The pipeline talks to a :class:`Converter`: ``open`` a session for a
source encoding, ``convert`` buffered bytes chunk by chunk, then ``close``
the session.  :class:`CodecConverter` implements it on top of Python's
incremental decoders.  An incomplete multi-byte sequence at the end of a
chunk is not consumed; the caller keeps those bytes and passes them again
with the next chunk.
"""

from __future__ import annotations

import codecs
import dataclasses
from typing import Protocol

from unibom.enums import ConversionOutcome
from unibom.errors import ConversionError

# Decoder error reasons that mean "input ended mid-sequence" rather than
# "these bytes can never be valid".
_TRUNCATION_REASONS: frozenset[str] = frozenset(
    {
        "unexpected end of data",
        "truncated data",
        "incomplete multibyte sequence",
        "unterminated shift sequence",
        "partial character in shift sequence",
    }
)


class Converter(Protocol):
    def open(
        self, source_encoding: str, target_encoding: str, lenient: bool
    ) -> object: ...

    def convert(
        self, session: object, data: bytes, final: bool
    ) -> tuple[bytes, int, ConversionOutcome]: ...

    def close(self, session: object) -> None: ...


@dataclasses.dataclass(slots=True)
class CodecSession:
    """Open conversion from one encoding to another."""

    source_encoding: str
    target_encoding: str
    errors: str
    decoder: codecs.IncrementalDecoder
    closed: bool = False


class CodecConverter:
    """:class:`Converter` backed by :mod:`codecs` incremental decoders.

    Lenient sessions decode and encode with ``errors="ignore"``, so invalid
    sequences are dropped instead of reported.
    """

    def open(
        self, source_encoding: str, target_encoding: str, lenient: bool = False
    ) -> CodecSession:
        """Start a conversion from *source_encoding* to *target_encoding*.

        :raises ConversionError: If either encoding is unknown to Python.
        """
        errors = "ignore" if lenient else "strict"
        try:
            codecs.lookup(target_encoding)
            decoder = codecs.getincrementaldecoder(source_encoding)(errors)
        except LookupError as e:
            msg = f'cannot convert "{source_encoding}" -> "{target_encoding}": {e}'
            raise ConversionError(msg) from e
        return CodecSession(source_encoding, target_encoding, errors, decoder)

    def convert(
        self, session: CodecSession, data: bytes, final: bool
    ) -> tuple[bytes, int, ConversionOutcome]:
        """Convert as much of *data* as possible.

        :returns: ``(output, consumed, outcome)``.  On ``INVALID`` or
            ``INCOMPLETE``, *consumed* is the offset in *data* where the
            offending sequence starts and *output* holds everything
            converted before it.
        """
        if session.closed:
            msg = "convert() called on a closed session"
            raise ValueError(msg)
        decoder = session.decoder
        outcome = ConversionOutcome.OK
        try:
            text = decoder.decode(data, final)
        except UnicodeDecodeError as e:
            consumed = max(e.start, 0)
            if e.reason in _TRUNCATION_REASONS and e.end >= len(data):
                outcome = ConversionOutcome.INCOMPLETE
            else:
                outcome = ConversionOutcome.INVALID
            decoder.reset()
            text = decoder.decode(data[:consumed], False)
            consumed -= len(_take_pending(decoder))
        else:
            pending = _take_pending(decoder)
            consumed = len(data) - len(pending)
            if pending:
                outcome = ConversionOutcome.INCOMPLETE
        try:
            output = text.encode(session.target_encoding, session.errors)
        except UnicodeEncodeError as e:
            # Some decoders (UTF-7) let lone surrogates through; those are
            # invalid input, anything else the target cannot hold is not.
            if not 0xD800 <= ord(text[e.start]) <= 0xDFFF:
                return b"", 0, ConversionOutcome.OTHER
            output = text[: e.start].encode(session.target_encoding)
            consumed = _byte_offset(session.source_encoding, data, e.start)
            outcome = ConversionOutcome.INVALID
        return output, consumed, outcome

    def close(self, session: CodecSession) -> None:
        session.decoder.reset()
        session.closed = True


def _byte_offset(encoding: str, data: bytes, char_index: int) -> int:
    """Return where in *data* the character at *char_index* starts.

    That is the longest prefix of *data* that decodes to exactly
    *char_index* characters with nothing left pending.
    """
    decoder = codecs.getincrementaldecoder(encoding)("strict")
    decoded = 0
    offset = 0
    for pos in range(len(data)):
        decoded += len(decoder.decode(data[pos : pos + 1], False))
        if decoded > char_index:
            break
        if decoded == char_index and not decoder.getstate()[0]:
            offset = pos + 1
    return offset


def _take_pending(decoder: codecs.IncrementalDecoder) -> bytes:
    """Remove and return bytes the decoder is holding for the next call."""
    pending, flag = decoder.getstate()
    if pending:
        decoder.setstate((b"", flag))
    return pending
