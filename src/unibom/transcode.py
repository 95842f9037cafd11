"""Stream the remainder of an input after its BOM, optionally as UTF-8.

The pipeline reads at most one buffer ahead of what it writes, so memory
use does not depend on the length of the stream.  Bytes the resolver
already read past the BOM are the first bytes of the remainder.
"""

from __future__ import annotations

import logging
from typing import BinaryIO

from unibom._utils import DEFAULT_BUFFER_SIZE, _validate_buffer_size
from unibom.catalog import get_signature
from unibom.conversion import CodecConverter, Converter
from unibom.enums import BomType, ConversionOutcome
from unibom.errors import ConversionError, IllegalBytesError
from unibom.resolver import Resolution

logger = logging.getLogger(__name__)

_TARGET_ENCODING = get_signature(BomType.UTF_8).encoding
_BYTES_PER_ROW = 20


def transcode(  # noqa: PLR0913
    resolution: Resolution,
    source: BinaryIO,
    sink: BinaryIO,
    utf8: bool = False,
    lenient: bool = False,
    converter: Converter | None = None,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> None:
    """Write everything after the BOM of *source* to *sink*.

    :param resolution: The BOM resolved from the start of *source*.
    :param source: The stream the resolution was read from.
    :param sink: Binary stream receiving the output.  Flushed once at the end.
    :param utf8: Convert from the BOM's encoding to UTF-8.  Ignored when
        the stream has no BOM.
    :param lenient: Skip invalid or truncated byte sequences instead of
        raising :class:`IllegalBytesError`.
    :param converter: Conversion service; defaults to :class:`CodecConverter`.
    :param buffer_size: Capacity of the input buffer.
    """
    _validate_buffer_size(buffer_size)
    signature = resolution.signature
    if signature.encoding is None:
        utf8 = False
    if not utf8:
        _pump(resolution, source, sink, None, None, lenient, buffer_size)
        return

    if converter is None:
        converter = CodecConverter()
    session = converter.open(signature.encoding, _TARGET_ENCODING, lenient)
    try:
        _pump(resolution, source, sink, converter, session, lenient, buffer_size)
    finally:
        converter.close(session)


def _pump(  # noqa: PLR0913
    resolution: Resolution,
    source: BinaryIO,
    sink: BinaryIO,
    converter: Converter | None,
    session: object,
    lenient: bool,
    buffer_size: int,
) -> None:
    signature = resolution.signature
    ibuf = bytearray(resolution.residue)
    offset = len(signature.marker)
    done = False

    while not done:
        eof = _fill(source, ibuf, buffer_size)
        # Nothing left to read and nothing carried over: last round.
        done = not ibuf

        if converter is None:
            output = bytes(ibuf)
            consumed = len(ibuf)
        else:
            data = bytes(ibuf)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("->convert@%d: len=%d", offset, len(data))
                _debug_buffer(offset, data)
            output, consumed, outcome = converter.convert(session, data, done)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "<-convert@%d: outcome=%s consumed=%d",
                    offset,
                    outcome.name,
                    consumed,
                )
                _debug_buffer(offset, output)

            if outcome is ConversionOutcome.INCOMPLETE and not (done or eof):
                pass
            elif outcome in (ConversionOutcome.INCOMPLETE, ConversionOutcome.INVALID):
                if not lenient:
                    raise IllegalBytesError(signature.name, offset + consumed)
                # Drop the rest of the window so a trailing partial
                # sequence cannot stall the loop.
                consumed = len(ibuf)
            elif outcome is ConversionOutcome.OTHER:
                msg = (
                    f"cannot convert {signature.name} input "
                    f"at file offset {offset + consumed}"
                )
                raise ConversionError(msg)

        offset += consumed
        del ibuf[:consumed]
        _write_all(sink, output)

    sink.flush()


def _fill(source: BinaryIO, ibuf: bytearray, buffer_size: int) -> bool:
    """Top up *ibuf* from *source*.  Returns True if EOF was hit.

    Normally fills up to *buffer_size*.  If the carried-over residue alone
    already fills the buffer, one more buffer's worth is read so the
    converter can finish the sequence.
    """
    target = buffer_size if len(ibuf) < buffer_size else len(ibuf) + buffer_size
    while len(ibuf) < target:
        chunk = source.read(target - len(ibuf))
        if not chunk:
            return True
        ibuf += chunk
    return False


def _write_all(sink: BinaryIO, data: bytes) -> None:
    view = memoryview(data)
    while view:
        written = sink.write(view)
        if not written:
            msg = "write error"
            raise OSError(msg)
        view = view[written:]


def _debug_buffer(base: int, data: bytes) -> None:
    for start in range(0, len(data), _BYTES_PER_ROW):
        row = data[start : start + _BYTES_PER_ROW]
        half = _BYTES_PER_ROW // 2
        hex_part = " ".join(f"{b:02x}" for b in row[:half])
        if len(row) > half:
            hex_part += "  " + " ".join(f"{b:02x}" for b in row[half:])
        text = "".join(chr(b) if 0x20 <= b < 0x7F else "." for b in row)
        logger.debug("%08d: %-61s %s", base + start, hex_part, text)
