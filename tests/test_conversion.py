from __future__ import annotations

import pytest

from unibom.conversion import CodecConverter
from unibom.enums import ConversionOutcome
from unibom.errors import ConversionError


@pytest.fixture
def converter():
    return CodecConverter()


def test_utf16le_complete(converter):
    session = converter.open("UTF-16LE", "UTF-8")
    out = converter.convert(session, "héllo".encode("utf-16-le"), False)
    assert out == ("héllo".encode(), 10, ConversionOutcome.OK)


def test_trailing_partial_code_unit_is_not_consumed(converter):
    session = converter.open("UTF-16LE", "UTF-8")
    output, consumed, outcome = converter.convert(session, b"h\x00i", False)
    assert output == b"h"
    assert consumed == 2
    assert outcome is ConversionOutcome.INCOMPLETE
    # The decoder does not keep the byte; the caller passes it again.
    assert converter.convert(session, b"i\x00", False) == (
        b"i",
        2,
        ConversionOutcome.OK,
    )


def test_split_utf8_sequence(converter):
    session = converter.open("UTF-8", "UTF-8")
    output, consumed, outcome = converter.convert(session, b"a\xe2\x82", False)
    assert (output, consumed, outcome) == (b"a", 1, ConversionOutcome.INCOMPLETE)


def test_truncated_input_on_final_call(converter):
    session = converter.open("UTF-8", "UTF-8")
    output, consumed, outcome = converter.convert(session, b"a\xe2\x82", True)
    assert (output, consumed, outcome) == (b"a", 1, ConversionOutcome.INCOMPLETE)


def test_invalid_sequence_strict(converter):
    session = converter.open("UTF-8", "UTF-8")
    output, consumed, outcome = converter.convert(session, b"ab\xffcd", False)
    assert (output, consumed, outcome) == (b"ab", 2, ConversionOutcome.INVALID)


def test_invalid_sequence_lenient_is_skipped(converter):
    session = converter.open("UTF-8", "UTF-8", lenient=True)
    output, consumed, outcome = converter.convert(session, b"ab\xffcd", False)
    assert (output, consumed, outcome) == (b"abcd", 5, ConversionOutcome.OK)


def test_lone_surrogate_utf16_is_invalid(converter):
    session = converter.open("UTF-16BE", "UTF-8")
    data = b"\x00a\xdc\x00\x00b"
    output, consumed, outcome = converter.convert(session, data, False)
    assert output == b"a"
    assert consumed == 2
    assert outcome is ConversionOutcome.INVALID


def test_gb18030_partial(converter):
    session = converter.open("GB18030", "UTF-8")
    data = "中文".encode("gb18030")
    output, consumed, outcome = converter.convert(session, data[:3], False)
    assert output == "中".encode()
    assert consumed == 2
    assert outcome is ConversionOutcome.INCOMPLETE


def test_utf32be(converter):
    session = converter.open("UTF-32BE", "UTF-8")
    data = "hi☃".encode("utf-32-be")
    assert converter.convert(session, data, False) == (
        "hi☃".encode(),
        12,
        ConversionOutcome.OK,
    )


def test_unencodable_output_is_other(converter):
    session = converter.open("UTF-8", "ascii")
    output, consumed, outcome = converter.convert(session, "é".encode(), False)
    assert (output, consumed, outcome) == (b"", 0, ConversionOutcome.OTHER)


def test_unknown_source_encoding(converter):
    with pytest.raises(ConversionError, match="UTF-99"):
        converter.open("UTF-99", "UTF-8")


def test_unknown_target_encoding(converter):
    with pytest.raises(ConversionError, match="nope"):
        converter.open("UTF-8", "nope")


def test_convert_after_close_raises(converter):
    session = converter.open("UTF-8", "UTF-8")
    converter.close(session)
    assert session.closed is True
    with pytest.raises(ValueError, match="closed session"):
        converter.convert(session, b"abc", False)


def test_final_flush_of_empty_input(converter):
    session = converter.open("UTF-16BE", "UTF-8")
    assert converter.convert(session, b"", True) == (b"", 0, ConversionOutcome.OK)


def test_utf7_lone_surrogate_is_invalid(converter):
    session = converter.open("UTF-7", "UTF-8")
    output, consumed, outcome = converter.convert(session, b"ab+2AA-cd", False)
    assert (output, consumed, outcome) == (b"ab", 2, ConversionOutcome.INVALID)


def test_utf7_lone_surrogate_lenient_is_dropped(converter):
    session = converter.open("UTF-7", "UTF-8", lenient=True)
    output, consumed, outcome = converter.convert(session, b"ab+2AA-cd", False)
    assert (output, consumed, outcome) == (b"abcd", 9, ConversionOutcome.OK)
