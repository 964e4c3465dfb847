import base64

import pytest

from leafbridge.bytesconv import (
    ByteOrder,
    InvalidUTF16Error,
    UnevenUTF16Error,
    UTF16Error,
    decode_string,
    decode_utf16,
    has_utf16_bom,
    parse_utf16,
)


def test_decode_empty():
    assert decode_string(b"") == ""


def test_decode_utf8_passthrough():
    text = "héllo wörld"
    assert decode_string(text.encode("utf-8")) == text


def test_decode_with_little_endian_bom():
    data = b"\xff\xfe" + "hi there".encode("utf-16-le")
    assert decode_string(data) == "hi there"


def test_decode_with_big_endian_bom():
    data = b"\xfe\xff" + "hi there".encode("utf-16-be")
    assert decode_string(data) == "hi there"


def test_decode_utf16_le_without_bom():
    data = "abc".encode("utf-16-le")
    assert decode_string(data) == "abc"


def test_decode_falls_back_to_base64():
    data = b"\x80\x81\x82"
    result = decode_string(data)
    padded = result + "=" * (-len(result) % 4)
    assert base64.urlsafe_b64decode(padded) == data
    assert "=" not in result


@pytest.mark.parametrize("order,codec", [(ByteOrder.LITTLE, "utf-16-le"), (ByteOrder.BIG, "utf-16-be")])
def test_parse_round_trip(order, codec):
    text = "plain text \U0001F600 with pair"
    assert parse_utf16(text.encode(codec), order) == text


def test_parse_empty():
    assert parse_utf16(b"", ByteOrder.LITTLE) == ""


def test_parse_uneven():
    with pytest.raises(UnevenUTF16Error):
        parse_utf16(b"abc", ByteOrder.LITTLE)


def test_parse_lone_high_surrogate():
    with pytest.raises(InvalidUTF16Error):
        parse_utf16(b"\x00\xd8", ByteOrder.LITTLE)


def test_parse_lone_low_surrogate():
    with pytest.raises(UTF16Error):
        parse_utf16(b"\x00\xde\x41\x00", ByteOrder.LITTLE)


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        parse_utf16(b"\x01", ByteOrder.BIG)


def test_decode_utf16_drops_odd_byte():
    data = "ok".encode("utf-16-le") + b"\x41"
    assert decode_utf16(data, ByteOrder.LITTLE) == "ok"


def test_decode_utf16_replaces_invalid():
    data = b"\x00\xd8" + "A".encode("utf-16-le")
    assert decode_utf16(data, ByteOrder.LITTLE) == "\ufffdA"


def test_decode_utf16_pair():
    text = "\U0001F600"
    assert decode_utf16(text.encode("utf-16-be"), ByteOrder.BIG) == text


def test_has_bom():
    assert has_utf16_bom(b"\xff\xfe", ByteOrder.LITTLE)
    assert not has_utf16_bom(b"\xff\xfe", ByteOrder.BIG)
    assert has_utf16_bom(b"\xfe\xff", ByteOrder.BIG)
    assert not has_utf16_bom(b"\xff", ByteOrder.LITTLE)