"""Interpretation of raw bytes as text."""

from __future__ import annotations

import base64
import struct
from collections.abc import Iterator
from enum import Enum

_SURR1 = 0xD800
_SURR2 = 0xDC00
_SURR3 = 0xE000
_REPLACEMENT = 0xFFFD


class ByteOrder(Enum):
    """Byte order of 16-bit code units."""

    LITTLE = "<"
    BIG = ">"


class UTF16Error(ValueError):
    """Raised when bytes cannot be parsed as UTF-16."""


class InvalidUTF16Error(UTF16Error):
    """Raised when the provided bytes are not valid UTF-16."""

    def __init__(self, message: str = "the UTF-16 data is invalid") -> None:
        super().__init__(message)


class UnevenUTF16Error(UTF16Error):
    """Raised when the provided bytes are not an even length."""

    def __init__(self, message: str = "the UTF-16 data is not an even length") -> None:
        super().__init__(message)


def _code_units(data: bytes, order: ByteOrder) -> Iterator[int]:
    for (unit,) in struct.iter_unpack(f"{order.value}H", data):
        yield unit


def _decode_rune(r1: int, r2: int) -> int:
    if _SURR1 <= r1 < _SURR2 and _SURR2 <= r2 < _SURR3:
        return (((r1 - _SURR1) << 10) | (r2 - _SURR2)) + 0x10000
    return _REPLACEMENT


def parse_utf16(data: bytes, order: ByteOrder) -> str:
    """Parse data strictly as UTF-16 in the given byte order."""
    if not data:
        return ""
    if len(data) % 2 != 0:
        raise UnevenUTF16Error()

    output: list[str] = []
    units = _code_units(data, order)
    for r1 in units:
        if r1 < _SURR1 or r1 >= _SURR3:
            output.append(chr(r1))
            continue
        if _SURR1 <= r1 <= _SURR2:
            r2 = next(units, None)
            if r2 is not None and _SURR2 <= r2 <= _SURR3:
                output.append(chr(_decode_rune(r1, r2)))
                continue
        raise InvalidUTF16Error()
    return "".join(output)


def decode_utf16(data: bytes, order: ByteOrder) -> str:
    """Decode data as UTF-16, replacing invalid sequences with U+FFFD.

    A trailing odd byte is ignored.
    """
    usable = len(data) - len(data) % 2
    units = list(_code_units(data[:usable], order))
    output: list[str] = []
    i = 0
    while i < len(units):
        unit = units[i]
        if unit < _SURR1 or unit >= _SURR3:
            output.append(chr(unit))
        elif (
            _SURR1 <= unit < _SURR2
            and i + 1 < len(units)
            and _SURR2 <= units[i + 1] < _SURR3
        ):
            output.append(chr(_decode_rune(unit, units[i + 1])))
            i += 1
        else:
            output.append(chr(_REPLACEMENT))
        i += 1
    return "".join(output)


def has_utf16_bom(data: bytes, order: ByteOrder) -> bool:
    """Return True if data starts with a UTF-16 byte order mark in the given order."""
    if len(data) < 2:
        return False
    return struct.unpack_from(f"{order.value}H", data)[0] == 0xFEFF


def decode_string(data: bytes) -> str:
    """Interpret bytes as a string.

    A UTF-16 byte order mark is obeyed; otherwise valid UTF-8 without NUL
    characters is returned as-is, then UTF-16 LE and BE are attempted.
    As a last resort the data is returned as unpadded URL-safe Base64.
    """
    if not data:
        return ""

    if has_utf16_bom(data, ByteOrder.LITTLE):
        return decode_utf16(data[2:], ByteOrder.LITTLE)
    if has_utf16_bom(data, ByteOrder.BIG):
        return decode_utf16(data[2:], ByteOrder.BIG)

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        pass
    else:
        if b"\x00" not in data:
            return text

    for order in (ByteOrder.LITTLE, ByteOrder.BIG):
        try:
            return parse_utf16(data, order)
        except UTF16Error:
            continue

    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")