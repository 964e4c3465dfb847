"""Dotted version identifiers and their comparison."""

from __future__ import annotations

import re
from collections.abc import Iterator
from itertools import zip_longest

_DIGITS = re.compile(r"[0-9]+")
_UINT64_LIMIT = 1 << 64


class Version(str):
    """A version in dotted form, such as "1.2.3" or "v2.5.A".

    A leading "v" or "V" is ignored when the version has more than one
    character.
    """

    def segments(self) -> Iterator[str]:
        """Yield the segments between the dots of the version."""
        text = str(self)
        if len(text) > 1 and text[0] in "vV":
            text = text[1:]
        while True:
            cut = text.find(".")
            if cut < 0:
                break
            yield text[:cut]
            if cut + 1 >= len(text):
                return
            text = text[cut + 1 :]
        if text:
            yield text

    def canonical(self) -> str:
        """Return the version without a leading designator or trailing dot."""
        return ".".join(self.segments())


def _as_uint64(segment: str) -> int | None:
    if not _DIGITS.fullmatch(segment):
        return None
    value = int(segment)
    return value if value < _UINT64_LIMIT else None


def _sign(a, b) -> int:
    return (a > b) - (a < b)


def compare_version_segments(a: str, b: str) -> int:
    """Compare two segments, returning -1, 0 or 1.

    Segments that are both unsigned 64-bit integers compare numerically;
    otherwise the shorter segment is less, and equal lengths compare
    lexicographically.
    """
    i1, i2 = _as_uint64(a), _as_uint64(b)
    if i1 is not None and i2 is not None:
        return _sign(i1, i2)
    len1, len2 = len(a.encode("utf-8")), len(b.encode("utf-8"))
    if len1 != len2:
        return _sign(len1, len2)
    return _sign(a, b)


def compare_versions(a: str, b: str) -> int:
    """Compare two versions segment by segment, returning -1, 0 or 1."""
    missing = object()
    for s1, s2 in zip_longest(Version(a).segments(), Version(b).segments(), fillvalue=missing):
        if s1 is missing:
            return -1
        if s2 is missing:
            return 1
        result = compare_version_segments(s1, s2)
        if result:
            return result
    return 0