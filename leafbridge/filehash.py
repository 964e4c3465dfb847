"""File hash types, values and their preferred ordering."""

from __future__ import annotations

import binascii
from dataclasses import dataclass
from functools import cmp_to_key

_PRIORITIES = {"sha3-256": 1}


class HashType(str):
    """Identifies the cryptographic hash used for file verification."""

    def priority(self) -> int:
        """Return the priority of a recognized type; unrecognized types get 0."""
        return _PRIORITIES.get(str(self), 0)


SHA3_256 = HashType("sha3-256")


class HashValue(bytes):
    """The bytes of a file hash, shown in hexadecimal."""

    def __str__(self) -> str:
        return self.hex()


def parse_hash_value(text: str | bytes) -> HashValue:
    """Parse a hexadecimal string into a hash value.

    Raises ValueError if the text is not valid hexadecimal.
    """
    try:
        return HashValue(binascii.unhexlify(text))
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"invalid hexadecimal hash value: {exc}") from exc


@dataclass(frozen=True)
class Entry:
    """A file hash value along with its type."""

    type: HashType = HashType("")
    value: HashValue = HashValue(b"")


def _sign(a, b) -> int:
    return (a > b) - (a < b)


def compare_types(a: str, b: str) -> int:
    """Compare hash types; higher priority types sort first, then lexically."""
    p1, p2 = HashType(a).priority(), HashType(b).priority()
    if p1 != p2:
        return -1 if p1 > p2 else 1
    return _sign(str(a), str(b))


def compare_entries(a: Entry, b: Entry) -> int:
    """Compare entries by type preference, then by value bytes."""
    result = compare_types(a.type, b.type)
    if result:
        return result
    return _sign(bytes(a.value), bytes(b.value))


class HashList(list):
    """An ordered list of file hash entries."""

    def primary(self) -> Entry:
        """Return the first entry, or an empty entry if the list is empty."""
        return self[0] if self else Entry()


class HashMap(dict):
    """A mapping of hash types to hash values."""

    def primary(self) -> Entry:
        """Return the entry of the most preferred hash type."""
        return self.to_list().primary()

    def types(self) -> list[HashType]:
        """Return the hash types present, in order of preference."""
        return sorted((HashType(t) for t in self), key=cmp_to_key(compare_types))

    def to_list(self) -> HashList:
        """Return the entries ordered with recognized types first."""
        entries = (Entry(HashType(t), HashValue(v)) for t, v in self.items())
        return HashList(sorted(entries, key=cmp_to_key(compare_entries)))