"""File size and hash attributes used for verification."""

from __future__ import annotations

from dataclasses import dataclass, field

from leafbridge.filehash import HashMap, compare_entries


@dataclass
class FileAttributes:
    """File size and cryptographic hash data for a file."""

    size: int = 0
    hashes: HashMap = field(default_factory=HashMap)

    def __post_init__(self) -> None:
        self.hashes = HashMap(self.hashes)

    def features(self) -> list[str]:
        """Return the features present within the attributes."""
        features = ["file size"] if self.size > 0 else []
        features.extend(str(entry.type) for entry in self.hashes.to_list())
        return features

    def validate(self) -> None:
        """Raise ValueError if the attributes are invalid."""
        if self.size < 0:
            raise ValueError("a negative file size was provided")
        for entry in self.hashes.to_list():
            if entry.type.priority() == 0:
                raise ValueError(f'the file hash type "{entry.type}" is not recognized')
            if not entry.value:
                raise ValueError(f'the file hash value for "{entry.type}" is missing')


def equal_file_attributes(a: FileAttributes, b: FileAttributes) -> bool:
    """Return True if a and b have identical sizes and identical hash sets."""
    if a.size != b.size:
        return False
    list_a, list_b = a.hashes.to_list(), b.hashes.to_list()
    if len(list_a) != len(list_b):
        return False
    return all(compare_entries(x, y) == 0 for x, y in zip(list_a, list_b))