"""Deployment packages, their sources and files."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from leafbridge.commands import Command
from leafbridge.fileattributes import FileAttributes
from leafbridge.filehash import Entry


class PackageConfigError(ValueError):
    """Raised when a package contains invalid configuration."""


def validate_package_id(package_id: str) -> None:
    """Raise PackageConfigError if the package ID is missing."""
    if not package_id:
        raise PackageConfigError("a package ID is missing")


@dataclass(frozen=True)
class PackageContent:
    """A content-addressable identifier for a package."""

    id: str = ""
    primary_hash: Entry = field(default_factory=Entry)

    def __str__(self) -> str:
        out = "pkg"
        if self.id:
            out += f"-{self.id}"
        value = self.primary_hash.value.hex()
        if value:
            out += f"-{value[:16]}"
        return out


class PackageSourceType(StrEnum):
    """The type of source for a package."""

    HTTP = "http"


@dataclass
class PackageSource:
    """A potential source for retrieval of a package."""

    type: str = ""
    url: str = ""

    def validate(self) -> None:
        """Raise PackageConfigError if the source is invalid."""
        if not self.type:
            raise PackageConfigError("the source type is missing")
        if self.type != PackageSourceType.HTTP:
            raise PackageConfigError(
                f'the package source type "{self.type}" is not recognized'
            )


@dataclass
class PackageFile:
    """A file that is expected to be present within an archive package."""

    path: str = ""
    attributes: FileAttributes = field(default_factory=FileAttributes)


_ARCHIVE_FORMATS = frozenset({"zip"})


@dataclass
class Package:
    """A deployment package."""

    name: str = ""
    type: str = ""
    format: str = ""
    sources: list[PackageSource] = field(default_factory=list)
    attributes: FileAttributes = field(default_factory=FileAttributes)
    files: dict[str, PackageFile] = field(default_factory=dict)
    commands: dict[str, Command] = field(default_factory=dict)

    def is_archive(self) -> bool:
        """Return True if the package must be extracted before use."""
        return self.type == "archive"

    def file_name(self) -> str:
        """Return a file name for the package to be downloaded."""
        return f"{self.name}.{self.file_extension()}"

    def file_extension(self) -> str:
        """Return a file extension for the package, or "file" if unknown."""
        if self.type in ("exe", "msi"):
            return self.type
        if self.type == "archive" and self.format in _ARCHIVE_FORMATS:
            return self.format
        return "file"

    def validate(self) -> None:
        """Raise PackageConfigError if the package is misconfigured."""
        if self.type == "archive":
            if self.format not in _ARCHIVE_FORMATS:
                raise PackageConfigError(
                    f'the package format "{self.format}" is not a recognized '
                    f"format for {self.type} packages"
                )
        elif self.type not in ("exe", "msi"):
            raise PackageConfigError(f'the package type "{self.type}" is not recognized')

        for index, source in enumerate(self.sources):
            try:
                source.validate()
            except PackageConfigError as exc:
                raise PackageConfigError(f"package source {index}: {exc}") from exc

        try:
            self.attributes.validate()
        except ValueError as exc:
            raise PackageConfigError(f"package file attributes: {exc}") from exc

        for command_id, command in self.commands.items():
            if not command.executable:
                continue
            if not self.is_archive():
                raise PackageConfigError(
                    f'package command "{command_id}": an executable file ID is '
                    "only valid for archive packages"
                )
            if command.executable not in self.files:
                raise PackageConfigError(
                    f'package command "{command_id}": the executable file ID refers '
                    f'to package file "{command.executable}", which is not defined '
                    "in the package file set"
                )