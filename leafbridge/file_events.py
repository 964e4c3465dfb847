"""Events recorded when files are verified, copied and deleted."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from leafbridge.fileattributes import FileAttributes, equal_file_attributes
from leafbridge.packages import PackageSource
from leafbridge.textfmt import StructBuilder, bitrate, format_duration

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def _head(
    deployment: str, flow: str, index: int, action_type: str
) -> StructBuilder:
    builder = StructBuilder()
    builder.write_primary(str(deployment))
    builder.write_primary(str(flow))
    builder.write_primary(str(index + 1))
    builder.write_primary(str(action_type))
    return builder


def _base_attrs(event: Any) -> dict[str, Any]:
    return {
        "deployment": str(event.deployment),
        "flow": str(event.flow),
        "action": {"index": event.action_index, "type": event.action_type},
    }


def _describe(resource_id: str, path: str) -> str:
    return f"{resource_id} ({path})" if path else str(resource_id)


@dataclass(frozen=True, kw_only=True)
class FileVerification:
    """The result of verifying a downloaded file."""

    deployment: str = ""
    flow: str = ""
    action_index: int = 0
    action_type: str = ""
    source: PackageSource = field(default_factory=PackageSource)
    file_name: str = ""
    path: str = ""
    expected: FileAttributes = field(default_factory=FileAttributes)
    actual: FileAttributes = field(default_factory=FileAttributes)

    def component(self) -> str:
        """Return the component that generated the event."""
        return "verification"

    def level(self) -> int:
        """Return the logging level of the event."""
        if not self.expected.features():
            return logging.WARNING
        if not equal_file_attributes(self.expected, self.actual):
            return logging.ERROR
        if not self.expected.hashes:
            return logging.WARNING
        return logging.INFO

    def message(self) -> str:
        """Return a description of the event."""
        builder = _head(self.deployment, self.flow, self.action_index, "verify-file")
        name = self.file_name
        if not self.expected.features():
            text = (
                f'The "{name}" file could not be verified because file '
                "verification data was not provided."
            )
        elif not equal_file_attributes(self.expected, self.actual):
            text = (
                f'The "{name}" file does not have the expected file attributes '
                "and has failed verification."
            )
        elif not self.expected.hashes:
            text = (
                f'The "{name}" file has the expected file size, but no file '
                "hashes were provided for verification."
            )
        else:
            features = ", ".join(self.actual.features())
            text = f'The "{name}" file was verified with the following features: {features}.'
        builder.write_standard(text)
        return str(builder)

    def details(self) -> str:
        """Return additional details, or an empty string."""
        return ""

    def attrs(self) -> dict[str, Any]:
        """Return structured attributes for the event."""
        attrs = _base_attrs(self)
        if self.source.url:
            attrs["source"] = {"type": str(self.source.type), "url": self.source.url}
        if self.path:
            attrs["path"] = self.path
        attrs["expected"] = {"size": self.expected.size, "hashes": self.expected.hashes}
        attrs["actual"] = {"size": self.actual.size, "hashes": self.actual.hashes}
        return attrs


@dataclass(frozen=True, kw_only=True)
class FileCopy:
    """A file was copied."""

    deployment: str = ""
    flow: str = ""
    action_index: int = 0
    action_type: str = ""
    source_id: str = ""
    source_path: str = ""
    destination_id: str = ""
    destination_path: str = ""
    destination_existed: bool = False
    file_size: int = 0
    started: datetime = _ZERO_TIME
    stopped: datetime = _ZERO_TIME
    error: BaseException | None = None

    def component(self) -> str:
        """Return the component that generated the event."""
        return "file"

    def level(self) -> int:
        """Return the logging level of the event."""
        return logging.ERROR if self.error is not None else logging.INFO

    def message(self) -> str:
        """Return a description of the event."""
        builder = _head(self.deployment, self.flow, self.action_index, self.action_type)
        source = _describe(self.source_id, self.source_path)
        dest = _describe(self.destination_id, self.destination_path)
        if self.error is not None:
            text = f"The file copy from {source} to {dest} failed due to an error: {self.error}."
        elif not self.destination_existed:
            text = (
                f"The file copy from {source} to {dest} was completed in "
                f"{format_duration(self.duration())} ({self.bitrate_in_mbps()} mbps)."
            )
        else:
            text = (
                f"The file copy from {source} to {dest} was unnecessary as the "
                "file already exists in the destination."
            )
        builder.write_standard(text)
        return str(builder)

    def details(self) -> str:
        """Return additional details, or an empty string."""
        return ""

    def attrs(self) -> dict[str, Any]:
        """Return structured attributes for the event."""
        attrs = _base_attrs(self)
        attrs["source"] = {"path": self.source_path}
        attrs["destination"] = {
            "path": self.destination_path,
            "existed": self.destination_existed,
        }
        attrs["file"] = {"size": self.file_size}
        attrs["started"] = self.started
        attrs["stopped"] = self.stopped
        if self.error is not None:
            attrs["error"] = str(self.error)
        return attrs

    def duration(self) -> timedelta:
        """Return how long the copy took."""
        return self.stopped - self.started

    def bitrate_in_mbps(self) -> str:
        """Return the copy rate in mebibits per second."""
        return bitrate(self.file_size, self.duration())


@dataclass(frozen=True, kw_only=True)
class FileDelete:
    """A file was deleted."""

    deployment: str = ""
    flow: str = ""
    action_index: int = 0
    action_type: str = ""
    file_id: str = ""
    file_path: str = ""
    file_size: int = 0
    file_existed: bool = False
    started: datetime = _ZERO_TIME
    stopped: datetime = _ZERO_TIME
    error: BaseException | None = None

    def component(self) -> str:
        """Return the component that generated the event."""
        return "file"

    def level(self) -> int:
        """Return the logging level of the event."""
        return logging.ERROR if self.error is not None else logging.INFO

    def message(self) -> str:
        """Return a description of the event."""
        builder = _head(self.deployment, self.flow, self.action_index, self.action_type)
        target = _describe(self.file_id, self.file_path)
        if self.error is not None:
            text = f"Deletion of {target} failed due to an error: {self.error}."
        elif self.file_existed:
            text = (
                f"Deletion of {target} was completed in "
                f"{format_duration(self.duration())} ({self.bitrate_in_mbps()} mbps)."
            )
        else:
            text = f"Deletion of {target} was unnecessary as the file did not exist."
        builder.write_standard(text)
        return str(builder)

    def details(self) -> str:
        """Return additional details, or an empty string."""
        return ""

    def attrs(self) -> dict[str, Any]:
        """Return structured attributes for the event."""
        attrs = _base_attrs(self)
        attrs["file"] = {
            "id": self.file_id,
            "path": self.file_path,
            "size": self.file_size,
            "existed": self.file_existed,
        }
        attrs["started"] = self.started
        attrs["stopped"] = self.stopped
        if self.error is not None:
            attrs["error"] = str(self.error)
        return attrs

    def duration(self) -> timedelta:
        """Return how long the deletion took."""
        return self.stopped - self.started

    def bitrate_in_mbps(self) -> str:
        """Return the deletion rate in mebibits per second."""
        return bitrate(self.file_size, self.duration())