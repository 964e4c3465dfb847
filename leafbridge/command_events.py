"""Events recorded when commands are skipped, started and stopped."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from leafbridge.apps import AppEvaluation, AppSummary
from leafbridge.commands import CommandResult
from leafbridge.textfmt import StructBuilder, format_duration

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def _write_command_head(builder: StructBuilder, event: Any) -> None:
    builder.write_primary(str(event.deployment))
    builder.write_primary(str(event.flow))
    builder.write_primary(str(event.action_index + 1))
    builder.write_primary(str(event.action_type))
    if event.package:
        builder.write_primary(f"{event.package}.{event.command}")
    else:
        builder.write_primary(str(event.command))


def _base_attrs(event: Any) -> dict[str, Any]:
    attrs: dict[str, Any] = {
        "deployment": str(event.deployment),
        "flow": str(event.flow),
        "action": {"index": event.action_index, "type": event.action_type},
    }
    if event.package:
        attrs["package"] = str(event.package)
    return attrs


def _evaluation_attrs(apps: AppEvaluation) -> dict[str, list[str]]:
    return {
        "already-installed": list(apps.already_installed),
        "already-uninstalled": list(apps.already_uninstalled),
        "to-install": list(apps.to_install),
        "to-uninstall": list(apps.to_uninstall),
    }


def _working_directory_line(path: str, directory_id: str) -> str:
    if path:
        return f"Working Directory: {path}"
    if directory_id:
        return f"Working Directory: {directory_id}"
    return ""


@dataclass(frozen=True, kw_only=True)
class CommandSkipped:
    """A command was skipped."""

    deployment: str = ""
    flow: str = ""
    action_index: int = 0
    action_type: str = ""
    package: str = ""
    command: str = ""
    apps: AppEvaluation = field(default_factory=AppEvaluation)

    def component(self) -> str:
        """Return the component that generated the event."""
        return "command"

    def level(self) -> int:
        """Return the logging level of the event."""
        return logging.INFO

    def message(self) -> str:
        """Return a description of the event."""
        builder = StructBuilder()
        _write_command_head(builder, self)
        builder.write_standard("Skipped command")
        if self.apps.already_installed:
            builder.write_note(f"[{self.apps.already_installed}]", "already installed")
        if self.apps.already_uninstalled:
            builder.write_note(f"[{self.apps.already_uninstalled}]", "already uninstalled")
        return str(builder)

    def details(self) -> str:
        """Return additional details, or an empty string."""
        return ""

    def attrs(self) -> dict[str, Any]:
        """Return structured attributes for the event."""
        attrs = _base_attrs(self)
        attrs["command"] = {"id": self.command}
        if not self.apps.is_zero():
            attrs["affected-apps"] = _evaluation_attrs(self.apps)
        return attrs


@dataclass(frozen=True, kw_only=True)
class CommandStarted:
    """A command has started."""

    deployment: str = ""
    flow: str = ""
    action_index: int = 0
    action_type: str = ""
    package: str = ""
    command: str = ""
    command_line: str = ""
    working_directory: str = ""
    working_directory_path: str = ""
    apps: AppEvaluation = field(default_factory=AppEvaluation)

    def component(self) -> str:
        """Return the component that generated the event."""
        return "command"

    def level(self) -> int:
        """Return the logging level of the event."""
        return logging.INFO

    def message(self) -> str:
        """Return a description of the event."""
        builder = StructBuilder()
        _write_command_head(builder, self)
        to_install, to_uninstall = self.apps.to_install, self.apps.to_uninstall
        if to_install and to_uninstall:
            builder.write_primary(
                f"Starting command to install {to_install} and uninstall {to_uninstall}"
            )
        elif to_uninstall:
            builder.write_primary(f"Starting command to uninstall {to_uninstall}")
        else:
            builder.write_primary("Starting command")
        builder.write_standard(self.command_line)
        return str(builder)

    def details(self) -> str:
        """Return the working directory, if known."""
        return _working_directory_line(self.working_directory_path, self.working_directory)

    def attrs(self) -> dict[str, Any]:
        """Return structured attributes for the event."""
        attrs = _base_attrs(self)
        attrs["command"] = {"id": self.command, "invocation": self.command_line}
        if self.working_directory or self.working_directory_path:
            attrs["working-directory"] = {
                "id": self.working_directory,
                "path": self.working_directory_path,
            }
        if not self.apps.is_zero():
            attrs["affected-apps"] = _evaluation_attrs(self.apps)
        return attrs


@dataclass(frozen=True, kw_only=True)
class CommandStopped:
    """A command has stopped."""

    deployment: str = ""
    flow: str = ""
    action_index: int = 0
    action_type: str = ""
    package: str = ""
    command: str = ""
    command_line: str = ""
    result: CommandResult = field(default_factory=CommandResult)
    output: str = ""
    working_directory: str = ""
    working_directory_path: str = ""
    apps_before: AppEvaluation = field(default_factory=AppEvaluation)
    apps_after: AppSummary = field(default_factory=AppSummary)
    started: datetime = _ZERO_TIME
    stopped: datetime = _ZERO_TIME
    error: BaseException | None = None

    def component(self) -> str:
        """Return the component that generated the event."""
        return "command"

    def level(self) -> int:
        """Return the logging level of the event."""
        if self.error is not None or self.apps_after.error() is not None:
            return logging.ERROR
        return logging.INFO

    def message(self) -> str:
        """Return a description of the event."""
        builder = StructBuilder()
        _write_command_head(builder, self)
        apps_error = self.apps_after.error()
        if self.error is not None:
            builder.write_standard(f"Stopped command due to an error: {self.error}")
        elif apps_error is not None:
            builder.write_standard(f"Completed command but {apps_error}")
        else:
            builder.write_standard("Completed command")
        builder.write_note(format_duration(self.duration()))
        if self.result.exit_code != 0:
            builder.write_note(str(self.result))
        return str(builder)

    def details(self) -> str:
        """Return the working directory, command line and output."""
        parts = [
            _working_directory_line(self.working_directory_path, self.working_directory),
            self.command_line,
            self.output,
        ]
        return "\n\n".join(part for part in parts if part)

    def attrs(self) -> dict[str, Any]:
        """Return structured attributes for the event."""
        attrs = _base_attrs(self)
        attrs["command"] = {"id": self.command, "invocation": self.command_line}
        attrs["started"] = self.started
        attrs["stopped"] = self.stopped
        if self.working_directory or self.working_directory_path:
            attrs["working-directory"] = {
                "id": self.working_directory,
                "path": self.working_directory_path,
            }
        if not self.apps_before.is_zero():
            attrs["affected-apps-before"] = _evaluation_attrs(self.apps_before)
        if not self.apps_after.is_zero():
            after = self.apps_after
            attrs["affected-apps-after"] = {
                "installed": list(after.installed),
                "uninstalled": list(after.uninstalled),
                "still-not-installed": list(after.still_not_installed),
                "still-not-uninstalled": list(after.still_not_uninstalled),
            }
        if self.output:
            attrs["output"] = self.output
        err = self.error if self.error is not None else self.apps_after.error()
        if err is not None:
            attrs["error"] = str(err)
        return attrs

    def duration(self) -> timedelta:
        """Return how long the command ran."""
        return self.stopped - self.started