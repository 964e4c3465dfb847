"""Events recorded when deployment actions start and stop."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from leafbridge.textfmt import StructBuilder, format_duration

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)
_SLOW_ACTION = timedelta(seconds=5)


def _write_action_head(
    builder: StructBuilder, deployment: str, flow: str, index: int, action_type: str
) -> None:
    builder.write_primary(str(deployment))
    builder.write_primary(str(flow))
    builder.write_primary(str(index + 1))
    builder.write_primary(str(action_type))


@dataclass(frozen=True, kw_only=True)
class ActionStarted:
    """A deployment action has started."""

    deployment: str = ""
    flow: str = ""
    action_index: int = 0
    action_type: str = ""

    def component(self) -> str:
        """Return the component that generated the event."""
        return "action"

    def level(self) -> int:
        """Return the logging level of the event."""
        return logging.DEBUG

    def message(self) -> str:
        """Return a description of the event."""
        builder = StructBuilder()
        _write_action_head(
            builder, self.deployment, self.flow, self.action_index, self.action_type
        )
        builder.write_standard("Starting action")
        return str(builder)

    def details(self) -> str:
        """Return additional details, or an empty string."""
        return ""

    def attrs(self) -> dict[str, Any]:
        """Return structured attributes for the event."""
        return {
            "deployment": str(self.deployment),
            "flow": str(self.flow),
            "action": {"index": self.action_index, "type": self.action_type},
        }


@dataclass(frozen=True, kw_only=True)
class ActionStopped:
    """A deployment action has stopped."""

    deployment: str = ""
    flow: str = ""
    action_index: int = 0
    action_type: str = ""
    started: datetime = _ZERO_TIME
    stopped: datetime = _ZERO_TIME
    error: BaseException | None = None

    def component(self) -> str:
        """Return the component that generated the event."""
        return "action"

    def level(self) -> int:
        """Return the logging level of the event."""
        if self.error is not None:
            return logging.ERROR
        if self.duration() < _SLOW_ACTION:
            return logging.DEBUG
        return logging.INFO

    def message(self) -> str:
        """Return a description of the event."""
        builder = StructBuilder()
        _write_action_head(
            builder, self.deployment, self.flow, self.action_index, self.action_type
        )
        if self.error is not None:
            builder.write_standard(f"Stopped action due to an error: {self.error}")
        else:
            builder.write_standard("Completed action")
        builder.write_note(format_duration(self.duration()))
        return str(builder)

    def details(self) -> str:
        """Return additional details, or an empty string."""
        return ""

    def attrs(self) -> dict[str, Any]:
        """Return structured attributes for the event."""
        attrs: dict[str, Any] = {
            "deployment": str(self.deployment),
            "flow": str(self.flow),
            "action": {"index": self.action_index, "type": self.action_type},
            "started": self.started,
            "stopped": self.stopped,
        }
        if self.error is not None:
            attrs["error"] = str(self.error)
        return attrs

    def duration(self) -> timedelta:
        """Return how long the action ran."""
        return self.stopped - self.started