"""Events recorded while deployment flows start, stop and evaluate conditions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from leafbridge.conditions import ConditionList, ConditionUse
from leafbridge.flows import FlowStats
from leafbridge.textfmt import StructBuilder, format_duration, plural

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def _flow_builder(deployment: str, flow: str) -> StructBuilder:
    builder = StructBuilder()
    builder.write_primary(str(deployment))
    builder.write_primary(str(flow))
    return builder


def _flow_attrs(deployment: str, flow: str) -> dict[str, Any]:
    return {"deployment": str(deployment), "flow": str(flow)}


def _plural_use(use: str) -> str:
    try:
        return ConditionUse(use).plural()
    except ValueError:
        return str(use)


@dataclass(frozen=True, kw_only=True)
class FlowStarted:
    """A deployment flow has started."""

    deployment: str = ""
    flow: str = ""

    def component(self) -> str:
        """Return the component that generated the event."""
        return "flow"

    def level(self) -> int:
        """Return the logging level of the event."""
        return logging.INFO

    def message(self) -> str:
        """Return a description of the event."""
        builder = _flow_builder(self.deployment, self.flow)
        builder.write_standard("Starting.")
        return str(builder)

    def details(self) -> str:
        """Return additional details, or an empty string."""
        return ""

    def attrs(self) -> dict[str, Any]:
        """Return structured attributes for the event."""
        return _flow_attrs(self.deployment, self.flow)


@dataclass(frozen=True, kw_only=True)
class FlowStopped:
    """A deployment flow has stopped."""

    deployment: str = ""
    flow: str = ""
    stats: FlowStats = field(default_factory=FlowStats)
    started: datetime = _ZERO_TIME
    stopped: datetime = _ZERO_TIME
    error: BaseException | None = None

    def component(self) -> str:
        """Return the component that generated the event."""
        return "flow"

    def level(self) -> int:
        """Return the logging level of the event."""
        return logging.ERROR if self.error is not None else logging.INFO

    def message(self) -> str:
        """Return a description of the event."""
        builder = _flow_builder(self.deployment, self.flow)
        done = self.stats.actions_completed
        failures = self.stats.actions_failed
        completed = f"{done} {plural(done, 'action', 'actions')}"
        failed = f"{failures} {plural(failures, 'action', 'actions')}"
        if done > 0 and failures > 0:
            text = (
                f"Stopped after {completed} completed successfully and "
                f"{failed} encountered an error."
            )
        elif done > 0:
            text = f"Stopped after {completed} completed successfully."
        elif failures > 1:
            text = f"Stopped after {failed} encountered an error."
        elif self.error is not None:
            text = f"Stopped after encountering an error: {self.error}."
        elif failures > 0:
            text = "Stopped."
        else:
            text = "Completed."
        builder.write_standard(text)
        builder.write_note(format_duration(self.duration()))
        return str(builder)

    def details(self) -> str:
        """Return the error when the message does not already include it."""
        if self.error is not None and (
            self.stats.actions_completed > 0 or self.stats.actions_failed > 1
        ):
            return str(self.error)
        return ""

    def attrs(self) -> dict[str, Any]:
        """Return structured attributes for the event."""
        attrs = _flow_attrs(self.deployment, self.flow)
        attrs["started"] = self.started
        attrs["stopped"] = self.stopped
        attrs["actions"] = {
            "completed": self.stats.actions_completed,
            "failed": self.stats.actions_failed,
        }
        if self.error is not None:
            attrs["error"] = str(self.error)
        return attrs

    def duration(self) -> timedelta:
        """Return how long the flow ran."""
        return self.stopped - self.started


@dataclass(frozen=True, kw_only=True)
class FlowCondition:
    """A deployment flow has evaluated a set of its conditions."""

    deployment: str = ""
    flow: str = ""
    use: str = ConditionUse.UNSPECIFIED
    passed: list[str] = field(default_factory=ConditionList)
    failed: list[str] = field(default_factory=ConditionList)
    error: BaseException | None = None

    def component(self) -> str:
        """Return the component that generated the event."""
        return "flow"

    def level(self) -> int:
        """Return the logging level of the event."""
        if self.error is not None:
            return logging.ERROR
        if self.use == ConditionUse.PRECONDITION and self.failed:
            return logging.ERROR
        return logging.DEBUG

    def message(self) -> str:
        """Return a description of the event."""
        builder = _flow_builder(self.deployment, self.flow)
        uses = _plural_use(self.use)
        if self.error is not None:
            builder.write_standard(f"Unable to evaluate {uses}: {self.error}")
        elif self.failed:
            builder.write_standard(
                f"One or more {uses} did not pass: {ConditionList(self.failed)}."
            )
        else:
            builder.write_standard(f"All {uses} passed: {ConditionList(self.passed)}.")
        return str(builder)

    def details(self) -> str:
        """Return additional details, or an empty string."""
        return ""

    def attrs(self) -> dict[str, Any]:
        """Return structured attributes for the event."""
        use = self.use.value if isinstance(self.use, ConditionUse) else str(self.use)
        attrs = _flow_attrs(self.deployment, self.flow)
        attrs["use"] = use
        attrs["conditions"] = {"passed": list(self.passed), "failed": list(self.failed)}
        if self.error is not None:
            attrs["error"] = str(self.error)
        return attrs


@dataclass(frozen=True, kw_only=True)
class FlowLockNotAcquired:
    """A deployment flow could not start because a lock was not acquired."""

    deployment: str = ""
    flow: str = ""
    lock: str = ""
    error: BaseException | None = None

    def component(self) -> str:
        """Return the component that generated the event."""
        return "flow"

    def level(self) -> int:
        """Return the logging level of the event."""
        return logging.ERROR

    def message(self) -> str:
        """Return a description of the event."""
        builder = _flow_builder(self.deployment, self.flow)
        if self.error is not None:
            builder.write_standard(f"Unable to start the flow: {self.error}")
        else:
            builder.write_standard(
                f"Unable to start the flow: The {self.lock} lock could not be acquired."
            )
        return str(builder)

    def details(self) -> str:
        """Return additional details, or an empty string."""
        return ""

    def attrs(self) -> dict[str, Any]:
        """Return structured attributes for the event."""
        attrs = _flow_attrs(self.deployment, self.flow)
        if self.lock:
            attrs["lock"] = str(self.lock)
        if self.error is not None:
            attrs["error"] = str(self.error)
        return attrs


@dataclass(frozen=True, kw_only=True)
class FlowAlreadyRunning:
    """A deployment flow could not start because it is already running."""

    deployment: str = ""
    flow: str = ""

    def component(self) -> str:
        """Return the component that generated the event."""
        return "flow"

    def level(self) -> int:
        """Return the logging level of the event."""
        return logging.ERROR

    def message(self) -> str:
        """Return a description of the event."""
        builder = _flow_builder(self.deployment, self.flow)
        builder.write_standard(
            "Unable to start the flow. Another instance is already running. "
            "Is there a cycle in the flow logic?"
        )
        return str(builder)

    def details(self) -> str:
        """Return additional details, or an empty string."""
        return ""

    def attrs(self) -> dict[str, Any]:
        """Return structured attributes for the event."""
        return _flow_attrs(self.deployment, self.flow)