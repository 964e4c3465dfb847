"""Flows of actions, their behaviors and locks."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class ActionType(StrEnum):
    """The type of an action."""

    START_FLOW = "start-flow"
    PREPARE_PACKAGE = "prepare-package"
    INVOKE_COMMAND = "invoke-command"
    COPY_FILE = "copy-file"
    DELETE_FILE = "delete-file"


@dataclass
class Action:
    """An action to be taken as part of a flow."""

    type: ActionType
    package: str = ""
    command: str = ""
    force: bool = False
    flow: str = ""
    source_file: str = ""
    source_dir: str = ""
    destination_file: str = ""
    destination_dir: str = ""

    def __post_init__(self) -> None:
        self.type = ActionType(self.type)


class OnErrorBehavior(StrEnum):
    """The response to take when an error is encountered."""

    UNSPECIFIED = ""
    STOP = "stop"
    CONTINUE = "continue"


@dataclass(frozen=True)
class Behavior:
    """Behavior modifications for a deployment or flow."""

    on_error: OnErrorBehavior = OnErrorBehavior.UNSPECIFIED

    def __post_init__(self) -> None:
        object.__setattr__(self, "on_error", OnErrorBehavior(self.on_error))


def overlay_behavior(*behaviors: Behavior) -> Behavior:
    """Overlay behaviors, giving priority to later ones."""
    on_error = OnErrorBehavior.UNSPECIFIED
    for behavior in behaviors:
        if behavior.on_error != OnErrorBehavior.UNSPECIFIED:
            on_error = behavior.on_error
    return Behavior(on_error=on_error)


@dataclass
class Flow:
    """A flow of actions within a deployment."""

    constraints: list[str] = field(default_factory=list)
    preconditions: list[str] = field(default_factory=list)
    locks: list[str] = field(default_factory=list)
    behavior: Behavior = field(default_factory=Behavior)
    actions: list[Action] = field(default_factory=list)


@dataclass
class FlowStats:
    """Statistics about a flow that has been invoked."""

    actions_completed: int = 0
    actions_failed: int = 0


@dataclass(frozen=True)
class LockConflictRules:
    """Guidance for when a conflict is encountered on a lockable resource."""

    message: str = ""


@dataclass
class Lock:
    """A lockable resource that keeps invocations from interfering."""

    description: str = ""
    mutex: str = ""
    conflict_rules: LockConflictRules = field(default_factory=LockConflictRules)