"""System-wide mutex and process resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class MutexConfigError(ValueError):
    """Raised when a mutex resource is misconfigured."""


class MutexNamespace(StrEnum):
    """The namespace in which a mutex exists."""

    LEAFBRIDGE = "leafbridge"
    GLOBAL = "global"
    SESSION = "session"


@dataclass
class Mutex:
    """A system-wide mutex that can be evaluated by conditions or used by locks."""

    name: str
    namespace: str = ""
    description: str = ""

    def object_name(self) -> str:
        """Return the name of the mutex object in the object manager."""
        if self.namespace == MutexNamespace.LEAFBRIDGE:
            return f"Global\\LeafBridge-Deployment-{self.name}"
        if self.namespace == MutexNamespace.GLOBAL:
            return f"Global\\{self.name}"
        if self.namespace == MutexNamespace.SESSION:
            return f"Session\\{self.name}"
        if not self.namespace:
            raise MutexConfigError(
                f'the "{self.name}" mutex is missing a mutex namespace'
            )
        raise MutexConfigError(
            f'the "{self.name}" mutex has an unrecognized namespace: {self.namespace}'
        )


class ProcessAttribute(StrEnum):
    """An attribute of a process."""

    NAME = "name"


class MatchType(StrEnum):
    """The type of match to use for a field."""

    EQUALS = "equals"
    CONTAINS = "contains"


@dataclass
class ProcessMatch:
    """Criteria used to identify processes running on the local machine."""

    label: str = ""
    attribute: str = ""
    type: str = ""
    value: str = ""
    any_of: list[ProcessMatch] = field(default_factory=list)
    all_of: list[ProcessMatch] = field(default_factory=list)


@dataclass
class ProcessResource:
    """A process resource."""

    description: str = ""
    match: ProcessMatch = field(default_factory=ProcessMatch)