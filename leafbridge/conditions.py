"""Conditions that can be evaluated as part of a deployment."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from typing import Any

from leafbridge.textfmt import StructBuilder


class ConditionList(list):
    """An ordered list of condition identifiers."""

    def __str__(self) -> str:
        return ", ".join(str(item) for item in self)


class ConditionType(StrEnum):
    """The supported types of condition."""

    SUBCONDITION = "condition"
    PROCESS_IS_RUNNING = "resource.process:running"
    MUTEX_EXISTS = "resource.mutex:exists"
    REGISTRY_KEY_EXISTS = "resource.registry.key:exists"
    REGISTRY_VALUE_EXISTS = "resource.registry.value:exists"
    REGISTRY_VALUE_COMPARISON = "resource.registry.value:comparison"
    DIRECTORY_EXISTS = "resource.file-system.directory:exists"
    FILE_EXISTS = "resource.file-system.file:exists"


@dataclass
class Condition:
    """A condition that can be evaluated.

    The type is kept as given, so that unrecognized types can be reported
    during validation.
    """

    label: str = ""
    type: str = ""
    subject: str = ""
    comparison: str = ""
    value: Any = None
    negated: bool = False
    any_of: list[Condition] = field(default_factory=list)
    all_of: list[Condition] = field(default_factory=list)
    violation: str = ""


_PLURALS = {
    "": "conditions",
    "constraint": "constraints",
    "precondition": "preconditions",
}


class ConditionUse(StrEnum):
    """A common use of a condition."""

    UNSPECIFIED = ""
    CONSTRAINT = "constraint"
    PRECONDITION = "precondition"

    def __str__(self) -> str:
        return self.value or "condition"

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)

    def plural(self) -> str:
        """Return the use in plural form."""
        return _PLURALS.get(self.value, self.value)


class ConditionElement(IntEnum):
    """The element of a condition that led to an error."""

    SELF = 0
    ANY = 1
    ALL = 2


class ConditionError(Exception):
    """Raised when a condition fails due to an error."""

    def __init__(
        self,
        err: BaseException | str,
        *,
        condition_id: str = "",
        label: str = "",
        condition_type: str = "",
        element: ConditionElement = ConditionElement.SELF,
        sub_condition: int = 0,
    ) -> None:
        self.err = err
        self.condition_id = condition_id
        self.label = label
        self.condition_type = condition_type
        self.element = ConditionElement(element)
        self.sub_condition = sub_condition
        super().__init__(self._describe())
        if isinstance(err, BaseException):
            self.__cause__ = err

    def _describe(self) -> str:
        builder = StructBuilder()
        if self.condition_id and self.label:
            builder.write_primary(f"{self.condition_id} ({self.label})")
        elif self.condition_id:
            builder.write_primary(str(self.condition_id))
        elif self.label:
            builder.write_primary(self.label)

        if self.element is ConditionElement.ANY:
            builder.write_primary(f"Any [{self.sub_condition}]")
        elif self.element is ConditionElement.ALL:
            builder.write_primary(f"All [{self.sub_condition}]")
        elif self.condition_type:
            builder.write_primary(str(self.condition_type))

        builder.write_standard(str(self.err))
        return str(builder)


def condition_self_error(condition: Condition, err: BaseException | str) -> ConditionError:
    """Return an error about the condition itself, wrapping err."""
    return ConditionError(
        err,
        label=condition.label,
        condition_type=condition.type,
        element=ConditionElement.SELF,
    )