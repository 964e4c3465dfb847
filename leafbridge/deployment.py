"""Deployment definitions and their validation."""

from __future__ import annotations

from dataclasses import dataclass, field

from leafbridge.apps import Application
from leafbridge.commands import Command
from leafbridge.conditions import (
    Condition,
    ConditionElement,
    ConditionError,
    ConditionType,
    condition_self_error,
)
from leafbridge.flows import Behavior, Flow
from leafbridge.resources import Resources


class DeploymentConfigError(ValueError):
    """Raised when a deployment contains invalid configuration."""


def validate_deployment_id(deployment_id: str) -> None:
    """Raise DeploymentConfigError if the deployment ID is missing."""
    if not deployment_id:
        raise DeploymentConfigError("a deployment ID is missing")


@dataclass
class Deployment:
    """A deployment definition."""

    id: str = ""
    name: str = ""
    behavior: Behavior = field(default_factory=Behavior)
    apps: dict[str, Application] = field(default_factory=dict)
    conditions: dict[str, Condition] = field(default_factory=dict)
    commands: dict[str, Command] = field(default_factory=dict)
    resources: Resources = field(default_factory=Resources)
    flows: dict[str, Flow] = field(default_factory=dict)

    def validate(self) -> None:
        """Raise DeploymentConfigError if the deployment is misconfigured."""
        validate_deployment_id(self.id)
        for condition_id in self.conditions:
            self.validate_condition(condition_id)

    def validate_condition(self, condition_id: str) -> None:
        """Raise DeploymentConfigError if the given condition is not valid."""
        definition = self.conditions.get(condition_id)
        if definition is None:
            raise DeploymentConfigError(
                f'the condition "{condition_id}" does not exist within the "{self.id}" deployment'
            )
        try:
            self._validate(definition)
        except ConditionError as exc:
            raise DeploymentConfigError(
                f'the "{condition_id}" condition or one of its subconditions is not valid: {exc}'
            ) from exc

    def _validate(self, condition: Condition) -> None:
        fields = [
            name
            for name, present in (
                ("type", bool(condition.type)),
                ("any", bool(condition.any_of)),
                ("all", bool(condition.all_of)),
            )
            if present
        ]
        if not fields:
            raise condition_self_error(condition, "the condition does not specify a type")
        if len(fields) > 1:
            raise condition_self_error(
                condition,
                "the following fields are present, which are mutually exclusive: "
                + ", ".join(fields),
            )

        for element, subconditions in (
            (ConditionElement.ANY, condition.any_of),
            (ConditionElement.ALL, condition.all_of),
        ):
            for index, sub in enumerate(subconditions):
                try:
                    self._validate(sub)
                except ConditionError as exc:
                    raise ConditionError(
                        exc,
                        label=condition.label,
                        condition_type=condition.type,
                        element=element,
                        sub_condition=index,
                    ) from exc

        if not condition.type:
            return

        problem = self._check_subject(condition)
        if problem:
            raise condition_self_error(condition, problem)

    def _check_subject(self, condition: Condition) -> str | None:
        res = self.resources
        lookups = {
            ConditionType.SUBCONDITION: ("condition ID", self.conditions),
            ConditionType.PROCESS_IS_RUNNING: ("process resource ID", res.processes),
            ConditionType.MUTEX_EXISTS: ("mutex resource ID", res.mutexes),
            ConditionType.REGISTRY_KEY_EXISTS: ("registry key resource ID", res.registry.keys),
            ConditionType.REGISTRY_VALUE_EXISTS: (
                "registry value resource ID",
                res.registry.values,
            ),
            ConditionType.REGISTRY_VALUE_COMPARISON: (
                "registry value resource ID",
                res.registry.values,
            ),
            ConditionType.DIRECTORY_EXISTS: (
                "directory resource ID",
                res.file_system.directories,
            ),
            ConditionType.FILE_EXISTS: ("file resource ID", res.file_system.files),
        }
        try:
            kind, table = lookups[ConditionType(condition.type)]
        except (ValueError, KeyError):
            return f"the condition type is not recognized: {condition.type}"
        if not condition.subject:
            return f"the condition does not provide a {kind}"
        if condition.subject not in table:
            return f"the condition references a {kind} that is not defined: {condition.subject}"
        return None