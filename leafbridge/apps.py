"""Applications relevant to a deployment and changes to their installation."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


class AppList(list):
    """An ordered list of application identifiers."""

    def difference(self, other: Iterable[str]) -> AppList:
        """Return the members of this list that are not members of other."""
        excluded = set(other)
        return AppList(app for app in self if app not in excluded)

    def __str__(self) -> str:
        return ", ".join(str(app) for app in self)


@dataclass
class AppDetection:
    """How to detect an installed application and its version."""

    present: str = ""
    version: str = ""


@dataclass
class Application:
    """Identifying information for an application."""

    name: str = ""
    architecture: str = ""
    scope: str = ""
    product_code: str = ""
    detection: AppDetection = field(default_factory=AppDetection)


class AppChangeError(Exception):
    """Raised when expected application changes did not take effect."""

    def __init__(self, not_installed: AppList, not_uninstalled: AppList) -> None:
        self.not_installed = AppList(not_installed)
        self.not_uninstalled = AppList(not_uninstalled)
        if self.not_installed and self.not_uninstalled:
            message = (
                f"some applications were not installed ({self.not_installed}) "
                f"and some applications were not uninstalled ({self.not_uninstalled})"
            )
        elif self.not_installed:
            message = (
                "the following applications were not installed properly: "
                f"{self.not_installed}"
            )
        else:
            message = (
                "the following applications were not uninstalled properly: "
                f"{self.not_uninstalled}"
            )
        super().__init__(message)


@dataclass
class AppEvaluation:
    """Potential changes to the set of installed applications."""

    already_installed: AppList = field(default_factory=AppList)
    already_uninstalled: AppList = field(default_factory=AppList)
    to_install: AppList = field(default_factory=AppList)
    to_uninstall: AppList = field(default_factory=AppList)

    def __post_init__(self) -> None:
        self.already_installed = AppList(self.already_installed)
        self.already_uninstalled = AppList(self.already_uninstalled)
        self.to_install = AppList(self.to_install)
        self.to_uninstall = AppList(self.to_uninstall)

    def is_zero(self) -> bool:
        """Return True if the evaluation is empty."""
        return not (
            self.already_installed
            or self.already_uninstalled
            or self.to_install
            or self.to_uninstall
        )

    def actions_needed(self) -> bool:
        """Return True if any apps need to be installed or uninstalled."""
        return bool(self.to_install or self.to_uninstall)


@dataclass
class AppSummary:
    """A summary of changes to the set of installed applications."""

    installed: AppList = field(default_factory=AppList)
    uninstalled: AppList = field(default_factory=AppList)
    still_not_installed: AppList = field(default_factory=AppList)
    still_not_uninstalled: AppList = field(default_factory=AppList)

    def __post_init__(self) -> None:
        self.installed = AppList(self.installed)
        self.uninstalled = AppList(self.uninstalled)
        self.still_not_installed = AppList(self.still_not_installed)
        self.still_not_uninstalled = AppList(self.still_not_uninstalled)

    def is_zero(self) -> bool:
        """Return True if the summary is empty."""
        return not (
            self.installed
            or self.uninstalled
            or self.still_not_installed
            or self.still_not_uninstalled
        )

    def error(self) -> AppChangeError | None:
        """Return an error if any expected change did not take effect."""
        if self.still_not_installed or self.still_not_uninstalled:
            return AppChangeError(self.still_not_installed, self.still_not_uninstalled)
        return None

    def check(self) -> None:
        """Raise AppChangeError if any expected change did not take effect."""
        err = self.error()
        if err is not None:
            raise err