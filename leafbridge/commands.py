"""Commands that can be invoked for a deployment or package."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from leafbridge.apps import AppList
from leafbridge.textfmt import StructBuilder


class CommandType(StrEnum):
    """The type of a command."""

    EXE = "exe"
    MSI_INSTALL = "msi-install"
    MSI_UPDATE = "msi-update"
    MSI_UNINSTALL = "msi-uninstall"
    MSI_UNINSTALL_PRODUCT_CODE = "msi-uninstall-product-code"

    def is_app_based(self) -> bool:
        """Return True if the command applies to an application's product code."""
        return self is CommandType.MSI_UNINSTALL_PRODUCT_CODE

    def is_msi(self) -> bool:
        """Return True if the command invokes msiexec."""
        return self in _MSI_TYPES


_MSI_TYPES = frozenset(
    {
        CommandType.MSI_INSTALL,
        CommandType.MSI_UPDATE,
        CommandType.MSI_UNINSTALL,
        CommandType.MSI_UNINSTALL_PRODUCT_CODE,
    }
)


@dataclass(frozen=True)
class ExitCodeInfo:
    """Information about an exit code."""

    name: str = ""
    description: str = ""
    ok: bool = False


@dataclass
class Command:
    """A command that can be invoked for a deployment or package.

    The executable is a file resource ID for regular commands and a package
    file ID for commands applied to archive packages.
    """

    installs: AppList = field(default_factory=AppList)
    uninstalls: AppList = field(default_factory=AppList)
    type: CommandType | None = None
    working_directory: str = ""
    executable: str = ""
    args: list[str] = field(default_factory=list)
    exit_codes: dict[int, ExitCodeInfo] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.installs = AppList(self.installs)
        self.uninstalls = AppList(self.uninstalls)
        if self.type is not None:
            self.type = CommandType(self.type)


@dataclass(frozen=True)
class CommandResult:
    """An exit code returned by a command, with what is known about it."""

    exit_code: int = 0
    info: ExitCodeInfo = field(default_factory=ExitCodeInfo)

    def __str__(self) -> str:
        builder = StructBuilder()
        builder.write_primary("exit code")
        if self.info.ok:
            builder.write_primary(f"{self.exit_code} [OK]")
        else:
            builder.write_primary(str(self.exit_code))
        if self.info.name:
            builder.write_primary(self.info.name)
        if self.info.description:
            builder.write_standard(self.info.description)
        return str(builder)