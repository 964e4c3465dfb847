"""The set of resources used by a deployment."""

from __future__ import annotations

from dataclasses import dataclass, field

from leafbridge.filesystem import FileSystemResources
from leafbridge.flows import Lock
from leafbridge.packages import Package, PackageConfigError
from leafbridge.registry import RegistryResources
from leafbridge.sysresources import Mutex, ProcessResource


@dataclass
class Resources:
    """Local and remote resources used by a deployment."""

    processes: dict[str, ProcessResource] = field(default_factory=dict)
    mutexes: dict[str, Mutex] = field(default_factory=dict)
    locks: dict[str, Lock] = field(default_factory=dict)
    registry: RegistryResources = field(default_factory=RegistryResources)
    file_system: FileSystemResources = field(default_factory=FileSystemResources)
    packages: dict[str, Package] = field(default_factory=dict)

    def validate(self) -> None:
        """Raise PackageConfigError if any package is misconfigured."""
        for package_id, package in self.packages.items():
            try:
                package.validate()
            except PackageConfigError as exc:
                raise PackageConfigError(f"package {package_id}: {exc}") from exc