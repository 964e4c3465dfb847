"""Registry resources and their resolution to registry locations."""

from __future__ import annotations

import ntpath
from dataclasses import dataclass, field
from enum import Enum

from leafbridge.filesystem import ResolutionError, localize


class RootKey(Enum):
    """A predefined key at the top of the registry."""

    CLASSES_ROOT = "HKEY_CLASSES_ROOT"
    CURRENT_USER = "HKEY_CURRENT_USER"
    LOCAL_MACHINE = "HKEY_LOCAL_MACHINE"
    USERS = "HKEY_USERS"
    CURRENT_CONFIG = "HKEY_CURRENT_CONFIG"


_SUPPORTED_ROOT_KEYS = frozenset({RootKey.LOCAL_MACHINE})


@dataclass(frozen=True)
class RegistryRoot:
    """A well-known root location within the registry."""

    id: str = ""
    key: RootKey | None = None
    path: str = ""

    @property
    def is_zero(self) -> bool:
        """True if the root is undefined."""
        return not self.id

    def absolute_path(self) -> str:
        """Return the absolute path of the root, including its predefined key."""
        if self.key not in _SUPPORTED_ROOT_KEYS:
            raise ResolutionError(
                f'the "{self.id}" registry root relies on an unsupported root key'
            )
        path = self.key.value
        if self.path:
            path = ntpath.normpath(ntpath.join(path, self.path))
        return path


_REGISTRY_ROOTS: dict[str, RegistryRoot] = {
    "software": RegistryRoot("software", RootKey.LOCAL_MACHINE, "SOFTWARE"),
}


def get_registry_root(root_id: str) -> RegistryRoot | None:
    """Return the well-known registry root with the given ID, if there is one."""
    return _REGISTRY_ROOTS.get(root_id)


@dataclass(frozen=True)
class RegistryKeyResource:
    """A registry key relative to a registry root or another key resource.

    The name and path are mutually exclusive; slashes and backslashes in the
    path are both separators.
    """

    location: str = ""
    name: str = ""
    path: str = ""


@dataclass(frozen=True)
class RegistryKeyRef:
    """A resolved reference to a registry key on the local system."""

    root: RegistryRoot
    lineage: tuple[RegistryKeyResource, ...] = ()

    def path(self) -> str:
        """Return the path of the registry key."""
        path = self.root.absolute_path()
        for key in self.lineage:
            if key.name:
                path = f"{path}\\{key.name}"
            elif key.path:
                localized = localize(key.path.replace("\\", "/"))
                path = ntpath.normpath(ntpath.join(path, localized))
            else:
                raise ResolutionError(
                    "a registry key resource does not specify a name or path"
                )
        return path


@dataclass(frozen=True)
class RegistryValueResource:
    """A value within a registry key."""

    key: str = ""
    name: str = ""
    type: str = ""


@dataclass(frozen=True)
class RegistryValueRef:
    """A resolved reference to a registry value on the local system."""

    root: RegistryRoot
    lineage: tuple[RegistryKeyResource, ...] = ()
    id: str = ""
    name: str = ""
    type: str = ""

    def key(self) -> RegistryKeyRef:
        """Return a reference to the value's registry key."""
        return RegistryKeyRef(self.root, self.lineage)


@dataclass
class RegistryResources:
    """Resources accessed through the registry."""

    keys: dict[str, RegistryKeyResource] = field(default_factory=dict)
    values: dict[str, RegistryValueResource] = field(default_factory=dict)

    def resolve_key(self, key_id: str) -> RegistryKeyRef:
        """Resolve a key resource to a reference rooted in a registry root.

        Resolution does not imply that the key exists.
        """
        data = self.keys.get(key_id)
        if data is None:
            root = get_registry_root(key_id)
            if root is not None:
                return RegistryKeyRef(root)
            raise ResolutionError(
                f'the "{key_id}" registry key is not defined in the deployment\'s resources'
            )
        if not data.location:
            raise ResolutionError(f'the "{key_id}" registry key does not have a location')

        prefix = f'failed to resolve the "{key_id}" registry key'
        lineage = [data]
        seen: set[str] = set()
        current = data.location
        while True:
            if current in seen:
                raise ResolutionError(
                    f'{prefix}: the "{current}" parent key has a cyclic reference '
                    "to itself in the deployment's registry resources"
                )
            seen.add(current)

            parent = self.keys.get(current)
            if parent is not None:
                lineage.append(parent)
                if not parent.location:
                    raise ResolutionError(
                        f'{prefix}: the "{current}" parent key does not have a location'
                    )
                current = parent.location
                continue

            root = get_registry_root(current)
            if root is not None:
                break

            raise ResolutionError(
                f'{prefix}: the "{current}" parent key is not defined '
                "in the deployment's resources"
            )

        lineage.reverse()
        return RegistryKeyRef(root, tuple(lineage))

    def resolve_value(self, value_id: str) -> RegistryValueRef:
        """Resolve a value resource to a reference rooted in a registry root.

        Resolution does not imply that the value exists.
        """
        data = self.values.get(value_id)
        if data is None:
            raise ResolutionError(
                f'the "{value_id}" registry value is not defined in the deployment\'s resources'
            )
        if not data.key:
            raise ResolutionError(f'the "{value_id}" registry value does not have a key')
        try:
            key = self.resolve_key(data.key)
        except ResolutionError as exc:
            raise ResolutionError(
                f'failed to resolve the "{value_id}" registry value: {exc}'
            ) from exc
        return RegistryValueRef(key.root, key.lineage, value_id, data.name, data.type)