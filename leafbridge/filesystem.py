"""File system resources and their resolution to local paths."""

from __future__ import annotations

import ntpath
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field


class ResolutionError(ValueError):
    """Raised when a resource cannot be resolved to a local location."""


# Environment variable and relative path for each known folder.
_LOCATIONS: dict[str, tuple[str, ...]] = {
    "common-start-menu": ("ProgramData", "Microsoft", "Windows", "Start Menu"),
    "public-desktop": ("PUBLIC", "Desktop"),
    "program-data": ("ProgramData",),
    "program-files": ("ProgramFiles",),
    "program-files-x86": ("ProgramFiles(x86)",),
    "program-files-x64": ("ProgramW6432",),
    "system": ("SystemRoot", "System32"),
}


def _lookup_env(environ: Mapping[str, str], name: str) -> str | None:
    wanted = name.upper()
    for key, value in environ.items():
        if key.upper() == wanted and value:
            return value
    return None


@dataclass(frozen=True)
class KnownFolder:
    """A folder with a known location on the local system."""

    id: str
    guid: str
    protected: bool = False

    def path(self, environ: Mapping[str, str] | None = None) -> str:
        """Return the path of the known folder, using the given environment."""
        env = os.environ if environ is None else environ
        variable, *rest = _LOCATIONS[self.id]
        base = _lookup_env(env, variable)
        if base is None:
            raise ResolutionError(
                f'the "{self.id}" known folder cannot be located: '
                f"the {variable} environment variable is not set"
            )
        return ntpath.join(base, *rest)


_KNOWN_FOLDERS: dict[str, KnownFolder] = {
    folder.id: folder
    for folder in (
        KnownFolder("common-start-menu", "{A4115719-D62E-491D-AA7C-E74B8BE3B067}"),
        KnownFolder("public-desktop", "{C4AA340D-F20F-4863-AFEF-F87EF2E6BA25}"),
        KnownFolder("program-data", "{62AB5D82-FDC1-4DC3-A9DD-070D1D495D97}"),
        KnownFolder("program-files", "{905E63B6-C1BF-494E-B29C-65B732D3D21A}"),
        KnownFolder("program-files-x86", "{7C5A40EF-A0FB-4BFC-874A-C0F2E0B9FA8E}"),
        KnownFolder("program-files-x64", "{6D809377-6AF0-444B-8957-A3773F02200E}"),
        KnownFolder("system", "{1AC14E77-02E7-4E5D-B744-2EB1AE5198B7}", protected=True),
    )
}


def get_known_folder(folder_id: str) -> KnownFolder | None:
    """Return the known folder with the given directory ID, if there is one."""
    return _KNOWN_FOLDERS.get(folder_id)


_RESERVED = re.compile(r"(CON|PRN|AUX|NUL|COM[1-9]|LPT[1-9]|CONIN\$|CONOUT\$)", re.IGNORECASE)


def localize(path: str) -> str:
    """Convert a slash-separated relative path into a local Windows path.

    Raises ValueError if the path is not local or cannot be represented.
    """
    if path == ".":
        return path
    parts = path.split("/")
    if any(part in ("", ".", "..") for part in parts):
        raise ValueError(f"invalid path: {path!r}")
    if any(ch in path for ch in ":\\\x00"):
        raise ValueError(f"invalid path: {path!r}")
    for part in parts:
        stem = part.split(".", 1)[0].rstrip(" ")
        if _RESERVED.fullmatch(stem):
            raise ValueError(f"invalid path: {path!r}")
    return "\\".join(parts)


@dataclass(frozen=True)
class DirectoryResource:
    """A directory relative to a known folder or another directory resource."""

    location: str = ""
    path: str = ""


@dataclass(frozen=True)
class FileResource:
    """A file relative to a known folder or a directory resource."""

    location: str = ""
    path: str = ""


@dataclass(frozen=True)
class DirRef:
    """A resolved reference to a directory on the local file system."""

    root: KnownFolder
    lineage: tuple[DirectoryResource, ...] = ()

    def path(self, environ: Mapping[str, str] | None = None) -> str:
        """Return the local path of the directory."""
        path = self.root.path(environ)
        for directory in self.lineage:
            path = ntpath.join(path, localize(directory.path))
        return ntpath.normpath(path)


@dataclass(frozen=True)
class FileRef:
    """A resolved reference to a file on the local file system."""

    root: KnownFolder
    lineage: tuple[DirectoryResource, ...] = ()
    file_id: str = ""
    file_path: str = ""

    def dir(self) -> DirRef:
        """Return a reference to the file's directory."""
        return DirRef(self.root, self.lineage)

    def path(self, environ: Mapping[str, str] | None = None) -> str:
        """Return the local path of the file."""
        directory = self.dir().path(environ)
        return ntpath.normpath(ntpath.join(directory, localize(self.file_path)))


@dataclass
class FileSystemResources:
    """Resources accessed through the file system."""

    directories: dict[str, DirectoryResource] = field(default_factory=dict)
    files: dict[str, FileResource] = field(default_factory=dict)

    def resolve_directory(self, directory_id: str) -> DirRef:
        """Resolve a directory resource to a reference rooted in a known folder.

        Resolution does not imply that the directory exists.
        """
        data = self.directories.get(directory_id)
        if data is None:
            folder = get_known_folder(directory_id)
            if folder is not None:
                return DirRef(folder)
            raise ResolutionError(
                f'the "{directory_id}" directory is not defined in the deployment\'s resources'
            )
        if not data.location:
            raise ResolutionError(f'the "{directory_id}" directory does not have a location')

        prefix = f'failed to resolve the "{directory_id}" directory'
        lineage = [data]
        seen: set[str] = set()
        current = data.location
        while True:
            if current in seen:
                raise ResolutionError(
                    f'{prefix}: the "{current}" parent directory has a cyclic '
                    "reference to itself in the deployment's resources"
                )
            seen.add(current)

            parent = self.directories.get(current)
            if parent is not None:
                lineage.append(parent)
                if not parent.location:
                    raise ResolutionError(
                        f'{prefix}: the "{current}" parent directory does not have a location'
                    )
                current = parent.location
                continue

            root = get_known_folder(current)
            if root is not None:
                break

            raise ResolutionError(
                f'{prefix}: the "{current}" parent directory is not defined '
                "in the deployment's resources"
            )

        lineage.reverse()
        return DirRef(root, tuple(lineage))

    def resolve_file(self, file_id: str) -> FileRef:
        """Resolve a file resource to a reference rooted in a known folder.

        Resolution does not imply that the file exists.
        """
        data = self.files.get(file_id)
        if data is None:
            raise ResolutionError(
                f'the "{file_id}" file is not defined in the deployment\'s resources'
            )
        if not data.location:
            raise ResolutionError(f'the "{file_id}" file does not have a location')
        try:
            directory = self.resolve_directory(data.location)
        except ResolutionError as exc:
            raise ResolutionError(f'failed to resolve the "{file_id}" file: {exc}') from exc
        return FileRef(directory.root, directory.lineage, file_id, data.path)