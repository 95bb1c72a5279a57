"""Hierarchical byte storage used by the tree codec.

This module defines the storage contract the codec needs and a local
filesystem implementation. Metadata probes never follow symlinks.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
import stat
from typing import Iterator, Protocol

from core.errors import TreeFsIOError


@dataclass(frozen=True)
class PathMetadata:
    """Result of probing one storage location.

    Attributes:
        exists: Whether anything exists at the path.
        is_file: Whether the path is a regular file.
        is_directory: Whether the path is a directory.
        is_symlink: Whether the path itself is a symbolic link.
    """

    exists: bool
    is_file: bool = False
    is_directory: bool = False
    is_symlink: bool = False


MISSING = PathMetadata(exists=False)


class TreeStorage(Protocol):
    """Storage operations required by the codec."""

    def read_bytes(self, path: Path) -> bytes: ...

    def write_bytes(self, path: Path, data: bytes) -> None: ...

    def metadata(self, path: Path) -> PathMetadata: ...

    def list_entries(self, path: Path) -> Iterator[str]: ...


class LocalTreeStorage:
    """Local filesystem storage backend."""

    def read_bytes(self, path: Path) -> bytes:
        """Read full file content.

        Raises:
            TreeFsIOError: If the file cannot be read.
        """
        try:
            return path.read_bytes()
        except OSError as error:
            raise TreeFsIOError(
                f"Failed to read {path}: {error.strerror or error}", path
            ) from error

    def write_bytes(self, path: Path, data: bytes) -> None:
        """Write file content, creating parent directories as needed.

        Raises:
            TreeFsIOError: If the directories or file cannot be written.
        """
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as error:
            raise TreeFsIOError(
                f"Failed to write {path}: {error.strerror or error}", path
            ) from error

    def metadata(self, path: Path) -> PathMetadata:
        """Probe a path without following a final symlink.

        Raises:
            TreeFsIOError: If the probe fails for a reason other than absence.
        """
        try:
            status = os.lstat(path)
        except FileNotFoundError:
            return MISSING
        except NotADirectoryError:
            return MISSING
        except OSError as error:
            raise TreeFsIOError(
                f"Failed to inspect {path}: {error.strerror or error}", path
            ) from error
        mode = status.st_mode
        return PathMetadata(
            exists=True,
            is_file=stat.S_ISREG(mode),
            is_directory=stat.S_ISDIR(mode),
            is_symlink=stat.S_ISLNK(mode),
        )

    def list_entries(self, path: Path) -> Iterator[str]:
        """Yield child names in directory-scan order.

        The scan handle is closed once the generator is exhausted or dropped.

        Raises:
            TreeFsIOError: If the directory cannot be listed.
        """
        try:
            with os.scandir(path) as entries:
                for entry in entries:
                    yield entry.name
        except OSError as error:
            raise TreeFsIOError(
                f"Failed to list {path}: {error.strerror or error}", path
            ) from error
