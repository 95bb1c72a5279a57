"""Path cursor for tree navigation.

The cursor is a stack of path segments below a fixed root. Encoders and
decoders descend into children, perform leaf I/O at the current location,
and ascend again. Every probe rejects symlinks.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from codec.tree_storage import PathMetadata, TreeStorage
from core.constants import TEXT_ENCODING
from core.errors import (
    TreeFsContractViolationError,
    TreeFsEmptyDirectoryError,
    TreeFsInvalidUnicodeError,
    TreeFsIOError,
    TreeFsSymlinkError,
    TreeFsUnsupportedAtRootError,
)


class PathCursor:
    """Mutable current-location tracker over a storage backend.

    Attributes:
        root: Tree root all segments are relative to.
        leaves_written: Number of leaf files written through this cursor.
    """

    def __init__(self, storage: TreeStorage, root: Path) -> None:
        self.root = root
        self.leaves_written = 0
        self._storage = storage
        self._segments: list[str] = []
        self._dirty = False

    @property
    def depth(self) -> int:
        """Number of segments below the root."""
        return len(self._segments)

    @property
    def dirty(self) -> bool:
        """Whether a leaf was written at the current location since the last ascend."""
        return self._dirty

    @property
    def current_path(self) -> Path:
        return self.root.joinpath(*self._segments)

    def descend(self, segment: str) -> None:
        """Append one path segment."""
        self._segments.append(segment)

    def ascend(self) -> None:
        """Remove the last path segment and clear the dirty flag.

        Raises:
            TreeFsContractViolationError: If the cursor is already at the root.
        """
        if not self._segments:
            raise TreeFsContractViolationError(
                f"Cannot ascend above the tree root {self.root}.", self.root
            )
        self._segments.pop()
        self._dirty = False

    @contextmanager
    def descended(self, segment: str) -> Iterator[None]:
        """Descend into ``segment`` for the duration of a with block."""
        self.descend(segment)
        try:
            yield
        finally:
            self.ascend()

    def metadata(self) -> PathMetadata:
        """Probe the current location.

        Raises:
            TreeFsSymlinkError: If the location is a symlink.
        """
        path = self.current_path
        metadata = self._storage.metadata(path)
        if metadata.is_symlink:
            raise TreeFsSymlinkError(
                f"Encountered symlink at {path}; symlinks are never followed.", path
            )
        return metadata

    def exists(self) -> bool:
        return self.metadata().exists

    def is_file(self) -> bool:
        return self.metadata().is_file

    def is_directory(self) -> bool:
        return self.metadata().is_directory

    def require_exists(self) -> PathMetadata:
        """Probe the current location and fail if nothing is there.

        Raises:
            TreeFsIOError: If the location does not exist.
        """
        metadata = self.metadata()
        if not metadata.exists:
            path = self.current_path
            raise TreeFsIOError(f"Expected a file or directory at {path}, found nothing.", path)
        return metadata

    def list_entries(self) -> Iterator[str]:
        """Yield child names of the current directory in storage order.

        Raises:
            TreeFsInvalidUnicodeError: If a child name is not valid UTF-8.
        """
        path = self.current_path
        for name in self._storage.list_entries(path):
            yield _require_unicode_segment(name, path)

    def first_entry(self) -> str:
        """Return the first child name listed by storage.

        Raises:
            TreeFsEmptyDirectoryError: If the directory has no entries.
        """
        for name in self.list_entries():
            return name
        path = self.current_path
        raise TreeFsEmptyDirectoryError(
            f"Expected one entry in directory {path}, found none.", path
        )

    def read_bytes(self) -> bytes:
        """Read the leaf file at the current location."""
        self.require_exists()
        return self._storage.read_bytes(self.current_path)

    def read_text(self) -> str:
        """Read the leaf file at the current location as UTF-8 text.

        Raises:
            TreeFsInvalidUnicodeError: If the content is not valid UTF-8.
        """
        data = self.read_bytes()
        try:
            return data.decode(TEXT_ENCODING)
        except UnicodeDecodeError as error:
            path = self.current_path
            raise TreeFsInvalidUnicodeError(
                f"File {path} does not contain valid UTF-8.", path
            ) from error

    def write_leaf(self, data: bytes) -> None:
        """Write a leaf file at the current location.

        Raises:
            TreeFsUnsupportedAtRootError: If the cursor is at the root.
            TreeFsContractViolationError: If a leaf was already written here
                without an intervening ascend.
            TreeFsSymlinkError: If any existing component below the root is a symlink.
        """
        path = self.current_path
        if not self._segments:
            raise TreeFsUnsupportedAtRootError(
                f"Cannot write a leaf value at the tree root {path}; "
                "only composite values may be top-level values.",
                path,
            )
        if self._dirty:
            raise TreeFsContractViolationError(
                f"Leaf at {path} written twice without an intervening ascend.", path
            )
        self._reject_symlinked_components()
        self._storage.write_bytes(path, data)
        self._dirty = True
        self.leaves_written += 1

    def _reject_symlinked_components(self) -> None:
        path = self.root
        for segment in self._segments:
            path = path / segment
            metadata = self._storage.metadata(path)
            if not metadata.exists:
                return
            if metadata.is_symlink:
                raise TreeFsSymlinkError(
                    f"Encountered symlink at {path}; refusing to write through it.", path
                )


def _require_unicode_segment(name: str, directory: Path) -> str:
    try:
        name.encode(TEXT_ENCODING)
    except UnicodeEncodeError as error:
        raise TreeFsInvalidUnicodeError(
            f"Directory {directory} contains an entry name that is not valid UTF-8.", directory
        ) from error
    return name
