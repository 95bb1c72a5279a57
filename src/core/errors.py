"""treefs exception hierarchy.

This module defines traceable codec errors with clear boundaries.
Each failure kind raises a specific error type carrying the offending path.
"""

from __future__ import annotations

from pathlib import Path


class TreeFsError(Exception):
    """Base exception for all treefs failures.

    Attributes:
        path: Location in the tree where the failure happened, if known.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class TreeFsIOError(TreeFsError):
    """Raised when an underlying storage operation fails."""


class TreeFsInvalidUnicodeError(TreeFsError):
    """Raised when a path segment or text content is not valid UTF-8."""


class TreeFsSymlinkError(TreeFsError):
    """Raised when a symlink is found where a file or directory was expected."""


class TreeFsEmptyDirectoryError(TreeFsError):
    """Raised when a variant payload directory has no entries."""


class TreeFsEmptyFileError(TreeFsError):
    """Raised when a character is decoded from empty content."""


class TreeFsInvalidBoolError(TreeFsError):
    """Raised when boolean content is neither 'true' nor 'false'."""


class TreeFsParseError(TreeFsError):
    """Raised when scalar or key text does not parse as the expected shape."""


class TreeFsUnsupportedAtRootError(TreeFsError):
    """Raised when a leaf value is encoded as the top-level tree value."""


class TreeFsUnsupportedTypeError(TreeFsError):
    """Raised when a value cannot be represented in a directory tree."""


class TreeFsContractViolationError(TreeFsError):
    """Raised when a location is written twice without an intervening ascend.

    This signals a caller bug in the traversal driving the codec, not a
    data problem. Callers decide whether to abort or log it.
    """


class TreeFsConfigError(TreeFsError):
    """Raised for invalid runtime configuration."""


class TreeFsSchemaError(TreeFsError):
    """Raised for invalid or unsupported shape schema files."""


class TreeFsDependencyError(TreeFsError):
    """Raised when an optional runtime dependency is missing."""
