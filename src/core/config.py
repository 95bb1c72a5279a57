"""Runtime configuration model for treefs.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_SUBDOCUMENT_FORMAT,
    DEFAULT_SUBDOCUMENT_PREFIX,
    FORBIDDEN_SEGMENT_CHARACTERS,
    SUBDOCUMENT_FORMAT_ENV,
    SUBDOCUMENT_PREFIX_ENV,
    SUPPORTED_SUBDOCUMENT_FORMATS,
)
from core.errors import TreeFsConfigError


@dataclass(frozen=True)
class TreeFsConfig:
    """Validated runtime configuration.

    Attributes:
        subdocument_prefix: Name prefix that routes a field or map entry
            through the whole-document codec.
        subdocument_format: Whole-document codec name, 'json' or 'yaml'.
    """

    subdocument_prefix: str = DEFAULT_SUBDOCUMENT_PREFIX
    subdocument_format: str = DEFAULT_SUBDOCUMENT_FORMAT

    @classmethod
    def from_env(cls) -> "TreeFsConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            TreeFsConfigError: If environment values are invalid.
        """
        prefix = os.getenv(SUBDOCUMENT_PREFIX_ENV, DEFAULT_SUBDOCUMENT_PREFIX)
        subdocument_format = os.getenv(SUBDOCUMENT_FORMAT_ENV, DEFAULT_SUBDOCUMENT_FORMAT)
        return cls(
            subdocument_prefix=parse_subdocument_prefix(prefix),
            subdocument_format=parse_subdocument_format(subdocument_format),
        )


def parse_subdocument_prefix(raw_value: str) -> str:
    """Validate the sub-document marker prefix.

    Args:
        raw_value: Raw prefix string.

    Returns:
        The prefix unchanged.

    Raises:
        TreeFsConfigError: If the prefix is empty or cannot be part of a path segment.
    """
    if not raw_value:
        raise TreeFsConfigError(
            f"Invalid {SUBDOCUMENT_PREFIX_ENV} value: expected a non-empty prefix. "
            f"Unset it to use the default '{DEFAULT_SUBDOCUMENT_PREFIX}'."
        )
    if any(character in raw_value for character in FORBIDDEN_SEGMENT_CHARACTERS):
        raise TreeFsConfigError(
            f"Invalid {SUBDOCUMENT_PREFIX_ENV} value '{raw_value}': "
            "prefix must not contain path separators or NUL."
        )
    return raw_value


def parse_subdocument_format(raw_value: str) -> str:
    """Validate the sub-document codec name.

    Args:
        raw_value: Raw format name.

    Returns:
        Normalized lowercase format name.

    Raises:
        TreeFsConfigError: If the format is not supported.
    """
    normalized = raw_value.strip().lower()
    if normalized not in SUPPORTED_SUBDOCUMENT_FORMATS:
        supported = ", ".join(SUPPORTED_SUBDOCUMENT_FORMATS)
        raise TreeFsConfigError(
            f"Invalid {SUBDOCUMENT_FORMAT_ENV} value: expected one of {supported}, "
            f"got '{raw_value}'."
        )
    return normalized
