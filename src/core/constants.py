"""Core constants used across treefs modules.

This module centralizes on-disk literals and configuration defaults.
Keeping values here avoids magic literals in codec logic.
"""

from __future__ import annotations

TRUE_TEXT = "true"
FALSE_TEXT = "false"
TEXT_ENCODING = "utf-8"
DEFAULT_SUBDOCUMENT_PREFIX = "json"
DEFAULT_SUBDOCUMENT_FORMAT = "json"
SUPPORTED_SUBDOCUMENT_FORMATS = ("json", "yaml")
SUBDOCUMENT_PREFIX_ENV = "TREEFS_SUBDOCUMENT_PREFIX"
SUBDOCUMENT_FORMAT_ENV = "TREEFS_SUBDOCUMENT_FORMAT"
RESERVED_PATH_SEGMENTS = (".", "..")
FORBIDDEN_SEGMENT_CHARACTERS = ("/", "\\", "\x00")
LOG_LEVEL_ENV = "TREEFS_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "info"
