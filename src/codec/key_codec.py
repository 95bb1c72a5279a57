"""Map key encoding as path segments.

A key is reduced to the scalar text form of its value and used as a
child directory name. Parsing a segment back uses the scalar parsing
rules for the expected key shape.
"""

from __future__ import annotations

from pathlib import Path

from codec.scalar_codec import TEXT_VALUE_TYPES, parse_scalar_text, scalar_text
from core.constants import FORBIDDEN_SEGMENT_CHARACTERS, RESERVED_PATH_SEGMENTS
from core.errors import TreeFsParseError, TreeFsUnsupportedTypeError
from core.shape_types import Shape, VariantShape
from core.value_types import UnitVariant, Value


def key_to_segment(key: Value) -> str:
    """Render a map key as a path segment.

    Args:
        key: Text-shaped scalar or unit variant key.

    Returns:
        Path segment text.

    Raises:
        TreeFsUnsupportedTypeError: If the key is not scalar-shaped or its
            text cannot be used as a single path segment.
    """
    if isinstance(key, UnitVariant):
        segment = key.name
    elif isinstance(key, TEXT_VALUE_TYPES):
        segment = scalar_text(key)
    else:
        raise TreeFsUnsupportedTypeError(
            f"Cannot use {type(key).__name__} as a map key; keys must reduce to scalar text."
        )
    return require_safe_segment(segment)


def parse_key(segment: str, shape: Shape, path: Path | None = None) -> Value:
    """Parse a directory entry name as a key of the expected shape.

    Args:
        segment: Directory entry name.
        shape: Expected key shape.
        path: Directory holding the entry, for error reporting.

    Returns:
        Parsed key value.

    Raises:
        TreeFsParseError: If the name does not parse as the key shape.
    """
    if isinstance(shape, VariantShape):
        variant_case = shape.case(segment)
        if variant_case is None or variant_case.kind != "unit":
            raise TreeFsParseError(
                f"Map key {segment!r} in {path} is not a unit case of variant {shape.name}.",
                path,
            )
        return UnitVariant(segment)
    return parse_scalar_text(segment, shape, path)


def require_safe_segment(segment: str) -> str:
    """Reject text that cannot name exactly one child below the current path.

    Raises:
        TreeFsUnsupportedTypeError: If the segment is empty, reserved, or
            contains a separator.
    """
    if not segment or segment in RESERVED_PATH_SEGMENTS:
        raise TreeFsUnsupportedTypeError(f"Cannot use {segment!r} as a path segment.")
    if any(character in segment for character in FORBIDDEN_SEGMENT_CHARACTERS):
        raise TreeFsUnsupportedTypeError(
            f"Cannot use {segment!r} as a path segment: it contains a separator or NUL."
        )
    return segment
