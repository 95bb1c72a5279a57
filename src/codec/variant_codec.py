"""Tagged-variant location and case resolution.

A unit case is written as its name in a file at the current path. A
payload case is written beneath a child directory named after the case.
On decode the representation is discovered from storage:

1. A regular file at the current path holds the name of a unit case.
2. A directory holds the payload case; the first entry listed by storage
   is taken as the case name.

Step 2 only works when the directory contains nothing but that one
case. A sibling entry at the same level may be picked instead, since
listing order is unspecified. Callers must not store other entries next
to a payload-bearing variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from codec.path_cursor import PathCursor
from core.errors import TreeFsParseError
from core.shape_types import VariantCase, VariantShape


@dataclass(frozen=True)
class VariantLocation:
    """Discovered variant representation.

    Attributes:
        case_name: Name of the stored case.
        inline: True when the case was read from file content (unit case),
            False when it was found as a directory entry.
    """

    case_name: str
    inline: bool


def locate_variant(cursor: PathCursor) -> VariantLocation:
    """Discover which case is stored at the cursor location.

    Args:
        cursor: Cursor positioned at the variant's location.

    Returns:
        Case name and whether it was stored inline.

    Raises:
        TreeFsSymlinkError: If the location is a symlink.
        TreeFsIOError: If nothing exists at the location.
        TreeFsEmptyDirectoryError: If the location is an empty directory.
    """
    metadata = cursor.require_exists()
    if metadata.is_file:
        return VariantLocation(case_name=cursor.read_text(), inline=True)
    return VariantLocation(case_name=cursor.first_entry(), inline=False)


def resolve_case(shape: VariantShape, location: VariantLocation, path: Path) -> VariantCase:
    """Match a discovered case name against the declared cases.

    Args:
        shape: Expected variant shape.
        location: Discovered representation.
        path: Variant location, for error reporting.

    Returns:
        Declared case.

    Raises:
        TreeFsParseError: If the case is unknown, or a payload case was
            stored inline as a file.
    """
    variant_case = shape.case(location.case_name)
    if variant_case is None:
        declared = ", ".join(case.name for case in shape.cases)
        raise TreeFsParseError(
            f"Unknown case {location.case_name!r} for variant {shape.name} at {path}; "
            f"expected one of: {declared}.",
            path,
        )
    if location.inline and variant_case.kind != "unit":
        raise TreeFsParseError(
            f"Case {variant_case.name!r} of variant {shape.name} at {path} carries a "
            f"{variant_case.kind} payload but was stored as a file.",
            path,
        )
    return variant_case
