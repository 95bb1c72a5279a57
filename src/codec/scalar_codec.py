"""Scalar leaf encoding.

Scalars are stored as raw file content: booleans as 'true'/'false',
numbers as decimal text, chars and strings as UTF-8, bytes verbatim.
The text half of this module is shared with map-key encoding so that
keys and leaves parse by the same rules.
"""

from __future__ import annotations

import math
import re
import struct
from pathlib import Path

from core.constants import FALSE_TEXT, TEXT_ENCODING, TRUE_TEXT
from core.errors import (
    TreeFsEmptyFileError,
    TreeFsInvalidBoolError,
    TreeFsInvalidUnicodeError,
    TreeFsParseError,
    TreeFsUnsupportedTypeError,
)
from core.shape_types import (
    BoolShape,
    BytesShape,
    CharShape,
    FloatShape,
    IntegerShape,
    Shape,
    StringShape,
    UnitShape,
)
from core.value_types import (
    BoolValue,
    BytesValue,
    CharValue,
    FloatValue,
    IntegerValue,
    ScalarValue,
    StringValue,
    UnitValue,
    Value,
)

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

SCALAR_SHAPE_TYPES = (
    UnitShape,
    BoolShape,
    IntegerShape,
    FloatShape,
    CharShape,
    StringShape,
    BytesShape,
)
TEXT_VALUE_TYPES = (BoolValue, IntegerValue, FloatValue, CharValue, StringValue)


def encode_scalar(value: ScalarValue) -> bytes:
    """Encode one scalar value into file content.

    Args:
        value: Scalar value.

    Returns:
        Raw bytes to store in the leaf file.

    Raises:
        TreeFsUnsupportedTypeError: If the value is not a scalar.
    """
    if isinstance(value, UnitValue):
        return b""
    if isinstance(value, BytesValue):
        return bytes(value.value)
    return scalar_text(value).encode(TEXT_ENCODING)


def scalar_text(value: Value) -> str:
    """Render a text-shaped scalar.

    Args:
        value: Bool, integer, float, char, or string value.

    Returns:
        Canonical text form.

    Raises:
        TreeFsUnsupportedTypeError: If the value has no text form.
    """
    if isinstance(value, BoolValue):
        return TRUE_TEXT if value.value else FALSE_TEXT
    if isinstance(value, IntegerValue):
        try:
            return str(int(value.value))
        except ValueError as error:
            raise TreeFsUnsupportedTypeError(
                f"Cannot encode integer as text: {error}."
            ) from error
    if isinstance(value, FloatValue):
        return repr(float(value.value))
    if isinstance(value, CharValue):
        if len(value.value) != 1:
            raise TreeFsUnsupportedTypeError(
                f"Cannot encode char {value.value!r}: expected exactly one character."
            )
        return value.value
    if isinstance(value, StringValue):
        return value.value
    raise TreeFsUnsupportedTypeError(f"Cannot encode {type(value).__name__} as scalar text.")


def decode_scalar(data: bytes, shape: Shape, path: Path | None = None) -> ScalarValue:
    """Decode file content into a scalar of the expected shape.

    Args:
        data: Raw file content.
        shape: Expected scalar shape.
        path: Location the content was read from, for error reporting.

    Returns:
        Decoded scalar value.

    Raises:
        TreeFsInvalidUnicodeError: If text content is not valid UTF-8.
        TreeFsParseError: If text does not parse as the expected shape.
    """
    if isinstance(shape, UnitShape):
        return UnitValue()
    if isinstance(shape, BytesShape):
        return BytesValue(data)
    return parse_scalar_text(_decode_text(data, path), shape, path)


def parse_scalar_text(text: str, shape: Shape, path: Path | None = None) -> ScalarValue:
    """Parse text into a scalar of the expected shape.

    Raises:
        TreeFsInvalidBoolError: If a bool is neither 'true' nor 'false'.
        TreeFsEmptyFileError: If a char is parsed from empty text.
        TreeFsParseError: If a number does not parse or fit.
        TreeFsUnsupportedTypeError: If the shape is not text-shaped.
    """
    if isinstance(shape, BoolShape):
        return BoolValue(parse_bool(text, path))
    if isinstance(shape, IntegerShape):
        return IntegerValue(parse_integer(text, shape, path))
    if isinstance(shape, FloatShape):
        return FloatValue(parse_float(text, shape, path))
    if isinstance(shape, CharShape):
        return CharValue(parse_char(text, path))
    if isinstance(shape, StringShape):
        return StringValue(text)
    if isinstance(shape, UnitShape):
        return UnitValue()
    raise TreeFsUnsupportedTypeError(
        f"Cannot parse scalar text as {type(shape).__name__}.", path
    )


def parse_bool(text: str, path: Path | None = None) -> bool:
    if text == TRUE_TEXT:
        return True
    if text == FALSE_TEXT:
        return False
    raise TreeFsInvalidBoolError(
        f"Invalid bool {text!r}{_location(path)}: expected '{TRUE_TEXT}' or '{FALSE_TEXT}'.",
        path,
    )


def parse_integer(text: str, shape: IntegerShape, path: Path | None = None) -> int:
    """Parse decimal text and check it fits the target width."""
    if _INTEGER_PATTERN.fullmatch(text) is None:
        raise TreeFsParseError(f"Invalid integer {text!r}{_location(path)}.", path)
    try:
        parsed = int(text)
    except ValueError as error:
        raise TreeFsParseError(
            f"Integer with {len(text)} characters{_location(path)} cannot be converted: {error}.",
            path,
        ) from error
    bounds = shape.bounds()
    if bounds is not None and not bounds[0] <= parsed <= bounds[1]:
        kind = "i" if shape.signed else "u"
        raise TreeFsParseError(
            f"Integer {text!r}{_location(path)} does not fit {kind}{shape.bits}.", path
        )
    return parsed


def parse_float(text: str, shape: FloatShape, path: Path | None = None) -> float:
    """Parse display-formatted float text.

    Single-precision targets are rounded through a 32-bit float; text out
    of f32 range becomes a signed infinity.
    """
    try:
        parsed = float(text)
    except ValueError as error:
        raise TreeFsParseError(f"Invalid float {text!r}{_location(path)}.", path) from error
    if shape.bits == 32:
        try:
            return struct.unpack("f", struct.pack("f", parsed))[0]
        except OverflowError:
            return math.copysign(math.inf, parsed)
    return parsed


def parse_char(text: str, path: Path | None = None) -> str:
    # Trailing characters are ignored.
    if not text:
        raise TreeFsEmptyFileError(
            f"Cannot decode a char from empty content{_location(path)}.", path
        )
    return text[0]


def _decode_text(data: bytes, path: Path | None) -> str:
    try:
        return data.decode(TEXT_ENCODING)
    except UnicodeDecodeError as error:
        raise TreeFsInvalidUnicodeError(
            f"Content{_location(path)} is not valid UTF-8.", path
        ) from error


def _location(path: Path | None) -> str:
    return f" at {path}" if path is not None else ""
