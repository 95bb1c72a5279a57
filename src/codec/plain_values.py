"""Conversion between value trees and plain JSON/YAML documents.

Variants use external tagging: a unit case is its name, a payload case
is a single-key object mapping the case name to its payload. Map keys
use their path-segment text form.
"""

from __future__ import annotations

from typing import Any, Mapping

from codec.key_codec import parse_key
from codec.scalar_codec import scalar_text
from core.errors import TreeFsParseError, TreeFsUnsupportedTypeError
from core.shape_types import (
    BoolShape,
    BytesShape,
    CharShape,
    FieldShape,
    FloatShape,
    IntegerShape,
    MapShape,
    OptionShape,
    RecordShape,
    SequenceShape,
    Shape,
    StringShape,
    TupleShape,
    UnitShape,
    VariantCase,
    VariantShape,
)
from core.value_types import (
    BoolValue,
    BytesValue,
    CharValue,
    FloatValue,
    IntegerValue,
    MapValue,
    NewtypeVariant,
    OptionValue,
    RecordValue,
    SequenceValue,
    StringValue,
    StructVariant,
    TupleValue,
    TupleVariant,
    UnitValue,
    UnitVariant,
    Value,
)


def value_to_plain(value: Value) -> Any:
    """Convert a value tree into plain JSON/YAML-compatible data.

    Args:
        value: Value tree.

    Returns:
        Nested dicts, lists, and scalars.

    Raises:
        TreeFsUnsupportedTypeError: If the object is not part of the value model.
    """
    if isinstance(value, (UnitValue, OptionValue)):
        inner = value.inner if isinstance(value, OptionValue) else None
        return None if inner is None else value_to_plain(inner)
    if isinstance(value, (BoolValue, IntegerValue, FloatValue, CharValue, StringValue)):
        return value.value
    if isinstance(value, BytesValue):
        return list(value.value)
    if isinstance(value, (SequenceValue, TupleValue)):
        return [value_to_plain(item) for item in value.items]
    if isinstance(value, MapValue):
        return {_key_text(key): value_to_plain(item) for key, item in value.entries}
    if isinstance(value, RecordValue):
        return {name: value_to_plain(item) for name, item in value.fields}
    if isinstance(value, UnitVariant):
        return value.name
    if isinstance(value, NewtypeVariant):
        return {value.name: value_to_plain(value.value)}
    if isinstance(value, TupleVariant):
        return {value.name: [value_to_plain(item) for item in value.items]}
    if isinstance(value, StructVariant):
        return {value.name: {name: value_to_plain(item) for name, item in value.fields}}
    raise TreeFsUnsupportedTypeError(f"Cannot convert {type(value).__name__}: not a treefs value.")


def plain_to_value(plain: Any, shape: Shape) -> Value:
    """Convert plain data into a value tree of the expected shape.

    Args:
        plain: Parsed JSON/YAML data.
        shape: Expected shape.

    Returns:
        Value tree.

    Raises:
        TreeFsParseError: If the data does not match the shape.
    """
    if isinstance(shape, OptionShape):
        return OptionValue(None if plain is None else plain_to_value(plain, shape.inner))
    if isinstance(shape, UnitShape):
        _expect(plain is None, plain, "null")
        return UnitValue()
    if isinstance(shape, BoolShape):
        _expect(isinstance(plain, bool), plain, "a boolean")
        return BoolValue(plain)
    if isinstance(shape, IntegerShape):
        return IntegerValue(_plain_integer(plain, shape))
    if isinstance(shape, FloatShape):
        _expect(_is_number(plain), plain, "a number")
        return FloatValue(float(plain))
    if isinstance(shape, CharShape):
        _expect(isinstance(plain, str) and len(plain) == 1, plain, "a single character")
        return CharValue(plain)
    if isinstance(shape, StringShape):
        _expect(isinstance(plain, str), plain, "a string")
        return StringValue(plain)
    if isinstance(shape, BytesShape):
        return BytesValue(_plain_bytes(plain))
    return _plain_to_composite(plain, shape)


def infer_value(plain: Any) -> Value:
    """Build a value tree from plain data without a shape.

    Objects become maps with string keys, lists become sequences, and
    null becomes an absent option.

    Raises:
        TreeFsUnsupportedTypeError: If the data holds an unsupported type.
    """
    if plain is None:
        return OptionValue(None)
    if isinstance(plain, bool):
        return BoolValue(plain)
    if isinstance(plain, int):
        return IntegerValue(plain)
    if isinstance(plain, float):
        return FloatValue(plain)
    if isinstance(plain, str):
        return StringValue(plain)
    if isinstance(plain, list):
        return SequenceValue(tuple(infer_value(item) for item in plain))
    if isinstance(plain, Mapping):
        return MapValue(
            tuple((StringValue(str(key)), infer_value(item)) for key, item in plain.items())
        )
    raise TreeFsUnsupportedTypeError(f"Cannot infer a value from {type(plain).__name__}.")


def _plain_to_composite(plain: Any, shape: Shape) -> Value:
    if isinstance(shape, SequenceShape):
        _expect(isinstance(plain, list), plain, "a list")
        return SequenceValue(tuple(plain_to_value(item, shape.element) for item in plain))
    if isinstance(shape, TupleShape):
        return TupleValue(_plain_items(plain, shape.elements))
    if isinstance(shape, MapShape):
        _expect(isinstance(plain, Mapping), plain, "an object")
        return MapValue(
            tuple(
                (parse_key(_plain_key_text(key), shape.key), plain_to_value(item, shape.value))
                for key, item in plain.items()
            )
        )
    if isinstance(shape, RecordShape):
        _expect(isinstance(plain, Mapping), plain, f"an object for record {shape.name}")
        return RecordValue(name=shape.name, fields=_plain_fields(plain, shape.fields))
    if isinstance(shape, VariantShape):
        return _plain_to_variant(plain, shape)
    raise TreeFsUnsupportedTypeError(f"Cannot convert plain data to {type(shape).__name__}.")


def _plain_to_variant(plain: Any, shape: VariantShape) -> Value:
    if isinstance(plain, str):
        _require_case(shape, plain, "unit")
        return UnitVariant(plain)
    _expect(
        isinstance(plain, Mapping) and len(plain) == 1,
        plain,
        f"a case name or single-key object for variant {shape.name}",
    )
    name, payload = next(iter(plain.items()))
    variant_case = _require_case(shape, str(name), None)
    if variant_case.kind == "unit":
        return UnitVariant(variant_case.name)
    if variant_case.kind == "newtype":
        if variant_case.payload is None:
            raise TreeFsParseError(f"Variant case {variant_case.name} declares no payload shape.")
        return NewtypeVariant(variant_case.name, plain_to_value(payload, variant_case.payload))
    if variant_case.kind == "tuple":
        return TupleVariant(variant_case.name, _plain_items(payload, variant_case.elements))
    _expect(isinstance(payload, Mapping), payload, f"an object for case {variant_case.name}")
    return StructVariant(variant_case.name, _plain_fields(payload, variant_case.fields))


def _require_case(shape: VariantShape, name: str, kind: str | None) -> VariantCase:
    variant_case = shape.case(name)
    if variant_case is None:
        raise TreeFsParseError(f"Unknown case {name!r} for variant {shape.name}.")
    if kind is not None and variant_case.kind != kind:
        raise TreeFsParseError(
            f"Case {name!r} of variant {shape.name} is a {variant_case.kind} case, "
            f"found a {kind} representation."
        )
    return variant_case


def _plain_items(plain: Any, elements: tuple[Shape, ...]) -> tuple[Value, ...]:
    _expect(
        isinstance(plain, list) and len(plain) == len(elements),
        plain,
        f"a list of {len(elements)} elements",
    )
    return tuple(plain_to_value(item, element) for item, element in zip(plain, elements))


def _plain_fields(
    plain: Mapping[str, Any], fields: tuple[FieldShape, ...]
) -> tuple[tuple[str, Value], ...]:
    decoded: list[tuple[str, Value]] = []
    for field in fields:
        if field.name not in plain and not isinstance(field.shape, OptionShape):
            raise TreeFsParseError(f"Missing field {field.name!r}.")
        decoded.append((field.name, plain_to_value(plain.get(field.name), field.shape)))
    return tuple(decoded)


def _plain_integer(plain: Any, shape: IntegerShape) -> int:
    _expect(isinstance(plain, int) and not isinstance(plain, bool), plain, "an integer")
    bounds = shape.bounds()
    if bounds is not None and not bounds[0] <= plain <= bounds[1]:
        raise TreeFsParseError(f"Integer {plain} does not fit the expected width.")
    return int(plain)


def _plain_bytes(plain: Any) -> bytes:
    _expect(isinstance(plain, list), plain, "a list of byte values")
    try:
        return bytes(plain)
    except (TypeError, ValueError) as error:
        raise TreeFsParseError(f"Invalid byte list: {error}.") from error


def _key_text(key: Value) -> str:
    return key.name if isinstance(key, UnitVariant) else scalar_text(key)


def _plain_key_text(key: Any) -> str:
    # YAML loads unquoted true/false keys as booleans.
    if isinstance(key, bool):
        return scalar_text(BoolValue(key))
    return str(key)


def _is_number(plain: Any) -> bool:
    if isinstance(plain, bool):
        return False
    return isinstance(plain, (int, float))


def _expect(condition: bool, plain: Any, expected: str) -> None:
    if not condition:
        raise TreeFsParseError(f"Expected {expected}, found {type(plain).__name__} {plain!r}.")
