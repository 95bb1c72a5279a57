"""Traversal boundary between value trees and serializers.

A serializer exposes one callback per value shape. ``walk_value`` drives
any serializer from a value tree, so encoders can be exercised either
from values or by calling the callbacks directly.
"""

from __future__ import annotations

from typing import Protocol

from core.errors import TreeFsUnsupportedTypeError
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


class ValueSerializer(Protocol):
    """Callbacks a traversal drives while walking a value tree."""

    def serialize_unit(self) -> None: ...

    def serialize_bool(self, value: bool) -> None: ...

    def serialize_integer(self, value: int) -> None: ...

    def serialize_float(self, value: float) -> None: ...

    def serialize_char(self, value: str) -> None: ...

    def serialize_string(self, value: str) -> None: ...

    def serialize_bytes(self, value: bytes) -> None: ...

    def serialize_none(self) -> None: ...

    def serialize_some(self, inner: Value) -> None: ...

    def begin_sequence(self, length: int | None) -> None: ...

    def serialize_element(self, value: Value) -> None: ...

    def end_sequence(self) -> None: ...

    def begin_map(self, length: int | None) -> None: ...

    def serialize_entry(self, key: Value, value: Value) -> None: ...

    def end_map(self) -> None: ...

    def begin_record(self, name: str, length: int) -> None: ...

    def serialize_field(self, name: str, value: Value) -> None: ...

    def end_record(self) -> None: ...

    def serialize_unit_variant(self, name: str) -> None: ...

    def serialize_newtype_variant(self, name: str, value: Value) -> None: ...

    def begin_tuple_variant(self, name: str, length: int) -> None: ...

    def end_tuple_variant(self) -> None: ...

    def begin_struct_variant(self, name: str, length: int) -> None: ...

    def end_struct_variant(self) -> None: ...


def walk_value(value: Value, serializer: ValueSerializer) -> None:
    """Drive ``serializer`` callbacks for one value tree.

    Args:
        value: Value to traverse.
        serializer: Callback target.

    Raises:
        TreeFsUnsupportedTypeError: If the object is not part of the value model.
    """
    if isinstance(value, UnitValue):
        serializer.serialize_unit()
    elif isinstance(value, BoolValue):
        serializer.serialize_bool(value.value)
    elif isinstance(value, IntegerValue):
        serializer.serialize_integer(value.value)
    elif isinstance(value, FloatValue):
        serializer.serialize_float(value.value)
    elif isinstance(value, CharValue):
        serializer.serialize_char(value.value)
    elif isinstance(value, StringValue):
        serializer.serialize_string(value.value)
    elif isinstance(value, BytesValue):
        serializer.serialize_bytes(value.value)
    elif isinstance(value, OptionValue):
        if value.inner is None:
            serializer.serialize_none()
        else:
            serializer.serialize_some(value.inner)
    elif isinstance(value, (SequenceValue, TupleValue)):
        serializer.begin_sequence(len(value.items))
        for item in value.items:
            serializer.serialize_element(item)
        serializer.end_sequence()
    elif isinstance(value, MapValue):
        serializer.begin_map(len(value.entries))
        for key, item in value.entries:
            serializer.serialize_entry(key, item)
        serializer.end_map()
    elif isinstance(value, RecordValue):
        serializer.begin_record(value.name, len(value.fields))
        for name, item in value.fields:
            serializer.serialize_field(name, item)
        serializer.end_record()
    else:
        _walk_variant(value, serializer)


def _walk_variant(value: object, serializer: ValueSerializer) -> None:
    if isinstance(value, UnitVariant):
        serializer.serialize_unit_variant(value.name)
    elif isinstance(value, NewtypeVariant):
        serializer.serialize_newtype_variant(value.name, value.value)
    elif isinstance(value, TupleVariant):
        serializer.begin_tuple_variant(value.name, len(value.items))
        for item in value.items:
            serializer.serialize_element(item)
        serializer.end_tuple_variant()
    elif isinstance(value, StructVariant):
        serializer.begin_struct_variant(value.name, len(value.fields))
        for name, item in value.fields:
            serializer.serialize_field(name, item)
        serializer.end_struct_variant()
    else:
        raise TreeFsUnsupportedTypeError(
            f"Cannot encode {type(value).__name__}: not a treefs value."
        )
