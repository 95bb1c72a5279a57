"""Abstract value tree model.

This module defines the immutable value shapes the codec encodes and
decodes. Each composite exclusively owns its children, so a value is
always a tree and never a graph.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Union


@dataclass(frozen=True)
class UnitValue:
    """Anonymous value carrying no data."""


@dataclass(frozen=True)
class BoolValue:
    value: bool


@dataclass(frozen=True)
class IntegerValue:
    """Integer of any width, stored as decimal text."""

    value: int


@dataclass(frozen=True)
class FloatValue:
    value: float


@dataclass(frozen=True)
class CharValue:
    """A single Unicode scalar value."""

    value: str


@dataclass(frozen=True)
class StringValue:
    value: str


@dataclass(frozen=True)
class BytesValue:
    value: bytes


@dataclass(frozen=True)
class OptionValue:
    """Optional value; ``inner`` is None for the absent case."""

    inner: Value | None = None


@dataclass(frozen=True)
class SequenceValue:
    """Ordered sequence whose length is implicit on disk."""

    items: tuple[Value, ...] = ()


@dataclass(frozen=True)
class TupleValue:
    """Fixed-size heterogeneous tuple."""

    items: tuple[Value, ...] = ()


@dataclass(frozen=True)
class MapValue:
    """Map from scalar-shaped keys to values.

    Attributes:
        entries: Key/value pairs in iteration order. Order is not
            preserved across a round trip.
    """

    entries: tuple[tuple[Value, Value], ...] = ()

    @classmethod
    def of(cls, mapping: Mapping[Value, Value]) -> "MapValue":
        """Build a map value from a mapping of values."""
        return cls(entries=tuple(mapping.items()))

    def as_dict(self) -> dict[Value, Value]:
        """Return entries as a dict for order-independent comparison."""
        return dict(self.entries)


@dataclass(frozen=True)
class RecordValue:
    """Named-field record.

    Attributes:
        name: Record type name.
        fields: Ordered (field name, value) pairs.
    """

    name: str
    fields: tuple[tuple[str, Value], ...] = ()

    @classmethod
    def of(cls, name: str, /, **fields: Value) -> "RecordValue":
        """Build a record from keyword fields, keeping declaration order."""
        return cls(name=name, fields=tuple(fields.items()))

    def field(self, field_name: str) -> Value:
        """Return one field value by name.

        Raises:
            KeyError: If the record has no such field.
        """
        for name, value in self.fields:
            if name == field_name:
                return value
        raise KeyError(field_name)


@dataclass(frozen=True)
class UnitVariant:
    """Variant without payload, stored as its name at the current path."""

    name: str


@dataclass(frozen=True)
class NewtypeVariant:
    name: str
    value: Value


@dataclass(frozen=True)
class TupleVariant:
    name: str
    items: tuple[Value, ...] = ()


@dataclass(frozen=True)
class StructVariant:
    name: str
    fields: tuple[tuple[str, Value], ...] = ()

    @classmethod
    def of(cls, name: str, /, **fields: Value) -> "StructVariant":
        """Build a struct variant from keyword fields."""
        return cls(name=name, fields=tuple(fields.items()))


VariantValue = Union[UnitVariant, NewtypeVariant, TupleVariant, StructVariant]
ScalarValue = Union[
    UnitValue,
    BoolValue,
    IntegerValue,
    FloatValue,
    CharValue,
    StringValue,
    BytesValue,
]
Value = Union[
    ScalarValue,
    OptionValue,
    SequenceValue,
    TupleValue,
    MapValue,
    RecordValue,
    VariantValue,
]
