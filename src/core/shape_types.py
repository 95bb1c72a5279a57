"""Expected-shape descriptors for decoding.

Storage alone cannot tell a map from a record or an integer from a
string, so every decode call is told the shape it should produce.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

VariantKind = Literal["unit", "newtype", "tuple", "struct"]


@dataclass(frozen=True)
class UnitShape:
    pass


@dataclass(frozen=True)
class BoolShape:
    pass


@dataclass(frozen=True)
class IntegerShape:
    """Integer target type.

    Attributes:
        bits: Width used for range checks, or None for unbounded.
        signed: Whether negative values are allowed.
    """

    bits: int | None = 64
    signed: bool = True

    def bounds(self) -> tuple[int, int] | None:
        """Return inclusive (min, max) bounds, or None when unbounded."""
        if self.bits is None:
            return None
        if self.signed:
            return -(1 << (self.bits - 1)), (1 << (self.bits - 1)) - 1
        return 0, (1 << self.bits) - 1


@dataclass(frozen=True)
class FloatShape:
    bits: int = 64


@dataclass(frozen=True)
class CharShape:
    pass


@dataclass(frozen=True)
class StringShape:
    pass


@dataclass(frozen=True)
class BytesShape:
    pass


@dataclass(frozen=True)
class OptionShape:
    inner: Shape


@dataclass(frozen=True)
class SequenceShape:
    element: Shape


@dataclass(frozen=True)
class TupleShape:
    elements: tuple[Shape, ...]


@dataclass(frozen=True)
class MapShape:
    key: Shape
    value: Shape


@dataclass(frozen=True)
class FieldShape:
    name: str
    shape: Shape


@dataclass(frozen=True)
class RecordShape:
    """Record with field names known ahead of time."""

    name: str
    fields: tuple[FieldShape, ...]

    @classmethod
    def of(cls, name: str, /, **fields: Shape) -> "RecordShape":
        """Build a record shape from keyword field shapes."""
        return cls(
            name=name,
            fields=tuple(FieldShape(name=key, shape=value) for key, value in fields.items()),
        )


@dataclass(frozen=True)
class VariantCase:
    """One case of a tagged variant.

    Attributes:
        name: Case name, used as file content or path segment.
        kind: Payload form of the case.
        payload: Payload shape for newtype cases.
        elements: Element shapes for tuple cases.
        fields: Field shapes for struct cases.
    """

    name: str
    kind: VariantKind = "unit"
    payload: Shape | None = None
    elements: tuple[Shape, ...] = ()
    fields: tuple[FieldShape, ...] = ()


@dataclass(frozen=True)
class VariantShape:
    name: str
    cases: tuple[VariantCase, ...]

    def case(self, case_name: str) -> VariantCase | None:
        """Return the case with the given name, if declared."""
        for variant_case in self.cases:
            if variant_case.name == case_name:
                return variant_case
        return None


Shape = Union[
    UnitShape,
    BoolShape,
    IntegerShape,
    FloatShape,
    CharShape,
    StringShape,
    BytesShape,
    OptionShape,
    SequenceShape,
    TupleShape,
    MapShape,
    RecordShape,
    VariantShape,
]


def unit_case(name: str) -> VariantCase:
    return VariantCase(name=name)


def newtype_case(name: str, payload: Shape) -> VariantCase:
    return VariantCase(name=name, kind="newtype", payload=payload)


def tuple_case(name: str, *elements: Shape) -> VariantCase:
    return VariantCase(name=name, kind="tuple", elements=elements)


def struct_case(name: str, /, **fields: Shape) -> VariantCase:
    return VariantCase(
        name=name,
        kind="struct",
        fields=tuple(FieldShape(name=key, shape=value) for key, value in fields.items()),
    )
