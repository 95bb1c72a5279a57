"""Unit tests for value and shape builders."""

from __future__ import annotations

from core.shape_types import FieldShape, RecordShape, StringShape, struct_case
from core.value_types import RecordValue, StringValue, StructVariant


def test_record_builders_accept_field_called_name() -> None:
    """The type name is positional, so 'name' is usable as a field."""
    value = RecordValue.of("Person", name=StringValue("Ada"))
    shape = RecordShape.of("Person", name=StringShape())

    assert value.name == "Person"
    assert value.field("name") == StringValue("Ada")
    assert shape.fields == (FieldShape("name", StringShape()),)


def test_struct_variant_builders_accept_field_called_name() -> None:
    variant = StructVariant.of("Renamed", name=StringValue("new"))
    variant_case = struct_case("Renamed", name=StringShape())

    assert variant.fields == (("name", StringValue("new")),)
    assert variant_case.name == "Renamed"
    assert variant_case.fields == (FieldShape("name", StringShape()),)
