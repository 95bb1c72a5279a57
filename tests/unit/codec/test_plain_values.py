"""Unit tests for plain document conversion."""

from __future__ import annotations

import pytest

from codec.plain_values import infer_value, plain_to_value, value_to_plain
from core.errors import TreeFsParseError, TreeFsUnsupportedTypeError
from core.shape_types import (
    BoolShape,
    BytesShape,
    CharShape,
    FloatShape,
    IntegerShape,
    MapShape,
    OptionShape,
    RecordShape,
    SequenceShape,
    StringShape,
    TupleShape,
    VariantShape,
    newtype_case,
    struct_case,
    tuple_case,
    unit_case,
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
    UnitVariant,
)

_EVENT = VariantShape(
    name="Event",
    cases=(
        unit_case("Started"),
        newtype_case("Progress", IntegerShape(bits=8, signed=False)),
        tuple_case("Moved", IntegerShape(), IntegerShape()),
        struct_case("Failed", reason=StringShape()),
    ),
)


def test_value_to_plain_uses_external_tagging() -> None:
    """Unit cases become names and payload cases single-key objects."""
    assert value_to_plain(UnitVariant("Started")) == "Started"
    assert value_to_plain(NewtypeVariant("Progress", IntegerValue(5))) == {"Progress": 5}
    assert value_to_plain(TupleVariant("Moved", (IntegerValue(1), IntegerValue(2)))) == {
        "Moved": [1, 2]
    }
    assert value_to_plain(StructVariant.of("Failed", reason=StringValue("x"))) == {
        "Failed": {"reason": "x"}
    }


def test_value_to_plain_converts_composites() -> None:
    value = RecordValue.of(
        "Row",
        id=IntegerValue(1),
        tags=SequenceValue((StringValue("a"),)),
        counts=MapValue.of({IntegerValue(3): FloatValue(0.5)}),
        note=OptionValue(None),
        raw=BytesValue(b"\x01\x02"),
        pair=TupleValue((BoolValue(True), CharValue("c"))),
    )

    assert value_to_plain(value) == {
        "id": 1,
        "tags": ["a"],
        "counts": {"3": 0.5},
        "note": None,
        "raw": [1, 2],
        "pair": [True, "c"],
    }


def test_plain_to_value_builds_variants() -> None:
    assert plain_to_value("Started", _EVENT) == UnitVariant("Started")
    assert plain_to_value({"Progress": 9}, _EVENT) == NewtypeVariant("Progress", IntegerValue(9))
    assert plain_to_value({"Moved": [1, -1]}, _EVENT) == TupleVariant(
        "Moved", (IntegerValue(1), IntegerValue(-1))
    )
    assert plain_to_value({"Failed": {"reason": "disk"}}, _EVENT) == StructVariant.of(
        "Failed", reason=StringValue("disk")
    )


def test_plain_to_value_rejects_unknown_case() -> None:
    with pytest.raises(TreeFsParseError, match="Unknown case"):
        plain_to_value("Stopped", _EVENT)


def test_plain_to_value_rejects_payload_case_as_name() -> None:
    with pytest.raises(TreeFsParseError):
        plain_to_value("Progress", _EVENT)


def test_plain_to_value_builds_record_with_missing_option() -> None:
    """Absent option fields decode as None; other fields are required."""
    shape = RecordShape.of("Row", id=IntegerShape(), note=OptionShape(StringShape()))

    assert plain_to_value({"id": 4}, shape) == RecordValue.of(
        "Row", id=IntegerValue(4), note=OptionValue(None)
    )
    with pytest.raises(TreeFsParseError, match="Missing field 'id'"):
        plain_to_value({}, shape)


def test_plain_to_value_parses_map_keys_with_key_shape() -> None:
    shape = MapShape(key=IntegerShape(), value=BoolShape())

    assert plain_to_value({"7": True}, shape) == MapValue(((IntegerValue(7), BoolValue(True)),))


def test_plain_to_value_converts_yaml_bool_keys() -> None:
    shape = MapShape(key=BoolShape(), value=StringShape())

    value = plain_to_value({True: "yes"}, shape)

    assert value == MapValue(((BoolValue(True), StringValue("yes")),))


def test_plain_to_value_checks_scalar_types() -> None:
    with pytest.raises(TreeFsParseError):
        plain_to_value(True, IntegerShape())
    with pytest.raises(TreeFsParseError):
        plain_to_value(300, IntegerShape(bits=8, signed=False))
    with pytest.raises(TreeFsParseError):
        plain_to_value("ab", CharShape())
    with pytest.raises(TreeFsParseError):
        plain_to_value([1, 2], TupleShape((IntegerShape(),)))
    with pytest.raises(TreeFsParseError):
        plain_to_value([256], BytesShape())


def test_plain_to_value_accepts_integer_for_float() -> None:
    assert plain_to_value(2, FloatShape()) == FloatValue(2.0)
    assert plain_to_value([1, 2], SequenceShape(IntegerShape())) == SequenceValue(
        (IntegerValue(1), IntegerValue(2))
    )


def test_infer_value_builds_string_keyed_maps() -> None:
    """Plain documents infer maps, sequences, and scalars."""
    value = infer_value({"a": [1, 2.5, "x", True, None]})

    assert value == MapValue(
        (
            (
                StringValue("a"),
                SequenceValue(
                    (
                        IntegerValue(1),
                        FloatValue(2.5),
                        StringValue("x"),
                        BoolValue(True),
                        OptionValue(None),
                    )
                ),
            ),
        )
    )


def test_infer_value_rejects_unknown_types() -> None:
    with pytest.raises(TreeFsUnsupportedTypeError):
        infer_value({1, 2})
