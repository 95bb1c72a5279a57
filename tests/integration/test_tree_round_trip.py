"""Integration tests for encode/decode round trips on a real filesystem."""

from __future__ import annotations

import random
from pathlib import Path

from codec.tree_codec import TreeCodec
from core.config import TreeFsConfig
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
    Value,
)

_STATUS = VariantShape(
    name="Status",
    cases=(
        unit_case("Idle"),
        newtype_case("Busy", IntegerShape(bits=32, signed=False)),
        tuple_case("Moved", IntegerShape(bits=8), IntegerShape(bits=8)),
        struct_case("Failed", code=IntegerShape(bits=16), message=StringShape()),
    ),
)
_ROW_SHAPE = RecordShape.of(
    "Row",
    id=IntegerShape(bits=64, signed=False),
    ratio=FloatShape(),
    active=BoolShape(),
    initial=CharShape(),
    name=StringShape(),
    payload=BytesShape(),
    note=OptionShape(StringShape()),
    tags=SequenceShape(StringShape()),
    counts=MapShape(StringShape(), IntegerShape()),
    pair=TupleShape((IntegerShape(), StringShape())),
    status=_STATUS,
    json_extra=MapShape(StringShape(), SequenceShape(IntegerShape())),
)


def _random_text(rng: random.Random) -> str:
    alphabet = "abcdefghijklmnopqrstuvwxyz0123456789 -_äö€"
    return "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 12)))


def _random_key(rng: random.Random) -> str:
    return "k" + _random_text(rng).replace(" ", "_")


def _random_status(rng: random.Random) -> Value:
    choice = rng.randrange(4)
    if choice == 0:
        return UnitVariant("Idle")
    if choice == 1:
        return NewtypeVariant("Busy", IntegerValue(rng.randrange(2**32)))
    if choice == 2:
        return TupleVariant(
            "Moved", (IntegerValue(rng.randint(-128, 127)), IntegerValue(rng.randint(-128, 127)))
        )
    return StructVariant.of(
        "Failed",
        code=IntegerValue(rng.randint(-(2**15), 2**15 - 1)),
        message=StringValue(_random_text(rng)),
    )


def _random_row(rng: random.Random) -> RecordValue:
    note = OptionValue(StringValue(_random_text(rng))) if rng.random() < 0.5 else OptionValue()
    return RecordValue.of(
        "Row",
        id=IntegerValue(rng.randrange(2**64)),
        ratio=FloatValue(rng.uniform(-1e6, 1e6)),
        active=BoolValue(rng.random() < 0.5),
        initial=CharValue(rng.choice("xyzé")),
        name=StringValue(_random_text(rng)),
        payload=BytesValue(bytes(rng.randrange(256) for _ in range(rng.randint(0, 8)))),
        note=note,
        tags=SequenceValue(
            tuple(StringValue(_random_text(rng)) for _ in range(rng.randint(0, 4)))
        ),
        counts=MapValue.of(
            {StringValue(_random_key(rng)): IntegerValue(rng.randint(-99, 99)) for _ in range(3)}
        ),
        pair=TupleValue((IntegerValue(rng.randint(-5, 5)), StringValue(_random_text(rng)))),
        status=_random_status(rng),
        json_extra=MapValue.of(
            {
                StringValue(_random_key(rng)): SequenceValue(
                    tuple(IntegerValue(rng.randint(0, 9)) for _ in range(rng.randint(0, 3)))
                )
            }
        ),
    )


def _normalize(value: RecordValue) -> dict[str, object]:
    """Compare maps as sets; storage does not preserve entry order."""
    normalized: dict[str, object] = {}
    for name, item in value.fields:
        normalized[name] = item.as_dict() if isinstance(item, MapValue) else item
    return normalized


def test_random_records_round_trip(tmp_path: Path) -> None:
    """Decoding an encoded record should reproduce it exactly."""
    rng = random.Random(20201203)
    codec = TreeCodec(TreeFsConfig())
    for index in range(25):
        root = tmp_path / f"row-{index}"
        value = _random_row(rng)

        codec.encode(value, root)
        decoded = codec.decode(root, _ROW_SHAPE)

        assert isinstance(decoded, RecordValue)
        assert _normalize(decoded) == _normalize(value)


def test_yearly_input_tree_round_trip(tmp_path: Path) -> None:
    """Nested integer-keyed maps should round trip through directory names."""
    shape = MapShape(
        StringShape(),
        MapShape(
            IntegerShape(bits=16),
            MapShape(IntegerShape(bits=8), MapShape(StringShape(), StringShape())),
        ),
    )
    days = MapValue.of(
        {
            IntegerValue(day): MapValue.of({StringValue("input"): StringValue(f"day {day}")})
            for day in (1, 2, 3)
        }
    )
    value = MapValue.of({StringValue("years"): MapValue.of({IntegerValue(2020): days})})
    codec = TreeCodec(TreeFsConfig())

    codec.encode(value, tmp_path)
    decoded = codec.decode(tmp_path, shape)

    assert (tmp_path / "years" / "2020" / "3" / "input").read_text(encoding="utf-8") == "day 3"
    assert isinstance(decoded, MapValue)
    years = decoded.as_dict()[StringValue("years")]
    assert isinstance(years, MapValue)
    decoded_days = years.as_dict()[IntegerValue(2020)]
    assert isinstance(decoded_days, MapValue)
    assert decoded_days.as_dict() == days.as_dict()


def test_encode_over_existing_tree_keeps_stale_entries(tmp_path: Path) -> None:
    """Re-encoding never deletes, so shorter sequences leave old indices behind."""
    codec = TreeCodec(TreeFsConfig())
    shape = RecordShape.of("Row", tags=SequenceShape(StringShape()))
    codec.encode(
        RecordValue.of("Row", tags=SequenceValue((StringValue("a"), StringValue("b")))), tmp_path
    )

    codec.encode(RecordValue.of("Row", tags=SequenceValue((StringValue("z"),))), tmp_path)

    assert codec.decode(tmp_path, shape) == RecordValue.of(
        "Row", tags=SequenceValue((StringValue("z"), StringValue("b")))
    )
