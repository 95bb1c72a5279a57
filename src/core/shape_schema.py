"""Typed shape-schema parsing.

This module loads YAML schema files describing the expected shape of a
tree, so the CLI can decode trees without Python-side type definitions.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, cast

from core.errors import TreeFsDependencyError, TreeFsSchemaError
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

SCALAR_SHAPES: dict[str, Shape] = {
    "unit": UnitShape(),
    "bool": BoolShape(),
    "integer": IntegerShape(bits=None),
    "i8": IntegerShape(bits=8),
    "i16": IntegerShape(bits=16),
    "i32": IntegerShape(bits=32),
    "i64": IntegerShape(bits=64),
    "i128": IntegerShape(bits=128),
    "u8": IntegerShape(bits=8, signed=False),
    "u16": IntegerShape(bits=16, signed=False),
    "u32": IntegerShape(bits=32, signed=False),
    "u64": IntegerShape(bits=64, signed=False),
    "u128": IntegerShape(bits=128, signed=False),
    "float": FloatShape(),
    "f32": FloatShape(bits=32),
    "f64": FloatShape(bits=64),
    "char": CharShape(),
    "string": StringShape(),
    "bytes": BytesShape(),
}
COMPOSITE_SHAPE_KEYS: dict[str, tuple[str, ...]] = {
    "option": ("inner",),
    "sequence": ("element",),
    "tuple": ("elements",),
    "map": ("key", "value"),
    "record": ("fields",),
    "variant": ("variants",),
}
OPTIONAL_SHAPE_KEYS = ("name",)


def load_shape_schema(schema_path: str) -> Shape:
    """Load and validate a YAML shape schema from disk.

    Args:
        schema_path: File path to the YAML schema.

    Returns:
        Parsed top-level shape.

    Raises:
        TreeFsDependencyError: If PyYAML is unavailable.
        TreeFsSchemaError: If the file is invalid or schema checks fail.
    """
    try:
        import yaml
    except ImportError as error:  # pragma: no cover - dependency failure
        raise TreeFsDependencyError(
            "YAML schema support requires PyYAML. Install with 'pip install pyyaml'."
        ) from error
    schema_file = Path(schema_path).expanduser().resolve()
    if not schema_file.exists():
        raise TreeFsSchemaError(
            f"Schema file does not exist at {schema_file}. Provide a valid YAML file path.",
            schema_file,
        )
    try:
        payload = cast(object, yaml.safe_load(schema_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise TreeFsSchemaError(
            f"Failed to read schema at {schema_file}: {error}. Check file permissions and retry.",
            schema_file,
        ) from error
    except yaml.YAMLError as error:
        raise TreeFsSchemaError(
            f"Failed to parse YAML schema at {schema_file}: {error}. Fix YAML syntax and retry.",
            schema_file,
        ) from error
    if payload is None:
        raise TreeFsSchemaError(f"Schema at {schema_file} is empty.", schema_file)
    return parse_shape(payload, "schema root")


def parse_shape(payload: object, context: str) -> Shape:
    """Parse one shape node.

    Args:
        payload: Scalar name or mapping with a 'type' key.
        context: Human-readable location used in error messages.

    Returns:
        Parsed shape.

    Raises:
        TreeFsSchemaError: If the node is invalid.
    """
    if isinstance(payload, str):
        if payload not in SCALAR_SHAPES:
            supported = ", ".join(SCALAR_SHAPES)
            raise TreeFsSchemaError(
                f"Unknown scalar type '{payload}' in {context}. Supported: {supported}."
            )
        return SCALAR_SHAPES[payload]
    mapping = _expect_mapping(payload, context)
    shape_type = mapping.get("type")
    if not isinstance(shape_type, str) or shape_type not in COMPOSITE_SHAPE_KEYS:
        if isinstance(shape_type, str) and shape_type in SCALAR_SHAPES:
            return parse_shape(shape_type, context)
        raise TreeFsSchemaError(
            f"Invalid {context}: 'type' must be a scalar name or one of "
            f"{', '.join(COMPOSITE_SHAPE_KEYS)}."
        )
    _validate_keys(mapping, shape_type, context)
    name = _optional_name(mapping, shape_type, context)
    if shape_type == "option":
        return OptionShape(parse_shape(_require(mapping, "inner", context), f"{context}.inner"))
    if shape_type == "sequence":
        element = parse_shape(_require(mapping, "element", context), f"{context}.element")
        return SequenceShape(element)
    if shape_type == "tuple":
        return TupleShape(_parse_elements(_require(mapping, "elements", context), context))
    if shape_type == "map":
        return MapShape(
            key=parse_shape(_require(mapping, "key", context), f"{context}.key"),
            value=parse_shape(_require(mapping, "value", context), f"{context}.value"),
        )
    if shape_type == "record":
        fields = _parse_fields(_require(mapping, "fields", context), context)
        return RecordShape(name=name, fields=fields)
    cases = _parse_cases(_require(mapping, "variants", context), context)
    return VariantShape(name=name, cases=cases)


def _parse_cases(payload: object, context: str) -> tuple[VariantCase, ...]:
    cases_mapping = _expect_mapping(payload, f"{context}.variants")
    cases: list[VariantCase] = []
    for case_name, case_payload in cases_mapping.items():
        case_context = f"{context}.variants.{case_name}"
        if case_payload is None or case_payload == "unit":
            cases.append(VariantCase(name=case_name))
            continue
        case_mapping = _expect_mapping(case_payload, case_context)
        if len(case_mapping) != 1:
            raise TreeFsSchemaError(
                f"Invalid {case_context}: expected exactly one of newtype, tuple, fields."
            )
        kind, body = next(iter(case_mapping.items()))
        if kind == "newtype":
            payload_shape = parse_shape(body, f"{case_context}.newtype")
            cases.append(VariantCase(name=case_name, kind="newtype", payload=payload_shape))
        elif kind == "tuple":
            elements = _parse_elements(body, case_context)
            cases.append(VariantCase(name=case_name, kind="tuple", elements=elements))
        elif kind == "fields":
            fields = _parse_fields(body, case_context)
            cases.append(VariantCase(name=case_name, kind="struct", fields=fields))
        else:
            raise TreeFsSchemaError(
                f"Invalid {case_context}: unknown payload kind '{kind}'. "
                "Use newtype, tuple, or fields."
            )
    return tuple(cases)


def _parse_fields(payload: object, context: str) -> tuple[FieldShape, ...]:
    fields_mapping = _expect_mapping(payload, f"{context}.fields")
    return tuple(
        FieldShape(name=field_name, shape=parse_shape(field_payload, f"{context}.{field_name}"))
        for field_name, field_payload in fields_mapping.items()
    )


def _parse_elements(payload: object, context: str) -> tuple[Shape, ...]:
    if not isinstance(payload, list):
        raise TreeFsSchemaError(f"Invalid {context}.elements: expected a list of shapes.")
    return tuple(
        parse_shape(element, f"{context}.elements[{index}]")
        for index, element in enumerate(payload)
    )


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        normalized_mapping = {}
        for key, payload in value.items():
            if not isinstance(key, str):
                raise TreeFsSchemaError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
            normalized_mapping[key] = payload
        return normalized_mapping
    raise TreeFsSchemaError(f"Invalid {context}: expected mapping, got {type(value).__name__}.")


def _validate_keys(mapping: Mapping[str, object], shape_type: str, context: str) -> None:
    allowed = {"type", *COMPOSITE_SHAPE_KEYS[shape_type], *OPTIONAL_SHAPE_KEYS}
    unknown = sorted(set(mapping) - allowed)
    if unknown:
        raise TreeFsSchemaError(
            f"Invalid {context}: unsupported keys for {shape_type}: {', '.join(unknown)}."
        )


def _require(mapping: Mapping[str, object], key: str, context: str) -> object:
    if key not in mapping:
        raise TreeFsSchemaError(f"Invalid {context}: missing required key '{key}'.")
    return mapping[key]


def _optional_name(mapping: Mapping[str, object], shape_type: str, context: str) -> str:
    name = mapping.get("name", shape_type)
    if not isinstance(name, str):
        raise TreeFsSchemaError(f"Invalid {context}.name: expected string.")
    return name
