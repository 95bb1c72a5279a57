"""Public SDK surface for treefs.

This module provides a stable import path for library users.
It re-exports the codec entry points, value and shape models, and errors.
"""

from __future__ import annotations

from codec.plain_values import infer_value, plain_to_value, value_to_plain
from codec.tree_codec import TreeCodec, from_fs, to_fs
from codec.tree_storage import LocalTreeStorage, TreeStorage
from core.config import TreeFsConfig
from core.errors import (
    TreeFsConfigError,
    TreeFsContractViolationError,
    TreeFsDependencyError,
    TreeFsEmptyDirectoryError,
    TreeFsEmptyFileError,
    TreeFsError,
    TreeFsInvalidBoolError,
    TreeFsInvalidUnicodeError,
    TreeFsIOError,
    TreeFsParseError,
    TreeFsSchemaError,
    TreeFsSymlinkError,
    TreeFsUnsupportedAtRootError,
    TreeFsUnsupportedTypeError,
)
from core.shape_schema import load_shape_schema
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
    UnitShape,
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
    UnitValue,
    UnitVariant,
)

__all__ = [
    "BoolShape",
    "BoolValue",
    "BytesShape",
    "BytesValue",
    "CharShape",
    "CharValue",
    "FloatShape",
    "FloatValue",
    "IntegerShape",
    "IntegerValue",
    "LocalTreeStorage",
    "MapShape",
    "MapValue",
    "NewtypeVariant",
    "OptionShape",
    "OptionValue",
    "RecordShape",
    "RecordValue",
    "SequenceShape",
    "SequenceValue",
    "StringShape",
    "StringValue",
    "StructVariant",
    "TreeCodec",
    "TreeFsConfig",
    "TreeFsConfigError",
    "TreeFsContractViolationError",
    "TreeFsDependencyError",
    "TreeFsEmptyDirectoryError",
    "TreeFsEmptyFileError",
    "TreeFsError",
    "TreeFsIOError",
    "TreeFsInvalidBoolError",
    "TreeFsInvalidUnicodeError",
    "TreeFsParseError",
    "TreeFsSchemaError",
    "TreeFsSymlinkError",
    "TreeFsUnsupportedAtRootError",
    "TreeFsUnsupportedTypeError",
    "TreeStorage",
    "TupleShape",
    "TupleValue",
    "TupleVariant",
    "UnitShape",
    "UnitValue",
    "UnitVariant",
    "VariantShape",
    "from_fs",
    "infer_value",
    "load_shape_schema",
    "newtype_case",
    "plain_to_value",
    "struct_case",
    "to_fs",
    "tuple_case",
    "unit_case",
    "value_to_plain",
]
