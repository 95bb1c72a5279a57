"""Directory tree to value tree decoding.

Decoding is driven by the expected shape. Sequences read consecutive
indices until the first missing one, records read their declared
fields, maps enumerate directory entries, and variants are discovered
from what storage holds at the current location.
"""

from __future__ import annotations

from codec.key_codec import parse_key
from codec.path_cursor import PathCursor
from codec.scalar_codec import SCALAR_SHAPE_TYPES, decode_scalar
from codec.subdocument import CodecMode, SubdocumentCodec, child_mode
from codec.tree_storage import PathMetadata
from codec.variant_codec import locate_variant, resolve_case
from core.errors import TreeFsIOError, TreeFsParseError, TreeFsUnsupportedTypeError
from core.shape_types import (
    FieldShape,
    MapShape,
    OptionShape,
    RecordShape,
    SequenceShape,
    Shape,
    TupleShape,
    UnitShape,
    VariantCase,
    VariantShape,
)
from core.value_types import (
    MapValue,
    NewtypeVariant,
    OptionValue,
    RecordValue,
    SequenceValue,
    StructVariant,
    TupleValue,
    TupleVariant,
    UnitValue,
    UnitVariant,
    Value,
)


class TreeDecoder:
    """Shape-directed reader over a ``PathCursor``."""

    def __init__(
        self,
        cursor: PathCursor,
        subdocument_codec: SubdocumentCodec,
        subdocument_prefix: str,
    ) -> None:
        self._cursor = cursor
        self._subdocument_codec = subdocument_codec
        self._subdocument_prefix = subdocument_prefix

    def decode(self, shape: Shape) -> Value:
        """Decode the value at the current cursor location."""
        return self._decode(shape, CodecMode.TREE)

    def _decode(self, shape: Shape, mode: CodecMode) -> Value:
        if isinstance(shape, OptionShape) and not self._cursor.exists():
            return OptionValue(None)
        if mode is CodecMode.SUBDOCUMENT:
            return self._decode_subdocument(shape)
        if isinstance(shape, OptionShape):
            return OptionValue(self._decode(shape.inner, mode))
        if isinstance(shape, UnitShape):
            self._cursor.metadata()
            return UnitValue()
        if isinstance(shape, SCALAR_SHAPE_TYPES):
            data = self._cursor.read_bytes()
            return decode_scalar(data, shape, self._cursor.current_path)
        if isinstance(shape, SequenceShape):
            return SequenceValue(self._decode_sequence(shape.element))
        if isinstance(shape, TupleShape):
            return TupleValue(self._decode_elements(shape.elements))
        if isinstance(shape, MapShape):
            return self._decode_map(shape)
        if isinstance(shape, RecordShape):
            return RecordValue(name=shape.name, fields=self._decode_fields(shape.fields))
        if isinstance(shape, VariantShape):
            return self._decode_variant(shape)
        raise TreeFsUnsupportedTypeError(
            f"Cannot decode shape {type(shape).__name__}.", self._cursor.current_path
        )

    def _decode_sequence(self, element: Shape) -> tuple[Value, ...]:
        self._require_not_file()
        items: list[Value] = []
        while True:
            with self._cursor.descended(str(len(items))):
                if not self._cursor.exists():
                    break
                items.append(self._decode(element, CodecMode.TREE))
        return tuple(items)

    def _decode_elements(self, elements: tuple[Shape, ...]) -> tuple[Value, ...]:
        self._require_not_file()
        items: list[Value] = []
        for index, element in enumerate(elements):
            with self._cursor.descended(str(index)):
                items.append(self._decode(element, CodecMode.TREE))
        return tuple(items)

    def _decode_map(self, shape: MapShape) -> MapValue:
        if not self._require_not_file().exists:
            return MapValue()
        directory = self._cursor.current_path
        entries: list[tuple[Value, Value]] = []
        for name in self._cursor.list_entries():
            key = parse_key(name, shape.key, directory)
            with self._cursor.descended(name):
                value = self._decode(shape.value, child_mode(name, self._subdocument_prefix))
            entries.append((key, value))
        return MapValue(tuple(entries))

    def _decode_fields(self, fields: tuple[FieldShape, ...]) -> tuple[tuple[str, Value], ...]:
        self._require_not_file()
        decoded: list[tuple[str, Value]] = []
        for field in fields:
            with self._cursor.descended(field.name):
                mode = child_mode(field.name, self._subdocument_prefix)
                decoded.append((field.name, self._decode(field.shape, mode)))
        return tuple(decoded)

    def _decode_variant(self, shape: VariantShape) -> Value:
        path = self._cursor.current_path
        location = locate_variant(self._cursor)
        variant_case = resolve_case(shape, location, path)
        if location.inline:
            return UnitVariant(variant_case.name)
        with self._cursor.descended(location.case_name):
            return self._decode_payload(variant_case)

    def _decode_payload(self, variant_case: VariantCase) -> Value:
        if variant_case.kind == "unit":
            return UnitVariant(variant_case.name)
        if variant_case.kind == "newtype":
            if variant_case.payload is None:
                raise TreeFsParseError(
                    f"Variant case {variant_case.name} declares no payload shape.",
                    self._cursor.current_path,
                )
            payload = self._decode(variant_case.payload, CodecMode.TREE)
            return NewtypeVariant(variant_case.name, payload)
        if variant_case.kind == "tuple":
            return TupleVariant(variant_case.name, self._decode_elements(variant_case.elements))
        return StructVariant(variant_case.name, self._decode_fields(variant_case.fields))

    def _decode_subdocument(self, shape: Shape) -> Value:
        path = self._cursor.current_path
        text = self._cursor.read_text()
        try:
            return self._subdocument_codec.decode_whole(text, shape)
        except TreeFsParseError as error:
            raise TreeFsParseError(f"Invalid sub-document at {path}: {error}", path) from error

    def _require_not_file(self) -> PathMetadata:
        """Probe a composite location, which may be missing but not a file.

        Raises:
            TreeFsIOError: If a regular file sits where a directory is expected.
        """
        metadata = self._cursor.metadata()
        if metadata.is_file:
            path = self._cursor.current_path
            raise TreeFsIOError(f"Expected a directory at {path}, found a file.", path)
        return metadata
