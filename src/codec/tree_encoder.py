"""Value tree to directory tree encoding.

The encoder is a ``ValueSerializer``: leaves become files at the current
cursor location, composites become directories whose children are named
by index, field name, or key text.
"""

from __future__ import annotations

from codec.key_codec import key_to_segment, require_safe_segment
from codec.path_cursor import PathCursor
from codec.scalar_codec import encode_scalar
from codec.subdocument import CodecMode, SubdocumentCodec, child_mode
from codec.value_walk import walk_value
from core.constants import TEXT_ENCODING
from core.errors import TreeFsUnsupportedAtRootError
from core.value_types import (
    BoolValue,
    CharValue,
    FloatValue,
    IntegerValue,
    StringValue,
    Value,
)


class TreeEncoder:
    """Serializer that writes through a ``PathCursor``."""

    def __init__(
        self,
        cursor: PathCursor,
        subdocument_codec: SubdocumentCodec,
        subdocument_prefix: str,
    ) -> None:
        self._cursor = cursor
        self._subdocument_codec = subdocument_codec
        self._subdocument_prefix = subdocument_prefix
        self._next_indices: list[int] = []

    def encode(self, value: Value) -> None:
        """Encode a value at the current cursor location."""
        walk_value(value, self)

    def serialize_unit(self) -> None:
        self._cursor.write_leaf(b"")

    def serialize_bool(self, value: bool) -> None:
        self._cursor.write_leaf(encode_scalar(BoolValue(value)))

    def serialize_integer(self, value: int) -> None:
        self._cursor.write_leaf(encode_scalar(IntegerValue(value)))

    def serialize_float(self, value: float) -> None:
        self._cursor.write_leaf(encode_scalar(FloatValue(value)))

    def serialize_char(self, value: str) -> None:
        self._cursor.write_leaf(encode_scalar(CharValue(value)))

    def serialize_string(self, value: str) -> None:
        self._cursor.write_leaf(encode_scalar(StringValue(value)))

    def serialize_bytes(self, value: bytes) -> None:
        self._cursor.write_leaf(bytes(value))

    def serialize_none(self) -> None:
        # Absence of the path is the whole representation.
        if self._cursor.depth == 0:
            path = self._cursor.current_path
            raise TreeFsUnsupportedAtRootError(
                f"Cannot encode an absent option as the tree root {path}.", path
            )

    def serialize_some(self, inner: Value) -> None:
        walk_value(inner, self)

    def begin_sequence(self, length: int | None) -> None:
        self._next_indices.append(0)

    def serialize_element(self, value: Value) -> None:
        index = self._next_indices[-1]
        with self._cursor.descended(str(index)):
            walk_value(value, self)
        self._next_indices[-1] = index + 1

    def end_sequence(self) -> None:
        self._next_indices.pop()

    def begin_map(self, length: int | None) -> None:
        pass

    def serialize_entry(self, key: Value, value: Value) -> None:
        self._encode_child(key_to_segment(key), value)

    def end_map(self) -> None:
        pass

    def begin_record(self, name: str, length: int) -> None:
        pass

    def serialize_field(self, name: str, value: Value) -> None:
        self._encode_child(require_safe_segment(name), value)

    def end_record(self) -> None:
        pass

    def serialize_unit_variant(self, name: str) -> None:
        self._cursor.write_leaf(name.encode(TEXT_ENCODING))

    def serialize_newtype_variant(self, name: str, value: Value) -> None:
        with self._cursor.descended(require_safe_segment(name)):
            walk_value(value, self)

    def begin_tuple_variant(self, name: str, length: int) -> None:
        self._cursor.descend(require_safe_segment(name))
        self.begin_sequence(length)

    def end_tuple_variant(self) -> None:
        self.end_sequence()
        self._cursor.ascend()

    def begin_struct_variant(self, name: str, length: int) -> None:
        self._cursor.descend(require_safe_segment(name))

    def end_struct_variant(self) -> None:
        self._cursor.ascend()

    def _encode_child(self, segment: str, value: Value) -> None:
        with self._cursor.descended(segment):
            self._encode_value(value, child_mode(segment, self._subdocument_prefix))

    def _encode_value(self, value: Value, mode: CodecMode) -> None:
        if mode is CodecMode.SUBDOCUMENT:
            document = self._subdocument_codec.encode_whole(value)
            self._cursor.write_leaf(document.encode(TEXT_ENCODING))
            return
        walk_value(value, self)
