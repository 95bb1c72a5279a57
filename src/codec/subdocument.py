"""Whole-document escape hatch for marked subtrees.

A record field or map entry whose name starts with the configured prefix
is stored as a single file holding a JSON or YAML document instead of a
directory tree. The mode is passed explicitly down each recursive call.
"""

from __future__ import annotations

from enum import Enum
import json
from typing import Any, Protocol

from codec.plain_values import plain_to_value, value_to_plain
from core.errors import TreeFsConfigError, TreeFsDependencyError, TreeFsParseError
from core.shape_types import Shape
from core.value_types import Value


class CodecMode(Enum):
    """How the value at the current location is represented."""

    TREE = "tree"
    SUBDOCUMENT = "subdocument"


def child_mode(name: str, prefix: str) -> CodecMode:
    """Return the mode for a child named ``name``.

    Args:
        name: Field name or map key segment.
        prefix: Sub-document marker prefix.

    Returns:
        SUBDOCUMENT when the name carries the marker, TREE otherwise.
    """
    return CodecMode.SUBDOCUMENT if name.startswith(prefix) else CodecMode.TREE


class SubdocumentCodec(Protocol):
    """Whole-document encode/decode contract."""

    def encode_whole(self, value: Value) -> str: ...

    def decode_whole(self, text: str, shape: Shape) -> Value: ...


class JsonSubdocumentCodec:
    """Compact JSON sub-documents."""

    def encode_whole(self, value: Value) -> str:
        return json.dumps(value_to_plain(value), separators=(",", ":"), ensure_ascii=False)

    def decode_whole(self, text: str, shape: Shape) -> Value:
        """Parse JSON text into a value of the expected shape.

        Raises:
            TreeFsParseError: If the text is not JSON or does not match the shape.
        """
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as error:
            raise TreeFsParseError(f"Invalid JSON sub-document: {error.msg}.") from error
        return plain_to_value(payload, shape)


class YamlSubdocumentCodec:
    """Block-style YAML sub-documents."""

    def __init__(self) -> None:
        self._yaml = _import_yaml()

    def encode_whole(self, value: Value) -> str:
        document = self._yaml.safe_dump(value_to_plain(value), sort_keys=False, allow_unicode=True)
        return str(document)

    def decode_whole(self, text: str, shape: Shape) -> Value:
        """Parse YAML text into a value of the expected shape.

        Raises:
            TreeFsParseError: If the text is not YAML or does not match the shape.
        """
        try:
            payload = self._yaml.safe_load(text)
        except self._yaml.YAMLError as error:
            raise TreeFsParseError(f"Invalid YAML sub-document: {error}.") from error
        return plain_to_value(payload, shape)


def build_subdocument_codec(subdocument_format: str) -> SubdocumentCodec:
    """Build the whole-document codec for a configured format name.

    Raises:
        TreeFsConfigError: If the format is unknown.
    """
    if subdocument_format == "json":
        return JsonSubdocumentCodec()
    if subdocument_format == "yaml":
        return YamlSubdocumentCodec()
    raise TreeFsConfigError(
        f"Unsupported sub-document format '{subdocument_format}'. Use 'json' or 'yaml'."
    )


def _import_yaml() -> Any:
    try:
        import yaml
    except ImportError as error:  # pragma: no cover - dependency failure
        raise TreeFsDependencyError(
            "YAML sub-documents require PyYAML. Install with 'pip install pyyaml'."
        ) from error
    return yaml
