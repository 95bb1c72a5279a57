"""Top-level encode/decode entry points.

This module binds configuration, storage, and the sub-document codec to
one call. Each call builds a fresh cursor; nothing is cached between
calls and no tree is ever deleted. A failed encode leaves whatever was
already written in place.
"""

from __future__ import annotations

from pathlib import Path

from codec.path_cursor import PathCursor
from codec.subdocument import SubdocumentCodec, build_subdocument_codec
from codec.tree_decoder import TreeDecoder
from codec.tree_encoder import TreeEncoder
from codec.tree_storage import LocalTreeStorage, TreeStorage
from core.config import TreeFsConfig
from core.errors import TreeFsError
from core.logging_config import get_logger
from core.shape_types import Shape
from core.value_types import Value

_LOGGER = get_logger(__name__)


class TreeCodec:
    """Configured codec for reading and writing value trees."""

    def __init__(
        self,
        config: TreeFsConfig | None = None,
        storage: TreeStorage | None = None,
        subdocument_codec: SubdocumentCodec | None = None,
    ) -> None:
        self._config = config or TreeFsConfig.from_env()
        self._storage = storage or LocalTreeStorage()
        self._subdocument_codec = subdocument_codec or build_subdocument_codec(
            self._config.subdocument_format
        )

    @property
    def config(self) -> TreeFsConfig:
        return self._config

    def encode(self, value: Value, root: str | Path) -> int:
        """Write ``value`` as a directory tree under ``root``.

        Args:
            value: Composite value tree.
            root: Tree root directory.

        Returns:
            Number of leaf files written.

        Raises:
            TreeFsError: On the first failure; the partial tree stays on disk.
        """
        root_path = Path(root)
        cursor = PathCursor(self._storage, root_path)
        encoder = TreeEncoder(cursor, self._subdocument_codec, self._config.subdocument_prefix)
        try:
            encoder.encode(value)
        except TreeFsError as error:
            _LOGGER.warning(
                "tree_encode_aborted",
                root=str(root_path),
                error_type=type(error).__name__,
                error_path=str(error.path) if error.path is not None else None,
                leaves_written=cursor.leaves_written,
            )
            raise
        _LOGGER.info("tree_encoded", root=str(root_path), leaves_written=cursor.leaves_written)
        return cursor.leaves_written

    def decode(self, root: str | Path, shape: Shape) -> Value:
        """Read a value of the expected shape from the tree under ``root``.

        Args:
            root: Tree root directory.
            shape: Expected shape of the top-level value.

        Returns:
            Decoded value tree.

        Raises:
            TreeFsError: On the first failure.
        """
        root_path = Path(root)
        cursor = PathCursor(self._storage, root_path)
        decoder = TreeDecoder(cursor, self._subdocument_codec, self._config.subdocument_prefix)
        value = decoder.decode(shape)
        _LOGGER.info("tree_decoded", root=str(root_path), shape=type(shape).__name__)
        return value


def to_fs(
    value: Value,
    root: str | Path,
    config: TreeFsConfig | None = None,
    storage: TreeStorage | None = None,
) -> int:
    """Write ``value`` under ``root`` and return the number of leaves written."""
    return TreeCodec(config=config, storage=storage).encode(value, root)


def from_fs(
    root: str | Path,
    shape: Shape,
    config: TreeFsConfig | None = None,
    storage: TreeStorage | None = None,
) -> Value:
    """Read a value of ``shape`` from the tree under ``root``."""
    return TreeCodec(config=config, storage=storage).decode(root, shape)
