"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import TreeFsConfig, parse_subdocument_format, parse_subdocument_prefix
from core.errors import TreeFsConfigError


def test_from_env_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fall back to the json marker and json format."""
    monkeypatch.delenv("TREEFS_SUBDOCUMENT_PREFIX", raising=False)
    monkeypatch.delenv("TREEFS_SUBDOCUMENT_FORMAT", raising=False)

    config = TreeFsConfig.from_env()

    assert config == TreeFsConfig(subdocument_prefix="json", subdocument_format="json")


def test_from_env_reads_prefix_and_format(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve both settings from environment."""
    monkeypatch.setenv("TREEFS_SUBDOCUMENT_PREFIX", "doc_")
    monkeypatch.setenv("TREEFS_SUBDOCUMENT_FORMAT", " YAML ")

    config = TreeFsConfig.from_env()

    assert config.subdocument_prefix == "doc_"
    assert config.subdocument_format == "yaml"


def test_from_env_raises_for_unknown_format(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for formats without a whole-document codec."""
    monkeypatch.setenv("TREEFS_SUBDOCUMENT_FORMAT", "toml")

    with pytest.raises(TreeFsConfigError, match="toml"):
        TreeFsConfig.from_env()


def test_parse_subdocument_prefix_rejects_empty() -> None:
    """An empty prefix would mark every name."""
    with pytest.raises(TreeFsConfigError):
        parse_subdocument_prefix("")


def test_parse_subdocument_prefix_rejects_separator() -> None:
    """Prefix must fit inside one path segment."""
    with pytest.raises(TreeFsConfigError):
        parse_subdocument_prefix("a/b")


def test_parse_subdocument_format_normalizes_case() -> None:
    assert parse_subdocument_format("Json") == "json"
