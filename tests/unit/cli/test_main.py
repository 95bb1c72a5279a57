"""Unit tests for CLI command handling."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cli.main import build_parser, main
from core.logging_config import configure_logging

_SCHEMA = "\n".join(
    [
        "type: record",
        "name: Config",
        "fields:",
        "  int: u32",
        "  seq:",
        "    type: sequence",
        "    element: string",
    ]
)


def test_cli_encode_writes_tree(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """CLI encode should print the number of leaves written."""
    configure_logging("info")
    source_path = tmp_path / "doc.json"
    source_path.write_text(json.dumps({"int": 7, "seq": ["a", "b"]}), encoding="utf-8")
    target = tmp_path / "tree"

    exit_code = main(["encode", str(source_path), str(target)])
    output = capsys.readouterr().out.strip()

    assert exit_code == 0
    assert output == "3"
    assert (target / "int").read_text(encoding="utf-8") == "7"
    assert (target / "seq" / "1").read_text(encoding="utf-8") == "b"


def test_cli_encode_reads_yaml_by_extension(tmp_path: Path) -> None:
    source_path = tmp_path / "doc.yaml"
    source_path.write_text("a:\n  b: true\n", encoding="utf-8")

    exit_code = main(["encode", str(source_path), str(tmp_path / "tree")])

    assert exit_code == 0
    assert (tmp_path / "tree" / "a" / "b").read_text(encoding="utf-8") == "true"


def test_cli_decode_prints_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """CLI decode should print the decoded document."""
    configure_logging("info")
    tree = tmp_path / "tree"
    (tree / "seq").mkdir(parents=True)
    (tree / "int").write_text("7", encoding="utf-8")
    (tree / "seq" / "0").write_text("a", encoding="utf-8")
    schema_path = tmp_path / "schema.yaml"
    schema_path.write_text(_SCHEMA, encoding="utf-8")

    exit_code = main(["decode", str(tree), "--schema", str(schema_path)])
    output = capsys.readouterr().out

    assert exit_code == 0
    assert json.loads(output) == {"int": 7, "seq": ["a"]}


def test_cli_decode_prints_yaml(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("info")
    tree = tmp_path / "tree"
    tree.mkdir()
    (tree / "int").write_text("1", encoding="utf-8")
    schema_path = tmp_path / "schema.yaml"
    schema_path.write_text(_SCHEMA, encoding="utf-8")

    exit_code = main(["decode", str(tree), "--schema", str(schema_path), "--format", "yaml"])
    output = capsys.readouterr().out

    assert exit_code == 0
    assert "int: 1" in output
    assert "seq: []" in output


def test_cli_reports_codec_errors(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Codec failures should print the error and return exit code 1."""
    configure_logging("info")
    tree = tmp_path / "tree"
    tree.mkdir()
    (tree / "int").write_text("-1", encoding="utf-8")
    schema_path = tmp_path / "schema.yaml"
    schema_path.write_text(_SCHEMA, encoding="utf-8")

    exit_code = main(["decode", str(tree), "--schema", str(schema_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert captured.out == ""
    assert "TreeFsParseError" in captured.err


def test_cli_subdocument_prefix_override(tmp_path: Path) -> None:
    source_path = tmp_path / "doc.json"
    source_path.write_text(json.dumps({"doc_list": [1, 2]}), encoding="utf-8")

    exit_code = main(
        ["--subdocument-prefix", "doc_", "encode", str(source_path), str(tmp_path / "tree")]
    )

    assert exit_code == 0
    assert (tmp_path / "tree" / "doc_list").read_text(encoding="utf-8") == "[1,2]"


def test_cli_rejects_invalid_json_source(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    configure_logging("info")
    source_path = tmp_path / "doc.json"
    source_path.write_text("{", encoding="utf-8")

    exit_code = main(["encode", str(source_path), str(tmp_path / "tree")])

    assert exit_code == 1
    assert "Failed to parse JSON" in capsys.readouterr().err


def test_parser_requires_schema_for_decode() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["decode", "root"])
