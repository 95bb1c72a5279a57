"""treefs CLI entry points.

This module exposes commands that write JSON/YAML documents as directory
trees and read trees back using a YAML shape schema.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
from pathlib import Path
import sys
from typing import Any, Sequence

from codec.plain_values import infer_value, value_to_plain
from codec.tree_codec import TreeCodec
from core.config import TreeFsConfig, parse_subdocument_prefix
from core.constants import SUPPORTED_SUBDOCUMENT_FORMATS
from core.errors import TreeFsDependencyError, TreeFsError, TreeFsIOError, TreeFsParseError
from core.shape_schema import load_shape_schema


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="treefs", description="Directory-tree value codec")
    parser.add_argument(
        "--subdocument-prefix",
        help="Override TREEFS_SUBDOCUMENT_PREFIX for this command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_encode_command(subparsers)
    _add_decode_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the treefs CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        codec = _build_codec(args.subdocument_prefix)
        if args.command == "encode":
            return _run_encode_command(codec, args)
        if args.command == "decode":
            return _run_decode_command(codec, args)
    except TreeFsError as error:
        print(f"treefs: {type(error).__name__}: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _add_encode_command(subparsers: Any) -> None:
    encode_parser = subparsers.add_parser("encode", help="Write a JSON/YAML document as a tree")
    encode_parser.add_argument("source", help="JSON or YAML document path")
    encode_parser.add_argument("target", help="Tree root directory to write")
    encode_parser.add_argument(
        "--format",
        choices=SUPPORTED_SUBDOCUMENT_FORMATS,
        help="Source format; inferred from the file extension when omitted",
    )


def _add_decode_command(subparsers: Any) -> None:
    decode_parser = subparsers.add_parser("decode", help="Read a tree and print it as a document")
    decode_parser.add_argument("root", help="Tree root directory to read")
    decode_parser.add_argument("--schema", required=True, help="YAML shape schema path")
    decode_parser.add_argument(
        "--format",
        choices=SUPPORTED_SUBDOCUMENT_FORMATS,
        default="json",
        help="Output document format",
    )


def _build_codec(subdocument_prefix: str | None) -> TreeCodec:
    """Build a codec with an optional marker-prefix override.

    Args:
        subdocument_prefix: Optional override prefix.

    Returns:
        Configured codec.
    """
    config = TreeFsConfig.from_env()
    if subdocument_prefix is not None:
        config = replace(config, subdocument_prefix=parse_subdocument_prefix(subdocument_prefix))
    return TreeCodec(config)


def _run_encode_command(codec: TreeCodec, args: argparse.Namespace) -> int:
    """Handle encode command.

    Args:
        codec: Configured codec.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    source_path = Path(args.source).expanduser()
    document_format = args.format or _format_from_extension(source_path)
    plain = _load_document(source_path, document_format)
    leaves_written = codec.encode(infer_value(plain), Path(args.target).expanduser())
    print(leaves_written)
    return 0


def _run_decode_command(codec: TreeCodec, args: argparse.Namespace) -> int:
    """Handle decode command.

    Args:
        codec: Configured codec.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    shape = load_shape_schema(args.schema)
    value = codec.decode(Path(args.root).expanduser(), shape)
    print(_dump_document(value_to_plain(value), args.format))
    return 0


def _format_from_extension(source_path: Path) -> str:
    return "yaml" if source_path.suffix.lower() in (".yaml", ".yml") else "json"


def _load_document(source_path: Path, document_format: str) -> Any:
    try:
        text = source_path.read_text(encoding="utf-8")
    except OSError as error:
        raise TreeFsIOError(f"Failed to read {source_path}: {error}.", source_path) from error
    if document_format == "yaml":
        yaml = _import_yaml()
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as error:
            raise TreeFsParseError(
                f"Failed to parse YAML document {source_path}: {error}.", source_path
            ) from error
    try:
        return json.loads(text)
    except json.JSONDecodeError as error:
        raise TreeFsParseError(
            f"Failed to parse JSON document {source_path}: {error.msg}.", source_path
        ) from error


def _dump_document(plain: Any, document_format: str) -> str:
    if document_format == "yaml":
        return str(_import_yaml().safe_dump(plain, sort_keys=True, allow_unicode=True)).rstrip()
    return json.dumps(plain, indent=2, sort_keys=True, ensure_ascii=False)


def _import_yaml() -> Any:
    try:
        import yaml
    except ImportError as error:  # pragma: no cover - dependency failure
        raise TreeFsDependencyError(
            "YAML documents require PyYAML. Install with 'pip install pyyaml'."
        ) from error
    return yaml
