"""
textblocks save command.

SUMMARY: Validate and store a field value (non-unique blocks become multi-value)

Reads the new value from --file or stdin. Single-value blocks whose name is
already defined in another document are rewritten to multi-value form before
the value is written; each rewrite is reported as a warning.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from textblocks.cli import (
    OutputFormatter,
    add_field_flag,
    add_language_flag,
    add_standard_flags,
    build_engine,
)
from textblocks.core.exceptions import DocumentNotFoundError, TextBlocksError
from textblocks.core.storage import Document

SUMMARY = "Validate and store a field value (non-unique blocks become multi-value)"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("document_id", help="Document identifier")
    parser.add_argument("--file", type=Path, help="Read the value from this file (default: stdin)")
    parser.add_argument("--create", action="store_true", help="Create the document if it does not exist")
    add_field_flag(parser)
    add_language_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        text = args.file.read_text(encoding="utf-8") if args.file else sys.stdin.read()
    except OSError as e:
        formatter.error(e, f"Cannot read {args.file}: {e.strerror or e}", error_code="save_error")
        return 1

    try:
        engine = build_engine(args)
        try:
            document = engine.storage.get_document(args.document_id)
        except DocumentNotFoundError:
            if not args.create:
                raise
            document = Document(id=args.document_id)
        result = engine.save_field(document, args.field, text, language=args.language)
    except TextBlocksError as e:
        formatter.error(e, error_code="save_error")
        return 1

    if not formatter.json_mode:
        for warning in result.warnings:
            formatter.warning(warning.message)
    formatter.success(
        {
            "document_id": args.document_id,
            "field": args.field,
            "changed": result.changed,
            "warnings": [w.message for w in result.warnings],
        },
        f"Saved {args.document_id}.{args.field}",
    )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
