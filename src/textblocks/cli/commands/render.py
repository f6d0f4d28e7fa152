"""
textblocks render command.

SUMMARY: Format a document field (strip definitions, resolve shows, strip comments)
"""

from __future__ import annotations

import argparse
import sys

from textblocks.cli import (
    OutputFormatter,
    add_field_flag,
    add_language_flag,
    add_standard_flags,
    build_engine,
)
from textblocks.core.exceptions import TextBlocksError

SUMMARY = "Format a document field (strip definitions, resolve shows, strip comments)"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("document_id", help="Document identifier")
    add_field_flag(parser)
    add_language_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        engine = build_engine(args)
        document = engine.storage.get_document(args.document_id)
        text = document.get_field_value(args.field, args.language)
        result = engine.render(text, language=args.language)
    except TextBlocksError as e:
        formatter.error(e, error_code="render_error")
        return 1

    if formatter.json_mode:
        formatter.json_output({"document_id": args.document_id, "field": args.field, **result.to_dict()})
    else:
        formatter.text(result.text)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
