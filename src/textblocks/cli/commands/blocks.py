"""
textblocks blocks command.

SUMMARY: List the blocks a document defines
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
from textblocks.core.blocks import extract_blocks
from textblocks.core.exceptions import TextBlocksError

SUMMARY = "List the blocks a document defines"


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
    except TextBlocksError as e:
        formatter.error(e, error_code="blocks_error")
        return 1

    blocks = extract_blocks(text, grammar=engine.grammar).blocks
    if formatter.json_mode:
        formatter.json_output(
            [
                {"key": blocks.display_key(entry), "multi": entry.multi, "content": entry.content}
                for entry in blocks.records()
            ]
        )
        return 0

    if not blocks:
        formatter.text(f"No blocks defined in {args.document_id}.{args.field}")
        return 0
    for entry in blocks.records():
        kind = "multi " if entry.multi else "single"
        first_line = entry.content.splitlines()[0] if entry.content else ""
        formatter.text(f"{kind}  {blocks.display_key(entry)}: {first_line}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
