"""
textblocks get command.

SUMMARY: Resolve a block by name across all documents
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
from textblocks.core.blocks import Multiplicity, ResolveOptions, ResultShape
from textblocks.core.exceptions import TextBlocksError

SUMMARY = "Resolve a block by name across all documents"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("name", help="Block name")
    parser.add_argument(
        "--multi",
        action="store_true",
        help="Collect every multi-value definition (start__name)",
    )
    parser.add_argument(
        "--itemized",
        action="store_true",
        help="Return each match separately instead of newline-joined",
    )
    add_field_flag(parser, multiple=True)
    add_language_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    options = ResolveOptions(
        multiplicity=Multiplicity.MULTI if args.multi else Multiplicity.SINGLE,
        fields=args.fields,
        shape=ResultShape.ITEMIZED if args.itemized else ResultShape.CONCATENATED,
    )
    try:
        engine = build_engine(args)
        value = engine.get_block(args.name, options, language=args.language)
    except TextBlocksError as e:
        formatter.error(e, error_code="get_error")
        return 1

    if formatter.json_mode:
        formatter.json_output({"name": args.name, "multi": args.multi, "value": value})
    elif isinstance(value, list):
        for item in value:
            formatter.text(item)
            formatter.text("---")
    else:
        formatter.text(value)
    return 0 if value else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
