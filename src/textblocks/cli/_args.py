"""Common CLI argument registration helpers."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Override project root path",
    )


def add_language_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--language",
        "--lang",
        dest="language",
        help="Active language code (default: configured language.current)",
    )


def add_field_flag(parser: argparse.ArgumentParser, *, multiple: bool = False) -> None:
    if multiple:
        parser.add_argument(
            "--field",
            dest="fields",
            action="append",
            help="Limit to this field (repeatable; default: every enabled field)",
        )
    else:
        parser.add_argument(
            "--field",
            default="body",
            help="Field name (default: body)",
        )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add --json and --repo-root."""
    add_json_flag(parser)
    add_repo_root_flag(parser)


__all__ = [
    "add_json_flag",
    "add_repo_root_flag",
    "add_language_flag",
    "add_field_flag",
    "add_standard_flags",
]
