"""
textblocks config show command.

SUMMARY: Show current configuration

Displays the merged configuration from bundled defaults, project overrides,
and environment variables.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any

import yaml

from textblocks.cli import OutputFormatter, add_json_flag, add_repo_root_flag, get_repo_root
from textblocks.core.config import ConfigManager
from textblocks.core.exceptions import TextBlocksError

SUMMARY = "Show current configuration"


def _nest_key(key: str, value: Any) -> Any:
    """Nest a dot-notation key into a YAML-friendly mapping."""
    out = value
    for part in reversed([p for p in str(key).split(".") if p]):
        out = {part: out}
    return out


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "key",
        nargs="?",
        help="Specific configuration key to show (e.g., 'grammar.start_word')",
    )
    parser.add_argument(
        "--format",
        choices=["json", "yaml"],
        default="yaml",
        help="Output format (default: yaml)",
    )
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    output_format = "json" if formatter.json_mode else args.format

    try:
        config_manager = ConfigManager(get_repo_root(args))
        if args.key:
            value = config_manager.get(args.key)
            if value is None:
                formatter.text(f"Key not found: {args.key}")
                return 1
            data = {args.key: value} if output_format == "json" else _nest_key(args.key, value)
        else:
            data = config_manager.get_all()
    except TextBlocksError as e:
        formatter.error(e, error_code="config_show_error")
        return 1

    if output_format == "json":
        formatter.json_output(data)
    else:
        formatter.text(
            yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True).rstrip()
        )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
