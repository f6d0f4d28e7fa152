"""
Auto-discovery CLI dispatcher for textblocks.

Scans ``commands/`` for top-level commands and other subfolders for command
groups. Adding a command = adding a .py file with SUMMARY, register_args and
main.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from functools import lru_cache
from pathlib import Path
from typing import Any

from textblocks import __version__

CommandInfo = dict[str, Any]


def _load_command(module_name: str, default_summary: str) -> CommandInfo | None:
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        print(f"Warning: Could not import command {module_name}: {e}", file=sys.stderr)
        return None
    return {
        "module": module,
        "summary": getattr(module, "SUMMARY", default_summary),
        "register_args": getattr(module, "register_args", None),
        "main": getattr(module, "main", None),
    }


@lru_cache(maxsize=1)
def discover_root_commands() -> dict[str, CommandInfo]:
    """Discover top-level commands under cli/commands (no group prefix)."""
    commands_dir = Path(__file__).parent / "commands"
    commands: dict[str, CommandInfo] = {}
    for item in sorted(commands_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue
        info = _load_command(f"textblocks.cli.commands.{item.stem}", item.stem)
        if info is not None:
            commands[item.stem.replace("_", "-")] = info
    return commands


@lru_cache(maxsize=1)
def discover_groups() -> dict[str, dict[str, CommandInfo]]:
    """Discover command groups: subfolders (other than commands/) holding command modules."""
    cli_dir = Path(__file__).parent
    groups: dict[str, dict[str, CommandInfo]] = {}
    for item in sorted(cli_dir.iterdir()):
        if not item.is_dir() or item.name.startswith("_") or item.name == "commands":
            continue
        commands: dict[str, CommandInfo] = {}
        for module_path in sorted(item.glob("*.py")):
            if module_path.name.startswith("_"):
                continue
            info = _load_command(
                f"textblocks.cli.{item.name}.{module_path.stem}",
                f"{item.name} {module_path.stem}",
            )
            if info is not None:
                commands[module_path.stem.replace("_", "-")] = info
        if commands:
            groups[item.name] = commands
    return groups


def _add_command(subparsers: Any, name: str, info: CommandInfo) -> None:
    parser = subparsers.add_parser(name, help=info["summary"], description=info["summary"])
    if info["register_args"] is not None:
        info["register_args"](parser)
    parser.set_defaults(_func=info["main"])


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with auto-discovered commands."""
    parser = argparse.ArgumentParser(
        prog="textblocks",
        description="textblocks - reusable named text blocks for documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"textblocks {__version__}")
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    for name, info in discover_root_commands().items():
        _add_command(subparsers, name, info)

    for group, commands in discover_groups().items():
        group_parser = subparsers.add_parser(group, help=f"{group} commands")
        group_sub = group_parser.add_subparsers(dest="subcommand", metavar="<subcommand>")
        for name, info in commands.items():
            _add_command(group_sub, name, info)
        group_parser.set_defaults(_group_parser=group_parser)

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the textblocks CLI.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    func = getattr(args, "_func", None)
    if func is None:
        group_parser = getattr(args, "_group_parser", None)
        (group_parser or parser).print_help()
        return 0

    return int(func(args) or 0)


if __name__ == "__main__":
    sys.exit(main())
