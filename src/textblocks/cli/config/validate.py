"""
textblocks config validate command.

SUMMARY: Validate project configuration

Validates the merged configuration against the bundled schema and the
grammar rules, then checks that configured paths exist.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Dict, List, Tuple

from textblocks.cli import OutputFormatter, add_json_flag, add_repo_root_flag, get_repo_root
from textblocks.core.config import ConfigManager
from textblocks.core.config.domains import StorageConfig, TemplatesConfig
from textblocks.core.exceptions import ConfigurationError

SUMMARY = "Validate project configuration"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings as errors",
    )
    add_json_flag(parser)
    add_repo_root_flag(parser)


def _check_paths(manager: ConfigManager, config: Dict[str, Any]) -> List[Tuple[str, str]]:
    """Return (level, message) issues for configured paths and fields."""
    issues: List[Tuple[str, str]] = []
    storage = StorageConfig(manager.repo_root, config=config)
    if not storage.fields:
        issues.append(("warning", "storage.fields is empty; no field carries blocks"))
    if not storage.path.is_dir():
        issues.append(("warning", f"storage.path does not exist: {storage.path}"))

    templates = TemplatesConfig(manager.repo_root, config=config)
    if templates.override_dir is not None and not templates.override_dir.is_dir():
        issues.append(("warning", f"templates.override_dir does not exist: {templates.override_dir}"))
    return issues


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    manager = ConfigManager(get_repo_root(args))

    issues: List[Tuple[str, str]] = []
    try:
        config = manager.load_config(validate=True)
    except ConfigurationError as e:
        problems = e.context.get("problems") or [str(e)]
        issues.extend(("error", p) for p in problems)
    else:
        issues.extend(_check_paths(manager, config))

    errors = [msg for level, msg in issues if level == "error"]
    warnings = [msg for level, msg in issues if level == "warning"]
    failed = bool(errors) or (bool(warnings) and args.strict)

    if formatter.json_mode:
        formatter.json_output({"valid": not failed, "errors": errors, "warnings": warnings})
        return 1 if failed else 0

    for msg in warnings:
        formatter.warning(msg)
    for msg in errors:
        formatter.text(f"Error: {msg}")

    if errors:
        formatter.text("Configuration validation failed")
    elif failed:
        formatter.text("Configuration has warnings (strict mode)")
    else:
        formatter.text("Configuration valid" + (" (with warnings)" if warnings else ""))
    return 1 if failed else 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
