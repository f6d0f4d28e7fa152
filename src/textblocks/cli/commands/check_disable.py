"""
textblocks check-disable command.

SUMMARY: Check whether textblocks can be disabled (no field still depends on it)
"""

from __future__ import annotations

import argparse
import sys

from textblocks.cli import OutputFormatter, add_standard_flags, build_engine
from textblocks.core.exceptions import EngineInUseError, TextBlocksError

SUMMARY = "Check whether textblocks can be disabled (no field still depends on it)"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        engine = build_engine(args)
        engine.ensure_can_disable()
    except EngineInUseError as e:
        formatter.error(e, error_code="engine_in_use")
        return 1
    except TextBlocksError as e:
        formatter.error(e, error_code="check_disable_error")
        return 1

    formatter.success({"fields": []}, "No fields depend on textblocks; it can be disabled.")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
