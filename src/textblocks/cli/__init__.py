"""
textblocks CLI package.

Commands are auto-discovered: top-level commands live in ``commands/``,
grouped commands in a subfolder (``config/``). Each command module exposes
``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.
"""
from ._args import (
    add_field_flag,
    add_json_flag,
    add_language_flag,
    add_repo_root_flag,
    add_standard_flags,
)
from ._output import OutputFormatter
from ._utils import build_engine, get_repo_root

__all__ = [
    "OutputFormatter",
    "add_json_flag",
    "add_repo_root_flag",
    "add_language_flag",
    "add_field_flag",
    "add_standard_flags",
    "get_repo_root",
    "build_engine",
]
