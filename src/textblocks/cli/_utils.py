"""Shared CLI utilities."""
from __future__ import annotations

import argparse
from pathlib import Path

from textblocks.core.config import ConfigManager
from textblocks.core.config.domains import LoggingConfig
from textblocks.core.engine import BlockEngine
from textblocks.core.stdlib_logging import configure_stdlib_logging
from textblocks.core.utils.paths import resolve_project_root


def get_repo_root(args: argparse.Namespace) -> Path:
    """Return ``--repo-root`` when given, else the detected project root."""
    raw = getattr(args, "repo_root", None)
    if raw:
        return Path(raw).expanduser().resolve()
    return resolve_project_root()


def build_engine(args: argparse.Namespace) -> BlockEngine:
    """Load configuration, set up file logging if configured, and build the engine.

    Raises:
        ConfigurationError: Configuration is invalid
    """
    repo_root = get_repo_root(args)
    config = ConfigManager(repo_root).load_config()

    logging_cfg = LoggingConfig(repo_root, config=config)
    if logging_cfg.path is not None:
        configure_stdlib_logging(log_path=logging_cfg.path, level=logging_cfg.level)

    return BlockEngine.from_config(repo_root, config=config)


__all__ = ["get_repo_root", "build_engine"]
