"""Project root and config directory resolution."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

PROJECT_DIR_NAME = ".textblocks"
ROOT_ENV_VAR = "TEXTBLOCKS_PROJECT_ROOT"


def resolve_project_root(start: Optional[Path] = None) -> Path:
    """Find the project root.

    Resolution order:
    1. ``TEXTBLOCKS_PROJECT_ROOT`` environment variable
    2. Nearest ancestor of ``start`` (default: cwd) containing ``.textblocks/``
    3. ``start`` itself
    """
    env_root = os.environ.get(ROOT_ENV_VAR)
    if env_root:
        return Path(env_root).expanduser().resolve()

    origin = Path(start or Path.cwd()).resolve()
    for candidate in (origin, *origin.parents):
        if (candidate / PROJECT_DIR_NAME).is_dir():
            return candidate
    return origin


def get_project_config_dir(repo_root: Path) -> Path:
    return Path(repo_root) / PROJECT_DIR_NAME


__all__ = ["PROJECT_DIR_NAME", "ROOT_ENV_VAR", "resolve_project_root", "get_project_config_dir"]
