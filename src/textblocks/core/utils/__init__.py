"""Shared helpers: YAML file I/O and configuration merging."""
from __future__ import annotations

from .io import atomic_write, ensure_directory, iter_yaml_files, read_yaml, write_yaml
from .merge import deep_merge

__all__ = [
    "atomic_write",
    "ensure_directory",
    "iter_yaml_files",
    "read_yaml",
    "write_yaml",
    "deep_merge",
]
