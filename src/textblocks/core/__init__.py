"""Core engine, storage collaborators, configuration and logging."""
from __future__ import annotations

from .engine import BlockEngine
from .exceptions import (
    ConfigurationError,
    DocumentNotFoundError,
    EngineInUseError,
    StorageError,
    TemplateOverrideError,
    TextBlocksError,
)

__all__ = [
    "BlockEngine",
    "TextBlocksError",
    "ConfigurationError",
    "StorageError",
    "DocumentNotFoundError",
    "EngineInUseError",
    "TemplateOverrideError",
]
