"""Domain-specific configuration accessors, one per top-level section."""
from __future__ import annotations

from .grammar import GrammarConfig, grammar_problems
from .language import LanguageConfig
from .logging import LoggingConfig
from .storage import StorageConfig
from .templates import TemplatesConfig

__all__ = [
    "GrammarConfig",
    "grammar_problems",
    "LanguageConfig",
    "LoggingConfig",
    "StorageConfig",
    "TemplatesConfig",
]
