"""Configuration loading (YAML layers, environment overrides, schema validation)."""
from __future__ import annotations

from .base import BaseDomainConfig
from .manager import ENV_PREFIX, ConfigManager

__all__ = ["BaseDomainConfig", "ConfigManager", "ENV_PREFIX"]
