"""Logging settings."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import Optional

from ..base import BaseDomainConfig


class LoggingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "logging"

    @cached_property
    def level(self) -> str:
        return str(self.section.get("level", "INFO") or "INFO")

    @cached_property
    def path(self) -> Optional[Path]:
        raw = self.section.get("path")
        return self.resolve_path(str(raw)) if raw else None


__all__ = ["LoggingConfig"]
