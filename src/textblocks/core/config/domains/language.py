"""Language settings for block lookups."""
from __future__ import annotations

from functools import cached_property

from textblocks.core.blocks.resolver import LanguageContext

from ..base import BaseDomainConfig


class LanguageConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "language"

    @cached_property
    def default(self) -> str:
        return str(self.section.get("default") or "en")

    @cached_property
    def current(self) -> str:
        return str(self.section.get("current") or self.default)

    @cached_property
    def context(self) -> LanguageContext:
        return LanguageContext(current=self.current, default=self.default)


__all__ = ["LanguageConfig"]
