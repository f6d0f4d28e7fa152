"""Template override settings."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import Optional

from textblocks.core.templates import DEFAULT_NAME_PATTERN, TemplateOverrideRenderer

from ..base import BaseDomainConfig


class TemplatesConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "templates"

    @cached_property
    def override_dir(self) -> Optional[Path]:
        raw = self.section.get("override_dir")
        return self.resolve_path(str(raw)) if raw else None

    @cached_property
    def name_pattern(self) -> str:
        return str(self.section.get("name_pattern") or DEFAULT_NAME_PATTERN)

    def renderer(self) -> Optional[TemplateOverrideRenderer]:
        """Build the override renderer, or None when no override directory is configured."""
        if self.override_dir is None:
            return None
        return TemplateOverrideRenderer(self.override_dir, name_pattern=self.name_pattern)


__all__ = ["TemplatesConfig"]
