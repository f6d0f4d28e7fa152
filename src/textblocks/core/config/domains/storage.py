"""Document storage settings."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import List

from textblocks.core.storage import DEFAULT_CAPABILITY, DirectoryStorage

from ..base import BaseDomainConfig


class StorageConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "storage"

    @cached_property
    def path(self) -> Path:
        return self.resolve_path(str(self.section.get("path") or ".textblocks/documents"))

    @cached_property
    def fields(self) -> List[str]:
        return [str(f) for f in self.section.get("fields") or []]

    @cached_property
    def capability(self) -> str:
        return str(self.section.get("capability") or DEFAULT_CAPABILITY)

    def open(self) -> DirectoryStorage:
        """Open the configured document directory."""
        return DirectoryStorage(self.path, enabled_fields=self.fields, capability=self.capability)


__all__ = ["StorageConfig"]
