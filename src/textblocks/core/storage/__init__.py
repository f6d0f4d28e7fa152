"""Storage collaborators: the interface the engine consumes plus bundled backends."""
from __future__ import annotations

from .base import DEFAULT_CAPABILITY, BlockStorage, Document, FieldValue, StoredDocument
from .directory import DirectoryStorage
from .memory import InMemoryStorage

__all__ = [
    "DEFAULT_CAPABILITY",
    "BlockStorage",
    "StoredDocument",
    "Document",
    "FieldValue",
    "InMemoryStorage",
    "DirectoryStorage",
]
