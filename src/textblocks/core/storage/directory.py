"""Document storage backed by a directory of YAML files.

One document per file, ``<id>.yaml``::

    published: true          # optional, default true
    viewable: true           # optional, default true
    default_language: en     # optional, default "en"
    fields:
      body: |
        start_hello
        Hello World!
        stop_hello
      title:
        en: Welcome
        fr: Bienvenue
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml

from ..exceptions import DocumentNotFoundError, StorageError
from ..utils.io import iter_yaml_files, read_yaml, write_yaml
from .base import DEFAULT_CAPABILITY, Document, FieldValue

logger = logging.getLogger(__name__)


class DirectoryStorage:
    """Reads and writes documents under ``root``.

    Files are re-read on every query so edits made by other processes are
    picked up. Candidate order is file-name order.
    """

    def __init__(
        self,
        root: Path,
        *,
        enabled_fields: Sequence[str] = ("body",),
        capability: str = DEFAULT_CAPABILITY,
    ) -> None:
        self.root = Path(root)
        self.enabled_fields: List[str] = list(enabled_fields)
        self.capability = capability

    def find_fields_by_capability(self, capability: str) -> List[str]:
        if capability != self.capability:
            return []
        return list(self.enabled_fields)

    def find_documents(
        self,
        *,
        fields: Sequence[str],
        contains: str,
        include_hidden: bool = True,
    ) -> List[Document]:
        return [
            document
            for document in self.iter_documents()
            if (include_hidden or document.published) and document.contains(fields, contains)
        ]

    def iter_documents(self) -> List[Document]:
        return [self._load(path) for path in iter_yaml_files(self.root)]

    def get_document(self, document_id: str) -> Document:
        path = self._path_for(document_id)
        if path is None:
            raise DocumentNotFoundError(document_id)
        return self._load(path)

    def save_document(self, document: Document) -> None:
        path = self._path_for(document.id) or self.root / f"{document.id}.yaml"
        payload: Dict[str, Any] = {
            "published": document.published,
            "viewable": document.viewable,
            "default_language": document.default_language,
            "fields": dict(document.fields),
        }
        try:
            write_yaml(path, payload)
        except OSError as exc:
            raise StorageError(
                f"Failed to write document {document.id}: {exc}",
                context={"document_id": document.id, "path": str(path)},
            ) from exc
        logger.debug("Saved document %s to %s", document.id, path)

    def _path_for(self, document_id: str) -> Path | None:
        _check_document_id(document_id)
        for suffix in (".yaml", ".yml"):
            candidate = self.root / f"{document_id}{suffix}"
            if candidate.exists():
                return candidate
        return None

    def _load(self, path: Path) -> Document:
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except (OSError, yaml.YAMLError) as exc:
            raise StorageError(
                f"Failed to read document {path.name}: {exc}",
                context={"path": str(path)},
            ) from exc
        if not isinstance(data, dict):
            raise StorageError(
                f"Document {path.name} must be a mapping",
                context={"path": str(path)},
            )
        return Document(
            id=path.stem,
            fields=_coerce_fields(data.get("fields") or {}, path),
            published=bool(data.get("published", True)),
            viewable=bool(data.get("viewable", True)),
            default_language=str(data.get("default_language") or "en"),
        )


def _check_document_id(document_id: str) -> None:
    """Document ids are plain file stems; anything that could leave ``root`` is refused."""
    text = str(document_id)
    if not text or text in (".", "..") or any(sep in text for sep in ("/", "\\", "\0")):
        raise StorageError(
            f"Invalid document id: {text!r}",
            context={"document_id": text},
        )


def _coerce_fields(raw: Any, path: Path) -> Dict[str, FieldValue]:
    if not isinstance(raw, dict):
        raise StorageError(f"'fields' in {path.name} must be a mapping", context={"path": str(path)})
    fields: Dict[str, FieldValue] = {}
    for name, value in raw.items():
        if isinstance(value, dict):
            fields[str(name)] = {str(lang): "" if text is None else str(text) for lang, text in value.items()}
        else:
            fields[str(name)] = "" if value is None else str(value)
    return fields


__all__ = ["DirectoryStorage"]
