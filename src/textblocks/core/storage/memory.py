"""In-process document storage."""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from ..exceptions import DocumentNotFoundError
from .base import DEFAULT_CAPABILITY, Document


class InMemoryStorage:
    """Keeps documents in a dict, in insertion order.

    Useful for embedding the engine in another application and for tests.
    Candidate order for lookups is insertion order.
    """

    def __init__(
        self,
        documents: Optional[Iterable[Document]] = None,
        *,
        enabled_fields: Sequence[str] = ("body",),
        capability: str = DEFAULT_CAPABILITY,
    ) -> None:
        self.enabled_fields: List[str] = list(enabled_fields)
        self.capability = capability
        self._documents: Dict[str, Document] = {}
        for document in documents or []:
            self.add(document)

    def add(self, document: Document) -> Document:
        self._documents[document.id] = document
        return document

    def remove(self, document_id: str) -> None:
        self._documents.pop(document_id, None)

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
            for document in self._documents.values()
            if (include_hidden or document.published) and document.contains(fields, contains)
        ]

    def get_document(self, document_id: str) -> Document:
        try:
            return self._documents[document_id]
        except KeyError:
            raise DocumentNotFoundError(document_id) from None

    def save_document(self, document: Document) -> None:
        self._documents[document.id] = document

    def __len__(self) -> int:
        return len(self._documents)


__all__ = ["InMemoryStorage"]
