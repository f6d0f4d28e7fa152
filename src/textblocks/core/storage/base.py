"""Storage collaborator interface.

The engine never owns documents. It asks a storage collaborator which
fields carry blocks, which documents contain a marker literal, and for the
raw text of a field in a given language.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Union, runtime_checkable

# A field holds either one string, or a language code -> string map.
FieldValue = Union[str, Dict[str, str]]

DEFAULT_CAPABILITY = "textblocks"


@runtime_checkable
class StoredDocument(Protocol):
    """A document as seen by the engine."""

    @property
    def id(self) -> str: ...

    def is_viewable(self) -> bool: ...

    def get_field_value(self, field_name: str, language: Optional[str] = None) -> str: ...

    def set_field_value(self, field_name: str, value: str, language: Optional[str] = None) -> None: ...

    def field_texts(self, field_name: str) -> Iterable[str]: ...


@runtime_checkable
class BlockStorage(Protocol):
    """Queries the engine issues against document storage."""

    def find_fields_by_capability(self, capability: str) -> List[str]: ...

    def find_documents(
        self,
        *,
        fields: Sequence[str],
        contains: str,
        include_hidden: bool = True,
    ) -> List[StoredDocument]: ...

    def get_document(self, document_id: str) -> StoredDocument: ...

    def save_document(self, document: StoredDocument) -> None: ...


@dataclass
class Document:
    """Plain document record used by the bundled storages.

    ``published`` is listing visibility (unpublished documents only show up
    when a query asks for hidden ones); ``viewable`` is the per-document
    access check applied after lookup.
    """

    id: str
    fields: Dict[str, FieldValue] = field(default_factory=dict)
    published: bool = True
    viewable: bool = True
    default_language: str = "en"

    def is_viewable(self) -> bool:
        return self.viewable

    def get_field_value(self, field_name: str, language: Optional[str] = None) -> str:
        """Return the field text for ``language`` (default language when None).

        Untranslated fields return the same text for every language; a
        translated field without the requested language returns "".
        """
        value = self.fields.get(field_name)
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        return value.get(language or self.default_language, "")

    def set_field_value(self, field_name: str, value: str, language: Optional[str] = None) -> None:
        current = self.fields.get(field_name)
        if isinstance(current, dict):
            current[language or self.default_language] = value
        elif language and language != self.default_language:
            base = current if isinstance(current, str) else ""
            self.fields[field_name] = {self.default_language: base, language: value}
        else:
            self.fields[field_name] = value

    def field_texts(self, field_name: str) -> Iterable[str]:
        """Yield every stored text of a field, across languages."""
        value = self.fields.get(field_name)
        if isinstance(value, str):
            yield value
        elif isinstance(value, dict):
            yield from value.values()

    def contains(self, fields: Sequence[str], needle: str) -> bool:
        """Case-insensitive substring test over ``fields`` in every language."""
        folded = needle.casefold()
        return any(
            folded in text.casefold()
            for name in fields
            for text in self.field_texts(name)
        )


__all__ = [
    "FieldValue",
    "DEFAULT_CAPABILITY",
    "StoredDocument",
    "BlockStorage",
    "Document",
]
