from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping


class TextBlocksError(Exception):
    """Base exception for the textblocks engine."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigurationError(TextBlocksError, ValueError):
    """Raised when configuration is missing, malformed, or violates grammar constraints."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        TextBlocksError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class StorageError(TextBlocksError, RuntimeError):
    """Raised when the storage collaborator cannot answer a query."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        TextBlocksError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


class DocumentNotFoundError(StorageError, KeyError):
    """Raised when a document id is unknown to the storage collaborator."""

    def __init__(self, document_id: str) -> None:
        StorageError.__init__(
            self,
            f"Document not found: {document_id}",
            context={"document_id": document_id},
        )
        self.document_id = document_id

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return f"Document not found: {self.document_id}"


class TemplateOverrideError(TextBlocksError):
    """Raised when a template override exists but fails to render."""


class EngineInUseError(TextBlocksError):
    """Raised when disabling the engine while fields still depend on it."""

    def __init__(self, fields: Iterable[str]) -> None:
        self.fields: List[str] = sorted(fields)
        super().__init__(
            "Cannot disable textblocks: still enabled on field(s): "
            + ", ".join(self.fields),
            context={"fields": self.fields},
        )


__all__ = [
    "TextBlocksError",
    "ConfigurationError",
    "StorageError",
    "DocumentNotFoundError",
    "TemplateOverrideError",
    "EngineInUseError",
]
