"""Pre-save uniqueness check for single-value block names.

When a document being saved defines ``start_name`` and some other document
already defines the same marker, the name is not unique. Instead of
rejecting the save, every single-value start/stop marker for that name in
the saved text is rewritten into multi-value form (``start__name``), so both
definitions stay reachable through a multi lookup.

Check-then-rewrite is not atomic: two concurrent saves may each decide they
are first.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Sequence

from ..storage.base import BlockStorage
from .extractor import extract_blocks
from .grammar import DEFAULT_GRAMMAR, TagGrammar

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollisionWarning:
    """A single-value block converted to multi-value form on save."""

    name: str
    original_tag: str
    new_tag: str
    document_id: str

    @property
    def message(self) -> str:
        return (
            f"Block tag {self.original_tag} is already used in another document; "
            f"it was changed to {self.new_tag}."
        )


@dataclass
class ValidationResult:
    """Outcome of validating one field value."""

    text: str
    changed: bool = False
    warnings: List[CollisionWarning] = field(default_factory=list)


class UniquenessValidator:
    """Rewrite non-unique single-value blocks into multi-value form."""

    def __init__(self, storage: BlockStorage, *, grammar: TagGrammar = DEFAULT_GRAMMAR) -> None:
        self.storage = storage
        self.grammar = grammar

    def validate(self, document_id: str, fields: Sequence[str], text: str) -> ValidationResult:
        """Check every single-value block defined in ``text``.

        Args:
            document_id: Document being saved; excluded from the probe
            fields: Field scope for the probe
            text: Candidate field value

        Returns:
            ValidationResult with the (possibly rewritten) text

        Raises:
            StorageError: The storage collaborator failed
        """
        result = ValidationResult(text=text)
        blocks = extract_blocks(text, grammar=self.grammar).blocks
        if not blocks:
            return result

        for name in list(blocks.single_names()):
            if not self._defined_elsewhere(document_id, fields, name):
                continue

            result.text = self.grammar.marker_token_pattern(name).sub(self._to_multi, result.text)
            result.changed = True
            warning = CollisionWarning(
                name=name,
                original_tag=self.grammar.start_tag(name),
                new_tag=self.grammar.start_tag(name, multi=True),
                document_id=document_id,
            )
            result.warnings.append(warning)
            logger.warning("%s (document %s)", warning.message, document_id)
        return result

    def _defined_elsewhere(self, document_id: str, fields: Sequence[str], name: str) -> bool:
        """True when another document defines single-value ``name`` in scope.

        The storage query is a substring prefilter; each candidate's field
        texts are then parsed, so longer names (``start_names``) and prose
        that merely mentions the marker do not count.
        """
        tag = self.grammar.start_tag(name)
        for document in self.storage.find_documents(fields=fields, contains=tag, include_hidden=True):
            if str(document.id) == str(document_id):
                continue
            for field_name in fields:
                for text in document.field_texts(field_name):
                    blocks = extract_blocks(text, grammar=self.grammar).blocks
                    if blocks.lookup(name, multi=False) is not None:
                        return True
        return False

    def _to_multi(self, match: re.Match[str]) -> str:
        return f"{match.group('word')}{self.grammar.multi_separator}{match.group('name')}"


__all__ = ["CollisionWarning", "ValidationResult", "UniquenessValidator"]
