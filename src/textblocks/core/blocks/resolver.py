"""Block resolution against the document corpus.

Resolution steps:
1. Sanitize the requested name
2. Work out the field scope (explicit, or every engine-enabled field)
3. Ask storage for documents containing the start marker literal, hidden
   documents included; skip candidates that are not viewable
4. Extract blocks from each in-scope field and collect matches
   (single: stop after the first matching document; multi: all documents)
5. Nothing found under a non-default language: search once more under the
   default language
6. Itemize or newline-join the matches
7. Pipe a joined result through a template override when one exists

Resolution only reads documents.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Protocol, Sequence, Tuple, Union

from ..storage.base import DEFAULT_CAPABILITY, BlockStorage
from .extractor import extract_blocks
from .grammar import DEFAULT_GRAMMAR, TagGrammar, sanitize_block_name

logger = logging.getLogger(__name__)

ResolvedBlock = Union[str, List[str]]


class Multiplicity(Enum):
    """Which definitions of a name a lookup wants."""
    SINGLE = "single"  # first document defining start_name
    MULTI = "multi"    # every document defining start__name


class ResultShape(Enum):
    """How matches are returned."""
    CONCATENATED = "concatenated"  # newline-joined string
    ITEMIZED = "itemized"          # list of strings


@dataclass(frozen=True)
class ResolveOptions:
    """Constraints for one lookup.

    ``fields`` limits the search to one field name or a set of them; None
    means every field the storage reports as engine-enabled.
    """

    multiplicity: Multiplicity = Multiplicity.SINGLE
    fields: Optional[Tuple[str, ...]] = None
    shape: ResultShape = ResultShape.CONCATENATED

    def __post_init__(self) -> None:
        if isinstance(self.fields, str):
            object.__setattr__(self, "fields", (self.fields,))
        elif self.fields is not None:
            object.__setattr__(self, "fields", tuple(self.fields))

    @property
    def multi(self) -> bool:
        return self.multiplicity is Multiplicity.MULTI

    @property
    def itemized(self) -> bool:
        return self.shape is ResultShape.ITEMIZED

    def with_multiplicity(self, multiplicity: Multiplicity) -> "ResolveOptions":
        return ResolveOptions(multiplicity=multiplicity, fields=self.fields, shape=self.shape)


@dataclass(frozen=True)
class LanguageContext:
    """Active and default language codes for a lookup."""

    current: str = "en"
    default: str = "en"

    @property
    def is_default(self) -> bool:
        return self.current == self.default

    def with_current(self, language: str) -> "LanguageContext":
        return LanguageContext(current=language, default=self.default)


class OverrideRenderer(Protocol):
    def render(
        self,
        block_name: str,
        value: str,
        *,
        format_text: Optional[Callable[[str], str]] = None,
    ) -> Optional[str]: ...


class BlockResolver:
    """Find block content by name across the corpus."""

    def __init__(
        self,
        storage: BlockStorage,
        *,
        grammar: TagGrammar = DEFAULT_GRAMMAR,
        language: LanguageContext = LanguageContext(),
        overrides: Optional[OverrideRenderer] = None,
        capability: str = DEFAULT_CAPABILITY,
    ) -> None:
        self.storage = storage
        self.grammar = grammar
        self.language = language
        self.overrides = overrides
        self.capability = capability

    def resolve(
        self,
        name: str,
        options: Optional[ResolveOptions] = None,
        *,
        language: Optional[str] = None,
        format_text: Optional[Callable[[str], str]] = None,
    ) -> ResolvedBlock:
        """Resolve ``name`` to content; "" (or []) when nothing matches.

        Args:
            name: Block name, sanitized before use
            options: Multiplicity, field scope, and result shape
            language: Active language; defaults to the resolver's context
            format_text: Passed to template overrides

        Raises:
            StorageError: The storage collaborator failed
            TemplateOverrideError: An override template failed to render
        """
        options = options or ResolveOptions()
        name = sanitize_block_name(name)
        if not name:
            return self._shape([], options)

        fields = self._field_scope(options)
        if not fields:
            return self._shape([], options)

        context = self.language.with_current(language) if language else self.language
        matches = self._search(name, options, fields, context.current)
        if not matches and not context.is_default:
            logger.debug(
                "Block %r not found for language %s, falling back to %s",
                name,
                context.current,
                context.default,
            )
            matches = self._search(name, options, fields, context.default)

        result = self._shape(matches, options)
        if isinstance(result, str) and matches and self.overrides is not None:
            rendered = self.overrides.render(name, result, format_text=format_text)
            if rendered is not None:
                return rendered
        return result

    def _field_scope(self, options: ResolveOptions) -> Sequence[str]:
        if options.fields is not None:
            return options.fields
        return self.storage.find_fields_by_capability(self.capability)

    def _search(
        self,
        name: str,
        options: ResolveOptions,
        fields: Sequence[str],
        language: str,
    ) -> List[str]:
        tag = self.grammar.start_tag(name, multi=options.multi)
        candidates = self.storage.find_documents(fields=fields, contains=tag, include_hidden=True)

        matches: List[str] = []
        for document in candidates:
            if not document.is_viewable():
                continue
            found = False
            for field_name in fields:
                text = document.get_field_value(field_name, language)
                content = extract_blocks(text, grammar=self.grammar).blocks.lookup(
                    name, multi=options.multi
                )
                if content is not None:
                    matches.append(content)
                    found = True
            if found and not options.multi:
                break
        return matches

    @staticmethod
    def _shape(matches: List[str], options: ResolveOptions) -> ResolvedBlock:
        if options.itemized:
            return list(matches)
        return "\n".join(matches)


__all__ = [
    "Multiplicity",
    "ResultShape",
    "ResolveOptions",
    "LanguageContext",
    "OverrideRenderer",
    "BlockResolver",
    "ResolvedBlock",
]
