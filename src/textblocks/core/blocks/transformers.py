"""Render-time formatting pipeline.

Formatting one field value runs three transformers in order:
1. DEFINITIONS - strip ``start_x`` / ``stop_x`` markers, keep their content
2. SHOWS       - replace ``show_x`` markers with resolved block content
3. COMMENTS    - remove HTML comments, raw or entity-encoded

The whole pipeline is guarded against re-entry: a format call made while
another one is in progress for the same guard returns the text untouched.
Resolved content is therefore never expanded recursively.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Set

from .comments import strip_comments
from .extractor import extract_blocks
from .grammar import DEFAULT_GRAMMAR, TagGrammar
from .substituter import ShowResolver, substitute_shows

logger = logging.getLogger(__name__)


class RenderGuard:
    """Reentrancy flag for one logical render.

    Owned by the caller's render scope and passed down explicitly; never
    shared between concurrent renders.
    """

    def __init__(self) -> None:
        self.in_progress = False

    @contextmanager
    def enter(self) -> Iterator[bool]:
        """Yield True when entry succeeded, False when a render is already running."""
        if self.in_progress:
            yield False
            return
        self.in_progress = True
        try:
            yield True
        finally:
            self.in_progress = False


@dataclass
class BlockTransformContext:
    """Context provided to transformers while formatting one text.

    Carries the grammar, the show resolver callback, the render guard, and
    tracking for reporting.
    """

    grammar: TagGrammar = DEFAULT_GRAMMAR
    resolve: Optional[ShowResolver] = None
    guard: RenderGuard = field(default_factory=RenderGuard)

    # Tracking for reports
    blocks_defined: List[str] = field(default_factory=list)
    blocks_shown: Set[str] = field(default_factory=set)
    blocks_missing: Set[str] = field(default_factory=set)

    def record_definitions(self, names: List[str]) -> None:
        self.blocks_defined.extend(names)

    def record_show(self, name: str, resolved: bool) -> None:
        if resolved:
            self.blocks_shown.add(name)
        else:
            self.blocks_missing.add(name)


class ContentTransformer(ABC):
    """One step of the formatting pipeline."""

    @abstractmethod
    def transform(self, content: str, context: BlockTransformContext) -> str:
        ...


class DefinitionStripper(ContentTransformer):
    """Remove definition markers, leaving block content in place.

    Catches definitions in documents saved before the uniqueness check ran
    or written straight to storage.
    """

    def transform(self, content: str, context: BlockTransformContext) -> str:
        if not context.grammar.has_start_marker(content):
            return content
        extraction = extract_blocks(content, remove_from_text=True, grammar=context.grammar)
        context.record_definitions(list(extraction.blocks))
        return extraction.text


class ShowSubstituter(ContentTransformer):
    """Replace show markers through the context's resolver callback."""

    def transform(self, content: str, context: BlockTransformContext) -> str:
        if context.resolve is None or not context.grammar.has_show_marker(content):
            return content
        resolve = context.resolve

        def tracked(name: str, multi: bool) -> str:
            value = resolve(name, multi)
            context.record_show(name, bool(value))
            return value

        return substitute_shows(content, tracked, grammar=context.grammar)


class CommentStripper(ContentTransformer):
    """Remove HTML comments as the final normalisation step."""

    def transform(self, content: str, context: BlockTransformContext) -> str:
        return strip_comments(content)


class TransformerPipeline:
    """Execute a sequence of transformers on content."""

    def __init__(self, transformers: List[ContentTransformer]) -> None:
        self.transformers = transformers

    def execute(self, content: str, context: BlockTransformContext) -> str:
        result = content
        for transformer in self.transformers:
            result = transformer.transform(result, context)
        return result


class FormatPipeline:
    """Guarded DEFINITIONS -> SHOWS -> COMMENTS pipeline.

    Example:
        pipeline = FormatPipeline()
        context = BlockTransformContext(resolve=lambda name, multi: "...")
        html = pipeline.format(text, context)
    """

    def __init__(self, transformers: Optional[List[ContentTransformer]] = None) -> None:
        self.pipeline = TransformerPipeline(
            transformers
            if transformers is not None
            else [DefinitionStripper(), ShowSubstituter(), CommentStripper()]
        )

    def format(self, text: str, context: BlockTransformContext) -> str:
        with context.guard.enter() as entered:
            if not entered:
                logger.debug("Skipping reentrant format call")
                return text
            return self.pipeline.execute(text, context)


__all__ = [
    "RenderGuard",
    "BlockTransformContext",
    "ContentTransformer",
    "DefinitionStripper",
    "ShowSubstituter",
    "CommentStripper",
    "TransformerPipeline",
    "FormatPipeline",
]
