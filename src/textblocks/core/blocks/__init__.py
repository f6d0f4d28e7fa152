"""Block extraction, substitution, resolution, and validation.

- grammar: marker words and the patterns built from them
- blockmap: name -> content with first-wins / concatenate-multi policy
- extractor: find (and optionally strip) definitions in one document
- substituter: replace show markers through a resolver callback
- comments: HTML comment stripping
- resolver: corpus lookup with language fallback and template overrides
- validator: pre-save uniqueness check and multi-value rewrite
- transformers: the guarded render-time pipeline
"""
from __future__ import annotations

from .blockmap import BlockEntry, BlockMap
from .comments import strip_comments
from .extractor import ExtractionResult, extract_blocks
from .grammar import DEFAULT_GRAMMAR, TagGrammar, sanitize_block_name
from .resolver import (
    BlockResolver,
    LanguageContext,
    Multiplicity,
    ResolvedBlock,
    ResolveOptions,
    ResultShape,
)
from .substituter import ShowResolver, substitute_shows
from .transformers import (
    BlockTransformContext,
    CommentStripper,
    ContentTransformer,
    DefinitionStripper,
    FormatPipeline,
    RenderGuard,
    ShowSubstituter,
    TransformerPipeline,
)
from .validator import CollisionWarning, UniquenessValidator, ValidationResult

__all__ = [
    "TagGrammar",
    "DEFAULT_GRAMMAR",
    "sanitize_block_name",
    "BlockEntry",
    "BlockMap",
    "ExtractionResult",
    "extract_blocks",
    "ShowResolver",
    "substitute_shows",
    "strip_comments",
    "Multiplicity",
    "ResultShape",
    "ResolveOptions",
    "LanguageContext",
    "ResolvedBlock",
    "BlockResolver",
    "CollisionWarning",
    "ValidationResult",
    "UniquenessValidator",
    "RenderGuard",
    "BlockTransformContext",
    "ContentTransformer",
    "DefinitionStripper",
    "ShowSubstituter",
    "CommentStripper",
    "TransformerPipeline",
    "FormatPipeline",
]
