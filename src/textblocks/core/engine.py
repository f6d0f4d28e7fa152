"""Public entry points: render-time formatting, pre-save validation, lookups."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Set

from .blocks.grammar import DEFAULT_GRAMMAR, TagGrammar
from .blocks.resolver import (
    BlockResolver,
    LanguageContext,
    Multiplicity,
    OverrideRenderer,
    ResolvedBlock,
    ResolveOptions,
)
from .blocks.transformers import BlockTransformContext, FormatPipeline, RenderGuard
from .blocks.validator import UniquenessValidator, ValidationResult
from .exceptions import EngineInUseError
from .storage.base import DEFAULT_CAPABILITY, BlockStorage, StoredDocument

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    """Formatted text plus what the render touched."""

    text: str
    blocks_defined: List[str] = field(default_factory=list)
    blocks_shown: Set[str] = field(default_factory=set)
    blocks_missing: Set[str] = field(default_factory=set)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "blocks_defined": list(self.blocks_defined),
            "blocks_shown": sorted(self.blocks_shown),
            "blocks_missing": sorted(self.blocks_missing),
        }


class BlockEngine:
    """Facade over the block engine for a render/save pipeline.

    Example:
        engine = BlockEngine(InMemoryStorage([...]))
        html = engine.format_document_text(text)
        result = engine.before_save(doc_id, None, new_text, original=old_text)
        greeting = engine.get_block("greeting")
    """

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
        self.capability = capability
        self.resolver = BlockResolver(
            storage,
            grammar=grammar,
            language=language,
            overrides=overrides,
            capability=capability,
        )
        self.validator = UniquenessValidator(storage, grammar=grammar)
        self.pipeline = FormatPipeline()

    @classmethod
    def from_config(
        cls,
        repo_root: Optional[Path] = None,
        *,
        storage: Optional[BlockStorage] = None,
        config: Optional[Dict[str, Any]] = None,
    ) -> "BlockEngine":
        """Build an engine from merged configuration.

        Without an explicit ``storage`` the configured document directory is
        used.
        """
        # Lazy import: config domains import engine-level modules.
        from .config import ConfigManager
        from .config.domains import GrammarConfig, LanguageConfig, StorageConfig, TemplatesConfig

        if config is None:
            config = ConfigManager(repo_root).load_config()
        storage_cfg = StorageConfig(repo_root, config=config)
        return cls(
            storage if storage is not None else storage_cfg.open(),
            grammar=GrammarConfig(repo_root, config=config).grammar,
            language=LanguageConfig(repo_root, config=config).context,
            overrides=TemplatesConfig(repo_root, config=config).renderer(),
            capability=storage_cfg.capability,
        )

    # ------------------------------------------------------------------
    # Render path
    # ------------------------------------------------------------------
    def format_document_text(
        self,
        text: str,
        *,
        guard: Optional[RenderGuard] = None,
        language: Optional[str] = None,
    ) -> str:
        """Format one field value: strip definitions, resolve shows, strip comments.

        Pass the caller's ``guard`` to share one reentrancy scope across nested
        calls; a fresh guard is used otherwise.
        """
        return self.render(text, guard=guard, language=language).text

    def render(
        self,
        text: str,
        *,
        guard: Optional[RenderGuard] = None,
        language: Optional[str] = None,
    ) -> RenderResult:
        """Like :meth:`format_document_text`, also reporting block activity."""
        guard = guard or RenderGuard()

        def format_text(nested: str) -> str:
            return self.format_document_text(nested, guard=guard, language=language)

        def resolve(name: str, multi: bool) -> str:
            options = ResolveOptions(multiplicity=Multiplicity.MULTI if multi else Multiplicity.SINGLE)
            value = self.resolver.resolve(name, options, language=language, format_text=format_text)
            return value if isinstance(value, str) else "\n".join(value)

        context = BlockTransformContext(grammar=self.grammar, resolve=resolve, guard=guard)
        formatted = self.pipeline.format(text, context)
        return RenderResult(
            text=formatted,
            blocks_defined=list(context.blocks_defined),
            blocks_shown=set(context.blocks_shown),
            blocks_missing=set(context.blocks_missing),
        )

    # ------------------------------------------------------------------
    # Save path
    # ------------------------------------------------------------------
    def before_save(
        self,
        document_id: str,
        fields: Optional[Sequence[str]],
        text: str,
        *,
        original: Optional[str] = None,
    ) -> ValidationResult:
        """Validate a field value about to be persisted.

        Skipped when ``original`` is given and equals ``text``. ``fields`` is
        the probe scope; None means every engine-enabled field.
        """
        if original is not None and text == original:
            return ValidationResult(text=text)
        scope = list(fields) if fields is not None else self.enabled_fields()
        return self.validator.validate(document_id, scope, text)

    def save_field(
        self,
        document: StoredDocument,
        field_name: str,
        text: str,
        *,
        language: Optional[str] = None,
    ) -> ValidationResult:
        """Validate ``text``, write it to ``document`` and persist the document."""
        original = document.get_field_value(field_name, language)
        result = self.before_save(document.id, None, text, original=original)
        document.set_field_value(field_name, result.text, language)
        self.storage.save_document(document)
        return result

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def get_block(
        self,
        name: str,
        options: Optional[ResolveOptions] = None,
        *,
        language: Optional[str] = None,
    ) -> ResolvedBlock:
        """Resolve ``name``; single-value unless ``options`` say otherwise."""
        return self.resolver.resolve(name, options, language=language)

    def get_multi_block(
        self,
        name: str,
        options: Optional[ResolveOptions] = None,
        *,
        language: Optional[str] = None,
    ) -> ResolvedBlock:
        """Resolve every multi-value definition of ``name``."""
        options = (options or ResolveOptions()).with_multiplicity(Multiplicity.MULTI)
        return self.resolver.resolve(name, options, language=language)

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------
    def enabled_fields(self) -> List[str]:
        return list(self.storage.find_fields_by_capability(self.capability))

    def ensure_can_disable(self) -> None:
        """Refuse to disable the engine while any field still depends on it.

        Raises:
            EngineInUseError: Listing the dependent fields
        """
        fields = self.enabled_fields()
        if fields:
            raise EngineInUseError(fields)


__all__ = ["BlockEngine", "RenderResult"]
