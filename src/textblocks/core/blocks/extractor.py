"""Block extraction: find ``start_name ... stop_name`` regions in one document."""
from __future__ import annotations

import re
from dataclasses import dataclass

from .blockmap import BlockMap
from .grammar import DEFAULT_GRAMMAR, TagGrammar


@dataclass(frozen=True)
class ExtractionResult:
    """Blocks found in a document and the document text afterwards.

    ``text`` is the input unchanged unless stripping was requested, in which
    case every definition span is replaced by its inner content.
    """

    blocks: BlockMap
    text: str


def extract_blocks(
    text: str,
    *,
    remove_from_text: bool = False,
    grammar: TagGrammar = DEFAULT_GRAMMAR,
) -> ExtractionResult:
    """Scan ``text`` for block definitions, left to right.

    Extraction is single-pass: a definition nested inside another one stays
    as literal marker text in the outer block's content. Unterminated start
    markers and stray stop markers are left untouched.

    Args:
        text: Document text
        remove_from_text: Replace each definition span with its content
        grammar: Marker grammar

    Returns:
        ExtractionResult with the block map and (possibly stripped) text
    """
    blocks = BlockMap(split_char=grammar.split_char)
    if not grammar.has_start_marker(text):
        return ExtractionResult(blocks=blocks, text=text)

    def collect(match: re.Match[str]) -> str:
        content = match.group("content")
        blocks.add(
            match.group("name"),
            content,
            multi=grammar.is_multi_separator(match.group("sep")),
        )
        return content

    if remove_from_text:
        stripped = grammar.definition_pattern.sub(collect, text)
        return ExtractionResult(blocks=blocks, text=stripped)

    for match in grammar.definition_pattern.finditer(text):
        collect(match)
    return ExtractionResult(blocks=blocks, text=text)


__all__ = ["ExtractionResult", "extract_blocks"]
