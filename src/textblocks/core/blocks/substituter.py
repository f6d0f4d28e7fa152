"""Show-marker substitution."""
from __future__ import annotations

import logging
import re
from typing import Callable, Dict

from .grammar import DEFAULT_GRAMMAR, TagGrammar

logger = logging.getLogger(__name__)

# (name, multi) -> replacement text
ShowResolver = Callable[[str, bool], str]


def substitute_shows(
    text: str,
    resolve: ShowResolver,
    *,
    grammar: TagGrammar = DEFAULT_GRAMMAR,
) -> str:
    """Replace every show marker in ``text`` with ``resolve(name, multi)``.

    The whole matched span (marker plus a hugging wrapper tag) is replaced.
    Identical spans resolve once and get identical replacements. Inserted
    content is not rescanned, so show markers inside a resolved block stay
    literal.

    A resolver failure for one reference degrades that reference to an empty
    string; the remaining references are still processed.
    """
    if not grammar.has_show_marker(text):
        return text

    resolved: Dict[str, str] = {}

    def replacer(match: re.Match[str]) -> str:
        span = match.group(0)
        if span not in resolved:
            resolved[span] = _resolve_one(
                resolve,
                match.group("name"),
                grammar.is_multi_separator(match.group("sep")),
            )
        return resolved[span]

    return grammar.show_pattern.sub(replacer, text)


def _resolve_one(resolve: ShowResolver, name: str, multi: bool) -> str:
    try:
        value = resolve(name, multi)
    except Exception:
        logger.warning("Failed to resolve block %r (multi=%s)", name, multi, exc_info=True)
        return ""
    return "" if value is None else str(value)


__all__ = ["ShowResolver", "substitute_shows"]
