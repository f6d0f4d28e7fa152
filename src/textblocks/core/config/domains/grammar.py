"""Marker grammar settings.

The four grammar values are the only administrative surface of the engine.
They are checked when configuration is loaded, never at render time.
"""
from __future__ import annotations

import re
from functools import cached_property
from typing import Any, List, Mapping

from textblocks.core.blocks.grammar import TagGrammar

from ..base import BaseDomainConfig

_WORD_RE = re.compile(r"^[A-Za-z][A-Za-z0-9]*$")
_WORD_KEYS = ("start_word", "stop_word", "show_word")


def grammar_problems(section: Mapping[str, Any]) -> List[str]:
    """Return human-readable problems with a ``grammar`` section (empty if valid)."""
    problems: List[str] = []
    words = {}
    for key in _WORD_KEYS:
        value = section.get(key)
        if not isinstance(value, str) or not _WORD_RE.match(value):
            problems.append(f"grammar.{key}: must be a non-empty alphanumeric word starting with a letter")
        else:
            words[key] = value

    folded = {}
    for key, value in words.items():
        other = folded.get(value.casefold())
        if other is not None:
            problems.append(f"grammar.{key}: '{value}' is already used by grammar.{other}")
        else:
            folded[value.casefold()] = key

    split_char = section.get("split_char")
    if (
        not isinstance(split_char, str)
        or len(split_char) != 1
        or split_char.isalnum()
        or split_char.isspace()
        or split_char in "<>"
    ):
        problems.append(
            "grammar.split_char: must be a single character that is not a letter, "
            "digit, whitespace, '<' or '>'"
        )
    return problems


class GrammarConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "grammar"

    @cached_property
    def grammar(self) -> TagGrammar:
        return TagGrammar.from_mapping(self.section)


__all__ = ["GrammarConfig", "grammar_problems"]
