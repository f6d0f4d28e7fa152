"""Tag grammar for block markers.

Three marker words plus a separator make up the whole lexical surface:

- ``start_name`` ... ``stop_name``   single-value definition
- ``start__name`` ... ``stop__name`` multi-value definition (doubled separator)
- ``show_name`` / ``show__name``     reference, resolved at render time

Markers are recognised on their own line, inline, at either end of the
string, or wrapped in a single element by a rich text editor
(``<p>start_name</p>``). A wrapping element is only consumed when both its
opening and closing tag hug the marker, so unrelated markup stays balanced.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Mapping, Pattern

DEFAULT_START_WORD = "start"
DEFAULT_STOP_WORD = "stop"
DEFAULT_SHOW_WORD = "show"
DEFAULT_SPLIT_CHAR = "_"

_NAME = r"[a-z0-9][a-z0-9_]*"
_OPEN_TAG = r"<[a-z][a-z0-9]*(?:\s[^<>]*)?>[ \t]*"
_CLOSE_TAG = r"[ \t]*</[a-z][a-z0-9]*\s*>"
_NAME_STRIP = re.compile(r"[^A-Za-z0-9_]")


def sanitize_block_name(name: str) -> str:
    """Reduce ``name`` to the block-name charset (letters, digits, underscore)."""
    return _NAME_STRIP.sub("", name or "")


@dataclass(frozen=True)
class TagGrammar:
    """Marker words and the patterns derived from them.

    Instances are immutable; build a new one to change words. Patterns are
    compiled lazily and cached per instance.
    """

    start_word: str = DEFAULT_START_WORD
    stop_word: str = DEFAULT_STOP_WORD
    show_word: str = DEFAULT_SHOW_WORD
    split_char: str = DEFAULT_SPLIT_CHAR

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "TagGrammar":
        """Build a grammar from a ``grammar`` config section, defaults for gaps."""
        data = data or {}
        return cls(
            start_word=str(data.get("start_word") or DEFAULT_START_WORD),
            stop_word=str(data.get("stop_word") or DEFAULT_STOP_WORD),
            show_word=str(data.get("show_word") or DEFAULT_SHOW_WORD),
            split_char=str(data.get("split_char") or DEFAULT_SPLIT_CHAR),
        )

    @property
    def multi_separator(self) -> str:
        return self.split_char * 2

    # ------------------------------------------------------------------
    # Literals
    # ------------------------------------------------------------------
    def start_tag(self, name: str, *, multi: bool = False) -> str:
        """Return the literal start marker, e.g. ``start_name`` / ``start__name``."""
        return self._tag(self.start_word, name, multi)

    def stop_tag(self, name: str, *, multi: bool = False) -> str:
        return self._tag(self.stop_word, name, multi)

    def show_tag(self, name: str, *, multi: bool = False) -> str:
        return self._tag(self.show_word, name, multi)

    def _tag(self, word: str, name: str, multi: bool) -> str:
        sep = self.multi_separator if multi else self.split_char
        return f"{word}{sep}{name}"

    def is_multi_separator(self, sep: str) -> bool:
        return sep == self.multi_separator

    # ------------------------------------------------------------------
    # Prefix probes
    # ------------------------------------------------------------------
    def has_start_marker(self, text: str) -> bool:
        """Cheap check for a start marker prefix before running the full pattern."""
        return _contains(text, self.start_word + self.split_char)

    def has_show_marker(self, text: str) -> bool:
        return _contains(text, self.show_word + self.split_char)

    # ------------------------------------------------------------------
    # Patterns
    # ------------------------------------------------------------------
    @cached_property
    def definition_pattern(self) -> Pattern[str]:
        """``start_name ... stop_name`` with optional hugging wrapper tags.

        Groups: ``sep``, ``name``, ``content``. The stop marker must repeat the
        start marker's separator and name.
        """
        start = re.escape(self.start_word)
        stop = re.escape(self.stop_word)
        return re.compile(
            rf"(?P<start_open>{_OPEN_TAG})?"
            rf"(?<!\w){start}(?P<sep>{self._sep_pattern})(?P<name>{_NAME})(?!\w)"
            rf"(?(start_open){_CLOSE_TAG}|)"
            r"\s*(?P<content>.*?)\s*"
            rf"(?P<stop_open>{_OPEN_TAG})?"
            rf"(?<!\w){stop}(?P=sep)(?P=name)(?!\w)"
            rf"(?(stop_open){_CLOSE_TAG}|)",
            re.IGNORECASE | re.DOTALL | re.MULTILINE,
        )

    @cached_property
    def show_pattern(self) -> Pattern[str]:
        """``show_name`` / ``show__name`` with an optional hugging wrapper tag.

        Groups: ``sep``, ``name``.
        """
        show = re.escape(self.show_word)
        return re.compile(
            rf"(?P<open>{_OPEN_TAG})?"
            rf"(?<!\w){show}(?P<sep>{self._sep_pattern})(?P<name>{_NAME})(?!\w)"
            rf"(?(open){_CLOSE_TAG}|)",
            re.IGNORECASE | re.MULTILINE,
        )

    def marker_token_pattern(self, name: str) -> Pattern[str]:
        """Single-value start/stop markers for ``name`` as whole tokens.

        Token boundaries are the same as for definitions (no word character on
        either side), so markup, whitespace, punctuation, and the string edges
        all qualify. Used to rewrite colliding definitions into multi-value
        form.
        """
        words = "|".join(re.escape(w) for w in (self.start_word, self.stop_word))
        return re.compile(
            rf"(?<!\w)(?P<word>{words}){re.escape(self.split_char)}"
            rf"(?P<name>{re.escape(name)})(?!\w)",
            re.IGNORECASE,
        )

    @property
    def _sep_pattern(self) -> str:
        sep = re.escape(self.split_char)
        return f"{sep}(?:{sep})?"


def _contains(text: str, needle: str) -> bool:
    return bool(text) and needle.casefold() in text.casefold()


DEFAULT_GRAMMAR = TagGrammar()


__all__ = [
    "TagGrammar",
    "DEFAULT_GRAMMAR",
    "DEFAULT_START_WORD",
    "DEFAULT_STOP_WORD",
    "DEFAULT_SHOW_WORD",
    "DEFAULT_SPLIT_CHAR",
    "sanitize_block_name",
]
