"""Block map: name -> content, with an explicit insertion policy."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple


@dataclass
class BlockEntry:
    """One block name and its (possibly joined) content."""

    name: str
    multi: bool
    content: str


@dataclass
class BlockMap:
    """Ordered mapping of block names to block content.

    Entries are keyed by ``(name, multi)`` with the name case-folded, so a
    single-value block and a multi-value block never share an entry, even
    when a single-value name ends in the separator (``start_a_`` next to
    ``start__a``). The separator-decorated form (``name_``) is only built
    for display in ``items()`` / ``as_dict()``.

    Insertion policy:
    - single-value: the first definition wins, later ones are ignored
    - multi-value: every definition is kept, newline-joined in document order
    """

    split_char: str = "_"
    entries: Dict[Tuple[str, bool], BlockEntry] = field(default_factory=dict)

    def add(self, name: str, content: str, *, multi: bool) -> None:
        key = (name.casefold(), multi)
        existing = self.entries.get(key)
        if existing is None:
            self.entries[key] = BlockEntry(name=name, multi=multi, content=content)
        elif multi:
            existing.content = existing.content + "\n" + content

    def lookup(self, name: str, *, multi: bool) -> Optional[str]:
        """Return content for ``name`` (case-insensitive), or None."""
        entry = self.entries.get((name.casefold(), multi))
        return None if entry is None else entry.content

    def single_names(self) -> Iterator[str]:
        """Yield names of single-value blocks in definition order."""
        for entry in self.entries.values():
            if not entry.multi:
                yield entry.name

    def records(self) -> Iterator[BlockEntry]:
        return iter(self.entries.values())

    def display_key(self, entry: BlockEntry) -> str:
        return f"{entry.name}{self.split_char}" if entry.multi else entry.name

    def items(self) -> Iterator[Tuple[str, str]]:
        for entry in self.entries.values():
            yield self.display_key(entry), entry.content

    def as_dict(self) -> Dict[str, str]:
        return dict(self.items())

    def _entry_for_key(self, key: str) -> Optional[BlockEntry]:
        # A decorated key names a single-value block first, a multi-value one second.
        entry = self.entries.get((key.casefold(), False))
        if entry is None and self.split_char and key.endswith(self.split_char):
            entry = self.entries.get((key[: -len(self.split_char)].casefold(), True))
        return entry

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._entry_for_key(key) is not None

    def __getitem__(self, key: str) -> str:
        entry = self._entry_for_key(key)
        if entry is None:
            raise KeyError(key)
        return entry.content

    def __iter__(self) -> Iterator[str]:
        for key, _content in self.items():
            yield key

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)


__all__ = ["BlockEntry", "BlockMap"]
