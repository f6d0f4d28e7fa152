from __future__ import annotations

from typing import Callable, List, Optional, Tuple

import pytest

from textblocks.core.blocks import (
    BlockResolver,
    LanguageContext,
    Multiplicity,
    ResolveOptions,
    ResultShape,
)
from textblocks.core.exceptions import StorageError
from textblocks.core.storage import Document, InMemoryStorage

SINGLE_A = "start_greet\nHello from A\nstop_greet"
SINGLE_B = "start_greet\nHello from B\nstop_greet"
MULTI = ResolveOptions(multiplicity=Multiplicity.MULTI)
ITEMIZED_MULTI = ResolveOptions(multiplicity=Multiplicity.MULTI, shape=ResultShape.ITEMIZED)


class CountingStorage(InMemoryStorage):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.queries: List[str] = []

    def find_documents(self, *, fields, contains, include_hidden=True):
        self.queries.append(contains)
        return super().find_documents(fields=fields, contains=contains, include_hidden=include_hidden)


class FailingStorage(InMemoryStorage):
    def find_documents(self, *, fields, contains, include_hidden=True):
        raise StorageError("backend unavailable")


class RecordingOverrides:
    def __init__(self, templates):
        self.templates = templates
        self.calls: List[Tuple[str, str]] = []

    def render(self, block_name: str, value: str, *, format_text: Optional[Callable[[str], str]] = None):
        self.calls.append((block_name, value))
        template = self.templates.get(block_name)
        return template.format(value=value) if template else None


class TestResolveOptions:
    def test_fields_accepts_a_single_name(self):
        assert ResolveOptions(fields="body").fields == ("body",)
        assert ResolveOptions(fields=["a", "b"]).fields == ("a", "b")
        assert ResolveOptions().fields is None

    def test_with_multiplicity_keeps_other_settings(self):
        options = ResolveOptions(fields="body", shape=ResultShape.ITEMIZED)
        multi = options.with_multiplicity(Multiplicity.MULTI)
        assert multi.multi and multi.itemized
        assert multi.fields == ("body",)


class TestSingleLookup:
    def test_first_matching_document_wins(self, make_storage):
        resolver = BlockResolver(make_storage(("a", SINGLE_A), ("b", SINGLE_B)))
        assert resolver.resolve("greet") == "Hello from A"

    def test_unknown_name_is_empty(self, make_storage):
        resolver = BlockResolver(make_storage(("a", SINGLE_A)))
        assert resolver.resolve("missing") == ""
        assert resolver.resolve("missing", ResolveOptions(shape=ResultShape.ITEMIZED)) == []

    def test_name_is_sanitized(self, make_storage):
        resolver = BlockResolver(make_storage(("a", SINGLE_A)))
        assert resolver.resolve("gr-eet!") == "Hello from A"
        assert resolver.resolve("!!!") == ""

    def test_does_not_see_multi_definitions(self, make_storage):
        resolver = BlockResolver(make_storage(("a", "start__greet\nmulti\nstop__greet")))
        assert resolver.resolve("greet") == ""

    def test_no_enabled_fields_means_empty(self, make_storage):
        storage = make_storage(("a", SINGLE_A), enabled_fields=())
        assert BlockResolver(storage).resolve("greet") == ""

    def test_explicit_field_scope(self):
        storage = InMemoryStorage(
            [Document(id="a", fields={"body": "", "sidebar": SINGLE_A})],
            enabled_fields=("body",),
        )
        resolver = BlockResolver(storage)
        assert resolver.resolve("greet") == ""
        assert resolver.resolve("greet", ResolveOptions(fields="sidebar")) == "Hello from A"

    def test_skips_non_viewable_documents(self):
        storage = InMemoryStorage(
            [
                Document(id="secret", fields={"body": SINGLE_A}, viewable=False),
                Document(id="public", fields={"body": SINGLE_B}),
            ]
        )
        assert BlockResolver(storage).resolve("greet") == "Hello from B"

    def test_unpublished_documents_are_searched(self):
        storage = InMemoryStorage([Document(id="draft", fields={"body": SINGLE_A}, published=False)])
        assert BlockResolver(storage).resolve("greet") == "Hello from A"

    def test_storage_failure_propagates(self):
        with pytest.raises(StorageError):
            BlockResolver(FailingStorage()).resolve("greet")


class TestMultiLookup:
    def test_collects_across_documents_in_order(self, make_storage):
        storage = make_storage(
            ("a", "start__item\nA1\nstop__item\nstart__item\nA2\nstop__item"),
            ("b", "unrelated"),
            ("c", "start__item\nC\nstop__item"),
        )
        resolver = BlockResolver(storage)
        assert resolver.resolve("item", MULTI) == "A1\nA2\nC"
        assert resolver.resolve("item", ITEMIZED_MULTI) == ["A1\nA2", "C"]

    def test_does_not_see_single_definitions(self, make_storage):
        resolver = BlockResolver(make_storage(("a", SINGLE_A)))
        assert resolver.resolve("greet", MULTI) == ""


class TestLanguageFallback:
    def _storage(self):
        return CountingStorage(
            [
                Document(
                    id="a",
                    fields={"body": {"en": "start_x\nEnglish\nstop_x", "fr": "start_y\nOui\nstop_y"}},
                )
            ]
        )

    def test_falls_back_to_default_language(self):
        storage = self._storage()
        resolver = BlockResolver(storage, language=LanguageContext(current="fr", default="en"))
        assert resolver.resolve("x") == "English"
        assert len(storage.queries) == 2

    def test_localized_match_is_preferred(self):
        storage = self._storage()
        resolver = BlockResolver(storage)
        assert resolver.resolve("y", language="fr") == "Oui"
        assert len(storage.queries) == 1

    def test_fallback_is_attempted_once(self):
        storage = self._storage()
        resolver = BlockResolver(storage)
        assert resolver.resolve("nothing", language="fr") == ""
        assert storage.queries == ["start_nothing", "start_nothing"]

    def test_no_fallback_under_default_language(self):
        storage = self._storage()
        assert BlockResolver(storage).resolve("nothing") == ""
        assert len(storage.queries) == 1


class TestOverrides:
    def test_override_replaces_joined_result(self, make_storage):
        overrides = RecordingOverrides({"greet": "<div>{value}</div>"})
        resolver = BlockResolver(make_storage(("a", SINGLE_A)), overrides=overrides)
        assert resolver.resolve("greet") == "<div>Hello from A</div>"

    def test_override_without_template_keeps_value(self, make_storage):
        overrides = RecordingOverrides({})
        resolver = BlockResolver(make_storage(("a", SINGLE_A)), overrides=overrides)
        assert resolver.resolve("greet") == "Hello from A"
        assert overrides.calls == [("greet", "Hello from A")]

    def test_override_not_consulted_for_misses_or_itemized(self, make_storage):
        overrides = RecordingOverrides({"greet": "<div>{value}</div>"})
        resolver = BlockResolver(make_storage(("a", SINGLE_A)), overrides=overrides)
        assert resolver.resolve("missing") == ""
        assert resolver.resolve("greet", ResolveOptions(shape=ResultShape.ITEMIZED)) == ["Hello from A"]
        assert overrides.calls == []


def test_resolution_does_not_modify_documents(make_storage):
    storage = make_storage(("a", SINGLE_A))
    BlockResolver(storage).resolve("greet")
    assert storage.get_document("a").get_field_value("body") == SINGLE_A
