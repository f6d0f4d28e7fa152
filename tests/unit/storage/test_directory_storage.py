from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from helpers.files import write_document
from textblocks.core.exceptions import DocumentNotFoundError, StorageError
from textblocks.core.storage import BlockStorage, DirectoryStorage, Document


class TestDirectoryStorage:
    def test_loads_documents_in_file_name_order(self, tmp_path: Path):
        write_document(tmp_path, "b", {"body": "start_x\nB\nstop_x"})
        write_document(tmp_path, "a", {"body": "start_x\nA\nstop_x"})
        storage = DirectoryStorage(tmp_path)
        found = storage.find_documents(fields=["body"], contains="start_x")
        assert [d.id for d in found] == ["a", "b"]

    def test_document_attributes(self, tmp_path: Path):
        write_document(
            tmp_path,
            "draft",
            {"body": {"en": "hi", "fr": "salut"}},
            published=False,
            viewable=False,
            default_language="fr",
        )
        doc = DirectoryStorage(tmp_path).get_document("draft")
        assert not doc.published
        assert not doc.is_viewable()
        assert doc.get_field_value("body") == "salut"

    def test_hidden_filter(self, tmp_path: Path):
        write_document(tmp_path, "draft", {"body": "start_x"}, published=False)
        storage = DirectoryStorage(tmp_path)
        assert storage.find_documents(fields=["body"], contains="start_x", include_hidden=False) == []

    def test_save_round_trip(self, tmp_path: Path):
        storage = DirectoryStorage(tmp_path / "docs")
        storage.save_document(Document(id="new", fields={"body": "line one\nline two"}))
        raw = (tmp_path / "docs" / "new.yaml").read_text(encoding="utf-8")
        assert "body: |" in raw
        assert storage.get_document("new").get_field_value("body") == "line one\nline two"

    def test_save_overwrites_existing_yml(self, tmp_path: Path):
        (tmp_path / "old.yml").write_text(yaml.safe_dump({"fields": {"body": "v1"}}), encoding="utf-8")
        storage = DirectoryStorage(tmp_path)
        doc = storage.get_document("old")
        doc.set_field_value("body", "v2")
        storage.save_document(doc)
        assert not (tmp_path / "old.yaml").exists()
        assert storage.get_document("old").get_field_value("body") == "v2"

    def test_missing_document(self, tmp_path: Path):
        with pytest.raises(DocumentNotFoundError):
            DirectoryStorage(tmp_path).get_document("nope")

    def test_invalid_yaml_is_a_storage_error(self, tmp_path: Path):
        (tmp_path / "bad.yaml").write_text("fields: [unclosed\n", encoding="utf-8")
        with pytest.raises(StorageError):
            DirectoryStorage(tmp_path).get_document("bad")

    def test_non_mapping_document_is_a_storage_error(self, tmp_path: Path):
        (tmp_path / "list.yaml").write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(StorageError, match="must be a mapping"):
            DirectoryStorage(tmp_path).get_document("list")

    @pytest.mark.parametrize("doc_id", ["../escape", "sub/doc", "..", "a\\b", ""])
    def test_path_like_ids_are_refused(self, tmp_path: Path, doc_id: str):
        root = tmp_path / "documents"
        root.mkdir()
        storage = DirectoryStorage(root)
        with pytest.raises(StorageError, match="Invalid document id"):
            storage.save_document(Document(id=doc_id, fields={"body": "x"}))
        with pytest.raises(StorageError, match="Invalid document id"):
            storage.get_document(doc_id)
        assert list(tmp_path.rglob("*.yaml")) == []

    def test_missing_root_has_no_documents(self, tmp_path: Path):
        storage = DirectoryStorage(tmp_path / "absent")
        assert storage.find_documents(fields=["body"], contains="start_") == []

    def test_satisfies_protocol(self, tmp_path: Path):
        assert isinstance(DirectoryStorage(tmp_path), BlockStorage)
