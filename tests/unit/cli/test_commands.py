from __future__ import annotations

import json
from pathlib import Path

import pytest

from helpers.files import write_document, write_project_config
from textblocks.cli._dispatcher import main


def run(project: Path, *argv: str) -> int:
    return main([*argv, "--repo-root", str(project)])


@pytest.fixture
def project(isolated_project: Path, documents_dir: Path) -> Path:
    write_document(documents_dir, "intro", {"body": "start_hello\nHello World!\nstop_hello"})
    write_document(documents_dir, "page", {"body": "<p>show_hello</p><!-- editor note -->"})
    return isolated_project


class TestRender:
    def test_text_output(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run(project, "render", "page") == 0
        assert capsys.readouterr().out.strip() == "Hello World!"

    def test_json_output(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run(project, "render", "intro", "--json") == 0
        data = json.loads(capsys.readouterr().out)
        assert data["text"] == "Hello World!"
        assert data["blocks_defined"] == ["hello"]
        assert data["document_id"] == "intro"

    def test_missing_document(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run(project, "render", "nope") == 1
        assert "Document not found: nope" in capsys.readouterr().err


class TestGet:
    def test_found(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run(project, "get", "hello") == 0
        assert capsys.readouterr().out.strip() == "Hello World!"

    def test_missing_block_exits_nonzero(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run(project, "get", "nothing", "--json") == 1
        assert json.loads(capsys.readouterr().out)["value"] == ""

    def test_multi_itemized(self, project: Path, documents_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        write_document(documents_dir, "l1", {"body": "start__item\none\nstop__item"})
        write_document(documents_dir, "l2", {"body": "start__item\ntwo\nstop__item"})
        assert run(project, "get", "item", "--multi", "--itemized", "--json") == 0
        assert json.loads(capsys.readouterr().out)["value"] == ["one", "two"]


class TestSave:
    def test_collision_is_rewritten_and_reported(
        self, project: Path, documents_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        source = tmp_path / "new.txt"
        source.write_text("start_hello\nBonjour\nstop_hello", encoding="utf-8")

        assert run(project, "save", "second", "--create", "--file", str(source)) == 0
        captured = capsys.readouterr()
        assert "start__hello" in captured.err
        assert "Saved second.body" in captured.out
        saved = (documents_dir / "second.yaml").read_text(encoding="utf-8")
        assert "start__hello" in saved

    def test_unknown_document_requires_create(
        self, project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        source = tmp_path / "new.txt"
        source.write_text("text", encoding="utf-8")
        assert run(project, "save", "ghost", "--file", str(source)) == 1
        assert "Document not found: ghost" in capsys.readouterr().err

    def test_missing_file_is_reported(
        self, project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run(project, "save", "page", "--file", str(tmp_path / "absent.txt")) == 1
        err = capsys.readouterr().err
        assert err.startswith("Error: Cannot read")
        assert "Traceback" not in err

    def test_create_refuses_path_like_id(
        self, project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        source = tmp_path / "new.txt"
        source.write_text("text", encoding="utf-8")
        assert run(project, "save", "../escape", "--create", "--file", str(source)) == 1
        assert "Invalid document id" in capsys.readouterr().err
        assert not (project / ".textblocks" / "escape.yaml").exists()

    def test_reads_stdin(self, project: Path, documents_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        import io

        monkeypatch.setattr("sys.stdin", io.StringIO("updated"))
        assert run(project, "save", "page") == 0
        assert "updated" in (documents_dir / "page.yaml").read_text(encoding="utf-8")


class TestBlocks:
    def test_lists_definitions(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run(project, "blocks", "intro") == 0
        assert "hello: Hello World!" in capsys.readouterr().out

    def test_json(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run(project, "blocks", "intro", "--json") == 0
        assert json.loads(capsys.readouterr().out) == [
            {"key": "hello", "multi": False, "content": "Hello World!"}
        ]


class TestCheckDisable:
    def test_blocked_while_fields_enabled(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run(project, "check-disable") == 1
        assert "still enabled on field(s): body" in capsys.readouterr().err

    def test_allowed_without_fields(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        write_project_config(project, "storage.yaml", {"storage": {"fields": []}})
        assert run(project, "check-disable") == 0
        assert "can be disabled" in capsys.readouterr().out


class TestConfigGroup:
    def test_show_key_as_json(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run(project, "config", "show", "grammar.start_word", "--json") == 0
        assert json.loads(capsys.readouterr().out) == {"grammar.start_word": "start"}

    def test_show_all_as_yaml(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run(project, "config", "show") == 0
        assert "start_word: start" in capsys.readouterr().out

    def test_validate_ok(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run(project, "config", "validate") == 0
        assert "Configuration valid" in capsys.readouterr().out

    def test_validate_reports_problems(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        write_project_config(project, "grammar.yaml", {"grammar": {"show_word": "start"}})
        assert run(project, "config", "validate", "--json") == 1
        data = json.loads(capsys.readouterr().out)
        assert data["valid"] is False
        assert any("already used" in e for e in data["errors"])

    def test_validate_strict_fails_on_warnings(self, project: Path) -> None:
        write_project_config(project, "storage.yaml", {"storage": {"fields": []}})
        assert run(project, "config", "validate") == 0
        assert run(project, "config", "validate", "--strict") == 1


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 0
    assert "textblocks" in capsys.readouterr().out


def test_invalid_config_is_reported(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_project_config(project, "grammar.yaml", {"grammar": {"split_char": "x"}})
    assert run(project, "render", "intro") == 1
    assert "Invalid configuration" in capsys.readouterr().err
