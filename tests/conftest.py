import os
import sys
from pathlib import Path
from typing import Any, Callable

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'textblocks' and tests/ as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from textblocks.core.stdlib_logging import reset_stdlib_logging_for_tests
from textblocks.core.storage import Document, InMemoryStorage


@pytest.fixture(autouse=True)
def _clean_textblocks_env(monkeypatch: pytest.MonkeyPatch):
    """Drop TEXTBLOCKS_* variables so config loads only see what a test sets."""
    for key in list(os.environ):
        if key.startswith("TEXTBLOCKS_"):
            monkeypatch.delenv(key, raising=False)
    yield
    reset_stdlib_logging_for_tests()


@pytest.fixture
def make_storage() -> Callable[..., InMemoryStorage]:
    """Build an InMemoryStorage from ``(id, body)`` pairs or Document objects."""

    def _make(*documents: Any, enabled_fields=("body",)) -> InMemoryStorage:
        docs = []
        for item in documents:
            if isinstance(item, Document):
                docs.append(item)
            else:
                doc_id, body = item
                docs.append(Document(id=doc_id, fields={"body": body}))
        return InMemoryStorage(docs, enabled_fields=enabled_fields)

    return _make


@pytest.fixture
def isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A project root with an empty .textblocks/ layout, used as cwd."""
    (tmp_path / ".textblocks" / "config").mkdir(parents=True)
    (tmp_path / ".textblocks" / "documents").mkdir(parents=True)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def documents_dir(isolated_project: Path) -> Path:
    return isolated_project / ".textblocks" / "documents"
