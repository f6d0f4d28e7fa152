from __future__ import annotations

from textblocks.core.exceptions import (
    ConfigurationError,
    DocumentNotFoundError,
    EngineInUseError,
    StorageError,
    TextBlocksError,
)


def test_context_is_copied() -> None:
    ctx = {"path": "x"}
    err = TextBlocksError("boom", context=ctx)
    ctx["path"] = "y"
    assert err.context == {"path": "x"}


def test_to_json_error() -> None:
    payload = ConfigurationError("bad", context={"problems": ["p"]}).to_json_error()
    assert payload == {"message": "bad", "code": "ConfigurationError", "context": {"problems": ["p"]}}


def test_hierarchy() -> None:
    assert issubclass(ConfigurationError, ValueError)
    assert issubclass(StorageError, RuntimeError)
    assert issubclass(DocumentNotFoundError, StorageError)
    assert issubclass(DocumentNotFoundError, KeyError)


def test_engine_in_use_lists_fields_sorted() -> None:
    err = EngineInUseError(["sidebar", "body"])
    assert err.fields == ["body", "sidebar"]
    assert str(err) == "Cannot disable textblocks: still enabled on field(s): body, sidebar"
    assert err.context == {"fields": ["body", "sidebar"]}
