from __future__ import annotations

import logging
from pathlib import Path

from textblocks.core.stdlib_logging import configure_stdlib_logging


def test_records_go_to_configured_file(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "textblocks.log"
    configure_stdlib_logging(log_path=log_path, level="WARNING")

    logging.getLogger("textblocks.core.blocks.validator").warning("collision on %s", "greeting")
    logging.getLogger("textblocks.core.blocks.validator").info("not written")

    content = log_path.read_text(encoding="utf-8")
    assert "WARNING textblocks.core.blocks.validator: collision on greeting" in content
    assert "not written" not in content


def test_configure_is_idempotent(tmp_path: Path) -> None:
    log_path = tmp_path / "textblocks.log"
    configure_stdlib_logging(log_path=log_path)
    configure_stdlib_logging(log_path=log_path)

    handlers = [h for h in logging.getLogger("textblocks").handlers if isinstance(h, logging.FileHandler)]
    assert len(handlers) == 1


def test_switching_paths_replaces_handler(tmp_path: Path) -> None:
    configure_stdlib_logging(log_path=tmp_path / "a.log")
    configure_stdlib_logging(log_path=tmp_path / "b.log")

    logging.getLogger("textblocks").warning("hello")
    assert "hello" not in (tmp_path / "a.log").read_text(encoding="utf-8")
    assert "hello" in (tmp_path / "b.log").read_text(encoding="utf-8")
