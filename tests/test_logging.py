"""Tests for bindingdoc.logging."""

from __future__ import annotations

import logging
from pathlib import Path

from bindingdoc.logging import configure_logging, get_logger


def test_get_logger_nests_under_package_logger() -> None:
    assert get_logger().name == "bindingdoc"
    assert get_logger("crossref.index").name == "bindingdoc.crossref.index"


def test_repeated_configuration_does_not_stack_handlers() -> None:
    configure_logging()
    logger = configure_logging(verbose=True)

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False


def test_log_file_receives_child_records(tmp_path: Path) -> None:
    log_file = tmp_path / "bindingdoc.log"
    logger = configure_logging(log_file=log_file)

    get_logger("orchestrator").info("Linked %d module(s)", 2)
    for handler in logger.handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "bindingdoc.orchestrator: Linked 2 module(s)" in content
    configure_logging()
