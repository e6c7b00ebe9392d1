"""Logger setup shared by the CLI, the service and the linking pipeline.

Library modules only call ``get_logger``; handlers are installed once by the
entry point through ``configure_logging``.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "bindingdoc"
_CONSOLE_FORMAT = "[bindingdoc] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``bindingdoc.<name>``, e.g. ``get_logger("crossref.index")``."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route bindingdoc records to stderr and, when given, to ``log_file``.

    ``verbose`` lowers the threshold to DEBUG, which surfaces per-item merge
    and synthesis decisions.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # One handler set per process.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
