"""Logging utilities for npm-conformance runs.

Records emitted for a single assertion carry its ID through
``extra={"assertion_id": ...}``; the formatters render it in brackets so a
log line can be matched back to the report entry it belongs to.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "npm_conformance"

CONSOLE_FORMAT = "[npm-conformance]%(assertion)s %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s%(assertion)s: %(message)s"


class AssertionFormatter(logging.Formatter):
    """Formatter exposing ``%(assertion)s``: `` [<assertion id>]`` or empty."""

    def format(self, record: logging.LogRecord) -> str:
        assertion_id = getattr(record, "assertion_id", None)
        record.assertion = f" [{assertion_id}]" if assertion_id else ""
        return super().format(record)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the npm_conformance hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the package logger: console output plus an optional file sink.

    Verbose runs log every passing assertion at DEBUG; otherwise only failures
    and the run totals are shown.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Repeated CLI invocations in one process must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(AssertionFormatter(CONSOLE_FORMAT))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(AssertionFormatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["AssertionFormatter", "configure_logging", "get_logger"]
