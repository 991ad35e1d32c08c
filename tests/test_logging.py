"""Logging formatter tests."""

from __future__ import annotations

import logging

from npm_conformance.logging import CONSOLE_FORMAT, AssertionFormatter, get_logger


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        "npm_conformance.core", logging.INFO, __file__, 1, "FAIL %s", ("not-found",), None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_renders_assertion_id() -> None:
    formatter = AssertionFormatter(CONSOLE_FORMAT)

    line = formatter.format(_record(assertion_id="bundles:fesm2020:testing:source-map"))

    assert line == "[npm-conformance] [bundles:fesm2020:testing:source-map] INFO FAIL not-found"


def test_formatter_without_assertion_id() -> None:
    formatter = AssertionFormatter(CONSOLE_FORMAT)

    assert formatter.format(_record()) == "[npm-conformance] INFO FAIL not-found"


def test_get_logger_is_namespaced() -> None:
    assert get_logger("core").name == "npm_conformance.core"
    assert get_logger().name == "npm_conformance"
