"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging

from chirpy.core.logger import JSONFormatter, configure_logging, log_auth_event


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""

    configure_logging("DEBUG")
    try:
        assert logging.getLogger().level == logging.DEBUG
    finally:
        configure_logging("INFO")


def test_json_formatter_includes_extra_fields() -> None:
    record = logging.LogRecord("chirpy.test", logging.INFO, __file__, 1, "hello %s", ("you",), None)
    record.request_id = "req-1"
    record.identity_id = "abc"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "hello you"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "req-1"
    assert payload["identity_id"] == "abc"


def test_log_auth_event_records_event_and_fields(caplog) -> None:
    logger = logging.getLogger("chirpy.test.auth")

    with caplog.at_level(logging.WARNING, logger="chirpy.test.auth"):
        log_auth_event(logger, "login_failed", identity_id="u-1", reason=None)

    (record,) = caplog.records
    assert record.levelno == logging.WARNING
    assert record.auth_event == "login_failed"
    assert record.identity_id == "u-1"
    assert not hasattr(record, "reason")
