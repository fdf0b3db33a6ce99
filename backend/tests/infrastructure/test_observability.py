"""Structured logging tests — JSON formatter fields and setup idempotence."""

import json
import logging
import sys

from app.infrastructure import observability
from app.infrastructure.observability import JSONFormatter, setup_logging


def _record(msg="hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "app.test", logging.INFO, __file__, 1, msg, None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_emits_base_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "app.test"
    assert payload["message"] == "hello"
    assert "timestamp" in payload


def test_json_formatter_surfaces_known_extras_only():
    payload = json.loads(JSONFormatter().format(
        _record(presentation_id="abc", contributor_id="1", unrelated="x"),
    ))
    assert payload["presentation_id"] == "abc"
    assert payload["contributor_id"] == "1"
    assert "unrelated" not in payload


def test_json_formatter_includes_exception():
    try:
        raise ValueError("bad")
    except ValueError:
        record = logging.LogRecord(
            "app.test", logging.ERROR, __file__, 1, "failed", None, sys.exc_info(),
        )
    payload = json.loads(JSONFormatter().format(record))
    assert "ValueError: bad" in payload["exception"]


def test_setup_logging_replaces_its_own_handler():
    setup_logging("DEBUG", "json")
    first = observability._handler
    setup_logging("WARNING", "text")
    try:
        assert first not in logging.root.handlers
        assert observability._handler in logging.root.handlers
        assert logging.root.level == logging.WARNING
    finally:
        logging.root.removeHandler(observability._handler)
        observability._handler = None
