"""Structured Logging — JSON formatter surfaces exchange extras."""

import json
import logging

from app.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "app.services.purchase_engine", logging.INFO, __file__, 1,
        "Ticket purchased", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_extras():
    line = JSONFormatter().format(_record(ticket_id="T1", username="bob", price=80))

    payload = json.loads(line)
    assert payload["message"] == "Ticket purchased"
    assert payload["level"] == "INFO"
    assert payload["ticket_id"] == "T1"
    assert payload["price"] == 80
    assert "step" not in payload


def test_setup_logging_is_idempotent():
    setup_logging("DEBUG", "text")
    setup_logging("INFO", "json")

    named = [h for h in logging.root.handlers if h.get_name() == "exchange"]
    assert len(named) == 1
    assert isinstance(named[0].formatter, JSONFormatter)
