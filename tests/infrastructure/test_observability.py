"""Structured logging — JSON formatter output and handler installation."""

import json
import logging

from restaurant_api.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    return logging.getLogger("restaurant_api.test").makeRecord(
        "restaurant_api.test", logging.WARNING, __file__, 1,
        "Restaurant %s not found", ("abc",), None, extra=extra,
    )


def test_base_fields_present():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "WARNING"
    assert log["logger"] == "restaurant_api.test"
    assert log["message"] == "Restaurant abc not found"
    assert "timestamp" in log


def test_known_extra_fields_surfaced():
    log = json.loads(JSONFormatter().format(
        _record(restaurant_id="507f1f77bcf86cd799439011", error_code="RESOURCE_NOT_FOUND"),
    ))
    assert log["restaurant_id"] == "507f1f77bcf86cd799439011"
    assert log["error_code"] == "RESOURCE_NOT_FOUND"


def test_unknown_and_empty_extras_omitted():
    log = json.loads(JSONFormatter().format(_record(borough=None, secret="x")))
    assert "borough" not in log
    assert "secret" not in log


def test_setup_logging_keeps_one_handler(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", list(root.handlers))
    monkeypatch.setattr(root, "level", root.level)

    setup_logging("DEBUG")
    setup_logging("WARNING", "text")

    ours = [h for h in root.handlers if h.get_name() == "restaurant_api"]
    assert len(ours) == 1
    assert not isinstance(ours[0].formatter, JSONFormatter)
    assert root.level == logging.WARNING
