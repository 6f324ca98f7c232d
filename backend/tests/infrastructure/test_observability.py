"""Structured Logging — JSON formatter surfaces known extras only."""

import json
import logging

from taskboard.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "taskboard.test", logging.INFO, __file__, 1, "Task created", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_formats_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "taskboard.test"
    assert log["message"] == "Task created"


def test_surfaces_known_extras_as_strings():
    log = json.loads(JSONFormatter().format(_record(task_id=123, action="TASK_CREATED")))
    assert log["task_id"] == "123"
    assert log["action"] == "TASK_CREATED"


def test_ignores_unknown_extras():
    log = json.loads(JSONFormatter().format(_record(password_hash="secret")))
    assert "password_hash" not in log
