"""Structured Logging — JSONFormatter surfaces extra fields."""

import json
import logging

from restaurants.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "restaurants.test", logging.INFO, __file__, 1, "Dish created", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "restaurants.test"
    assert log["message"] == "Dish created"
    assert "timestamp" in log


def test_includes_known_extras_only():
    log = json.loads(JSONFormatter().format(
        _record(dish_id="d1", restaurant_id="r1", request_type="CreateDish", secret="x"),
    ))
    assert log["dish_id"] == "d1"
    assert log["restaurant_id"] == "r1"
    assert log["request_type"] == "CreateDish"
    assert "secret" not in log
