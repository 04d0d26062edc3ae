import json
import logging

from orders_api.app.obs.logging import JsonFormatter, configure_logging


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("pricing", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_pricing_fields():
    line = JsonFormatter().format(
        _record("discount rejected", wanted="loyalty", active="flat", req_id="r1")
    )
    data = json.loads(line)
    assert data["msg"] == "discount rejected"
    assert data["logger"] == "pricing"
    assert data["wanted"] == "loyalty"
    assert data["active"] == "flat"
    assert data["req_id"] == "r1"


def test_json_formatter_redacts_contact_details():
    data = json.loads(
        JsonFormatter().format(_record("receipt for guest@example.com 9876543210"))
    )
    assert "example.com" not in data["msg"]
    assert "9876543210" not in data["msg"]


def test_configure_logging_installs_json_handler():
    root = logging.getLogger()
    saved = root.handlers[:], root.level
    try:
        configure_logging("DEBUG")
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
    finally:
        root.handlers[:], level = saved
        root.setLevel(level)
