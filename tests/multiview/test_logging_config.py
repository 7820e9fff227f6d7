import json
import logging

import pytest
from pythonjsonlogger import jsonlogger

from multiview.logging_config import configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_is_default(monkeypatch, restore_root_logger):
    monkeypatch.delenv("MULTIVIEW_LOG_FORMAT", raising=False)

    configure_logging()

    handlers = restore_root_logger.handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0].formatter, jsonlogger.JsonFormatter)


def test_env_var_selects_plain(monkeypatch, restore_root_logger):
    monkeypatch.setenv("MULTIVIEW_LOG_FORMAT", "PLAIN")

    configure_logging(level=logging.DEBUG)

    assert restore_root_logger.level == logging.DEBUG
    assert not isinstance(restore_root_logger.handlers[0].formatter, jsonlogger.JsonFormatter)


def test_json_records_carry_extra_fields(restore_root_logger):
    configure_logging(force_format="json")
    formatter = restore_root_logger.handlers[0].formatter
    record = logging.LogRecord("multiview.test", logging.INFO, __file__, 1, "Explorer ready", None, None)
    record.current_view = "grid"

    payload = json.loads(formatter.format(record))

    assert payload["message"] == "Explorer ready"
    assert payload["current_view"] == "grid"
