"""
Tests for logging setup.
"""

import logging
from logging.handlers import RotatingFileHandler

from app.utils import logging_config
from app.utils.logging_config import setup_logging

from conftest import make_settings


def test_console_only_without_file_logging(tmp_path):
    root = setup_logging(make_settings(tmp_path, LOG_TO_FILE=False))

    assert len(root.handlers) == 1
    assert not isinstance(root.handlers[0], RotatingFileHandler)


def test_repeated_setup_does_not_duplicate_handlers(tmp_path):
    settings = make_settings(tmp_path, LOG_TO_FILE=False)
    setup_logging(settings)
    root = setup_logging(settings)

    assert len(root.handlers) == 1


def test_file_logging_writes_general_and_error_logs(tmp_path, monkeypatch):
    monkeypatch.setattr(logging_config, "LOG_DIR", tmp_path / "logs")
    root = setup_logging(make_settings(tmp_path, LOG_TO_FILE=True, DEBUG=False))

    logging.getLogger("app.test").error("cache backend unreachable")
    for handler in root.handlers:
        handler.flush()

    assert (tmp_path / "logs" / "weather_api.log").read_text(encoding="utf-8").count("unreachable") == 1
    assert "unreachable" in (tmp_path / "logs" / "weather_api_errors.log").read_text(encoding="utf-8")

    for handler in root.handlers:
        handler.close()
    setup_logging(make_settings(tmp_path, LOG_TO_FILE=False))


def test_noisy_libraries_are_quieted(tmp_path):
    setup_logging(make_settings(tmp_path, LOG_TO_FILE=False))

    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
    assert logging.getLogger("passlib").level == logging.ERROR
