# tests/test_logger.py
"""Unit tests for the settings-driven logging setup."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import logging
from logging.handlers import RotatingFileHandler
from app.config import Settings
from app.utils.logger import build_handlers, get_logger, log_file_path


def close_all(handlers):
    for handler in handlers:
        handler.close()


class TestLogHandlers:
    def test_file_handler_uses_configured_rotation(self, tmp_path):
        config = Settings(LOG_DIR=str(tmp_path), LOG_FILE_NAME="court.log",
                          LOG_MAX_BYTES=1024, LOG_BACKUP_COUNT=3, LOG_LEVEL="debug")
        handlers = build_handlers(config)
        try:
            rotating = [h for h in handlers if isinstance(h, RotatingFileHandler)]
            assert len(rotating) == 1
            assert rotating[0].baseFilename == str(tmp_path / "court.log")
            assert rotating[0].maxBytes == 1024
            assert rotating[0].backupCount == 3
            assert rotating[0].level == logging.DEBUG
        finally:
            close_all(handlers)

    def test_file_logging_can_be_disabled(self, tmp_path):
        config = Settings(LOG_DIR=str(tmp_path), LOG_FILE_ENABLED=False)
        handlers = build_handlers(config)
        try:
            assert len(handlers) == 1
            assert not isinstance(handlers[0], RotatingFileHandler)
            assert not (tmp_path / "park_pulse.log").exists()
        finally:
            close_all(handlers)

    def test_default_log_dir_is_project_logs(self):
        path = log_file_path(Settings(LOG_DIR=None, LOG_FILE_NAME="x.log"))
        assert path.endswith(os.path.join("logs", "x.log"))

    def test_get_logger_returns_named_logger(self):
        assert get_logger("app.services.parking_service").name == "app.services.parking_service"
        assert logging.getLogger("httpx").level == logging.WARNING
