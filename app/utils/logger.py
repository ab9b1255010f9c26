# app/utils/logger.py
"""
Logging setup shared by every module.

Console output always; a size-rotated file under LOG_DIR when LOG_FILE_ENABLED.
File name, rotation size and backup count come from settings.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from app.config import settings

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Per-request INFO lines from the HTTP client would drown the [SYNC] messages
QUIET_LOGGERS = ("httpx", "httpcore")

_configured = False


def log_file_path(config=settings) -> str:
    return os.path.join(config.LOG_DIR or os.path.join(PROJECT_ROOT, "logs"), config.LOG_FILE_NAME)


def build_handlers(config=settings) -> list:
    level = config.LOG_LEVEL.upper()
    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(fmt)
    handlers = [console]

    if config.LOG_FILE_ENABLED:
        path = log_file_path(config)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=path,
            maxBytes=config.LOG_MAX_BYTES,
            backupCount=config.LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(fmt)
        handlers.append(file_handler)
    return handlers


def _configure_root_logger():
    global _configured
    if _configured:
        return
    _configured = True

    root = logging.getLogger()
    root.setLevel(settings.LOG_LEVEL.upper())
    for handler in build_handlers(settings):
        root.addHandler(handler)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Named logger; the root handlers are attached on first call."""
    _configure_root_logger()
    return logging.getLogger(name)
