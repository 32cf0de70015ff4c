"""
Logging configuration for the Weather Forecast API.

Console logging always; rotating log files when LOG_TO_FILE is set.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from app.config import Settings, settings as default_settings

LOG_DIR = Path("logs")
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

DEBUG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
PRODUCTION_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Libraries whose INFO output drowns the request logs
QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "passlib": logging.ERROR,
    "aiosqlite": logging.WARNING,
}


def _file_handler(filename: str, level: int, formatter: logging.Formatter) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        LOG_DIR / filename,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Configure the root logger for an application.

    Replaces any handlers installed by a previous call, so building several
    apps in one process does not duplicate log lines.
    """
    settings = settings or default_settings

    root = logging.getLogger()
    root.setLevel(settings.LOG_LEVEL)
    root.handlers.clear()

    formatter = logging.Formatter(
        fmt=DEBUG_FORMAT if settings.DEBUG else PRODUCTION_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if settings.LOG_TO_FILE:
        LOG_DIR.mkdir(exist_ok=True)
        root.addHandler(_file_handler("weather_api.log", logging.INFO, formatter))
        root.addHandler(_file_handler("weather_api_errors.log", logging.ERROR, formatter))

    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)

    root.debug(f"Logging initialized for {settings.SERVER_NAME} (level {settings.LOG_LEVEL})")
    return root


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, named after its ``__name__``."""
    return logging.getLogger(name)
