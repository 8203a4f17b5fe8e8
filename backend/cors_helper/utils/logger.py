"""
Structured logging setup.

JSON log lines in production, coloured human-readable lines in development.
The package logger level comes from LOG_LEVEL (INFO unless overridden).
Provides the get_logger(name) factory used across the package.
"""

import json
import logging
import sys
from datetime import datetime, timezone

from cors_helper.config import get_settings

PACKAGE_LOGGER = "cors_helper"


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log collectors."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class DevFormatter(logging.Formatter):
    """Terminal formatter: the whole line is tinted by level."""

    _LEVEL_COLORS = {
        logging.DEBUG: 36,
        logging.INFO: 32,
        logging.WARNING: 33,
        logging.ERROR: 31,
        logging.CRITICAL: 35,
    }

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)-8s %(name)s: %(message)s", datefmt="%H:%M:%S")

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        code = self._LEVEL_COLORS.get(record.levelno)
        return f"\033[{code}m{line}\033[0m" if code else line


_configured = False


def configure_logging(is_dev: bool = True, level: str = "INFO") -> None:
    """Install a stdout handler on the package logger once."""
    global _configured
    if _configured:
        return
    _configured = True

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(DevFormatter() if is_dev else JSONFormatter())
    package_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return a named logger, configuring the package logger on first call."""
    try:
        settings = get_settings()
        is_dev, level = settings.is_development, settings.LOG_LEVEL
    except ValueError:
        # Invalid settings are reported where they are used, not on import
        is_dev, level = True, "INFO"

    configure_logging(is_dev, level)
    return logging.getLogger(name)
