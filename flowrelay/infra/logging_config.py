"""Logging setup shared by the web process, the channel plugins and the poller."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from flowrelay.config import get_settings

ROOT_LOGGER_NAME = "flowrelay"


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0]:
            log_data["exception"] = self.formatException(record.exc_info)
        for key in ("chat_id", "reminder_id", "trace_type"):
            if hasattr(record, key):
                log_data[key] = getattr(record, key)
        return json.dumps(log_data)


class LoggingConfig:
    """Configure the package logger once per process."""

    _configured = False

    def __init__(self, level: Optional[str] = None, json_output: Optional[bool] = None):
        if LoggingConfig._configured:
            return
        settings = get_settings()
        level_name = (level or settings.log_level or "INFO").upper()
        if json_output is None:
            json_output = settings.is_production

        logger = logging.getLogger(ROOT_LOGGER_NAME)
        logger.setLevel(getattr(logging, level_name, logging.INFO))
        if not logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            if json_output:
                handler.setFormatter(JSONFormatter())
            else:
                handler.setFormatter(
                    logging.Formatter(
                        "%(asctime)s [%(name)s] %(levelname)s - %(message)s",
                        datefmt="%Y-%m-%d %H:%M:%S",
                    )
                )
            logger.addHandler(handler)
        # python-telegram-bot and httpx log every request at INFO
        logging.getLogger("httpx").setLevel(logging.WARNING)
        LoggingConfig._configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the package logger, or a named child of it."""
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(ROOT_LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
