"""
Structured logging utilities for application-wide logging
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from .config import LoggingSettings


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "process": record.process,
            "thread": record.thread,
        }

        # Add exception info if present
        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        # Add extra fields if present
        if hasattr(record, "extra_data"):
            log_obj.update(record.extra_data)

        return json.dumps(log_obj)


TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Optional[LoggingSettings] = None) -> logging.Logger:
    """Attach a stdout (and optional file) handler to the ``medscribe`` logger.

    Safe to call more than once: handlers installed by an earlier call are
    replaced rather than duplicated.
    """
    settings = settings or LoggingSettings()
    logger = logging.getLogger("medscribe")
    logger.setLevel(settings.level)

    formatter: logging.Formatter
    if settings.format == "json":
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT)

    for handler in list(logger.handlers):
        if getattr(handler, "_medscribe_handler", False):
            logger.removeHandler(handler)

    handlers = [logging.StreamHandler(sys.stdout)]
    if settings.file_path:
        handlers.append(logging.FileHandler(settings.file_path, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler._medscribe_handler = True
        logger.addHandler(handler)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``medscribe`` namespace"""
    if name == "medscribe" or name.startswith("medscribe."):
        return logging.getLogger(name)
    return logging.getLogger(f"medscribe.{name}")
