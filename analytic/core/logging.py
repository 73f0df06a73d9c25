"""
Structured logging for the analytic package.

Modules only obtain loggers, usually through get_context_logger() so every
record carries the module's component name. Nothing is printed unless an
application calls setup_logging(), which attaches handlers to the package
logger ("analytic") rather than to the root logger.
"""

import sys
import logging
from typing import Any, Dict, Optional
from datetime import datetime, timezone
import json
from pathlib import Path

LIBRARY_LOGGER = "analytic"

# Marks handlers installed by setup_logging() so a second call replaces them
_OWNED = "_analytic_handler"


def _context(record: logging.LogRecord) -> Dict[str, Any]:
    return getattr(record, "extra_data", None) or {}


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, context fields merged at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        log_data.update(_context(record))
        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """
    Single-line text format.

    Context fields follow the message in brackets, e.g.
    ``... - DEBUG - Solved quadratic [component=polynomial delta=1.0]``.
    """

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        context = _context(record)
        if not context:
            return text
        fields = " ".join(f"{key}={value}" for key, value in context.items())
        first, newline, rest = text.partition("\n")
        return f"{first} [{fields}]{newline}{rest}"


def setup_logging(settings: Optional[Any] = None) -> logging.Logger:
    """
    Attach console (and optional file) handlers to the package logger.

    Settings default to get_settings(). Calling it again replaces the
    handlers from the previous call; handlers added by anyone else stay.

    Returns:
        The configured package logger
    """
    if settings is None:
        from .config import get_settings
        settings = get_settings()

    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.WARNING)
    formatter: logging.Formatter = StructuredFormatter() if settings.LOG_FORMAT == "json" else TextFormatter()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.LOG_FILE:
        log_path = Path(settings.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    package_logger = logging.getLogger(LIBRARY_LOGGER)
    for handler in list(package_logger.handlers):
        if getattr(handler, _OWNED, False):
            package_logger.removeHandler(handler)
            handler.close()

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        setattr(handler, _OWNED, True)
        package_logger.addHandler(handler)
    package_logger.setLevel(log_level)
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """
    Logger with permanent context.

    Per-call ``extra_data`` is merged over the permanent context and stored
    on the record as ``record.extra_data``, where both formatters read it.
    """

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra_data = kwargs.pop("extra_data", {})
        kwargs.setdefault("extra", {})["extra_data"] = {**self.extra, **extra_data}
        return msg, kwargs


def get_context_logger(name: str, **context) -> LoggerAdapter:
    """Get a logger that tags every record with ``context``."""
    return LoggerAdapter(get_logger(name), context)
