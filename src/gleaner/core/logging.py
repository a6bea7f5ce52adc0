"""Structured logging for Gleaner.

This module provides consistent logging configuration
with support for both structured (JSON) and plain text formats.
Fields set with LogContext (the source URL and category during
acquisition) are carried by both formats.
"""

import json
import logging
import sys
from datetime import datetime
from typing import Any

from gleaner.core.config import get_settings

PACKAGE_LOGGER = "gleaner"


def _context(record: logging.LogRecord) -> dict[str, Any]:
    return dict(getattr(record, "extra_data", None) or {})


def _component(name: str) -> str:
    """Logger name relative to the package, e.g. "acquire.robots"."""
    prefix = PACKAGE_LOGGER + "."
    return name[len(prefix):] if name.startswith(prefix) else name


class StructuredFormatter(logging.Formatter):
    """One JSON object per line.

    Context fields sit under "context" so they never clash with the
    record's own keys.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "component": _component(record.name),
            "message": record.getMessage(),
        }

        context = _context(record)
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


class PlainFormatter(logging.Formatter):
    """Human-readable lines, context appended as key=value pairs."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)-7s [%(component)s] %(message)s",
            datefmt="%H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        record.component = _component(record.name)
        line = super().format(record)
        context = _context(record)
        if not context:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        head, newline, rest = line.partition("\n")
        return f"{head} ({pairs}){newline}{rest}"


def _build_handler(level: int, format: str) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if format == "structured":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(PlainFormatter())
    return handler


def setup_logging(level: str = "INFO", format: str = "plain") -> None:
    """Configure the package logger for Gleaner.

    Module loggers obtained from get_logger() propagate to the
    "gleaner" logger, so this controls every component at once.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: Output format ("plain" or "structured")
    """
    root = logging.getLogger(PACKAGE_LOGGER)
    resolved = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(resolved)

    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.addHandler(_build_handler(resolved, format))
    root.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module.

    The first call configures the "gleaner" package logger from
    settings unless setup_logging() already did.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    root = logging.getLogger(PACKAGE_LOGGER)
    if not root.handlers:
        settings = get_settings()
        setup_logging(settings.log_level, settings.log_format)
    return logging.getLogger(name)


class LogContext:
    """Context manager for adding extra data to log messages.

    Example:
        >>> logger = get_logger(__name__)
        >>> with LogContext(url="https://example.com", category="science"):
        ...     logger.info("Fetching source")
    """

    def __init__(self, **extra: Any) -> None:
        """Initialize LogContext.

        Args:
            **extra: Extra fields to include in log messages
        """
        self.extra = extra
        self._old_factory: Any = None

    def __enter__(self) -> "LogContext":
        """Enter context and set up extra data."""
        old_factory = logging.getLogRecordFactory()
        extra = self.extra

        def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
            record = old_factory(*args, **kwargs)
            # Inner contexts add to, and override, the fields of outer ones
            record.extra_data = {**_context(record), **extra}  # type: ignore[attr-defined]
            return record

        self._old_factory = old_factory
        logging.setLogRecordFactory(record_factory)
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context and restore original factory."""
        if self._old_factory:
            logging.setLogRecordFactory(self._old_factory)
