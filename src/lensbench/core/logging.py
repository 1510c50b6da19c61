"""Structured logging for the lens bench.

Console output goes to stderr so CLI results on stdout stay machine-readable.
An optional JSON lines file captures every bench mutation with its data.
"""

import json
import logging
import sys
import time
from pathlib import Path
from typing import Any

ROOT_LOGGER = "lensbench"


def component_of(name: str) -> str:
    """Short bench component for a logger name, e.g. ``optics.state``."""
    prefix = ROOT_LOGGER + "."
    return name[len(prefix) :] if name.startswith(prefix) else name


class ComponentFilter(logging.Filter):
    """Tag each record with its bench component and inline structured data."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.component = component_of(record.name)
        data = getattr(record, "extra_data", None)
        record.data = " " + json.dumps(data, default=str) if data else ""
        return True


class JSONFormatter(logging.Formatter):
    """Format log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": time.time(),
            "level": record.levelname,
            "component": getattr(record, "component", component_of(record.name)),
            "message": record.getMessage(),
        }

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        return json.dumps(log_data, default=str)


def parse_level(level: int | str) -> int:
    """Accept a numeric level or a name such as ``"debug"``."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def setup_logging(log_path: Path | None = None, level: int | str = logging.INFO) -> None:
    """Setup structured logging for the ``lensbench`` logger tree.

    Args:
        log_path: Optional path for JSON lines log file
        level: Logging level (number or name)
    """
    level = parse_level(level)
    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_formatter = logging.Formatter(
        "%(asctime)s - %(component)s - %(levelname)s - %(message)s%(data)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler.setFormatter(console_formatter)
    console_handler.addFilter(ComponentFilter())
    root_logger.addHandler(console_handler)

    if log_path:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(JSONFormatter())
        file_handler.addFilter(ComponentFilter())
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> "StructuredLogger":
    """Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(logging.getLogger(name))


class StructuredLogger:
    """Wrapper for adding structured data to log messages."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def _log(self, level: int, msg: str, data: dict[str, Any] | None = None) -> None:
        extra = {"extra_data": data} if data else {}
        self.logger.log(level, msg, extra=extra)

    def debug(self, msg: str, data: dict[str, Any] | None = None) -> None:
        self._log(logging.DEBUG, msg, data)

    def info(self, msg: str, data: dict[str, Any] | None = None) -> None:
        self._log(logging.INFO, msg, data)

    def warning(self, msg: str, data: dict[str, Any] | None = None) -> None:
        self._log(logging.WARNING, msg, data)

    def error(self, msg: str, data: dict[str, Any] | None = None) -> None:
        self._log(logging.ERROR, msg, data)


__all__ = [
    "setup_logging",
    "component_of",
    "ComponentFilter",
    "parse_level",
    "get_logger",
    "StructuredLogger",
]
