"""Logging for mention-search.

Library code only creates loggers; the CLI installs handlers with
:func:`setup_logging`. Structured context (entry counts, timings, paths)
travels on the record as a ``context`` dict and is rendered by both
formatters.
"""

import json
import logging
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

PACKAGE_LOGGER = "mention_search"

logger = logging.getLogger(PACKAGE_LOGGER)


def _context(record: logging.LogRecord) -> dict[str, Any]:
    context = getattr(record, "context", None)
    return context if isinstance(context, dict) else {}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, context fields at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        payload.update(_context(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class ConsoleFormatter(logging.Formatter):
    """Single-line console output: ``LEVEL logger: message (key=value ...)``."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        level = f"{record.levelname:8}"
        if self.use_color:
            level = f"{self.LEVEL_COLORS.get(record.levelno, '')}{level}{self.RESET}"

        line = f"{level} {record.name}: {record.getMessage()}"
        context = _context(record)
        if context:
            line += " (" + " ".join(f"{k}={v}" for k, v in context.items()) + ")"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    level: str = "WARNING",
    log_file: Path | None = None,
    json_format: bool = False,
    use_color: bool = True,
) -> logging.Logger:
    """Install handlers on the package logger.

    Calling it again replaces the previous handlers.

    Args:
        level: Level name, case-insensitive. Unknown names mean WARNING.
        log_file: Optional file that receives JSON lines.
        json_format: Emit JSON on stderr instead of console lines.
        use_color: Color the level name on stderr.

    Returns:
        The package logger.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(numeric_level)

    # stderr keeps result listings on stdout pipeable
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(JSONFormatter() if json_format else ConsoleFormatter(use_color))
    logger.addHandler(console)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Module logger, e.g. ``get_logger(__name__)``."""
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """Log ``message`` with key-value context attached to the record."""
    if logger.isEnabledFor(level):
        logger.log(level, message, extra={"context": context}, stacklevel=2)


@contextmanager
def log_duration(
    logger: logging.Logger,
    message: str,
    level: int = logging.DEBUG,
    **context: Any,
) -> Iterator[dict[str, Any]]:
    """Time a block and log it with its context when the block finishes.

    The yielded dict is the context; the block may add fields to it.
    ``duration_ms`` is added on exit.

    Example:
        with log_duration(logger, "File cache rebuilt", root=str(root)) as ctx:
            ctx["entries"] = walk()
    """
    started = time.perf_counter()
    yield context
    context["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
    if logger.isEnabledFor(level):
        # generator frame, then contextlib's __exit__, then the with block
        logger.log(level, message, extra={"context": context}, stacklevel=3)
