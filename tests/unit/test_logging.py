"""Tests for logging setup."""

import json
import logging
from collections.abc import Generator
from io import StringIO
from pathlib import Path

import pytest

from mention_search.search.cache import FileCache
from mention_search.utils.logging import (
    ConsoleFormatter,
    JSONFormatter,
    get_logger,
    log_duration,
    log_with_context,
    setup_logging,
)


@pytest.fixture
def package_logger() -> Generator[logging.Logger, None, None]:
    """Yield the package logger and restore it afterwards."""
    logger = logging.getLogger("mention_search")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def make_record(message: str = "hello") -> logging.LogRecord:
    return logging.LogRecord("mention_search.test", logging.INFO, __file__, 1, message, (), None)


class TestFormatters:
    """Tests for log formatters."""

    def test_json_formatter(self) -> None:
        """Test JSON records carry level, logger and message."""
        record = make_record()
        record.context = {"entries": 3}  # type: ignore[attr-defined]
        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "mention_search.test"
        assert data["message"] == "hello"
        assert data["entries"] == 3

    def test_console_formatter_plain(self) -> None:
        """Test the uncolored console format with context."""
        record = make_record()
        record.context = {"entries": 3}  # type: ignore[attr-defined]
        line = ConsoleFormatter(use_color=False).format(record)
        assert line == "INFO     mention_search.test: hello (entries=3)"

    def test_console_formatter_color(self) -> None:
        """Test colored output wraps the level name."""
        line = ConsoleFormatter(use_color=True).format(make_record())
        assert line.startswith("\033[32mINFO")


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_level_and_handlers(self, package_logger: logging.Logger) -> None:
        """Test the package logger is configured."""
        logger = setup_logging(level="debug", use_color=False)
        assert logger is package_logger
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_repeated_setup_replaces_handlers(self, package_logger: logging.Logger) -> None:
        """Test calling setup twice does not duplicate handlers."""
        setup_logging()
        setup_logging()
        assert len(package_logger.handlers) == 1

    def test_log_file(self, package_logger: logging.Logger, temp_dir: Path) -> None:
        """Test file logging writes JSON lines."""
        log_file = temp_dir / "logs" / "search.log"
        setup_logging(level="INFO", log_file=log_file)

        get_logger("mention_search.test").info("indexed")
        for handler in package_logger.handlers:
            handler.flush()

        data = json.loads(log_file.read_text().splitlines()[0])
        assert data["message"] == "indexed"

        for handler in package_logger.handlers:
            handler.close()


class TestLogWithContext:
    """Tests for log_with_context."""

    def test_context_attached(self, package_logger: logging.Logger) -> None:
        """Test context pairs reach the formatter."""
        setup_logging(level="DEBUG", use_color=False)
        stream = StringIO()
        package_logger.handlers[0].setStream(stream)  # type: ignore[attr-defined]

        log_with_context(package_logger, logging.DEBUG, "rebuilt", entries=12)
        assert "rebuilt (entries=12)" in stream.getvalue()

    def test_disabled_level_skipped(self, package_logger: logging.Logger) -> None:
        """Test nothing is emitted below the configured level."""
        setup_logging(level="WARNING", use_color=False)
        stream = StringIO()
        package_logger.handlers[0].setStream(stream)  # type: ignore[attr-defined]

        log_with_context(package_logger, logging.DEBUG, "rebuilt", entries=12)
        assert stream.getvalue() == ""

    def test_source_is_caller(self, package_logger: logging.Logger) -> None:
        """Test records point at the calling function, not the helper."""
        setup_logging(level="DEBUG", json_format=True)
        stream = StringIO()
        package_logger.handlers[0].setStream(stream)  # type: ignore[attr-defined]

        log_with_context(package_logger, logging.INFO, "hello", query="ma")
        data = json.loads(stream.getvalue())
        assert ":test_source_is_caller:" in data["source"]
        assert data["query"] == "ma"


class TestLogDuration:
    """Tests for timed log blocks."""

    def test_duration_and_added_fields(self, package_logger: logging.Logger) -> None:
        """Test fields added in the block and the duration are logged."""
        setup_logging(level="DEBUG", json_format=True)
        stream = StringIO()
        package_logger.handlers[0].setStream(stream)  # type: ignore[attr-defined]

        with log_duration(package_logger, "walked", root="/project") as context:
            context["entries"] = 4

        data = json.loads(stream.getvalue())
        assert data["message"] == "walked"
        assert data["root"] == "/project"
        assert data["entries"] == 4
        assert data["duration_ms"] >= 0
        assert data["source"].startswith("test_logging:test_duration_and_added_fields:")

    def test_cache_rebuild_fields(
        self, package_logger: logging.Logger, temp_dir: Path
    ) -> None:
        """Test a cache rebuild logs its root, counts and timing."""
        (temp_dir / "a.x").write_text("")
        setup_logging(level="DEBUG", json_format=True)
        stream = StringIO()
        package_logger.handlers[0].setStream(stream)  # type: ignore[attr-defined]

        FileCache(temp_dir, ttl=5.0).rebuild(lambda path: True)

        data = json.loads(stream.getvalue().splitlines()[-1])
        assert data["message"] == "File cache rebuilt"
        assert data["logger"] == "mention_search.search.cache"
        assert data["root"] == str(temp_dir)
        assert data["entries"] == 1
        assert data["skipped"] == 0
        assert "duration_ms" in data
