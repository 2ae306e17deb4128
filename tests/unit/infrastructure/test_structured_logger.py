import io
import json
import logging
import re

import pytest

from ddtstat.infrastructure.logging.structured_logger import (
    LogConfig,
    StructuredLogger,
    ContextLogger
)


class TestLogConfig:
    """Test suite for verbosity handling."""

    def test_default_threshold(self):
        assert LogConfig().level == "WARNING"

    def test_verbose_steps(self):
        config = LogConfig(level="WARNING")
        assert config.with_verbosity(1).level == "INFO"
        assert config.with_verbosity(2).level == "DEBUG"
        assert config.with_verbosity(5).level == "DEBUG"

    def test_quiet(self):
        assert LogConfig(level="DEBUG").with_verbosity(3, quiet=True).level == "CRITICAL"

    def test_format_preserved(self):
        assert LogConfig(format="json").with_verbosity(1).format == "json"


class TestStructuredLogger:
    """Test suite for StructuredLogger output."""

    @pytest.fixture
    def stream(self):
        return io.StringIO()

    def test_text_format(self, stream):
        logger = StructuredLogger(name="ddtstat.test.text", config=LogConfig(level="DEBUG"), stream=stream)

        logger.warning("low on coffee")
        logger.fatal("out of coffee")

        lines = stream.getvalue().splitlines()
        assert re.match(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\+00:00 \[WARN\] low on coffee$", lines[0])
        assert lines[1].endswith("[FATAL] out of coffee")

    def test_threshold_filters(self, stream):
        logger = StructuredLogger(name="ddtstat.test.threshold", config=LogConfig(level="ERROR"), stream=stream)

        logger.debug("hidden")
        logger.info("hidden")
        logger.warning("hidden")
        logger.error("shown")

        assert stream.getvalue().count("\n") == 1
        assert "[ERROR] shown" in stream.getvalue()

    def test_extra_fields_in_text(self, stream):
        logger = StructuredLogger(name="ddtstat.test.extra", config=LogConfig(level="INFO"), stream=stream)

        logger.info("computed", {"value": 312})

        assert "computed value=312" in stream.getvalue()

    def test_json_format(self, stream):
        logger = StructuredLogger(
            name="ddtstat.test.json",
            config=LogConfig(level="INFO", format="json"),
            stream=stream
        )

        logger.error("parse failed", {"error_code": "TOTALS_ROW_NOT_FOUND"})

        entry = json.loads(stream.getvalue())
        assert entry["level"] == "ERROR"
        assert entry["message"] == "parse failed"
        assert entry["logger"] == "ddtstat.test.json"
        assert entry["error_code"] == "TOTALS_ROW_NOT_FOUND"

    def test_reconfigure_replaces_handler(self, stream):
        first = io.StringIO()
        StructuredLogger(name="ddtstat.test.reconfigure", config=LogConfig(level="INFO"), stream=first)
        logger = StructuredLogger(name="ddtstat.test.reconfigure", config=LogConfig(level="INFO"), stream=stream)

        logger.info("once")

        assert first.getvalue() == ""
        assert "once" in stream.getvalue()
        assert len(logging.getLogger("ddtstat.test.reconfigure").handlers) == 1

    def test_child_logger_records_reach_sink(self, stream):
        StructuredLogger(name="ddtstat.test.parent", config=LogConfig(level="DEBUG"), stream=stream)

        logging.getLogger("ddtstat.test.parent.child").debug("from child")

        assert "[DEBUG] from child" in stream.getvalue()


class TestContextLogger:
    """Test suite for ContextLogger."""

    def test_context_merged(self):
        stream = io.StringIO()
        logger = ContextLogger(
            name="ddtstat.test.context",
            config=LogConfig(level="INFO", format="json"),
            stream=stream
        )
        logger.add_context("pool", "tank")

        logger.info("hello", {"value": 1})
        logger.remove_context("pool")
        logger.info("bye")

        first, second = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert first["pool"] == "tank"
        assert first["value"] == 1
        assert "pool" not in second
