"""Tests for logging configuration."""

import json
import logging

from funcscope.logging_config import JSONLogFormatter, configure_logging


class TestConfigureLogging:
    """Test the funcscope logger setup."""

    def test_single_stderr_handler(self) -> None:
        """Test repeated configuration does not stack handlers."""
        configure_logging("DEBUG")
        configure_logging("WARNING")

        logger = logging.getLogger("funcscope")
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING
        assert logger.propagate is False

    def test_json_format(self) -> None:
        """Test the JSON formatter is installed on request."""
        configure_logging(json_format=True)

        handler = logging.getLogger("funcscope").handlers[0]
        assert isinstance(handler.formatter, JSONLogFormatter)

        configure_logging()


class TestJSONLogFormatter:
    """Test structured log entries."""

    def test_extra_fields(self) -> None:
        """Test context passed via extra is included."""
        record = logging.LogRecord("funcscope.analysis", logging.INFO, __file__, 1, "Analysed %s", ("a.ts",), None)
        record.file_path = "/project/a.ts"

        entry = json.loads(JSONLogFormatter().format(record))

        assert entry["message"] == "Analysed a.ts"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "funcscope.analysis"
        assert entry["file_path"] == "/project/a.ts"
        assert "error" not in entry
