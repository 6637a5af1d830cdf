"""
Unit Tests for Centralized Logging.

Tests the logging configuration, structured fields, and source handling.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from modules.backend.core import logging as logging_module
from modules.backend.core.config_schema import LoggingSchema


def _config(file_path: str = "logs/system.jsonl", file_enabled: bool = False) -> MagicMock:
    app_config = MagicMock()
    app_config.logging = LoggingSchema.model_validate({
        "level": "INFO",
        "format": "json",
        "handlers": {
            "console": {"enabled": True},
            "file": {
                "enabled": file_enabled,
                "path": file_path,
                "max_bytes": 1024,
                "backup_count": 1,
            },
        },
    })
    return app_config


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    logging_module.setup_logging(enable_console=False, enable_file_logging=False)


class TestValidSources:
    """Tests for VALID_SOURCES constant."""

    def test_valid_sources_contains_expected_values(self):
        """Should contain all recognized log source values."""
        expected = frozenset({"web", "cli", "tui", "mobile", "api", "internal", "unknown"})
        assert logging_module.VALID_SOURCES == expected

    def test_known_frontends_are_valid_sources(self):
        """Every frontend the middleware accepts should be a valid source."""
        from modules.backend.core.middleware import KNOWN_FRONTENDS

        assert KNOWN_FRONTENDS <= logging_module.VALID_SOURCES


class TestLoggingConfig:
    """Tests for the logging section of the app config."""

    def test_reads_validated_section(self):
        """Should use the validated logging.yaml section."""
        config = logging_module._get_logging_config()

        assert isinstance(config, LoggingSchema)
        assert config.handlers.file.path == "logs/system.jsonl"

    def test_relative_log_path_resolved_from_root(self):
        from modules.backend.core.config import find_project_root

        path = logging_module._resolve_log_path("logs/system.jsonl")

        assert path == find_project_root() / "logs" / "system.jsonl"

    def test_absolute_log_path_kept(self, tmp_path):
        assert logging_module._resolve_log_path(str(tmp_path / "x.jsonl")) == tmp_path / "x.jsonl"


class TestSetupLogging:
    """Tests for root logger configuration."""

    def test_sets_root_level(self):
        """Should apply the requested level to the root logger."""
        logging_module.setup_logging(level="debug", enable_file_logging=False)

        assert logging.getLogger().level == logging.DEBUG

    def test_quiets_http_client_logs(self):
        """Should keep httpx request lines out of the console."""
        logging_module.setup_logging(level="DEBUG", enable_file_logging=False)

        assert logging.getLogger("httpx").level == logging.WARNING

    def test_console_disabled_installs_no_stream_handler(self):
        """Should not write to the terminal when console output is off."""
        logging_module.setup_logging(
            level="INFO", enable_console=False, enable_file_logging=False,
        )

        stream_handlers = [
            h for h in logging.getLogger().handlers
            if type(h) is logging.StreamHandler
        ]
        assert stream_handlers == []

    def test_file_logging_writes_json_lines(self, tmp_path):
        """Should create the log file at the configured path."""
        log_file = tmp_path / "logs" / "app.jsonl"

        with patch(
            "modules.backend.core.logging.get_app_config",
            return_value=_config(str(log_file), file_enabled=True),
        ):
            logging_module.setup_logging(enable_console=False)

        logging.getLogger("test").warning("written")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert '"event": "written"' in log_file.read_text()


class TestLogWithSource:
    """Tests for explicit-source logging."""

    def test_passes_source_and_fields(self):
        """Should call the level method with source and extra fields."""
        logger = MagicMock()

        logging_module.log_with_source(logger, "tui", "info", "API request", path="/")

        logger.info.assert_called_once_with("API request", source="tui", path="/")

    def test_invalid_level_raises(self):
        """Should raise AttributeError for unknown levels."""
        logger = MagicMock(spec=["info"])

        with pytest.raises(AttributeError):
            logging_module.log_with_source(logger, "tui", "loud", "x")
