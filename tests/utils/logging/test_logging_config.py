# ABOUTME: Tests for logging configuration module
# ABOUTME: Validates dual-mode logging setup and third-party library suppression

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest
import structlog
from loguru import logger as loguru_logger

from webscrimg.utils.logging.config import (
    WARNING_LOGGERS,
    InterceptHandler,
    LoggingMode,
    configure_logging,
    detect_logging_mode,
    get_logging_status,
)


class TestLoggingMode:
    """Test the LoggingMode constants."""

    def test_logging_mode_constants(self):
        assert LoggingMode.INTERACTIVE == "interactive"
        assert LoggingMode.PRODUCTION == "production"


class TestDetectLoggingMode:
    """Test logging mode detection logic."""

    @pytest.mark.parametrize("value", ["interactive", "production", "PRODUCTION"])
    def test_detect_mode_from_env(self, value):
        with patch.dict(os.environ, {"WEBSCRIMG_LOG_MODE": value}):
            assert detect_logging_mode() == value.lower()

    def test_detect_mode_from_env_invalid(self):
        """Test fallback when environment variable has invalid value."""
        with (
            patch.dict(os.environ, {"WEBSCRIMG_LOG_MODE": "invalid"}),
            patch("sys.stdout.isatty", return_value=True),
        ):
            assert detect_logging_mode() == LoggingMode.INTERACTIVE

    def test_detect_mode_from_tty_production(self):
        """Test detection of production mode from non-TTY."""
        with patch.dict(os.environ, {}, clear=True), patch("sys.stdout.isatty", return_value=False):
            assert detect_logging_mode() == LoggingMode.PRODUCTION


class TestConfigureLogging:
    """Test logging configuration functionality."""

    def teardown_method(self):
        for logger_name in ["", *WARNING_LOGGERS, "py.warnings"]:
            logger = logging.getLogger(logger_name)
            logger.setLevel(logging.NOTSET)
        logging.captureWarnings(False)
        root = logging.getLogger()
        for handler in [h for h in root.handlers if isinstance(h, InterceptHandler)]:
            root.removeHandler(handler)
        structlog.reset_defaults()
        loguru_logger.remove()

    def test_configure_interactive_mode(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="INFO")

        assert Path("logs").exists()
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_configure_production_mode(self):
        configure_logging(mode=LoggingMode.PRODUCTION, log_level="INFO")

        for logger_name in WARNING_LOGGERS:
            assert logging.getLogger(logger_name).level == logging.WARNING

    def test_configure_custom_log_level(self):
        configure_logging(mode=LoggingMode.PRODUCTION, log_level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG

    def test_warnings_captured(self):
        configure_logging(mode=LoggingMode.PRODUCTION)

        assert logging.getLogger("py.warnings").level == logging.ERROR

    def test_intercept_handler_installed_once(self):
        configure_logging(mode=LoggingMode.PRODUCTION)
        configure_logging(mode=LoggingMode.PRODUCTION)

        handlers = [h for h in logging.getLogger().handlers if isinstance(h, InterceptHandler)]
        assert len(handlers) == 1

    def test_structlog_events_reach_loguru(self):
        configure_logging(mode=LoggingMode.PRODUCTION, log_level="INFO")
        messages = []
        loguru_logger.add(messages.append, level="INFO", format="{message}")

        structlog.get_logger("webscrimg.test").info("images_accepted", count=3)
        structlog.get_logger("webscrimg.test").debug("below_threshold")

        assert len(messages) == 1
        assert "event='images_accepted'" in messages[0]
        assert "count=3" in messages[0]


class TestGetLoggingStatus:
    """Test logging status reporting."""

    def test_get_status_interactive_mode(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        Path("logs").mkdir()

        with patch("webscrimg.utils.logging.config.detect_logging_mode", return_value=LoggingMode.INTERACTIVE):
            status = get_logging_status()

        assert status["mode"] == LoggingMode.INTERACTIVE
        assert status["log_directory"] is not None
        assert status["log_files"]["main"].endswith("webscrimg.log")
        assert "httpx" in status["third_party_suppressed"]

    def test_get_status_production_mode(self):
        with patch("webscrimg.utils.logging.config.detect_logging_mode", return_value=LoggingMode.PRODUCTION):
            status = get_logging_status()

        assert status["mode"] == LoggingMode.PRODUCTION
        assert status["log_files"] == {"main": None, "json": None, "errors": None}
