"""
Tests for Utilities.

Requires Python 3.11+.
"""

from decimal import Decimal

import pytest
import structlog
from pydantic import ValidationError

import utils.logger as logger_module
from utils.config import Settings, WatcherSettings, get_settings, normalize_extension
from utils.logger import configure_logging
from utils.text import append_zero, append_zero_if_float, to_proper_case


class TestTextHelpers:
    """Test cases for text formatting helpers."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("maxStackSize", "Max Stack Size"),
            ("enabled", "Enabled"),
            ("HTTPPort", "H T T P Port"),
            ("x", "x"),
            ("", ""),
            (None, ""),
        ],
    )
    def test_to_proper_case(self, value, expected):
        """Test splitting identifiers on capitals."""
        assert to_proper_case(value) == expected

    def test_append_zero(self):
        """Test adding a decimal part."""
        assert append_zero("5") == "5.0"
        assert append_zero("5.25") == "5.25"

    def test_append_zero_if_float(self):
        """Test that only floating point types get a decimal part."""
        assert append_zero_if_float("5", float) == "5.0"
        assert append_zero_if_float("5", Decimal) == "5.0"
        assert append_zero_if_float("5", int) == "5"
        assert append_zero_if_float("5", str) == "5"


class TestSettings:
    """Test cases for configuration."""

    def test_watcher_defaults(self, monkeypatch):
        """Test default marker extensions and polling."""
        for name in ("WATCHER_MARKER_EXTENSION", "WATCHER_FALLBACK_EXTENSION", "WATCHER_POLL_INTERVAL_MS"):
            monkeypatch.delenv(name, raising=False)

        settings = WatcherSettings()

        assert settings.marker_extension == ".info"
        assert settings.fallback_extension == ".dll"
        assert settings.poll_interval_ms == 0

    def test_extension_from_env_gets_dot(self, monkeypatch):
        """Test extension normalization."""
        monkeypatch.setenv("WATCHER_MARKER_EXTENSION", "json")

        assert WatcherSettings().marker_extension == ".json"

    def test_empty_extension_rejected(self):
        """Test that an empty extension is invalid."""
        with pytest.raises(ValidationError):
            WatcherSettings(marker_extension="  ")

    def test_negative_interval_rejected(self):
        """Test interval bounds."""
        with pytest.raises(ValidationError):
            WatcherSettings(poll_interval_ms=-1)

    def test_environment_flags(self):
        """Test development and production detection."""
        assert Settings(environment="dev").is_development
        assert Settings(environment="production").is_production
        assert not Settings(environment="staging").is_production

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("info", ".info"), (".dll", ".dll"), (" json ", ".json")],
    )
    def test_normalize_extension(self, value, expected):
        """Test the shared extension normalizer."""
        assert normalize_extension(value) == expected

    def test_normalize_extension_rejects_blank(self):
        """Test that a blank extension is an error."""
        with pytest.raises(ValueError):
            normalize_extension("   ")


class TestLogging:
    """Test cases for logging configuration."""

    @pytest.fixture(autouse=True)
    def reset_logging(self):
        """Restore default settings and structlog configuration."""
        get_settings.cache_clear()
        yield
        if logger_module._log_file is not None:
            logger_module._log_file.close()
            logger_module._log_file = None
        structlog.reset_defaults()
        get_settings.cache_clear()

    def test_log_file_reused_on_reconfigure(self, tmp_path, monkeypatch):
        """Test that configuring twice keeps one open handle."""
        monkeypatch.setenv("LOG_FILE_PATH", str(tmp_path / "logs" / "modwatch.log"))

        configure_logging()
        first = logger_module._log_file
        configure_logging()

        assert first is not None
        assert logger_module._log_file is first
        assert not first.closed

    def test_switching_log_file_closes_previous(self, tmp_path, monkeypatch):
        """Test that the old handle is closed when the path changes."""
        monkeypatch.setenv("LOG_FILE_PATH", str(tmp_path / "first.log"))
        configure_logging()
        first = logger_module._log_file

        monkeypatch.setenv("LOG_FILE_PATH", str(tmp_path / "second.log"))
        get_settings.cache_clear()
        configure_logging()

        assert first.closed
        assert logger_module._log_file.name == str(tmp_path / "second.log")

    def test_stdout_logging_closes_file(self, tmp_path, monkeypatch):
        """Test that dropping the file path releases the handle."""
        monkeypatch.setenv("LOG_FILE_PATH", str(tmp_path / "modwatch.log"))
        configure_logging()
        first = logger_module._log_file

        monkeypatch.delenv("LOG_FILE_PATH")
        get_settings.cache_clear()
        configure_logging()

        assert first.closed
        assert logger_module._log_file is None
