"""
Unit tests for settings and logging setup.
"""
import logging
from unittest.mock import patch

from seolens.config import Settings
from seolens.core.logging import configure_logging


class TestSettings:
    """Test settings parsing."""

    def test_defaults(self):
        """Test the shipped defaults."""
        settings = Settings()

        assert settings.FETCH_TIMEOUT_SECONDS == 10.0
        assert settings.KEYWORD_TEXT_LIMIT == 5000
        assert settings.CACHE_TTL_SECONDS == 0

    def test_pattern_lists(self):
        """Test comma-separated patterns are split and trimmed."""
        settings = Settings(ANALYTICS_PATTERNS=" google-analytics.com , gtag ,", PIXEL_TRACKER_PATTERNS="")

        assert settings.analytics_patterns_list == ["google-analytics.com", "gtag"]
        assert settings.pixel_tracker_patterns_list == []

    def test_environment_override(self, monkeypatch):
        """Test values are read from the environment."""
        monkeypatch.setenv("CACHE_BACKEND", "redis")

        assert Settings().CACHE_BACKEND == "redis"


class TestConfigureLogging:
    """Test logging setup."""

    def test_explicit_level(self):
        """Test an explicit level is passed to basicConfig."""
        with patch("seolens.core.logging.logging.basicConfig") as basic_config:
            configure_logging("debug")

        assert basic_config.call_args.kwargs["level"] == logging.DEBUG

    def test_httpx_quieted(self):
        """Test httpx request logs are raised to WARNING."""
        with patch("seolens.core.logging.logging.basicConfig"):
            configure_logging()

        assert logging.getLogger("httpx").level == logging.WARNING
