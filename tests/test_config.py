"""Tests for configuration management service."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from probe_notifier.config import (
    DiscordSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

WEBHOOK_URL = "https://discord.com/api/webhooks/123/abc"


@pytest.fixture(autouse=True)
def clear_cache() -> Iterator[None]:
    """Clear settings cache before and after each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


class TestDiscordSettings:
    """Tests for DiscordSettings."""

    def test_defaults(self) -> None:
        """Test Discord is disabled without a webhook."""
        with patch.dict(os.environ, {}, clear=True):
            settings = DiscordSettings()
            assert settings.webhook_url is None
            assert settings.enabled is False
            assert settings.dry is False
            assert settings.timeout == 10.0

    def test_enabled_with_webhook(self) -> None:
        """Test webhook URL is kept secret."""
        with patch.dict(os.environ, {"DISCORD_WEBHOOK_URL": WEBHOOK_URL}, clear=True):
            settings = DiscordSettings()
            assert settings.enabled is True
            assert settings.webhook_url is not None
            assert settings.webhook_url.get_secret_value() == WEBHOOK_URL
            assert WEBHOOK_URL not in repr(settings)

    def test_dry_and_timeout(self) -> None:
        """Test dry flag and timeout overrides."""
        with patch.dict(
            os.environ, {"DISCORD_DRY": "true", "DISCORD_TIMEOUT": "2.5"}, clear=True
        ):
            settings = DiscordSettings()
            assert settings.dry is True
            assert settings.timeout == 2.5

    def test_unparsable_webhook_raises(self) -> None:
        """Test that a URL httpx cannot parse is rejected at load time."""
        with (
            patch.dict(
                os.environ, {"DISCORD_WEBHOOK_URL": "http://[::1/api/webhooks/1/x"}, clear=True
            ),
            pytest.raises(ValidationError, match="not a valid URL"),
        ):
            DiscordSettings()

    def test_invalid_webhook_raises(self) -> None:
        """Test that a non-HTTP webhook URL raises validation error."""
        with (
            patch.dict(os.environ, {"DISCORD_WEBHOOK_URL": "ftp://discord.com/x"}, clear=True),
            pytest.raises(ValidationError, match="HTTP"),
        ):
            DiscordSettings()

    def test_non_positive_timeout_raises(self) -> None:
        """Test that the timeout must be positive."""
        with (
            patch.dict(os.environ, {"DISCORD_TIMEOUT": "0"}, clear=True),
            pytest.raises(ValidationError),
        ):
            DiscordSettings()


class TestSettings:
    """Tests for main Settings class."""

    def test_defaults(self) -> None:
        """Test default application settings."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings()
            assert settings.log_level == "INFO"
            assert settings.dry_run is False
            assert settings.discord.enabled is False

    def test_custom_values(self) -> None:
        """Test custom application settings."""
        with patch.dict(
            os.environ,
            {
                "LOG_LEVEL": "DEBUG",
                "DRY_RUN": "true",
                "DISCORD_WEBHOOK_URL": WEBHOOK_URL,
            },
            clear=True,
        ):
            settings = Settings()
            assert settings.log_level == "DEBUG"
            assert settings.dry_run is True
            assert settings.discord.enabled is True

    def test_invalid_log_level_raises(self) -> None:
        """Test that an unknown log level raises validation error."""
        with (
            patch.dict(os.environ, {"LOG_LEVEL": "VERBOSE"}, clear=True),
            pytest.raises(ValidationError),
        ):
            Settings()

    def test_get_logging_level(self) -> None:
        """Test numeric logging level."""
        with patch.dict(os.environ, {"LOG_LEVEL": "WARNING"}, clear=True):
            assert Settings().get_logging_level() == logging.WARNING

    def test_redacted_summary_hides_token(self) -> None:
        """Test the webhook token is masked."""
        with patch.dict(os.environ, {"DISCORD_WEBHOOK_URL": WEBHOOK_URL}, clear=True):
            summary = Settings().redacted_summary()
            assert summary["discord_webhook"] == "https://discord.com/api/webhooks/123/***"
            assert "abc" not in summary["discord_webhook"]
            assert summary["discord_enabled"] == "True"

    def test_redacted_summary_without_webhook(self) -> None:
        """Test summary when Discord is not configured."""
        with patch.dict(os.environ, {}, clear=True):
            summary = Settings().redacted_summary()
            assert summary["discord_webhook"] == "(not set)"
            assert summary["discord_enabled"] == "False"


class TestGetSettings:
    """Tests for the settings singleton."""

    def test_cached(self) -> None:
        """Test settings are loaded once."""
        with patch.dict(os.environ, {}, clear=True):
            assert get_settings() is get_settings()

    def test_cache_clear_reloads(self) -> None:
        """Test clearing the cache picks up new environment."""
        with patch.dict(os.environ, {"LOG_LEVEL": "INFO"}, clear=True):
            first = get_settings()
        clear_settings_cache()
        with patch.dict(os.environ, {"LOG_LEVEL": "ERROR"}, clear=True):
            second = get_settings()
        assert first is not second
        assert second.log_level == "ERROR"
