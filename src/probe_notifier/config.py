"""Configuration management service with Pydantic Settings.

This module loads and validates the notifier configuration from
environment variables (and an optional ``.env`` file) at startup.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

import httpx
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DiscordSettings(BaseSettings):
    """Discord notification settings."""

    model_config = SettingsConfigDict(env_prefix="DISCORD_")

    webhook_url: SecretStr | None = Field(
        default=None,
        alias="DISCORD_WEBHOOK_URL",
        description="Discord incoming webhook URL",
    )
    dry: bool = Field(
        default=False,
        alias="DISCORD_DRY",
        description="Log Discord payloads instead of sending them",
    )
    timeout: float = Field(
        default=10.0,
        alias="DISCORD_TIMEOUT",
        description="HTTP request timeout in seconds",
        gt=0,
    )

    @field_validator("webhook_url")
    @classmethod
    def validate_webhook_url(cls, v: SecretStr | None) -> SecretStr | None:
        """Validate webhook URL format."""
        if v is None:
            return v
        url = v.get_secret_value()
        if not url.startswith(("http://", "https://")):
            raise ValueError("DISCORD_WEBHOOK_URL must be an HTTP(S) URL")
        try:
            httpx.URL(url)
        except httpx.InvalidURL as e:
            raise ValueError(f"DISCORD_WEBHOOK_URL is not a valid URL: {e}") from e
        return v

    @property
    def enabled(self) -> bool:
        """Check if Discord notifications are enabled."""
        return self.webhook_url is not None


class Settings(BaseSettings):
    """Main application settings.

    Example:
        ```python
        from probe_notifier.config import get_settings

        settings = get_settings()
        print(settings.discord.enabled)
        print(settings.log_level)
        ```
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    discord: DiscordSettings = Field(default_factory=DiscordSettings)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )
    dry_run: bool = Field(
        default=False,
        alias="DRY_RUN",
        description="Log notifications instead of sending them",
    )

    def get_logging_level(self) -> int:
        """Get the numeric logging level."""
        level: int = getattr(logging, self.log_level)
        return level

    def redacted_summary(self) -> dict[str, str]:
        """Get a summary of settings with secrets redacted."""
        return {
            "discord_webhook": self._redact_webhook(self.discord.webhook_url),
            "discord_enabled": str(self.discord.enabled),
            "discord_dry": str(self.discord.dry),
            "discord_timeout": str(self.discord.timeout),
            "log_level": self.log_level,
            "dry_run": str(self.dry_run),
        }

    @staticmethod
    def _redact_webhook(url: SecretStr | None) -> str:
        """Hide the webhook token, the last path segment of the URL."""
        if url is None:
            return "(not set)"
        value = url.get_secret_value()
        head, sep, _token = value.rpartition("/")
        if not sep or "://" not in head:
            return "***"
        return f"{head}/***"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Raises:
        ValidationError: If environment variables have invalid values.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing when you need to reload settings with
    different environment variables.
    """
    get_settings.cache_clear()
