"""Configuration management using Pydantic Settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class PhonoscoreSettings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Page fetching
    fetch_timeout_seconds: float = 30.0
    user_agent: str = "Phonoscore/0.1.0"

    # Aspect registry: JSON file with aspect definitions; built-in set when unset
    aspects_file: str | None = None

    # Extract every aspect with the selfie camera selector/pattern, as the
    # first release of the tool did.
    shared_camera_selector: bool = False

    # Logging
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def validate(self) -> None:
        if self.fetch_timeout_seconds <= 0:
            raise ValueError("fetch_timeout_seconds must be > 0")
        if not self.user_agent.strip():
            raise ValueError("user_agent must not be empty")
        if self.aspects_file is not None and not self.aspects_file.strip():
            raise ValueError("aspects_file must not be blank")


_settings: PhonoscoreSettings | None = None


def get_settings() -> PhonoscoreSettings:
    global _settings
    if _settings is None:
        _settings = PhonoscoreSettings()
        _settings.validate()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
