"""Pydantic Settings model for application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from block_relayer.utils.constants import DEFAULT_POLL_INTERVAL, DEFAULT_READER_AP, DEFAULT_SAFETY_MARGIN, DEFAULT_WRITER_AP


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False

    # Node endpoints
    WRITER_AP: str = DEFAULT_WRITER_AP
    READER_AP: str = DEFAULT_READER_AP

    # Sync mode selection, 0 means unset
    TARGET: int = 0
    SINGLE_BLOCK: int = 0

    # Continuous mode tuning
    SAFETY_MARGIN: int = DEFAULT_SAFETY_MARGIN
    POLL_INTERVAL: float = DEFAULT_POLL_INTERVAL
