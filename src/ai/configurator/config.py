"""Configurator chat configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfiguratorSettings(BaseSettings):
    """Settings for the house configurator chat.

    Attributes:
        max_steps: Maximum model invocations per user turn
        max_duration_seconds: Wall-clock budget for a whole chat request
        selection_delay_seconds: Cosmetic delay before a selection is displayed
        heartbeat_interval_seconds: Idle time before an SSE heartbeat is sent
    """

    model_config = SettingsConfigDict(
        env_prefix="CONFIGURATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_steps: int = Field(default=10, gt=0)
    max_duration_seconds: float = Field(default=30.0, gt=0)
    selection_delay_seconds: float = Field(default=1.5, ge=0)
    heartbeat_interval_seconds: float = Field(default=20.0, gt=0)


@lru_cache
def get_configurator_settings() -> ConfiguratorSettings:
    """Get cached configurator settings instance."""
    return ConfiguratorSettings()
