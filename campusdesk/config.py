from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library configuration loaded from environment variables."""

    preset_backend: Literal["memory", "file", "redis"] = Field(
        default="file",
        validation_alias=AliasChoices("CAMPUSDESK_PRESET_BACKEND", "PRESET_BACKEND"),
    )
    preset_file_path: str = Field(
        default="data/filter_presets.json",
        validation_alias=AliasChoices("CAMPUSDESK_PRESET_FILE", "PRESET_FILE"),
    )
    redis_url: str = Field(
        default="redis://redis:6379/1",
        validation_alias=AliasChoices("CAMPUSDESK_REDIS_URL", "REDIS_URL"),
    )
    preset_key_suffix: str = Field(
        default="FilterPresets",
        validation_alias=AliasChoices("CAMPUSDESK_PRESET_KEY_SUFFIX", "PRESET_KEY_SUFFIX"),
    )
    user_timezone: str = Field(
        default="UTC",
        validation_alias=AliasChoices("CAMPUSDESK_USER_TIMEZONE", "USER_TIMEZONE"),
    )
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("CAMPUSDESK_LOG_LEVEL", "LOG_LEVEL"),
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
