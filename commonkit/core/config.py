# commonkit/core/config.py
from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    cache_key_prefix: str | None = None  # = COMMONKIT_CACHE_KEY_PREFIX
    log_level: str = "INFO"
    log_format: str = "json"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="COMMONKIT_",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
