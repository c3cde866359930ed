"""
Configuration settings for namesweep.

Uses Pydantic Settings to load environment variables for the sweep pipeline
(pool size, queue capacity, output file, endpoint) and logging.
"""
from __future__ import annotations

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Sweep
    default_word_length: int = Field(2, ge=0, alias="SWEEP_DEFAULT_WORD_LENGTH")
    num_workers: int = Field(1600, ge=1, alias="SWEEP_WORKERS")
    queue_capacity: int = Field(100, ge=1, alias="SWEEP_QUEUE_CAPACITY")
    output_file: str = Field("valid_combinations.txt", alias="SWEEP_OUTPUT_FILE")
    endpoint_url: str = Field(
        "https://passport.twitch.tv/usernames", alias="SWEEP_ENDPOINT_URL"
    )
    fail_fast: bool = Field(False, alias="SWEEP_FAIL_FAST")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    json_logs: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
