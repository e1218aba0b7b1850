from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class FeedlineSettings(BaseSettings):
    """Environment-based settings (FEEDLINE_* variables or a local .env file)."""

    model_config = SettingsConfigDict(
        env_prefix="FEEDLINE_", env_file=".env", case_sensitive=False, extra="ignore"
    )

    default_interval_ms: int = 1000
    log_level: str = "INFO"
    metrics_enabled: bool = True


@lru_cache()
def get_settings() -> FeedlineSettings:
    return FeedlineSettings()
