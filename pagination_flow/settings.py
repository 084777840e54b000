from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "pagination-flow"
    app_env: str = "local"
    log_level: str = "INFO"

    database_url: str = "sqlite:///./products.db"
    database_echo: bool = False

    # Products per page on the listing routes. Not exposed to callers.
    page_size: int = 10
    dataset_max_rows: int = 10_000_000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
