"""
Client configuration, loaded from the environment or a local .env file.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ── Environment ──
    environment: str = "development"

    # ── Remote books service ──
    api_base_url: str = "http://localhost:8085"
    books_path: str = "/api/books"
    request_timeout: float = 10.0
    connect_timeout: float = 5.0

    # ── Pagination ──
    page_size: int = Field(5, gt=0)

    # ── Logging ──
    log_level: str = "INFO"
    log_format: str = "json"  # json | console

    @property
    def books_url(self) -> str:
        return f"{self.api_base_url.rstrip('/')}{self.books_path}"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
