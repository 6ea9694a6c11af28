from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    # Upper-case variable names (API_BASE_URL, TOKEN_KEY, ...) are matched too.
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    api_base_url: str = "http://127.0.0.1:8000"
    api_prefix: str = "/api/v1"
    request_timeout: float = 30.0
    max_redirects: int = 5
    token_key: str = "authToken"
    upstash_redis_rest_url: Optional[str] = None
    upstash_redis_rest_token: Optional[str] = None
    token_file: Optional[Path] = None
    city_data_path: Optional[Path] = None

    @property
    def api_root(self) -> str:
        return self.api_base_url.rstrip("/") + "/" + self.api_prefix.strip("/")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
