from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="POE_TRADE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_base_url: str = "https://www.pathofexile.com/api/trade/"
    search_base_url: str = "https://www.pathofexile.com/trade/search/"
    exchange_base_url: str = "https://www.pathofexile.com/trade/exchange/"
    cdn_base_url: str = "https://web.poecdn.com/"
    retry_interval_seconds: float = Field(default=60.0, gt=0)
    user_agent: str = "poe-trade-client/0.1"
    league: Optional[str] = None

    @field_validator(
        "api_base_url", "search_base_url", "exchange_base_url", "cdn_base_url"
    )
    @classmethod
    def ensure_trailing_slash(cls, value: str) -> str:
        # Shareable links are built by plain concatenation.
        return value if value.endswith("/") else value + "/"


settings = Settings()
