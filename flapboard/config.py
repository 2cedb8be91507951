"""Board settings — loaded once from .env, cached for the process lifetime."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_AIRPORTS_FILE = Path(__file__).resolve().parent / "data" / "airports.json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parent.parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Required
    telegram_bot_token: str
    telegram_chat_id: str

    # Data source: the proxy, or the upstream API directly when a key is set
    proxy_url: str = "http://localhost:3000/api/flights"
    airport_api_key: str = ""

    timezone: str = "Asia/Seoul"
    airports_file: Path = DEFAULT_AIRPORTS_FILE

    rotation_interval_seconds: int = 10
    refresh_interval_seconds: int = 180
    resize_debounce_seconds: float = 0.5

    # Initial viewport, changed at runtime with /resize
    display_width: int = 1920
    display_height: int = 1080

    fallback_cap: int = 20
    log_level: str = "INFO"
    cache_ttl_seconds: int = 3600


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]


def setup_logging(level: str = "INFO") -> None:
    numeric = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s | %(levelname)-8s | %(name)-25s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("apscheduler").setLevel(logging.WARNING)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
