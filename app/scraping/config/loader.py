"""
Environment config loader for player scraping.
"""

from __future__ import annotations

import os
from functools import lru_cache

from db.config import load_env_files

from app.scraping.config.models import PlayerScrapingSettings

DEFAULT_BASE_URL = "https://www.perfectgame.org/Players"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _get_str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    stripped = raw.strip()
    return stripped if stripped else default


def build_player_scraping_settings() -> PlayerScrapingSettings:
    """
    Build scraper settings from the current environment without caching.
    """

    min_chunk_size = max(1, _get_int_env("PLAYER_SCRAPE_MIN_CHUNK_SIZE", 5))
    max_chunk_size = max(
        min_chunk_size,
        _get_int_env("PLAYER_SCRAPE_MAX_CHUNK_SIZE", 50),
    )
    default_chunk_size = min(
        max_chunk_size,
        max(min_chunk_size, _get_int_env("PLAYER_SCRAPE_DEFAULT_CHUNK_SIZE", 25)),
    )
    return PlayerScrapingSettings(
        base_url=_get_str_env("PLAYER_SCRAPE_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        user_agent=_get_str_env("PLAYER_SCRAPE_USER_AGENT", DEFAULT_USER_AGENT),
        timeout_seconds=max(
            1.0,
            _get_float_env("PLAYER_SCRAPE_TIMEOUT_SECONDS", 15.0),
        ),
        item_delay_seconds=max(
            0.0,
            _get_float_env("PLAYER_SCRAPE_ITEM_DELAY_SECONDS", 0.1),
        ),
        chunk_delay_seconds=max(
            0.0,
            _get_float_env("PLAYER_SCRAPE_CHUNK_DELAY_SECONDS", 0.5),
        ),
        default_chunk_size=default_chunk_size,
        min_chunk_size=min_chunk_size,
        max_chunk_size=max_chunk_size,
        abort_on_store_outage=_get_bool_env("PLAYER_SCRAPE_ABORT_ON_STORE_OUTAGE", True),
        recent_limit=max(1, _get_int_env("PLAYER_SCRAPE_RECENT_LIMIT", 50)),
    )


@lru_cache(maxsize=1)
def get_player_scraping_settings() -> PlayerScrapingSettings:
    """
    Return cached scraper settings from environment variables.
    """

    load_env_files()
    return build_player_scraping_settings()
