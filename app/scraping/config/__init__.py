"""
Config helpers for player scraping.
"""

from app.scraping.config.loader import get_player_scraping_settings
from app.scraping.config.models import PlayerScrapingSettings

__all__ = [
    "PlayerScrapingSettings",
    "get_player_scraping_settings",
]
