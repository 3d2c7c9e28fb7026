"""
Service layer exports.
"""

from app.services.player_scraping_service import (
    PlayerScrapingService,
    get_player_scraping_service,
)

__all__ = ["PlayerScrapingService", "get_player_scraping_service"]
