"""
app/api/routers package marker.
"""

from app.api.routers.player_scraping import router as player_scraping_router

__all__ = ["player_scraping_router"]
