"""
Storage layer exports.
"""

from app.scraping.storage.base import PlayerStore
from app.scraping.storage.sqlalchemy_storage import SQLAlchemyPlayerStore

__all__ = ["PlayerStore", "SQLAlchemyPlayerStore"]
