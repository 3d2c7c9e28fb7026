"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.player_profile import PlayerProfile

__all__ = ["PlayerProfile"]
