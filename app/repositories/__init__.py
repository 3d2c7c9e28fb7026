"""
Repository exports.
"""

from app.repositories.player_profile_repository import PlayerProfileRepository

__all__ = ["PlayerProfileRepository"]
