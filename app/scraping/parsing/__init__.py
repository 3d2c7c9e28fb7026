"""
Parsing layer exports.
"""

from app.scraping.parsing.profile_parser import PlayerProfileParser

__all__ = ["PlayerProfileParser"]
