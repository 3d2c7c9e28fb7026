"""
Player scraping configuration models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PlayerScrapingSettings:
    """
    Runtime settings for player profile ingestion.
    """

    base_url: str
    user_agent: str
    timeout_seconds: float
    item_delay_seconds: float
    chunk_delay_seconds: float
    default_chunk_size: int
    min_chunk_size: int
    max_chunk_size: int
    abort_on_store_outage: bool
    recent_limit: int

    def clamp_chunk_size(self, chunk_size: int | None) -> int:
        """
        Return `chunk_size` (or the default) bounded to the configured range.
        """

        requested = self.default_chunk_size if chunk_size is None else chunk_size
        return max(self.min_chunk_size, min(self.max_chunk_size, requested))
