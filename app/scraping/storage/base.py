"""
Storage layer interface for scraped player profiles.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from app.scraping.types import PlayerRecord


class PlayerStore(ABC):
    """
    Persistence contract consumed by the ingestion engine.

    Writes are idempotent upserts keyed on `player_id`; concurrent writers
    converge on last-write-wins per ID.
    """

    @abstractmethod
    def upsert(self, record: PlayerRecord) -> None:
        """
        Insert or replace one profile. Raises `StoreError` on failure.
        """

    @abstractmethod
    def list_recent(self, limit: int) -> list[PlayerRecord]:
        """
        Return up to `limit` profiles ordered by `scraped_at` descending.
        """

    @abstractmethod
    def delete_all(self) -> int:
        """
        Delete every stored profile and return the number of rows removed.
        """
