"""
SQLAlchemy-backed storage implementation for scraped player profiles.
"""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.repositories.player_profile_repository import PlayerProfileRepository
from app.scraping.errors import StoreError
from app.scraping.storage.base import PlayerStore
from app.scraping.types import PlayerRecord


class SQLAlchemyPlayerStore(PlayerStore):
    """
    Persist player profiles through the repository, one commit per write.
    """

    def __init__(self, *, session: Session) -> None:
        self._session = session
        self._repository = PlayerProfileRepository(session)

    def upsert(self, record: PlayerRecord) -> None:
        try:
            self._repository.upsert(record)
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise StoreError(_describe(exc)) from exc

    def list_recent(self, limit: int) -> list[PlayerRecord]:
        try:
            rows = self._repository.list_recent(limit)
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise StoreError(_describe(exc)) from exc
        return [self._repository.to_record(row) for row in rows]

    def delete_all(self) -> int:
        try:
            deleted = self._repository.delete_all()
            self._session.commit()
            return deleted
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise StoreError(_describe(exc)) from exc


def _describe(exc: SQLAlchemyError) -> str:
    lines = str(exc).strip().splitlines()
    return lines[0] if lines else exc.__class__.__name__
