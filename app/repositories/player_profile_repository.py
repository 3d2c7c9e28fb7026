"""
app/repositories/player_profile_repository.py

Persistence layer for scraped player profiles.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from app.scraping.types import PlayerRecord
from db.models.player_profile import PlayerProfile

_CONFLICT_COLUMNS = ("player_id",)


class PlayerProfileRepository:
    """
    Repository for idempotent player profile writes and recent-profile reads.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def upsert(self, record: PlayerRecord) -> None:
        """
        Insert the profile or replace the existing row with the same player_id.
        """

        payload = self.to_payload(record)
        stmt = self._insert().values(payload)
        updates: dict[str, Any] = {
            key: stmt.excluded[key] for key in payload if key not in _CONFLICT_COLUMNS
        }
        updates["updated_at"] = datetime.now(timezone.utc)
        stmt = stmt.on_conflict_do_update(
            index_elements=list(_CONFLICT_COLUMNS),
            set_=updates,
        )
        self._session.execute(stmt)

    def list_recent(self, limit: int) -> list[PlayerProfile]:
        stmt = (
            select(PlayerProfile)
            .order_by(PlayerProfile.scraped_at.desc(), PlayerProfile.player_id.desc())
            .limit(max(1, limit))
        )
        return list(self._session.scalars(stmt).all())

    def get(self, player_id: int) -> PlayerProfile | None:
        stmt = select(PlayerProfile).where(PlayerProfile.player_id == player_id)
        return self._session.scalars(stmt).one_or_none()

    def delete_all(self) -> int:
        result = self._session.execute(delete(PlayerProfile))
        return int(result.rowcount or 0)

    @staticmethod
    def to_payload(record: PlayerRecord) -> dict[str, Any]:
        return {
            "player_id": record.player_id,
            "name": record.name,
            "height": record.height,
            "weight": record.weight,
            "graduation_year": record.graduation_year,
            "positions": record.positions,
            "bats": record.bats,
            "throws": record.throws,
            "city": record.city,
            "state": record.state,
            "team_last_played": record.team_last_played,
            "profile_url": record.source_url,
            "showcase_report": record.report,
            "scraped_at": record.scraped_at,
        }

    @staticmethod
    def to_record(row: PlayerProfile) -> PlayerRecord:
        return PlayerRecord(
            player_id=row.player_id,
            source_url=row.profile_url,
            scraped_at=row.scraped_at,
            name=row.name,
            height=row.height,
            weight=row.weight,
            graduation_year=row.graduation_year,
            positions=row.positions,
            bats=row.bats,
            throws=row.throws,
            city=row.city,
            state=row.state,
            team_last_played=row.team_last_played,
            report=row.showcase_report,
        )

    def _insert(self) -> Any:
        # SQLite is only used by the test suite; production targets PostgreSQL.
        if self._session.get_bind().dialect.name == "sqlite":
            return sqlite_insert(PlayerProfile)
        return postgresql_insert(PlayerProfile)
