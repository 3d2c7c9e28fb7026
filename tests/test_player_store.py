"""
tests/test_player_store.py

SQLAlchemy store behaviour against an in-memory SQLite database.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from app.repositories.player_profile_repository import PlayerProfileRepository
from app.scraping.engine import PlayerIngestionEngine
from app.scraping.errors import StoreError
from app.scraping.storage import SQLAlchemyPlayerStore
from app.scraping.types import PlayerRecord
from db.models.player_profile import PlayerProfile

BASE_TIME = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


def _record(player_id: int, *, minutes: int = 0, **overrides) -> PlayerRecord:
    values = {
        "player_id": player_id,
        "source_url": f"https://example.test/Players/Playerprofile.aspx?ID={player_id}",
        "scraped_at": BASE_TIME + timedelta(minutes=minutes),
        "name": f"Player Name {player_id}",
        "height": 72,
        "weight": 180,
        "city": "Austin",
        "state": "TX",
    }
    values.update(overrides)
    return PlayerRecord(**values)


def _row_count(db_session) -> int:
    return db_session.scalar(select(func.count()).select_from(PlayerProfile))


class TestSQLAlchemyPlayerStore:
    def test_upsert_inserts_row(self, db_session) -> None:
        store = SQLAlchemyPlayerStore(session=db_session)

        store.upsert(_record(1, report="Good glove."))

        row = PlayerProfileRepository(db_session).get(1)
        assert row is not None
        assert row.name == "Player Name 1"
        assert row.showcase_report == "Good glove."
        assert row.profile_url.endswith("ID=1")

    def test_upsert_replaces_existing_row(self, db_session) -> None:
        store = SQLAlchemyPlayerStore(session=db_session)

        store.upsert(_record(1, weight=180))
        store.upsert(_record(1, minutes=5, weight=190, name="Renamed"))

        assert _row_count(db_session) == 1
        db_session.expire_all()
        row = PlayerProfileRepository(db_session).get(1)
        assert row is not None
        assert row.weight == 190
        assert row.name == "Renamed"

    def test_list_recent_orders_by_scraped_at_desc(self, db_session) -> None:
        store = SQLAlchemyPlayerStore(session=db_session)
        store.upsert(_record(1, minutes=10))
        store.upsert(_record(2, minutes=30))
        store.upsert(_record(3, minutes=20))

        recent = store.list_recent(2)

        assert [record.player_id for record in recent] == [2, 3]
        assert recent[0].city == "Austin"

    def test_delete_all(self, db_session) -> None:
        store = SQLAlchemyPlayerStore(session=db_session)
        store.upsert(_record(1))
        store.upsert(_record(2))

        assert store.delete_all() == 2
        assert store.list_recent(10) == []

    @pytest.mark.parametrize(
        "column",
        ["name", "positions", "bats", "throws", "city", "state", "team_last_played"],
    )
    def test_scraped_text_columns_are_unbounded(self, column) -> None:
        assert PlayerProfile.__table__.c[column].type.length is None

    def test_long_free_text_values_are_stored_intact(self, db_session) -> None:
        store = SQLAlchemyPlayerStore(session=db_session)
        positions = ", ".join(["SS", "2B", "3B", "CF", "RHP", "C", "1B", "LF", "RF"] * 4)
        city = "Saint " + "Augustine " * 20

        store.upsert(_record(1, positions=positions, city=city.strip()))

        stored = store.list_recent(1)[0]
        assert stored.positions == positions
        assert stored.city == city.strip()

    def test_database_errors_become_store_errors(self, db_session, monkeypatch) -> None:
        store = SQLAlchemyPlayerStore(session=db_session)

        def unavailable(*args, **kwargs):
            raise OperationalError("INSERT", {}, Exception("database is locked"))

        monkeypatch.setattr(db_session, "execute", unavailable)

        with pytest.raises(StoreError):
            store.upsert(_record(1))


class TestIdempotentFetch:
    def test_refetch_leaves_single_row_with_same_values(
        self, db_session, settings, fetcher, pacer, http_session, profile_html
    ) -> None:
        http_session.add_page(493019, profile_html())
        engine = PlayerIngestionEngine(
            settings=settings,
            store=SQLAlchemyPlayerStore(session=db_session),
            fetcher=fetcher,
            pacer=pacer,
        )

        first = engine.fetch_one(493019)
        second = engine.fetch_one(493019)

        assert _row_count(db_session) == 1
        assert second.scraped_at > first.scraped_at
        stored = SQLAlchemyPlayerStore(session=db_session).list_recent(5)
        assert len(stored) == 1
        assert stored[0].player_id == 493019
        assert stored[0].height == first.height == second.height
        assert stored[0].report == first.report
