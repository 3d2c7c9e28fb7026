"""
app/services/player_scraping_service.py

Service orchestration for player profile scraping.
"""

from __future__ import annotations

from functools import lru_cache

import requests
from sqlalchemy.orm import Session

from app.scraping.cancellation import CancellationToken
from app.scraping.config import PlayerScrapingSettings, get_player_scraping_settings
from app.scraping.engine import PlayerIngestionEngine
from app.scraping.progress import ProgressSink
from app.scraping.storage import SQLAlchemyPlayerStore
from app.scraping.types import BatchState, PlayerRecord


class PlayerScrapingService:
    """
    Builds a store and engine per DB session and runs ingestion operations.
    """

    def __init__(
        self,
        settings: PlayerScrapingSettings | None = None,
        *,
        http_session: requests.Session | None = None,
    ) -> None:
        self._settings = settings or get_player_scraping_settings()
        self._http_session = http_session or requests.Session()

    @property
    def settings(self) -> PlayerScrapingSettings:
        return self._settings

    def scrape_player(self, *, db: Session, player_id: int) -> PlayerRecord:
        return self._engine(db).fetch_one(player_id)

    def scrape_range(
        self,
        *,
        db: Session,
        start_id: int,
        end_id: int,
        chunk_size: int | None = None,
        sink: ProgressSink | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> BatchState:
        return self._engine(db).run_batch(
            start_id,
            end_id,
            chunk_size,
            sink=sink,
            cancel_token=cancel_token,
        )

    def list_recent(self, *, db: Session, limit: int | None = None) -> list[PlayerRecord]:
        store = SQLAlchemyPlayerStore(session=db)
        return store.list_recent(limit or self._settings.recent_limit)

    def clear(self, *, db: Session) -> int:
        return SQLAlchemyPlayerStore(session=db).delete_all()

    def _engine(self, db: Session) -> PlayerIngestionEngine:
        return PlayerIngestionEngine(
            settings=self._settings,
            store=SQLAlchemyPlayerStore(session=db),
            session=self._http_session,
        )


@lru_cache(maxsize=1)
def get_player_scraping_service() -> PlayerScrapingService:
    """
    Build and cache player scraping service.
    """

    return PlayerScrapingService()
