"""
tests/conftest.py

Shared fakes for the player scraping tests: no network, no real sleeps,
and either an in-memory store or a SQLite-backed SQLAlchemy session.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import datetime, timedelta, timezone

import pytest
import requests
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.scraping.config.models import PlayerScrapingSettings
from app.scraping.errors import StoreError
from app.scraping.fetcher import PlayerProfileFetcher
from app.scraping.rate_limiter import RequestPacer
from app.scraping.storage import PlayerStore
from app.scraping.types import PlayerRecord
from db.base import Base
import db.models  # noqa: F401 - registers ORM models on Base.metadata


class FakeResponse:
    def __init__(self, status_code: int, text: str) -> None:
        self.status_code = status_code
        self.text = text


class FakeHTTPSession:
    """
    Stand-in for `requests.Session` keyed by profile ID.

    Unknown IDs answer 200 with a page that carries no profile fields.
    """

    def __init__(self) -> None:
        self.pages: dict[int, tuple[int, str]] = {}
        self.failures: dict[int, Exception] = {}
        self.calls: list[dict[str, object]] = []

    def add_page(self, player_id: int, html: str, status_code: int = 200) -> None:
        self.pages[player_id] = (status_code, html)

    def fail(self, player_id: int, exc: Exception) -> None:
        self.failures[player_id] = exc

    def get(self, url: str, **kwargs: object) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        player_id = int(url.rsplit("ID=", 1)[1])
        if player_id in self.failures:
            raise self.failures[player_id]
        status_code, html = self.pages.get(player_id, (200, "<html><body></body></html>"))
        return FakeResponse(status_code, html)

    @property
    def requested_ids(self) -> list[int]:
        return [int(str(call["url"]).rsplit("ID=", 1)[1]) for call in self.calls]


class InMemoryPlayerStore(PlayerStore):
    def __init__(self) -> None:
        self.rows: dict[int, PlayerRecord] = {}
        self.upserts: list[PlayerRecord] = []
        self.failing_ids: set[int] = set()
        self.always_fail = False

    def upsert(self, record: PlayerRecord) -> None:
        if self.always_fail or record.player_id in self.failing_ids:
            raise StoreError("connection refused")
        self.upserts.append(record)
        self.rows[record.player_id] = record

    def list_recent(self, limit: int) -> list[PlayerRecord]:
        ordered = sorted(self.rows.values(), key=lambda row: row.scraped_at, reverse=True)
        return ordered[:limit]

    def delete_all(self) -> int:
        deleted = len(self.rows)
        self.rows.clear()
        return deleted


class SteppingClock:
    def __init__(self) -> None:
        self.current = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


def build_profile_html(
    *,
    name: str | None = "Jordan Smith",
    height: str | None = "6' 2\"",
    weight: str | None = "185 lbs",
    class_of: str | None = "2026",
    positions: str | None = "SS, RHP",
    bats_throws: str | None = "R/R",
    hometown: str | None = "Austin, TX",
    team: str | None = "Texas Elite 17U",
    report: str | None = "Quick hands, <b>plus</b> arm strength.",
    report_block: str | None = None,
) -> str:
    prefix = "ContentTopLevel_ContentPlaceHolder1_"
    parts = ["<html><body>"]
    if name is not None:
        parts.append(f'<span id="{prefix}lblPlayerName">{name}</span>')
    if class_of is not None:
        parts.append(f"<div>Class of {class_of}</div>")
    if height is not None:
        parts.append(f'<span id="{prefix}lblHt">{height}</span>')
    if weight is not None:
        parts.append(f'<span id="{prefix}lblWt">{weight}</span>')
    if positions is not None:
        parts.append(f'<span id="{prefix}lblPos">{positions}</span>')
    if bats_throws is not None:
        parts.append(f'<span id="{prefix}lblBT">{bats_throws}</span>')
    if hometown is not None:
        parts.append(f'<span id="{prefix}lblHomeTown">{hometown}</span>')
    if team is not None:
        parts.append(f'<a id="{prefix}hlTournamentTeam" href="#">{team}</a>')
    if report is not None:
        parts.append(f'<span id="{prefix}lblLatestReport">{report}</span>')
    if report_block is not None:
        parts.append(f'<div class="text-start p-1">{report_block}</div>')
    parts.append("</body></html>")
    return "".join(parts)


@pytest.fixture()
def profile_html() -> Callable[..., str]:
    return build_profile_html


@pytest.fixture()
def settings() -> PlayerScrapingSettings:
    return PlayerScrapingSettings(
        base_url="https://example.test/Players",
        user_agent="Mozilla/5.0 (X11; Linux x86_64) TestBrowser/1.0",
        timeout_seconds=5.0,
        item_delay_seconds=0.1,
        chunk_delay_seconds=0.5,
        default_chunk_size=25,
        min_chunk_size=5,
        max_chunk_size=50,
        abort_on_store_outage=True,
        recent_limit=50,
    )


@pytest.fixture()
def http_session() -> FakeHTTPSession:
    return FakeHTTPSession()


@pytest.fixture()
def store() -> InMemoryPlayerStore:
    return InMemoryPlayerStore()


@pytest.fixture()
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture()
def sleeps() -> list[float]:
    return []


@pytest.fixture()
def pacer(settings: PlayerScrapingSettings, sleeps: list[float]) -> RequestPacer:
    return RequestPacer(
        item_delay_seconds=settings.item_delay_seconds,
        chunk_delay_seconds=settings.chunk_delay_seconds,
        sleep=sleeps.append,
    )


@pytest.fixture()
def fetcher(
    settings: PlayerScrapingSettings,
    http_session: FakeHTTPSession,
    clock: SteppingClock,
) -> PlayerProfileFetcher:
    return PlayerProfileFetcher(
        settings=settings,
        session=http_session,  # type: ignore[arg-type]
        clock=clock,
    )


@pytest.fixture()
def db_session() -> Iterator[Session]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    session = factory()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture()
def timeout_error() -> requests.Timeout:
    return requests.Timeout("read timed out")
