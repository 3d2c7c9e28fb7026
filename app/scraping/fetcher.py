"""
Single-profile fetcher: one HTTP GET, one parse, one typed outcome.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

import requests

from app.scraping.config.models import PlayerScrapingSettings
from app.scraping.errors import NoDataError, TransportError
from app.scraping.logging_utils import log_event
from app.scraping.parsing import PlayerProfileParser
from app.scraping.types import PlayerRecord

logger = logging.getLogger(__name__)

PROFILE_PATH = "Playerprofile.aspx"
NO_DATA_REASON = "No data found or profile is private"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PlayerProfileFetcher:
    """
    Fetch and parse one player profile page.

    No retries are attempted here; batch mode treats each ID as a single
    attempt.
    """

    def __init__(
        self,
        *,
        settings: PlayerScrapingSettings,
        session: requests.Session,
        parser: type[PlayerProfileParser] = PlayerProfileParser,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.settings = settings
        self.session = session
        self.parser = parser
        self.clock = clock
        self.request_headers = {"User-Agent": settings.user_agent}

    def source_url(self, player_id: int) -> str:
        return f"{self.settings.base_url}/{PROFILE_PATH}?ID={player_id}"

    def fetch(self, player_id: int) -> PlayerRecord:
        """
        Return the parsed record for `player_id`.

        Raises `TransportError` for timeouts, connection failures and non-2xx
        responses, and `NoDataError` when the page has no meaningful field.
        """

        url = self.source_url(player_id)
        html = self._get(player_id, url)
        parsed = self.parser.parse(html)
        if not parsed.has_data():
            raise NoDataError(player_id, NO_DATA_REASON)

        record = PlayerRecord.from_parsed(
            player_id=player_id,
            source_url=url,
            scraped_at=self.clock(),
            parsed=parsed,
        )
        log_event(
            logger,
            logging.DEBUG,
            "profile_parsed",
            player_id=player_id,
            name=record.name,
            height=record.height,
            weight=record.weight,
            graduation_year=record.graduation_year,
            positions=record.positions,
        )
        return record

    def _get(self, player_id: int, url: str) -> str:
        try:
            response = self.session.get(
                url,
                headers=self.request_headers,
                timeout=self.settings.timeout_seconds,
                allow_redirects=True,
            )
        except requests.Timeout as exc:
            raise TransportError(
                player_id,
                f"Request timed out after {self.settings.timeout_seconds:g}s",
            ) from exc
        except requests.RequestException as exc:
            raise TransportError(player_id, f"Request failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise TransportError(
                player_id,
                f"Failed to fetch profile ({response.status_code})",
                status_code=response.status_code,
            )
        return response.text
