"""
Player profile ingestion engine.
"""

from __future__ import annotations

import logging
import math

import requests

from app.scraping.cancellation import CancellationToken
from app.scraping.config.models import PlayerScrapingSettings
from app.scraping.errors import BatchAbortedError, ChunkExecutionError, InvalidRangeError
from app.scraping.fetcher import PlayerProfileFetcher
from app.scraping.logging_utils import log_event
from app.scraping.progress import ProgressSink
from app.scraping.rate_limiter import RequestPacer
from app.scraping.runner import ChunkRunner
from app.scraping.storage import PlayerStore
from app.scraping.types import BatchState, ChunkPlan, PlayerRecord

logger = logging.getLogger(__name__)


def plan_chunks(start_id: int, end_id: int, chunk_size: int) -> list[ChunkPlan]:
    """
    Split the inclusive range into contiguous chunks; the last may be shorter.
    """

    size = max(1, chunk_size)
    total_items = end_id - start_id + 1
    if total_items <= 0:
        return []

    total_chunks = math.ceil(total_items / size)
    plans: list[ChunkPlan] = []
    for offset in range(total_chunks):
        chunk_start = start_id + offset * size
        plans.append(
            ChunkPlan(
                start_id=chunk_start,
                end_id=min(chunk_start + size - 1, end_id),
                chunk_index=offset + 1,
                total_chunks=total_chunks,
            )
        )
    return plans


class PlayerIngestionEngine:
    """
    Runs single-profile fetches and sequential chunked batches.

    Chunks never run concurrently, and neither do items inside a chunk. Two
    batches over the same range are not coordinated here; callers must
    serialize them.
    """

    def __init__(
        self,
        *,
        settings: PlayerScrapingSettings,
        store: PlayerStore,
        session: requests.Session | None = None,
        fetcher: PlayerProfileFetcher | None = None,
        pacer: RequestPacer | None = None,
    ) -> None:
        self._settings = settings
        self._store = store
        self._fetcher = fetcher or PlayerProfileFetcher(
            settings=settings,
            session=session or requests.Session(),
        )
        self._pacer = pacer or RequestPacer(
            item_delay_seconds=settings.item_delay_seconds,
            chunk_delay_seconds=settings.chunk_delay_seconds,
        )
        self._runner = ChunkRunner(
            fetcher=self._fetcher,
            store=store,
            pacer=self._pacer,
            abort_on_store_outage=settings.abort_on_store_outage,
        )

    def fetch_one(self, player_id: int) -> PlayerRecord:
        """
        Fetch one profile and upsert it.

        `FetchError` and `StoreError` propagate to the caller unchanged.
        """

        if player_id < 1:
            raise InvalidRangeError(f"Player ID must be positive, got {player_id}.")
        record = self._fetcher.fetch(player_id)
        self._store.upsert(record)
        log_event(
            logger,
            logging.INFO,
            "profile_scraped",
            player_id=player_id,
            name=record.display_name,
        )
        return record

    def run_batch(
        self,
        start_id: int,
        end_id: int,
        chunk_size: int | None = None,
        *,
        sink: ProgressSink | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> BatchState:
        """
        Process `[start_id, end_id]` chunk by chunk and return the final state.

        Item failures are reported through the returned counts and error list.
        `BatchAbortedError` is raised only when a chunk fails fatally; the
        partially aggregated state rides along on the exception.
        """

        self.validate_range(start_id, end_id)
        size = self._settings.clamp_chunk_size(chunk_size)
        plans = plan_chunks(start_id, end_id, size)
        state = BatchState(
            start_id=start_id,
            end_id=end_id,
            chunk_size=size,
            total_chunks=len(plans),
            total_items=end_id - start_id + 1,
        )
        log_event(
            logger,
            logging.INFO,
            "batch_started",
            start_id=start_id,
            end_id=end_id,
            chunk_size=size,
            total_chunks=state.total_chunks,
            total_items=state.total_items,
        )

        for plan in plans:
            if cancel_token is not None and cancel_token.cancelled:
                state.cancelled = True
                break

            try:
                summary = self._runner.run_chunk(
                    plan.start_id,
                    plan.end_id,
                    plan.chunk_index,
                    plan.total_chunks,
                    cancel_token=cancel_token,
                )
            except ChunkExecutionError as exc:
                state.merge(exc.summary, completed=False)
                state.fatal_error = str(exc)
                log_event(
                    logger,
                    logging.ERROR,
                    "batch_aborted",
                    chunk_index=plan.chunk_index,
                    success_total=state.success_total,
                    failure_total=state.failure_total,
                    error=state.fatal_error,
                )
                self._publish(sink, state)
                raise BatchAbortedError(state.fatal_error, state=state) from exc

            state.merge(summary)
            self._publish(sink, state)

            if summary.cancelled:
                state.cancelled = True
                break
            if plan.chunk_index < plan.total_chunks:
                self._pacer.after_chunk(cancel_token)

        if state.cancelled:
            log_event(
                logger,
                logging.WARNING,
                "batch_cancelled",
                chunks_completed=state.chunks_completed,
                success_total=state.success_total,
                failure_total=state.failure_total,
            )
            return state

        state.is_complete = True
        self._publish(sink, state)
        log_event(
            logger,
            logging.INFO,
            "batch_completed",
            total_items=state.total_items,
            success_total=state.success_total,
            failure_total=state.failure_total,
            no_data_total=state.no_data_total,
        )
        return state

    @staticmethod
    def validate_range(start_id: int, end_id: int) -> None:
        if start_id < 1:
            raise InvalidRangeError(f"Start ID must be positive, got {start_id}.")
        if start_id >= end_id:
            raise InvalidRangeError(
                f"Start ID must be less than End ID (start_id={start_id}, end_id={end_id})."
            )

    @staticmethod
    def _publish(sink: ProgressSink | None, state: BatchState) -> None:
        if sink is None:
            return
        snapshot = state.snapshot()
        try:
            sink.publish(snapshot)
        except Exception as exc:
            log_event(
                logger,
                logging.WARNING,
                "progress_sink_failed",
                chunk_index=snapshot.chunk_index,
                is_complete=snapshot.is_complete,
                error=str(exc),
            )
