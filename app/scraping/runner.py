"""
Chunk runner: processes one contiguous ID sub-range with per-item isolation.
"""

from __future__ import annotations

import logging

from app.scraping.cancellation import CancellationToken
from app.scraping.errors import ChunkExecutionError, FetchError, NoDataError, StoreError
from app.scraping.fetcher import PlayerProfileFetcher
from app.scraping.logging_utils import log_event
from app.scraping.rate_limiter import RequestPacer
from app.scraping.storage import PlayerStore
from app.scraping.types import ChunkSummary

logger = logging.getLogger(__name__)


class ChunkRunner:
    """
    Fetch, parse and persist every ID of one chunk, in ascending order.

    A failing item is recorded and counted; it never stops the chunk. The
    only exception that leaves `run_chunk` is `ChunkExecutionError`, raised
    when every write of a fully processed chunk failed or an unexpected
    error occurs. Store failures on some items are counted like fetch
    failures.
    """

    def __init__(
        self,
        *,
        fetcher: PlayerProfileFetcher,
        store: PlayerStore,
        pacer: RequestPacer,
        abort_on_store_outage: bool = True,
    ) -> None:
        self._fetcher = fetcher
        self._store = store
        self._pacer = pacer
        self._abort_on_store_outage = abort_on_store_outage

    def run_chunk(
        self,
        start_id: int,
        end_id: int,
        chunk_index: int,
        total_chunks: int,
        cancel_token: CancellationToken | None = None,
    ) -> ChunkSummary:
        success_count = 0
        failure_count = 0
        no_data_count = 0
        store_failures = 0
        errors: list[str] = []
        cancelled = False

        def summary() -> ChunkSummary:
            return ChunkSummary(
                start_id=start_id,
                end_id=end_id,
                chunk_index=chunk_index,
                total_chunks=total_chunks,
                success_count=success_count,
                failure_count=failure_count,
                errors=list(errors),
                no_data_count=no_data_count,
                cancelled=cancelled,
            )

        log_event(
            logger,
            logging.INFO,
            "chunk_started",
            chunk_index=chunk_index,
            total_chunks=total_chunks,
            start_id=start_id,
            end_id=end_id,
        )

        for player_id in range(start_id, end_id + 1):
            if cancel_token is not None and cancel_token.cancelled:
                cancelled = True
                log_event(
                    logger,
                    logging.WARNING,
                    "chunk_cancelled",
                    chunk_index=chunk_index,
                    next_player_id=player_id,
                )
                break

            try:
                record = self._fetcher.fetch(player_id)
                self._store.upsert(record)
            except NoDataError as exc:
                failure_count += 1
                no_data_count += 1
                errors.append(f"ID {player_id}: {exc.reason}")
                log_event(
                    logger,
                    logging.INFO,
                    "profile_no_data",
                    player_id=player_id,
                    reason=exc.reason,
                )
            except FetchError as exc:
                failure_count += 1
                errors.append(f"ID {player_id}: {exc.reason}")
                log_event(
                    logger,
                    logging.WARNING,
                    "profile_fetch_failed",
                    player_id=player_id,
                    kind=exc.kind,
                    status_code=getattr(exc, "status_code", None),
                    reason=exc.reason,
                )
            except StoreError as exc:
                failure_count += 1
                store_failures += 1
                errors.append(f"ID {player_id}: Database error - {exc}")
                log_event(
                    logger,
                    logging.ERROR,
                    "profile_store_failed",
                    player_id=player_id,
                    store_failures=store_failures,
                    error=str(exc),
                )
            except Exception as exc:
                raise ChunkExecutionError(
                    f"Unexpected error in chunk {chunk_index} at ID {player_id}: {exc}",
                    summary=summary(),
                ) from exc
            else:
                success_count += 1
                log_event(
                    logger,
                    logging.INFO,
                    "profile_scraped",
                    player_id=player_id,
                    name=record.display_name,
                )

            if player_id < end_id:
                self._pacer.after_item(cancel_token)

        result = summary()
        if self._abort_on_store_outage and store_failures == result.end_id - result.start_id + 1:
            # Every ID in the chunk reached the store and every write failed.
            raise ChunkExecutionError(
                f"Store unavailable: all {store_failures} writes failed in chunk {chunk_index}",
                summary=result,
            )
        log_event(
            logger,
            logging.INFO,
            "chunk_completed",
            chunk_index=chunk_index,
            total_chunks=total_chunks,
            success_count=result.success_count,
            failure_count=result.failure_count,
            no_data_count=result.no_data_count,
            cancelled=result.cancelled,
        )
        return result
