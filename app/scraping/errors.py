"""
Exception taxonomy for player profile ingestion.

Item-level errors (`FetchError`, `StoreError`) are recovered inside a chunk
and recorded in its summary. `ChunkExecutionError` is the only error that
halts a batch; the coordinator re-raises it as `BatchAbortedError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.scraping.types import BatchState, ChunkSummary


class ScrapeError(Exception):
    """Base exception for player scraping failures."""


class FetchError(ScrapeError):
    """Raised when one profile cannot be turned into a record."""

    kind = "fetch_error"

    def __init__(self, player_id: int, reason: str) -> None:
        super().__init__(reason)
        self.player_id = player_id
        self.reason = reason


class TransportError(FetchError):
    """Non-2xx response, timeout or connection failure."""

    kind = "http_error"

    def __init__(self, player_id: int, reason: str, *, status_code: int | None = None) -> None:
        super().__init__(player_id, reason)
        self.status_code = status_code


class NoDataError(FetchError):
    """Successful response whose page carries no meaningful field."""

    kind = "not_found"


class StoreError(ScrapeError):
    """Raised when the persistence backend rejects a read or write."""


class InvalidRangeError(ScrapeError, ValueError):
    """Raised when a batch ID range is rejected before any work starts."""


class ChunkExecutionError(ScrapeError):
    """
    Unrecoverable failure while running a chunk.

    Carries the partial summary of the items handled before the failure so
    the coordinator can keep its counts.
    """

    def __init__(self, message: str, *, summary: ChunkSummary) -> None:
        super().__init__(message)
        self.summary = summary


class BatchAbortedError(ScrapeError):
    """Raised to the batch caller when a chunk failed fatally."""

    def __init__(self, message: str, *, state: BatchState) -> None:
        super().__init__(message)
        self.state = state
