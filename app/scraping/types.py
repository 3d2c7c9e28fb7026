"""
Shared player scraping runtime data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any

REPORT_MAX_LENGTH = 2000


@dataclass(frozen=True)
class ParsedProfile:
    """
    Fields extracted from one profile page, each independently optional.
    """

    name: str | None = None
    height: int | None = None
    weight: int | None = None
    graduation_year: str | None = None
    positions: str | None = None
    bats: str | None = None
    throws: str | None = None
    city: str | None = None
    state: str | None = None
    team_last_played: str | None = None
    report: str | None = None

    def has_data(self) -> bool:
        for item in fields(self):
            value = getattr(self, item.name)
            if isinstance(value, str):
                if value.strip():
                    return True
            elif value:
                return True
        return False


@dataclass(frozen=True)
class PlayerRecord:
    """
    One persisted player profile, keyed by the remote profile ID.
    """

    player_id: int
    source_url: str
    scraped_at: datetime
    name: str | None = None
    height: int | None = None
    weight: int | None = None
    graduation_year: str | None = None
    positions: str | None = None
    bats: str | None = None
    throws: str | None = None
    city: str | None = None
    state: str | None = None
    team_last_played: str | None = None
    report: str | None = None

    @classmethod
    def from_parsed(
        cls,
        *,
        player_id: int,
        source_url: str,
        scraped_at: datetime,
        parsed: ParsedProfile,
    ) -> "PlayerRecord":
        report = parsed.report[:REPORT_MAX_LENGTH] if parsed.report else parsed.report
        return cls(
            player_id=player_id,
            source_url=source_url,
            scraped_at=scraped_at,
            name=parsed.name,
            height=parsed.height,
            weight=parsed.weight,
            graduation_year=parsed.graduation_year,
            positions=parsed.positions,
            bats=parsed.bats,
            throws=parsed.throws,
            city=parsed.city,
            state=parsed.state,
            team_last_played=parsed.team_last_played,
            report=report,
        )

    @property
    def display_name(self) -> str:
        return self.name or f"Player {self.player_id}"

    def is_meaningful(self) -> bool:
        return ParsedProfile(
            name=self.name,
            height=self.height,
            weight=self.weight,
            graduation_year=self.graduation_year,
            positions=self.positions,
            bats=self.bats,
            throws=self.throws,
            city=self.city,
            state=self.state,
            team_last_played=self.team_last_played,
            report=self.report,
        ).has_data()


@dataclass(frozen=True)
class ChunkPlan:
    """
    One contiguous, inclusive ID sub-range of a batch.
    """

    start_id: int
    end_id: int
    chunk_index: int
    total_chunks: int

    @property
    def size(self) -> int:
        return self.end_id - self.start_id + 1


@dataclass(frozen=True)
class ChunkSummary:
    """
    Outcome for one chunk execution. Never persisted.
    """

    start_id: int
    end_id: int
    chunk_index: int
    total_chunks: int
    success_count: int
    failure_count: int
    errors: list[str] = field(default_factory=list)
    no_data_count: int = 0
    cancelled: bool = False

    @property
    def processed(self) -> int:
        return self.success_count + self.failure_count


@dataclass(frozen=True)
class ProgressSnapshot:
    """
    Read-only view of batch progress handed to a progress sink.
    """

    chunk_index: int
    total_chunks: int
    success_total: int
    failure_total: int
    processed: int
    total: int
    is_complete: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "chunk_index": self.chunk_index,
            "total_chunks": self.total_chunks,
            "success_total": self.success_total,
            "failure_total": self.failure_total,
            "processed": self.processed,
            "total": self.total,
            "is_complete": self.is_complete,
        }


@dataclass
class BatchState:
    """
    Running totals for one batch run, mutated only by the coordinator.
    """

    start_id: int
    end_id: int
    chunk_size: int
    total_chunks: int
    total_items: int
    chunks_completed: int = 0
    last_chunk_index: int = 0
    success_total: int = 0
    failure_total: int = 0
    no_data_total: int = 0
    errors: list[str] = field(default_factory=list)
    is_complete: bool = False
    cancelled: bool = False
    fatal_error: str | None = None

    @property
    def processed(self) -> int:
        return self.success_total + self.failure_total

    def merge(self, summary: ChunkSummary, *, completed: bool = True) -> None:
        self.success_total += summary.success_count
        self.failure_total += summary.failure_count
        self.no_data_total += summary.no_data_count
        self.errors.extend(summary.errors)
        self.last_chunk_index = summary.chunk_index
        if completed and not summary.cancelled:
            self.chunks_completed += 1

    def snapshot(self) -> ProgressSnapshot:
        return ProgressSnapshot(
            chunk_index=self.last_chunk_index,
            total_chunks=self.total_chunks,
            success_total=self.success_total,
            failure_total=self.failure_total,
            processed=self.processed,
            total=self.total_items,
            is_complete=self.is_complete,
        )
