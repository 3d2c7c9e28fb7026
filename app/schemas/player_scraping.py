"""
app/schemas/player_scraping.py

Request and response schemas for player scraping operations.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from app.scraping.types import BatchState, PlayerRecord, ProgressSnapshot


class PlayerProfileResponse(BaseModel):
    """
    API response model for one stored player profile.
    """

    player_id: int = Field(..., ge=1)
    name: str
    height: int | None = None
    weight: int | None = None
    graduation_year: str | None = None
    positions: str | None = None
    bats: str | None = None
    throws: str | None = None
    city: str | None = None
    state: str | None = None
    team_last_played: str | None = None
    showcase_report: str | None = Field(default=None, max_length=2000)
    profile_url: str
    scraped_at: datetime

    @classmethod
    def from_record(cls, record: PlayerRecord) -> "PlayerProfileResponse":
        return cls(
            player_id=record.player_id,
            name=record.display_name,
            height=record.height,
            weight=record.weight,
            graduation_year=record.graduation_year,
            positions=record.positions,
            bats=record.bats,
            throws=record.throws,
            city=record.city,
            state=record.state,
            team_last_played=record.team_last_played,
            showcase_report=record.report,
            profile_url=record.source_url,
            scraped_at=record.scraped_at,
        )


class ScrapeRangeRequest(BaseModel):
    """
    Batch scrape request over an inclusive ID range.
    """

    start_id: int = Field(..., ge=1)
    end_id: int = Field(..., ge=1)
    chunk_size: int | None = Field(default=None, ge=1)


class ProgressSnapshotResponse(BaseModel):
    chunk_index: int = Field(..., ge=0)
    total_chunks: int = Field(..., ge=0)
    success_total: int = Field(..., ge=0)
    failure_total: int = Field(..., ge=0)
    processed: int = Field(..., ge=0)
    total: int = Field(..., ge=0)
    is_complete: bool

    @classmethod
    def from_snapshot(cls, snapshot: ProgressSnapshot) -> "ProgressSnapshotResponse":
        return cls(**snapshot.to_dict())


class BatchStateResponse(BaseModel):
    """
    API response model for one batch run.
    """

    start_id: int
    end_id: int
    chunk_size: int = Field(..., ge=1)
    total_chunks: int = Field(..., ge=0)
    chunks_completed: int = Field(..., ge=0)
    total_items: int = Field(..., ge=0)
    processed: int = Field(..., ge=0)
    success_total: int = Field(..., ge=0)
    failure_total: int = Field(..., ge=0)
    no_data_total: int = Field(..., ge=0)
    is_complete: bool
    cancelled: bool = False
    fatal_error: str | None = None
    errors: list[str] = Field(default_factory=list)
    progress: list[ProgressSnapshotResponse] = Field(default_factory=list)

    @classmethod
    def from_state(
        cls,
        state: BatchState,
        snapshots: list[ProgressSnapshot] | None = None,
    ) -> "BatchStateResponse":
        return cls(
            start_id=state.start_id,
            end_id=state.end_id,
            chunk_size=state.chunk_size,
            total_chunks=state.total_chunks,
            chunks_completed=state.chunks_completed,
            total_items=state.total_items,
            processed=state.processed,
            success_total=state.success_total,
            failure_total=state.failure_total,
            no_data_total=state.no_data_total,
            is_complete=state.is_complete,
            cancelled=state.cancelled,
            fatal_error=state.fatal_error,
            errors=list(state.errors),
            progress=[ProgressSnapshotResponse.from_snapshot(item) for item in snapshots or []],
        )


class DeleteProfilesResponse(BaseModel):
    deleted: int = Field(..., ge=0)
