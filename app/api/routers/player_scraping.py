"""
app/api/routers/player_scraping.py

Player profile scraping endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.schemas.player_scraping import (
    BatchStateResponse,
    DeleteProfilesResponse,
    PlayerProfileResponse,
    ScrapeRangeRequest,
)
from app.scraping.errors import (
    BatchAbortedError,
    InvalidRangeError,
    NoDataError,
    StoreError,
    TransportError,
)
from app.scraping.progress import FanOutProgressSink, LoggingProgressSink, RecordingProgressSink
from app.services.player_scraping_service import (
    PlayerScrapingService,
    get_player_scraping_service,
)
from db.session import get_db

router = APIRouter(prefix="/players", tags=["player-scraping"])


@router.post("/{player_id}/scrape", response_model=PlayerProfileResponse)
def scrape_player(
    player_id: int,
    db: Session = Depends(get_db),
    scraping_service: PlayerScrapingService = Depends(get_player_scraping_service),
) -> PlayerProfileResponse:
    """
    Fetch one profile, upsert it and return the stored values.
    """

    try:
        record = scraping_service.scrape_player(db=db, player_id=player_id)
    except InvalidRangeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except NoDataError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.reason) from exc
    except TransportError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.reason) from exc
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to save player data: {exc}",
        ) from exc

    return PlayerProfileResponse.from_record(record)


@router.post("/scrape-range", response_model=BatchStateResponse)
def scrape_range(
    payload: ScrapeRangeRequest,
    db: Session = Depends(get_db),
    scraping_service: PlayerScrapingService = Depends(get_player_scraping_service),
) -> BatchStateResponse:
    """
    Run a chunked batch over an inclusive ID range and return the totals.
    """

    recorder = RecordingProgressSink()
    sink = FanOutProgressSink(recorder, LoggingProgressSink())
    try:
        state = scraping_service.scrape_range(
            db=db,
            start_id=payload.start_id,
            end_id=payload.end_id,
            chunk_size=payload.chunk_size,
            sink=sink,
        )
    except InvalidRangeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except BatchAbortedError as exc:
        partial = BatchStateResponse.from_state(exc.state, recorder.snapshots)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": str(exc), "state": partial.model_dump(mode="json")},
        ) from exc

    return BatchStateResponse.from_state(state, recorder.snapshots)


@router.get("", response_model=list[PlayerProfileResponse])
def list_recent_players(
    limit: int | None = Query(default=None, ge=1, le=500, description="Max profiles to return"),
    db: Session = Depends(get_db),
    scraping_service: PlayerScrapingService = Depends(get_player_scraping_service),
) -> list[PlayerProfileResponse]:
    try:
        records = scraping_service.list_recent(db=db, limit=limit)
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc
    return [PlayerProfileResponse.from_record(record) for record in records]


@router.delete("", response_model=DeleteProfilesResponse)
def delete_players(
    db: Session = Depends(get_db),
    scraping_service: PlayerScrapingService = Depends(get_player_scraping_service),
) -> DeleteProfilesResponse:
    try:
        deleted = scraping_service.clear(db=db)
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc
    return DeleteProfilesResponse(deleted=deleted)
