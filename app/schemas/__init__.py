"""
API schema exports.
"""

from app.schemas.player_scraping import (
    BatchStateResponse,
    DeleteProfilesResponse,
    PlayerProfileResponse,
    ProgressSnapshotResponse,
    ScrapeRangeRequest,
)

__all__ = [
    "BatchStateResponse",
    "DeleteProfilesResponse",
    "PlayerProfileResponse",
    "ProgressSnapshotResponse",
    "ScrapeRangeRequest",
]
