"""
db/models/player_profile.py

One scraped player profile, keyed by the remote profile ID.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class PlayerProfile(TimestampMixin, Base):
    __tablename__ = "player_profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    player_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        unique=True,
        comment="Remote profile ID; natural upsert key",
    )
    name: Mapped[str | None] = mapped_column(Text, nullable=True)
    height: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Total inches",
    )
    weight: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Pounds",
    )
    graduation_year: Mapped[str | None] = mapped_column(String(4), nullable=True)
    positions: Mapped[str | None] = mapped_column(Text, nullable=True)
    bats: Mapped[str | None] = mapped_column(Text, nullable=True)
    throws: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(Text, nullable=True)
    state: Mapped[str | None] = mapped_column(Text, nullable=True)
    team_last_played: Mapped[str | None] = mapped_column(Text, nullable=True)
    profile_url: Mapped[str] = mapped_column(String(512), nullable=False)
    showcase_report: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Latest report text, capped at 2000 characters",
    )
    scraped_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_player_profiles_scraped_at", "scraped_at"),
    )
