"""Playlist history model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from moodtune.db.base import Base
from moodtune.models.mood_entry import utcnow


class PlaylistHistory(Base):
    """Playlist shown for a mood band, kept only to avoid recent repeats."""

    __tablename__ = "playlist_history"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    mood: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    playlist_id: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
        index=True,
    )
