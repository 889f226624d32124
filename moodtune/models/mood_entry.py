"""Mood entry model."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from moodtune.db.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MoodEntry(Base):
    """A single self-reported mood. Never updated once written."""

    __tablename__ = "mood_entries"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    mood: Mapped[int] = mapped_column(Integer, nullable=False)
    mood_emoji: Mapped[str] = mapped_column(String(16), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
        index=True,
    )
