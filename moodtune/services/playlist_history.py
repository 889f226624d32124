"""Playlist history bookkeeping used to avoid repeat recommendations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from moodtune.core.config import settings
from moodtune.models.playlist_history import PlaylistHistory


@dataclass(frozen=True)
class HistoryWriteResult:
    """Outcome of a best-effort history write. Callers may ignore it."""

    ok: bool
    pruned: int = 0
    error: Exception | None = None


def get_recent_playlist_ids(
    db: Session,
    mood: int,
    window_days: int | None = None,
    limit: int | None = None,
) -> set[str]:
    """Playlist ids shown for ``mood`` within the recency window."""
    window_days = settings.playlist_history_window_days if window_days is None else window_days
    limit = settings.playlist_history_lookup_limit if limit is None else limit
    since = datetime.now(timezone.utc) - timedelta(days=window_days)

    stmt = (
        select(PlaylistHistory.playlist_id)
        .where(PlaylistHistory.mood == mood)
        .where(PlaylistHistory.created_at >= since)
        .order_by(desc(PlaylistHistory.created_at), desc(PlaylistHistory.id))
        .limit(limit)
    )
    return set(db.execute(stmt).scalars().all())


def record_selection(
    db: Session,
    mood: int,
    playlist_id: str,
    retention: int | None = None,
) -> HistoryWriteResult:
    """Append a history row, then delete everything past the newest ``retention`` rows for the mood.

    Insert and prune are committed separately; a failure between them can leave
    extra rows behind until the next successful prune.
    """
    retention = settings.playlist_history_retention if retention is None else retention
    try:
        db.add(PlaylistHistory(mood=mood, playlist_id=playlist_id))
        db.commit()

        stale_ids = db.execute(
            select(PlaylistHistory.id)
            .where(PlaylistHistory.mood == mood)
            .order_by(desc(PlaylistHistory.created_at), desc(PlaylistHistory.id))
            .offset(retention)
        ).scalars().all()
        if stale_ids:
            db.execute(delete(PlaylistHistory).where(PlaylistHistory.id.in_(stale_ids)))
            db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        return HistoryWriteResult(ok=False, error=exc)

    return HistoryWriteResult(ok=True, pruned=len(stale_ids))
