"""Mood entries API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from moodtune.api.spotify import recommend_or_raise
from moodtune.core.deps import get_recommender
from moodtune.db.session import get_db
from moodtune.schemas.mood import (
    HeatmapBucket,
    MoodEntryCreate,
    MoodEntryResponse,
    MoodRecommendationResponse,
    MoodStats,
)
from moodtune.services.mood_service import (
    create_mood_entry,
    get_heatmap,
    get_recent_entries,
    get_recent_stats,
)
from moodtune.services.recommender import PlaylistRecommender

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mood", tags=["mood"])


@router.post("", response_model=MoodEntryResponse)
def create_entry(data: MoodEntryCreate, db: Session = Depends(get_db)):
    """Record a mood."""
    return create_mood_entry(db, data.mood, data.mood_emoji)


@router.post("/recommend", response_model=MoodRecommendationResponse)
def recommend(
    data: MoodEntryCreate,
    db: Session = Depends(get_db),
    recommender: PlaylistRecommender = Depends(get_recommender),
):
    """Record a mood and recommend a playlist for it.

    The playlist is the primary result; a failed mood save is logged and
    reported as a null moodEntry.
    """
    mood_entry = None
    try:
        mood_entry = create_mood_entry(db, data.mood, data.mood_emoji)
    except SQLAlchemyError:
        logger.exception("Could not save mood entry alongside recommendation")
        db.rollback()

    playlist = recommend_or_raise(recommender, db, data.mood)
    return MoodRecommendationResponse(
        mood_entry=MoodEntryResponse.model_validate(mood_entry) if mood_entry else None,
        playlist=playlist,
    )


@router.get("/heatmap", response_model=list[HeatmapBucket])
def heatmap(db: Session = Depends(get_db)):
    """Mean mood per day across all entries."""
    return get_heatmap(db)


@router.get("/recent", response_model=list[MoodEntryResponse])
def recent(
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """Latest mood entries, newest first. Default limit 10."""
    return get_recent_entries(db, limit)


@router.get("/stats", response_model=MoodStats)
def stats(db: Session = Depends(get_db)):
    """Statistics over the last 30 days (at most 20 entries)."""
    return get_recent_stats(db)
