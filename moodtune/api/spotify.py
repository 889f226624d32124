"""Spotify playlist API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from moodtune.core.deps import get_recommender
from moodtune.db.session import get_db
from moodtune.schemas.spotify import PlaylistResponse
from moodtune.services.recommender import PlaylistNotFoundError, PlaylistRecommender
from moodtune.services.spotify_client import SpotifyServiceError

router = APIRouter(prefix="/spotify", tags=["spotify"])


def recommend_or_raise(recommender: PlaylistRecommender, db: Session, mood: int) -> PlaylistResponse:
    """Run the recommender and map its failures to HTTP errors."""
    try:
        return recommender.recommend(db, mood)
    except PlaylistNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No playlist found") from exc
    except SpotifyServiceError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Spotify is unavailable right now. Please try again later.",
        ) from exc


@router.get("/playlist", response_model=PlaylistResponse)
def get_playlist(
    mood: int = Query(ge=1, le=5),
    db: Session = Depends(get_db),
    recommender: PlaylistRecommender = Depends(get_recommender),
):
    """Recommend a playlist for a mood without recording a mood entry."""
    return recommend_or_raise(recommender, db, mood)
