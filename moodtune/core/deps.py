"""FastAPI dependencies."""

from __future__ import annotations

from functools import lru_cache

from moodtune.services.recommender import PlaylistRecommender
from moodtune.services.spotify_client import SpotifyClient


@lru_cache
def get_recommender() -> PlaylistRecommender:
    """Shared recommender so the Spotify token is cached for the process."""
    return PlaylistRecommender(SpotifyClient())
