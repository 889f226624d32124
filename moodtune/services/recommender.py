"""Mood-based playlist recommendation with recent-repeat avoidance."""

from __future__ import annotations

import logging
import random
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from moodtune.schemas.spotify import PlaylistResponse, TrackResponse
from moodtune.services.playlist_history import get_recent_playlist_ids, record_selection
from moodtune.services.spotify_client import SpotifyClient, SpotifyServiceError

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 50
TRACK_LIMIT = 10

MOOD_QUERIES: dict[int, list[str]] = {
    1: [
        "sad acoustic indie",
        "melancholic piano",
        "emotional ballads",
        "heartbreak songs",
        "sad indie folk",
        "crying songs",
    ],
    2: [
        "melancholic indie folk",
        "sad alternative",
        "emotional indie",
        "downtempo sad",
        "indie melancholy",
        "soft sad music",
    ],
    3: [
        "chill pop indie",
        "indie rock mellow",
        "alternative chill",
        "indie pop calm",
        "relaxing indie",
        "ambient indie",
    ],
    4: [
        "happy pop dance",
        "upbeat indie pop",
        "feel good music",
        "positive vibes",
        "happy alternative",
        "uplifting songs",
    ],
    5: [
        "energetic dance party",
        "upbeat electronic",
        "high energy pop",
        "dance hits",
        "party music",
        "euphoric music",
    ],
}


class PlaylistNotFoundError(Exception):
    """Raised when no playlist could be found for a mood."""


class PlaylistRecommender:
    """Picks a Spotify playlist for a mood band, skipping recently shown ones."""

    def __init__(self, client: SpotifyClient, rng: random.Random | None = None) -> None:
        self.client = client
        self.rng = rng or random.Random()

    def recommend(self, db: Session, mood: int) -> PlaylistResponse:
        if mood not in MOOD_QUERIES:
            raise ValueError(f"Mood must be between 1 and 5, got {mood}")

        logger.info("Getting playlist for mood %s", mood)
        self.client.ensure_token()

        recent_ids = self._recent_ids(db, mood)
        queries = MOOD_QUERIES[mood]
        shuffled = list(queries)
        self.rng.shuffle(shuffled)

        selected = self._search_unused(shuffled, recent_ids)
        if selected is None:
            selected = self._broad_search(queries[0].split()[0], recent_ids)

        tracks = self._fetch_tracks(selected["id"])

        result = record_selection(db, mood, selected["id"])
        if not result.ok:
            logger.warning("Could not store playlist history for mood %s: %s", mood, result.error)

        logger.info("Returning playlist %r (%s) with %s tracks", selected.get("name"), selected["id"], len(tracks))
        return PlaylistResponse(
            id=selected["id"],
            name=selected.get("name") or "",
            description=selected.get("description"),
            image=_first_image(selected),
            external_url=(selected.get("external_urls") or {}).get("spotify"),
            tracks=tracks,
        )

    def _recent_ids(self, db: Session, mood: int) -> set[str]:
        try:
            recent_ids = get_recent_playlist_ids(db, mood)
        except SQLAlchemyError as exc:
            logger.warning("Playlist history unavailable for mood %s: %s", mood, exc)
            db.rollback()
            return set()
        logger.debug("Recent playlist ids for mood %s: %s", mood, sorted(recent_ids))
        return recent_ids

    def _search_unused(self, queries: list[str], recent_ids: set[str]) -> dict[str, Any] | None:
        for query in queries:
            try:
                playlists = self.client.search_playlists(query, limit=SEARCH_LIMIT)
            except SpotifyServiceError as exc:
                logger.warning("Search failed for query %r: %s", query, exc)
                continue

            available = [p for p in playlists if p["id"] not in recent_ids]
            logger.debug("Query %r: %s playlists, %s unused", query, len(playlists), len(available))
            if available:
                return self.rng.choice(available)
        return None

    def _broad_search(self, query: str, recent_ids: set[str]) -> dict[str, Any]:
        logger.info("No unused playlists found, broad search with %r", query)
        try:
            playlists = self.client.search_playlists(query, limit=SEARCH_LIMIT)
        except SpotifyServiceError as exc:
            logger.error("Broad search failed: %s", exc)
            raise PlaylistNotFoundError("No playlist found") from exc

        if not playlists:
            raise PlaylistNotFoundError("No playlist found")

        unused = [p for p in playlists if p["id"] not in recent_ids]
        if unused:
            return self.rng.choice(unused)
        logger.info("Every broad search result was shown recently, accepting a repeat")
        return self.rng.choice(playlists)

    def _fetch_tracks(self, playlist_id: str) -> list[TrackResponse]:
        items = self.client.get_playlist_tracks(playlist_id, limit=TRACK_LIMIT)
        tracks: list[TrackResponse] = []
        for item in items:
            track = item.get("track") if isinstance(item, dict) else None
            if not track or not track.get("name"):
                continue
            artists = track.get("artists") or []
            artist = artists[0].get("name") if artists and artists[0] else None
            tracks.append(
                TrackResponse(
                    name=track["name"],
                    artist=artist or "Unknown Artist",
                    preview_url=track.get("preview_url"),
                )
            )
        return tracks


def _first_image(playlist: dict[str, Any]) -> str | None:
    images = playlist.get("images") or []
    if images and isinstance(images[0], dict):
        return images[0].get("url")
    return None
