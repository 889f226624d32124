"""SQLAlchemy models."""

from __future__ import annotations

from moodtune.models.mood_entry import MoodEntry
from moodtune.models.playlist_history import PlaylistHistory

__all__ = [
    "MoodEntry",
    "PlaylistHistory",
]
