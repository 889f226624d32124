"""Mood schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from moodtune.schemas.spotify import PlaylistResponse

CAMEL_CONFIG = {"alias_generator": to_camel, "populate_by_name": True}


class MoodEntryCreate(BaseModel):
    mood: int = Field(ge=1, le=5, description="Mood 1-5")
    mood_emoji: str = Field(min_length=1, max_length=16)

    model_config = CAMEL_CONFIG


class MoodEntryResponse(BaseModel):
    id: int
    mood: int
    mood_emoji: str
    created_at: datetime

    model_config = {**CAMEL_CONFIG, "from_attributes": True}


class HeatmapBucket(BaseModel):
    date: str
    mood: float
    count: int


class RecentMoodEntry(BaseModel):
    mood: int
    emoji: str
    date: str


class MoodStats(BaseModel):
    """Trailing-window statistics fed to the chat assistant."""

    recent_entries: list[RecentMoodEntry]
    average_mood: float
    trend: str
    most_common_mood: int
    total_days: int

    model_config = CAMEL_CONFIG


class MoodRecommendationResponse(BaseModel):
    mood_entry: MoodEntryResponse | None
    playlist: PlaylistResponse

    model_config = CAMEL_CONFIG
