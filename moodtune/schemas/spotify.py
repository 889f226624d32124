"""Spotify playlist schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class TrackResponse(BaseModel):
    name: str
    artist: str
    preview_url: str | None = None


class PlaylistResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    image: str | None = None
    external_url: str | None = None
    tracks: list[TrackResponse] = Field(default_factory=list)
