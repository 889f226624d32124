"""Chatbot schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from moodtune.schemas.mood import CAMEL_CONFIG


class ChatRequest(BaseModel):
    message: str | None = None
    user_id: str | None = None

    model_config = CAMEL_CONFIG


class ChatResponse(BaseModel):
    response: str
    timestamp: datetime
    includes_mood_analysis: bool = False

    model_config = CAMEL_CONFIG
