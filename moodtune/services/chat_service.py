"""Mental health chat assistant backed by Gemini."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from moodtune.schemas.chat import ChatResponse
from moodtune.schemas.mood import MoodStats
from moodtune.services.ai_service import generate_text
from moodtune.services.mood_service import get_recent_stats

logger = logging.getLogger(__name__)

FALLBACK_RESPONSE = (
    "I'm sorry, I'm having trouble processing your request right now. Please try again later."
)

MOOD_ANALYSIS_KEYWORDS = frozenset(
    {
        "mood pattern",
        "mood trend",
        "analyze",
        "analysis",
        "how am i doing",
        "my mood",
        "mood history",
        "pattern",
        "trend",
        "progress",
        "improvement",
    }
)

BASE_PROMPT = """You are a supportive mental health assistant integrated into a mood tracking application. Your role is to:

1. Provide general mental health support and information
2. Offer coping strategies and wellness tips
3. Analyze user mood patterns when requested
4. Encourage healthy habits and self-care

Guidelines:
- Be empathetic, supportive, and non-judgmental
- Provide evidence-based mental health information
- Always recommend professional help for serious mental health concerns
- Keep responses concise but helpful (2-3 paragraphs maximum)
- If asked about mood patterns, provide insights based on the data provided

Important: You are not a replacement for professional therapy or medical advice. Always encourage users to seek professional help when needed."""


def is_mood_analysis_query(message: str, keywords: Iterable[str] = MOOD_ANALYSIS_KEYWORDS) -> bool:
    text = message.lower()
    return any(keyword in text for keyword in keywords)


def build_mood_analysis_prompt(stats: MoodStats) -> str:
    entries = [entry.model_dump() for entry in stats.recent_entries]
    return (
        "\n\nMood Analysis Data:\n"
        f"- Recent mood entries: {json.dumps(entries)}\n"
        f"- Average mood: {stats.average_mood}\n"
        f"- Mood trend: {stats.trend}\n"
        f"- Most common mood: {stats.most_common_mood}\n"
        f"- Days tracked: {stats.total_days}\n\n"
        "Please analyze this mood data and provide insights about patterns, trends, "
        "and suggestions for improvement."
    )


def build_prompt(message: str, stats: MoodStats | None = None) -> str:
    prompt = BASE_PROMPT
    if stats is not None:
        prompt += build_mood_analysis_prompt(stats)
    return prompt + f"\n\nUser Question: {message}\n\nPlease provide a helpful response:"


def process_message(db: Session, message: str) -> ChatResponse:
    """Answer a chat message, embedding mood statistics when the user asks about them.

    Raises ValueError for an empty message. Failures past validation are logged
    and answered with FALLBACK_RESPONSE.
    """
    if not message or not message.strip():
        raise ValueError("Message cannot be empty")

    try:
        wants_analysis = is_mood_analysis_query(message)
        stats = get_recent_stats(db) if wants_analysis else None
        text = generate_text(build_prompt(message, stats))
    except Exception:  # noqa: BLE001 - the chat never surfaces downstream failures
        logger.exception("Error processing chatbot message")
        return ChatResponse(
            response=FALLBACK_RESPONSE,
            timestamp=datetime.now(timezone.utc),
            includes_mood_analysis=False,
        )

    return ChatResponse(
        response=text,
        timestamp=datetime.now(timezone.utc),
        includes_mood_analysis=wants_analysis,
    )
