"""Gemini text generation."""

from __future__ import annotations

from moodtune.core.config import settings


class AIServiceError(Exception):
    """Raised when text generation fails."""


def generate_text(prompt: str) -> str:
    """Send a prompt to Gemini and return the response text."""
    if not settings.gemini_api_key:
        raise AIServiceError("GEMINI_API_KEY is not configured")

    try:
        from google import genai
    except ImportError as exc:
        raise AIServiceError("Gemini SDK is not installed. Add 'google-genai' to dependencies.") from exc

    client = genai.Client(api_key=settings.gemini_api_key)

    try:
        response = client.models.generate_content(
            model=settings.gemini_model,
            contents=prompt,
        )
    except Exception as exc:  # noqa: BLE001 - SDK raises several unrelated error types
        raise AIServiceError(f"Gemini request failed: {exc}") from exc

    text = getattr(response, "text", None)
    if not text or not text.strip():
        raise AIServiceError("Gemini returned an empty response")
    return text
