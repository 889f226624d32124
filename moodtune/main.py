"""moodtune FastAPI application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from moodtune.api import chatbot, health, mood, spotify
from moodtune.core.config import settings

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    if not settings.gemini_api_key.strip():
        logger.error("GEMINI_API_KEY environment variable is not set")
        raise RuntimeError("GEMINI_API_KEY is required to start moodtune")
    yield


app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(health.router)
app.include_router(mood.router)
app.include_router(spotify.router)
app.include_router(chatbot.router)


def run() -> None:
    """Console entry point."""
    import uvicorn

    uvicorn.run("moodtune.main:app", host="0.0.0.0", port=3001, log_level="info")
