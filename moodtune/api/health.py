"""Health check endpoint."""

from fastapi import APIRouter

from moodtune import __version__
from moodtune.core.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict:
    """Return API health status with service name and version."""
    return {"status": "ok", "service": settings.app_name, "version": __version__}
