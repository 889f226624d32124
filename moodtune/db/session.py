"""Engine and per-request sessions."""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from moodtune.core.config import settings


def _connect_args(url: str) -> dict:
    # sync endpoints run in a thread pool; sqlite connections must be shareable
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    echo=settings.debug,
    connect_args=_connect_args(settings.database_url),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Yield a session for one request and close it afterwards."""
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
