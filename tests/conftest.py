"""Pytest fixtures."""

import os

os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ.setdefault("GEMINI_API_KEY", "test-key")

import httpx  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from moodtune.db.base import Base  # noqa: E402
from moodtune.db.session import get_db  # noqa: E402
from moodtune.main import app  # noqa: E402
from moodtune.models import MoodEntry, PlaylistHistory  # noqa: E402,F401 - register for create_all
from moodtune.services.spotify_client import SpotifyClient  # noqa: E402

TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def db_session():
    """Fresh tables per test; tests count rows."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """Test client with overridden DB."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def make_playlist(playlist_id: str) -> dict:
    return {
        "id": playlist_id,
        "name": f"Playlist {playlist_id}",
        "description": f"About {playlist_id}",
        "images": [{"url": f"https://img.test/{playlist_id}.jpg"}],
        "external_urls": {"spotify": f"https://open.spotify.com/playlist/{playlist_id}"},
    }


class FakeSpotify:
    """In-memory Spotify Web API served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.results: dict[str, list] = {}
        self.default_ids: list[str] = []
        self.failing_queries: set[str] = set()
        self.malformed_queries: set[str] = set()
        self.rejected_tokens: set[str] = set()
        self.tracks: dict[str, list] = {}
        self.token_status = 200
        self.token_body: str | None = None
        self.token_requests: list[httpx.Request] = []
        self.search_queries: list[str] = []

    def set_results(self, query: str, ids: list) -> None:
        self.results[query] = [make_playlist(pid) if isinstance(pid, str) else pid for pid in ids]

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/api/token":
            self.token_requests.append(request)
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"error": "invalid_client"})
            if self.token_body is not None:
                return httpx.Response(200, text=self.token_body)
            return httpx.Response(
                200,
                json={
                    "access_token": f"token-{len(self.token_requests)}",
                    "token_type": "Bearer",
                    "expires_in": 3600,
                },
            )

        if path == "/v1/search":
            self.search_queries.append(request.url.params["q"])

        token = request.headers.get("Authorization", "").removeprefix("Bearer ")
        if token in self.rejected_tokens:
            return httpx.Response(401, json={"error": {"status": 401, "message": "The access token expired"}})

        if path == "/v1/search":
            query = request.url.params["q"]
            if query in self.failing_queries:
                return httpx.Response(500, json={"error": {"status": 500, "message": "boom"}})
            if query in self.malformed_queries:
                return httpx.Response(200, text="<html>gateway</html>")
            items = self.results.get(query, [make_playlist(pid) for pid in self.default_ids])
            return httpx.Response(200, json={"playlists": {"items": items}})

        if path.startswith("/v1/playlists/") and path.endswith("/tracks"):
            playlist_id = path.split("/")[3]
            items = self.tracks.get(
                playlist_id,
                [
                    {"track": {"name": "Song A", "artists": [{"name": "Artist A"}], "preview_url": None}},
                    {"track": {"name": "Song B", "artists": [{"name": "Artist B"}], "preview_url": "https://p.test/b"}},
                ],
            )
            return httpx.Response(200, json={"items": items})

        return httpx.Response(404)

    def client(self, clock=None, client_id: str = "client-id", client_secret: str = "client-secret") -> SpotifyClient:
        kwargs = {"clock": clock} if clock is not None else {}
        return SpotifyClient(
            client_id=client_id,
            client_secret=client_secret,
            http=httpx.Client(transport=httpx.MockTransport(self.handler)),
            **kwargs,
        )


@pytest.fixture
def fake_spotify():
    return FakeSpotify()
