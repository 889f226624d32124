"""Spotify Web API client (client-credentials token, playlist search, playlist tracks)."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx

from moodtune.core.config import settings

logger = logging.getLogger(__name__)

# Refresh a little before Spotify's reported expiry.
EXPIRY_MARGIN_SECONDS = 30.0


class SpotifyServiceError(Exception):
    """Raised when the Spotify API cannot be reached or answers with an error."""


class SpotifyAuthError(SpotifyServiceError):
    """Raised when Spotify keeps rejecting the bearer token."""


@dataclass
class AccessToken:
    value: str
    expires_at: float | None = None


class AccessTokenCache:
    """Process-wide bearer token with get-or-refresh semantics.

    ``fetch`` performs the token exchange and returns ``(token, expires_in)``.
    """

    def __init__(
        self,
        fetch: Callable[[], tuple[str, float | None]],
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetch = fetch
        self._clock = clock
        self._lock = threading.Lock()
        self._token: AccessToken | None = None

    def get(self) -> str:
        with self._lock:
            if self._token is None or self._is_stale(self._token):
                self._token = self._obtain()
            return self._token.value

    def refresh(self, stale: str | None = None) -> str:
        """Fetch a new token unless another caller already replaced ``stale``."""
        with self._lock:
            if self._token is not None and stale is not None and self._token.value != stale:
                return self._token.value
            self._token = self._obtain()
            return self._token.value

    def invalidate(self) -> None:
        with self._lock:
            self._token = None

    def _is_stale(self, token: AccessToken) -> bool:
        return token.expires_at is not None and self._clock() >= token.expires_at

    def _obtain(self) -> AccessToken:
        value, expires_in = self._fetch()
        expires_at = None
        if expires_in:
            expires_at = self._clock() + max(float(expires_in) - EXPIRY_MARGIN_SECONDS, 0.0)
        return AccessToken(value=value, expires_at=expires_at)


class SpotifyClient:
    """Thin wrapper over the Spotify Web API endpoints the recommender needs."""

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        http: httpx.Client | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.client_id = settings.spotify_client_id if client_id is None else client_id
        self.client_secret = settings.spotify_client_secret if client_secret is None else client_secret
        self._http = http or httpx.Client(timeout=settings.spotify_timeout_seconds)
        self.tokens = AccessTokenCache(self._request_token, clock=clock)

    def ensure_token(self) -> str:
        return self.tokens.get()

    def search_playlists(self, query: str, limit: int = 50) -> list[dict[str, Any]]:
        """Search playlists; null and id-less entries are dropped."""
        data = self._get("/search", params={"q": query, "type": "playlist", "limit": limit})
        playlists = data.get("playlists")
        items = playlists.get("items") if isinstance(playlists, dict) else None
        if not isinstance(items, list):
            return []
        return [item for item in items if isinstance(item, dict) and item.get("id")]

    def get_playlist_tracks(self, playlist_id: str, limit: int = 10) -> list[dict[str, Any]]:
        data = self._get(f"/playlists/{playlist_id}/tracks", params={"limit": limit})
        items = data.get("items")
        return items if isinstance(items, list) else []

    def close(self) -> None:
        self._http.close()

    def _request_token(self) -> tuple[str, float | None]:
        if not self.client_id or not self.client_secret:
            raise SpotifyServiceError("Spotify credentials are not configured")

        try:
            response = self._http.post(
                settings.spotify_accounts_url,
                data={"grant_type": "client_credentials"},
                auth=(self.client_id, self.client_secret),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Spotify token request failed: HTTP %s %s",
                exc.response.status_code,
                exc.response.text[:200],
            )
            raise SpotifyServiceError(f"Spotify token request failed: HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise SpotifyServiceError(f"Could not reach Spotify accounts service: {exc}") from exc

        payload = _decode(response)
        token = payload.get("access_token")
        if not token:
            raise SpotifyServiceError("Spotify token response missing 'access_token'")
        logger.info("Spotify access token obtained")
        return token, payload.get("expires_in")

    def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        url = settings.spotify_api_url.rstrip("/") + path
        token = self.tokens.get()

        for attempt in range(2):
            try:
                response = self._http.get(url, params=params, headers={"Authorization": f"Bearer {token}"})
            except httpx.HTTPError as exc:
                raise SpotifyServiceError(f"Could not reach Spotify: {exc}") from exc

            if response.status_code == 401:
                if attempt == 0:
                    logger.info("Spotify access token rejected, refreshing")
                    token = self.tokens.refresh(stale=token)
                    continue
                raise SpotifyAuthError("Spotify rejected a freshly issued access token")

            if response.is_error:
                logger.error("Spotify GET %s failed: HTTP %s %s", path, response.status_code, response.text[:200])
                raise SpotifyServiceError(f"Spotify request failed: HTTP {response.status_code}")

            return _decode(response)

        raise SpotifyAuthError("Spotify authorization failed")


def _decode(response: httpx.Response) -> dict[str, Any]:
    """Parse a Spotify JSON object body; anything else is a service error."""
    try:
        payload = response.json()
    except ValueError as exc:
        logger.error("Spotify returned a non-JSON body: %s", response.text[:200])
        raise SpotifyServiceError("Spotify returned a malformed response") from exc

    if not isinstance(payload, dict):
        raise SpotifyServiceError("Spotify returned a malformed response")
    return payload
