"""Shared fixtures for spotify_wrapper tests."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from spotify_wrapper.client import SpotifyClient
from spotify_wrapper.sessions import InMemorySessionStore, SessionCredential
from spotify_wrapper.settings import ClientSettings


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(
        SPOTIFY_CLIENT_ID="test-client-id",
        SPOTIFY_CLIENT_SECRET="test-client-secret",
        SPOTIFY_REDIRECT_URI="http://localhost:3000/callback",
        SPOTIFY_SCOPES="user-read-email user-library-read",
        PAGE_SIZE=50,
    )


@pytest.fixture
def client(settings: ClientSettings) -> SpotifyClient:
    return SpotifyClient(settings)


@pytest.fixture
def make_credential() -> Callable[..., SessionCredential]:
    """Factory for credentials expiring ``expires_in`` from now (negative = already expired)."""

    def _make(
        access_token: str = "valid-token",
        refresh_token: str = "test-refresh-token",
        expires_in: timedelta = timedelta(hours=1),
    ) -> SessionCredential:
        now = datetime.now(UTC)
        return SessionCredential(
            access_token=access_token,
            refresh_token=refresh_token,
            expiry_utc=now + expires_in,
            creation_utc=now - timedelta(minutes=5),
        )

    return _make


@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore()
