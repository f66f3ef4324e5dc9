"""Token lifecycle: expiry computation and refresh-before-use."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from spotify_wrapper.client import SpotifyClient
from spotify_wrapper.constants import TOKEN_LIFESPAN_RATIO
from spotify_wrapper.sessions import SessionCredential

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


def calculate_expiry(expires_in: int | float, now: datetime | None = None) -> datetime:
    """Expiry trusted for a token issued at ``now`` with a declared lifespan of ``expires_in`` seconds.

    Only 90% of the declared lifespan is used.
    """
    issued_at = now or utc_now()
    return issued_at + timedelta(seconds=expires_in * TOKEN_LIFESPAN_RATIO)


def is_expired(credential: SessionCredential, now: datetime | None = None) -> bool:
    return (now or utc_now()) >= credential.expiry_utc


class TokenManager:
    """Keeps a session's access token usable.

    Every authenticated operation calls :meth:`ensure_valid` first. Refresh
    failures propagate as classified errors and leave the credential as it was,
    so the next request attempts the refresh again.
    """

    def __init__(self, client: SpotifyClient, *, clock: Clock = utc_now) -> None:
        self._client = client
        self._clock = clock

    async def ensure_valid(self, credential: SessionCredential) -> bool:
        """Refresh ``credential`` in place if it has expired.

        Returns:
            ``True`` if a refresh happened, ``False`` if the token was still valid.

        Raises:
            SpotifyApiError: If the accounts service rejects the refresh.
        """
        now = self._clock()
        if not is_expired(credential, now):
            return False

        logger.info("Access token expired at %s, refreshing", credential.expiry_utc.isoformat())
        token = await self._client.refresh_access_token(credential.refresh_token)

        refreshed_at = self._clock()
        credential.access_token = token.access_token
        credential.expiry_utc = calculate_expiry(token.expires_in, refreshed_at)
        return True

    async def start_session(self, code: str) -> SessionCredential:
        """Exchange an authorization code for a new session credential."""
        token = await self._client.authorisation_code_grant(code)
        if not token.refresh_token:
            raise ValueError("Authorization-code grant returned no refresh token")

        now = self._clock()
        return SessionCredential(
            access_token=token.access_token,
            refresh_token=token.refresh_token,
            expiry_utc=calculate_expiry(token.expires_in, now),
            creation_utc=now,
        )
