"""Spotify client exceptions."""

import enum
from collections.abc import Mapping
from typing import Any


class ErrorKind(enum.StrEnum):
    """Closed set of classified failure kinds."""

    TIMEOUT = "timeout"
    SETUP = "setup"
    AUTH = "auth"
    WEB_API = "web_api"
    GENERIC_API = "generic_api"


_DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.TIMEOUT: "A timeout occurred whilst communicating with Spotify's Web API.",
    ErrorKind.SETUP: "An error occurred whilst setting up the API request.",
    ErrorKind.AUTH: "An authentication error occurred whilst communicating with Spotify's Web API.",
    ErrorKind.WEB_API: "An error occurred whilst communicating with Spotify's Web API.",
    ErrorKind.GENERIC_API: "Unhandled error.",
}


class SpotifyClientError(Exception):
    """Base exception for Spotify client errors."""


class SpotifyApiError(SpotifyClientError):
    """A classified failure.

    ``kind`` is the discriminant; ``status``, ``headers`` and ``body`` carry the
    upstream response where one was received. All attributes are read-only.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str | None = None,
        *,
        status: int | None = None,
        headers: Mapping[str, str] | None = None,
        body: Any = None,
    ) -> None:
        self._kind = kind
        self._message = message or _DEFAULT_MESSAGES[kind]
        self._status = status
        self._headers = dict(headers) if headers is not None else None
        self._body = body
        detail = f" (HTTP {status})" if status is not None else ""
        super().__init__(f"{self._message}{detail}")

    @property
    def kind(self) -> ErrorKind:
        return self._kind

    @property
    def message(self) -> str:
        return self._message

    @property
    def status(self) -> int | None:
        return self._status

    @property
    def headers(self) -> dict[str, str] | None:
        return dict(self._headers) if self._headers is not None else None

    @property
    def body(self) -> Any:
        return self._body

    def __repr__(self) -> str:
        return f"SpotifyApiError(kind={self._kind!r}, status={self._status!r}, message={self._message!r})"


class SpotifyTransportError(SpotifyClientError):
    """The HTTP library failed in a way that fits no classified kind. Not retried."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Unclassified transport failure: {type(cause).__name__}: {cause}")


class SessionNotFoundError(SpotifyClientError):
    """No session record exists for the given key."""

    def __init__(self, session_key: str) -> None:
        self.session_key = session_key
        super().__init__("Unauthorised: no active session")
