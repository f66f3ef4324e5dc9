"""Failure classification.

Turns failed transport outcomes into one of the :class:`ErrorKind` members and
maps classified errors back to an HTTP status and message for whatever server
sits in front of the client.
"""

from collections.abc import Mapping
from typing import Any

import httpx

from spotify_wrapper.exceptions import (
    ErrorKind,
    SessionNotFoundError,
    SpotifyApiError,
    SpotifyClientError,
    SpotifyTransportError,
)

_SETUP_EXCEPTIONS: tuple[type[Exception], ...] = (
    httpx.UnsupportedProtocol,
    httpx.InvalidURL,
    httpx.LocalProtocolError,
)

# Request was sent (or the socket attempt was made) but no response came back.
_TIMEOUT_EXCEPTIONS: tuple[type[Exception], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


def classify_response(status: int, headers: Mapping[str, str] | None, body: Any) -> SpotifyApiError:
    """Classify a non-2xx response by the shape of its ``error`` field.

    The accounts service reports failures as ``{"error": "<code>", "error_description": "..."}``;
    the Web API uses ``{"error": {"status": ..., "message": ...}}``. Auth bodies are
    rewritten into the Web API shape so callers only handle one.
    """
    error = body.get("error") if isinstance(body, Mapping) else None

    if isinstance(error, str):
        normalized = {
            "error": {
                "status": status,
                "message": body.get("error_description") or error,
            }
        }
        return SpotifyApiError(ErrorKind.AUTH, status=status, headers=headers, body=normalized)

    if isinstance(error, Mapping):
        return SpotifyApiError(ErrorKind.WEB_API, status=status, headers=headers, body=body)

    return SpotifyApiError(ErrorKind.GENERIC_API, status=status, headers=headers, body=body)


def classify_transport_exception(exc: Exception) -> SpotifyClientError:
    """Classify an exception raised by httpx before any response was read."""
    if isinstance(exc, _SETUP_EXCEPTIONS):
        return SpotifyApiError(ErrorKind.SETUP)
    if isinstance(exc, _TIMEOUT_EXCEPTIONS):
        return SpotifyApiError(ErrorKind.TIMEOUT)
    return SpotifyTransportError(exc)


def error_response(exc: SpotifyClientError) -> tuple[int, str]:
    """Return the ``(status, message)`` a server should reply with for ``exc``."""
    if isinstance(exc, SessionNotFoundError):
        return 401, "Unauthorised"
    if not isinstance(exc, SpotifyApiError):
        return 500, "Internal server error."

    match exc.kind:
        case ErrorKind.TIMEOUT:
            return 504, exc.message
        case ErrorKind.SETUP:
            return 500, exc.message
        case ErrorKind.AUTH | ErrorKind.WEB_API:
            error = exc.body.get("error") if isinstance(exc.body, Mapping) else None
            if isinstance(error, Mapping):
                return int(error.get("status") or 500), str(error.get("message") or "Internal server error.")
            return exc.status or 500, exc.message
        case _:
            return exc.status or 500, exc.message
