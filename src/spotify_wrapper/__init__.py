"""Async Spotify Web API client."""

from spotify_wrapper.client import SpotifyClient
from spotify_wrapper.error_handling import classify_response, classify_transport_exception, error_response
from spotify_wrapper.exceptions import (
    ErrorKind,
    SessionNotFoundError,
    SpotifyApiError,
    SpotifyClientError,
    SpotifyTransportError,
)
from spotify_wrapper.library import SpotifyLibrary
from spotify_wrapper.pagination import PageData, PaginationStrategy, fetch_bulk, fetch_sequential, paginate
from spotify_wrapper.request import HttpMethod, RequestBuilder, RequestDescriptor, api_request, auth_request
from spotify_wrapper.sessions import InMemorySessionStore, SessionCredential, SessionStore
from spotify_wrapper.settings import ClientSettings, get_settings
from spotify_wrapper.tokens import TokenManager, calculate_expiry, is_expired
from spotify_wrapper.transport import HttpTransport, TransportResponse

__all__ = [
    "ClientSettings",
    "ErrorKind",
    "HttpMethod",
    "HttpTransport",
    "InMemorySessionStore",
    "PageData",
    "PaginationStrategy",
    "RequestBuilder",
    "RequestDescriptor",
    "SessionCredential",
    "SessionNotFoundError",
    "SessionStore",
    "SpotifyApiError",
    "SpotifyClient",
    "SpotifyClientError",
    "SpotifyLibrary",
    "SpotifyTransportError",
    "TokenManager",
    "TransportResponse",
    "api_request",
    "auth_request",
    "calculate_expiry",
    "classify_response",
    "classify_transport_exception",
    "error_response",
    "fetch_bulk",
    "fetch_sequential",
    "get_settings",
    "is_expired",
    "paginate",
]
