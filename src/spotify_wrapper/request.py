"""Request descriptors and the builder that assembles them.

A :class:`RequestDescriptor` describes exactly one HTTP call and is frozen once
built. :class:`RequestBuilder` accumulates headers, query and body parameters
across successive calls using :func:`merge_params`.
"""

import enum
from collections.abc import Mapping, Sized
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Self
from urllib.parse import quote, urlencode

from spotify_wrapper.constants import (
    API_HOST,
    API_PORT,
    API_SCHEME,
    AUTH_HOST,
    AUTH_PORT,
    AUTH_SCHEME,
    DEFAULT_PORTS,
)
from spotify_wrapper.exceptions import ErrorKind, SpotifyApiError


class HttpMethod(enum.StrEnum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, Sized) and len(value) == 0


def merge_params(existing: Any, new: Any) -> Any:
    """Combine a new parameter fragment with the current value.

    - an empty or absent ``new`` leaves ``existing`` untouched;
    - a non-empty mapping is merged key-by-key into an existing mapping;
    - anything else (strings, sequences, scalars, or a mapping over a
      non-mapping) replaces ``existing`` outright.

    Inputs are never mutated.
    """
    if _is_empty(new):
        return existing
    if isinstance(new, Mapping):
        if isinstance(existing, Mapping):
            return {**existing, **new}
        return dict(new)
    if isinstance(new, list):
        return list(new)
    return new


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType(dict(value))
    if isinstance(value, list):
        return tuple(value)
    return value


@dataclass(frozen=True, slots=True)
class RequestDescriptor:
    """Immutable description of a single HTTP call."""

    method: HttpMethod = HttpMethod.GET
    scheme: str | None = None
    host: str | None = None
    port: int | None = None
    path: str | None = None
    headers: Mapping[str, str] | None = None
    query_parameters: Any = None
    body_parameters: Any = None

    @property
    def uri(self) -> str:
        """``scheme://host[:port]path``; the port is dropped when it is the scheme default."""
        if not self.scheme or not self.host or not self.port:
            raise SpotifyApiError(ErrorKind.SETUP, "Missing components necessary to construct URI.")

        uri = f"{self.scheme}://{self.host}"
        if DEFAULT_PORTS.get(self.scheme) != self.port:
            uri += f":{self.port}"
        if self.path:
            uri += self.path
        return uri

    @property
    def url(self) -> str:
        query = self.query_string()
        return f"{self.uri}?{query}" if query else self.uri

    def query_items(self) -> list[tuple[str, Any]]:
        """Query parameters in insertion order, without ``None`` values."""
        if not isinstance(self.query_parameters, Mapping):
            return []
        return [(key, value) for key, value in self.query_parameters.items() if value is not None]

    def query_string(self) -> str:
        items = [(key, _stringify(value)) for key, value in self.query_items()]
        return urlencode(items, quote_via=quote)


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


class RequestBuilder:
    """Chainable builder for :class:`RequestDescriptor`."""

    def __init__(self) -> None:
        self._method = HttpMethod.GET
        self._scheme: str | None = None
        self._host: str | None = None
        self._port: int | None = None
        self._path: str | None = None
        self._headers: Any = None
        self._query_parameters: Any = None
        self._body_parameters: Any = None

    def set_method(self, method: HttpMethod | str) -> Self:
        self._method = HttpMethod(method.upper())
        return self

    def set_scheme(self, scheme: str) -> Self:
        self._scheme = scheme
        return self

    def set_host(self, host: str) -> Self:
        self._host = host
        return self

    def set_port(self, port: int) -> Self:
        self._port = port
        return self

    def set_path(self, path: str) -> Self:
        self._path = path
        return self

    def set_headers(self, *fragments: Any) -> Self:
        for fragment in fragments:
            self._headers = merge_params(self._headers, fragment)
        return self

    def set_query_params(self, *fragments: Any) -> Self:
        for fragment in fragments:
            self._query_parameters = merge_params(self._query_parameters, fragment)
        return self

    def set_body_params(self, *fragments: Any) -> Self:
        for fragment in fragments:
            self._body_parameters = merge_params(self._body_parameters, fragment)
        return self

    def with_auth(self, access_token: str) -> Self:
        if access_token:
            self.set_headers({"Authorization": f"Bearer {access_token}"})
        return self

    def build(self) -> RequestDescriptor:
        return RequestDescriptor(
            method=self._method,
            scheme=self._scheme,
            host=self._host,
            port=self._port,
            path=self._path,
            headers=_freeze(self._headers),
            query_parameters=_freeze(self._query_parameters),
            body_parameters=_freeze(self._body_parameters),
        )


@dataclass(frozen=True, slots=True)
class HostConfig:
    """Scheme, host and port shared by every request to one upstream service."""

    scheme: str
    host: str
    port: int

    def builder(self) -> RequestBuilder:
        return RequestBuilder().set_scheme(self.scheme).set_host(self.host).set_port(self.port)


API_HOST_CONFIG = HostConfig(API_SCHEME, API_HOST, API_PORT)
AUTH_HOST_CONFIG = HostConfig(AUTH_SCHEME, AUTH_HOST, AUTH_PORT)


def api_request(access_token: str, config: HostConfig = API_HOST_CONFIG) -> RequestBuilder:
    """Start a Web API request carrying ``Authorization: Bearer <access_token>``."""
    if not access_token:
        raise SpotifyApiError(ErrorKind.SETUP, "A request sent to Spotify's Web API must include an access token.")
    return config.builder().with_auth(access_token)


def auth_request(config: HostConfig = AUTH_HOST_CONFIG) -> RequestBuilder:
    """Start a request against the accounts service."""
    return config.builder()
