"""HTTP transport: executes a RequestDescriptor and classifies failures."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from spotify_wrapper.constants import DEFAULT_REQUEST_TIMEOUT, FORM_CONTENT_TYPE
from spotify_wrapper.error_handling import classify_response, classify_transport_exception
from spotify_wrapper.request import RequestDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Successful (2xx) response."""

    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None


def _is_form(headers: Mapping[str, str] | None) -> bool:
    if not headers:
        return False
    for key, value in headers.items():
        if key.lower() == "content-type":
            return value.split(";")[0].strip().lower() == FORM_CONTENT_TYPE
    return False


def _parse_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class HttpTransport:
    """Async transport over httpx.

    Opens a short-lived ``httpx.AsyncClient`` per call. There is no retry: every
    failure is classified and raised to the caller.
    """

    def __init__(self, timeout: float = DEFAULT_REQUEST_TIMEOUT) -> None:
        self._timeout = timeout

    async def execute(self, descriptor: RequestDescriptor) -> TransportResponse:
        """Send ``descriptor`` and return the parsed 2xx response.

        The request goes to ``descriptor.url`` as rendered, query string included.

        Raises:
            SpotifyApiError: For non-2xx responses, timeouts and setup failures.
            SpotifyTransportError: For any other httpx failure.
        """
        uri = descriptor.uri
        url = descriptor.url
        headers = dict(descriptor.headers) if descriptor.headers else None
        kwargs: dict[str, Any] = {}
        if descriptor.body_parameters is not None:
            body = descriptor.body_parameters
            if isinstance(body, Mapping):
                body = dict(body)
            elif isinstance(body, tuple):
                body = list(body)
            if _is_form(headers):
                kwargs["data"] = body
            else:
                kwargs["json"] = body

        logger.debug("%s %s", descriptor.method, uri)
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.request(
                    str(descriptor.method),
                    url,
                    headers=headers,
                    **kwargs,
                )
        except httpx.HTTPError as exc:
            error = classify_transport_exception(exc)
            logger.warning("%s %s failed before a response: %s", descriptor.method, uri, error)
            raise error from exc
        except httpx.InvalidURL as exc:
            error = classify_transport_exception(exc)
            logger.warning("%s %s could not be sent: %s", descriptor.method, uri, error)
            raise error from exc

        body = _parse_body(response)
        if response.is_success:
            return TransportResponse(status=response.status_code, headers=dict(response.headers), body=body)

        error = classify_response(response.status_code, response.headers, body)
        logger.warning(
            "%s %s returned HTTP %d (%s)",
            descriptor.method,
            uri,
            response.status_code,
            error.kind,
        )
        raise error
