"""Tests for HttpTransport."""

import json
from urllib.parse import parse_qs

import httpx
import pytest
import respx

from spotify_wrapper.exceptions import ErrorKind, SpotifyApiError, SpotifyTransportError
from spotify_wrapper.request import HttpMethod, RequestBuilder, api_request, auth_request
from spotify_wrapper.transport import HttpTransport

ME_URL = "https://api.spotify.com/v1/me"


@respx.mock
async def test_success_returns_parsed_body_status_and_headers() -> None:
    respx.get(ME_URL).mock(return_value=httpx.Response(200, json={"id": "user1"}, headers={"X-Test": "yes"}))

    response = await HttpTransport().execute(api_request("token").set_path("/v1/me").build())
    assert response.status == 200
    assert response.body == {"id": "user1"}
    assert response.headers["x-test"] == "yes"


@respx.mock
async def test_sends_bearer_header_and_query_without_none_values() -> None:
    route = respx.get("https://api.spotify.com/v1/me/following").mock(
        return_value=httpx.Response(200, json={"artists": {"items": []}})
    )

    descriptor = (
        api_request("token")
        .set_path("/v1/me/following")
        .set_query_params({"type": "artist", "limit": 20, "after": None})
        .build()
    )
    await HttpTransport().execute(descriptor)

    request = route.calls[0].request
    assert request.headers["Authorization"] == "Bearer token"
    assert dict(request.url.params) == {"type": "artist", "limit": "20"}


@respx.mock
async def test_sent_url_matches_descriptor_url() -> None:
    """Lists go out comma-joined and booleans lowercased, exactly as the descriptor renders them."""
    route = respx.get("https://api.spotify.com/v1/tracks").mock(return_value=httpx.Response(200, json={"tracks": []}))

    descriptor = (
        api_request("token")
        .set_path("/v1/tracks")
        .set_query_params({"ids": ["a", "b"], "market": "from token", "explicit": True})
        .build()
    )
    await HttpTransport().execute(descriptor)

    request = route.calls[0].request
    assert str(request.url) == descriptor.url
    assert request.url.params.get_list("ids") == ["a,b"]
    assert request.url.params["explicit"] == "true"


@respx.mock
async def test_empty_success_body_is_none() -> None:
    respx.put("https://api.spotify.com/v1/me/player").mock(return_value=httpx.Response(204))

    descriptor = api_request("token").set_method(HttpMethod.PUT).set_path("/v1/me/player").build()
    response = await HttpTransport().execute(descriptor)
    assert response.status == 204
    assert response.body is None


@respx.mock
async def test_json_body_for_api_requests() -> None:
    route = respx.put("https://api.spotify.com/v1/me/player").mock(return_value=httpx.Response(204))

    descriptor = (
        api_request("token")
        .set_method(HttpMethod.PUT)
        .set_path("/v1/me/player")
        .set_body_params({"device_ids": ["d1"], "play": False})
        .build()
    )
    await HttpTransport().execute(descriptor)

    assert json.loads(route.calls[0].request.content) == {"device_ids": ["d1"], "play": False}


@respx.mock
async def test_form_body_when_content_type_is_urlencoded() -> None:
    route = respx.post("https://accounts.spotify.com/api/token").mock(
        return_value=httpx.Response(200, json={"access_token": "a", "expires_in": 3600})
    )

    descriptor = (
        auth_request()
        .set_method(HttpMethod.POST)
        .set_path("/api/token")
        .set_headers({"content-type": "application/x-www-form-urlencoded"})
        .set_body_params({"grant_type": "refresh_token", "refresh_token": "r1"})
        .build()
    )
    await HttpTransport().execute(descriptor)

    body = parse_qs(route.calls[0].request.content.decode())
    assert body == {"grant_type": ["refresh_token"], "refresh_token": ["r1"]}


@respx.mock
async def test_string_error_raises_auth_error() -> None:
    respx.post("https://accounts.spotify.com/api/token").mock(
        return_value=httpx.Response(400, json={"error": "invalid_grant", "error_description": "Bad code"})
    )

    descriptor = auth_request().set_method(HttpMethod.POST).set_path("/api/token").build()
    with pytest.raises(SpotifyApiError) as exc_info:
        await HttpTransport().execute(descriptor)

    error = exc_info.value
    assert error.kind is ErrorKind.AUTH
    assert error.status == 400
    assert error.body == {"error": {"status": 400, "message": "Bad code"}}


@respx.mock
async def test_object_error_raises_web_api_error() -> None:
    respx.get(ME_URL).mock(
        return_value=httpx.Response(404, json={"error": {"status": 404, "message": "not found"}})
    )

    with pytest.raises(SpotifyApiError) as exc_info:
        await HttpTransport().execute(api_request("token").set_path("/v1/me").build())

    assert exc_info.value.kind is ErrorKind.WEB_API
    assert exc_info.value.status == 404
    assert exc_info.value.body == {"error": {"status": 404, "message": "not found"}}


@respx.mock
async def test_non_json_error_raises_generic_error() -> None:
    respx.get(ME_URL).mock(return_value=httpx.Response(502, text="Bad Gateway"))

    with pytest.raises(SpotifyApiError) as exc_info:
        await HttpTransport().execute(api_request("token").set_path("/v1/me").build())

    assert exc_info.value.kind is ErrorKind.GENERIC_API
    assert exc_info.value.message == "Unhandled error."
    assert exc_info.value.body == "Bad Gateway"


@respx.mock
async def test_no_response_raises_timeout_error() -> None:
    route = respx.get(ME_URL).mock(side_effect=httpx.ReadTimeout)

    with pytest.raises(SpotifyApiError) as exc_info:
        await HttpTransport().execute(api_request("token").set_path("/v1/me").build())

    assert exc_info.value.kind is ErrorKind.TIMEOUT
    assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)
    assert route.call_count == 1  # never retried


@respx.mock
async def test_connection_failure_raises_timeout_error() -> None:
    respx.get(ME_URL).mock(side_effect=httpx.ConnectError)

    with pytest.raises(SpotifyApiError) as exc_info:
        await HttpTransport().execute(api_request("token").set_path("/v1/me").build())

    assert exc_info.value.kind is ErrorKind.TIMEOUT


@respx.mock
async def test_unsupported_protocol_raises_setup_error() -> None:
    respx.get(ME_URL).mock(side_effect=httpx.UnsupportedProtocol)

    with pytest.raises(SpotifyApiError) as exc_info:
        await HttpTransport().execute(api_request("token").set_path("/v1/me").build())

    assert exc_info.value.kind is ErrorKind.SETUP


@respx.mock
async def test_other_httpx_failure_raises_unclassified_error() -> None:
    respx.get(ME_URL).mock(side_effect=httpx.TooManyRedirects)

    with pytest.raises(SpotifyTransportError):
        await HttpTransport().execute(api_request("token").set_path("/v1/me").build())


async def test_incomplete_descriptor_raises_setup_error_without_sending() -> None:
    descriptor = RequestBuilder().set_path("/v1/me").build()

    with respx.mock(assert_all_called=False) as router:
        route = router.get(ME_URL)
        with pytest.raises(SpotifyApiError) as exc_info:
            await HttpTransport().execute(descriptor)

    assert exc_info.value.kind is ErrorKind.SETUP
    assert not route.called
