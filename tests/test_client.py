"""Tests for SpotifyClient endpoint methods."""

import base64
import json
from urllib.parse import parse_qs, urlsplit

import httpx
import pytest
import respx

from spotify_wrapper.client import SpotifyClient
from spotify_wrapper.exceptions import ErrorKind, SpotifyApiError
from spotify_wrapper.models import SpotifyTokenResponse

API = "https://api.spotify.com/v1"
TOKEN_URL = "https://accounts.spotify.com/api/token"


def _paging(count: int = 1, total: int | None = None) -> dict[str, object]:
    """Helper to build a paging object."""
    items = [{"id": f"item{i}", "name": f"Item {i}"} for i in range(count)]
    return {"items": items, "total": count if total is None else total, "limit": 20, "offset": 0}


# ---------------------------------------------------------------------------
# Accounts service
# ---------------------------------------------------------------------------


def test_create_authorise_url(client: SpotifyClient) -> None:
    url = client.create_authorise_url("xyz")
    parts = urlsplit(url)

    assert f"{parts.scheme}://{parts.netloc}{parts.path}" == "https://accounts.spotify.com/authorize"
    assert parse_qs(parts.query) == {
        "response_type": ["code"],
        "client_id": ["test-client-id"],
        "redirect_uri": ["http://localhost:3000/callback"],
        "scope": ["user-read-email user-library-read"],
        "state": ["xyz"],
    }
    assert "scope=user-read-email%20user-library-read" in url


def test_create_authorise_url_without_state(client: SpotifyClient) -> None:
    assert "state=" not in client.create_authorise_url()


@respx.mock
async def test_authorisation_code_grant_sends_basic_auth(client: SpotifyClient) -> None:
    route = respx.post(TOKEN_URL).mock(
        return_value=httpx.Response(
            200,
            json={"access_token": "at", "token_type": "Bearer", "expires_in": 3600, "refresh_token": "rt"},
        )
    )

    token = await client.authorisation_code_grant("the-code")

    assert token == SpotifyTokenResponse(access_token="at", expires_in=3600, refresh_token="rt")
    request = route.calls[0].request
    expected = base64.b64encode(b"test-client-id:test-client-secret").decode()
    assert request.headers["Authorization"] == f"Basic {expected}"
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert parse_qs(request.content.decode())["code"] == ["the-code"]


@respx.mock
async def test_refresh_access_token_auth_error(client: SpotifyClient) -> None:
    respx.post(TOKEN_URL).mock(return_value=httpx.Response(400, json={"error": "invalid_client"}))

    with pytest.raises(SpotifyApiError) as exc_info:
        await client.refresh_access_token("rt")

    error = exc_info.value
    assert error.kind is ErrorKind.AUTH
    assert error.body == {"error": {"status": 400, "message": "invalid_client"}}


# ---------------------------------------------------------------------------
# Web API
# ---------------------------------------------------------------------------


@respx.mock
async def test_get_me(client: SpotifyClient) -> None:
    route = respx.get(f"{API}/me").mock(return_value=httpx.Response(200, json={"id": "user1"}))

    assert await client.get_me("token") == {"id": "user1"}
    assert route.calls[0].request.headers["Authorization"] == "Bearer token"


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("get_me_tracks", "/me/tracks"),
        ("get_me_playlists", "/me/playlists"),
        ("get_me_albums", "/me/albums"),
    ],
)
@respx.mock
async def test_paged_endpoints_default_limit_and_offset(client: SpotifyClient, method: str, path: str) -> None:
    route = respx.get(f"{API}{path}").mock(return_value=httpx.Response(200, json=_paging()))

    await getattr(client, method)("token")

    params = route.calls[0].request.url.params
    assert params["limit"] == "20"
    assert params["offset"] == "0"


@respx.mock
async def test_paged_endpoint_passes_limit_and_offset(client: SpotifyClient) -> None:
    route = respx.get(f"{API}/me/tracks").mock(return_value=httpx.Response(200, json=_paging()))

    await client.get_me_tracks("token", 50, 100)

    assert str(route.calls[0].request.url) == f"{API}/me/tracks?limit=50&offset=100"


@respx.mock
async def test_get_me_artists_uses_after_cursor(client: SpotifyClient) -> None:
    route = respx.get(f"{API}/me/following").mock(
        return_value=httpx.Response(200, json={"artists": {"items": [], "cursors": {"after": None}}})
    )

    await client.get_me_artists("token", 50, 0)
    await client.get_me_artists("token", 50, "artist42")

    first, second = (call.request.url.params for call in route.calls)
    assert first["type"] == "artist"
    assert "after" not in first
    assert second["after"] == "artist42"


@respx.mock
async def test_get_playlist_tracks(client: SpotifyClient) -> None:
    route = respx.get(f"{API}/playlists/pl1/tracks").mock(return_value=httpx.Response(200, json=_paging()))

    await client.get_playlist_tracks("token", 50, 50, "pl1")
    assert route.calls[0].request.url.params["offset"] == "50"


@respx.mock
async def test_artist_endpoints(client: SpotifyClient) -> None:
    respx.get(f"{API}/artists/a1").mock(return_value=httpx.Response(200, json={"id": "a1", "name": "Artist"}))
    top = respx.get(f"{API}/artists/a1/top-tracks").mock(return_value=httpx.Response(200, json={"tracks": []}))
    albums = respx.get(f"{API}/artists/a1/albums").mock(return_value=httpx.Response(200, json=_paging()))
    respx.get(f"{API}/artists/a1/related-artists").mock(return_value=httpx.Response(200, json={"artists": []}))

    assert (await client.get_artist("token", "a1"))["name"] == "Artist"
    await client.get_artist_top_tracks("token", "a1")
    await client.get_artist_albums("token", None, None, "a1", include_groups="album,single")
    assert await client.get_related_artists("token", "a1") == {"artists": []}

    assert top.calls[0].request.url.params["market"] == "from_token"
    assert albums.calls[0].request.url.params["include_groups"] == "album,single"


@respx.mock
async def test_get_available_devices(client: SpotifyClient) -> None:
    respx.get(f"{API}/me/player/devices").mock(
        return_value=httpx.Response(200, json={"devices": [{"id": "d1", "name": "Phone", "type": "Smartphone"}]})
    )

    body = await client.get_available_devices("token")
    assert body["devices"][0]["id"] == "d1"


@respx.mock
async def test_set_active_device(client: SpotifyClient) -> None:
    route = respx.put(f"{API}/me/player").mock(return_value=httpx.Response(204))

    assert await client.set_active_device("token", "d1", play=True) is None
    assert json.loads(route.calls[0].request.content) == {"device_ids": ["d1"], "play": True}


@respx.mock
async def test_web_api_error_is_classified(client: SpotifyClient) -> None:
    respx.get(f"{API}/artists/missing").mock(
        return_value=httpx.Response(404, json={"error": {"status": 404, "message": "Not found"}})
    )

    with pytest.raises(SpotifyApiError) as exc_info:
        await client.get_artist("token", "missing")
    assert exc_info.value.kind is ErrorKind.WEB_API
    assert exc_info.value.status == 404


async def test_empty_access_token_is_a_setup_error(client: SpotifyClient) -> None:
    with pytest.raises(SpotifyApiError) as exc_info:
        await client.get_me("")
    assert exc_info.value.kind is ErrorKind.SETUP
