"""Spotify Web API and accounts-service endpoint client."""

import base64
import logging
from typing import Any

from spotify_wrapper.constants import (
    ARTIST_ALBUMS_PATH,
    ARTIST_PATH,
    ARTIST_TOP_TRACKS_PATH,
    AUTHORIZE_PATH,
    DEFAULT_MARKET,
    DEFAULT_PAGE_LIMIT,
    DEFAULT_PAGE_OFFSET,
    DEVICES_PATH,
    FOLLOWING_PATH,
    FORM_CONTENT_TYPE,
    ME_PATH,
    PLAYER_PATH,
    PLAYLIST_TRACKS_PATH,
    RELATED_ARTISTS_PATH,
    SAVED_ALBUMS_PATH,
    SAVED_TRACKS_PATH,
    TOKEN_PATH,
    USER_PLAYLISTS_PATH,
)
from spotify_wrapper.models import SpotifyTokenResponse
from spotify_wrapper.request import HttpMethod, RequestBuilder, api_request, auth_request
from spotify_wrapper.settings import ClientSettings, get_settings
from spotify_wrapper.transport import HttpTransport

logger = logging.getLogger(__name__)


class SpotifyClient:
    """Async Spotify client.

    Stateless with respect to users: every Web API method takes the access
    token as its first argument. Paged methods follow the
    ``(access_token, limit, position, *extra)`` signature expected by
    :mod:`spotify_wrapper.pagination` and return the raw JSON body.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        transport: HttpTransport | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._transport = transport or HttpTransport(timeout=self._settings.REQUEST_TIMEOUT_SECONDS)

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    async def _send(self, builder: RequestBuilder) -> Any:
        response = await self._transport.execute(builder.build())
        return response.body

    def _basic_auth_header(self) -> dict[str, str]:
        raw = f"{self._settings.SPOTIFY_CLIENT_ID}:{self._settings.SPOTIFY_CLIENT_SECRET}"
        encoded = base64.b64encode(raw.encode()).decode()
        return {"Content-Type": FORM_CONTENT_TYPE, "Authorization": f"Basic {encoded}"}

    # -------------------------------------------------------------------
    # Accounts service
    # -------------------------------------------------------------------

    def create_authorise_url(self, state: str | None = None) -> str:
        """URL where the user signs in and grants the configured scopes."""
        return (
            auth_request()
            .set_path(AUTHORIZE_PATH)
            .set_query_params(
                {
                    "response_type": "code",
                    "client_id": self._settings.SPOTIFY_CLIENT_ID,
                    "redirect_uri": self._settings.SPOTIFY_REDIRECT_URI,
                    "scope": " ".join(self._settings.scopes),
                    "state": state,
                }
            )
            .build()
            .url
        )

    async def authorisation_code_grant(self, code: str) -> SpotifyTokenResponse:
        """POST /api/token with ``grant_type=authorization_code``."""
        builder = (
            auth_request()
            .set_method(HttpMethod.POST)
            .set_path(TOKEN_PATH)
            .set_headers(self._basic_auth_header())
            .set_body_params(
                {
                    "grant_type": "authorization_code",
                    "code": code,
                    "redirect_uri": self._settings.SPOTIFY_REDIRECT_URI,
                }
            )
        )
        return SpotifyTokenResponse.model_validate(await self._send(builder))

    async def refresh_access_token(self, refresh_token: str) -> SpotifyTokenResponse:
        """POST /api/token with ``grant_type=refresh_token``."""
        builder = (
            auth_request()
            .set_method(HttpMethod.POST)
            .set_path(TOKEN_PATH)
            .set_headers(self._basic_auth_header())
            .set_body_params(
                {
                    "grant_type": "refresh_token",
                    "refresh_token": refresh_token,
                    "client_id": self._settings.SPOTIFY_CLIENT_ID,
                }
            )
        )
        return SpotifyTokenResponse.model_validate(await self._send(builder))

    # -------------------------------------------------------------------
    # Current user
    # -------------------------------------------------------------------

    async def get_me(self, access_token: str) -> Any:
        """GET /me."""
        return await self._send(api_request(access_token).set_path(ME_PATH))

    async def get_me_tracks(
        self,
        access_token: str,
        limit: int | None = None,
        offset: int | None = None,
    ) -> Any:
        """GET /me/tracks."""
        return await self._send(
            api_request(access_token)
            .set_path(SAVED_TRACKS_PATH)
            .set_query_params({"limit": limit or DEFAULT_PAGE_LIMIT, "offset": offset or DEFAULT_PAGE_OFFSET})
        )

    async def get_me_playlists(
        self,
        access_token: str,
        limit: int | None = None,
        offset: int | None = None,
    ) -> Any:
        """GET /me/playlists."""
        return await self._send(
            api_request(access_token)
            .set_path(USER_PLAYLISTS_PATH)
            .set_query_params({"limit": limit or DEFAULT_PAGE_LIMIT, "offset": offset or DEFAULT_PAGE_OFFSET})
        )

    async def get_me_albums(
        self,
        access_token: str,
        limit: int | None = None,
        offset: int | None = None,
    ) -> Any:
        """GET /me/albums."""
        return await self._send(
            api_request(access_token)
            .set_path(SAVED_ALBUMS_PATH)
            .set_query_params({"limit": limit or DEFAULT_PAGE_LIMIT, "offset": offset or DEFAULT_PAGE_OFFSET})
        )

    async def get_me_artists(
        self,
        access_token: str,
        limit: int | None = None,
        after: str | int | None = None,
    ) -> Any:
        """GET /me/following?type=artist (cursor-paginated via ``after``)."""
        return await self._send(
            api_request(access_token)
            .set_path(FOLLOWING_PATH)
            .set_query_params({"type": "artist", "limit": limit or DEFAULT_PAGE_LIMIT, "after": after or None})
        )

    # -------------------------------------------------------------------
    # Playlists and artists
    # -------------------------------------------------------------------

    async def get_playlist_tracks(
        self,
        access_token: str,
        limit: int | None,
        offset: int | None,
        playlist_id: str,
    ) -> Any:
        """GET /playlists/{id}/tracks."""
        return await self._send(
            api_request(access_token)
            .set_path(PLAYLIST_TRACKS_PATH.format(playlist_id=playlist_id))
            .set_query_params({"limit": limit or DEFAULT_PAGE_LIMIT, "offset": offset or DEFAULT_PAGE_OFFSET})
        )

    async def get_artist(self, access_token: str, artist_id: str) -> Any:
        """GET /artists/{id}."""
        return await self._send(api_request(access_token).set_path(ARTIST_PATH.format(artist_id=artist_id)))

    async def get_artist_top_tracks(self, access_token: str, artist_id: str, market: str = DEFAULT_MARKET) -> Any:
        """GET /artists/{id}/top-tracks."""
        return await self._send(
            api_request(access_token)
            .set_path(ARTIST_TOP_TRACKS_PATH.format(artist_id=artist_id))
            .set_query_params({"market": market})
        )

    async def get_artist_albums(
        self,
        access_token: str,
        limit: int | None,
        offset: int | None,
        artist_id: str,
        include_groups: str | None = None,
    ) -> Any:
        """GET /artists/{id}/albums."""
        return await self._send(
            api_request(access_token)
            .set_path(ARTIST_ALBUMS_PATH.format(artist_id=artist_id))
            .set_query_params(
                {
                    "include_groups": include_groups,
                    "limit": limit or DEFAULT_PAGE_LIMIT,
                    "offset": offset or DEFAULT_PAGE_OFFSET,
                }
            )
        )

    async def get_related_artists(self, access_token: str, artist_id: str) -> Any:
        """GET /artists/{id}/related-artists."""
        return await self._send(
            api_request(access_token).set_path(RELATED_ARTISTS_PATH.format(artist_id=artist_id))
        )

    # -------------------------------------------------------------------
    # Player
    # -------------------------------------------------------------------

    async def get_available_devices(self, access_token: str) -> Any:
        """GET /me/player/devices."""
        return await self._send(api_request(access_token).set_path(DEVICES_PATH))

    async def set_active_device(self, access_token: str, device_id: str, play: bool = False) -> None:
        """PUT /me/player, transfers playback to ``device_id``."""
        logger.info("Transferring playback to device %s", device_id)
        await self._send(
            api_request(access_token)
            .set_method(HttpMethod.PUT)
            .set_path(PLAYER_PATH)
            .set_body_params({"device_ids": [device_id], "play": play})
        )
