"""Session-scoped operations over the user's Spotify library.

Composes the endpoint client, the token lifecycle and the pagination engine.
Each operation looks up the session credential, makes sure its access token is
valid, then performs one or more upstream calls.
"""

import asyncio
import logging
from typing import Any

from pydantic import TypeAdapter

from spotify_wrapper.client import SpotifyClient
from spotify_wrapper.exceptions import SessionNotFoundError
from spotify_wrapper.models import (
    ArtistDetail,
    SpotifyAlbumSimplified,
    SpotifyArtistFull,
    SpotifyDevice,
    SpotifyPlaylistSimplified,
    SpotifyProfile,
    SpotifySavedTrack,
    SpotifyTrack,
)
from spotify_wrapper.pagination import (
    PaginationStrategy,
    extract_followed_artists,
    extract_page,
    extract_playlist_tracks,
    extract_saved_albums,
    fetch_sequential,
    paginate,
)
from spotify_wrapper.sessions import SessionStore
from spotify_wrapper.tokens import TokenManager

logger = logging.getLogger(__name__)

_tracks = TypeAdapter(list[SpotifyTrack])
_saved_tracks = TypeAdapter(list[SpotifySavedTrack])
_albums = TypeAdapter(list[SpotifyAlbumSimplified])
_artists = TypeAdapter(list[SpotifyArtistFull])
_playlists = TypeAdapter(list[SpotifyPlaylistSimplified])
_devices = TypeAdapter(list[SpotifyDevice])


class SpotifyLibrary:
    """Authenticated, paginated access to one session's Spotify data."""

    def __init__(
        self,
        client: SpotifyClient,
        store: SessionStore,
        *,
        token_manager: TokenManager | None = None,
        page_size: int | None = None,
    ) -> None:
        self._client = client
        self._store = store
        self._tokens = token_manager or TokenManager(client)
        self._page_size = page_size or client.settings.PAGE_SIZE

    async def _access_token(self, session_key: str) -> str:
        """Return a valid access token for the session, refreshing it first if needed."""
        credential = self._store.get(session_key)
        if credential is None:
            raise SessionNotFoundError(session_key)
        if await self._tokens.ensure_valid(credential):
            self._store.set(session_key, credential)
        return credential.access_token

    # -------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------

    def login_url(self, state: str | None = None) -> str:
        return self._client.create_authorise_url(state)

    async def login(self, session_key: str, code: str) -> None:
        """Complete the authorization-code flow and store the new credential."""
        credential = await self._tokens.start_session(code)
        self._store.set(session_key, credential)
        logger.info("Spotify session established")

    def logout(self, session_key: str) -> bool:
        """Forget the session. Returns ``False`` if there was none."""
        return self._store.delete(session_key)

    # -------------------------------------------------------------------
    # Single resources
    # -------------------------------------------------------------------

    async def profile(self, session_key: str) -> SpotifyProfile:
        token = await self._access_token(session_key)
        return SpotifyProfile.model_validate(await self._client.get_me(token))

    async def devices(self, session_key: str) -> list[SpotifyDevice]:
        token = await self._access_token(session_key)
        body = await self._client.get_available_devices(token)
        return _devices.validate_python((body or {}).get("devices", []))

    async def transfer_playback(self, session_key: str, device_id: str, play: bool = False) -> None:
        token = await self._access_token(session_key)
        await self._client.set_active_device(token, device_id, play=play)

    # -------------------------------------------------------------------
    # Collections
    # -------------------------------------------------------------------

    async def saved_tracks(
        self,
        session_key: str,
        *,
        item_cap: int | None = None,
        strategy: PaginationStrategy = PaginationStrategy.BULK,
    ) -> list[SpotifySavedTrack]:
        token = await self._access_token(session_key)
        items = await paginate(
            self._client.get_me_tracks, token, self._page_size, extract_page, item_cap=item_cap, strategy=strategy
        )
        return _saved_tracks.validate_python(items)

    async def playlists(
        self,
        session_key: str,
        *,
        item_cap: int | None = None,
        strategy: PaginationStrategy = PaginationStrategy.BULK,
    ) -> list[SpotifyPlaylistSimplified]:
        token = await self._access_token(session_key)
        items = await paginate(
            self._client.get_me_playlists, token, self._page_size, extract_page, item_cap=item_cap, strategy=strategy
        )
        return _playlists.validate_python(items)

    async def saved_albums(
        self,
        session_key: str,
        *,
        item_cap: int | None = None,
        strategy: PaginationStrategy = PaginationStrategy.BULK,
    ) -> list[SpotifyAlbumSimplified]:
        token = await self._access_token(session_key)
        items = await paginate(
            self._client.get_me_albums,
            token,
            self._page_size,
            extract_saved_albums,
            item_cap=item_cap,
            strategy=strategy,
        )
        return _albums.validate_python(items)

    async def followed_artists(self, session_key: str, *, item_cap: int | None = None) -> list[SpotifyArtistFull]:
        """Followed artists are cursor-paginated, so they are always fetched sequentially."""
        token = await self._access_token(session_key)
        items = await fetch_sequential(
            self._client.get_me_artists, token, self._page_size, extract_followed_artists, item_cap=item_cap
        )
        return _artists.validate_python(items)

    async def playlist_tracks(
        self,
        session_key: str,
        playlist_id: str,
        *,
        item_cap: int | None = None,
        strategy: PaginationStrategy = PaginationStrategy.BULK,
    ) -> list[SpotifyTrack]:
        token = await self._access_token(session_key)
        items = await paginate(
            self._client.get_playlist_tracks,
            token,
            self._page_size,
            extract_playlist_tracks,
            playlist_id,
            item_cap=item_cap,
            strategy=strategy,
        )
        return _tracks.validate_python(items)

    async def artist_albums(
        self,
        session_key: str,
        artist_id: str,
        *,
        item_cap: int | None = None,
        strategy: PaginationStrategy = PaginationStrategy.BULK,
    ) -> list[SpotifyAlbumSimplified]:
        token = await self._access_token(session_key)
        return await self._artist_albums(token, artist_id, item_cap=item_cap, strategy=strategy)

    async def _artist_albums(
        self,
        token: str,
        artist_id: str,
        *,
        item_cap: int | None = None,
        strategy: PaginationStrategy = PaginationStrategy.BULK,
    ) -> list[SpotifyAlbumSimplified]:
        items = await paginate(
            self._client.get_artist_albums,
            token,
            self._page_size,
            extract_page,
            artist_id,
            item_cap=item_cap,
            strategy=strategy,
        )
        return _albums.validate_python(items)

    # -------------------------------------------------------------------
    # Aggregates
    # -------------------------------------------------------------------

    async def artist_detail(self, session_key: str, artist_id: str) -> ArtistDetail:
        """Artist, top tracks, albums and related artists, fetched concurrently.

        If any of the four calls fails, the others are cancelled and the first
        failure is raised as is.
        """
        token = await self._access_token(session_key)

        try:
            async with asyncio.TaskGroup() as group:
                artist = group.create_task(self._client.get_artist(token, artist_id))
                top_tracks = group.create_task(self._client.get_artist_top_tracks(token, artist_id))
                albums = group.create_task(self._artist_albums(token, artist_id))
                related = group.create_task(self._client.get_related_artists(token, artist_id))
        except ExceptionGroup as failures:
            raise failures.exceptions[0] from None

        return ArtistDetail(
            artist=SpotifyArtistFull.model_validate(artist.result()),
            top_tracks=_tracks.validate_python(_field(top_tracks.result(), "tracks")),
            albums=albums.result(),
            related_artists=_artists.validate_python(_field(related.result(), "artists")),
        )


def _field(body: Any, key: str) -> list[Any]:
    if isinstance(body, dict):
        value = body.get(key)
        if isinstance(value, list):
            return value
    return []
