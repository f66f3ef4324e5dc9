"""Pydantic models for Spotify Web API and accounts-service payloads.

Plain data models mirroring Spotify's JSON. Unknown fields are ignored.
"""

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Accounts service
# ---------------------------------------------------------------------------


class SpotifyTokenResponse(BaseModel):
    """Response from POST /api/token (authorization-code and refresh-token grants)."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    refresh_token: str | None = None
    scope: str | None = None


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class SpotifyImage(BaseModel):
    """Image object returned by Spotify (album art, artist photos, etc.)."""

    url: str
    height: int | None = None
    width: int | None = None


class SpotifyProfile(BaseModel):
    """User profile from GET /me."""

    id: str
    display_name: str | None = None
    email: str | None = None
    country: str | None = None
    product: str | None = None
    images: list[SpotifyImage] = Field(default_factory=list)
    external_urls: dict[str, str] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Artists
# ---------------------------------------------------------------------------


class SpotifyArtistSimplified(BaseModel):
    """Simplified artist object (embedded in tracks, albums)."""

    id: str | None = None
    name: str
    uri: str | None = None
    external_urls: dict[str, str] = Field(default_factory=dict)


class SpotifyArtistFull(SpotifyArtistSimplified):
    """Full artist object (GET /artists/{id}, followed and related artists)."""

    genres: list[str] = Field(default_factory=list)
    popularity: int | None = None
    images: list[SpotifyImage] = Field(default_factory=list)
    followers: dict[str, object] | None = None


# ---------------------------------------------------------------------------
# Albums and tracks
# ---------------------------------------------------------------------------


class SpotifyAlbumSimplified(BaseModel):
    id: str | None = None
    name: str
    uri: str | None = None
    album_type: str | None = None
    release_date: str | None = None
    total_tracks: int | None = None
    artists: list[SpotifyArtistSimplified] = Field(default_factory=list)
    images: list[SpotifyImage] = Field(default_factory=list)
    external_urls: dict[str, str] = Field(default_factory=dict)


class SpotifyTrack(BaseModel):
    id: str | None = None
    name: str
    uri: str | None = None
    duration_ms: int | None = None
    explicit: bool | None = None
    popularity: int | None = None
    track_number: int | None = None
    is_local: bool = False
    artists: list[SpotifyArtistSimplified] = Field(default_factory=list)
    album: SpotifyAlbumSimplified | None = None
    external_urls: dict[str, str] = Field(default_factory=dict)


class SpotifySavedTrack(BaseModel):
    """Item of GET /me/tracks: the track plus when it was saved."""

    added_at: str | None = None
    track: SpotifyTrack


# ---------------------------------------------------------------------------
# Playlists
# ---------------------------------------------------------------------------


class SpotifyPlaylistOwner(BaseModel):
    id: str | None = None
    display_name: str | None = None
    uri: str | None = None


class SpotifyPlaylistSimplified(BaseModel):
    """Playlist from list endpoints (``tracks`` carries only href/total)."""

    id: str | None = None
    name: str
    description: str | None = None
    public: bool | None = None
    collaborative: bool | None = None
    owner: SpotifyPlaylistOwner | None = None
    images: list[SpotifyImage] | None = None
    tracks: dict[str, object] | None = None
    snapshot_id: str | None = None
    uri: str | None = None


# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------


class SpotifyDevice(BaseModel):
    """Device from GET /me/player/devices."""

    id: str | None = None
    name: str
    type: str
    is_active: bool = False
    is_private_session: bool = False
    is_restricted: bool = False
    volume_percent: int | None = None


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


class ArtistDetail(BaseModel):
    """An artist together with its top tracks, albums and related artists."""

    artist: SpotifyArtistFull
    top_tracks: list[SpotifyTrack] = Field(default_factory=list)
    albums: list[SpotifyAlbumSimplified] = Field(default_factory=list)
    related_artists: list[SpotifyArtistFull] = Field(default_factory=list)
