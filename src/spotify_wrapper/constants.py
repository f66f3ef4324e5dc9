"""Spotify hosts, endpoint paths and pagination/token defaults."""

# Spotify Auth (accounts service)
AUTH_SCHEME = "https"
AUTH_HOST = "accounts.spotify.com"
AUTH_PORT = 443

AUTHORIZE_PATH = "/authorize"
TOKEN_PATH = "/api/token"

# Spotify Web API
API_SCHEME = "https"
API_HOST = "api.spotify.com"
API_PORT = 443

ME_PATH = "/v1/me"
SAVED_TRACKS_PATH = "/v1/me/tracks"
SAVED_ALBUMS_PATH = "/v1/me/albums"
USER_PLAYLISTS_PATH = "/v1/me/playlists"
FOLLOWING_PATH = "/v1/me/following"
PLAYER_PATH = "/v1/me/player"
DEVICES_PATH = "/v1/me/player/devices"
PLAYLIST_TRACKS_PATH = "/v1/playlists/{playlist_id}/tracks"
ARTIST_PATH = "/v1/artists/{artist_id}"
ARTIST_TOP_TRACKS_PATH = "/v1/artists/{artist_id}/top-tracks"
ARTIST_ALBUMS_PATH = "/v1/artists/{artist_id}/albums"
RELATED_ARTISTS_PATH = "/v1/artists/{artist_id}/related-artists"

DEFAULT_PORTS = {"http": 80, "https": 443}

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Pagination
MAX_PAGE_SIZE = 50  # upstream hard ceiling for limit
DEFAULT_PAGE_LIMIT = 20
DEFAULT_PAGE_OFFSET = 0

# Tokens
TOKEN_LIFESPAN_RATIO = 0.9  # fraction of the issuer-declared lifespan we trust

# Transport
DEFAULT_REQUEST_TIMEOUT = 30.0  # seconds

DEFAULT_MARKET = "from_token"

DEFAULT_SCOPES = (
    "user-read-playback-state user-modify-playback-state user-read-currently-playing "
    "app-remote-control streaming playlist-read-private playlist-read-collaborative "
    "playlist-modify-private playlist-modify-public user-follow-modify user-follow-read "
    "user-read-playback-position user-top-read user-read-recently-played "
    "user-library-modify user-library-read user-read-email user-read-private"
)
