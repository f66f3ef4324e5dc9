"""Client settings loaded from environment variables."""

import functools

from pydantic import field_validator
from pydantic_settings import BaseSettings

from spotify_wrapper.constants import DEFAULT_REQUEST_TIMEOUT, DEFAULT_SCOPES, MAX_PAGE_SIZE


class ClientSettings(BaseSettings):
    """Spotify client configuration."""

    # Spotify app credentials
    SPOTIFY_CLIENT_ID: str = ""
    SPOTIFY_CLIENT_SECRET: str = ""
    SPOTIFY_REDIRECT_URI: str = "http://localhost:3000/callback"
    SPOTIFY_SCOPES: str = DEFAULT_SCOPES  # space-separated

    # Transport
    REQUEST_TIMEOUT_SECONDS: float = DEFAULT_REQUEST_TIMEOUT

    # Pagination
    PAGE_SIZE: int = MAX_PAGE_SIZE

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    model_config = {"env_prefix": ""}

    @field_validator("PAGE_SIZE")
    @classmethod
    def _check_page_size(cls, value: int) -> int:
        if not 1 <= value <= MAX_PAGE_SIZE:
            raise ValueError(f"PAGE_SIZE must be between 1 and {MAX_PAGE_SIZE}")
        return value

    @property
    def scopes(self) -> list[str]:
        return self.SPOTIFY_SCOPES.split()


@functools.lru_cache(maxsize=1)
def get_settings() -> ClientSettings:
    """Return cached client settings singleton."""
    return ClientSettings()
