"""Logging configuration for applications embedding the client."""

import logging
import sys

from spotify_wrapper.logging.formatter import JSONLogFormatter
from spotify_wrapper.settings import ClientSettings, get_settings

_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: ClientSettings | None = None, *, service: str = "spotify-wrapper") -> None:
    """Set up logging on the root logger, JSON lines by default."""
    settings = settings or get_settings()
    root = logging.getLogger()
    root.setLevel(settings.LOG_LEVEL.upper())
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    if settings.LOG_JSON:
        handler.setFormatter(JSONLogFormatter(service=service))
    else:
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))
    root.addHandler(handler)
