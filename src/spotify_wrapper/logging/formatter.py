"""JSON log formatter for structured logging output."""

import json
import logging
from datetime import UTC, datetime

from spotify_wrapper.exceptions import SpotifyApiError, SpotifyTransportError


class JSONLogFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects.

    Output format::

        {"timestamp": "...", "level": "WARNING", "service": "spotify-wrapper",
         "logger": "spotify_wrapper.transport", "message": "...",
         "error_kind": "web_api", "http_status": 404, "exception": "..."}

    ``error_kind`` and ``http_status`` appear only when a :class:`SpotifyApiError`
    is logged with ``exc_info``; ``error_cause`` only for a :class:`SpotifyTransportError`.
    """

    def __init__(self, service: str = "spotify-wrapper") -> None:
        super().__init__()
        self._service = service

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "service": self._service,
            "logger": record.name,
            "message": record.getMessage(),
        }

        error = record.exc_info[1] if record.exc_info else None
        if isinstance(error, SpotifyApiError):
            entry["error_kind"] = str(error.kind)
            if error.status is not None:
                entry["http_status"] = error.status
        elif isinstance(error, SpotifyTransportError):
            entry["error_cause"] = type(error.cause).__name__

        if error is not None:
            entry["exception"] = self.formatException(record.exc_info)  # type: ignore[arg-type]

        return json.dumps(entry, default=str)
