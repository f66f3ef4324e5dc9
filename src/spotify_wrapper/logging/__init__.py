"""Structured logging: JSON formatter and setup."""

from spotify_wrapper.logging.formatter import JSONLogFormatter
from spotify_wrapper.logging.setup import configure_logging

__all__ = ["JSONLogFormatter", "configure_logging"]
