"""Structured logging: JSON formatter and setup."""

from fernet_codec.logging.formatter import JSONLogFormatter
from fernet_codec.logging.setup import configure_logging

__all__ = ["JSONLogFormatter", "configure_logging"]
