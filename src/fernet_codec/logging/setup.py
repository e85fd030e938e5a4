"""Structured logging configuration."""

import logging
import sys

from fernet_codec.constants import DEFAULT_SERVICE_NAME
from fernet_codec.logging.formatter import JSONLogFormatter


def configure_logging(service: str = DEFAULT_SERVICE_NAME, level: str | int = logging.INFO) -> None:
    """Set up structured JSON logging on the root logger."""
    root = logging.getLogger()
    root.setLevel(level.upper() if isinstance(level, str) else level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONLogFormatter(service=service))
    root.addHandler(handler)
