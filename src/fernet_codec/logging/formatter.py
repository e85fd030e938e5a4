"""JSON log formatter for structured logging output."""

import json
import logging
from datetime import UTC, datetime

from fernet_codec.constants import DEFAULT_SERVICE_NAME


class JSONLogFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects.

    Output format::

        {"timestamp": "...", "level": "INFO", "service": "fernet-codec",
         "logger": "fernet_codec.codec", "message": "...", "token_kind": "..."}
    """

    def __init__(self, service: str = DEFAULT_SERVICE_NAME) -> None:
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

        # Rejection reason code, set by TokenCodec.decrypt
        token_kind = getattr(record, "token_kind", None)
        if token_kind:
            entry["token_kind"] = token_kind

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
