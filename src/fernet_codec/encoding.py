"""URL-safe base64 helpers for tokens and keys."""

import base64
import binascii


def urlsafe_b64encode(data: bytes) -> str:
    """Encode *data* as base64url without ``=`` padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def urlsafe_b64decode(value: str | bytes) -> bytes:
    """Decode base64url, accepting input with or without ``=`` padding.

    Raises:
        ValueError: If *value* is not valid base64url.
    """
    if isinstance(value, str):
        try:
            raw = value.encode("ascii")
        except UnicodeEncodeError as exc:
            raise ValueError("Input contains non-ASCII characters") from exc
    else:
        raw = bytes(value)
    raw = raw.strip().rstrip(b"=")
    raw += b"=" * (-len(raw) % 4)
    try:
        return base64.b64decode(raw, altchars=b"-_", validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Invalid base64url data: {exc}") from exc
