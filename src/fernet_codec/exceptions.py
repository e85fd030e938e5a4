"""Error taxonomy for key construction, token parsing and token validation."""

import enum


class ErrorKind(enum.StrEnum):
    """Reason codes attached to every error raised by this package."""

    # Construction
    INVALID_KEY_LENGTH = "invalid_key_length"
    INVALID_KEY_ENCODING = "invalid_key_encoding"
    MALFORMED_TOKEN = "malformed_token"
    UNSUPPORTED_VERSION = "unsupported_version"

    # Validation
    INVALID_VERSION = "invalid_version"
    DECRYPTION_FAILED = "decryption_failed"
    INVALID_PADDING = "invalid_padding"
    EXPIRED = "expired"
    NOT_YET_VALID = "not_yet_valid"
    INVALID_SIGNATURE = "invalid_signature"
    NO_MATCHING_KEY = "no_matching_key"
    PAYLOAD_REJECTED = "payload_rejected"


# Kinds that share a single external message.
OPAQUE_KINDS = frozenset(
    {
        ErrorKind.DECRYPTION_FAILED,
        ErrorKind.INVALID_PADDING,
        ErrorKind.INVALID_SIGNATURE,
    }
)

_DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.INVALID_KEY_LENGTH: "Signing and encryption keys must be 128 bits",
    ErrorKind.INVALID_KEY_ENCODING: "Key must be 32 bytes of base64url-encoded data",
    ErrorKind.MALFORMED_TOKEN: "Malformed token",
    ErrorKind.UNSUPPORTED_VERSION: "Unsupported token version",
    ErrorKind.INVALID_VERSION: "Invalid token version",
    ErrorKind.EXPIRED: "Token has expired",
    ErrorKind.NOT_YET_VALID: "Token timestamp is too far in the future",
    ErrorKind.NO_MATCHING_KEY: "No candidate key could validate the token",
    ErrorKind.PAYLOAD_REJECTED: "Token payload was rejected",
}


class FernetError(Exception):
    """Base exception for all Fernet errors.

    ``kind`` is the machine-readable reason code; ``detail`` is the
    human-readable message.
    """

    def __init__(self, kind: ErrorKind, detail: str | None = None) -> None:
        self.kind = kind
        self.detail = detail or _DEFAULT_MESSAGES.get(kind, "Invalid token")
        super().__init__(self.detail)


class InvalidKeyError(FernetError):
    """A shared secret key could not be constructed."""


class MalformedTokenError(FernetError):
    """Token bytes do not follow the wire format."""


class TokenValidationError(FernetError):
    """A well-formed token was rejected during validation.

    Decryption, padding and signature failures share one message; only
    ``kind`` tells them apart.
    """

    def __init__(self, kind: ErrorKind, detail: str | None = None) -> None:
        if kind in OPAQUE_KINDS:
            detail = "Invalid token"
        super().__init__(kind, detail)


class TokenExpiredError(TokenValidationError):
    """Token timestamp is earlier than the earliest acceptable timestamp."""

    def __init__(self, timestamp: int, earliest: int) -> None:
        self.timestamp = timestamp
        self.earliest = earliest
        super().__init__(ErrorKind.EXPIRED)


class TokenNotYetValidError(TokenValidationError):
    """Token timestamp is later than the latest acceptable timestamp."""

    def __init__(self, timestamp: int, latest: int) -> None:
        self.timestamp = timestamp
        self.latest = latest
        super().__init__(ErrorKind.NOT_YET_VALID)


class PayloadRejectedError(TokenValidationError):
    """The validator hook refused an authenticated plaintext."""

    def __init__(self, reason: str = "") -> None:
        self.reason = reason
        message = "Token payload was rejected"
        if reason:
            message += f": {reason}"
        super().__init__(ErrorKind.PAYLOAD_REJECTED, message)
