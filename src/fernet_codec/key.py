"""Fernet shared secret keys."""

import struct
from collections.abc import Callable
from dataclasses import dataclass

from fernet_codec import primitives
from fernet_codec.constants import (
    ENCRYPTION_KEY_BYTES,
    FERNET_KEY_BYTES,
    INITIALIZATION_VECTOR_BYTES,
    SIGNING_KEY_BYTES,
)
from fernet_codec.encoding import urlsafe_b64decode, urlsafe_b64encode
from fernet_codec.exceptions import ErrorKind, InvalidKeyError
from fernet_codec.sources import RandomSource, SystemRandomSource, draw_bytes

_TIMESTAMP = struct.Struct(">q")


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class SharedSecretKey:
    """A 128-bit signing key paired with a 128-bit encryption key.

    Instances are immutable and safe to share between threads. Python gives
    no control over when the underlying buffers are freed, so key material
    is not zeroed on release.
    """

    signing_key: bytes
    encryption_key: bytes

    def __post_init__(self) -> None:
        for name, value, size in (
            ("signing_key", self.signing_key, SIGNING_KEY_BYTES),
            ("encryption_key", self.encryption_key, ENCRYPTION_KEY_BYTES),
        ):
            if not isinstance(value, bytes | bytearray | memoryview) or len(value) != size:
                raise InvalidKeyError(ErrorKind.INVALID_KEY_LENGTH, f"{name} must be {size * 8} bits")
            object.__setattr__(self, name, bytes(value))

    @classmethod
    def from_string(cls, value: str) -> "SharedSecretKey":
        """Parse a base64url key string (``signing || encryption``).

        Padded and unpadded input are both accepted.

        Raises:
            InvalidKeyError: If the string is not base64url or does not
                decode to exactly 32 bytes.
        """
        try:
            raw = urlsafe_b64decode(value)
        except ValueError as exc:
            raise InvalidKeyError(ErrorKind.INVALID_KEY_ENCODING, f"Key is not valid base64url: {exc}") from exc
        if len(raw) != FERNET_KEY_BYTES:
            raise InvalidKeyError(
                ErrorKind.INVALID_KEY_ENCODING,
                f"Key must decode to {FERNET_KEY_BYTES} bytes, got {len(raw)}",
            )
        return cls(raw[:SIGNING_KEY_BYTES], raw[SIGNING_KEY_BYTES:])

    @classmethod
    def generate(cls, random_source: RandomSource | None = None) -> "SharedSecretKey":
        """Create a key from 16 + 16 bytes drawn from *random_source*."""
        source = random_source or SystemRandomSource()
        signing_key = draw_bytes(source, SIGNING_KEY_BYTES)
        encryption_key = draw_bytes(source, ENCRYPTION_KEY_BYTES)
        return cls(signing_key, encryption_key)

    def compute_signature(self, version: int, timestamp: int, iv: bytes, cipher_text: bytes) -> bytes:
        """HMAC-SHA256 over ``version(1) || timestamp(8, BE) || iv(16) || cipher_text``."""
        if len(iv) != INITIALIZATION_VECTOR_BYTES:
            raise ValueError(f"Initialization vector must be {INITIALIZATION_VECTOR_BYTES} bytes")
        message = bytes((version,)) + _TIMESTAMP.pack(timestamp) + bytes(iv) + bytes(cipher_text)
        return primitives.hmac_sha256(self.signing_key, message)

    def serialize(self, encode: Callable[[bytes], str] = urlsafe_b64encode) -> str:
        """Return the base64url form of ``signing_key || encryption_key``."""
        return encode(self.signing_key + self.encryption_key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SharedSecretKey):
            return NotImplemented
        return primitives.constant_time_equals(
            self.signing_key + self.encryption_key,
            other.signing_key + other.encryption_key,
        )

    def __hash__(self) -> int:
        return hash((self.signing_key, self.encryption_key))

    def __repr__(self) -> str:
        return "SharedSecretKey(<redacted>)"
