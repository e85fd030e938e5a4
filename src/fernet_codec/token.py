"""Fernet token model, wire format and validation."""

import struct
from dataclasses import dataclass
from datetime import UTC, datetime

from fernet_codec import primitives
from fernet_codec.config.codec import DEFAULT_CODEC_CONFIG, CodecConfig
from fernet_codec.constants import (
    BLOCK_BYTES,
    INITIALIZATION_VECTOR_BYTES,
    MAX_TIMESTAMP,
    MIN_TIMESTAMP,
    SIGNATURE_BYTES,
    TOKEN_PREFIX_BYTES,
    TOKEN_STATIC_BYTES,
    TOKEN_VERSION,
)
from fernet_codec.exceptions import (
    ErrorKind,
    MalformedTokenError,
    TokenExpiredError,
    TokenNotYetValidError,
    TokenValidationError,
)
from fernet_codec.key import SharedSecretKey
from fernet_codec.sources import Clock, RandomSource, SystemClock, SystemRandomSource, draw_bytes

# version(1) || timestamp(8, big-endian signed) || iv(16)
_PREFIX = struct.Struct(">Bq16s")


@dataclass(frozen=True, slots=True)
class Token:
    """An immutable Fernet token.

    Every constructor path (direct, :meth:`generate`, :meth:`from_bytes`)
    validates field sizes, so an instance always has the shape::

        0x80 || timestamp (8) || iv (16) || cipher_text (16 * k) || signature (32)

    Holding a ``Token`` says nothing about its authenticity; call
    :meth:`validate` with a key for that.
    """

    version: int
    timestamp: int
    initialization_vector: bytes
    cipher_text: bytes
    signature: bytes

    def __post_init__(self) -> None:
        if self.version != TOKEN_VERSION:
            raise MalformedTokenError(
                ErrorKind.UNSUPPORTED_VERSION, f"Unsupported version: {self.version:#x}"
            )
        if not MIN_TIMESTAMP <= self.timestamp <= MAX_TIMESTAMP:
            raise MalformedTokenError(ErrorKind.MALFORMED_TOKEN, "Timestamp must fit in a signed 64-bit integer")
        if len(self.initialization_vector) != INITIALIZATION_VECTOR_BYTES:
            raise MalformedTokenError(ErrorKind.MALFORMED_TOKEN, "Initialization vector must be 128 bits")
        if not self.cipher_text or len(self.cipher_text) % BLOCK_BYTES != 0:
            raise MalformedTokenError(
                ErrorKind.MALFORMED_TOKEN, "Cipher text must be a positive multiple of 128 bits"
            )
        if len(self.signature) != SIGNATURE_BYTES:
            raise MalformedTokenError(ErrorKind.MALFORMED_TOKEN, "Signature must be 256 bits")
        for name in ("initialization_vector", "cipher_text", "signature"):
            object.__setattr__(self, name, bytes(getattr(self, name)))

    # --- Generation ---

    @classmethod
    def generate(
        cls,
        key: SharedSecretKey,
        plaintext: bytes,
        *,
        random_source: RandomSource | None = None,
        clock: Clock | None = None,
    ) -> "Token":
        """Encrypt and sign *plaintext* under *key*.

        A fresh IV is drawn from *random_source* for every call; its
        uniqueness rests entirely on the quality of that source.
        """
        iv = draw_bytes(random_source or SystemRandomSource(), INITIALIZATION_VECTOR_BYTES)
        timestamp = (clock or SystemClock()).now()
        cipher_text = primitives.aes_cbc_encrypt(key.encryption_key, iv, bytes(plaintext))
        signature = key.compute_signature(TOKEN_VERSION, timestamp, iv, cipher_text)
        return cls(TOKEN_VERSION, timestamp, iv, cipher_text, signature)

    # --- Wire format ---

    @classmethod
    def from_bytes(cls, data: bytes) -> "Token":
        """Parse the raw (already base64-decoded) token bytes.

        Raises:
            MalformedTokenError: On short input, a bad version byte, or a
                cipher text that is empty or not block aligned.
        """
        if len(data) < TOKEN_STATIC_BYTES:
            raise MalformedTokenError(ErrorKind.MALFORMED_TOKEN, "Not enough bytes to form a token")
        version = data[0]
        if version != TOKEN_VERSION:
            raise MalformedTokenError(ErrorKind.UNSUPPORTED_VERSION, f"Unsupported version: {version:#x}")
        _, timestamp, iv = _PREFIX.unpack_from(data)
        cipher_text = data[TOKEN_PREFIX_BYTES:-SIGNATURE_BYTES]
        if not cipher_text or len(cipher_text) % BLOCK_BYTES != 0:
            raise MalformedTokenError(
                ErrorKind.MALFORMED_TOKEN, "Cipher text must be a positive multiple of 128 bits"
            )
        signature = data[-SIGNATURE_BYTES:]
        return cls(version, timestamp, iv, cipher_text, signature)

    @classmethod
    def from_string(cls, value: str, config: CodecConfig = DEFAULT_CODEC_CONFIG) -> "Token":
        """Decode a base64url token string; padding is optional.

        Raises:
            MalformedTokenError: If the string is not base64url or the
                decoded bytes are not a well-formed token.
        """
        try:
            data = config.decode(value)
        except ValueError as exc:
            raise MalformedTokenError(ErrorKind.MALFORMED_TOKEN, f"Token is not valid base64url: {exc}") from exc
        return cls.from_bytes(data)

    def to_bytes(self) -> bytes:
        return _PREFIX.pack(self.version, self.timestamp, self.initialization_vector) + self.cipher_text + self.signature

    def serialize(self, config: CodecConfig = DEFAULT_CODEC_CONFIG) -> str:
        """Return the base64url string form, without ``=`` padding."""
        return config.encode(self.to_bytes())

    @property
    def issued_at(self) -> datetime:
        """Token timestamp as an aware UTC datetime."""
        return datetime.fromtimestamp(self.timestamp, tz=UTC)

    # --- Validation ---

    def validate(
        self,
        key: SharedSecretKey,
        earliest: int,
        latest: int,
        *,
        config: CodecConfig = DEFAULT_CODEC_CONFIG,
    ) -> bytes:
        """Authenticate and decrypt this token with *key*.

        *earliest* and *latest* are inclusive bounds on the token timestamp
        in epoch seconds. Every check short-circuits. With
        ``config.verify_before_decrypt`` (the default) the order is version,
        signature, freshness, decrypt, unpad; otherwise it is version,
        decrypt, freshness, signature, unpad.

        Returns:
            The unpadded plaintext.

        Raises:
            TokenValidationError: With ``kind`` set to the failing check.
        """
        self._check_version()
        if config.verify_before_decrypt:
            self._check_signature(key)
            self._check_freshness(earliest, latest)
            padded = self._decrypt(key)
        else:
            padded = self._decrypt(key)
            try:
                primitives.unpad(padded)
            except ValueError as exc:
                raise TokenValidationError(ErrorKind.DECRYPTION_FAILED) from exc
            self._check_freshness(earliest, latest)
            self._check_signature(key)
        return _strip_padding(padded)

    def is_valid(
        self,
        key: SharedSecretKey,
        earliest: int,
        latest: int,
        *,
        config: CodecConfig = DEFAULT_CODEC_CONFIG,
    ) -> bool:
        try:
            self.validate(key, earliest, latest, config=config)
        except TokenValidationError:
            return False
        return True

    def _check_version(self) -> None:
        if self.version != TOKEN_VERSION:
            raise TokenValidationError(ErrorKind.INVALID_VERSION)

    def _check_freshness(self, earliest: int, latest: int) -> None:
        if self.timestamp < earliest:
            raise TokenExpiredError(self.timestamp, earliest)
        if self.timestamp > latest:
            raise TokenNotYetValidError(self.timestamp, latest)

    def _check_signature(self, key: SharedSecretKey) -> None:
        expected = key.compute_signature(self.version, self.timestamp, self.initialization_vector, self.cipher_text)
        if not primitives.constant_time_equals(expected, self.signature):
            raise TokenValidationError(ErrorKind.INVALID_SIGNATURE)

    def _decrypt(self, key: SharedSecretKey) -> bytes:
        try:
            return primitives.aes_cbc_decrypt(key.encryption_key, self.initialization_vector, self.cipher_text)
        except ValueError as exc:
            raise TokenValidationError(ErrorKind.DECRYPTION_FAILED) from exc

    def __str__(self) -> str:
        return self.serialize()

    def __repr__(self) -> str:
        encode = DEFAULT_CODEC_CONFIG.encode
        return (
            f"Token(version={self.version:#x}, timestamp={_format_timestamp(self.timestamp)}, "
            f"initialization_vector={encode(self.initialization_vector)}, "
            f"cipher_text={encode(self.cipher_text)}, signature={encode(self.signature)})"
        )


def _format_timestamp(timestamp: int) -> str:
    try:
        return datetime.fromtimestamp(timestamp, tz=UTC).isoformat()
    except (OverflowError, OSError, ValueError):
        return str(timestamp)


def _strip_padding(padded: bytes) -> bytes:
    try:
        return primitives.unpad(padded)
    except ValueError as exc:
        raise TokenValidationError(ErrorKind.INVALID_PADDING) from exc
