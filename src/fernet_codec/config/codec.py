"""Immutable codec configuration."""

from collections.abc import Callable
from dataclasses import dataclass

from fernet_codec.constants import DEFAULT_MAX_CLOCK_SKEW_SECONDS, DEFAULT_TTL_SECONDS
from fernet_codec.encoding import urlsafe_b64decode, urlsafe_b64encode


@dataclass(frozen=True, slots=True)
class CodecConfig:
    """Encoding and validation choices shared by tokens, keys and the codec.

    ``verify_before_decrypt`` checks the signature (and the validity window)
    before any decryption is attempted. Setting it to ``False`` restores the
    reference ordering: decrypt, check freshness, then check the signature.
    """

    encode: Callable[[bytes], str] = urlsafe_b64encode
    decode: Callable[[str], bytes] = urlsafe_b64decode
    ttl_seconds: int = DEFAULT_TTL_SECONDS
    max_clock_skew_seconds: int = DEFAULT_MAX_CLOCK_SKEW_SECONDS
    verify_before_decrypt: bool = True

    def __post_init__(self) -> None:
        if self.ttl_seconds < 0:
            raise ValueError("ttl_seconds must not be negative")
        if self.max_clock_skew_seconds < 0:
            raise ValueError("max_clock_skew_seconds must not be negative")


DEFAULT_CODEC_CONFIG = CodecConfig()
