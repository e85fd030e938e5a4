"""Environment-driven settings."""

import functools

from pydantic_settings import BaseSettings

from fernet_codec.config.codec import CodecConfig
from fernet_codec.constants import DEFAULT_MAX_CLOCK_SKEW_SECONDS, DEFAULT_TTL_SECONDS
from fernet_codec.key import SharedSecretKey


class FernetSettings(BaseSettings):
    """Fernet configuration loaded from environment variables."""

    # Comma-separated serialized keys; the first one encrypts, all of them decrypt
    FERNET_KEYS: str = ""

    # Validity window
    FERNET_TTL_SECONDS: int = DEFAULT_TTL_SECONDS
    FERNET_MAX_CLOCK_SKEW_SECONDS: int = DEFAULT_MAX_CLOCK_SKEW_SECONDS

    FERNET_VERIFY_BEFORE_DECRYPT: bool = True

    LOG_LEVEL: str = "INFO"

    model_config = {"env_prefix": ""}

    def load_keys(self) -> list[SharedSecretKey]:
        """Parse ``FERNET_KEYS`` in priority order.

        Raises:
            InvalidKeyError: If any non-blank entry is not a valid key.
        """
        return [SharedSecretKey.from_string(entry.strip()) for entry in self.FERNET_KEYS.split(",") if entry.strip()]

    def codec_config(self) -> CodecConfig:
        return CodecConfig(
            ttl_seconds=self.FERNET_TTL_SECONDS,
            max_clock_skew_seconds=self.FERNET_MAX_CLOCK_SKEW_SECONDS,
            verify_before_decrypt=self.FERNET_VERIFY_BEFORE_DECRYPT,
        )


@functools.lru_cache(maxsize=1)
def get_settings() -> FernetSettings:
    """Return cached settings singleton."""
    return FernetSettings()
