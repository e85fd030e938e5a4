"""High-level codec: issue and redeem Fernet token strings."""

import logging
from collections.abc import Sequence
from typing import Any, TypeVar, overload

from fernet_codec.config.codec import DEFAULT_CODEC_CONFIG, CodecConfig
from fernet_codec.config.settings import FernetSettings
from fernet_codec.exceptions import TokenValidationError
from fernet_codec.key import SharedSecretKey
from fernet_codec.rotation import validate_with_key, validate_with_keys
from fernet_codec.sources import Clock, RandomSource, SystemClock, SystemRandomSource
from fernet_codec.token import Token
from fernet_codec.validators import BytesValidator, Validator
from fernet_codec.window import ValidityWindow

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TokenCodec:
    """Generates and validates Fernet tokens with injected randomness and time.

    The codec keeps no mutable state; one instance may serve any number of
    threads. ``keys`` is the default candidate list, highest priority first:
    the first key encrypts new tokens and every key is tried on decryption.
    """

    def __init__(
        self,
        keys: Sequence[SharedSecretKey] = (),
        *,
        config: CodecConfig = DEFAULT_CODEC_CONFIG,
        random_source: RandomSource | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._keys = tuple(keys)
        self._config = config
        self._random = random_source or SystemRandomSource()
        self._clock = clock or SystemClock()

    @classmethod
    def from_settings(cls, settings: FernetSettings, **kwargs: Any) -> "TokenCodec":
        """Build a codec from environment settings.

        Raises:
            InvalidKeyError: If ``FERNET_KEYS`` holds a malformed key.
        """
        return cls(settings.load_keys(), config=settings.codec_config(), **kwargs)

    @property
    def config(self) -> CodecConfig:
        return self._config

    @property
    def keys(self) -> tuple[SharedSecretKey, ...]:
        return self._keys

    def generate_key(self) -> SharedSecretKey:
        """Create a new random key from the codec's random source."""
        return SharedSecretKey.generate(self._random)

    def window(self) -> ValidityWindow:
        """Acceptable timestamps right now: ``[now - ttl, now + max_clock_skew]``."""
        return ValidityWindow.from_clock(self._clock, self._config.ttl_seconds, self._config.max_clock_skew_seconds)

    def generate(self, plaintext: bytes | str, key: SharedSecretKey | None = None) -> Token:
        """Encrypt *plaintext* (UTF-8 encoded if ``str``) into a new token.

        Raises:
            ValueError: If no key is given and the codec has none configured.
        """
        signing_key = key or self._primary_key()
        data = plaintext.encode("utf-8") if isinstance(plaintext, str) else bytes(plaintext)
        token = Token.generate(signing_key, data, random_source=self._random, clock=self._clock)
        logger.debug("Issued token (timestamp=%d, plaintext_bytes=%d)", token.timestamp, len(data))
        return token

    def encrypt(self, plaintext: bytes | str, key: SharedSecretKey | None = None) -> str:
        """Generate a token and return its string form."""
        return self.generate(plaintext, key).serialize(self._config)

    def parse(self, token: str) -> Token:
        """Decode a token string without authenticating it.

        Raises:
            MalformedTokenError: If the string is not a well-formed token.
        """
        return Token.from_string(token, self._config)

    @overload
    def decrypt(
        self,
        token: str | Token,
        keys: SharedSecretKey | Sequence[SharedSecretKey] | None = None,
        validator: None = None,
        window: ValidityWindow | None = None,
    ) -> bytes: ...

    @overload
    def decrypt(
        self,
        token: str | Token,
        keys: SharedSecretKey | Sequence[SharedSecretKey] | None = None,
        validator: Validator[T] = ...,
        window: ValidityWindow | None = None,
    ) -> T: ...

    def decrypt(
        self,
        token: str | Token,
        keys: SharedSecretKey | Sequence[SharedSecretKey] | None = None,
        validator: Validator[Any] | None = None,
        window: ValidityWindow | None = None,
    ) -> Any:
        """Validate *token* and return the validator's result.

        A single :class:`SharedSecretKey` reports the specific reason a token
        failed; a sequence of keys (or the codec's configured keys) reports
        ``NO_MATCHING_KEY`` when none of them validates. *window* defaults to
        :meth:`window`.

        Raises:
            MalformedTokenError: If a token string cannot be parsed.
            TokenValidationError: If the token is rejected.
        """
        parsed = self.parse(token) if isinstance(token, str) else token
        bounds = window or self.window()
        hook: Validator[Any] = validator or BytesValidator()
        try:
            if isinstance(keys, SharedSecretKey):
                return validate_with_key(parsed, keys, hook, bounds.earliest, bounds.latest, config=self._config)
            candidates = self._keys if keys is None else tuple(keys)
            return validate_with_keys(parsed, candidates, hook, bounds.earliest, bounds.latest, config=self._config)
        except TokenValidationError as exc:
            logger.info("Token rejected: %s", exc.kind, extra={"token_kind": str(exc.kind)})
            raise

    def _primary_key(self) -> SharedSecretKey:
        if not self._keys:
            raise ValueError("No key configured for token generation")
        return self._keys[0]
