"""Key resolution for single keys and ordered candidate key lists."""

import logging
from collections.abc import Iterable
from typing import TypeVar

from fernet_codec.config.codec import DEFAULT_CODEC_CONFIG, CodecConfig
from fernet_codec.exceptions import ErrorKind, TokenValidationError
from fernet_codec.key import SharedSecretKey
from fernet_codec.token import Token
from fernet_codec.validators import Validator, apply_validator

logger = logging.getLogger(__name__)

T = TypeVar("T")


def validate_with_key(
    token: Token,
    key: SharedSecretKey,
    validator: Validator[T],
    earliest: int,
    latest: int,
    *,
    config: CodecConfig = DEFAULT_CODEC_CONFIG,
) -> T:
    """Validate *token* with one key and hand the plaintext to *validator*.

    Raises:
        TokenValidationError: With the specific reason code of the failed check.
    """
    plaintext = token.validate(key, earliest, latest, config=config)
    return apply_validator(validator, plaintext)


def validate_with_keys(
    token: Token,
    keys: Iterable[SharedSecretKey],
    validator: Validator[T],
    earliest: int,
    latest: int,
    *,
    config: CodecConfig = DEFAULT_CODEC_CONFIG,
) -> T:
    """Try each candidate key in order; the first that validates wins.

    The validator runs once, on the plaintext recovered with the winning key.
    Its rejection is final and no further keys are tried.

    Raises:
        TokenValidationError: ``NO_MATCHING_KEY`` if every key fails (no
            per-key detail is exposed), or ``PAYLOAD_REJECTED`` from the
            validator.
    """
    tried = 0
    for key in keys:
        tried += 1
        try:
            plaintext = token.validate(key, earliest, latest, config=config)
        except TokenValidationError:
            continue
        return apply_validator(validator, plaintext)

    logger.debug("Token rejected by all %d candidate keys", tried)
    raise TokenValidationError(ErrorKind.NO_MATCHING_KEY)
