"""Fernet tokens: time-stamped, authenticated, URL-safe encrypted strings.

Typical use::

    codec = TokenCodec([SharedSecretKey.from_string(secret)])
    token = codec.encrypt("user:42")
    codec.decrypt(token, validator=StringValidator())
"""

from fernet_codec.codec import TokenCodec
from fernet_codec.config import DEFAULT_CODEC_CONFIG, CodecConfig, FernetSettings, get_settings
from fernet_codec.exceptions import (
    ErrorKind,
    FernetError,
    InvalidKeyError,
    MalformedTokenError,
    PayloadRejectedError,
    TokenExpiredError,
    TokenNotYetValidError,
    TokenValidationError,
)
from fernet_codec.key import SharedSecretKey
from fernet_codec.rotation import validate_with_key, validate_with_keys
from fernet_codec.sources import Clock, RandomSource, SystemClock, SystemRandomSource
from fernet_codec.token import Token
from fernet_codec.validators import (
    BytesValidator,
    ModelValidator,
    PredicateValidator,
    StringValidator,
    Validator,
)
from fernet_codec.window import ValidityWindow

__all__ = [
    "DEFAULT_CODEC_CONFIG",
    "BytesValidator",
    "Clock",
    "CodecConfig",
    "ErrorKind",
    "FernetError",
    "FernetSettings",
    "InvalidKeyError",
    "MalformedTokenError",
    "ModelValidator",
    "PayloadRejectedError",
    "PredicateValidator",
    "RandomSource",
    "SharedSecretKey",
    "StringValidator",
    "SystemClock",
    "SystemRandomSource",
    "Token",
    "TokenCodec",
    "TokenExpiredError",
    "TokenNotYetValidError",
    "TokenValidationError",
    "ValidityWindow",
    "Validator",
    "get_settings",
    "validate_with_key",
    "validate_with_keys",
]
