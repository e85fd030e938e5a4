"""Codec and environment configuration."""

from fernet_codec.config.codec import DEFAULT_CODEC_CONFIG, CodecConfig
from fernet_codec.config.settings import FernetSettings, get_settings

__all__ = [
    "DEFAULT_CODEC_CONFIG",
    "CodecConfig",
    "FernetSettings",
    "get_settings",
]
