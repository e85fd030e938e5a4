"""Centralized constants for the Fernet token format."""

# --- Wire format ---

TOKEN_VERSION = 0x80

VERSION_BYTES = 1
TIMESTAMP_BYTES = 8
INITIALIZATION_VECTOR_BYTES = 16
SIGNATURE_BYTES = 32
BLOCK_BYTES = 16

# version || timestamp || iv
TOKEN_PREFIX_BYTES = VERSION_BYTES + TIMESTAMP_BYTES + INITIALIZATION_VECTOR_BYTES
# prefix || signature, i.e. everything except the cipher text
TOKEN_STATIC_BYTES = TOKEN_PREFIX_BYTES + SIGNATURE_BYTES

# --- Keys ---

SIGNING_KEY_BYTES = 16
ENCRYPTION_KEY_BYTES = 16
FERNET_KEY_BYTES = SIGNING_KEY_BYTES + ENCRYPTION_KEY_BYTES

# --- Timestamps (signed 64-bit seconds since the epoch) ---

MIN_TIMESTAMP = -(2**63)
MAX_TIMESTAMP = 2**63 - 1

# --- Validation defaults ---

DEFAULT_TTL_SECONDS = 60
DEFAULT_MAX_CLOCK_SKEW_SECONDS = 60

# --- Logging ---

DEFAULT_SERVICE_NAME = "fernet-codec"
