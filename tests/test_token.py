"""Tests for Token generation and the wire format."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from fernet_codec.encoding import urlsafe_b64decode, urlsafe_b64encode
from fernet_codec.exceptions import ErrorKind, MalformedTokenError
from fernet_codec.key import SharedSecretKey
from fernet_codec.token import Token
from fernet_codec.window import ValidityWindow

# Published interoperability vector: "hello" at 1985-10-26T01:20:00-07:00, IV 0..15
VECTOR_SECRET = "cw_0x689RpI-jtRR7oE8h_eQsKImvJapLeSbXpwF4e4="
VECTOR_TOKEN = "gAAAAAAdwJ6wAAECAwQFBgcICQoLDA0ODy021cpGVWKZ_eEwCGM4BLLF_5CV9dOPmrhuVUPgJobwOz7JcbmrR64jVmpU4IwqDA=="
VECTOR_TIMESTAMP = 499162800
VECTOR_IV = bytes(range(16))

UNBOUNDED = ValidityWindow.unbounded()


class _ScriptedRandom:
    def __init__(self, *chunks: bytes) -> None:
        self._chunks = list(chunks)

    def next_bytes(self, n: int) -> bytes:
        return self._chunks.pop(0)[:n]


class _Clock:
    def __init__(self, current: int) -> None:
        self.current = current

    def now(self) -> int:
        return self.current


def _token(**overrides: object) -> Token:
    fields: dict[str, object] = {
        "version": 0x80,
        "timestamp": 0,
        "initialization_vector": bytes(16),
        "cipher_text": bytes(16),
        "signature": bytes(32),
    }
    fields.update(overrides)
    return Token(**fields)  # type: ignore[arg-type]


# --- Parsing ---


def test_from_string_vector() -> None:
    """The published vector decodes to version 0x80, its timestamp and IV 0..15."""
    token = Token.from_string(VECTOR_TOKEN)
    assert token.version == 0x80
    assert token.timestamp == VECTOR_TIMESTAMP
    assert token.issued_at == datetime(1985, 10, 26, 1, 20, tzinfo=timezone(timedelta(hours=-7)))
    assert token.initialization_vector == VECTOR_IV
    assert len(token.cipher_text) == 16
    assert len(token.signature) == 32


def test_from_string_accepts_unpadded_input() -> None:
    """The same token parses with or without trailing '='."""
    assert Token.from_string(VECTOR_TOKEN.rstrip("=")) == Token.from_string(VECTOR_TOKEN)


def test_from_string_rejects_invalid_base64() -> None:
    """Characters outside the base64url alphabet are a malformed token."""
    with pytest.raises(MalformedTokenError) as excinfo:
        Token.from_string("gAAAAA$$not-a-token")
    assert excinfo.value.kind == ErrorKind.MALFORMED_TOKEN


@pytest.mark.parametrize("length", [0, 1, 56])
def test_from_bytes_rejects_short_input(length: int) -> None:
    """Fewer than 57 bytes cannot hold a token."""
    with pytest.raises(MalformedTokenError) as excinfo:
        Token.from_bytes(b"\x80" + bytes(max(0, length - 1)) if length else b"")
    assert excinfo.value.kind == ErrorKind.MALFORMED_TOKEN


def test_from_bytes_rejects_empty_cipher_text() -> None:
    """A token must carry at least one cipher block."""
    with pytest.raises(MalformedTokenError) as excinfo:
        Token.from_bytes(b"\x80" + bytes(8 + 16 + 32))
    assert excinfo.value.kind == ErrorKind.MALFORMED_TOKEN


@pytest.mark.parametrize("extra", [1, 15, 17])
def test_from_bytes_rejects_unaligned_cipher_text(extra: int) -> None:
    """Trailing bytes that break block alignment are rejected."""
    data = urlsafe_b64decode(VECTOR_TOKEN) + bytes(extra)
    with pytest.raises(MalformedTokenError) as excinfo:
        Token.from_bytes(data)
    assert excinfo.value.kind == ErrorKind.MALFORMED_TOKEN


@pytest.mark.parametrize("version", [0x00, 0x7F, 0x81, 0xFF])
def test_from_bytes_rejects_unknown_version(version: int) -> None:
    """Only version 0x80 is understood."""
    data = bytearray(urlsafe_b64decode(VECTOR_TOKEN))
    data[0] = version
    with pytest.raises(MalformedTokenError) as excinfo:
        Token.from_bytes(bytes(data))
    assert excinfo.value.kind == ErrorKind.UNSUPPORTED_VERSION


# --- Direct construction ---


def test_construct_rejects_wrong_version() -> None:
    """Direct construction re-validates the version byte."""
    with pytest.raises(MalformedTokenError) as excinfo:
        _token(version=0x81)
    assert excinfo.value.kind == ErrorKind.UNSUPPORTED_VERSION


@pytest.mark.parametrize(
    "overrides",
    [
        {"initialization_vector": bytes(15)},
        {"initialization_vector": bytes(17)},
        {"cipher_text": b""},
        {"cipher_text": bytes(17)},
        {"signature": bytes(31)},
        {"signature": bytes(33)},
        {"timestamp": 2**63},
        {"timestamp": -(2**63) - 1},
    ],
)
def test_construct_rejects_bad_fields(overrides: dict[str, object]) -> None:
    """Every field is size-checked on construction."""
    with pytest.raises(MalformedTokenError) as excinfo:
        _token(**overrides)
    assert excinfo.value.kind == ErrorKind.MALFORMED_TOKEN


def test_construct_accepts_timestamp_extremes() -> None:
    """The full signed 64-bit range round-trips through the wire format."""
    for timestamp in (-(2**63), 2**63 - 1):
        token = _token(timestamp=timestamp)
        assert Token.from_string(token.serialize()).timestamp == timestamp


# --- Serialization ---


def test_serialize_known_layout() -> None:
    """Field layout matches the reference serialisation vector."""
    token = Token(
        0x80,
        0,
        bytes(range(1, 17)),
        bytes(range(1, 17)),
        bytes(range(1, 33)),
    )
    assert token.serialize() == (
        "gAAAAAAAAAAAAQIDBAUGBwgJCgsMDQ4PEAECAwQFBgcICQoLDA0ODxABAgMEBQYHCAkKCwwNDg8QERITFBUWFxgZGhscHR4fIA"
    )


def test_serialize_round_trip_preserves_fields() -> None:
    """Parsing a serialized token yields an equal token."""
    token = Token.from_string(VECTOR_TOKEN)
    encoded = token.serialize()
    assert "=" not in encoded
    assert Token.from_string(encoded) == token
    assert str(token) == encoded
    assert token.to_bytes() == urlsafe_b64decode(VECTOR_TOKEN)


def test_repr_describes_fields() -> None:
    """repr() shows the version, ISO timestamp and base64url fields."""
    token = Token.from_string(VECTOR_TOKEN)
    text = repr(token)
    assert text.startswith("Token(version=0x80, timestamp=1985-10-26T08:20:00+00:00")
    assert f"initialization_vector={urlsafe_b64encode(VECTOR_IV)}" in text


# --- Generation ---


def test_generate_reproduces_vector() -> None:
    """With the vector's clock and IV, generation is byte-exact."""
    key = SharedSecretKey.from_string(VECTOR_SECRET)
    token = Token.generate(
        key,
        b"hello",
        random_source=_ScriptedRandom(VECTOR_IV),
        clock=_Clock(VECTOR_TIMESTAMP),
    )
    assert token.serialize() == VECTOR_TOKEN.rstrip("=")


def test_generate_uses_injected_clock(key: SharedSecretKey, fill_random: object) -> None:
    """The timestamp comes from the clock, the IV from the random source."""
    token = Token.generate(key, b"payload", random_source=fill_random, clock=_Clock(1234))  # type: ignore[arg-type]
    assert token.timestamp == 1234
    assert token.initialization_vector == b"\x01" * 16
    assert token.version == 0x80


def test_generate_defaults_to_system_sources(key: SharedSecretKey) -> None:
    """Without injected collaborators the token is stamped with the current time."""
    before = int(datetime.now(UTC).timestamp())
    token = Token.generate(key, b"payload")
    after = int(datetime.now(UTC).timestamp())
    assert before <= token.timestamp <= after
    assert token.validate(key, before, after) == b"payload"


@pytest.mark.parametrize(("plaintext_length", "blocks"), [(0, 1), (1, 1), (15, 1), (16, 2), (17, 2), (32, 3)])
def test_generate_pads_to_block_boundary(key: SharedSecretKey, plaintext_length: int, blocks: int) -> None:
    """PKCS7 always adds padding, so empty and block-sized plaintexts grow a block."""
    token = Token.generate(key, b"x" * plaintext_length)
    assert len(token.cipher_text) == 16 * blocks


def test_generate_fresh_iv_per_token(key: SharedSecretKey) -> None:
    """Two tokens for the same plaintext differ."""
    a = Token.generate(key, b"same")
    b = Token.generate(key, b"same")
    assert a.initialization_vector != b.initialization_vector
    assert a.cipher_text != b.cipher_text


@pytest.mark.parametrize("plaintext", [b"", b"Hello, world!", b"\x00" * 16, bytes(range(256)), "ünïcødé".encode()])
def test_round_trip(key: SharedSecretKey, plaintext: bytes) -> None:
    """Generated tokens validate back to the exact plaintext, including empty input."""
    token = Token.generate(key, plaintext)
    parsed = Token.from_string(token.serialize())
    assert parsed.validate(key, UNBOUNDED.earliest, UNBOUNDED.latest) == plaintext


def test_token_is_immutable() -> None:
    """Fields cannot be reassigned after construction."""
    token = Token.from_string(VECTOR_TOKEN)
    with pytest.raises(AttributeError):
        token.timestamp = 0  # type: ignore[misc]
