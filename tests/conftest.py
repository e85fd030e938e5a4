"""Shared fixtures for Fernet tests."""

import pytest

from fernet_codec.key import SharedSecretKey

NOW = 1_700_000_000


class FixedClock:
    """Clock that reports ``current`` until a test moves it."""

    def __init__(self, current: int = NOW) -> None:
        self.current = current

    def now(self) -> int:
        return self.current


class FillRandom:
    """Random source that returns the same byte over and over."""

    def __init__(self, fill: int = 1) -> None:
        self.fill = fill

    def next_bytes(self, n: int) -> bytes:
        return bytes([self.fill]) * n


@pytest.fixture
def clock() -> FixedClock:
    """Deterministic clock pinned at ``NOW``."""
    return FixedClock()


@pytest.fixture
def fill_random() -> FillRandom:
    """Deterministic random source producing ``0x01`` bytes."""
    return FillRandom()


@pytest.fixture
def key() -> SharedSecretKey:
    """A fresh random key."""
    return SharedSecretKey.generate()


@pytest.fixture
def other_key() -> SharedSecretKey:
    """A second, unrelated random key."""
    return SharedSecretKey.generate()
