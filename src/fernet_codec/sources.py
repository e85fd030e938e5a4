"""Injected collaborators: randomness and time.

Neither generation nor validation reads the system clock or the OS entropy
pool directly; both go through these protocols so callers (and tests) can
substitute deterministic implementations.
"""

import secrets
from datetime import UTC, datetime
from typing import Protocol


class RandomSource(Protocol):
    """Source of cryptographically secure random bytes."""

    def next_bytes(self, n: int) -> bytes:
        """Return exactly *n* random bytes."""
        ...


class Clock(Protocol):
    """Source of the current time in whole seconds since the Unix epoch."""

    def now(self) -> int:
        """Return the current time as seconds since the epoch."""
        ...


class SystemRandomSource:
    """Random bytes from the operating system CSPRNG."""

    def next_bytes(self, n: int) -> bytes:
        return secrets.token_bytes(n)


class SystemClock:
    """Wall-clock time in UTC."""

    def now(self) -> int:
        return int(datetime.now(UTC).timestamp())


def draw_bytes(source: RandomSource, n: int) -> bytes:
    """Draw *n* bytes from *source*, rejecting short or long reads."""
    data = bytes(source.next_bytes(n))
    if len(data) != n:
        raise RuntimeError(f"Random source returned {len(data)} bytes, expected {n}")
    return data
