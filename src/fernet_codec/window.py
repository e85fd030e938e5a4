"""Acceptable timestamp range for token validation."""

from dataclasses import dataclass

from fernet_codec.constants import (
    DEFAULT_MAX_CLOCK_SKEW_SECONDS,
    DEFAULT_TTL_SECONDS,
    MAX_TIMESTAMP,
    MIN_TIMESTAMP,
)
from fernet_codec.sources import Clock


@dataclass(frozen=True, slots=True)
class ValidityWindow:
    """Inclusive ``[earliest, latest]`` bounds on a token timestamp, in epoch seconds."""

    earliest: int
    latest: int

    @classmethod
    def unbounded(cls) -> "ValidityWindow":
        """Accept any representable timestamp."""
        return cls(MIN_TIMESTAMP, MAX_TIMESTAMP)

    @classmethod
    def around(
        cls,
        now: int,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        max_clock_skew_seconds: int = DEFAULT_MAX_CLOCK_SKEW_SECONDS,
    ) -> "ValidityWindow":
        """Tokens issued at most *ttl_seconds* ago, or up to *max_clock_skew_seconds* ahead."""
        return cls(
            max(MIN_TIMESTAMP, now - ttl_seconds),
            min(MAX_TIMESTAMP, now + max_clock_skew_seconds),
        )

    @classmethod
    def from_clock(
        cls,
        clock: Clock,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        max_clock_skew_seconds: int = DEFAULT_MAX_CLOCK_SKEW_SECONDS,
    ) -> "ValidityWindow":
        return cls.around(clock.now(), ttl_seconds, max_clock_skew_seconds)

    def is_expired(self, timestamp: int) -> bool:
        return timestamp < self.earliest

    def is_premature(self, timestamp: int) -> bool:
        return timestamp > self.latest

    def __contains__(self, timestamp: int) -> bool:
        return self.earliest <= timestamp <= self.latest
