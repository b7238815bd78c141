"""Deterministic luck function for procedural world generation.

Every random decision in the world (whether a cell hosts a cache, how many
coins a new cache holds) is derived from a string key through ``luck()``.
The same key always yields the same value, in this process and in any later
one, so the world can be regenerated from coordinates alone and nothing about
it needs to be saved until the player changes it.

Example usage:
    from geocoin.luck import SeededRandom, luck

    if luck("369894,-1220628") < 0.1:
        print("cache here")

    # A differently salted world
    other = SeededRandom(salt="season-2")
    other.value("369894,-1220628")
"""

from __future__ import annotations

import hashlib
from typing import Protocol

# 53 bits fill a float mantissa exactly, so the result is always < 1.0
_MANTISSA_BITS = 53


class RandomSource(Protocol):
    """Anything that maps a string key to a float in [0, 1)."""

    def value(self, key: str) -> float:
        """Return the deterministic value for ``key``."""
        ...


class SeededRandom:
    """Stable string hash projected into [0, 1).

    Uses SHA-256 rather than the built-in ``hash()``, which is randomized per
    process and would move every cache on restart.

    Attributes:
        salt: Prefix mixed into every key before hashing.
    """

    def __init__(self, salt: str = "") -> None:
        """Initialize with an optional salt."""
        self.salt = salt

    def value(self, key: str) -> float:
        """Return the deterministic value for ``key`` in [0, 1)."""
        digest = hashlib.sha256(f"{self.salt}{key}".encode()).digest()
        bits = int.from_bytes(digest[:8], "big") >> (64 - _MANTISSA_BITS)
        return bits / (1 << _MANTISSA_BITS)

    def __call__(self, key: str) -> float:
        """Alias for value() so an instance can be used as a plain function."""
        return self.value(key)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"SeededRandom(salt={self.salt!r})"


_default = SeededRandom()


def luck(key: str) -> float:
    """Return the unsalted deterministic value for ``key``."""
    return _default.value(key)
