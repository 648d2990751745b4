"""Random-byte providers for IV generation.

The cipher layer only needs a callable ``provider(n) -> bytes`` returning
``n`` cryptographically random bytes or raising. RandomSource is the
default provider; any other callable with the same shape can be injected.
"""

from __future__ import annotations

import secrets
import threading
from typing import Any, Callable

RandomProvider = Callable[[int], bytes]


class RandomSource:
    """Random source with usage tracking.

    Uses the operating system CSPRNG (via ``secrets``) unless a seed is
    given, in which case a deterministic generator is used so tests can
    reproduce IVs. Safe to share between threads.
    """

    def __init__(self, seed: int | None = None):
        """Initialize random source.

        Args:
            seed: Optional seed for deterministic (non-secure) output
        """
        self._seed = seed
        self._lock = threading.Lock()
        self._rng = self._create_rng(seed)

        # Tracking
        self._bytes_used: dict[str, int] = {}
        self._calls = 0
        self.reset()

    def _create_rng(self, seed: int | None) -> Any:
        """Create random number generator.

        Uses secrets for cryptographic randomness when no seed,
        or a simple PRNG for reproducibility when seeded.
        """
        if seed is None:
            return None  # Use secrets
        else:
            return _SeededRNG(seed)

    def reset(self) -> None:
        """Reset usage counters (and rewind a seeded generator)."""
        with self._lock:
            self._bytes_used = {"iv": 0, "other": 0}
            self._calls = 0
            if self._seed is not None:
                self._rng = self._create_rng(self._seed)

    @property
    def seeded(self) -> bool:
        """True when output is deterministic."""
        return self._seed is not None

    @property
    def total_bytes(self) -> int:
        """Total random bytes handed out."""
        return sum(self._bytes_used.values())

    @property
    def calls(self) -> int:
        """Number of requests served."""
        return self._calls

    @property
    def bytes_breakdown(self) -> dict[str, int]:
        """Get bytes breakdown by category."""
        return self._bytes_used.copy()

    def get_bytes(self, count: int, category: str = "other") -> bytes:
        """Get random bytes and track usage.

        Args:
            count: Number of bytes to generate
            category: Category for tracking ("iv" or "other")

        Returns:
            Random bytes
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        if category not in self._bytes_used:
            category = "other"

        with self._lock:
            self._bytes_used[category] += count
            self._calls += 1
            if self._rng is None:
                return secrets.token_bytes(count)
            return self._rng.get_bytes(count)

    def __call__(self, count: int) -> bytes:
        return self.get_bytes(count, category="iv")

    def get_summary(self) -> dict[str, Any]:
        """Get summary of randomness usage."""
        return {
            "seed": self._seed,
            "calls": self._calls,
            "total_bytes": self.total_bytes,
            "bytes_breakdown": self.bytes_breakdown,
        }

    def __repr__(self) -> str:
        return f"RandomSource(seeded={self.seeded}, total_bytes={self.total_bytes})"


class _SeededRNG:
    """Simple seeded PRNG for reproducibility.

    Uses a linear congruential generator (LCG) for simplicity.
    NOT cryptographically secure - for testing/reproducibility only.
    """

    def __init__(self, seed: int):
        self._state = seed & 0xFFFFFFFFFFFFFFFF
        self._a = 6364136223846793005
        self._c = 1442695040888963407
        self._m = 2**64

    def _next(self) -> int:
        """Generate next random value."""
        self._state = (self._a * self._state + self._c) % self._m
        return self._state

    def get_bytes(self, count: int) -> bytes:
        """Generate random bytes."""
        # High byte of each step; the low bits of an LCG have short periods
        return bytes((self._next() >> 56) & 0xFF for _ in range(count))
