"""Portable seeded pseudo-random generator.

``random.Random`` is backed by the Mersenne Twister whose seeding and helper
methods are tied to CPython. Layouts must be reproducible from
``(words, config)`` alone, so this subclass swaps in an explicit xorshift64*
core seeded through SplitMix64. All the high-level helpers (``shuffle``,
``choice``, ``randrange``) keep working because they are derived from
``getrandbits``.
"""

from __future__ import annotations

import random
from typing import Optional, Tuple

_MASK64 = (1 << 64) - 1


def splitmix64(value: int) -> int:
    value = (value + 0x9E3779B97F4A7C15) & _MASK64
    value = ((value ^ (value >> 30)) * 0xBF58476D1CE4E5B9) & _MASK64
    value = ((value ^ (value >> 27)) * 0x94D049BB133111EB) & _MASK64
    return value ^ (value >> 31)


class XorShiftRandom(random.Random):
    """``random.Random`` with an xorshift64* engine."""

    VERSION = 1

    def __init__(self, seed: Optional[int] = 0) -> None:
        self._state = 1
        super().__init__(seed)

    def seed(self, a: Optional[int] = 0, version: int = 2) -> None:
        state = splitmix64(int(a or 0) & _MASK64)
        self._state = state or 0x2545F4914F6CDD1D
        self.gauss_next = None

    def _next64(self) -> int:
        x = self._state
        x ^= x >> 12
        x ^= (x << 25) & _MASK64
        x ^= x >> 27
        self._state = x
        return (x * 0x2545F4914F6CDD1D) & _MASK64

    def getrandbits(self, k: int) -> int:
        if k < 0:
            raise ValueError("number of bits must be non-negative")
        result = 0
        produced = 0
        while produced < k:
            result = (result << 32) | (self._next64() >> 32)
            produced += 32
        return result >> (produced - k)

    def random(self) -> float:
        return (self._next64() >> 11) * (1.0 / (1 << 53))

    def getstate(self) -> Tuple[int, int]:
        return (self.VERSION, self._state)

    def setstate(self, state: Tuple[int, int]) -> None:
        version, value = state
        if version != self.VERSION:
            raise ValueError(f"Unsupported XorShiftRandom state version {version}")
        self._state = value


def attempt_rng(base_seed: int, attempt_index: int, stride: int) -> XorShiftRandom:
    return XorShiftRandom(base_seed + attempt_index * stride)
