"""
Seeded Random Module
====================

Deterministic random stream keyed by a string seed.
"""

import hashlib

import numpy as np


def seed_to_int(seed: str) -> int:
    """Hash a seed string into a 128-bit integer for PCG64"""
    digest = hashlib.sha256(seed.encode('utf-8')).digest()
    return int.from_bytes(digest[:16], 'little')


class SeededRandom:
    """
    Explicit random stream for map generation.

    Every draw made during generation goes through one instance, in a
    fixed call order, so the same seed string always reproduces the same
    map. Nothing here reads the clock or any global state.
    """

    def __init__(self, seed: str):
        self.reseed(seed)

    def reseed(self, seed: str):
        """Reset the stream to the start of the sequence for seed"""
        if not isinstance(seed, str):
            raise TypeError(f"seed must be a string, got {type(seed).__name__}")
        self.seed = seed
        self._rng = np.random.default_rng(seed_to_int(seed))
        self.call_count = 0

    def next(self) -> float:
        """Next float in [0, 1)"""
        self.call_count += 1
        return float(self._rng.random())

    def random_array(self, n: int) -> np.ndarray:
        """n consecutive draws as a float64 array"""
        self.call_count += n
        return self._rng.random(n)

    def randint(self, low: int, high: int) -> int:
        """Integer in [low, high], both inclusive"""
        return low + int(self.next() * (high - low + 1))

    def choice_index(self, n: int) -> int:
        """Index in [0, n)"""
        if n <= 0:
            raise IndexError("Cannot choose from an empty sequence")
        return int(self.next() * n)
