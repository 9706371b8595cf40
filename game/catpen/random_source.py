"""
Random sources used by the cat random walk, jitter and meow timers.

Anything with a ``uniform(lo, hi)`` method works, so a plain
``random.Random`` can be passed straight in.
"""

from __future__ import annotations
import random
from typing import Iterable, List, Optional, Protocol


class RandomSource(Protocol):
    def uniform(self, lo: float, hi: float) -> float:
        ...


def default_source(seed: Optional[int] = None) -> random.Random:
    """Free-running source, seeded only when a seed is given"""
    return random.Random(seed)


class SequenceSource:
    """
    Replays a fixed cycle of fractions in [0, 1].

    Each call maps the next fraction onto the requested range, so
    ``SequenceSource([0.5])`` always returns the midpoint.
    """

    def __init__(self, fractions: Iterable[float]):
        self.fractions: List[float] = list(fractions)
        if not self.fractions:
            raise ValueError("SequenceSource needs at least one value")
        for f in self.fractions:
            if not 0.0 <= f <= 1.0:
                raise ValueError(f"Fraction out of range [0, 1]: {f}")
        self._i = 0
        self.calls = 0

    def uniform(self, lo: float, hi: float) -> float:
        f = self.fractions[self._i]
        self._i = (self._i + 1) % len(self.fractions)
        self.calls += 1
        return lo + (hi - lo) * f
