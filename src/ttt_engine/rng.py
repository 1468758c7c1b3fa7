"""
Random sources for the AI tiers.

Anything with a ``random() -> float`` method in [0, 1) will do. Production code
uses a seeded numpy ``Generator``; tests replay a fixed sequence.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Protocol

import numpy as np


class RandomSource(Protocol):
    def random(self) -> float: ...


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    return np.random.default_rng(seed)


class SequenceRandom:
    """Replays ``values`` in order; raises once they run out."""

    def __init__(self, values: Iterable[float]):
        self.values: List[float] = [float(v) for v in values]
        self.calls = 0

    def random(self) -> float:
        if self.calls >= len(self.values):
            raise IndexError(f"SequenceRandom exhausted after {self.calls} draws")
        v = self.values[self.calls]
        self.calls += 1
        return v


def pick(rng: RandomSource, items: List[int]) -> int:
    return items[int(rng.random() * len(items))]
