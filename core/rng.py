"""core/rng.py — Seedable random source.

Every probabilistic roll (loot buckets, attack procs, freeze procs,
reward bonuses) draws from the ``Rng`` world resource rather than the
``random`` module, so a seed reproduces a whole session::

    world.set_res(Rng(seed=1234))
    rng = world.res(Rng)
    if rng.chance(0.02):
        ...

All helpers are built on ``random()`` so ``SequenceRng`` can script
exact draws for a test or a replay.
"""

from __future__ import annotations
import random
from typing import Sequence, TypeVar

T = TypeVar("T")


class Rng:
    """Uniform draws in [0, 1) plus the integer/choice helpers built on them."""

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self._r = random.Random(seed)

    def random(self) -> float:
        return self._r.random()

    def chance(self, p: float) -> bool:
        """True with probability *p*."""
        return self.random() < p

    def randint(self, lo: int, hi: int) -> int:
        """Uniform integer in [lo, hi] (both inclusive)."""
        span = hi - lo + 1
        return lo + min(span - 1, int(self.random() * span))

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise IndexError("choice from empty sequence")
        return seq[min(len(seq) - 1, int(self.random() * len(seq)))]

    def uniform(self, a: float, b: float) -> float:
        return a + (b - a) * self.random()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seed={self.seed})"


class SequenceRng(Rng):
    """Replays a fixed list of draws, cycling when exhausted.

    Register it under the base type::

        world.set_res(SequenceRng([0.05, 0.0, 0.5]), as_type=Rng)
    """

    def __init__(self, values: Sequence[float]):
        super().__init__(seed=None)
        if not values:
            raise ValueError("SequenceRng needs at least one value")
        self.values = [float(v) for v in values]
        self.draws = 0

    def random(self) -> float:
        v = self.values[self.draws % len(self.values)]
        self.draws += 1
        return v
