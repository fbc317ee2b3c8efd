"""Dice and coin engine — every random draw in a battle goes through here."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Sequence, TypeVar

T = TypeVar("T")


@dataclass
class DiceResult:
    sides: int
    value: int = 0

    @property
    def label(self) -> str:
        return f"d{self.sides}"


@dataclass
class CoinFlipResult:
    flips: list[int] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.flips)

    @property
    def heads(self) -> int:
        return sum(self.flips)


class Dice:
    """Uniform integer draws behind a single seam.

    Pass a seed for reproducible battles, or subclass and override
    :meth:`randint` to script exact outcomes.
    """

    def __init__(self, seed: int | None = None, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random(seed)

    def randint(self, low: int, high: int) -> int:
        return self._rng.randint(low, high)

    def roll_die(self, sides: int) -> DiceResult:
        """Roll 1dN. A die size of 0 means no die and always yields 0."""
        if sides < 0:
            raise ValueError(f"Invalid die size: {sides}")
        if sides == 0:
            return DiceResult(sides=0, value=0)
        return DiceResult(sides=sides, value=self.randint(1, sides))

    def flip_coins(self, count: int) -> CoinFlipResult:
        """Flip ``count`` fair coins; heads count as 1."""
        return CoinFlipResult(flips=[self.randint(0, 1) for _ in range(max(0, count))])

    def d100(self) -> int:
        return self.randint(1, 100)

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise ValueError("Cannot choose from an empty sequence.")
        return seq[self.randint(0, len(seq) - 1)]
