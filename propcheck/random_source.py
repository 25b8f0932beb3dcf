"""
Random sources used by generators.

A random source is the only stateful collaborator of the generation layer.
It is created explicitly and threaded through every GenerationContext, so a
seeded source makes a whole run reproducible.
"""

import random
from abc import ABC, abstractmethod


class RandomSource(ABC):
    """
    Abstract base class for random sources.

    Implementations must provide choose(), returning an integer uniformly
    distributed over an inclusive range. Single-threaded use only.
    """

    @abstractmethod
    def choose(self, low: int, high: int) -> int:
        """
        Draw a uniformly distributed integer.

        Args:
            low: Lower bound (inclusive)
            high: Upper bound (inclusive)

        Returns:
            An integer in [low, high]
        """
        pass

    @property
    def seed(self) -> int | None:
        """Seed the source was created with, or None if unknown."""
        return None


class StdRandom(RandomSource):
    """Random source backed by random.Random, optionally seeded."""

    def __init__(self, seed: int | None = None):
        """
        Initialize StdRandom.

        Args:
            seed: Optional seed. None draws a seed from the system.
        """
        self._seed = seed
        self._random = random.Random(seed)

    @property
    def seed(self) -> int | None:
        """Get the seed this source was created with."""
        return self._seed

    def choose(self, low: int, high: int) -> int:
        return self._random.randint(low, high)

    def __repr__(self) -> str:
        return f"StdRandom(seed={self._seed!r})"
