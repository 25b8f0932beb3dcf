"""Shared fixtures for propcheck tests."""

import pytest

from propcheck.random_source import RandomSource


class ScriptedRandom(RandomSource):
    """Random source replaying a fixed sequence of draws and counting calls."""

    def __init__(self, draws):
        self._draws = list(draws)
        self.calls: list[tuple[int, int]] = []

    def choose(self, low: int, high: int) -> int:
        self.calls.append((low, high))
        if not self._draws:
            return low
        return max(low, min(high, self._draws.pop(0)))


@pytest.fixture
def scripted_random():
    """Factory for ScriptedRandom sources."""
    return ScriptedRandom
