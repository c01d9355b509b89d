"""Shared test fixtures for the dieroll test suite.

scripted_rng
    A factory returning a random.Random whose randint() yields a fixed
    sequence of values. Each value is checked against the requested range
    so a test cannot script an impossible die face.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Iterable

import pytest


class ScriptedRandom(random.Random):
    def __init__(self, values: Iterable[int]) -> None:
        super().__init__(0)
        self._values = iter(values)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        value = next(self._values)
        assert a <= value <= b, f"scripted value {value} outside [{a}, {b}]"
        return value


@pytest.fixture
def scripted_rng() -> Callable[..., ScriptedRandom]:
    def _make(*values: int) -> ScriptedRandom:
        return ScriptedRandom(values)

    return _make
