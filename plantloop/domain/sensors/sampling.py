"""
Sampling Strategies
===================
Pluggable sources of sensor values.

A sensor never talks to hardware or to the global ``random`` module directly;
it asks its sampler for a value inside its current bounds. Simulation uses a
seedable uniform draw, tests force exact values.
"""

from __future__ import annotations

import random
from collections.abc import Iterable
from typing import Protocol


class Sampler(Protocol):
    """Capability that produces one reading for the given bounds."""

    def sample(self, min_value: float, max_value: float) -> float: ...


class UniformRandomSampler:
    """Uniform draw over ``[min_value, max_value]`` from a private RNG."""

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def sample(self, min_value: float, max_value: float) -> float:
        return self._rng.uniform(min_value, max_value)


class FixedSampler:
    """Always returns the same value, regardless of bounds."""

    def __init__(self, value: float) -> None:
        self.value = float(value)

    def sample(self, min_value: float, max_value: float) -> float:
        return self.value


class SequenceSampler:
    """Replays a scripted series of values, holding the last one."""

    def __init__(self, values: Iterable[float]) -> None:
        self._values = [float(v) for v in values]
        if not self._values:
            raise ValueError("SequenceSampler requires at least one value")
        self._index = 0

    def sample(self, min_value: float, max_value: float) -> float:
        value = self._values[min(self._index, len(self._values) - 1)]
        self._index += 1
        return value
