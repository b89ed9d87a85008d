"""Closed-form uniform distributions used to check generator output."""

from __future__ import annotations

import math

from .core.distributions import ContinuousDistribution, DiscreteDistribution


class UniformContinuous(ContinuousDistribution):
    def __init__(self, low: float = 0.0, high: float = 1.0) -> None:
        if not high > low:
            raise ValueError(f"Uniform support requires low < high, got [{low}, {high}]")
        self.low = float(low)
        self.high = float(high)

    def variance(self) -> float:
        return (self.high - self.low) ** 2 / 12.0

    def expectation(self) -> float:
        return (self.low + self.high) / 2.0

    def min_value(self) -> float:
        return self.low

    def max_value(self) -> float:
        return self.high

    def pdf(self, x: float) -> float:
        if self.low <= x <= self.high:
            return 1.0 / (self.high - self.low)
        return 0.0

    def cdf(self, x: float) -> float:
        if x <= self.low:
            return 0.0
        if x >= self.high:
            return 1.0
        return (x - self.low) / (self.high - self.low)


class UniformDiscrete(DiscreteDistribution):
    """Every integer in [low, high] equally likely."""

    def __init__(self, low: int, high: int) -> None:
        if high < low:
            raise ValueError(f"Uniform support requires low <= high, got [{low}, {high}]")
        self.low = low
        self.high = high

    @property
    def size(self) -> int:
        return self.high - self.low + 1

    def variance(self) -> float:
        return (self.size ** 2 - 1) / 12.0

    def expectation(self) -> float:
        return (self.low + self.high) / 2.0

    def min_value(self) -> int:
        return self.low

    def max_value(self) -> int:
        return self.high

    def pmf(self, x: int) -> float:
        if self.low <= x <= self.high:
            return 1.0 / self.size
        return 0.0

    def cdf(self, x: int) -> float:
        if x < self.low:
            return 0.0
        if x >= self.high:
            return 1.0
        return (math.floor(x) - self.low + 1) / self.size
