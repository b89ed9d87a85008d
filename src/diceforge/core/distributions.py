"""Query interfaces for probability distributions.

Concrete distributions answer every query in closed form (or a numerical
approximation) consistent with their parameters; nothing is computed here.
"""

from __future__ import annotations


class ContinuousDistribution:
    """A continuous random variable: real support with a density."""

    def variance(self) -> float:
        raise NotImplementedError

    def expectation(self) -> float:
        raise NotImplementedError

    def min_value(self) -> float:
        raise NotImplementedError

    def max_value(self) -> float:
        raise NotImplementedError

    def pdf(self, x: float) -> float:
        raise NotImplementedError

    def cdf(self, x: float) -> float:
        """P(X <= x)."""
        raise NotImplementedError


class DiscreteDistribution:
    """A discrete random variable: integer support with a mass function."""

    def variance(self) -> float:
        raise NotImplementedError

    def expectation(self) -> float:
        raise NotImplementedError

    def min_value(self) -> int:
        raise NotImplementedError

    def max_value(self) -> int:
        raise NotImplementedError

    def pmf(self, x: int) -> float:
        """P(X = x)."""
        raise NotImplementedError

    def cdf(self, x: int) -> float:
        """P(X <= x)."""
        raise NotImplementedError
