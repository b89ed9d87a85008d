"""Sampling kernel: generator contract, distribution contracts, 128-bit arithmetic."""

from .bigint import BigInt128
from .distributions import ContinuousDistribution, DiscreteDistribution
from .generator import Generator

__all__ = ["BigInt128", "ContinuousDistribution", "DiscreteDistribution", "Generator"]
