"""Pseudo-random sampling kernel with reference engines and uniformity checks."""

from .core import BigInt128, ContinuousDistribution, DiscreteDistribution, Generator
from .reference import UniformContinuous, UniformDiscrete
from .rng import ENGINES, create_generator
from .version import __version__

__all__ = [
    "BigInt128",
    "ContinuousDistribution",
    "DiscreteDistribution",
    "ENGINES",
    "Generator",
    "UniformContinuous",
    "UniformDiscrete",
    "__version__",
    "create_generator",
]
