"""Concrete pseudo-random engines implementing the Generator primitives."""

from .bbs import BlumBlumShubGenerator
from .pcg64 import PCG64Generator
from .pyrandom import PyRandomGenerator

__all__ = ["BlumBlumShubGenerator", "PCG64Generator", "PyRandomGenerator"]
