"""Generator contract and the sampling operations derived from it."""

from __future__ import annotations

import bisect
import itertools
import logging
import math
from typing import Iterator, List, MutableSequence, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

E = TypeVar("E")


class Generator:
    """Base class for pseudo-random engines.

    Concrete engines set ``bits`` and ``DEFAULT_SEED`` and implement
    :meth:`generate` and :meth:`reseed`; everything else is built on those two.
    """

    bits: int = 64
    DEFAULT_SEED: int = 0x5EED

    def __init__(self, seed: Optional[int] = None) -> None:
        self.reset_seed(self.DEFAULT_SEED if seed is None else seed)

    @property
    def max_value(self) -> int:
        return (1 << self.bits) - 1

    # Primitives

    def generate(self) -> int:
        raise NotImplementedError

    def reseed(self, seed: int) -> None:
        raise NotImplementedError

    # Derived operations

    def next(self) -> int:
        return self.generate()

    def next_unit(self) -> float:
        """Uniform float in [0, 1); exact 1.0 draws are rejected and resampled."""
        denom = float(self.max_value)
        x = self.generate() / denom
        while x == 1.0:
            logger.debug("next_unit: rejected draw at upper bound")
            x = self.generate() / denom
        return x

    def next_in_range(self, low: int, high: int) -> int:
        """Uniform integer over the inclusive range [low, high]."""
        if high < low:
            raise ValueError(f"Empty range: high ({high}) < low ({low})")
        span = high - low + 1
        value = int(math.floor(self.next_unit() * span)) + low
        # u * span can round up to span when span exceeds float precision
        return min(value, high)

    def next_in_crange(self, low: float, high: float) -> float:
        """Uniform float in [low, high); a result equal to ``high`` is resampled."""
        if not (math.isfinite(low) and math.isfinite(high)):
            raise ValueError(f"Range bounds must be finite, got [{low}, {high})")
        if not high > low:
            raise ValueError(f"Range must satisfy low < high, got [{low}, {high})")
        x = self._scale_unit(low, high)
        while x == high:
            logger.debug("next_in_crange: rejected draw at upper bound")
            x = self._scale_unit(low, high)
        return x

    def _scale_unit(self, low: float, high: float) -> float:
        u = self.next_unit()
        width = high - low
        if math.isfinite(width):
            return width * u + low
        # width overflows: scale by halves, result stays within [low, high]
        return 2.0 * (low / 2 + (high / 2 - low / 2) * u)

    def reset_seed(self, seed: int) -> None:
        if seed < 0:
            raise ValueError(f"Seed must be non-negative, got {seed}")
        self.reseed(seed)

    def choice(self, seq: Sequence[E], weights: Optional[Sequence[float]] = None) -> E:
        """Pick one element of ``seq``, uniformly or proportionally to ``weights``."""
        if weights is None:
            if len(seq) == 0:
                raise ValueError("Sequence must have non-zero length")
            return seq[self.next_in_range(0, len(seq) - 1)]
        return self._weighted_choice(seq, weights)

    def _weighted_choice(self, seq: Sequence[E], weights: Sequence[float]) -> E:
        if len(seq) != len(weights):
            raise ValueError("Lengths of sequence and weight sequence must be equal")
        if len(seq) == 0:
            raise ValueError("Sequence must have non-zero length")
        if any(w < 0 for w in weights):
            raise ValueError("Weights must be non-negative")
        cumulative = list(itertools.accumulate(weights))
        total = cumulative[-1]
        if not total > 0:
            raise ValueError("Total weight must be positive")

        u = self.next_unit() * total
        idx = bisect.bisect_right(cumulative, u)
        if idx == len(cumulative):
            # u rounded up to total: take the first element that reaches it
            idx = bisect.bisect_left(cumulative, total)
        return seq[idx]

    def shuffle(self, seq: MutableSequence[E]) -> None:
        """Fisher-Yates style in-place shuffle drawing from a shrinking pool."""
        pool: List[E] = list(seq)
        for i in range(len(pool)):
            j = self.next_in_range(0, len(pool) - 1)
            seq[i] = pool.pop(j)

    def sample(self, seq: Sequence[E], k: int) -> List[E]:
        """Draw ``k`` elements without replacement, in draw order."""
        if not 0 <= k <= len(seq):
            raise ValueError(f"Sample size k={k} outside [0, {len(seq)}]")
        pool: List[E] = list(seq)
        return [pool.pop(self.next_in_range(0, len(pool) - 1)) for _ in range(k)]

    def stream_unit(self) -> Iterator[float]:
        while True:
            yield self.next_unit()
