from __future__ import annotations

import random

from ..core.generator import Generator


class PyRandomGenerator(Generator):
    """Mersenne Twister from the standard library, 64 raw bits per draw."""

    bits = 64
    DEFAULT_SEED = 5489

    def generate(self) -> int:
        return self._rng.getrandbits(self.bits)

    def reseed(self, seed: int) -> None:
        self._rng = random.Random(seed)
