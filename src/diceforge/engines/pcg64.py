from __future__ import annotations

import numpy as np

from ..core.generator import Generator


class PCG64Generator(Generator):
    """numpy's PCG64 bit generator exposed through its raw 64-bit output."""

    bits = 64
    DEFAULT_SEED = 0xCAFEF00DD15EA5E5

    def generate(self) -> int:
        return int(self._bitgen.random_raw())

    def reseed(self, seed: int) -> None:
        self._bitgen = np.random.PCG64(seed)
