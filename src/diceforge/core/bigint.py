from __future__ import annotations

from dataclasses import dataclass
from typing import IO, List, Optional

LIMB_BITS = 32
LIMB_MASK = (1 << LIMB_BITS) - 1
NUM_LIMBS = 4
MAX_MODULUS = 1 << 64


@dataclass
class BigInt128:
    """128-bit unsigned value held as four 32-bit limbs, least significant first.

    ``square`` and ``mod`` mutate the value in place and keep every limb in
    [0, 2**32).
    """

    limbs: List[int]

    def __post_init__(self) -> None:
        self.limbs = list(self.limbs)
        if len(self.limbs) != NUM_LIMBS:
            raise ValueError(f"Expected {NUM_LIMBS} limbs, got {len(self.limbs)}")
        for limb in self.limbs:
            if not 0 <= limb <= LIMB_MASK:
                raise ValueError(f"Limb out of range [0, 2**32): {limb}")

    @classmethod
    def from_int(cls, value: int) -> "BigInt128":
        if not 0 <= value < (1 << (LIMB_BITS * NUM_LIMBS)):
            raise ValueError(f"Value does not fit in 128 bits: {value}")
        return cls([(value >> (LIMB_BITS * i)) & LIMB_MASK for i in range(NUM_LIMBS)])

    def to_int(self) -> int:
        return sum(limb << (LIMB_BITS * i) for i, limb in enumerate(self.limbs))

    def square(self) -> None:
        """Replace the value with its square modulo 2**128."""
        product = [0] * (2 * NUM_LIMBS)
        for i in range(NUM_LIMBS):
            carry = 0
            for j in range(NUM_LIMBS):
                cur = product[i + j] + self.limbs[i] * self.limbs[j] + carry
                product[i + j] = cur & LIMB_MASK
                carry = cur >> LIMB_BITS
            product[i + NUM_LIMBS] = carry
        self.limbs = product[:NUM_LIMBS]

    def mod(self, n: int) -> None:
        """Reduce the value modulo ``n`` (1 <= n < 2**64) in place."""
        if not 1 <= n < MAX_MODULUS:
            raise ValueError(f"Modulus must be in [1, 2**64), got {n}")
        d0, d1, d2, d3 = self.limbs
        if d3 == 0 and d2 == 0 and (d1, d0) < (n >> LIMB_BITS, n & LIMB_MASK):
            return
        r = 0
        for limb in reversed(self.limbs):
            r = ((r << LIMB_BITS) + limb) % n
        self.limbs = [r & LIMB_MASK, r >> LIMB_BITS, 0, 0]

    def render(self) -> str:
        return " ".join(str(limb) for limb in reversed(self.limbs))

    def print(self, file: Optional[IO[str]] = None) -> None:
        print(self.render(), file=file)

    def __str__(self) -> str:
        return self.render()
