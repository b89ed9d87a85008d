"""Blum-Blum-Shub engine built on BigInt128 squaring and reduction."""

from __future__ import annotations

import math

from ..core.bigint import BigInt128
from ..core.generator import Generator

# Largest primes below 2**32 that are congruent to 3 mod 4.
DEFAULT_P = 4294967291
DEFAULT_Q = 4294967279

BITS_PER_STEP = 8


class BlumBlumShubGenerator(Generator):
    """x <- x**2 mod M with M = p*q; each step contributes its low byte.

    Four squarings make one 32-bit raw value. Not suitable for cryptographic
    use with these parameters.
    """

    bits = 32
    DEFAULT_SEED = 0x2545F491

    def __init__(self, seed: int | None = None, *, p: int = DEFAULT_P, q: int = DEFAULT_Q) -> None:
        if p % 4 != 3 or q % 4 != 3:
            raise ValueError("p and q must both be congruent to 3 mod 4")
        if p == q:
            raise ValueError("p and q must be distinct")
        if p * q >= 1 << 64:
            raise ValueError("Modulus p*q must fit in 64 bits")
        self.modulus = p * q
        super().__init__(seed)

    def _step(self) -> int:
        value = BigInt128.from_int(self._state)
        value.square()
        value.mod(self.modulus)
        self._state = value.to_int()
        return self._state

    def generate(self) -> int:
        out = 0
        for _ in range(self.bits // BITS_PER_STEP):
            out = (out << BITS_PER_STEP) | (self._step() & ((1 << BITS_PER_STEP) - 1))
        return out

    def reseed(self, seed: int) -> None:
        x = seed % self.modulus
        while x < 2 or math.gcd(x, self.modulus) != 1:
            x = (x + 1) % self.modulus
        self._state = x
        self._step()
