"""Radix policy for the limb representation.

A magnitude is stored as a list of limbs, least-significant first, each
limb in ``[0, RADIX)``.  The radix is fixed at import time: the largest
power of two whose square still fits in a signed machine word, so that
``limb * limb + carry`` never leaves native precision.

Layers
------
RadixPolicy     validated radix plus every constant derived from it
for_host()      picks the radix for a given host integer limit
module consts   RADIX, LIMB_BITS, FACTORS, DECIMAL_CHUNK(_DIGITS)
"""
from __future__ import annotations

from dataclasses import dataclass, field

# Largest integer a signed 64-bit word holds exactly.
HOST_WORD_MAX = 2**63 - 1
MIN_RADIX = 16


def _accumulated_factors(radix: int) -> tuple[int, ...]:
    """Successive quotients of ``radix`` by its prime factors.

    For ``2**k`` this is ``(2**(k-1), ..., 2, 1)``.  The factor-multiples
    division subtracts ``divisor * f`` for each entry, largest first.
    """
    out: list[int] = []
    remaining = radix
    prime = 2
    while remaining > 1:
        if remaining % prime == 0:
            remaining //= prime
            out.append(remaining)
        else:
            prime += 1
    return tuple(out)


def _decimal_chunk(radix: int) -> tuple[int, int]:
    """Largest power of ten strictly below ``radix`` and its exponent."""
    chunk, digits = 1, 0
    while chunk * 10 < radix:
        chunk *= 10
        digits += 1
    return chunk, digits


@dataclass(frozen=True)
class RadixPolicy:
    """A validated limb radix and the constants derived from it."""

    radix: int
    host_max: int = HOST_WORD_MAX
    factors: tuple[int, ...] = field(init=False)
    decimal_chunk: int = field(init=False)
    decimal_chunk_digits: int = field(init=False)

    def __post_init__(self) -> None:
        if self.radix & (self.radix - 1):
            raise ValueError(f"radix ({self.radix}) must be a power of two")
        # decimal conversion divides by ten with the single-limb path
        if self.radix < MIN_RADIX:
            raise ValueError(f"radix ({self.radix}) must be >= {MIN_RADIX}")
        if self.radix * self.radix - 1 > self.host_max:
            raise ValueError(
                f"radix ({self.radix}) squared exceeds host limit ({self.host_max})"
            )
        chunk, digits = _decimal_chunk(self.radix)
        # frozen: derived fields are set once, here
        object.__setattr__(self, "factors", _accumulated_factors(self.radix))
        object.__setattr__(self, "decimal_chunk", chunk)
        object.__setattr__(self, "decimal_chunk_digits", digits)

    @property
    def limb_bits(self) -> int:
        return self.radix.bit_length() - 1

    @classmethod
    def for_host(cls, host_max: int = HOST_WORD_MAX) -> RadixPolicy:
        """Largest power-of-two radix with ``radix**2 - 1 <= host_max``."""
        if host_max < MIN_RADIX * MIN_RADIX - 1:
            raise ValueError(f"host limit ({host_max}) too small for any radix")
        bits = (host_max + 1).bit_length() - 1
        return cls(radix=1 << (bits // 2), host_max=host_max)


# ---------------------------------------------------------------------------
# Process-wide policy
# ---------------------------------------------------------------------------

POLICY = RadixPolicy.for_host()

RADIX = POLICY.radix
LIMB_BITS = POLICY.limb_bits
FACTORS = POLICY.factors
DECIMAL_CHUNK = POLICY.decimal_chunk
DECIMAL_CHUNK_DIGITS = POLICY.decimal_chunk_digits
