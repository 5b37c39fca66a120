"""Unsigned magnitude kernels.

A magnitude is a ``list[int]`` of limbs, least-significant first, every
limb in ``[0, RADIX)``.  Canonical form has no most-significant zero limb,
except ``[0]`` for zero.  Every function here takes canonical inputs and
returns canonical outputs.

Functions suffixed ``_in_place`` overwrite their first argument and return
it; every other function leaves its arguments untouched.

Division decision points carry branch ids (see contracts.BRANCHES) so the
white-box tests can trace coverage:

    DIV-ZERO        divisor is zero
    DIV-LESS        dividend < divisor
    DIV-EQUAL       dividend == divisor
    DIV-SMALL       single-limb divisor fast path
    DIV-ESTIMATE    multi-limb estimate-and-correct path
    DIV-TIE         estimate is zero but leading limbs tie
"""
from __future__ import annotations

from typing import Callable

from radix import FACTORS, RADIX

Magnitude = list[int]


# ---------------------------------------------------------------------------
# Canonical form
# ---------------------------------------------------------------------------

def trim(mag: Magnitude) -> Magnitude:
    """Drop most-significant zero limbs in place, keeping at least one."""
    while len(mag) > 1 and mag[-1] == 0:
        mag.pop()
    return mag


def is_zero(mag: Magnitude) -> bool:
    return len(mag) == 1 and mag[0] == 0


def from_int(value: int) -> Magnitude:
    """Limbs of ``abs(value)`` by repeated division by the radix."""
    value = abs(value)
    if value == 0:
        return [0]
    mag: Magnitude = []
    while value > 0:
        value, limb = divmod(value, RADIX)
        mag.append(limb)
    return mag


def to_int(mag: Magnitude) -> int:
    value = 0
    for limb in reversed(mag):
        value = value * RADIX + limb
    return value


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------

def compare_magnitudes(a: Magnitude, b: Magnitude) -> int:
    """-1, 0 or 1 as ``a`` is less than, equal to or greater than ``b``."""
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1
    for index in range(len(a) - 1, -1, -1):
        if a[index] != b[index]:
            return -1 if a[index] < b[index] else 1
    return 0


# ---------------------------------------------------------------------------
# Addition / subtraction
# ---------------------------------------------------------------------------

def add_magnitudes(a: Magnitude, b: Magnitude) -> Magnitude:
    if len(a) < len(b):
        a, b = b, a
    result: Magnitude = []
    carry = 0
    for index, limb in enumerate(a):
        total = limb + (b[index] if index < len(b) else 0) + carry
        carry, limb = divmod(total, RADIX)
        result.append(limb)
    if carry:
        result.append(carry)
    return result


def add_small_in_place(a: Magnitude, value: int) -> Magnitude:
    """``a += value`` for a native ``value >= 0``."""
    index = 0
    carry = value
    while carry:
        if index == len(a):
            a.append(0)
        carry, a[index] = divmod(a[index] + carry, RADIX)
        index += 1
    return a


def subtract_magnitudes_in_place(a: Magnitude, b: Magnitude) -> Magnitude:
    """``a -= b`` with borrow propagation.  Requires ``a >= b``."""
    borrow = 0
    for index in range(len(a)):
        if index >= len(b) and not borrow:
            break
        value = a[index] - (b[index] if index < len(b) else 0) - borrow
        if value < 0:
            value += RADIX
            borrow = 1
        else:
            borrow = 0
        a[index] = value
    return trim(a)


def subtract_magnitudes(a: Magnitude, b: Magnitude) -> Magnitude:
    """``a - b`` as a new magnitude.  Requires ``a >= b``."""
    return subtract_magnitudes_in_place(a[:], b)


# ---------------------------------------------------------------------------
# Multiplication
# ---------------------------------------------------------------------------

def multiply_magnitudes(a: Magnitude, b: Magnitude) -> Magnitude:
    """Schoolbook product, one carry chain per limb of ``a``."""
    if is_zero(a) or is_zero(b):
        return [0]
    result = [0] * (len(a) + len(b))
    for i, x in enumerate(a):
        if x == 0:
            continue
        carry = 0
        for j, y in enumerate(b):
            carry, result[i + j] = divmod(result[i + j] + x * y + carry, RADIX)
        result[i + len(b)] = carry
    return trim(result)


def multiply_small_in_place(a: Magnitude, value: int) -> Magnitude:
    """``a *= value`` for a native ``value >= 0``."""
    carry = 0
    for index, limb in enumerate(a):
        carry, a[index] = divmod(limb * value + carry, RADIX)
    while carry:
        carry, limb = divmod(carry, RADIX)
        a.append(limb)
    return trim(a)


# ---------------------------------------------------------------------------
# Division
# ---------------------------------------------------------------------------

def divmod_small(dividend: Magnitude, divisor: int) -> tuple[Magnitude, int]:
    """Long division by a single limb ``0 < divisor < RADIX``."""
    quotient = [0] * len(dividend)
    rest = 0
    for index in range(len(dividend) - 1, -1, -1):
        quotient[index], rest = divmod(rest * RADIX + dividend[index], divisor)
    return trim(quotient), rest


def _subtract_scaled_in_place(rest: Magnitude, divisor: Magnitude, scale: int) -> None:
    # rest -= divisor * scale; both padded to the same length
    borrow = 0
    for index in range(len(divisor)):
        value = rest[index] - divisor[index] * scale - borrow
        rest[index] = value % RADIX
        borrow = -(value // RADIX)


def _divmod_estimate(dividend: Magnitude, divisor: Magnitude) -> tuple[Magnitude, Magnitude]:
    """Digit-at-a-time division with an under-estimating trial digit.

    ``rest`` is a window of ``len(divisor) + 1`` limbs.  Before each dividend
    limb is shifted in, ``rest < divisor``, so every quotient digit is below
    the radix.  The trial digit divides the two top limbs of ``rest`` by the
    top divisor limb plus one, which never overshoots; the same digit is
    refined until the trial comes out zero.
    """
    n = len(divisor)
    top = divisor[-1]
    padded = divisor + [0]
    rest = dividend[len(dividend) - n + 1:] + [0]
    quotient = [0] * (len(dividend) - n + 1)

    for index in range(len(dividend) - n, -1, -1):
        rest.insert(0, dividend[index])
        digit = 0
        while True:
            approx = (rest[n] * RADIX + rest[n - 1]) // (top + 1)
            if approx == 0 and rest[n] == 0 and rest[n - 1] == top:  # DIV-TIE
                if compare_magnitudes(rest[:n], divisor) >= 0:
                    approx = 1
            if approx == 0:
                break
            digit += approx
            _subtract_scaled_in_place(rest, padded, approx)
        quotient[index] = digit
        rest.pop()

    return trim(quotient), trim(rest)


def _divmod_factored(dividend: Magnitude, divisor: Magnitude) -> tuple[Magnitude, Magnitude]:
    multiples = [multiply_small_in_place(divisor[:], f) for f in FACTORS]
    rest: Magnitude = [0]
    quotient = [0] * len(dividend)
    for index in range(len(dividend) - 1, -1, -1):
        rest.insert(0, dividend[index])
        trim(rest)
        for factor, multiple in zip(FACTORS, multiples):
            while compare_magnitudes(multiple, rest) <= 0:
                quotient[index] += factor
                subtract_magnitudes_in_place(rest, multiple)
    return trim(quotient), rest


def _divmod(
    dividend: Magnitude,
    divisor: Magnitude,
    general: Callable[[Magnitude, Magnitude], tuple[Magnitude, Magnitude]],
) -> tuple[Magnitude, Magnitude]:
    if is_zero(divisor):                                        # DIV-ZERO
        raise ZeroDivisionError("division by zero")

    relation = compare_magnitudes(dividend, divisor)
    if relation < 0:                                            # DIV-LESS
        return [0], dividend[:]
    if relation == 0:                                           # DIV-EQUAL
        return [1], [0]

    if len(divisor) == 1:                                       # DIV-SMALL
        quotient, rest = divmod_small(dividend, divisor[0])
        return quotient, [rest]

    return general(dividend, divisor)                           # DIV-ESTIMATE


def divmod_magnitudes(dividend: Magnitude, divisor: Magnitude) -> tuple[Magnitude, Magnitude]:
    """Quotient and remainder with ``dividend == q * divisor + r``, ``r < divisor``.

    Raises ZeroDivisionError for a zero divisor.
    """
    return _divmod(dividend, divisor, _divmod_estimate)


def divmod_magnitudes_factored(dividend: Magnitude, divisor: Magnitude) -> tuple[Magnitude, Magnitude]:
    """Same contract as divmod_magnitudes, by greedy subtraction of the
    divisor scaled by each accumulated factor of the radix."""
    return _divmod(dividend, divisor, _divmod_factored)
