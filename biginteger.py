"""Arbitrary-precision signed integers.

``BigInteger`` is a mutable accumulator: every arithmetic method updates
the receiver in place and returns it, so calls chain::

    BigInteger(5).add(97).multiply("5435423").divide(2).power(2)

Operands are coerced once at the boundary (see operands.coerce) and are
never modified.  Failures put the receiver into an error state instead of
raising; once errored, an instance ignores further arithmetic, and an
errored operand passes its error on to the receiver.  ``check()`` turns the
error state into an exception.

Division truncates toward zero.  The remainder of the latest ``divide``
is kept on ``remainder`` and carries the dividend's sign.
"""
from __future__ import annotations

import logging
import math
import random
import string
from typing import Any

from errors import ErrorKind, error_for
from limbs import (
    Magnitude,
    add_magnitudes,
    compare_magnitudes,
    divmod_magnitudes,
    divmod_small,
    is_zero,
    multiply_magnitudes,
    subtract_magnitudes,
    to_int,
)
from operands import coerce
from radix import DECIMAL_CHUNK, DECIMAL_CHUNK_DIGITS, RADIX

logger = logging.getLogger(__name__)

_OPERAND_TYPES = (int, str, list, tuple)


class BigInteger:
    """A sign, a canonical limb magnitude, and the last division remainder."""

    def __init__(self, value: Any = None) -> None:
        self.sign = 1
        self.magnitude: Magnitude = [0]
        self.remainder: BigInteger | None = None
        self.error: ErrorKind | None = None

        if value is None:
            return

        if isinstance(value, BigInteger):
            self.sign = value.sign
            self.magnitude = value.magnitude[:]
            self.error = value.error
            if value.remainder is not None:
                self.remainder = BigInteger(value.remainder)
            return

        coerced = coerce(value)
        if not coerced.ok:
            self._fail(coerced.error, "construct")
            return
        self._set(coerced.sign, coerced.magnitude)

    # -- construction helpers -----------------------------------------------

    @classmethod
    def _from_parts(cls, sign: int, magnitude: Magnitude) -> BigInteger:
        out = cls()
        out._set(sign, magnitude)
        return out

    @classmethod
    def random(cls, digits: int) -> BigInteger:
        """A positive random number with exactly ``digits`` decimal digits."""
        if digits < 1:
            raise ValueError(f"digits must be >= 1, got {digits}")
        text = random.choice("123456789") + "".join(
            random.choices(string.digits, k=digits - 1)
        )
        return cls(text)

    def copy(self) -> BigInteger:
        return BigInteger(self)

    # -- internal state transitions ----------------------------------------

    def _set(self, sign: int, magnitude: Magnitude) -> None:
        # zero is always positive
        self.magnitude = magnitude
        self.sign = 1 if is_zero(magnitude) else sign

    def _fail(self, kind: ErrorKind, operation: str) -> None:
        logger.debug("%s: entering error state %r", operation, kind.value)
        self.error = kind
        self.sign = 1
        self.magnitude = [0]
        self.remainder = None

    def _poisoned(self, other: BigInteger, operation: str) -> bool:
        """True when either side is errored; adopts the operand's error."""
        if self.error is not None:                                  # ERR-RECEIVER
            return True
        if other.error is not None:                                 # ERR-OPERAND
            self._fail(other.error, operation)
            return True
        return False

    @staticmethod
    def _operand(value: Any) -> BigInteger:
        if isinstance(value, BigInteger):
            return value
        return BigInteger(value)

    # -- state --------------------------------------------------------------

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def check(self) -> BigInteger:
        """Return self, or raise the exception matching the error state."""
        if self.error is not None:
            raise error_for(self.error)
        return self

    def is_zero(self) -> bool:
        return self.error is None and is_zero(self.magnitude)

    # -- comparison ---------------------------------------------------------

    def compare(self, other: Any) -> int:
        """Signed three-way comparison: -1, 0 or 1.

        Raises the matching BigIntegerError if either side is errored.
        """
        other = self._operand(other)
        for side in (self, other):
            side.check()
        if self.sign != other.sign:
            return self.sign
        return self.sign * compare_magnitudes(self.magnitude, other.magnitude)

    def equals(self, other: Any) -> bool:
        """Numeric equality; two errored values are equal iff same kind."""
        other = self._operand(other)
        if self.error is not None or other.error is not None:
            return self.error is other.error
        return self.compare(other) == 0

    def less_than(self, other: Any) -> bool:
        return self.compare(other) < 0

    def less_or_equal(self, other: Any) -> bool:
        return self.compare(other) <= 0

    def greater_than(self, other: Any) -> bool:
        return self.compare(other) > 0

    def greater_or_equal(self, other: Any) -> bool:
        return self.compare(other) >= 0

    # -- addition / subtraction --------------------------------------------

    def _accumulate(self, sign: int, magnitude: Magnitude) -> None:
        """Signed addition of ``sign * magnitude`` into the receiver.

        Branches: ADD-SAME-SIGN, ADD-MIXED-SELF, ADD-MIXED-OTHER, ADD-MIXED-TIE
        """
        if self.sign == sign:                                       # ADD-SAME-SIGN
            self.magnitude = add_magnitudes(self.magnitude, magnitude)
            return
        relation = compare_magnitudes(self.magnitude, magnitude)
        if relation == 0:                                           # ADD-MIXED-TIE
            self._set(1, [0])
        elif relation > 0:                                          # ADD-MIXED-SELF
            self._set(self.sign, subtract_magnitudes(self.magnitude, magnitude))
        else:                                                       # ADD-MIXED-OTHER
            self._set(sign, subtract_magnitudes(magnitude, self.magnitude))

    def add(self, other: Any) -> BigInteger:
        other = self._operand(other)
        if not self._poisoned(other, "add"):
            self._accumulate(other.sign, other.magnitude)
        return self

    def subtract(self, other: Any) -> BigInteger:
        other = self._operand(other)
        if not self._poisoned(other, "subtract"):
            self._accumulate(-other.sign, other.magnitude)
        return self

    # -- multiplication -----------------------------------------------------

    def multiply(self, other: Any) -> BigInteger:
        """In-place product.

        When either factor is zero the receiver is reset to zero and a
        *fresh* zero instance is returned, not the receiver.
        """
        other = self._operand(other)
        if self._poisoned(other, "multiply"):
            return self
        if self.is_zero() or other.is_zero():                       # MUL-ZERO
            self._set(1, [0])
            return BigInteger()
        self._set(                                                  # MUL-NORMAL
            self.sign * other.sign,
            multiply_magnitudes(self.magnitude, other.magnitude),
        )
        return self

    # -- division -----------------------------------------------------------

    def divide(self, other: Any) -> BigInteger:
        """In-place quotient, truncated toward zero.

        Afterwards ``remainder`` holds ``self_before - quotient * other``.
        A zero divisor puts the receiver into the DIVISION_BY_ZERO state.
        """
        other = self._operand(other)
        if self._poisoned(other, "divide"):
            return self
        if other.is_zero():                                         # DIV-ZERO
            self._fail(ErrorKind.DIVISION_BY_ZERO, "divide")
            return self

        if len(other.magnitude) > 1:
            logger.debug(
                "divide: %d-limb dividend by %d-limb divisor",
                len(self.magnitude), len(other.magnitude),
            )
        dividend_sign = self.sign
        quotient, rest = divmod_magnitudes(self.magnitude, other.magnitude)
        self.remainder = BigInteger._from_parts(dividend_sign, rest)
        self._set(self.sign * other.sign, quotient)
        return self

    def mod(self, other: Any) -> BigInteger:
        """Divide, then return the remainder (the receiver if that errored)."""
        self.divide(other)
        if self.error is not None:
            return self
        return self.remainder

    # -- power / square root ------------------------------------------------

    def power(self, exponent: int) -> BigInteger:
        """In-place ``self ** exponent`` by square-and-multiply."""
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise ValueError(f"exponent must be an int, got {exponent!r}")
        if exponent < 0:                                            # POW-NEGATIVE
            raise ValueError("negative exponents not supported")
        if self.error is not None:
            return self
        if exponent == 0:                                           # POW-ZERO
            self._set(1, [1])
            return self
        if exponent == 1:                                           # POW-ONE
            return self

        accumulator = BigInteger(1)                                 # POW-LOOP
        base = BigInteger(self)
        while exponent > 0:
            if exponent % 2 == 1:
                accumulator.multiply(base)
                exponent -= 1
            else:
                base.multiply(base)
                exponent //= 2
        self._set(accumulator.sign, accumulator.magnitude)
        return self

    def _sqrt_seed(self) -> Magnitude:
        # R ** (limb-length / 2), rounded up; limb-length from the log of the top limb
        half = (len(self.magnitude) - 1 + math.log(self.magnitude[-1], RADIX)) / 2
        whole = int(half)
        top = math.ceil(RADIX ** (half - whole))
        if top >= RADIX:
            whole, top = whole + 1, 1
        return [0] * whole + [top]

    def sqrt(self) -> BigInteger:
        """In-place integer square root (floor) by Newton's method.

        The first step from the seed lands at or above the root; after that
        every step strictly decreases until the root is reached.
        """
        if self.error is not None:
            return self
        if self.sign < 0:                                           # SQRT-NEGATIVE
            self._fail(ErrorKind.SQRT_NEGATIVE, "sqrt")
            return self
        if self.is_zero():                                          # SQRT-ZERO
            return self

        target = self.magnitude                                     # SQRT-NEWTON

        def step(estimate: Magnitude) -> Magnitude:
            quotient, _ = divmod_magnitudes(target, estimate)
            half, _ = divmod_small(add_magnitudes(estimate, quotient), 2)
            return half

        estimate = step(self._sqrt_seed())
        while True:
            following = step(estimate)
            if compare_magnitudes(following, estimate) >= 0:
                break
            estimate = following
        self._set(1, estimate)
        return self

    # -- sign ---------------------------------------------------------------

    def abs(self) -> BigInteger:
        if self.error is None:
            self.sign = 1
        return self

    # -- rendering ----------------------------------------------------------

    def to_decimal_string(self) -> str:
        """Decimal text, or the error marker text for an errored instance."""
        if self.error is not None:
            return self.error.value
        chunks: list[int] = []
        mag = self.magnitude
        while not is_zero(mag):
            mag, chunk = divmod_small(mag, DECIMAL_CHUNK)
            chunks.append(chunk)
        if not chunks:
            return "0"
        text = str(chunks[-1]) + "".join(
            f"{chunk:0{DECIMAL_CHUNK_DIGITS}d}" for chunk in reversed(chunks[:-1])
        )
        return text if self.sign > 0 else "-" + text

    # -- aliases ------------------------------------------------------------

    plus = add
    minus = subtract
    mult = multiply
    div = divide
    pow = power
    val = to_decimal_string
    lt = less_than
    lte = less_or_equal
    gt = greater_than
    gte = greater_or_equal

    # -- Python protocols ---------------------------------------------------
    # Operators never mutate either side.

    __hash__ = None  # mutable

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (BigInteger, *_OPERAND_TYPES)) or isinstance(other, bool):
            return NotImplemented
        return self.equals(other)

    def __lt__(self, other: Any) -> bool:
        return self.less_than(other)

    def __le__(self, other: Any) -> bool:
        return self.less_or_equal(other)

    def __gt__(self, other: Any) -> bool:
        return self.greater_than(other)

    def __ge__(self, other: Any) -> bool:
        return self.greater_or_equal(other)

    def __add__(self, other: Any) -> BigInteger:
        return BigInteger(self).add(other)

    __radd__ = __add__

    def __sub__(self, other: Any) -> BigInteger:
        return BigInteger(self).subtract(other)

    def __rsub__(self, other: Any) -> BigInteger:
        return BigInteger(other).subtract(self)

    def __mul__(self, other: Any) -> BigInteger:
        return BigInteger(self).multiply(other)

    __rmul__ = __mul__

    def __pow__(self, exponent: int) -> BigInteger:
        return BigInteger(self).power(exponent)

    def __neg__(self) -> BigInteger:
        out = BigInteger(self)
        if out.error is None and not out.is_zero():
            out.sign = -out.sign
        return out

    def __abs__(self) -> BigInteger:
        return BigInteger(self).abs()

    def __bool__(self) -> bool:
        self.check()
        return not self.is_zero()

    def __int__(self) -> int:
        self.check()
        return self.sign * to_int(self.magnitude)

    def __str__(self) -> str:
        return self.to_decimal_string()

    def __repr__(self) -> str:
        if self.error is not None:
            return f"BigInteger(<{self.error.name}>)"
        return f"BigInteger('{self.to_decimal_string()}')"
