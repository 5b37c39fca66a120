"""Boundary coercion: native values to a canonical sign and magnitude.

Every value accepted by a ``BigInteger`` operation passes through
``coerce()`` exactly once.  After that the arithmetic only ever sees a
sign and a canonical limb list.

Accepted inputs
---------------
int             digits extracted by repeated division by the radix
str             ``[+-]?[0-9]+``
list / tuple    optional leading ``"+"`` / ``"-"``, then single digits
                given as ints 0-9 or one-character strings

Malformed text or digit sequences do not raise; they coerce to the
``ErrorKind.INVALID`` marker.  Values of any other type raise TypeError.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from errors import ErrorKind
from limbs import Magnitude, add_small_in_place, from_int, is_zero, multiply_small_in_place
from radix import DECIMAL_CHUNK_DIGITS

logger = logging.getLogger(__name__)

_SIGNS = {"+": 1, "-": -1}


class DigitSequence(BaseModel):
    """A signed, non-empty sequence of decimal digits."""

    model_config = ConfigDict(frozen=True)

    sign: Literal[1, -1] = 1
    digits: list[int] = Field(..., min_length=1)

    @model_validator(mode="before")
    @classmethod
    def split_sign(cls, data: Any) -> Any:
        if isinstance(data, str):
            data = list(data)
        if isinstance(data, (list, tuple)):
            items = list(data)
            sign = 1
            if items and isinstance(items[0], str) and items[0] in _SIGNS:
                sign = _SIGNS[items.pop(0)]
            return {"sign": sign, "digits": items}
        return data

    @field_validator("digits", mode="before")
    @classmethod
    def digits_are_decimal(cls, v: Any) -> list[int]:
        out: list[int] = []
        for item in v:
            if isinstance(item, str) and len(item) == 1 and item in "0123456789":
                out.append(ord(item) - ord("0"))
            elif isinstance(item, int) and not isinstance(item, bool) and 0 <= item <= 9:
                out.append(item)
            else:
                raise ValueError(f"not a decimal digit: {item!r}")
        return out

    def magnitude(self) -> Magnitude:
        """Accumulate ``total = total * 10**k + chunk`` over k-digit chunks."""
        mag: Magnitude = [0]
        for start in range(0, len(self.digits), DECIMAL_CHUNK_DIGITS):
            chunk = self.digits[start:start + DECIMAL_CHUNK_DIGITS]
            value = 0
            for digit in chunk:
                value = value * 10 + digit
            multiply_small_in_place(mag, 10 ** len(chunk))
            add_small_in_place(mag, value)
        return mag


@dataclass(frozen=True)
class Coerced:
    """Result of coercing one boundary value."""

    sign: int = 1
    magnitude: Magnitude = field(default_factory=lambda: [0])
    error: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def coerce(value: Any) -> Coerced:
    """Coerce an int, decimal text or digit sequence."""
    if isinstance(value, bool):
        raise TypeError("bool is not a supported operand")

    if isinstance(value, int):
        mag = from_int(value)
        return Coerced(sign=-1 if value < 0 else 1, magnitude=mag)

    if isinstance(value, (str, list, tuple)):
        try:
            seq = DigitSequence.model_validate(value)
        except ValidationError as e:
            logger.debug("rejected %r: %d validation error(s)", value, e.error_count())
            return Coerced(error=ErrorKind.INVALID)
        mag = seq.magnitude()
        return Coerced(sign=1 if is_zero(mag) else seq.sign, magnitude=mag)

    raise TypeError(f"unsupported operand type: {type(value).__name__}")
