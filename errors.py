"""Error kinds and the exceptions that surface them.

An instance that fails (malformed input, division by zero, square root of
a negative number) is not unwound; it is put into an error state holding
one of the ``ErrorKind`` markers below.  ``BigInteger.check()`` converts
that state into the matching exception for callers that want one.

Hierarchy::

    BigIntegerError
    ├── InvalidNumberError        (also ValueError)
    ├── DivisionByZeroError       (also ZeroDivisionError)
    └── NegativeSquareRootError   (also ValueError)
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Error markers.  The value is the text rendered in place of a number."""

    INVALID = "Invalid Number"
    DIVISION_BY_ZERO = "Invalid Number - Division By Zero"
    SQRT_NEGATIVE = "Invalid operation - Square root of a negative number"


class BigIntegerError(Exception):
    """Raised when an errored instance is checked or compared."""

    kind: ErrorKind = ErrorKind.INVALID

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.kind.value)


class InvalidNumberError(BigIntegerError, ValueError):
    kind = ErrorKind.INVALID


class DivisionByZeroError(BigIntegerError, ZeroDivisionError):
    kind = ErrorKind.DIVISION_BY_ZERO


class NegativeSquareRootError(BigIntegerError, ValueError):
    kind = ErrorKind.SQRT_NEGATIVE


_BY_KIND: dict[ErrorKind, type[BigIntegerError]] = {
    cls.kind: cls
    for cls in (InvalidNumberError, DivisionByZeroError, NegativeSquareRootError)
}


def error_for(kind: ErrorKind) -> BigIntegerError:
    """The exception instance matching an error kind."""
    return _BY_KIND[kind]()
