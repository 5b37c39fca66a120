"""Executable contracts for BigInteger arithmetic.

Each operation is described by:
- postconditions: what the result must satisfy, checked against Python's
  own ``int`` as the oracle
- error conditions: which inputs must leave the result in an error state
- algebraic properties: relationships that must hold for all inputs

The contracts are machine-readable.  The conformance tests and
``validation.counterexample_search`` iterate over them rather than
restating each rule.

Layers
------
OperationContract     per-operation contract (post/error/properties)
BranchSpec            every decision point white-box tests must cover
ArithmeticContracts   the full set, keyed by operation name
build_contracts()     constructs ArithmeticContracts
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from biginteger import BigInteger
from errors import ErrorKind
from radix import RADIX


# ---------------------------------------------------------------------------
# Contract building blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Postcondition:
    name: str
    description: str
    check: Callable[..., bool]      # (*inputs, result) -> bool


@dataclass(frozen=True)
class ErrorCondition:
    name: str
    description: str
    trigger: Callable[..., bool]    # (*inputs) -> bool
    kind: ErrorKind


@dataclass(frozen=True)
class AlgebraicProperty:
    name: str
    description: str
    arity: int          # how many free integers the check needs
    check: Callable[..., bool]


@dataclass(frozen=True)
class OperationContract:
    name: str
    arity: int
    apply: Callable[..., BigInteger]
    postconditions: list[Postcondition]
    error_conditions: list[ErrorCondition]
    properties: list[AlgebraicProperty]

    def expected_error(self, *inputs: int) -> ErrorKind | None:
        for ec in self.error_conditions:
            if ec.trigger(*inputs):
                return ec.kind
        return None


@dataclass(frozen=True)
class BranchSpec:
    """A decision point in the implementation that must be exercised."""

    id: str
    description: str
    condition: str      # human-readable boolean expression
    operation: str      # which operation / kernel this belongs to


@dataclass(frozen=True)
class ArithmeticContracts:
    operations: dict[str, OperationContract]
    branches: list[BranchSpec]

    @property
    def all_properties(self) -> list[tuple[str, AlgebraicProperty]]:
        out: list[tuple[str, AlgebraicProperty]] = []
        for name, op in self.operations.items():
            for prop in op.properties:
                out.append((name, prop))
        return out

    @property
    def all_postconditions(self) -> list[tuple[str, Postcondition]]:
        out: list[tuple[str, Postcondition]] = []
        for name, op in self.operations.items():
            for post in op.postconditions:
                out.append((name, post))
        return out


# ---------------------------------------------------------------------------
# Helpers used inside the predicates
# ---------------------------------------------------------------------------

def truncdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero (not floor division).

    Python's ``//`` rounds toward negative infinity.
    """
    q, r = divmod(a, b)
    if r != 0 and (a < 0) != (b < 0):
        q += 1
    return q


def truncmod(a: int, b: int) -> int:
    """Remainder matching truncdiv: takes the sign of ``a``."""
    return a - truncdiv(a, b) * b


def is_canonical(x: BigInteger) -> bool:
    """Limbs in range, no most-significant zero limb, zero is positive."""
    mag = x.magnitude
    if not mag or any(not 0 <= limb < RADIX for limb in mag):
        return False
    if len(mag) > 1 and mag[-1] == 0:
        return False
    if mag == [0] and x.sign != 1:
        return False
    return x.sign in (1, -1)


def _equals(result: BigInteger, expected: int) -> bool:
    return not result.is_error and int(result) == expected


_CANONICAL = Postcondition(
    "canonical",
    "Result is in canonical form",
    lambda *args: is_canonical(args[-1]),
)


# ---------------------------------------------------------------------------
# Contract builder
# ---------------------------------------------------------------------------

def build_contracts() -> ArithmeticContracts:
    """Construct the full set of arithmetic contracts."""

    # ------------------------------------------------------------------ add
    add = OperationContract(
        name="add",
        arity=2,
        apply=lambda a, b: BigInteger(a).add(b),
        postconditions=[
            _CANONICAL,
            Postcondition(
                "result_correct", "Result equals a + b",
                lambda a, b, result: _equals(result, a + b),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "commutativity", "add(a, b) == add(b, a)", 2,
                lambda a, b: BigInteger(a).add(b).equals(BigInteger(b).add(a)),
            ),
            AlgebraicProperty(
                "associativity", "add(add(a, b), c) == add(a, add(b, c))", 3,
                lambda a, b, c: BigInteger(a).add(b).add(c).equals(
                    BigInteger(a).add(BigInteger(b).add(c))
                ),
            ),
            AlgebraicProperty(
                "identity", "add(a, 0) == a", 1,
                lambda a: BigInteger(a).add(0).equals(a),
            ),
        ],
    )

    # ------------------------------------------------------------- subtract
    subtract = OperationContract(
        name="subtract",
        arity=2,
        apply=lambda a, b: BigInteger(a).subtract(b),
        postconditions=[
            _CANONICAL,
            Postcondition(
                "result_correct", "Result equals a - b",
                lambda a, b, result: _equals(result, a - b),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "self_inverse", "subtract(a, a) == 0", 1,
                lambda a: BigInteger(a).subtract(a).is_zero(),
            ),
            AlgebraicProperty(
                "add_inverse", "subtract(add(a, b), b) == a", 2,
                lambda a, b: BigInteger(a).add(b).subtract(b).equals(a),
            ),
            AlgebraicProperty(
                "anticommutativity", "subtract(a, b) == -subtract(b, a)", 2,
                lambda a, b: BigInteger(a).subtract(b).equals(
                    -BigInteger(b).subtract(a)
                ),
            ),
        ],
    )

    # ------------------------------------------------------------- multiply
    multiply = OperationContract(
        name="multiply",
        arity=2,
        apply=lambda a, b: BigInteger(a).multiply(b),
        postconditions=[
            _CANONICAL,
            Postcondition(
                "result_correct", "Result equals a * b",
                lambda a, b, result: _equals(result, a * b),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "commutativity", "multiply(a, b) == multiply(b, a)", 2,
                lambda a, b: BigInteger(a).multiply(b).equals(
                    BigInteger(b).multiply(a)
                ),
            ),
            AlgebraicProperty(
                "identity", "multiply(a, 1) == a", 1,
                lambda a: BigInteger(a).multiply(1).equals(a),
            ),
            AlgebraicProperty(
                "zero", "multiply(a, 0) == 0", 1,
                lambda a: BigInteger(a).multiply(0).is_zero(),
            ),
            AlgebraicProperty(
                "distributivity", "a * (b + c) == a*b + a*c", 3,
                lambda a, b, c: BigInteger(a).multiply(BigInteger(b).add(c)).equals(
                    BigInteger(a).multiply(b).add(BigInteger(a).multiply(c))
                ),
            ),
        ],
    )

    # --------------------------------------------------------------- divide
    def _division_identity(a: int, b: int) -> bool:
        if b == 0:
            return True
        q = BigInteger(a).divide(b)
        return BigInteger(q).multiply(b).add(q.remainder).equals(a)

    def _remainder_bounded(a: int, b: int) -> bool:
        if b == 0:
            return True
        rest = BigInteger(a).mod(b)
        return BigInteger(rest).abs().less_than(BigInteger(b).abs())

    divide = OperationContract(
        name="divide",
        arity=2,
        apply=lambda a, b: BigInteger(a).divide(b),
        postconditions=[
            _CANONICAL,
            Postcondition(
                "result_correct", "Result equals a / b truncated toward zero",
                lambda a, b, result: _equals(result, truncdiv(a, b)),
            ),
            Postcondition(
                "remainder_correct", "remainder equals a - q*b, sign of a",
                lambda a, b, result: _equals(result.remainder, truncmod(a, b)),
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "division_by_zero", "Divisor is zero",
                lambda a, b: b == 0,
                ErrorKind.DIVISION_BY_ZERO,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "division_identity", "q*b + r == a", 2, _division_identity,
            ),
            AlgebraicProperty(
                "remainder_bounded", "|r| < |b|", 2, _remainder_bounded,
            ),
            AlgebraicProperty(
                "identity", "divide(a, 1) == a", 1,
                lambda a: BigInteger(a).divide(1).equals(a),
            ),
            AlgebraicProperty(
                "self", "divide(a, a) == 1 for a != 0", 1,
                lambda a: a == 0 or BigInteger(a).divide(a).equals(1),
            ),
        ],
    )

    # ------------------------------------------------------------------ mod
    mod = OperationContract(
        name="mod",
        arity=2,
        apply=lambda a, b: BigInteger(a).mod(b),
        postconditions=[
            _CANONICAL,
            Postcondition(
                "result_correct", "Result equals a - truncdiv(a, b) * b",
                lambda a, b, result: _equals(result, truncmod(a, b)),
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "division_by_zero", "Divisor is zero",
                lambda a, b: b == 0,
                ErrorKind.DIVISION_BY_ZERO,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "multiple", "mod(a * b, b) == 0 for b != 0", 2,
                lambda a, b: b == 0 or BigInteger(a).multiply(b).mod(b).is_zero(),
            ),
        ],
    )

    # ---------------------------------------------------------------- power
    # Exponents are folded into [0, 8) so results stay manageable.
    power = OperationContract(
        name="power",
        arity=2,
        apply=lambda a, b: BigInteger(a).power(abs(b) % 8),
        postconditions=[
            _CANONICAL,
            Postcondition(
                "result_correct", "Result equals a ** (|b| mod 8)",
                lambda a, b, result: _equals(result, a ** (abs(b) % 8)),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "exponent_addition", "x**(m+n) == x**m * x**n", 3,
                lambda x, m, n: BigInteger(x).power(abs(m) % 8 + abs(n) % 8).equals(
                    BigInteger(x).power(abs(m) % 8).multiply(
                        BigInteger(x).power(abs(n) % 8)
                    )
                ),
            ),
            AlgebraicProperty(
                "zero_exponent", "power(x, 0) == 1", 1,
                lambda x: BigInteger(x).power(0).equals(1),
            ),
        ],
    )

    # ----------------------------------------------------------------- sqrt
    def _sqrt_bracket(a: int) -> bool:
        n = abs(a)
        r = BigInteger(n).sqrt()
        low = BigInteger(r).multiply(r)
        high = BigInteger(r).add(1).power(2)
        return low.less_or_equal(n) and high.greater_than(n)

    sqrt = OperationContract(
        name="sqrt",
        arity=1,
        apply=lambda a: BigInteger(a).sqrt(),
        postconditions=[
            _CANONICAL,
            Postcondition(
                "result_correct", "Result equals floor(sqrt(a))",
                lambda a, result: _equals(result, math.isqrt(a)),
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "negative", "Input is negative",
                lambda a: a < 0,
                ErrorKind.SQRT_NEGATIVE,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "bracket", "r*r <= |a| < (r+1)*(r+1)", 1, _sqrt_bracket,
            ),
        ],
    )

    # ------------------------------------------------------------------ abs
    abs_ = OperationContract(
        name="abs",
        arity=1,
        apply=lambda a: BigInteger(a).abs(),
        postconditions=[
            _CANONICAL,
            Postcondition(
                "result_correct", "Result equals |a|",
                lambda a, result: _equals(result, abs(a)),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "idempotent", "abs(abs(a)) == abs(a)", 1,
                lambda a: BigInteger(a).abs().abs().equals(abs(a)),
            ),
        ],
    )

    # -------------------------------------------------------------- compare
    compare = OperationContract(
        name="compare",
        arity=2,
        apply=lambda a, b: BigInteger(BigInteger(a).compare(b)),
        postconditions=[
            Postcondition(
                "result_correct", "Result equals sign(a - b)",
                lambda a, b, result: _equals(result, (a > b) - (a < b)),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "antisymmetry", "compare(a, b) == -compare(b, a)", 2,
                lambda a, b: BigInteger(a).compare(b) == -BigInteger(b).compare(a),
            ),
            AlgebraicProperty(
                "reflexivity", "compare(a, a) == 0", 1,
                lambda a: BigInteger(a).compare(a) == 0,
            ),
        ],
    )

    # ------------------------------------------------------- decimal string
    decimal = OperationContract(
        name="to_decimal_string",
        arity=1,
        apply=lambda a: BigInteger(BigInteger(a).to_decimal_string()),
        postconditions=[
            Postcondition(
                "matches_int", "Text equals str(a)",
                lambda a, result: BigInteger(a).to_decimal_string() == str(a),
            ),
            Postcondition(
                "round_trip", "Parsing the text reproduces a",
                lambda a, result: _equals(result, a),
            ),
        ],
        error_conditions=[],
        properties=[],
    )

    # -------------------------------------------------------------- branches
    branches = [
        # Signed add / subtract
        BranchSpec("ADD-SAME-SIGN", "Equal signs: magnitudes added", "self.sign == sign", "add"),
        BranchSpec("ADD-MIXED-SELF", "Receiver magnitude larger, keeps its sign", "|self| > |other|", "add"),
        BranchSpec("ADD-MIXED-OTHER", "Operand magnitude larger, sign taken from it", "|self| < |other|", "add"),
        BranchSpec("ADD-MIXED-TIE", "Equal magnitudes cancel to positive zero", "|self| == |other|", "add"),
        # Multiply
        BranchSpec("MUL-ZERO", "Zero factor short-circuits to a fresh zero", "self == 0 or other == 0", "multiply"),
        BranchSpec("MUL-NORMAL", "Schoolbook convolution", "self != 0 and other != 0", "multiply"),
        # Divide
        BranchSpec("DIV-ZERO", "Division by zero enters error state", "other == 0", "divide"),
        BranchSpec("DIV-LESS", "Quotient zero, remainder is the dividend", "|self| < |other|", "divide"),
        BranchSpec("DIV-EQUAL", "Quotient one, remainder zero", "|self| == |other|", "divide"),
        BranchSpec("DIV-SMALL", "Single-limb divisor fast path", "len(other.magnitude) == 1", "divide"),
        BranchSpec("DIV-ESTIMATE", "Multi-limb estimate-and-correct", "len(other.magnitude) > 1", "divide"),
        BranchSpec("DIV-TIE", "Zero estimate with tied leading limbs", "rest[n] == 0 and rest[n-1] == top", "divide"),
        # Power
        BranchSpec("POW-ZERO", "Exponent zero gives one", "exponent == 0", "power"),
        BranchSpec("POW-ONE", "Exponent one leaves receiver unchanged", "exponent == 1", "power"),
        BranchSpec("POW-LOOP", "Square-and-multiply loop", "exponent > 1", "power"),
        BranchSpec("POW-NEGATIVE", "Negative exponent raises ValueError", "exponent < 0", "power"),
        # Sqrt
        BranchSpec("SQRT-NEGATIVE", "Negative input enters error state", "self < 0", "sqrt"),
        BranchSpec("SQRT-ZERO", "Zero returned without iterating", "self == 0", "sqrt"),
        BranchSpec("SQRT-NEWTON", "Newton iteration", "self > 0", "sqrt"),
        # Error propagation
        BranchSpec("ERR-RECEIVER", "Errored receiver ignores the operation", "self.error is not None", "all"),
        BranchSpec("ERR-OPERAND", "Errored operand passes its error on", "other.error is not None", "all"),
        BranchSpec("ERR-INVALID", "Malformed text or digits enter error state", "not [+-]?[0-9]+", "construct"),
    ]

    return ArithmeticContracts(
        operations={
            op.name: op
            for op in (add, subtract, multiply, divide, mod, power, sqrt, abs_, compare, decimal)
        },
        branches=branches,
    )
