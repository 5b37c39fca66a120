"""Counterexample search: discovers gaps in implementation or tests.

This module runs independently of the test suite.  It systematically
searches for:

1. Postcondition violations: inputs where BigInteger disagrees with
   Python's ``int``.
2. Error condition violations: inputs that should leave the result in an
   error state but don't (or leave the wrong error kind).
3. Property violations: algebraic relationships that fail for some
   input combination.
4. Kernel disagreements: the estimate-and-correct division and the
   factor-multiples division returning different results.

The inputs are edge values around the limb boundaries plus random
multi-limb values.

Run directly::

    python -m validation.counterexample_search
"""
from __future__ import annotations

import itertools
import random
import sys
from dataclasses import dataclass, field

sys.path.insert(0, ".")

from contracts import ArithmeticContracts, build_contracts
from errors import BigIntegerError
from limbs import divmod_magnitudes, divmod_magnitudes_factored, from_int
from radix import RADIX


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class Counterexample:
    category: str
    operation: str
    inputs: tuple
    expected: str
    actual: str
    description: str


@dataclass
class SearchReport:
    counterexamples: list[Counterexample] = field(default_factory=list)
    checks_run: int = 0

    @property
    def passed(self) -> bool:
        return len(self.counterexamples) == 0

    def summary(self) -> str:
        lines = [
            "Counterexample Search Report",
            "=" * 40,
            f"Total checks: {self.checks_run}",
            f"Counterexamples found: {len(self.counterexamples)}",
        ]
        if self.counterexamples:
            lines.append("")
            for i, cx in enumerate(self.counterexamples, 1):
                lines.append(f"  [{i}] {cx.category} / {cx.operation}")
                lines.append(f"      Inputs:   {cx.inputs}")
                lines.append(f"      Expected: {cx.expected}")
                lines.append(f"      Actual:   {cx.actual}")
                lines.append(f"      {cx.description}")
        else:
            lines.append("\nNo counterexamples found; all checks passed.")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Input domain
# ---------------------------------------------------------------------------

def edge_values() -> list[int]:
    """Values on and around limb boundaries, both signs."""
    magnitudes = {0, 1, 2, 3, 9, 10, 53, 64}
    for k in (1, 2, 3):
        power = RADIX**k
        magnitudes.update({power - 1, power, power + 1, power * 2 - 1})
    magnitudes.update({10**9, 10**18, 10**27 + 7})
    out = sorted(magnitudes)
    return out + [-m for m in out if m]


def random_values(count: int, seed: int = 0) -> list[int]:
    rng = random.Random(seed)
    out = []
    for _ in range(count):
        limbs = rng.randint(1, 6)
        value = rng.getrandbits(limbs * RADIX.bit_length())
        out.append(value if rng.random() < 0.5 else -value)
    return out


# ---------------------------------------------------------------------------
# Search functions
# ---------------------------------------------------------------------------

def _tuples(values: list[int], arity: int):
    return itertools.product(values, repeat=arity)


def search_postcondition_violations(
    contracts: ArithmeticContracts,
    values: list[int],
) -> tuple[list[Counterexample], int]:
    """Verify postconditions for every input tuple."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, op in contracts.operations.items():
        for inputs in _tuples(values, op.arity):
            checks += 1
            if op.expected_error(*inputs) is not None:
                continue
            try:
                result = op.apply(*inputs)
            except Exception as e:
                cxs.append(Counterexample(
                    category="unexpected_error",
                    operation=op_name,
                    inputs=inputs,
                    expected="no error",
                    actual=f"{type(e).__name__}: {e}",
                    description="Operation raised an unexpected exception",
                ))
                continue

            for post in op.postconditions:
                if not post.check(*inputs, result):
                    cxs.append(Counterexample(
                        category="postcondition_violation",
                        operation=op_name,
                        inputs=inputs,
                        expected=post.description,
                        actual=f"result={result}",
                        description=f"Postcondition '{post.name}' violated",
                    ))

    return cxs, checks


def search_error_condition_violations(
    contracts: ArithmeticContracts,
    values: list[int],
) -> tuple[list[Counterexample], int]:
    """Verify every error condition leaves the matching error state."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, op in contracts.operations.items():
        for inputs in _tuples(values, op.arity):
            kind = op.expected_error(*inputs)
            if kind is None:
                continue
            checks += 1
            result = op.apply(*inputs)
            if result.error is not kind:
                cxs.append(Counterexample(
                    category="missing_error" if result.error is None else "wrong_error",
                    operation=op_name,
                    inputs=inputs,
                    expected=kind.name,
                    actual=repr(result),
                    description="Result did not enter the expected error state",
                ))

    return cxs, checks


def search_property_violations(
    contracts: ArithmeticContracts,
    values: list[int],
) -> tuple[list[Counterexample], int]:
    """Check every algebraic property over the input tuples."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, prop in contracts.all_properties:
        # arity-3 properties over the full grid get expensive; thin it out
        domain = values if prop.arity < 3 else values[::3]
        for inputs in _tuples(domain, prop.arity):
            checks += 1
            try:
                ok = prop.check(*inputs)
            except BigIntegerError:
                continue
            if not ok:
                cxs.append(Counterexample(
                    category="property_violation",
                    operation=op_name,
                    inputs=inputs,
                    expected=prop.description,
                    actual="property does not hold",
                    description=f"Property '{prop.name}' violated",
                ))

    return cxs, checks


def search_kernel_disagreements(
    values: list[int],
) -> tuple[list[Counterexample], int]:
    """Both division kernels must agree on every nonzero divisor."""
    cxs: list[Counterexample] = []
    checks = 0

    for a, b in _tuples(values, 2):
        if b == 0:
            continue
        checks += 1
        estimate = divmod_magnitudes(from_int(a), from_int(b))
        factored = divmod_magnitudes_factored(from_int(a), from_int(b))
        if estimate != factored:
            cxs.append(Counterexample(
                category="kernel_disagreement",
                operation="divide",
                inputs=(abs(a), abs(b)),
                expected=f"factored={factored}",
                actual=f"estimate={estimate}",
                description="Division kernels disagree",
            ))

    return cxs, checks


# ---------------------------------------------------------------------------
# Top-level runner
# ---------------------------------------------------------------------------

def run_search(values: list[int]) -> SearchReport:
    """Run complete counterexample search over one input domain."""
    contracts = build_contracts()
    report = SearchReport()

    for search_fn in (
        search_postcondition_violations,
        search_error_condition_violations,
        search_property_violations,
    ):
        cxs, checks = search_fn(contracts, values)
        report.counterexamples.extend(cxs)
        report.checks_run += checks

    cxs, checks = search_kernel_disagreements(values)
    report.counterexamples.extend(cxs)
    report.checks_run += checks
    return report


def main() -> None:
    """Run counterexample search across several input domains."""
    domains = [
        ("edge values", edge_values()),
        ("random multi-limb (seed 0)", random_values(40, seed=0)),
        ("random multi-limb (seed 1)", random_values(40, seed=1)),
    ]

    all_passed = True
    for name, values in domains:
        print(f"\n--- Domain: {name} ({len(values)} values) ---")
        report = run_search(values)
        print(report.summary())
        if not report.passed:
            all_passed = False

    print("\n" + "=" * 40)
    if all_passed:
        print("ALL DOMAINS PASSED")
    else:
        print("SOME DOMAINS HAD COUNTEREXAMPLES")
        sys.exit(1)


if __name__ == "__main__":
    main()
