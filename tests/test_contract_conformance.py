"""Contract conformance tests.

These tests are *driven by* the contracts: they iterate over every
postcondition, error condition, and algebraic property defined in
``contracts.build_contracts`` and verify the implementation satisfies
them.

If a contract changes (e.g. a new postcondition is added), these tests
automatically cover it.  No manual test authoring is required for the
new predicate.
"""
from __future__ import annotations

import itertools

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from contracts import build_contracts
from errors import BigIntegerError
from radix import RADIX

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

CONTRACTS = build_contracts()
values = st.one_of(
    st.integers(min_value=-50, max_value=50),
    st.integers(min_value=-(RADIX**4), max_value=RADIX**4),
)

# Small grid for exhaustive checks: both signs, both sides of a limb boundary.
GRID = [0, 1, -1, 2, -3, 7, -10, RADIX - 1, RADIX, -RADIX - 1, RADIX**2 + 5]


def _run_postconditions(op_name: str, inputs: tuple) -> None:
    op = CONTRACTS.operations[op_name]
    if op.expected_error(*inputs) is not None:
        return
    result = op.apply(*inputs)
    for post in op.postconditions:
        assert post.check(*inputs, result), (
            f"Postcondition '{post.name}' failed: {op_name}{inputs} = {result!r}"
        )


# ===================================================================
# POSTCONDITIONS (property-based)
# ===================================================================

class TestPostconditions:
    """Every postcondition holds for random inputs."""

    @given(a=values, b=values)
    @settings(max_examples=200)
    def test_binary_postconditions(self, a, b):
        for op_name, op in CONTRACTS.operations.items():
            if op.arity == 2:
                _run_postconditions(op_name, (a, b))

    @given(a=values)
    @settings(max_examples=200)
    def test_unary_postconditions(self, a):
        for op_name, op in CONTRACTS.operations.items():
            if op.arity == 1:
                _run_postconditions(op_name, (a,))


# ===================================================================
# ERROR CONDITIONS
# ===================================================================

class TestErrorConditions:
    """Every error condition leaves the matching error state."""

    @pytest.mark.parametrize(
        "op_name",
        [name for name, op in CONTRACTS.operations.items() if op.error_conditions],
    )
    def test_error_conditions_trigger(self, op_name):
        op = CONTRACTS.operations[op_name]
        triggered = 0
        for inputs in itertools.product(GRID, repeat=op.arity):
            kind = op.expected_error(*inputs)
            if kind is None:
                continue
            triggered += 1
            result = op.apply(*inputs)
            assert result.error is kind, f"{op_name}{inputs} -> {result!r}"
            with pytest.raises(BigIntegerError):
                result.check()
        assert triggered > 0

    def test_non_error_inputs_stay_numeric(self):
        for op_name, op in CONTRACTS.operations.items():
            for inputs in itertools.product(GRID, repeat=op.arity):
                if op.expected_error(*inputs) is None:
                    assert not op.apply(*inputs).is_error, f"{op_name}{inputs}"


# ===================================================================
# ALGEBRAIC PROPERTIES (property-based)
# ===================================================================

class TestAlgebraicProperties:
    """Every algebraic property holds for random inputs."""

    @given(a=values)
    @settings(max_examples=200)
    def test_unary_properties(self, a):
        for op_name, prop in CONTRACTS.all_properties:
            if prop.arity == 1:
                assert prop.check(a), f"Property '{prop.name}' failed for {op_name}({a})"

    @given(a=values, b=values)
    @settings(max_examples=200)
    def test_binary_properties(self, a, b):
        for op_name, prop in CONTRACTS.all_properties:
            if prop.arity == 2:
                assert prop.check(a, b), (
                    f"Property '{prop.name}' failed for {op_name}({a}, {b})"
                )

    @given(a=values, b=values, c=values)
    @settings(max_examples=100)
    def test_ternary_properties(self, a, b, c):
        for op_name, prop in CONTRACTS.all_properties:
            if prop.arity == 3:
                assert prop.check(a, b, c), (
                    f"Property '{prop.name}' failed for {op_name}({a}, {b}, {c})"
                )


# ===================================================================
# EXHAUSTIVE VERIFICATION (small grid)
# ===================================================================

class TestExhaustive:
    """Check *every* grid tuple against every postcondition."""

    @pytest.mark.parametrize("op_name", list(CONTRACTS.operations))
    def test_all_tuples(self, op_name):
        op = CONTRACTS.operations[op_name]
        checked = 0
        for inputs in itertools.product(GRID, repeat=op.arity):
            _run_postconditions(op_name, inputs)
            checked += 1
        assert checked == len(GRID) ** op.arity

    def test_postcondition_table(self):
        """Every (operation, postcondition) pair holds on the grid."""
        table = CONTRACTS.all_postconditions
        assert {name for name, _ in table} == set(CONTRACTS.operations)
        for op_name, post in table:
            op = CONTRACTS.operations[op_name]
            for inputs in itertools.product(GRID, repeat=op.arity):
                if op.expected_error(*inputs) is not None:
                    continue
                assert post.check(*inputs, op.apply(*inputs)), (
                    f"Postcondition '{post.name}' failed: {op_name}{inputs}"
                )

    def test_contract_names(self):
        assert set(CONTRACTS.operations) == {
            "add", "subtract", "multiply", "divide", "mod",
            "power", "sqrt", "abs", "compare", "to_decimal_string",
        }
