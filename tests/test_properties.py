"""Property-based tests using Hypothesis.

These tests verify algebraic properties that must hold for *all*
integers.  They complement the white-box tests by exploring the input
space broadly rather than targeting specific branches.  Operands are
drawn both from small values and from multi-limb ranges so that carries,
borrows and the multi-limb division path are all reached.
"""
from __future__ import annotations

import math

from hypothesis import HealthCheck, assume, given, settings
from hypothesis import strategies as st

from biginteger import BigInteger
from contracts import is_canonical, truncdiv, truncmod
from radix import RADIX

# ---------------------------------------------------------------------------
# Shared strategies
# ---------------------------------------------------------------------------

small = st.integers(min_value=-1000, max_value=1000)
wide = st.integers(min_value=-(RADIX**5), max_value=RADIX**5)
values = st.one_of(small, wide)
nonzero = values.filter(lambda v: v != 0)
exponents = st.integers(min_value=0, max_value=12)


# ===================================================================
# ROUND TRIP
# ===================================================================

class TestRoundTrip:

    @given(a=values)
    def test_int_to_text(self, a):
        assert BigInteger(a).to_decimal_string() == str(a)

    @given(a=values)
    def test_text_to_value(self, a):
        x = BigInteger(a)
        y = BigInteger(x.to_decimal_string())
        assert y.sign == x.sign
        assert y.magnitude == x.magnitude

    @given(digits=st.lists(st.integers(min_value=0, max_value=9), min_size=1, max_size=60))
    def test_digit_sequence(self, digits):
        expected = int("".join(map(str, digits)))
        assert int(BigInteger(digits)) == expected


# ===================================================================
# ADDITION / SUBTRACTION
# ===================================================================

class TestAdditionProperties:

    @given(a=values, b=values)
    def test_matches_int(self, a, b):
        assert int(BigInteger(a).add(b)) == a + b
        assert int(BigInteger(a).subtract(b)) == a - b

    @given(a=values, b=values)
    def test_commutativity(self, a, b):
        assert BigInteger(a).add(b).equals(BigInteger(b).add(a))

    @given(a=values, b=values, c=values)
    @settings(max_examples=200)
    def test_associativity(self, a, b, c):
        left = BigInteger(a).add(b).add(c)
        right = BigInteger(a).add(BigInteger(b).add(c))
        assert left.equals(right)

    @given(a=values, b=values)
    def test_canonical(self, a, b):
        assert is_canonical(BigInteger(a).add(b))
        assert is_canonical(BigInteger(a).subtract(b))


# ===================================================================
# MULTIPLICATION
# ===================================================================

class TestMultiplicationProperties:

    @given(a=values, b=values)
    def test_matches_int(self, a, b):
        assert int(BigInteger(a).multiply(b)) == a * b

    @given(a=values, b=values)
    def test_commutativity(self, a, b):
        assert BigInteger(a).multiply(b).equals(BigInteger(b).multiply(a))

    @given(a=values, b=values, c=values)
    @settings(max_examples=200)
    def test_distributivity(self, a, b, c):
        left = BigInteger(a).multiply(BigInteger(b).add(c))
        right = BigInteger(a).multiply(b).add(BigInteger(a).multiply(c))
        assert left.equals(right)

    @given(a=values, b=values)
    def test_canonical(self, a, b):
        assert is_canonical(BigInteger(a).multiply(b))


# ===================================================================
# DIVISION
# ===================================================================

class TestDivisionProperties:

    @given(a=values, b=nonzero)
    @settings(max_examples=300)
    def test_matches_truncating_int(self, a, b):
        x = BigInteger(a).divide(b)
        assert int(x) == truncdiv(a, b)
        assert int(x.remainder) == truncmod(a, b)

    @given(a=values, b=nonzero)
    def test_division_identity(self, a, b):
        x = BigInteger(a).divide(b)
        assert int(x) * b + int(x.remainder) == a
        assert abs(int(x.remainder)) < abs(b)

    @given(a=values, b=nonzero)
    def test_canonical(self, a, b):
        x = BigInteger(a).divide(b)
        assert is_canonical(x)
        assert is_canonical(x.remainder)

    @given(a=values, b=nonzero)
    @settings(suppress_health_check=[HealthCheck.filter_too_much])
    def test_mul_div_inverse(self, a, b):
        assert BigInteger(a).multiply(b).divide(b).equals(a)

    @given(a=values)
    def test_division_by_zero(self, a):
        assert BigInteger(a).divide(0).is_error


# ===================================================================
# POWER
# ===================================================================

class TestPowerProperties:

    @given(x=small, e=exponents)
    def test_matches_int(self, x, e):
        assert int(BigInteger(x).power(e)) == x**e

    @given(x=values, m=exponents, n=exponents)
    @settings(max_examples=100)
    def test_exponent_addition(self, x, m, n):
        assume(m + n <= 12)
        left = BigInteger(x).power(m + n)
        right = BigInteger(x).power(m).multiply(BigInteger(x).power(n))
        assert left.equals(right)


# ===================================================================
# SQUARE ROOT
# ===================================================================

class TestSqrtProperties:

    @given(n=st.one_of(st.integers(min_value=0, max_value=10**6),
                       st.integers(min_value=0, max_value=RADIX**8)))
    def test_bracket(self, n):
        r = int(BigInteger(n).sqrt())
        assert r * r <= n < (r + 1) * (r + 1)

    @given(n=st.integers(min_value=0, max_value=RADIX**8))
    def test_matches_isqrt(self, n):
        assert int(BigInteger(n).sqrt()) == math.isqrt(n)

    @given(r=st.integers(min_value=1, max_value=RADIX**4))
    def test_perfect_squares(self, r):
        assert int(BigInteger(r * r).sqrt()) == r
        assert int(BigInteger(r * r - 1).sqrt()) == r - 1


# ===================================================================
# COMPARISON
# ===================================================================

class TestComparisonProperties:

    @given(a=values, b=values)
    def test_matches_int(self, a, b):
        x = BigInteger(a)
        assert x.compare(b) == (a > b) - (a < b)
        assert x.less_than(b) == (a < b)
        assert x.less_or_equal(b) == (a <= b)
        assert x.greater_than(b) == (a > b)
        assert x.greater_or_equal(b) == (a >= b)
        assert x.equals(b) == (a == b)

    @given(a=values, b=values)
    def test_antisymmetry(self, a, b):
        assert BigInteger(a).compare(b) == -BigInteger(b).compare(a)
