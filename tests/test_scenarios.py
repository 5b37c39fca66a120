"""End-to-end scenarios: chained calls as a caller would write them."""
from __future__ import annotations

import pytest

from biginteger import BigInteger
from errors import DivisionByZeroError, ErrorKind


class TestChains:

    def test_long_chain(self):
        result = (
            BigInteger(5)
            .add(97)
            .subtract(53)
            .add(434)
            .multiply(5435423)
            .add(321453)
            .multiply(21)
            .divide(2)
            .power(2)
        )
        assert result.to_decimal_string() == "760056543044267246001"

    def test_mod(self):
        assert BigInteger(53).mod(14).to_decimal_string() == "11"

    def test_sqrt(self):
        assert BigInteger(64).sqrt().to_decimal_string() == "8"

    def test_mixed_signs(self):
        assert BigInteger(-7).add(3).to_decimal_string() == "-4"
        assert BigInteger(-7).multiply(-3).to_decimal_string() == "21"

    def test_division_by_zero(self):
        x = BigInteger(10).divide(0)
        assert x.error is ErrorKind.DIVISION_BY_ZERO
        assert x.to_decimal_string() == "Invalid Number - Division By Zero"
        with pytest.raises(DivisionByZeroError):
            x.check()

    def test_text_operands(self):
        result = BigInteger("123456789123456789123456789").multiply(BigInteger("2"))
        assert result.to_decimal_string() == "246913578246913578246913578"

    def test_alias_chain(self):
        result = BigInteger(10).plus(5).minus(3).mult(4).div(6).pow(3)
        assert result.val() == "512"

    def test_error_mid_chain_poisons_the_rest(self):
        result = BigInteger(1).add(2).divide(0).add(5).multiply(3).power(2)
        assert result.to_decimal_string() == "Invalid Number - Division By Zero"


class TestLargeOperands:

    def test_thousand_digit_round_trip(self):
        text = "1234567890" * 100
        assert BigInteger(text).to_decimal_string() == text

    def test_thousand_digit_division(self):
        n = int("9876543210" * 100)
        d = int("1234567" * 20)
        x = BigInteger(n).divide(d)
        assert int(x) == n // d
        assert int(x.remainder) == n % d

    def test_factorial(self):
        x = BigInteger(1)
        for k in range(2, 101):
            x.multiply(k)
        expected = 1
        for k in range(2, 101):
            expected *= k
        assert str(x) == str(expected)

    def test_sqrt_of_large_power(self):
        assert BigInteger(7).power(400).sqrt().equals(BigInteger(7).power(200))

    def test_power_of_two_limb_layout(self):
        x = BigInteger(2).power(31 * 5)
        assert x.magnitude == [0, 0, 0, 0, 0, 1]
