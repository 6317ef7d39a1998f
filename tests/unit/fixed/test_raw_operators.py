"""Tests for the unchecked operator family.

These paths trust the caller: they use plain inner-width arithmetic and
fault (raise) wherever the backing integer would, instead of clamping or
returning None.
"""

import pytest

from fixedpoint import Fixed32, Fixed64
from fixedpoint.errors import DivisionByZero, Overflow


class TestAddSub:
    def test_add_sub(self, family):
        a = family.from_integer(5)
        b = family.from_rational(1, 4)
        assert a + b == family.from_rational(21, 4)
        assert a - b == family.from_rational(19, 4)
        assert b - a == family.from_rational(-19, 4)

    def test_overflow_faults(self, family):
        tiny = family.from_inner(1)
        with pytest.raises(Overflow):
            family.max_value() + tiny
        with pytest.raises(Overflow):
            family.min_value() - tiny

    def test_other_family_rejected(self):
        with pytest.raises(TypeError):
            Fixed64.one() + Fixed32.one()
        with pytest.raises(TypeError):
            Fixed64.one() + 1


class TestMul:
    def test_identity(self, family):
        a = family.from_integer(1)
        b = family.from_integer(2)
        assert a * b == b

    def test_fraction(self, family):
        assert family.from_rational(1, 2) * family.from_rational(-1, 2) == family.from_rational(-1, 4)

    def test_intermediate_product_faults(self):
        """max * 1 overflows the inner width before dividing by DIV."""
        with pytest.raises(Overflow):
            Fixed64.max_value() * Fixed64.one()
        assert Fixed64.max_value().checked_mul(Fixed64.one()) == Fixed64.max_value()


class TestDiv:
    def test_quotient(self, family):
        assert family.from_integer(3) / family.from_integer(2) == family.from_rational(3, 2)
        assert family.from_integer(-3) / family.from_integer(2) == family.from_rational(-3, 2)

    def test_divide_by_zero_faults(self, family):
        with pytest.raises(DivisionByZero):
            family.one() / family.zero()
        with pytest.raises(ZeroDivisionError):
            family.one() / family.zero()

    def test_scaled_numerator_faults(self):
        """a * DIV must fit the inner width; checked_div has no such limit."""
        ten = Fixed64.from_integer(10)
        with pytest.raises(Overflow):
            ten / Fixed64.one()
        assert ten.checked_div(Fixed64.one()) == ten
