"""Tests for checked and saturating fixed-point arithmetic."""

import pytest
from structlog.testing import capture_logs

from fixedpoint import Fixed32, Fixed64, Fixed128
from fixedpoint.errors import OutOfRange


class TestCheckedAddSub:
    """checked_add / checked_sub."""

    def test_in_range(self, family):
        a = family.from_integer(3)
        b = family.from_rational(1, 2)
        assert a.checked_add(b) == family.from_rational(7, 2)
        assert a.checked_sub(b) == family.from_rational(5, 2)

    def test_overflow(self, family):
        tiny = family.from_inner(1)
        assert family.max_value().checked_add(tiny) is None
        assert family.min_value().checked_sub(tiny) is None

    def test_other_family_rejected(self):
        with pytest.raises(TypeError):
            Fixed64.one().checked_add(Fixed32.one())


class TestCheckedMul:
    """checked_mul goes through the widened primitive."""

    def test_product(self, family):
        result = family.from_rational(3, 2).checked_mul(family.from_rational(5, 2))
        assert result == family.from_rational(15, 4)

    def test_signs(self, family):
        two = family.from_integer(2)
        minus_three = family.from_integer(-3)
        assert two.checked_mul(minus_three) == family.from_integer(-6)
        assert minus_three.checked_mul(minus_three) == family.from_integer(9)
        assert minus_three.checked_mul(family.zero()) == family.zero()

    def test_identity_at_bounds(self, family):
        """Multiplying the bounds by one needs the wide intermediate."""
        one = family.one()
        assert family.max_value().checked_mul(one) == family.max_value()
        assert family.min_value().checked_mul(one) == family.min_value()

    def test_overflow(self, family):
        two = family.from_integer(2)
        assert family.max_value().checked_mul(two) is None
        assert family.min_value().checked_mul(two) is None
        assert family.min_value().checked_mul(family.from_integer(-1)) is None

    def test_truncates(self):
        """Sub-unit products truncate toward zero."""
        tiny = Fixed64.from_inner(1)
        half = Fixed64.from_rational(1, 2)
        assert tiny.checked_mul(half) == Fixed64.zero()
        assert Fixed64.from_inner(-3).checked_mul(half) == Fixed64.from_inner(-1)


class TestCheckedDiv:
    """checked_div."""

    def test_quotient(self, family):
        result = family.from_integer(3).checked_div(family.from_integer(2))
        assert result == family.from_rational(3, 2)

    def test_signs(self, family):
        six = family.from_integer(6)
        minus_two = family.from_integer(-2)
        assert six.checked_div(minus_two) == family.from_integer(-3)
        assert minus_two.checked_div(six) == family.from_rational(-1, 3)
        assert family.from_integer(-6).checked_div(minus_two) == family.from_integer(3)

    def test_divide_by_zero(self, family):
        zero = family.zero()
        for x in (family.one(), zero, family.max_value(), family.min_value()):
            assert x.checked_div(zero) is None

    def test_min_by_minus_one(self, family):
        """The single quotient of representable values that overflows."""
        assert family.min_value().checked_div(family.from_integer(-1)) is None

    def test_zero_dividend(self, family):
        zero = family.zero()
        for y in (family.one(), family.from_integer(-7), family.min_value(), family.max_value()):
            assert zero.checked_div(y) == zero

    def test_bounds_by_one(self, family):
        one = family.one()
        assert family.max_value().checked_div(one) == family.max_value()
        assert family.min_value().checked_div(one) == family.min_value()

    def test_overflow(self, family):
        """Dividing a bound by a sub-unit value overflows."""
        assert family.max_value().checked_div(family.from_rational(1, 2)) is None


class TestSaturatingAddSub:
    def test_clamps(self, family):
        tiny = family.from_inner(1)
        assert family.max_value().saturating_add(tiny) == family.max_value()
        assert family.min_value().saturating_sub(tiny) == family.min_value()
        assert family.one().saturating_add(family.one()) == family.from_integer(2)
        assert family.one().saturating_sub(family.from_integer(3)) == family.from_integer(-2)


class TestSaturatingMul:
    def test_in_range(self, family):
        assert family.from_integer(4).saturating_mul(family.from_rational(1, 4)) == family.one()

    def test_clamps_by_sign(self, family):
        two = family.from_integer(2)
        minus_two = family.from_integer(-2)
        assert family.max_value().saturating_mul(two) == family.max_value()
        assert family.max_value().saturating_mul(minus_two) == family.min_value()
        assert family.min_value().saturating_mul(two) == family.min_value()
        assert family.min_value().saturating_mul(minus_two) == family.max_value()

    def test_clamp_is_logged(self):
        with capture_logs() as logs:
            Fixed64.max_value().saturating_mul(Fixed64.from_integer(2))
        events = [entry for entry in logs if entry["event"] == "fixed_point_saturated"]
        assert len(events) == 1
        assert events[0]["bound"] == "max"
        assert events[0]["family"] == "Fixed64"


class TestSaturatingAbs:
    def test_min_saturates_to_max(self, family):
        assert family.min_value().saturating_abs() == family.max_value()

    def test_other_values(self, family, inner_min):
        for inner in (inner_min + 1, -12345, -1, 0, 1, 12345):
            value = family.from_inner(inner)
            assert value.saturating_abs().into_inner() == abs(inner)


class TestSaturatingPow:
    def test_zero_exponent(self, family):
        for x in (family.zero(), family.one(), family.from_integer(-5), family.max_value()):
            assert x.saturating_pow(0) == family.one()

    def test_integer_powers(self, family):
        assert family.from_integer(2).saturating_pow(10) == family.from_integer(1024)
        assert family.from_integer(-2).saturating_pow(3) == family.from_integer(-8)
        assert family.from_integer(-2).saturating_pow(4) == family.from_integer(16)
        assert family.from_integer(7).saturating_pow(1) == family.from_integer(7)

    def test_fractional_power(self, family):
        assert family.from_rational(1, 2).saturating_pow(2) == family.from_rational(1, 4)

    def test_zero_base(self, family):
        assert family.zero().saturating_pow(5) == family.zero()

    def test_saturates(self, family):
        assert family.from_integer(10).saturating_pow(40) == family.max_value()
        assert family.from_integer(-10).saturating_pow(41) == family.min_value()

    def test_negative_exponent_rejected(self, family):
        with pytest.raises(OutOfRange):
            family.one().saturating_pow(-1)

    def test_large_exponent_terminates(self):
        """Cost is logarithmic in the exponent."""
        assert Fixed128.one().saturating_pow(2**40) == Fixed128.one()
