"""Fixed-width integer types for the fixed-point kernel.

Python integers never overflow, so the bit-width of every operand has to
be carried explicitly. This module provides IntType, a description of a
machine integer (width and signedness) with the three arithmetic
families the kernel builds on:

- checked_*: return None instead of overflowing or dividing by zero
- saturating_*: clamp to the type bounds instead of overflowing
- strict_*: raise Overflow/DivisionByZero exactly where a native
  fixed-width integer would fault

Usage pattern:
    from fixedpoint.int_types import I64, U128

    I64.checked_mul(2**62, 4)      # None
    I64.saturating_mul(2**62, 4)   # I64.max_value
    U128.try_from(-1)              # None
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import SupportsIndex

from fixedpoint.errors import DivisionByZero, Overflow
from fixedpoint.math.helpers import div_trunc

__all__ = [
    "IntType",
    "as_int",
    "signum",
    "I8",
    "I16",
    "I32",
    "I64",
    "I128",
    "I256",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "U256",
]


def as_int(value: SupportsIndex) -> int:
    """Coerce an integer-like operand to int.

    Raises:
        TypeError: If value is a bool or does not implement __index__
    """
    if isinstance(value, bool):
        raise TypeError("bool is not accepted as an integer operand")
    return operator.index(value)


def signum(value: int) -> int:
    """Return -1, 0 or 1 according to the sign of value."""
    return (value > 0) - (value < 0)


@dataclass(frozen=True)
class IntType:
    """A fixed-width two's complement (or unsigned) integer type.

    Attributes:
        bits: Width in bits
        signed: True for two's complement, False for unsigned
    """

    bits: int
    signed: bool

    @property
    def name(self) -> str:
        return f"{'i' if self.signed else 'u'}{self.bits}"

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    @property
    def byte_width(self) -> int:
        return self.bits // 8

    def __repr__(self) -> str:
        return self.name.upper()

    def contains(self, value: int) -> bool:
        """Check if value is representable without raising."""
        return self.min_value <= value <= self.max_value

    # --- Conversion ---

    def try_from(self, value: SupportsIndex) -> int | None:
        """Narrow value into this type, returning None if it does not fit."""
        value = as_int(value)
        if self.contains(value):
            return value
        return None

    def saturated_from(self, value: SupportsIndex) -> int:
        """Narrow value into this type, clamping to the nearest bound."""
        value = as_int(value)
        return max(self.min_value, min(value, self.max_value))

    # --- Checked operations ---

    def checked_add(self, a: int, b: int) -> int | None:
        return self.try_from(a + b)

    def checked_sub(self, a: int, b: int) -> int | None:
        return self.try_from(a - b)

    def checked_mul(self, a: int, b: int) -> int | None:
        return self.try_from(a * b)

    def checked_div(self, a: int, b: int) -> int | None:
        """Truncating division, None on zero divisor or MIN / -1."""
        if b == 0:
            return None
        return self.try_from(div_trunc(a, b))

    def checked_neg(self, a: int) -> int | None:
        return self.try_from(-a)

    def checked_abs(self, a: int) -> int | None:
        """Absolute value, None for the signed minimum."""
        return self.try_from(abs(a))

    # --- Saturating operations ---

    def saturating_add(self, a: int, b: int) -> int:
        return self.saturated_from(a + b)

    def saturating_sub(self, a: int, b: int) -> int:
        return self.saturated_from(a - b)

    def saturating_mul(self, a: int, b: int) -> int:
        return self.saturated_from(a * b)

    # --- Strict operations (native fault semantics) ---

    def strict(self, value: int) -> int:
        """Return value unchanged if it fits, otherwise raise.

        Raises:
            Overflow: If value is outside [min_value, max_value]
        """
        if not self.contains(value):
            raise Overflow(f"{self.name} overflow: {value}")
        return value

    def strict_add(self, a: int, b: int) -> int:
        return self.strict(a + b)

    def strict_sub(self, a: int, b: int) -> int:
        return self.strict(a - b)

    def strict_mul(self, a: int, b: int) -> int:
        return self.strict(a * b)

    def strict_div(self, a: int, b: int) -> int:
        """Truncating division.

        Raises:
            DivisionByZero: If b is zero
            Overflow: For MIN / -1
        """
        if b == 0:
            raise DivisionByZero(f"{self.name} division by zero: {a} / 0")
        return self.strict(div_trunc(a, b))


I8 = IntType(8, signed=True)
I16 = IntType(16, signed=True)
I32 = IntType(32, signed=True)
I64 = IntType(64, signed=True)
I128 = IntType(128, signed=True)
I256 = IntType(256, signed=True)

U8 = IntType(8, signed=False)
U16 = IntType(16, signed=False)
U32 = IntType(32, signed=False)
U64 = IntType(64, signed=False)
U128 = IntType(128, signed=False)
U256 = IntType(256, signed=False)
