"""Per-thing ratio types.

A per-thing is a non-negative ratio stored as ``parts`` out of a fixed
``ACCURACY`` (Percent is parts per hundred, Perbill parts per billion).
The fixed-point kernel consumes them in two places only: conversion into
a fixed-point family (via ACCURACY and deconstruct()) and the fractional
half of saturated_multiply_accumulate (via mul_int).
"""

from __future__ import annotations

from typing import ClassVar, SupportsIndex

from fixedpoint.errors import DivisionByZero, OutOfRange
from fixedpoint.int_types import IntType, as_int, signum

__all__ = [
    "PerThing",
    "Percent",
    "Permyriad",
    "Permill",
    "Perbill",
    "Perquintill",
]


class PerThing:
    """Ratio in [0, 1] stored as parts of ACCURACY.

    Subclasses set ACCURACY.
    """

    ACCURACY: ClassVar[int]

    __slots__ = ("_parts",)
    _parts: int

    def __init__(self, parts: SupportsIndex = 0) -> None:
        """Create from raw parts.

        Raises:
            OutOfRange: If parts is negative or exceeds ACCURACY
        """
        parts = as_int(parts)
        if not 0 <= parts <= self.ACCURACY:
            raise OutOfRange(f"{type(self).__name__} parts must be in [0, {self.ACCURACY}], got {parts}")
        self._parts = parts

    @classmethod
    def from_parts(cls, parts: SupportsIndex) -> PerThing:
        """Create from raw parts, clamping into [0, ACCURACY]."""
        return cls(max(0, min(as_int(parts), cls.ACCURACY)))

    @classmethod
    def from_rational(cls, p: int, q: int) -> PerThing:
        """Approximate p / q, rounding down. Ratios above one clamp to one.

        Raises:
            DivisionByZero: If q is zero
            OutOfRange: If p or q is negative
        """
        if q == 0:
            raise DivisionByZero(f"{cls.__name__}.from_rational({p}, 0)")
        if p < 0 or q < 0:
            raise OutOfRange(f"{cls.__name__}.from_rational requires non-negative operands")
        p = min(p, q)
        return cls(p * cls.ACCURACY // q)

    @classmethod
    def zero(cls) -> PerThing:
        return cls(0)

    @classmethod
    def one(cls) -> PerThing:
        return cls(cls.ACCURACY)

    def deconstruct(self) -> int:
        """The raw parts value."""
        return self._parts

    def is_zero(self) -> bool:
        return self._parts == 0

    def mul_int(self, n: SupportsIndex, int_type: IntType | None = None) -> int:
        """Multiply an integer by this ratio, truncating toward zero.

        n is split into whole multiples of ACCURACY and a remainder, so no
        intermediate exceeds |n| or ACCURACY**2. The result is never larger
        in magnitude than n and therefore always fits n's type.

        Ledger runtimes round this product to the nearest integer; here it
        truncates, so the fractional half of saturated_multiply_accumulate
        can come out one lower than theirs.

        Args:
            n: The integer to scale
            int_type: Optional width of n; checked when given

        Raises:
            OutOfRange: If n does not fit int_type
        """
        n = as_int(n)
        if int_type is not None and not int_type.contains(n):
            raise OutOfRange(f"{n} does not fit {int_type.name}")

        whole, rem = divmod(abs(n), self.ACCURACY)
        magnitude = whole * self._parts + (rem * self._parts) // self.ACCURACY
        return signum(n) * magnitude

    def __mul__(self, other: object) -> int:
        if isinstance(other, int) and not isinstance(other, bool):
            return self.mul_int(other)
        return NotImplemented

    def __rmul__(self, other: object) -> int:
        return self.__mul__(other)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._parts == other._parts  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._parts))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._parts})"


class Percent(PerThing):
    """Parts per hundred."""

    ACCURACY = 100
    __slots__ = ()


class Permyriad(PerThing):
    """Parts per ten thousand (basis points)."""

    ACCURACY = 10**4
    __slots__ = ()


class Permill(PerThing):
    """Parts per million."""

    ACCURACY = 10**6
    __slots__ = ()


class Perbill(PerThing):
    """Parts per billion."""

    ACCURACY = 10**9
    __slots__ = ()


class Perquintill(PerThing):
    """Parts per quintillion."""

    ACCURACY = 10**18
    __slots__ = ()
