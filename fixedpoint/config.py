"""Fixed-point family configuration."""

from __future__ import annotations

from dataclasses import dataclass

from fixedpoint.errors import InvalidConfiguration
from fixedpoint.int_types import I32, I64, I128, U16, U32, U64, U128, IntType
from fixedpoint.per_thing import Perbill, PerThing, Permyriad, Perquintill

# Widest inner type the widened primitive can serve (its operands are u128).
MAX_INNER_BITS = 128


@dataclass(frozen=True)
class FixedPointConfig:
    """The five definition-time choices of a fixed-point family.

    Attributes:
        inner: Signed integer backing the value
        unsigned: Unsigned integer of the same width as inner
        prev_unsigned: Unsigned integer of half the width, holds inner % div
        per_thing: Ratio type whose ACCURACY equals div
        div: Scale divisor, 10 ** precision
        precision: Number of decimal digits after the point
    """

    inner: IntType
    unsigned: IntType
    prev_unsigned: IntType
    per_thing: type[PerThing]
    div: int
    precision: int

    def __post_init__(self) -> None:
        if not self.inner.signed:
            raise InvalidConfiguration(f"Inner type must be signed, got {self.inner.name}")
        if self.inner.bits > MAX_INNER_BITS:
            raise InvalidConfiguration(f"Inner type wider than {MAX_INNER_BITS} bits: {self.inner.name}")
        if self.unsigned.signed or self.unsigned.bits != self.inner.bits:
            raise InvalidConfiguration(
                f"Unsigned type must be u{self.inner.bits}, got {self.unsigned.name}"
            )
        if self.prev_unsigned.signed or self.prev_unsigned.bits * 2 != self.inner.bits:
            raise InvalidConfiguration(
                f"Previous unsigned type must be u{self.inner.bits // 2}, got {self.prev_unsigned.name}"
            )
        if self.precision < 0 or self.div != 10**self.precision:
            raise InvalidConfiguration(f"Divisor {self.div} is not 10^{self.precision}")
        if not 0 < self.div <= self.inner.max_value:
            raise InvalidConfiguration(f"Divisor {self.div} does not fit {self.inner.name}")
        # Fractional parts (inner % div) are carried in prev_unsigned.
        if not self.prev_unsigned.contains(self.div - 1):
            raise InvalidConfiguration(
                f"Divisor {self.div} leaves remainders wider than {self.prev_unsigned.name}"
            )
        if self.per_thing.ACCURACY != self.div:
            raise InvalidConfiguration(
                f"{self.per_thing.__name__} accuracy {self.per_thing.ACCURACY} != divisor {self.div}"
            )


FIXED32_CONFIG = FixedPointConfig(
    inner=I32,
    unsigned=U32,
    prev_unsigned=U16,
    per_thing=Permyriad,
    div=10**4,
    precision=4,
)

FIXED64_CONFIG = FixedPointConfig(
    inner=I64,
    unsigned=U64,
    prev_unsigned=U32,
    per_thing=Perbill,
    div=10**9,
    precision=9,
)

FIXED128_CONFIG = FixedPointConfig(
    inner=I128,
    unsigned=U128,
    prev_unsigned=U64,
    per_thing=Perquintill,
    div=10**18,
    precision=18,
)
