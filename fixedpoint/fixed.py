"""Fixed-point decimal numbers backed by fixed-width signed integers.

A value is stored as a single signed integer ``inner`` equal to the
represented rational multiplied by ``DIV`` (a power of ten). A family is
declared by subclassing FixedPointNumber with a FixedPointConfig:

    class Fixed64(FixedPointNumber, config=FIXED64_CONFIG):
        __slots__ = ()

Every value is immutable. Three arithmetic families share the type:

- checked_*: return None on overflow, division by zero or an
  unrepresentable negation.
- saturating_*: never fail, clamping to min_value()/max_value() by the
  sign of the true result.
- raw operators (+ - * /): unchecked, caller-asserted safe range. They
  use plain (non-widened) arithmetic on the inner integer and raise
  Overflow/DivisionByZero wherever the backing integer would fault,
  including the intermediate a * b and a * DIV products.

Every checked/saturating multiply and divide goes through
scaled_multiply_divide on unsigned magnitudes, with the sign handled
separately by _sign_magnitude/_resign.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, ClassVar, Protocol, SupportsIndex, TypeVar

import structlog
from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from fixedpoint import codec
from fixedpoint.config import (
    FIXED32_CONFIG,
    FIXED64_CONFIG,
    FIXED128_CONFIG,
    FixedPointConfig,
)
from fixedpoint.errors import OutOfRange, Overflow
from fixedpoint.int_types import IntType, as_int, signum
from fixedpoint.math.helpers import div_trunc, scaled_multiply_divide
from fixedpoint.per_thing import PerThing

__all__ = [
    "FixedPointNumber",
    "PerThingLike",
    "Fixed32",
    "Fixed64",
    "Fixed128",
]

logger = structlog.get_logger()

F = TypeVar("F", bound="FixedPointNumber")


class PerThingLike(Protocol):
    """What conversion needs from a ratio type."""

    ACCURACY: int

    def deconstruct(self) -> int: ...


def _sign_magnitude(value: int) -> tuple[int, int]:
    """Split a signed inner into (signum, |value|).

    The magnitude of the signed minimum is MAX + 1, which does not fit
    the signed width but always fits its unsigned counterpart.
    """
    return signum(value), abs(value)


class FixedPointNumber:
    """Signed fixed-point number with a decimal scale.

    Subclasses pass ``config=`` to become a concrete family; the config is
    unpacked into the class constants below.

    Attributes:
        INNER: Signed type of the stored value
        UNSIGNED: Unsigned type of the same width
        PREV_UNSIGNED: Unsigned type of half the width
        PER_THING: Ratio type used for the fractional part of accumulation
        DIV: Scale divisor
        PRECISION: Decimal digits after the point
    """

    CONFIG: ClassVar[FixedPointConfig]
    INNER: ClassVar[IntType]
    UNSIGNED: ClassVar[IntType]
    PREV_UNSIGNED: ClassVar[IntType]
    PER_THING: ClassVar[type[PerThing]]
    DIV: ClassVar[int]
    PRECISION: ClassVar[int]

    __slots__ = ("_inner",)
    _inner: int

    def __init_subclass__(cls, config: FixedPointConfig | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if config is None:
            return
        cls.CONFIG = config
        cls.INNER = config.inner
        cls.UNSIGNED = config.unsigned
        cls.PREV_UNSIGNED = config.prev_unsigned
        cls.PER_THING = config.per_thing
        cls.DIV = config.div
        cls.PRECISION = config.precision

    def __init__(self, inner: SupportsIndex = 0) -> None:
        """Create from a raw scaled value (same as from_inner).

        Raises:
            OutOfRange: If inner does not fit the inner type
        """
        inner = as_int(inner)
        if not self.INNER.contains(inner):
            raise OutOfRange(f"{type(self).__name__} inner {inner} does not fit {self.INNER.name}")
        self._inner = inner

    # --- Construction ---

    @classmethod
    def from_inner(cls: type[F], inner: SupportsIndex) -> F:
        """Wrap a raw scaled value. No rescaling takes place."""
        return cls(inner)

    def into_inner(self) -> int:
        """The raw scaled value."""
        return self._inner

    @property
    def inner(self) -> int:
        return self._inner

    @classmethod
    def from_integer(cls: type[F], n: SupportsIndex) -> F:
        """Create from a whole number, saturating to the type bounds."""
        return cls(cls.INNER.saturated_from(as_int(n) * cls.DIV))

    @classmethod
    def from_int(cls: type[F], value: SupportsIndex) -> F:
        """Generic conversion of an unscaled integer-like value.

        Same semantics as from_integer; accepts anything implementing
        __index__.
        """
        return cls.from_integer(value)

    @classmethod
    def checked_from_integer(cls: type[F], n: SupportsIndex) -> F | None:
        """Create from a whole number, None if it does not fit."""
        n = cls.INNER.try_from(n)
        if n is None:
            return None
        inner = cls.INNER.checked_mul(n, cls.DIV)
        if inner is None:
            return None
        return cls(inner)

    @classmethod
    def from_rational(cls: type[F], n: SupportsIndex, d: SupportsIndex) -> F:
        """Create n / d with plain inner-width arithmetic.

        n is saturated into the inner type first. This is the unchecked
        constructor: the caller must ensure d != 0 and that n * DIV fits.
        Use checked_from_rational when that cannot be guaranteed.

        Raises:
            DivisionByZero: If d is zero
            Overflow: If n * DIV does not fit the inner type
            OutOfRange: If d does not fit the inner type
        """
        n = cls.INNER.saturated_from(n)
        d = as_int(d)
        if not cls.INNER.contains(d):
            raise OutOfRange(f"Denominator {d} does not fit {cls.INNER.name}")
        numerator = cls.INNER.strict_mul(n, cls.DIV)
        return cls(cls.INNER.strict_div(numerator, d))

    @classmethod
    def checked_from_rational(cls: type[F], n: SupportsIndex, d: SupportsIndex) -> F | None:
        """Create n / d, None on a zero or out-of-range d, or on overflow."""
        d = cls.INNER.try_from(d)
        if d is None or d == 0:
            return None
        n = cls.INNER.try_from(n)
        if n is None:
            return None
        numerator = cls.INNER.checked_mul(n, cls.DIV)
        if numerator is None:
            return None
        inner = cls.INNER.checked_div(numerator, d)
        if inner is None:
            return None
        return cls(inner)

    @classmethod
    def from_per_thing(cls: type[F], ratio: PerThingLike) -> F:
        """Convert a ratio in [0, ACCURACY] into this family.

        Falls back to max_value() if the rational conversion fails. Besides
        a ratio whose parts exceed its accuracy, that covers any ratio finer
        than this family whose parts times DIV overflow the inner type:
        Fixed64.from_per_thing(Perquintill.one()) is max_value(), not one().
        """
        accuracy = cls.INNER.saturated_from(ratio.ACCURACY)
        value = cls.INNER.saturated_from(ratio.deconstruct())
        result = cls.checked_from_rational(value, accuracy)
        if result is None:
            return cls.max_value()
        return result

    @classmethod
    def zero(cls: type[F]) -> F:
        return cls(0)

    @classmethod
    def one(cls: type[F]) -> F:
        return cls(cls.DIV)

    @classmethod
    def accuracy(cls) -> int:
        """The scale divisor, i.e. the inner value of one()."""
        return cls.DIV

    @classmethod
    def min_value(cls: type[F]) -> F:
        """Smallest raw inner value (not rescaled)."""
        return cls(cls.INNER.min_value)

    @classmethod
    def max_value(cls: type[F]) -> F:
        """Largest raw inner value (not rescaled)."""
        return cls(cls.INNER.max_value)

    def is_zero(self) -> bool:
        return self._inner == 0

    def is_positive(self) -> bool:
        return self._inner > 0

    def is_negative(self) -> bool:
        return self._inner < 0

    # --- Checked arithmetic ---

    def _same_family(self: F, other: object) -> F:
        if type(other) is not type(self):
            raise TypeError(
                f"Expected {type(self).__name__}, got {type(other).__name__}"
            )
        return other  # type: ignore[return-value]

    def _resign(self: F, sign: int, magnitude: int) -> F | None:
        """Reapply sign to an unsigned magnitude, None if unrepresentable."""
        inner = self.INNER.try_from(sign * magnitude)
        if inner is None:
            return None
        return type(self)(inner)

    def checked_add(self: F, rhs: F) -> F | None:
        rhs = self._same_family(rhs)
        inner = self.INNER.checked_add(self._inner, rhs._inner)
        return None if inner is None else type(self)(inner)

    def checked_sub(self: F, rhs: F) -> F | None:
        rhs = self._same_family(rhs)
        inner = self.INNER.checked_sub(self._inner, rhs._inner)
        return None if inner is None else type(self)(inner)

    def checked_mul(self: F, rhs: F) -> F | None:
        """Multiply through the widened primitive; None on overflow."""
        rhs = self._same_family(rhs)
        lhs_sign, lhs = _sign_magnitude(self._inner)
        rhs_sign, rhs_mag = _sign_magnitude(rhs._inner)
        try:
            magnitude = scaled_multiply_divide(lhs, rhs_mag, self.DIV)
        except Overflow:
            return None
        return self._resign(lhs_sign * rhs_sign, magnitude)

    def checked_div(self: F, rhs: F) -> F | None:
        """Divide through the widened primitive.

        None if rhs is zero or for min_value() / -1, the only quotient of
        two representable values that overflows.
        """
        rhs = self._same_family(rhs)
        if rhs._inner == 0:
            return None
        if self._inner == self.INNER.min_value and rhs._inner == -self.DIV:
            return None
        if self._inner == 0:
            return self

        lhs_sign, lhs = _sign_magnitude(self._inner)
        rhs_sign, rhs_mag = _sign_magnitude(rhs._inner)
        try:
            magnitude = scaled_multiply_divide(lhs, self.DIV, rhs_mag)
        except Overflow:
            return None
        return self._resign(lhs_sign * rhs_sign, magnitude)

    # --- Saturating arithmetic ---

    def saturating_add(self: F, rhs: F) -> F:
        rhs = self._same_family(rhs)
        return type(self)(self.INNER.saturating_add(self._inner, rhs._inner))

    def saturating_sub(self: F, rhs: F) -> F:
        rhs = self._same_family(rhs)
        return type(self)(self.INNER.saturating_sub(self._inner, rhs._inner))

    def saturating_mul(self: F, rhs: F) -> F:
        """checked_mul, clamped by the sign of the product on overflow."""
        result = self.checked_mul(rhs)
        if result is not None:
            return result

        negative = signum(self._inner) * signum(rhs._inner) < 0
        logger.debug(
            "fixed_point_saturated",
            family=type(self).__name__,
            op="mul",
            bound="min" if negative else "max",
        )
        return self.min_value() if negative else self.max_value()

    def saturating_abs(self: F) -> F:
        """|self|, with abs(min_value()) saturating to max_value()."""
        if self._inner == self.INNER.min_value:
            return self.max_value()
        if self._inner < 0:
            return type(self)(-self._inner)
        return self

    def saturating_pow(self: F, exp: SupportsIndex) -> F:
        """Raise to a non-negative integer power by binary exponentiation.

        Every intermediate product saturates, so the result is always
        defined. exp == 0 gives one(), including for zero().

        Raises:
            OutOfRange: If exp is negative
        """
        exp = as_int(exp)
        if exp < 0:
            raise OutOfRange(f"Exponent must be non-negative, got {exp}")
        if exp == 0:
            return self.one()

        result = self.one()
        pow_val = self
        for i in range(exp.bit_length()):
            if (1 << i) & exp:
                result = result.saturating_mul(pow_val)
            pow_val = pow_val.saturating_mul(pow_val)
        return result

    # --- Cross-width scaling ---

    def _operand(self, value: SupportsIndex, int_type: IntType) -> int:
        value = as_int(value)
        if not int_type.contains(value):
            raise OutOfRange(f"{value} does not fit {int_type.name}")
        return value

    def checked_mul_int(self, other: SupportsIndex, int_type: IntType | None = None) -> int | None:
        """Multiply an integer of type int_type by this value.

        other is narrowed into the inner type, the magnitudes go through the
        widened primitive, and the signed result is narrowed back into
        int_type. None if any narrowing or the multiplication fails.

        Args:
            other: The integer to scale
            int_type: Type of other and of the result (default: inner type)

        Raises:
            OutOfRange: If other does not fit int_type
        """
        int_type = int_type or self.INNER
        rhs = self.INNER.try_from(self._operand(other, int_type))
        if rhs is None:
            return None

        lhs_sign, lhs = _sign_magnitude(self._inner)
        rhs_sign, rhs_mag = _sign_magnitude(rhs)
        try:
            magnitude = scaled_multiply_divide(lhs, rhs_mag, self.DIV)
        except Overflow:
            return None

        inner = self.INNER.try_from(lhs_sign * rhs_sign * magnitude)
        if inner is None:
            return None
        return int_type.try_from(inner)

    def checked_div_int(self, other: SupportsIndex, int_type: IntType | None = None) -> int | None:
        """Divide this value's inner by an integer, then by DIV.

        None on a zero divisor, MIN / -1, or a result outside int_type.

        Raises:
            OutOfRange: If other does not fit int_type
        """
        int_type = int_type or self.INNER
        rhs = self.INNER.try_from(self._operand(other, int_type))
        if rhs is None:
            return None
        quotient = self.INNER.checked_div(self._inner, rhs)
        if quotient is None:
            return None
        quotient = self.INNER.checked_div(quotient, self.DIV)
        if quotient is None:
            return None
        return int_type.try_from(quotient)

    def saturating_mul_int(self, other: SupportsIndex, int_type: IntType | None = None) -> int:
        """checked_mul_int, clamped to int_type's bounds on failure.

        The bound is chosen by signum(other) * signum(self).
        """
        int_type = int_type or self.INNER
        result = self.checked_mul_int(other, int_type)
        if result is not None:
            return result

        negative = signum(as_int(other)) * signum(self._inner) < 0
        logger.debug(
            "fixed_point_saturated",
            family=type(self).__name__,
            op="mul_int",
            int_type=int_type.name,
            bound="min" if negative else "max",
        )
        return int_type.min_value if negative else int_type.max_value

    def saturated_multiply_accumulate(self, value: SupportsIndex, int_type: IntType | None = None) -> int:
        """Return value + self * value (value - |self| * value if negative).

        value may be much wider than the inner type. The product is never
        formed at full precision: |inner| is split into whole units
        (|inner| // DIV), multiplied directly, and a remainder below DIV,
        applied through the PER_THING ratio whose own multiply never
        exceeds the width of value. Every step saturates within int_type.

        Args:
            value: The base integer
            int_type: Type of value and of the result (default: inner type)

        Raises:
            OutOfRange: If value does not fit int_type
        """
        int_type = int_type or self.INNER
        value = self._operand(value, int_type)

        positive = self._inner > 0
        _, parts = _sign_magnitude(self._inner)

        natural_parts = int_type.saturated_from(parts // self.DIV)
        fractional_parts = self.PREV_UNSIGNED.saturated_from(parts % self.DIV)

        n = int_type.saturating_mul(value, natural_parts)
        p = self.PER_THING.from_parts(fractional_parts).mul_int(value, int_type)

        excess = int_type.saturating_add(n, p)

        if positive:
            return int_type.saturating_add(value, excess)
        else:
            return int_type.saturating_sub(value, excess)

    # --- Raw operators (unchecked) ---

    def __add__(self: F, other: object) -> F:
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(self.INNER.strict_add(self._inner, other._inner))  # type: ignore[attr-defined]

    def __sub__(self: F, other: object) -> F:
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(self.INNER.strict_sub(self._inner, other._inner))  # type: ignore[attr-defined]

    def __mul__(self: F, other: object) -> F:
        """(a * b) / DIV in the inner width; the product itself must fit."""
        if type(other) is not type(self):
            return NotImplemented
        product = self.INNER.strict_mul(self._inner, other._inner)  # type: ignore[attr-defined]
        return type(self)(div_trunc(product, self.DIV))

    def __truediv__(self: F, other: object) -> F:
        """(a * DIV) / b in the inner width; a * DIV must fit and b != 0."""
        if type(other) is not type(self):
            return NotImplemented
        numerator = self.INNER.strict_mul(self._inner, self.DIV)
        return type(self)(self.INNER.strict_div(numerator, other._inner))  # type: ignore[attr-defined]

    # --- Comparison ---

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._inner == other._inner  # type: ignore[attr-defined]

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._inner < other._inner  # type: ignore[attr-defined]

    def __le__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._inner <= other._inner  # type: ignore[attr-defined]

    def __gt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._inner > other._inner  # type: ignore[attr-defined]

    def __ge__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._inner >= other._inner  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._inner))

    # --- Encoding ---

    def get_str(self) -> str:
        """The inner integer as a base-10 string."""
        return codec.get_str(self)

    @classmethod
    def try_from_str(cls: type[F], s: str) -> F:
        """Inverse of get_str().

        Raises:
            InvalidString: If s is not an in-range base-10 integer
        """
        return codec.try_from_str(cls, s)

    def encode(self) -> bytes:
        return codec.encode(self)

    @classmethod
    def decode(cls: type[F], data: bytes) -> F:
        return codec.decode(cls, data)

    def to_decimal(self) -> Decimal:
        """Convert to Decimal for display."""
        return codec.to_decimal(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({codec.format_decimal(self)})"

    def __str__(self) -> str:
        return codec.format_decimal(self)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Validate from / serialize to the get_str() string form."""
        encoded = core_schema.str_schema(pattern=f"^{codec.INTEGER_PATTERN}$")
        return core_schema.no_info_plain_validator_function(
            lambda value: codec.validate_encoded(cls, value),
            json_schema_input_schema=encoded,
            serialization=core_schema.plain_serializer_function_ser_schema(
                codec.get_str, return_schema=core_schema.str_schema(), when_used="json"
            ),
        )


class Fixed32(FixedPointNumber, config=FIXED32_CONFIG):
    """4-decimal fixed point backed by i32."""

    __slots__ = ()


class Fixed64(FixedPointNumber, config=FIXED64_CONFIG):
    """9-decimal fixed point backed by i64."""

    __slots__ = ()


class Fixed128(FixedPointNumber, config=FIXED128_CONFIG):
    """18-decimal fixed point backed by i128."""

    __slots__ = ()
