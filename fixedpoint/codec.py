"""String and binary encodings for fixed-point values.

The only persisted state of a fixed-point value is its inner integer, so
both encodings carry that integer and nothing else:

- String: the inner integer in base 10 ("1500000000" for Fixed64 1.5).
  128-bit inners do not survive generic JSON number handling, so
  structured data always carries the string form.
- Binary: the inner integer as fixed-width little-endian two's
  complement (8 bytes for Fixed64), no length prefix or version.

format_decimal() is the human-readable rendering used by repr/str.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import TYPE_CHECKING, Any, TypeVar

import structlog

from fixedpoint.errors import InvalidEncoding, InvalidString
from fixedpoint.math.helpers import div_trunc, rem_trunc

if TYPE_CHECKING:
    from fixedpoint.fixed import FixedPointNumber

__all__ = [
    "get_str",
    "try_from_str",
    "encode",
    "decode",
    "format_decimal",
    "to_decimal",
    "validate_encoded",
]

logger = structlog.get_logger()

F = TypeVar("F", bound="FixedPointNumber")

# Optional sign followed by ASCII digits only; no whitespace or underscores.
INTEGER_PATTERN = r"[+-]?[0-9]+"
_INTEGER_PATTERN = re.compile(INTEGER_PATTERN)


def get_str(value: FixedPointNumber) -> str:
    """Encode the inner integer as a base-10 string."""
    return str(value.into_inner())


def try_from_str(cls: type[F], s: str) -> F:
    """Parse a base-10 inner integer string into a value of cls.

    Args:
        cls: The fixed-point family to decode into
        s: String produced by get_str()

    Returns:
        The decoded value

    Raises:
        InvalidString: If s is not an integer or does not fit the inner type
    """
    if not isinstance(s, str) or _INTEGER_PATTERN.fullmatch(s) is None:
        logger.warning("fixed_point_decode_failed", family=cls.__name__, reason="not_an_integer")
        raise InvalidString("invalid string input")

    # Digit count is bounded first so int() never sees an oversized string.
    digits = s.lstrip("+-").lstrip("0") or "0"
    max_digits = len(str(abs(cls.INNER.min_value)))
    inner = None
    if len(digits) <= max_digits:
        inner = -int(digits) if s.startswith("-") else int(digits)
    if inner is None or not cls.INNER.contains(inner):
        logger.warning(
            "fixed_point_decode_failed",
            family=cls.__name__,
            reason="out_of_range",
            inner_type=cls.INNER.name,
        )
        raise InvalidString("invalid string input")

    return cls.from_inner(inner)


def encode(value: FixedPointNumber) -> bytes:
    """Encode the inner integer as little-endian two's complement."""
    inner_type = type(value).INNER
    return value.into_inner().to_bytes(inner_type.byte_width, "little", signed=True)


def decode(cls: type[F], data: bytes) -> F:
    """Decode bytes produced by encode().

    Raises:
        InvalidEncoding: If data is not exactly the inner width in bytes
    """
    expected = cls.INNER.byte_width
    if len(data) != expected:
        logger.warning(
            "fixed_point_decode_failed",
            family=cls.__name__,
            reason="bad_length",
            expected=expected,
            actual=len(data),
        )
        raise InvalidEncoding(f"{cls.__name__} expects {expected} bytes, got {len(data)}")
    return cls.from_inner(int.from_bytes(data, "little", signed=True))


def format_decimal(value: FixedPointNumber) -> str:
    """Render as ``sign? integral "." fractional`` with PRECISION digits.

    The integral part is truncated toward zero, so a negative value whose
    integral part is zero still needs its sign written explicitly.

    Examples:
        Fixed64 inner 1_500_000_000  -> "1.500000000"
        Fixed64 inner -500_000_000   -> "-0.500000000"
    """
    cls = type(value)
    inner = value.into_inner()
    integral = div_trunc(inner, cls.DIV)
    sign = "-" if integral == 0 and inner < 0 else ""
    fractional = abs(rem_trunc(inner, cls.DIV))
    return f"{sign}{integral}.{fractional:0{cls.PRECISION}d}"


def to_decimal(value: FixedPointNumber) -> Decimal:
    """Exact Decimal of the represented value.

    Built from the decimal text since the Decimal constructor never rounds,
    whereas arithmetic would round 128-bit inners to the context precision.
    """
    return Decimal(format_decimal(value))


def validate_encoded(cls: type[F], value: Any) -> F:
    """Pydantic validator: accept an instance of cls or its string encoding.

    Raises:
        ValueError: For any other input (pydantic reports it as a
            validation error)
    """
    if isinstance(value, cls):
        return value
    if isinstance(value, str):
        return try_from_str(cls, value)
    raise ValueError(f"{cls.__name__} must be encoded as a string, got {type(value).__name__}")
