"""Deterministic fixed-point decimal arithmetic.

This package provides fixed-point numbers backed by fixed-width signed
integers, with checked, saturating and raw arithmetic:
- Fixed32 / Fixed64 / Fixed128: 4, 9 and 18 decimal families
- IntType: fixed-width integer descriptions (I64, U128, ...)
- Per-thing ratios: Percent, Permyriad, Permill, Perbill, Perquintill
"""

from fixedpoint.config import (
    FIXED32_CONFIG,
    FIXED64_CONFIG,
    FIXED128_CONFIG,
    FixedPointConfig,
)
from fixedpoint.errors import (
    DivisionByZero,
    FixedPointError,
    InvalidConfiguration,
    InvalidEncoding,
    InvalidString,
    OutOfRange,
    Overflow,
)
from fixedpoint.fixed import Fixed32, Fixed64, Fixed128, FixedPointNumber
from fixedpoint.int_types import (
    I8,
    I16,
    I32,
    I64,
    I128,
    I256,
    U8,
    U16,
    U32,
    U64,
    U128,
    U256,
    IntType,
)
from fixedpoint.math import scaled_multiply_divide
from fixedpoint.per_thing import Perbill, Percent, PerThing, Permill, Permyriad, Perquintill

__all__ = [
    # Fixed-point families
    "FixedPointNumber",
    "Fixed32",
    "Fixed64",
    "Fixed128",
    # Configuration
    "FixedPointConfig",
    "FIXED32_CONFIG",
    "FIXED64_CONFIG",
    "FIXED128_CONFIG",
    # Integer types
    "IntType",
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
    # Ratios
    "PerThing",
    "Percent",
    "Permyriad",
    "Permill",
    "Perbill",
    "Perquintill",
    # Primitive
    "scaled_multiply_divide",
    # Errors
    "FixedPointError",
    "Overflow",
    "DivisionByZero",
    "OutOfRange",
    "InvalidString",
    "InvalidEncoding",
    "InvalidConfiguration",
]
