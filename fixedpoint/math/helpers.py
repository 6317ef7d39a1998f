"""Widened integer helpers for the fixed-point kernel.

Fixed-width machine integers truncate toward zero on division while
Python's ``//`` floors toward negative infinity, so every signed division
in the package goes through ``div_trunc``/``rem_trunc``.

``scaled_multiply_divide`` is the single widened primitive: it computes
``a * b // c`` for unsigned 128-bit magnitudes with a 256-bit
intermediate, so the product can never overflow before the final
narrowing back to 128 bits.
"""

from __future__ import annotations

from fixedpoint.errors import DivisionByZero, OutOfRange, Overflow

__all__ = [
    "U128_MAX",
    "div_trunc",
    "rem_trunc",
    "scaled_multiply_divide",
]

U128_MAX = 2**128 - 1


def div_trunc(a: int, b: int) -> int:
    """Integer division with truncation toward zero.

    Args:
        a: Dividend (can be positive or negative)
        b: Divisor (must be non-zero)

    Returns:
        a / b truncated toward zero

    Raises:
        DivisionByZero: If b is zero

    Examples:
        Python: -7 // 3 = -3 (rounds toward -inf)
        Fixed-width: -7 / 3 = -2 (truncates toward zero)
    """
    if b == 0:
        raise DivisionByZero(f"Division by zero: {a} / 0")

    if (a >= 0) == (b >= 0):
        return a // b
    else:
        return -(abs(a) // abs(b))


def rem_trunc(a: int, b: int) -> int:
    """Remainder matching ``div_trunc``; takes the sign of the dividend.

    Raises:
        DivisionByZero: If b is zero
    """
    if b == 0:
        raise DivisionByZero(f"Remainder by zero: {a} % 0")
    return a - div_trunc(a, b) * b


def scaled_multiply_divide(a: int, b: int, c: int) -> int:
    """Compute floor(a * b / c) without intermediate overflow.

    All operands are unsigned 128-bit magnitudes; callers extract the
    sign beforehand. The product is held in a 256-bit intermediate, which
    is wide enough for any pair of 128-bit operands.

    Args:
        a: First factor, 0 <= a <= U128_MAX
        b: Second factor, 0 <= b <= U128_MAX
        c: Divisor, 0 < c <= U128_MAX

    Returns:
        floor(a * b / c), guaranteed to fit in 128 bits

    Raises:
        OutOfRange: If an operand is negative or wider than 128 bits
        DivisionByZero: If c is zero
        Overflow: If the quotient does not fit in 128 bits
    """
    for operand in (a, b, c):
        if not 0 <= operand <= U128_MAX:
            raise OutOfRange(f"Operand {operand} is not an unsigned 128-bit value")
    if c == 0:
        raise DivisionByZero(f"Division by zero: {a} * {b} / 0")

    # Two 128-bit factors always fit the 256-bit intermediate.
    product = a * b
    result = product // c
    if result > U128_MAX:
        raise Overflow(f"Result of {a} * {b} / {c} exceeds 128 bits")
    return result
