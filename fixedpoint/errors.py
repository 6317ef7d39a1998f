"""Fixed-point error classes.

Checked operations never raise these for arithmetic failure (they return
None), and saturating operations never raise at all. They are raised by
the raw operator family, by ``from_rational`` and by the codecs.
"""


class FixedPointError(ArithmeticError):
    """Base error for fixed-point operations."""

    pass


class Overflow(FixedPointError):
    """Result does not fit the backing integer width."""

    pass


class DivisionByZero(FixedPointError, ZeroDivisionError):
    """Division or remainder by zero."""

    pass


class OutOfRange(FixedPointError, ValueError):
    """Operand lies outside the range of its integer type."""

    pass


class InvalidString(FixedPointError, ValueError):
    """String is not a base-10 integer that fits the inner type."""

    pass


class InvalidEncoding(FixedPointError, ValueError):
    """Byte string has the wrong length for the inner type."""

    pass


class InvalidConfiguration(FixedPointError, ValueError):
    """A fixed-point family was declared with inconsistent parameters."""

    pass
