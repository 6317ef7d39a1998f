"""Integer helpers for the fixed-point kernel.

This package provides the widened arithmetic primitive used by every
fixed-point multiply and divide:
- scaled_multiply_divide: a * b / c with a 256-bit intermediate
- div_trunc / rem_trunc: truncating signed division
"""

from fixedpoint.math.helpers import div_trunc, rem_trunc, scaled_multiply_divide

__all__ = ["div_trunc", "rem_trunc", "scaled_multiply_divide"]
