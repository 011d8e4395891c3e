# circuitsim/complex_math.py
"""Scalar complex helpers. Every function also accepts a bare real."""
import math
from typing import Union

Number = Union[complex, float, int]

_DISPLAY_EPS = 1e-4


def add(a: Number, b: Number) -> complex:
    return complex(a) + complex(b)


def multiply(a: Number, b: Number) -> complex:
    return complex(a) * complex(b)


def conjugate(a: Number) -> complex:
    return complex(a).conjugate()


def magnitude(a: Number) -> float:
    return abs(complex(a))


def phase(a: Number) -> float:
    """Argument in (-pi, pi]."""
    c = complex(a)
    return math.atan2(c.imag, c.real)


def _fixed(x: float, precision: int) -> str:
    # round() keeps the sign of zero; adding 0.0 drops it
    return f"{round(x, precision) + 0.0:.{precision}f}"


def to_display_string(a: Number, precision: int = 3) -> str:
    """Render ``a`` as ``re``, ``imi`` or ``re+imi`` with fixed decimals."""
    c = complex(a)
    re = _fixed(c.real, precision)
    if abs(c.imag) < _DISPLAY_EPS:
        return re
    # sign comes from the unrounded value, so -0.0004 still prints as -0.000
    sign = "-" if c.imag < 0 else "+"
    im = _fixed(abs(c.imag), precision)
    if abs(c.real) < _DISPLAY_EPS:
        return f"{im}i" if sign == "+" else f"-{im}i"
    return f"{re}{sign}{im}i"
