"""
Scalar math surface used by the value types.

Thin wrappers over ``math`` and NumPy for the real functions the complex,
matrix and polynomial engines need. Inputs outside a function's real domain
raise DomainViolationError instead of returning NaN; use Complex for those.
"""

from __future__ import annotations

import math

import numpy as np

from ..core.errors import DomainViolationError

PI = math.pi
E = math.e

# Above this magnitude floats are rendered in repr() form even when integral
_INTEGRAL_RENDER_LIMIT = 1e15

_SUPERSCRIPT_DIGITS = str.maketrans("-0123456789", "⁻⁰¹²³⁴⁵⁶⁷⁸⁹")


def sqrt(value: float) -> float:
    """Square root of a non-negative real."""
    if value < 0:
        raise DomainViolationError(
            "Square root of a negative real is not real; use Complex.sqrt()",
            {"value": value},
        )
    return math.sqrt(value)


def cbrt(value: float) -> float:
    """Real cube root; defined for every real, sign preserved."""
    return float(np.cbrt(value))


def power(base: float, exponent: float) -> float:
    """
    Real power.

    Raises:
        DomainViolationError: if base is 0 and exponent <= 0, or base is
            negative and exponent is not an integer
    """
    if base == 0 and exponent <= 0:
        raise DomainViolationError(
            "Base 0 requires a positive exponent",
            {"base": base, "exponent": exponent},
        )
    if base < 0 and not is_integral(exponent):
        raise DomainViolationError(
            "Negative base requires an integer exponent; use Complex.pow()",
            {"base": base, "exponent": exponent},
        )
    return math.pow(base, exponent)


def ln(value: float) -> float:
    """Natural logarithm of a positive real."""
    if value <= 0:
        raise DomainViolationError(
            "Logarithm is only defined for positive reals",
            {"value": value},
        )
    return math.log(value)


def exp(value: float) -> float:
    return math.exp(value)


def sin(radians: float) -> float:
    return math.sin(radians)


def cos(radians: float) -> float:
    return math.cos(radians)


def absolute(value: float) -> float:
    return abs(value)


def hypot(x: float, y: float) -> float:
    """Distance from the origin to (x, y)."""
    return math.hypot(x, y)


def signed_angle(x: float, y: float) -> float:
    """
    Angle of (x, y) from the positive x axis, in (-pi, pi].

    The unsigned angle between the unit x vector and (x, y) carries the sign
    of y, with y == 0 (including -0.0) counted as non-negative. The origin
    maps to 0.
    """
    if x == 0 and y == 0:
        return 0.0
    angle = math.atan2(abs(y), x)
    return angle if y >= 0 else -angle


def is_integral(value: float) -> bool:
    """True when value is a finite whole number."""
    return math.isfinite(value) and float(value).is_integer()


def format_number(value: float) -> str:
    """
    Render a real without a trailing ``.0`` when it is integral.

    Examples:
        >>> format_number(3.0)
        '3'
        >>> format_number(-2.5)
        '-2.5'
    """
    if is_integral(value) and abs(value) < _INTEGRAL_RENDER_LIMIT:
        return str(int(value))
    return repr(float(value))


def superscript(value: int) -> str:
    """Unicode superscript form of an integer, e.g. 21 -> '²¹'."""
    return str(int(value)).translate(_SUPERSCRIPT_DIGITS)
