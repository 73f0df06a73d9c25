"""
Complex number value type.

Complex keeps a rectangular pair (real, imaginary) and the matching polar
pair (modulus, argument). The polar pair is computed once, right after
validation, and the model is frozen, so the two representations can never
drift apart. Powers, roots and logarithms go through the polar identities.
"""

from __future__ import annotations

import numbers
import re
from collections.abc import Mapping
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from ..core.errors import DivisionByZeroError, DomainViolationError
from . import scalar
from .value import MathValue, fuzzy_compare, resolve_tolerance

_NUMBER = r"(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
_REAL_RE = re.compile(rf"^[+-]?{_NUMBER}$")
_IMAGINARY_RE = re.compile(rf"^(?P<sign>[+-]?)(?P<coef>{_NUMBER})?i$")
_RECTANGULAR_RE = re.compile(rf"^(?P<real>[+-]?{_NUMBER})(?P<sign>[+-])(?P<coef>{_NUMBER})?i$")


def _parse_complex(text: str | None) -> tuple[float, float]:
    """
    Parse the canonical ``a+bi`` form.

    Accepts e.g. ``-1+3i``, ``2.4-7.88i``, ``85+i``, ``i``, ``-i``, ``-8i``,
    ``5``. Spaces are ignored and None or an empty string means 0.
    """
    if text is None:
        return 0.0, 0.0
    value = text.replace(" ", "")
    if not value:
        return 0.0, 0.0

    if _REAL_RE.match(value):
        return float(value), 0.0

    match = _IMAGINARY_RE.match(value)
    if match:
        coef = float(match.group("coef")) if match.group("coef") else 1.0
        return 0.0, -coef if match.group("sign") == "-" else coef

    match = _RECTANGULAR_RE.match(value)
    if match:
        coef = float(match.group("coef")) if match.group("coef") else 1.0
        return float(match.group("real")), -coef if match.group("sign") == "-" else coef

    raise DomainViolationError(f"Cannot parse complex number from string: {text}", {"value": text})


class Complex(BaseModel, MathValue):
    """
    Complex number value.

    Represents numbers with real and imaginary parts. Equality is exact on
    both components; use compare() for tolerance-based checks.
    """

    model_config = ConfigDict(frozen=True)

    real: float = Field(default=0.0, description="The real part")
    imaginary: float = Field(default=0.0, description="The imaginary part")

    I: ClassVar[Complex]

    _modulus: float = PrivateAttr(default=0.0)
    _argument: float = PrivateAttr(default=0.0)

    def __init__(
        self,
        real: float | int | complex | list | tuple | str | Complex | None = 0.0,
        imaginary: float | int = 0.0,
        **kwargs: Any,
    ):
        """
        Initialize a Complex number.

        Args:
            real: Real part, or a whole value: a list/tuple [real, imag], a
                Python complex, another Complex, or a string like "2-4i"
            imaginary: Imaginary part (default 0)
        """
        if isinstance(real, Complex):
            real_part, imag_part = real.real, real.imaginary
        elif isinstance(real, (list, tuple)):
            if len(real) > 2:
                raise DomainViolationError("Complex takes at most two components", {"value": list(real)})
            real_part = float(real[0]) if len(real) > 0 else 0.0
            imag_part = float(real[1]) if len(real) > 1 else 0.0
        elif isinstance(real, str) or real is None:
            real_part, imag_part = _parse_complex(real)
        elif isinstance(real, complex):
            real_part, imag_part = real.real, real.imag
        else:
            real_part = float(real)
            imag_part = float(imaginary)

        super().__init__(real=real_part, imaginary=imag_part, **kwargs)

    def model_post_init(self, __context: Any) -> None:
        self._modulus = scalar.hypot(self.real, self.imaginary)
        self._argument = scalar.signed_angle(self.real, self.imaginary)

    def model_copy(self, *, update: Mapping[str, Any] | None = None, deep: bool = False) -> Complex:
        """Copy; updated components go through the constructor so the polar form follows."""
        if not update:
            return super().model_copy(deep=deep)
        return Complex(update.get("real", self.real), update.get("imaginary", self.imaginary))

    # Construction helpers

    @classmethod
    def parse(cls, text: str | None) -> Complex:
        """Parse the canonical string form (see to_string())."""
        return cls(*_parse_complex(text))

    @classmethod
    def from_polar(cls, modulus: float, argument: float) -> Complex:
        """Build modulus * (cos(argument) + i sin(argument))."""
        return cls(modulus * scalar.cos(argument), modulus * scalar.sin(argument))

    def with_real(self, real: float) -> Complex:
        """Copy with a new real part (polar form recomputed)."""
        return Complex(real, self.imaginary)

    def with_imaginary(self, imaginary: float) -> Complex:
        """Copy with a new imaginary part (polar form recomputed)."""
        return Complex(self.real, imaginary)

    # Derived state

    @property
    def modulus(self) -> float:
        """Distance from the origin; always >= 0."""
        return self._modulus

    @property
    def argument(self) -> float:
        """Angle from the positive real axis in (-pi, pi]; 0 at the origin."""
        return self._argument

    def is_real(self) -> bool:
        return self.imaginary == 0

    # Arithmetic

    def add(self, other: Any) -> Complex:
        other = _as_complex(other)
        return Complex(self.real + other.real, self.imaginary + other.imaginary)

    def subtract(self, other: Any) -> Complex:
        other = _as_complex(other)
        return Complex(self.real - other.real, self.imaginary - other.imaginary)

    def multiply(self, other: Any) -> Complex:
        # (a + bi)(c + di) = (ac - bd) + (ad + bc)i
        other = _as_complex(other)
        real_part = self.real * other.real - self.imaginary * other.imaginary
        imag_part = self.real * other.imaginary + self.imaginary * other.real
        return Complex(real_part, imag_part)

    def divide(self, other: Any) -> Complex:
        """
        Divide by another complex number.

        (a + bi) / (c + di) = [(a + bi)(c - di)] / (c^2 + d^2)

        Raises:
            DivisionByZeroError: If the divisor has modulus 0
        """
        other = _as_complex(other)
        denom = other.real**2 + other.imaginary**2
        if denom == 0:
            raise DivisionByZeroError("Complex division by zero", {"dividend": self.to_string()})
        real_part = (self.real * other.real + self.imaginary * other.imaginary) / denom
        imag_part = (self.imaginary * other.real - self.real * other.imaginary) / denom
        return Complex(real_part, imag_part)

    def conjugate(self) -> Complex:
        return Complex(self.real, -self.imaginary)

    # Powers, roots and logarithms

    def pow(self, exponent: Any) -> Complex:
        """
        Principal value of self ** exponent.

        Uses z^w = exp(w ln z) in polar form:
            theta  = w.real * arg + w.imag * ln|z|
            factor = |z|^w.real * e^(-w.imag * arg)
        Zero raised to anything is zero.
        """
        exponent = _as_complex(exponent)
        if self._modulus == 0:
            return Complex(0)
        theta = exponent.real * self._argument + exponent.imaginary * scalar.ln(self._modulus)
        factor = scalar.power(self._modulus, exponent.real) * scalar.exp(-exponent.imaginary * self._argument)
        return Complex(factor * scalar.cos(theta), factor * scalar.sin(theta))

    def sqrt(self) -> Complex:
        return self.pow(Complex(0.5))

    def cbrt(self) -> Complex:
        """
        Cube root.

        Negative reals return the real cube root, not the principal complex
        one; every other value takes the principal branch of pow(1/3).
        """
        if self.is_real() and self.real < 0:
            return Complex(-scalar.cbrt(-self.real))
        return self.pow(Complex(1.0 / 3.0))

    def ln(self) -> Complex:
        """
        Principal natural logarithm, ln|z| + i arg(z).

        Not injective: ln(exp(z)) is not z in general.

        Raises:
            DomainViolationError: For zero
        """
        return Complex(scalar.ln(self._modulus), self._argument)

    def log(self, base: Any) -> Complex:
        """Logarithm in an arbitrary (complex) base: ln(self) / ln(base)."""
        return self.ln().divide(_as_complex(base).ln())

    def log10(self) -> Complex:
        return self.log(Complex(10))

    # Comparison

    def compare(self, other: Any, tolerance: float | None = None, mode: str | None = None) -> bool:
        """Fuzzy comparison of both components."""
        try:
            other = _as_complex(other)
        except TypeError:
            return False
        tolerance, mode = resolve_tolerance(tolerance, mode)
        return fuzzy_compare(self.real, other.real, tolerance, mode) and fuzzy_compare(
            self.imaginary, other.imaginary, tolerance, mode
        )

    def __eq__(self, other: Any) -> bool:
        """Exact comparison of both components."""
        try:
            other = _as_complex(other)
        except TypeError:
            return NotImplemented
        return self.real == other.real and self.imaginary == other.imaginary

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return hash(complex(self.real, self.imaginary))

    # Conversions

    def to_string(self) -> str:
        """
        Canonical ``a+bi`` form.

        Zero parts are omitted (the whole zero renders as "0"), a unit
        imaginary coefficient renders as bare "i"/"-i" and integral parts
        render without ".0".
        """
        if self.real == 0 and self.imaginary == 0:
            return "0"
        real_part = "" if self.real == 0 else scalar.format_number(self.real)
        if self.imaginary == 0:
            return real_part
        if self.imaginary == 1:
            imag_part = "i"
        elif self.imaginary == -1:
            imag_part = "-i"
        else:
            imag_part = f"{scalar.format_number(self.imaginary)}i"
        if real_part and self.imaginary > 0:
            return f"{real_part}+{imag_part}"
        return f"{real_part}{imag_part}"

    def to_tex(self) -> str:
        """Convert to LaTeX."""
        return self.to_string()

    def to_python(self) -> complex:
        """Convert to Python complex."""
        return complex(self.real, self.imaginary)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Complex({self.to_string()})"

    def __complex__(self) -> complex:
        return self.to_python()

    # Arithmetic operators

    def __add__(self, other: Any) -> Complex:
        if not _is_operand(other):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other: Any) -> Complex:
        if not _is_operand(other):
            return NotImplemented
        return _as_complex(other).add(self)

    def __sub__(self, other: Any) -> Complex:
        if not _is_operand(other):
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other: Any) -> Complex:
        if not _is_operand(other):
            return NotImplemented
        return _as_complex(other).subtract(self)

    def __mul__(self, other: Any) -> Complex:
        if not _is_operand(other):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other: Any) -> Complex:
        if not _is_operand(other):
            return NotImplemented
        return _as_complex(other).multiply(self)

    def __truediv__(self, other: Any) -> Complex:
        if not _is_operand(other):
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, other: Any) -> Complex:
        if not _is_operand(other):
            return NotImplemented
        return _as_complex(other).divide(self)

    def __pow__(self, other: Any) -> Complex:
        if not _is_operand(other):
            return NotImplemented
        return self.pow(other)

    def __rpow__(self, other: Any) -> Complex:
        if not _is_operand(other):
            return NotImplemented
        return _as_complex(other).pow(self)

    def __neg__(self) -> Complex:
        return Complex(-self.real, -self.imaginary)

    def __pos__(self) -> Complex:
        return self

    def __abs__(self) -> float:
        """Absolute value (modulus)."""
        return self._modulus


Complex.I = Complex(0, 1)


def _is_operand(value: Any) -> bool:
    return isinstance(value, (Complex, numbers.Complex)) and not isinstance(value, bool)


def _as_complex(value: Any) -> Complex:
    """Promote an int, float or Python complex to Complex."""
    if isinstance(value, Complex):
        return value
    if isinstance(value, numbers.Real):
        return Complex(float(value))
    if isinstance(value, numbers.Complex):
        return Complex(value.real, value.imag)
    raise TypeError(f"Cannot use {type(value).__name__} as a complex operand")
