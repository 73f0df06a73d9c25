"""
Polynomials in one variable and closed-form root solvers.

Polynomial keeps real coefficients highest degree first; the last entry is
the constant term. QuadraticFunction and CubicFunction compute their
discriminants and every root (as Complex values) when constructed and are
immutable afterwards, so the roots always match the coefficients.

The solvers use one complex formula for every discriminant sign: real roots
come out as Complex values whose imaginary part is 0 (or a rounding
residue), and there is no separate real-case branch.
"""

from __future__ import annotations

import numbers
from collections.abc import Mapping, Sequence
from tokenize import TokenError
from typing import Any, ClassVar, NamedTuple

import numpy as np
import sympy as sp
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator
from sympy.parsing.sympy_parser import (
    implicit_multiplication_application,
    parse_expr,
    standard_transformations,
)

from ..core.errors import DivisionByZeroError, DomainViolationError, OutOfRangeError
from ..core.logging import get_context_logger
from . import scalar
from .numeric import Complex
from .value import MathValue, fuzzy_compare, resolve_tolerance

logger = get_context_logger(__name__, component="polynomial")

_SYMPY_TRANSFORMATIONS = standard_transformations + (implicit_multiplication_application,)
_X = sp.Symbol("x")


def _normalize_coefficients(coefficients: tuple[Any, ...]) -> list[float]:
    """Accept Polynomial(2, 0, 7), Polynomial([2, 0, 7]) or a NumPy array."""
    if len(coefficients) == 1:
        only = coefficients[0]
        if isinstance(only, Polynomial):
            coefficients = tuple(only.terms)
        elif isinstance(only, np.ndarray):
            if only.ndim != 1:
                raise DomainViolationError("Coefficient array must be one-dimensional", {"ndim": only.ndim})
            coefficients = tuple(only.tolist())
        elif isinstance(only, (list, tuple)):
            coefficients = tuple(only)

    if not coefficients:
        raise DomainViolationError("A polynomial needs at least one coefficient")
    return [float(coef) for coef in coefficients]


def _check_leading(terms: Sequence[float]) -> None:
    if len(terms) > 1 and terms[0] == 0:
        raise DomainViolationError(
            "Leading coefficient cannot be 0",
            {"coefficients": list(terms)},
        )


def _trim_leading_zeros(terms: Sequence[float]) -> list[float]:
    """Drop leading zeros left by cancellation; the zero polynomial is [0]."""
    index = 0
    while index < len(terms) - 1 and terms[index] == 0:
        index += 1
    return list(terms[index:])


def _literal(exponent: int, tex: bool) -> str:
    if exponent == 0:
        return ""
    if exponent == 1:
        return "x"
    return f"x^{{{exponent}}}" if tex else f"x{scalar.superscript(exponent)}"


class Polynomial(BaseModel, MathValue):
    """
    Polynomial with real coefficients.

    Polynomial(2, 0, 7) is 2x²+7. Any coefficient may be 0 except the first
    when there is more than one.
    """

    model_config = ConfigDict(validate_assignment=True)

    terms: tuple[float, ...] = Field(description="Coefficients, highest degree first")

    def __init__(self, *coefficients: Any, **kwargs: Any) -> None:
        terms = _normalize_coefficients(coefficients)
        _check_leading(terms)
        super().__init__(terms=tuple(terms), **kwargs)

    @field_validator("terms")
    @classmethod
    def _validate_terms(cls, terms: tuple[float, ...]) -> tuple[float, ...]:
        if not terms:
            raise ValueError("A polynomial needs at least one coefficient")
        _check_leading(terms)
        return terms

    def model_copy(self, *, update: Mapping[str, Any] | None = None, deep: bool = False) -> Polynomial:
        """Copy; an updated ``terms`` goes through the constructor again."""
        if update and "terms" in update:
            return type(self)(update["terms"])
        return super().model_copy(update=update, deep=deep)

    @classmethod
    def from_expression(cls, text: str) -> Polynomial:
        """
        Read a polynomial in x from an expression string.

        Accepts ``^`` for powers and implicit multiplication, e.g.
        ``"x^2 - 3x + 2"``.

        Raises:
            DomainViolationError: If the expression is not a polynomial in x
                with real coefficients
        """
        try:
            expr = parse_expr(
                text.replace("^", "**"),
                local_dict={"x": _X},
                transformations=_SYMPY_TRANSFORMATIONS,
            )
        except (SyntaxError, TypeError, TokenError, sp.SympifyError) as exc:
            raise DomainViolationError(f"Cannot parse expression: {text}", {"expression": text}) from exc

        if expr.free_symbols - {_X}:
            raise DomainViolationError(
                f"Expression may only use the variable x: {text}",
                {"symbols": sorted(str(s) for s in expr.free_symbols)},
            )
        try:
            poly = sp.Poly(expr, _X)
            coefficients = [float(coef) for coef in poly.all_coeffs()]
        except (sp.PolynomialError, TypeError) as exc:
            raise DomainViolationError(f"Not a polynomial in x: {text}", {"expression": text}) from exc

        return cls(coefficients)

    # Coefficients

    @property
    def coefficients(self) -> list[float]:
        """Copy of the coefficients, highest degree first."""
        return list(self.terms)

    @property
    def degree(self) -> int:
        return len(self.terms) - 1

    @property
    def constant_term(self) -> float:
        return self.terms[-1]

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.terms):
            raise OutOfRangeError(
                f"No coefficient with index {index}",
                index=index,
                bounds=[0, len(self.terms)],
            )

    def get_coef(self, index: int) -> float:
        self._check_index(index)
        return self.terms[index]

    def set_coef(self, index: int, value: float) -> None:
        """
        Replace one coefficient in place.

        Raises:
            OutOfRangeError: If index is outside the coefficient list
            DomainViolationError: If the leading coefficient would become 0
        """
        self._check_index(index)
        value = float(value)
        if index == 0 and self.degree > 0 and value == 0:
            raise DomainViolationError("Leading coefficient cannot be 0", {"index": index})
        terms = list(self.terms)
        terms[index] = value
        self.terms = tuple(terms)

    def multiply_by(self, factor: float) -> None:
        """Scale every coefficient in place."""
        factor = float(factor)
        if factor == 0 and self.degree > 0:
            raise DomainViolationError("Multiplying by 0 would zero the leading coefficient")
        self.terms = tuple(coef * factor for coef in self.terms)

    # Evaluation

    def evaluate(self, x: Any) -> float | Complex:
        """
        Evaluate with Horner's scheme.

        Real input gives a float, Complex (or Python complex) input gives a
        Complex.
        """
        if isinstance(x, Complex) or (isinstance(x, numbers.Complex) and not isinstance(x, numbers.Real)):
            value = Complex(x)
            result = Complex(0)
            for coef in self.terms:
                result = result * value + coef
            return result
        if isinstance(x, numbers.Real) and not isinstance(x, bool):
            x = float(x)
            total = 0.0
            for coef in self.terms:
                total = total * x + coef
            return total
        raise TypeError(f"Cannot evaluate a polynomial at {type(x).__name__}")

    def __call__(self, x: Any) -> float | Complex:
        return self.evaluate(x)

    def has_point(self, x: float, y: float) -> bool:
        """True when f(x) == y exactly."""
        return self.evaluate(x) == y

    def derivative(self) -> Polynomial:
        if self.degree == 0:
            return Polynomial(0)
        degree = self.degree
        return Polynomial([(degree - i) * coef for i, coef in enumerate(self.terms[:-1])])

    # Comparison

    def compare(self, other: Any, tolerance: float | None = None, mode: str | None = None) -> bool:
        """Compare coefficient lists with tolerance."""
        if not isinstance(other, Polynomial):
            return False
        if len(self.terms) != len(other.terms):
            return False
        tolerance, mode = resolve_tolerance(tolerance, mode)
        return all(fuzzy_compare(a, b, tolerance, mode) for a, b in zip(self.terms, other.terms))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.terms == other.terms

    __hash__ = None  # mutable

    # Conversions

    def _render(self, tex: bool) -> str:
        if self.degree == 0:
            return scalar.format_number(self.terms[0])
        parts: list[str] = []
        for i, coef in enumerate(self.terms):
            if coef == 0:
                continue
            exponent = self.degree - i
            if exponent and coef == 1:
                text = "+" if parts else ""
            elif exponent and coef == -1:
                text = "-"
            else:
                text = scalar.format_number(coef)
                if coef > 0 and parts:
                    text = "+" + text
            parts.append(text + _literal(exponent, tex))
        return "".join(parts)

    def to_string(self) -> str:
        """Compact form such as ``x³-6x²+11x-6``."""
        return self._render(tex=False)

    def to_tex(self) -> str:
        return self._render(tex=True)

    def to_python(self) -> list[float]:
        return self.coefficients

    def to_sympy(self) -> sp.Expr:
        """The polynomial as a SymPy expression in x."""
        coefficients = [sp.Integer(int(coef)) if scalar.is_integral(coef) else sp.Float(coef) for coef in self.terms]
        return sp.Poly(coefficients, _X).as_expr()

    def to_numpy(self) -> np.ndarray:
        return np.array(self.terms, dtype=float)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_string()})"

    # Arithmetic operators

    def __add__(self, other: Any) -> Polynomial:
        other_terms = _operand_terms(other)
        if other_terms is None:
            return NotImplemented
        return Polynomial(_trim_leading_zeros(np.polyadd(self.terms, other_terms).tolist()))

    def __radd__(self, other: Any) -> Polynomial:
        return self.__add__(other)

    def __sub__(self, other: Any) -> Polynomial:
        other_terms = _operand_terms(other)
        if other_terms is None:
            return NotImplemented
        return Polynomial(_trim_leading_zeros(np.polysub(self.terms, other_terms).tolist()))

    def __rsub__(self, other: Any) -> Polynomial:
        other_terms = _operand_terms(other)
        if other_terms is None:
            return NotImplemented
        return Polynomial(_trim_leading_zeros(np.polysub(other_terms, self.terms).tolist()))

    def __mul__(self, other: Any) -> Polynomial:
        other_terms = _operand_terms(other)
        if other_terms is None:
            return NotImplemented
        return Polynomial(_trim_leading_zeros(np.polymul(self.terms, other_terms).tolist()))

    def __rmul__(self, other: Any) -> Polynomial:
        return self.__mul__(other)

    def __truediv__(self, other: Any) -> Polynomial:
        """Division by a real scalar."""
        if not isinstance(other, numbers.Real) or isinstance(other, bool):
            return NotImplemented
        if other == 0:
            raise DivisionByZeroError("Polynomial division by zero")
        return Polynomial([coef / float(other) for coef in self.terms])

    def __neg__(self) -> Polynomial:
        return Polynomial([-coef for coef in self.terms])


def _operand_terms(value: Any) -> Sequence[float] | None:
    if isinstance(value, Polynomial):
        return value.terms
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return [float(value)]
    return None


class Vertex(NamedTuple):
    """Turning point of a parabola."""

    x: float
    y: float


class _RootSolver(Polynomial):
    """Polynomial of fixed degree whose roots are computed on construction."""

    model_config = ConfigDict(frozen=True)

    coefficient_count: ClassVar[int]

    def __init__(self, *coefficients: Any, **kwargs: Any) -> None:
        terms = _normalize_coefficients(coefficients)
        if len(terms) != self.coefficient_count:
            raise DomainViolationError(
                f"{type(self).__name__} takes exactly {self.coefficient_count} coefficients, got {len(terms)}",
                {"coefficients": terms},
            )
        super().__init__(terms, **kwargs)

    def set_coef(self, index: int, value: float) -> None:
        raise TypeError(f"{type(self).__name__} is immutable")

    def multiply_by(self, factor: float) -> None:
        raise TypeError(f"{type(self).__name__} is immutable")

    def __hash__(self) -> int:
        return hash(self.terms)


class QuadraticFunction(_RootSolver):
    """
    ax² + bx + c with a != 0.

    root_plus and root_minus are (-b ± sqrt(delta)) / 2a, evaluated in
    Complex arithmetic so a negative delta yields the conjugate pair.
    """

    coefficient_count: ClassVar[int] = 3

    _delta: float = PrivateAttr(default=0.0)
    _vertex: Vertex = PrivateAttr(default=Vertex(0.0, 0.0))
    _root_plus: Complex = PrivateAttr(default_factory=Complex)
    _root_minus: Complex = PrivateAttr(default_factory=Complex)

    def model_post_init(self, __context: Any) -> None:
        a, b, c = self.terms
        self._delta = b**2 - 4 * a * c
        self._vertex = Vertex(-b / (2 * a), -self._delta / (4 * a))

        minus_b = Complex(-b)
        root_delta = Complex(self._delta).sqrt()
        two_a = Complex(2 * a)
        self._root_plus = minus_b.add(root_delta).divide(two_a)
        self._root_minus = minus_b.subtract(root_delta).divide(two_a)

        logger.debug(
            "Solved quadratic",
            extra_data={"coefficients": list(self.terms), "delta": self._delta},
        )

    @property
    def a(self) -> float:
        return self.terms[0]

    @property
    def b(self) -> float:
        return self.terms[1]

    @property
    def c(self) -> float:
        return self.terms[2]

    @property
    def delta(self) -> float:
        """Discriminant b² - 4ac."""
        return self._delta

    @property
    def vertex(self) -> Vertex:
        """(-b/2a, -delta/4a); a minimum when a > 0, a maximum when a < 0."""
        return self._vertex

    @property
    def root_plus(self) -> Complex:
        return self._root_plus

    @property
    def root_minus(self) -> Complex:
        return self._root_minus

    @property
    def roots(self) -> tuple[Complex, Complex]:
        return (self._root_plus, self._root_minus)


class CubicFunction(_RootSolver):
    """
    ax³ + bx² + cx + d with a != 0, solved with Cardano's formula.

    With the depressed cubic t³ + pt + q and delta = q²/4 + p³/27:
        u = cbrt(-q/2 + sqrt(delta)),  v = cbrt(-q/2 - sqrt(delta))
        real_root  = -b/3a + u + v
        plus_root  = -b/3a + ωu + ω̄v
        minus_root = -b/3a + ω̄u + ωv
    where ω = (-1 + i√3)/2.

    Complex.cbrt() returns the real cube root for negative reals; the
    pairing of u and v above depends on it.
    """

    coefficient_count: ClassVar[int] = 4

    _p: float = PrivateAttr(default=0.0)
    _q: float = PrivateAttr(default=0.0)
    _delta: float = PrivateAttr(default=0.0)
    _real_root: Complex = PrivateAttr(default_factory=Complex)
    _plus_root: Complex = PrivateAttr(default_factory=Complex)
    _minus_root: Complex = PrivateAttr(default_factory=Complex)

    def model_post_init(self, __context: Any) -> None:
        a, b, c, d = self.terms
        self._p = c / a - b**2 / (3 * a**2)
        self._q = d / a - b * c / (3 * a**2) + 2 * b**3 / (27 * a**3)
        self._delta = self._q**2 / 4 + self._p**3 / 27

        constant = Complex(-b / (3 * a))
        root_delta = Complex(self._delta).sqrt()
        omega = Complex(-0.5, scalar.sqrt(3) / 2)
        omega_bar = omega.conjugate()
        half_q = Complex(-self._q / 2)
        base1 = half_q.add(root_delta).cbrt()
        base2 = half_q.subtract(root_delta).cbrt()

        self._real_root = constant.add(base1).add(base2)
        self._plus_root = constant.add(omega.multiply(base1)).add(omega_bar.multiply(base2))
        self._minus_root = constant.add(omega_bar.multiply(base1)).add(omega.multiply(base2))

        logger.debug(
            "Solved cubic",
            extra_data={"coefficients": list(self.terms), "p": self._p, "q": self._q, "delta": self._delta},
        )

    @property
    def a(self) -> float:
        return self.terms[0]

    @property
    def b(self) -> float:
        return self.terms[1]

    @property
    def c(self) -> float:
        return self.terms[2]

    @property
    def d(self) -> float:
        return self.terms[3]

    @property
    def p(self) -> float:
        return self._p

    @property
    def q(self) -> float:
        return self._q

    @property
    def delta(self) -> float:
        return self._delta

    @property
    def real_root(self) -> Complex:
        """The root that is always real (up to rounding)."""
        return self._real_root

    @property
    def plus_root(self) -> Complex:
        """Root with the positive imaginary part when the pair is complex."""
        return self._plus_root

    @property
    def minus_root(self) -> Complex:
        """Root with the negative imaginary part when the pair is complex."""
        return self._minus_root

    @property
    def roots(self) -> tuple[Complex, Complex, Complex]:
        return (self._real_root, self._plus_root, self._minus_root)
