"""
Base MathValue class for the analytic value types.

This module provides the foundation shared by Complex, Matrix and Polynomial:
- Operator overloading contract
- Fuzzy comparison with tolerances (equality itself is always exact)
- Multiple output formats (string, TeX)
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any


class ToleranceMode:
    """Modes for fuzzy comparison."""

    RELATIVE = "relative"  # |a - b| / max(|a|, |b|) <= tol
    ABSOLUTE = "absolute"  # |a - b| <= tol
    SIGFIGS = "sigfigs"  # Significant figures


class MathValue(ABC):
    """
    Base class for all mathematical value objects.

    Provides:
    - Operator overloading (arithmetic magic methods)
    - Fuzzy comparison with tolerances via compare()
    - Multiple output formats (string, TeX, Python natives)

    Note: Concrete subclasses inherit from both BaseModel and MathValue,
    e.g., `class Complex(BaseModel, MathValue):`. MathValue itself is abstract
    and does not inherit from BaseModel to avoid MRO conflicts.
    """

    @abstractmethod
    def compare(self, other: Any, tolerance: float | None = None, mode: str | None = None) -> bool:
        """
        Fuzzy comparison with tolerance.

        Args:
            other: Value to compare against
            tolerance: Tolerance for comparison (None = configured default)
            mode: Tolerance mode (relative, absolute, sigfigs; None = configured default)

        Returns:
            True if values are equal within tolerance
        """
        pass

    # String representations

    @abstractmethod
    def to_string(self) -> str:
        """Convert to human-readable string."""
        pass

    @abstractmethod
    def to_tex(self) -> str:
        """Convert to LaTeX representation."""
        pass

    @abstractmethod
    def to_python(self) -> Any:
        """Convert to Python native type."""
        pass

    def __str__(self) -> str:
        """String representation (uses to_string)."""
        return self.to_string()

    def __repr__(self) -> str:
        """Debug representation."""
        return f"{self.__class__.__name__}({self.to_string()})"

    # Operator overloading (Python magic methods)

    @abstractmethod
    def __add__(self, other: Any) -> MathValue:
        """Addition: self + other"""
        pass

    @abstractmethod
    def __sub__(self, other: Any) -> MathValue:
        """Subtraction: self - other"""
        pass

    @abstractmethod
    def __mul__(self, other: Any) -> MathValue:
        """Multiplication: self * other"""
        pass

    @abstractmethod
    def __truediv__(self, other: Any) -> MathValue:
        """Division: self / other"""
        pass

    @abstractmethod
    def __neg__(self) -> MathValue:
        """Unary negation: -self"""
        pass

    def __pos__(self) -> MathValue:
        """Unary positive: +self"""
        return self


def resolve_tolerance(tolerance: float | None, mode: str | None) -> tuple[float, str]:
    """Fill unset tolerance/mode from the configured defaults."""
    if tolerance is None or mode is None:
        from ..core.config import get_settings

        settings = get_settings()
        if tolerance is None:
            tolerance = settings.COMPARE_TOLERANCE
        if mode is None:
            mode = settings.COMPARE_MODE
    return tolerance, mode


def fuzzy_compare(
    a: float,
    b: float,
    tolerance: float,
    mode: str,
    zero_level: float | None = None,
    zero_level_tol: float | None = None,
) -> bool:
    """
    Compare two floats with tolerance.

    In relative mode a value whose magnitude is below zero_level counts as
    zero, and the pair is then compared absolutely with zero_level_tol, so a
    rounding residue such as 6e-17 matches an exact 0.

    Args:
        a: First value
        b: Second value
        tolerance: Tolerance value
        mode: Comparison mode (relative, absolute, sigfigs)
        zero_level: Magnitude treated as zero (None = configured default)
        zero_level_tol: Absolute tolerance near zero (None = configured default)

    Returns:
        True if values are equal within tolerance
    """
    # Exact equality
    if a == b:
        return True

    EPSILON = 1e-12

    if mode == ToleranceMode.ABSOLUTE:
        return abs(a - b) <= tolerance + EPSILON

    elif mode == ToleranceMode.RELATIVE:
        if zero_level is None or zero_level_tol is None:
            from ..core.config import get_settings

            settings = get_settings()
            if zero_level is None:
                zero_level = settings.ZERO_LEVEL
            if zero_level_tol is None:
                zero_level_tol = settings.ZERO_LEVEL_TOL
        if abs(a) < zero_level or abs(b) < zero_level:
            return abs(a - b) < zero_level_tol
        return abs(a - b) / max(abs(a), abs(b)) <= tolerance + EPSILON

    elif mode == ToleranceMode.SIGFIGS:
        diff = abs(a - b)
        avg = (abs(a) + abs(b)) / 2
        if avg == 0:
            return diff < 10 ** (-tolerance)
        return math.floor(math.log10(diff / avg)) < -tolerance

    else:
        raise ValueError(f"Unknown tolerance mode: {mode}")
