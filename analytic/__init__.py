"""
analytic - complex numbers, matrices and closed-form polynomial solvers.
"""

import logging

from .core import (
    AnalyticMathError,
    DivisionByZeroError,
    DomainViolationError,
    OutOfRangeError,
    ShapeMismatchError,
)
from .math import Complex, CubicFunction, Matrix, Polynomial, QuadraticFunction, Vertex

__version__ = "0.1.0"

# Silent unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Complex",
    "Matrix",
    "Polynomial",
    "QuadraticFunction",
    "CubicFunction",
    "Vertex",
    "AnalyticMathError",
    "DomainViolationError",
    "DivisionByZeroError",
    "ShapeMismatchError",
    "OutOfRangeError",
    "__version__",
]
