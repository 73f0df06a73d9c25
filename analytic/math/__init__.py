"""
Analytic value types.

- Complex numbers with polar powers, roots and logarithms
- Dense real matrices (determinant, adjugate, inverse)
- Polynomials with closed-form quadratic and cubic solvers
- Fuzzy comparison through compare(); == is always exact
"""

from . import scalar
from .matrix import Matrix
from .numeric import Complex
from .polynomial import CubicFunction, Polynomial, QuadraticFunction, Vertex
from .value import MathValue, ToleranceMode

__all__ = [
    "MathValue",
    "ToleranceMode",
    "Complex",
    "Matrix",
    "Polynomial",
    "QuadraticFunction",
    "CubicFunction",
    "Vertex",
    "scalar",
]
