"""
Dense real matrix value type.

Determinants use closed forms up to order 3 and Laplace (cofactor)
expansion along the first row beyond that; inverses go through the
adjugate. Every operation returns a freshly allocated Matrix; only
set_value() and modify() change a matrix in place.
"""

from __future__ import annotations

import numbers
from collections.abc import Iterable
from typing import Any, Callable, Optional

import numpy as np
from pydantic import BaseModel, Field

from ..core.errors import DivisionByZeroError, DomainViolationError, OutOfRangeError, ShapeMismatchError
from ..core.logging import get_context_logger
from . import scalar
from .value import MathValue, fuzzy_compare, resolve_tolerance

logger = get_context_logger(__name__, component="matrix")


class Matrix(BaseModel, MathValue):
    """
    Matrix (2D array of floats) with matrix operations.

    Supports determinant, cofactors, adjugate, inverse, products and powers.
    Addition and subtraction accept mismatched shapes: the result takes the
    larger size in each dimension and missing entries count as 0.
    """

    lines: int = Field(ge=1, description="Number of rows")
    columns: int = Field(ge=1, description="Number of columns")
    data: list[list[float]] = Field(description="Row-major entries")

    def __init__(
        self,
        rows: Iterable[Iterable[Any]] | np.ndarray | Matrix | int,
        columns: int | None = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize a Matrix.

        Args:
            rows: Row data (nested iterables, a NumPy array or another
                Matrix), or the number of lines for a zero matrix
            columns: Number of columns when ``rows`` is a line count
                (defaults to a square matrix)
        """
        if isinstance(rows, numbers.Integral) and not isinstance(rows, bool):
            lines = int(rows)
            columns = lines if columns is None else int(columns)
            if lines < 1 or columns < 1:
                raise DomainViolationError(
                    "Lines and columns must be at least 1",
                    {"lines": lines, "columns": columns},
                )
            data = [[0.0] * columns for _ in range(lines)]
        else:
            data = self._coerce_rows(rows)
            lines, columns = len(data), len(data[0])
        super().__init__(lines=lines, columns=columns, data=data, **kwargs)

    @staticmethod
    def _coerce_rows(raw_rows: Any) -> list[list[float]]:
        """Convert raw row iterables into fresh lists of floats."""
        if isinstance(raw_rows, Matrix):
            return [list(row) for row in raw_rows.data]

        if isinstance(raw_rows, np.ndarray):
            if raw_rows.ndim != 2:
                raise ShapeMismatchError(
                    f"Matrix data must be two-dimensional, got {raw_rows.ndim} dimension(s)",
                    raw_rows.shape,
                )
            raw_rows = raw_rows.tolist()

        if not isinstance(raw_rows, Iterable):
            raise TypeError("Matrix rows must be iterable sequences")

        normalized: list[list[float]] = []
        for row in raw_rows:
            if not isinstance(row, Iterable):
                raise TypeError("Matrix rows must be iterable sequences")
            normalized.append([float(cell) for cell in row])

        if not normalized:
            raise DomainViolationError("Matrix needs at least one line")
        row_len = len(normalized[0])
        if row_len == 0:
            raise DomainViolationError("Matrix needs at least one column")
        if not all(len(row) == row_len for row in normalized):
            lengths = sorted({len(row) for row in normalized})
            raise ShapeMismatchError(f"Matrix rows must all have same length, got lengths {lengths}")
        return normalized

    @classmethod
    def _from_rows(cls, rows: list[list[float]]) -> Matrix:
        """Wrap rows this module built itself, skipping re-validation."""
        return cls.model_construct(lines=len(rows), columns=len(rows[0]), data=rows)

    @classmethod
    def identity(cls, order: int) -> Matrix:
        """Identity matrix of the given order."""
        identity = cls(order)
        for i in range(order):
            identity.data[i][i] = 1.0
        return identity

    @classmethod
    def zeros(cls, lines: int, columns: int | None = None) -> Matrix:
        return cls(lines, columns)

    # Shape

    @property
    def shape(self) -> tuple[int, int]:
        """Get matrix dimensions (lines, columns)."""
        return (self.lines, self.columns)

    def is_square(self) -> bool:
        return self.lines == self.columns

    @property
    def order(self) -> Optional[int]:
        """Order of a square matrix, None when the matrix is not square."""
        return self.lines if self.is_square() else None

    # Element access

    def _check_position(self, line: int, column: int) -> None:
        if not (0 <= line < self.lines and 0 <= column < self.columns):
            raise OutOfRangeError(
                f"Position ({line}, {column}) is outside a {self.lines}x{self.columns} matrix",
                index=[line, column],
                bounds=[self.lines, self.columns],
            )

    def get_value(self, line: int, column: int) -> float:
        self._check_position(line, column)
        return self.data[line][column]

    def set_value(self, line: int, column: int, value: float) -> None:
        self._check_position(line, column)
        self.data[line][column] = float(value)

    def _value_or_zero(self, line: int, column: int) -> float:
        if line < self.lines and column < self.columns:
            return self.data[line][column]
        return 0.0

    def __getitem__(self, index: tuple[int, int]) -> float:
        line, column = index
        return self.get_value(line, column)

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        line, column = index
        self.set_value(line, column, value)

    def row_data(self) -> list[list[float]]:
        """Copy of the entries as nested lists."""
        return [list(row) for row in self.data]

    def copy(self) -> Matrix:
        """
        Create an independent copy of the matrix.

        Returns:
            New Matrix with copied data
        """
        return Matrix._from_rows(self.row_data())

    # Determinant and cofactors

    def determinant(self) -> float:
        """
        Calculate the determinant (square matrices only).

        Orders 1 to 3 use closed forms; larger orders expand along the first
        row, skipping zero entries.

        Raises:
            ShapeMismatchError: If matrix is not square
        """
        if not self.is_square():
            raise ShapeMismatchError("Determinant only defined for square matrices", self.shape)

        d = self.data
        order = self.lines
        if order == 1:
            return d[0][0]
        if order == 2:
            return d[0][0] * d[1][1] - d[0][1] * d[1][0]
        if order == 3:
            return (
                d[2][0] * d[0][1] * d[1][2]
                + d[0][0] * d[1][1] * d[2][2]
                + d[1][0] * d[2][1] * d[0][2]
                - d[2][2] * d[0][1] * d[1][0]
                - d[0][2] * d[1][1] * d[2][0]
                - d[1][2] * d[2][1] * d[0][0]
            )

        logger.debug("Laplace expansion along the first row", extra_data={"order": order})
        determinant = 0.0
        for column, value in enumerate(d[0]):
            if value == 0:
                continue
            determinant += value * self.cofactor(0, column)
        return determinant

    def cofactor(self, line: int, column: int) -> float:
        """Signed minor: (-1)^(line + column) * complementary_minor(line, column)."""
        sign = -1.0 if (line + column) % 2 else 1.0
        return sign * self.complementary_minor(line, column)

    def complementary_minor(self, line: int, column: int) -> float:
        """
        Determinant of the submatrix left after deleting a line and a column.

        Raises:
            ShapeMismatchError: If the matrix is not square or has order 1
            OutOfRangeError: If the position is outside the matrix
        """
        if not self.is_square():
            raise ShapeMismatchError("Complementary minor needs a square matrix", self.shape)
        order = self.lines
        if not (0 <= line < order and 0 <= column < order):
            raise OutOfRangeError(
                f"Position ({line}, {column}) is outside a square matrix of order {order}",
                index=[line, column],
                bounds=[order, order],
            )
        if order == 1:
            raise ShapeMismatchError("Complementary minor needs a matrix of order 2 or more", self.shape)
        return self._submatrix(line, column).determinant()

    def _submatrix(self, line: int, column: int) -> Matrix:
        rows = []
        for i in range(self.lines - 1):
            source_line = i + 1 if i >= line else i
            source = self.data[source_line]
            rows.append([source[j + 1 if j >= column else j] for j in range(self.columns - 1)])
        return Matrix._from_rows(rows)

    def cofactor_matrix(self) -> Optional[Matrix]:
        """Matrix of cofactors; None for non-square or order-1 matrices."""
        if not self.is_square() or self.lines == 1:
            return None
        order = self.lines
        return Matrix._from_rows([[self.cofactor(i, j) for j in range(order)] for i in range(order)])

    def adjugate(self) -> Optional[Matrix]:
        """Transpose of the cofactor matrix; None when that is undefined."""
        cofactors = self.cofactor_matrix()
        if cofactors is None:
            return None
        return cofactors.transposed()

    def inverse(self) -> Optional[Matrix]:
        """
        Calculate the matrix inverse.

        Returns:
            The inverse, or None when the matrix is not square or singular

        Raises:
            DivisionByZeroError: For the 1x1 matrix [[0]]
        """
        if not self.is_square():
            logger.debug("No inverse for a non-square matrix", extra_data={"shape": list(self.shape)})
            return None
        if self.lines == 1:
            value = self.data[0][0]
            if value == 0:
                raise DivisionByZeroError("The 1x1 zero matrix has no inverse")
            return Matrix._from_rows([[1.0 / value]])
        determinant = self.determinant()
        if determinant == 0:
            logger.debug("Singular matrix has no inverse", extra_data={"order": self.lines})
            return None
        return self.adjugate().multiply_by_scalar(1.0 / determinant)

    def trace(self) -> float:
        """Calculate the trace (sum of diagonal elements)."""
        if not self.is_square():
            raise ShapeMismatchError("Trace only defined for square matrices", self.shape)
        return sum(self.data[i][i] for i in range(self.lines))

    # Structural operations

    def transposed(self) -> Matrix:
        return Matrix._from_rows([[self.data[i][j] for i in range(self.lines)] for j in range(self.columns)])

    @property
    def T(self) -> Matrix:
        return self.transposed()

    def is_symmetric(self) -> bool:
        """True when the matrix equals its transpose."""
        return self == self.transposed()

    def is_antisymmetric(self) -> bool:
        """True when the transpose equals the matrix times -1."""
        return self.transposed() == self.multiply_by_scalar(-1)

    def modify(self, function: Callable[[float], float]) -> None:
        """Replace every entry in place with function(entry)."""
        for row in self.data:
            for j, value in enumerate(row):
                row[j] = float(function(value))

    # Arithmetic

    def add(self, other: Matrix) -> Matrix:
        """Element-wise sum, zero-padding the smaller operand."""
        return self._combine(other, 1.0)

    def subtract(self, other: Matrix) -> Matrix:
        """Element-wise difference, zero-padding the smaller operand."""
        return self._combine(other, -1.0)

    def _combine(self, other: Matrix, factor: float) -> Matrix:
        if not isinstance(other, Matrix):
            raise TypeError(f"Cannot combine Matrix with {type(other).__name__}")
        lines = max(self.lines, other.lines)
        columns = max(self.columns, other.columns)
        return Matrix._from_rows([
            [self._value_or_zero(i, j) + factor * other._value_or_zero(i, j) for j in range(columns)]
            for i in range(lines)
        ])

    def multiply_by_scalar(self, scalar_value: float) -> Matrix:
        return Matrix._from_rows([[value * scalar_value for value in row] for row in self.data])

    def multiply(self, other: Matrix) -> Matrix:
        """
        Matrix product self x other (not commutative).

        Raises:
            ShapeMismatchError: If self.columns != other.lines
        """
        if not isinstance(other, Matrix):
            raise TypeError(f"Cannot multiply Matrix by {type(other).__name__}")
        if self.columns != other.lines:
            raise ShapeMismatchError(
                f"Cannot multiply {self.shape} by {other.shape} matrices",
                self.shape,
                other.shape,
            )
        result = []
        for i in range(self.lines):
            row = self.data[i]
            result_row = []
            for j in range(other.columns):
                total = 0.0
                for k in range(self.columns):
                    total += row[k] * other.data[k][j]
                result_row.append(total)
            result.append(result_row)
        return Matrix._from_rows(result)

    def pow(self, exponent: int) -> Optional[Matrix]:
        """
        Natural power by repeated multiplication.

        Returns:
            The power (identity for exponent 0), or None for non-square
            matrices and negative exponents
        """
        if isinstance(exponent, bool) or not isinstance(exponent, numbers.Integral):
            raise TypeError(f"Matrix exponent must be an integer, got {type(exponent).__name__}")
        if not self.is_square() or exponent < 0:
            return None
        result = Matrix.identity(self.lines)
        for _ in range(exponent):
            result = result.multiply(self)
        return result

    # Comparison

    def compare(self, other: Any, tolerance: float | None = None, mode: str | None = None) -> bool:
        """Compare matrices element-wise."""
        if not isinstance(other, Matrix):
            return False
        if self.shape != other.shape:
            return False
        tolerance, mode = resolve_tolerance(tolerance, mode)
        for row1, row2 in zip(self.data, other.data):
            for el1, el2 in zip(row1, row2):
                if not fuzzy_compare(el1, el2, tolerance, mode):
                    return False
        return True

    def __eq__(self, other: Any) -> bool:
        """Exact comparison: same shape and identical entries."""
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and self.data == other.data

    __hash__ = None  # mutable

    # Conversions

    def to_string(self) -> str:
        """Brace-nested compact form, e.g. {{1, 2}, {3, 4}}."""
        rows_str = ", ".join(
            "{" + ", ".join(scalar.format_number(value) for value in row) + "}" for row in self.data
        )
        return "{" + rows_str + "}"

    def to_formatted_string(self) -> str:
        """
        Multi-line rendering with right-aligned columns.

        Example:
            |1  2|
            |3 40|
        """
        cells = [[scalar.format_number(value) for value in row] for row in self.data]
        widths = [max(len(cells[i][j]) for i in range(self.lines)) for j in range(self.columns)]
        return "\n".join(
            "|" + " ".join(cell.rjust(widths[j]) for j, cell in enumerate(row)) + "|" for row in cells
        )

    def to_tex(self) -> str:
        """Convert to LaTeX (pmatrix)."""
        rows_tex = " \\\\ ".join(
            " & ".join(scalar.format_number(value) for value in row) for row in self.data
        )
        return f"\\begin{{pmatrix}} {rows_tex} \\end{{pmatrix}}"

    def to_python(self) -> list[list[float]]:
        """Convert to Python nested list."""
        return self.row_data()

    def to_numpy(self) -> np.ndarray:
        """Convert to NumPy array."""
        return np.array(self.data, dtype=float)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Matrix({self.to_string()})"

    # Arithmetic operators

    def __add__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix):
            return self.subtract(other)
        return NotImplemented

    def __mul__(self, other: Any) -> Matrix:
        """Matrix multiplication or scalar multiplication."""
        if isinstance(other, Matrix):
            return self.multiply(other)
        if _is_scalar(other):
            return self.multiply_by_scalar(float(other))
        return NotImplemented

    def __rmul__(self, other: Any) -> Matrix:
        """Right multiplication (scalar only)."""
        if _is_scalar(other):
            return self.multiply_by_scalar(float(other))
        return NotImplemented

    def __matmul__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix):
            return self.multiply(other)
        return NotImplemented

    def __truediv__(self, other: Any) -> Matrix:
        """Scalar division."""
        if _is_scalar(other):
            if other == 0:
                raise DivisionByZeroError("Matrix division by zero")
            return self.multiply_by_scalar(1.0 / float(other))
        return NotImplemented

    def __pow__(self, other: Any) -> Matrix:
        """
        Matrix power (integer powers only).

        Unlike pow(), failures raise: non-square matrices raise
        ShapeMismatchError and a negative power of a singular matrix raises
        DivisionByZeroError.
        """
        if isinstance(other, bool) or not isinstance(other, numbers.Integral):
            return NotImplemented
        if not self.is_square():
            raise ShapeMismatchError("Matrix power only defined for square matrices", self.shape)
        if other >= 0:
            return self.pow(int(other))
        inverse = self.inverse()
        if inverse is None:
            raise DivisionByZeroError("Singular matrix has no negative powers")
        return inverse.pow(-int(other))

    def __neg__(self) -> Matrix:
        return self.multiply_by_scalar(-1.0)


def _is_scalar(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)
