"""
Shared pytest fixtures and utilities for the analytic test suite.

This module provides:
- A settings cache reset around every test
- Helpers for comparing Complex values and matrices with pytest.approx
- A helper for asserting Pydantic validation errors
"""

import pytest
from typing import Any
from pydantic import BaseModel, ValidationError

from analytic.core.config import get_settings
from analytic.math import Complex, Matrix


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Drop the cached Settings so ANALYTIC_* env changes take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def assert_complex_close():
    """Helper to assert that a Complex value is close to an expected pair."""
    def _assert_close(value: Complex, real: float, imaginary: float, abs_tol: float = 1e-9) -> None:
        """
        Assert both components of a Complex with an absolute tolerance.

        Args:
            value: The Complex to check
            real: Expected real part
            imaginary: Expected imaginary part
            abs_tol: Allowed absolute error per component
        """
        assert isinstance(value, Complex), f"Expected Complex, got {type(value).__name__}"
        assert value.real == pytest.approx(real, abs=abs_tol), f"real part of {value!r}"
        assert value.imaginary == pytest.approx(imaginary, abs=abs_tol), f"imaginary part of {value!r}"

    return _assert_close


@pytest.fixture
def assert_matrix_close():
    """Helper to assert that a Matrix matches nested rows element-wise."""
    def _assert_close(matrix: Matrix, expected: Any, abs_tol: float = 1e-9) -> None:
        expected_rows = [list(row) for row in expected]
        assert matrix.shape == (len(expected_rows), len(expected_rows[0]))
        for row, expected_row in zip(matrix.to_python(), expected_rows):
            assert row == pytest.approx(expected_row, abs=abs_tol)

    return _assert_close


@pytest.fixture
def assert_validation_error():
    """Helper to assert that an action raises a Pydantic ValidationError."""
    def _assert_validation(action, expected_type: str | None = None) -> ValidationError:
        """
        Assert that calling ``action`` raises ValidationError.

        Args:
            action: Zero-argument callable expected to fail validation
            expected_type: Expected error type substring (optional)

        Returns:
            The ValidationError that was raised
        """
        with pytest.raises(ValidationError) as exc_info:
            action()

        error = exc_info.value
        if expected_type:
            assert any(
                expected_type in str(e['type']).lower() for e in error.errors()
            ), f"Expected error type containing '{expected_type}' not found"

        return error

    return _assert_validation


@pytest.fixture
def assert_model_dump():
    """Helper to assert the serialized fields of a Pydantic model."""
    def _assert_dump(model: BaseModel, expected: dict[str, Any]) -> None:
        assert model.model_dump() == expected, f"Unexpected dump for {model!r}"

    return _assert_dump


@pytest.fixture
def laplace_matrix() -> Matrix:
    """4x4 matrix that needs Laplace expansion; determinant 30."""
    return Matrix([
        [1, 0, 2, -1],
        [3, 0, 0, 5],
        [2, 1, 4, -3],
        [1, 0, 5, 0],
    ])


@pytest.fixture
def restore_library_logging():
    """Restore the package logger handlers and level after setup_logging() runs."""
    import logging

    package_logger = logging.getLogger("analytic")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield package_logger
    for handler in list(package_logger.handlers):
        if handler not in handlers:
            package_logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in package_logger.handlers:
            package_logger.addHandler(handler)
    package_logger.setLevel(level)
