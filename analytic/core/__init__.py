"""Ambient services shared by the math core: configuration, errors, logging."""

from .config import Settings, get_settings
from .errors import (
    AnalyticMathError,
    DivisionByZeroError,
    DomainViolationError,
    OutOfRangeError,
    ShapeMismatchError,
    error_payload,
)
from .logging import get_context_logger, get_logger, setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "AnalyticMathError",
    "DomainViolationError",
    "DivisionByZeroError",
    "ShapeMismatchError",
    "OutOfRangeError",
    "error_payload",
    "get_logger",
    "get_context_logger",
    "setup_logging",
]
