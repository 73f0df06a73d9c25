"""
Library exceptions and error payloads.

Every failure raised by the math core is an AnalyticMathError. Each kind also
derives from the closest builtin exception so callers can keep catching
ValueError, ZeroDivisionError or IndexError.
"""

from typing import Any, Dict, Optional

from .logging import get_logger

logger = get_logger(__name__)


# Custom Exceptions

class AnalyticMathError(Exception):
    """Base exception for analytic math errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class DomainViolationError(AnalyticMathError, ValueError):
    """Raised when an operation is undefined for the given real input"""


class DivisionByZeroError(AnalyticMathError, ZeroDivisionError):
    """Raised when dividing by a zero scalar or a complex number of modulus 0"""


class ShapeMismatchError(AnalyticMathError, ValueError):
    """Raised when a matrix has the wrong shape for an operation"""

    def __init__(self, message: str, shape: Optional[tuple] = None, other: Optional[tuple] = None):
        details: Dict[str, Any] = {}
        if shape is not None:
            details["shape"] = list(shape)
        if other is not None:
            details["other_shape"] = list(other)
        super().__init__(message, details)


class OutOfRangeError(AnalyticMathError, IndexError):
    """Raised for an element or coefficient index outside valid bounds"""

    def __init__(self, message: str, index: Any = None, bounds: Any = None):
        details: Dict[str, Any] = {}
        if index is not None:
            details["index"] = index
        if bounds is not None:
            details["bounds"] = bounds
        super().__init__(message, details)


# Error payloads

def error_payload(error: Exception, include_details: bool = True) -> Dict[str, Any]:
    """Create standardized error payload"""

    error_data: Dict[str, Any] = {
        "error": {
            "type": error.__class__.__name__,
            "message": str(error),
        }
    }

    if isinstance(error, AnalyticMathError) and include_details:
        error_data["error"]["details"] = error.details

    # Callers report the error themselves; this record is for tracing
    logger.debug(
        f"Error occurred: {error}",
        extra={
            "extra_data": {
                "error_type": error.__class__.__name__,
                **(error.details if isinstance(error, AnalyticMathError) else {}),
            }
        },
    )

    return error_data
