"""
Error taxonomy for the grid pricing engine.

Two tiers are distinguished:

- InvalidUsageError: a violated precondition or postcondition. This is a
  programming error and calling code is not expected to recover from it.
- NumericalError: a catchable input-validation error carrying a kind
  (range, sort or size) and a short description of the call site.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Categories of catchable numerical errors."""
    
    RANGE = "range"   # parameter out of its domain
    SORT = "sort"     # input is not sorted
    SIZE = "size"     # container or array has an invalid size


class GridPricerError(Exception):
    """Base class for all errors raised by gridpricer."""


class InvalidUsageError(GridPricerError, ValueError):
    """Raised when a precondition or an invariant of the engine is violated."""


class NumericalError(GridPricerError, ValueError):
    """
    Catchable error with a categorized kind.
    
    Attributes:
        kind: Category of the error
        where: Short description of the call site
    """
    
    def __init__(self, kind: ErrorKind, where: str):
        self.kind = kind
        self.where = where
        super().__init__(f"{kind.value} error in {where}")


def range_error(where: str) -> NumericalError:
    """Parameter out of range."""
    return NumericalError(ErrorKind.RANGE, where)


def sort_error(where: str) -> NumericalError:
    """Input that has to be sorted is not."""
    return NumericalError(ErrorKind.SORT, where)


def size_error(where: str) -> NumericalError:
    """Array or container of a wrong size."""
    return NumericalError(ErrorKind.SIZE, where)


def require(condition: bool, message: str) -> None:
    """
    Check a precondition.
    
    Args:
        condition: Condition that must hold
        message: Description of the violated condition
        
    Raises:
        InvalidUsageError: If condition is false
    """
    if not condition:
        raise InvalidUsageError(message)
