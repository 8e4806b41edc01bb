"""Core utilities: constants, errors and function objects."""

from gridpricer.core.constants import EPS, OMEGA, VAR_EPS
from gridpricer.core.errors import (
    ErrorKind,
    GridPricerError,
    InvalidUsageError,
    NumericalError,
    range_error,
    require,
    size_error,
    sort_error,
)
from gridpricer.core.function import Function, MultiFunction, as_function

__all__ = [
    "EPS",
    "OMEGA",
    "VAR_EPS",
    "ErrorKind",
    "GridPricerError",
    "InvalidUsageError",
    "NumericalError",
    "range_error",
    "require",
    "size_error",
    "sort_error",
    "Function",
    "MultiFunction",
    "as_function",
]
