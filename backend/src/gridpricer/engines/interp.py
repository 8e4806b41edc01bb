"""
Interpolation engines backed by scipy.interpolate.

An Interp recipe is bound to sample points with `assign(x, y)`; the bound
engine returns the interpolant and its first two derivatives as Functions
defined on [x[0], x[-1]]. When there are too few points for the requested
method, linear interpolation is used instead.
"""

from typing import Callable, Optional, Sequence

import numpy as np
from scipy.interpolate import (
    Akima1DInterpolator,
    BSpline,
    CubicSpline,
    KroghInterpolator,
    PchipInterpolator,
    make_interp_spline,
)

from gridpricer.core.errors import require, size_error, sort_error
from gridpricer.core.function import Function


def _linear(x: np.ndarray, y: np.ndarray):
    return make_interp_spline(x, y, k=1)


def _cspline(x: np.ndarray, y: np.ndarray):
    return CubicSpline(x, y, bc_type="natural")


def _steffen(x: np.ndarray, y: np.ndarray):
    return PchipInterpolator(x, y)


def _akima(x: np.ndarray, y: np.ndarray):
    return Akima1DInterpolator(x, y)


def _polynomial(x: np.ndarray, y: np.ndarray):
    return KroghInterpolator(x, y)


# name -> (builder, minimal number of points)
_METHODS = {
    "linear": (_linear, 2),
    "cspline": (_cspline, 3),
    "steffen": (_steffen, 3),
    "akima": (_akima, 5),
    "polynomial": (_polynomial, 3),
}


class Interp:
    """
    Interpolation engine.

    An unbound engine only knows its method. `assign` fits it to samples.

    Attributes:
        method: Name of the interpolation method
    """

    def __init__(self, method: str, x: Optional[np.ndarray] = None, fitted=None):
        if method not in _METHODS:
            raise ValueError(f"Unknown interpolation method: {method}")
        self.method = method
        self._x = x
        self._fitted = fitted

    def assign(self, x: Sequence[float], y: Sequence[float]) -> "Interp":
        """
        Fit the engine to sample points.

        Args:
            x: Arguments, non-decreasing
            y: Values at the arguments

        Returns:
            New fitted engine of the same method

        Raises:
            NumericalError: size error for mismatched or too short samples,
                sort error for unsorted arguments
        """
        x = np.asarray(x, dtype=float)
        y = np.asarray(y, dtype=float)
        if x.ndim != 1 or x.shape != y.shape or x.size < 2:
            raise size_error("interpolation samples")
        if np.any(np.diff(x) < 0):
            raise sort_error("interpolation arguments")

        builder, min_size = _METHODS[self.method]
        if x.size <= min_size:
            builder = _linear
        return Interp(self.method, x, builder(x, y))

    def _function(self, f: Callable[[float], float]) -> Function:
        return Function(f, float(self._x[0]), float(self._x[-1]))

    def _derivative(self, order: int) -> Callable[[float], float]:
        require(self._fitted is not None, "interpolation engine is not fitted")
        fitted = self._fitted
        if isinstance(fitted, KroghInterpolator):
            return lambda t: fitted.derivative(t, order)
        if isinstance(fitted, BSpline) and order > fitted.k:
            return lambda t: 0.0
        return fitted.derivative(order)

    def interp(self) -> Function:
        """The interpolant."""
        require(self._fitted is not None, "interpolation engine is not fitted")
        return self._function(self._fitted)

    def deriv(self) -> Function:
        """First derivative of the interpolant."""
        return self._function(self._derivative(1))

    def deriv2(self) -> Function:
        """Second derivative of the interpolant."""
        return self._function(self._derivative(2))


def linear() -> Interp:
    """Piecewise linear interpolation."""
    return Interp("linear")


def cspline() -> Interp:
    """Natural cubic spline."""
    return Interp("cspline")


def steffen() -> Interp:
    """Monotone piecewise cubic interpolation."""
    return Interp("steffen")


def akima() -> Interp:
    """Akima spline."""
    return Interp("akima")


def polynomial() -> Interp:
    """Polynomial through all the points."""
    return Interp("polynomial")


INTERPOLATIONS = {
    "linear": linear,
    "cspline": cspline,
    "steffen": steffen,
    "akima": akima,
    "polynomial": polynomial,
}
