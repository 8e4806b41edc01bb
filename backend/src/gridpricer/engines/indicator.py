"""
Smoothed indicator functions on a grid.

The indicator 1{f >= barrier} of grid values is discontinuous, and its
rollback converges slowly when the discontinuity is rounded to the nearest
node. The smoothed versions account for where the zero crossing of the
linearly interpolated function falls between two nodes.
"""

from abc import ABC, abstractmethod

import numpy as np

from gridpricer.core.errors import require


class Indicator(ABC):
    """Evaluator of 1{values >= barrier} on a grid."""

    @abstractmethod
    def indicator(self, values: np.ndarray, barrier: float) -> np.ndarray:
        """
        Indicator of the event values >= barrier.

        Args:
            values: Function values at the nodes of the grid
            barrier: Level of the barrier

        Returns:
            New array of the same length with values in [0, 1]
        """
        pass


class NaiveIndicator(Indicator):
    """Plain threshold without smoothing."""

    def indicator(self, values: np.ndarray, barrier: float) -> np.ndarray:
        return (np.asarray(values, dtype=float) >= barrier).astype(float)


def _segments(values: np.ndarray, barrier: float):
    """Shifted values and the left/right ends of every segment."""
    u = np.asarray(values, dtype=float) - barrier
    require(u.ndim == 1 and u.size > 0, "indicator needs a non-empty grid")
    return u, u[:-1], u[1:]


class LinearIndicator(Indicator):
    """
    Trapezoidal smoothing.

    Every segment contributes the fraction of its length where the linear
    interpolant is non-negative. A node averages the fractions of its two
    adjacent segments; a boundary node uses its own indicator on the
    missing side.
    """

    def indicator(self, values: np.ndarray, barrier: float) -> np.ndarray:
        u, left, right = _segments(values, barrier)
        out = np.empty_like(u)
        if u.size == 1:
            out[0] = float(u[0] >= 0)
            return out

        diff = left - right
        same = diff == 0
        safe = np.where(same, 1.0, diff)
        fraction = np.abs((np.maximum(left, 0.0) - np.maximum(right, 0.0)) / safe)
        fraction = np.where(same, (left >= 0).astype(float), fraction)

        out[0] = 0.5 * (float(u[0] >= 0) + fraction[0])
        out[1:-1] = 0.5 * (fraction[:-1] + fraction[1:])
        out[-1] = 0.5 * (fraction[-1] + float(u[-1] >= 0))
        return out


class QuadraticIndicator(Indicator):
    """
    Smoothing of second order in the step of the grid.

    Every node receives the hat-function weighted integral of the exact
    indicator of the piecewise linear interpolant over its two adjacent
    segments.
    """

    def indicator(self, values: np.ndarray, barrier: float) -> np.ndarray:
        u, left, right = _segments(values, barrier)
        out = np.empty_like(u)
        if u.size == 1:
            out[0] = float(u[0] >= 0)
            return out

        up = (left < 0) & (right >= 0)
        down = (left >= 0) & (right < 0)
        cross = up | down
        diff = np.where(cross, left - right, 1.0)
        a = np.where(cross, left / diff, 0.0)      # crossing point in [0, 1]

        flat = ((left >= 0) & (right >= 0)).astype(float)
        to_left = np.where(up, (1.0 - a) ** 2, np.where(down, 1.0 - (1.0 - a) ** 2, flat))
        to_right = np.where(up, 1.0 - a * a, np.where(down, a * a, flat))

        out[0] = 0.5 * (float(u[0] >= 0) + to_left[0])
        out[1:-1] = 0.5 * (to_right[:-1] + to_left[1:])
        out[-1] = 0.5 * (to_right[-1] + float(u[-1] >= 0))
        return out


def naive() -> Indicator:
    """Indicator without smoothing."""
    return NaiveIndicator()


def linear() -> Indicator:
    """Indicator with linear smoothing."""
    return LinearIndicator()


def quadratic() -> Indicator:
    """Indicator with quadratic smoothing."""
    return QuadraticIndicator()


INDICATORS = {
    "naive": naive,
    "linear": linear,
    "quadratic": quadratic,
}
