"""
Brownian motion on a symmetric equally spaced grid.

The model is built for given event times and variances. One grid step is
used for the whole axis, chosen from the smallest variance increment
between consecutive event times. The number of nodes grows with the total
variance so that the grid covers the Gaussian tails plus the interval of
initial values. Rolling back to an earlier time integrates the variance
increment with the injected rollback scheme and truncates the grid
symmetrically.
"""

import logging
from typing import Callable, Optional, Sequence, Tuple

import numpy as np

from gridpricer.core.constants import EPS, OMEGA, VAR_EPS
from gridpricer.core.errors import require
from gridpricer.core.function import MultiFunction
from gridpricer.engines import grid
from gridpricer.engines.gauss_rollback import GaussRollback, default_chain
from gridpricer.engines.indicator import Indicator, linear
from gridpricer.engines.interp import Interp, cspline
from gridpricer.models.base import Model
from gridpricer.models.slice import Slice

logger = logging.getLogger(__name__)

# (variances, event times, interval of initial values) -> Model
BrownianFactory = Callable[[Sequence[float], Sequence[float], float], Model]

LARGE_GRID = 2 ** 20


def _min_increment(total_var: np.ndarray) -> float:
    """Smallest variance between two consecutive event times."""
    min_var = float(np.min(np.diff(total_var))) if total_var.size > 1 else OMEGA
    require(min_var > EPS, f"variance increment {min_var} is too small")
    return min_var


class BrownianModel(Model):
    """
    Discretized one-dimensional Brownian motion.

    Attributes:
        step: Step of the grid, the same for all event times
        sizes: Number of nodes at every event time, non-decreasing
        total_var: Variance of the state at every event time
    """

    def __init__(
        self,
        step_fn: Callable[[float], float],
        width_fn: Callable[[float], float],
        size_fn: Callable[[float], int],
        rollback: GaussRollback,
        ind: Indicator,
        interp: Interp,
        var: Sequence[float],
        event_times: Sequence[float],
        interval: float,
    ):
        times = np.asarray(event_times, dtype=float)
        var = np.asarray(var, dtype=float)
        require(times.ndim == 1 and times.size > 0, "event times are empty")
        require(times.shape == var.shape, "variances and event times differ in length")
        require(bool(np.all(np.diff(times) > 0)), "event times are not strictly increasing")
        require(interval >= 0, "interval of initial values is negative")

        self._rollback = rollback
        self._ind = ind
        self._interp = interp
        self._event_times = tuple(float(t) for t in times)

        self.total_var = var * (times - times[0])
        require(
            bool(np.all(np.diff(self.total_var) > 0)),
            "total variance is not strictly increasing",
        )
        self.step = step_fn(_min_increment(self.total_var))

        sizes = []
        for v in self.total_var:
            width = width_fn(v)
            require(width > 0, "width of the grid must be positive")
            n = size_fn(max((interval + width) / self.step, 2.0) + EPS)
            require(n * self.step > interval + width, "grid does not cover its width")
            sizes.append(n)
        self.sizes = tuple(sizes)
        require(
            all(a <= b for a, b in zip(self.sizes, self.sizes[1:])),
            "sizes of the grid decrease in time",
        )

        logger.debug(
            f"Brownian grid: step={self.step:.4g}, nodes {self.sizes[0]}..{self.sizes[-1]} "
            f"over {len(self.sizes)} event times"
        )
        if self.sizes[-1] > LARGE_GRID:
            logger.warning(f"Brownian grid has {self.sizes[-1]} nodes at the last event time")

    @property
    def event_times(self) -> Tuple[float, ...]:
        return self._event_times

    def number_of_states(self) -> int:
        return 1

    def number_of_nodes(self, time_index: int, dependence: Sequence[int]) -> int:
        require(len(dependence) <= 1, "Brownian model has one state")
        if len(dependence) == 0:
            return 1
        require(dependence[0] == 0, "Brownian model has one state")
        return self.sizes[time_index]

    def origin(self) -> np.ndarray:
        return np.zeros(1)

    def state(self, time_index: int, state_index: int = 0) -> Slice:
        require(state_index == 0, "Brownian model has one state")
        return Slice(self, time_index, grid.grid_state(self.sizes[time_index], self.step), (0,))

    def add_dependence(self, slice_: Slice, dependence: Sequence[int]) -> Slice:
        require(len(dependence) <= 1, "Brownian model has one state")
        if slice_.dependence or not dependence:
            return slice_
        require(slice_.values.size == 1, "scalar slice must have one value")
        n = self.sizes[slice_.time_index]
        return Slice(slice_.model, slice_.time_index, np.full(n, slice_.values[0]), dependence)

    def rollback(self, slice_: Slice, time_index: int) -> Slice:
        require(slice_.model is self, "slice belongs to another model")
        require(len(slice_.dependence) <= 1, "Brownian model has one state")
        require(
            slice_.time_index > time_index,
            f"rollback from index {slice_.time_index} to {time_index}",
        )
        dvar = self.total_var[slice_.time_index] - self.total_var[time_index]
        require(dvar > VAR_EPS, f"variance increment {dvar} is too small")

        values = slice_.values
        if values.size > 1:
            require(
                self.step * self.step <= 1.5001 * dvar,
                "variance increment is below one uniform step of the grid",
            )
            values = self._rollback.assign(values.size, self.step, dvar).rollback(values)

        n = self.number_of_nodes(time_index, slice_.dependence)
        require(n <= values.size, "grid at the earlier time is larger")
        start = (values.size - n) // 2
        return Slice(self, time_index, values[start:start + n], slice_.dependence)

    def indicator(self, slice_: Slice, barrier: float) -> Slice:
        return Slice(
            slice_.model,
            slice_.time_index,
            self._ind.indicator(slice_.values, barrier),
            slice_.dependence,
        )

    def interpolate(self, slice_: Slice) -> MultiFunction:
        if not slice_.dependence:
            value = float(slice_.values[0])
            return MultiFunction(lambda x: value, 1)
        x = grid.grid_state(slice_.values.size, self.step)
        f = self._interp.assign(x, slice_.values).interp()
        return MultiFunction.from_function(f)


def brownian_with(
    step_fn: Callable[[float], float],
    width_fn: Callable[[float], float],
    size_fn: Callable[[float], int],
    rollback: GaussRollback,
    ind: Indicator,
    interp: Interp,
) -> BrownianFactory:
    """
    Constructor of Brownian models from grid functions.

    Args:
        step_fn: Step of the grid as a function of the minimal variance
            increment between two event times
        width_fn: Width of the grid as a function of the total variance,
            without the interval of initial values
        size_fn: Number of nodes as a function of the target size
        rollback: Gaussian rollback scheme
        ind: Smoothed indicator
        interp: Interpolation engine for values at the initial time

    Returns:
        Function (var, event_times, interval) -> BrownianModel
    """

    def _factory(var: Sequence[float], event_times: Sequence[float], interval: float) -> Model:
        return BrownianModel(
            step_fn, width_fn, size_fn, rollback, ind, interp, var, event_times, interval
        )

    return _factory


def brownian(
    step_quality: float,
    width_quality: float,
    uniform_steps: int = 3,
    size: Optional[Callable[[float], int]] = None,
    rollback: Optional[GaussRollback] = None,
    ind: Optional[Indicator] = None,
    interp: Optional[Interp] = None,
) -> BrownianFactory:
    """
    Constructor of Brownian models from quality parameters.

    Args:
        step_quality: Inverse of the largest step of the grid
        width_quality: R such that the tail E[exp(X) 1{X > w/2}] <= 1/R^2
        uniform_steps: Minimal number of explicit steps between event times
        size: Rounding of the number of nodes, powers of two by default
        rollback: Gaussian rollback scheme, FFT chain by default
        ind: Smoothed indicator, linear by default
        interp: Interpolation engine, cubic spline by default

    Returns:
        Function (var, event_times, interval) -> BrownianModel
    """
    return brownian_with(
        grid.step(step_quality, uniform_steps),
        grid.width_gauss(width_quality),
        size if size is not None else grid.size2(),
        rollback if rollback is not None else default_chain("fft2"),
        ind if ind is not None else linear(),
        interp if interp is not None else cspline(),
    )
