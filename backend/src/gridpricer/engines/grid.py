"""
Grid sizing for the Gaussian rollback engine.

Translates numerical accuracy targets into concrete grid parameters:
- Step of the grid from the minimal variance between two event times
- Half-width of the grid from the cumulative variance
- Number of nodes (plain or power of two for the radix-2 FFT)
"""

import math
from typing import Callable

import numpy as np

from gridpricer.core.constants import EPS, VAR_EPS
from gridpricer.core.errors import require


def step(step_quality: float, uniform_steps: int) -> Callable[[float], float]:
    """
    Step of the grid as a function of the minimal variance increment.
    
    The first bound 1/Q controls accuracy. The second one guarantees that
    at least `uniform_steps` stable explicit steps fit between any two
    consecutive event times.
    
    Args:
        step_quality: Q, the inverse of the largest admissible step
        uniform_steps: N, minimal number of uniform steps between event times
        
    Returns:
        Function dvar -> min(1/Q, sqrt(1.5 * dvar / N))
    """
    require(step_quality > 0, "step quality must be positive")
    require(uniform_steps >= 1, "number of uniform steps must be positive")

    def _step(dvar: float) -> float:
        require(dvar > VAR_EPS, f"variance increment {dvar} is too small")
        return min(1.0 / step_quality, math.sqrt(1.5 * dvar / uniform_steps))

    return _step


def width_gauss(width_quality: float) -> Callable[[float], float]:
    """
    Half-width of the grid as a function of the cumulative variance.
    
    For X ~ N(0, var) the returned width w satisfies
    E[exp(X) 1{X > w/2}] <= 1/R^2.
    
    Args:
        width_quality: R, must be greater than 1
        
    Returns:
        Function var -> 2 (var + sqrt(var (var + 4 ln R))) + EPS
    """
    require(width_quality > 1, "width quality must be greater than 1")
    log_quality = math.log(width_quality)

    def _width(var: float) -> float:
        width = 2.0 * (var + math.sqrt(var * (var + 4.0 * log_quality))) + EPS
        require(width > 0, "width of the grid must be positive")
        return width

    return _width


def size() -> Callable[[float], int]:
    """Number of nodes: the smallest integer not below the target."""

    def _size(target: float) -> int:
        n = int(math.ceil(target))
        require(n >= target, "size of the grid is below its target")
        return n

    return _size


def size2() -> Callable[[float], int]:
    """Number of nodes: the smallest power of two not below the target."""

    def _size2(target: float) -> int:
        n = 2 ** int(math.ceil(math.log2(target)))
        require(n >= target, "size of the grid is below its target")
        return n

    return _size2


def grid_state(n: int, h: float) -> np.ndarray:
    """
    Symmetric equally spaced grid centered at zero.
    
    Args:
        n: Number of nodes
        h: Step of the grid
        
    Returns:
        Array -(n - 1) h / 2 + i h, i = 0, ..., n - 1
    """
    return -0.5 * (n - 1) * h + h * np.arange(n, dtype=float)
