"""
One-dimensional and multi-dimensional function objects.

Function wraps a real callable together with its domain [lower, upper] and
supports pointwise arithmetic. It is used for discount, forward, volatility
and shape curves and for interpolated payoffs. MultiFunction is a callable
of a state vector, returned by model interpolation.
"""

import math
import operator
from typing import Callable, Sequence, Union

import numpy as np

from gridpricer.core.errors import require

Number = Union[int, float]


class Function:
    """
    Real function with an interval domain.

    Attributes:
        lower: Left end of the domain
        upper: Right end of the domain
    """

    def __init__(
        self,
        f: Callable[[float], float],
        lower: float = -math.inf,
        upper: float = math.inf,
    ):
        require(lower <= upper, f"empty domain [{lower}, {upper}]")
        self._f = f
        self.lower = lower
        self.upper = upper

    @classmethod
    def constant(
        cls, value: float, lower: float = -math.inf, upper: float = math.inf
    ) -> "Function":
        """Constant function on [lower, upper]."""
        return cls(lambda t: value, lower, upper)

    def belongs(self, t: float) -> bool:
        """Check whether t lies in the domain."""
        return self.lower <= t <= self.upper

    def __call__(self, t: float) -> float:
        require(self.belongs(t), f"{t} is outside of the domain [{self.lower}, {self.upper}]")
        return float(self._f(t))

    def apply(self, op: Callable[[float], float]) -> "Function":
        """Composition op(f(t)) on the same domain."""
        f = self._f
        return Function(lambda t: op(f(t)), self.lower, self.upper)

    def _combine(self, other, op) -> "Function":
        f = self._f
        if isinstance(other, Function):
            g = other._f
            lower = max(self.lower, other.lower)
            upper = min(self.upper, other.upper)
            return Function(lambda t: op(f(t), g(t)), lower, upper)
        return Function(lambda t: op(f(t), other), self.lower, self.upper)

    def _rcombine(self, other: Number, op) -> "Function":
        f = self._f
        return Function(lambda t: op(other, f(t)), self.lower, self.upper)

    def __add__(self, other):
        return self._combine(other, operator.add)

    def __sub__(self, other):
        return self._combine(other, operator.sub)

    def __mul__(self, other):
        return self._combine(other, operator.mul)

    def __truediv__(self, other):
        return self._combine(other, operator.truediv)

    def __radd__(self, other):
        return self._rcombine(other, operator.add)

    def __rsub__(self, other):
        return self._rcombine(other, operator.sub)

    def __rmul__(self, other):
        return self._rcombine(other, operator.mul)

    def __rtruediv__(self, other):
        return self._rcombine(other, operator.truediv)

    def __neg__(self):
        return self.apply(operator.neg)

    def __repr__(self) -> str:
        return f"Function(domain=[{self.lower}, {self.upper}])"


def as_function(value: Union[Number, Function], lower: float = -math.inf) -> Function:
    """Wrap a number into a constant Function, pass a Function through."""
    if isinstance(value, Function):
        return value
    return Function.constant(float(value), lower)


class MultiFunction:
    """
    Function of a state vector.

    Attributes:
        dim: Dimension of the state
    """

    def __init__(self, f: Callable[[np.ndarray], float], dim: int):
        require(dim >= 1, "dimension of MultiFunction must be positive")
        self._f = f
        self.dim = dim

    @classmethod
    def from_function(cls, f: Function) -> "MultiFunction":
        """One-dimensional MultiFunction from a Function."""
        return cls(lambda x: f(float(x[0])), 1)

    def __call__(self, x: Union[Number, Sequence[float], np.ndarray]) -> float:
        point = np.atleast_1d(np.asarray(x, dtype=float))
        require(point.size == self.dim, f"expected a point of dimension {self.dim}")
        return float(self._f(point))
