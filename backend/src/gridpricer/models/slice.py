"""
Slice: payoff values at one event time.

A Slice holds a reference to its Model, the index of the event time, the
sorted set of state indices its values depend on and the values
themselves. An empty dependence means a constant (scalar) Slice with one
value. Slices are immutable: arithmetic and all operators return new
Slices.

Example:
    >>> spot = model.spot(1)
    >>> payoff = maximum(spot - strike, 0.0)
    >>> price = at_origin(rollback(payoff, 0))
"""

import numbers
import operator
from typing import Callable, Optional, Sequence, Tuple, Union

import numpy as np

from gridpricer.core.errors import require, size_error
from gridpricer.core.function import MultiFunction
from gridpricer.models.base import Model

Operand = Union["Slice", float]


class Slice:
    """
    Random variable at one event time, represented on the model's grid.

    Attributes:
        model: Model supporting the Slice
        time_index: Index of the event time
        dependence: Sorted state indices the values depend on
        values: Read-only array of values
    """

    def __init__(
        self,
        model: Model,
        time_index: int,
        values: Union[Sequence[float], np.ndarray],
        dependence: Sequence[int] = (),
    ):
        dep = tuple(sorted(set(int(i) for i in dependence)))
        data = np.array(values, dtype=float).ravel()
        expected = model.number_of_nodes(time_index, dep)
        if data.size != expected:
            raise size_error(
                f"slice at time index {time_index}: {data.size} values, {expected} nodes"
            )
        data.flags.writeable = False
        self._model = model
        self._time_index = time_index
        self._dependence = dep
        self._values = data

    @classmethod
    def constant(cls, model: Model, time_index: int, value: float) -> "Slice":
        """Scalar Slice."""
        return cls(model, time_index, [value])

    @property
    def model(self) -> Model:
        return self._model

    @property
    def time_index(self) -> int:
        return self._time_index

    @property
    def dependence(self) -> Tuple[int, ...]:
        return self._dependence

    @property
    def values(self) -> np.ndarray:
        return self._values

    def is_scalar(self) -> bool:
        return self._values.size == 1

    def rebind(self, model: Model) -> "Slice":
        """Same values attached to another model sharing the grid."""
        return Slice(model, self._time_index, self._values, self._dependence)

    def _replace(self, values: np.ndarray) -> "Slice":
        return Slice(self._model, self._time_index, values, self._dependence)

    def apply(self, f: Callable[[np.ndarray], np.ndarray]) -> "Slice":
        """Slice with values f(values); f has to act elementwise."""
        return self._replace(f(self._values))

    def rollback(self, time_index: int) -> "Slice":
        """
        Conditional expectation at an earlier event time.

        Args:
            time_index: Target index, not later than the current one

        Returns:
            New Slice at time_index
        """
        require(
            time_index <= self._time_index,
            f"cannot roll back from index {self._time_index} to {time_index}",
        )
        if time_index == self._time_index:
            return self
        return self._model.rollback(self, time_index)

    # arithmetic

    def _check_compatible(self, other: "Slice") -> None:
        require(other.model is self._model, "slices belong to different models")
        require(
            other.time_index == self._time_index,
            f"slices at different time indices {self._time_index} and {other.time_index}",
        )

    def _binary(self, other, op) -> "Slice":
        if isinstance(other, Slice):
            return _combine(self, other, op)
        if isinstance(other, numbers.Real):
            return self._replace(op(self._values, float(other)))
        return NotImplemented

    def _reflected(self, other, op) -> "Slice":
        if isinstance(other, numbers.Real):
            return self._replace(op(float(other), self._values))
        return NotImplemented

    def __add__(self, other: Operand) -> "Slice":
        return self._binary(other, operator.add)

    def __sub__(self, other: Operand) -> "Slice":
        return self._binary(other, operator.sub)

    def __mul__(self, other: Operand) -> "Slice":
        return self._binary(other, operator.mul)

    def __truediv__(self, other: Operand) -> "Slice":
        return self._binary(other, operator.truediv)

    def __radd__(self, other: float) -> "Slice":
        return self._reflected(other, operator.add)

    def __rsub__(self, other: float) -> "Slice":
        return self._reflected(other, operator.sub)

    def __rmul__(self, other: float) -> "Slice":
        return self._reflected(other, operator.mul)

    def __rtruediv__(self, other: float) -> "Slice":
        return self._reflected(other, operator.truediv)

    def __neg__(self) -> "Slice":
        return self._replace(-self._values)

    def __pow__(self, power: float) -> "Slice":
        if not isinstance(power, numbers.Real):
            return NotImplemented
        return self._replace(np.power(self._values, float(power)))

    def __abs__(self) -> "Slice":
        return self._replace(np.abs(self._values))

    def __len__(self) -> int:
        return self._values.size

    def __repr__(self) -> str:
        return (
            f"Slice(time_index={self._time_index}, dependence={self._dependence}, "
            f"nodes={self._values.size})"
        )


def _align(a: Slice, b: Slice) -> Tuple[Slice, Slice]:
    """Broadcast two Slices of the same model to a common dependence."""
    da, db = set(a.dependence), set(b.dependence)
    model = a.model
    if da == db:
        return a, b
    if da > db:
        return a, model.add_dependence(b, a.dependence)
    if db > da:
        return model.add_dependence(a, b.dependence), b
    return model.add_dependence(a, b.dependence), model.add_dependence(b, a.dependence)


def _combine(a: Slice, b: Slice, op) -> Slice:
    """Elementwise op of two Slices; constant operands skip the broadcast."""
    a._check_compatible(b)
    if not b.dependence:
        return a._replace(op(a.values, float(b.values[0])))
    if not a.dependence:
        return b._replace(op(float(a.values[0]), b.values))
    left, right = _align(a, b)
    return left._replace(op(left.values, right.values))


def _pairwise(a: Operand, b: Operand, op) -> Slice:
    if isinstance(a, Slice) and isinstance(b, Slice):
        return _combine(a, b, op)
    if isinstance(a, Slice):
        return a._replace(op(a.values, float(b)))
    require(isinstance(b, Slice), "at least one argument has to be a Slice")
    return b._replace(op(float(a), b.values))


def maximum(a: Operand, b: Operand) -> Slice:
    """Elementwise maximum of Slices and numbers."""
    return _pairwise(a, b, np.maximum)


def minimum(a: Operand, b: Operand) -> Slice:
    """Elementwise minimum of Slices and numbers."""
    return _pairwise(a, b, np.minimum)


def power(slice_: Slice, p: float) -> Slice:
    return slice_ ** p


def absolute(slice_: Slice) -> Slice:
    return abs(slice_)


def exp(slice_: Slice) -> Slice:
    return slice_.apply(np.exp)


def log(slice_: Slice) -> Slice:
    return slice_.apply(np.log)


def sqrt(slice_: Slice) -> Slice:
    return slice_.apply(np.sqrt)


def indicator(a: Operand, b: Operand) -> Slice:
    """
    Smoothed indicator of the event a >= b.

    Args:
        a: Slice or barrier
        b: Barrier or Slice

    Returns:
        For a Slice and a number, the model's indicator. For a number and a
        Slice, one minus the indicator of the reversed event. For two
        Slices, the indicator of a - b >= 0.
    """
    if isinstance(a, Slice) and isinstance(b, Slice):
        return indicator(a - b, 0.0)
    if isinstance(a, Slice):
        return a.model.indicator(a, float(b))
    require(isinstance(b, Slice), "at least one argument has to be a Slice")
    return 1.0 - indicator(b, float(a))


def rollback(slice_: Slice, time_index: int) -> Slice:
    """Conditional expectation of a Slice at an earlier event time."""
    return slice_.rollback(time_index)


def interpolate(
    slice_: Slice, states: Optional[Union[int, Sequence[int]]] = None
) -> MultiFunction:
    """
    Continuous function of the state built from the values of a Slice.

    The Slice is first broadcast to all the states of its model.

    Args:
        slice_: Slice to interpolate
        states: Strictly increasing indices of the states that remain
            arguments of the result, or their number counted from the first
            state. Other states are fixed at the origin. All states if None.

    Returns:
        MultiFunction of dimension len(states)
    """
    model = slice_.model
    n = model.number_of_states()
    full = model.add_dependence(slice_, tuple(range(n)))
    f = model.interpolate(full)
    if states is None:
        return f
    kept = list(range(states)) if isinstance(states, numbers.Integral) else [int(i) for i in states]
    require(len(kept) > 0, "interpolation needs at least one state")
    require(
        all(a < b for a, b in zip(kept, kept[1:])),
        f"states {kept} are not strictly increasing",
    )
    require(0 <= kept[0] and kept[-1] < n, f"model has {n} states, got {kept}")
    if len(kept) == n:
        return f
    origin = np.asarray(model.origin(), dtype=float)

    def section(x: np.ndarray) -> float:
        point = origin.copy()
        point[kept] = x
        return f(point)

    return MultiFunction(section, len(kept))


def at_origin(slice_: Slice) -> float:
    """Value of a Slice at the origin of the state process."""
    if not slice_.dependence:
        return float(slice_.values[0])
    return interpolate(slice_)(slice_.model.origin())
