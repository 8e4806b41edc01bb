"""
Model with the grid of a base model and its own rollback.

Black and Hull-White models reuse the Brownian grid and only change the
rollback (to add discounting). Every other operation is delegated to the
base model.
"""

from typing import Callable, Sequence, Tuple

import numpy as np

from gridpricer.core.errors import require
from gridpricer.core.function import MultiFunction
from gridpricer.models.base import Model
from gridpricer.models.slice import Slice

# (slice on the base model, target time index) -> slice on the base model
TargetRollback = Callable[[Slice, int], Slice]


class SimilarModel(Model):
    """Base model with a replaced rollback operator."""

    def __init__(self, target_rollback: TargetRollback, base: Model):
        self._target_rollback = target_rollback
        self._base = base

    @property
    def base(self) -> Model:
        return self._base

    @property
    def event_times(self) -> Tuple[float, ...]:
        return self._base.event_times

    def number_of_states(self) -> int:
        return self._base.number_of_states()

    def number_of_nodes(self, time_index: int, dependence: Sequence[int]) -> int:
        return self._base.number_of_nodes(time_index, dependence)

    def origin(self) -> np.ndarray:
        return self._base.origin()

    def state(self, time_index: int, state_index: int = 0) -> Slice:
        return self._base.state(time_index, state_index).rebind(self)

    def add_dependence(self, slice_: Slice, dependence: Sequence[int]) -> Slice:
        return self._base.add_dependence(slice_.rebind(self._base), dependence).rebind(self)

    def rollback(self, slice_: Slice, time_index: int) -> Slice:
        require(slice_.model is self, "slice belongs to another model")
        result = self._target_rollback(slice_.rebind(self._base), time_index)
        require(result.model is self._base, "target rollback left the base model")
        require(result.time_index == time_index, "target rollback missed its time index")
        return result.rebind(self)

    def indicator(self, slice_: Slice, barrier: float) -> Slice:
        return self._base.indicator(slice_.rebind(self._base), barrier).rebind(self)

    def interpolate(self, slice_: Slice) -> MultiFunction:
        return self._base.interpolate(slice_.rebind(self._base))


def similar(target_rollback: TargetRollback, base: Model) -> Model:
    """
    Model on the grid of `base` whose rollback is `target_rollback`.

    Args:
        target_rollback: Rollback acting on Slices of the base model
        base: Model providing the grid and all other operations

    Returns:
        New Model
    """
    return SimilarModel(target_rollback, base)
