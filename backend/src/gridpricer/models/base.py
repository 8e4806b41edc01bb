"""
Model contract for backward induction on event times.

A Model describes a Markov state process observed at a strictly increasing
sequence of event times. Payoffs are represented by Slices, and the model
provides the operators acting on them: broadcast to more state dimensions,
conditional expectation back to an earlier event time, smoothed
indicators and interpolation at the initial time.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Sequence, Tuple

import numpy as np

if TYPE_CHECKING:
    from gridpricer.core.function import MultiFunction
    from gridpricer.models.slice import Slice


class Model(ABC):
    """Abstract state process on a fixed axis of event times."""

    @property
    @abstractmethod
    def event_times(self) -> Tuple[float, ...]:
        """Strictly increasing event times, the first one is the initial time."""
        pass

    @abstractmethod
    def number_of_states(self) -> int:
        """Dimension of the state process."""
        pass

    @abstractmethod
    def number_of_nodes(self, time_index: int, dependence: Sequence[int]) -> int:
        """Number of values of a Slice with the given dependence."""
        pass

    @abstractmethod
    def origin(self) -> np.ndarray:
        """State vector at the initial time."""
        pass

    @abstractmethod
    def state(self, time_index: int, state_index: int = 0) -> "Slice":
        """Values of a state process at an event time."""
        pass

    @abstractmethod
    def add_dependence(self, slice_: "Slice", dependence: Sequence[int]) -> "Slice":
        """Broadcast a Slice so that it also depends on the given state indices."""
        pass

    @abstractmethod
    def rollback(self, slice_: "Slice", time_index: int) -> "Slice":
        """Conditional expectation of a Slice at an earlier event time."""
        pass

    @abstractmethod
    def indicator(self, slice_: "Slice", barrier: float) -> "Slice":
        """Smoothed indicator of the event slice >= barrier."""
        pass

    @abstractmethod
    def interpolate(self, slice_: "Slice") -> "MultiFunction":
        """Continuous function of the state built from the values of a Slice."""
        pass
