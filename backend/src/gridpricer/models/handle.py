"""
Mutable handle around an immutable Model.

ModelHandle is the common base of AssetModel and InterestRateModel. Its
event times can be replaced; each replacement builds a brand-new Model.
"""

from abc import ABC, abstractmethod
from typing import Sequence, Tuple

from gridpricer.core.errors import require
from gridpricer.models.base import Model
from gridpricer.models.slice import Slice


class ModelHandle(ABC):
    """
    Owner of a Model for the current event times.

    Subclasses set their parameters before calling this constructor, since
    the initial Model is built here with the single event time t0.
    """

    def __init__(self, initial_time: float):
        self._initial_time = float(initial_time)
        self._model = self._build((self._initial_time,))

    @abstractmethod
    def _build(self, event_times: Tuple[float, ...]) -> Model:
        """Model for the given event times."""
        pass

    @abstractmethod
    def _discount(self, time_index: int, maturity: float) -> Slice:
        pass

    def assign_event_times(self, event_times: Sequence[float]) -> None:
        """
        Rebuild the Model for new event times.

        Slices of the previous Model stay valid but can no longer be
        combined with Slices of the new one.

        Args:
            event_times: Strictly increasing times starting at the initial time
        """
        times = tuple(float(t) for t in event_times)
        require(len(times) > 0, "event times are empty")
        require(
            times[0] == self._initial_time,
            "first event time must be the initial time",
        )
        require(
            all(a < b for a, b in zip(times, times[1:])),
            "event times are not strictly increasing",
        )
        self._model = self._build(times)

    @property
    def model(self) -> Model:
        return self._model

    @property
    def event_times(self) -> Tuple[float, ...]:
        return self._model.event_times

    @property
    def initial_time(self) -> float:
        return self._initial_time

    def number_of_states(self) -> int:
        return self._model.number_of_states()

    def _check_time(self, time_index: int) -> None:
        require(
            0 <= time_index < len(self.event_times),
            f"time index {time_index} is out of range",
        )

    def state(self, time_index: int, state_index: int = 0) -> Slice:
        """Values of a state process at an event time."""
        self._check_time(time_index)
        return self._model.state(time_index, state_index)

    def cash(self, time_index: int, value: float) -> Slice:
        """Constant Slice at an event time."""
        self._check_time(time_index)
        return Slice.constant(self._model, time_index, value)

    def discount(self, time_index: int, maturity: float) -> Slice:
        """
        Price of the zero-coupon bond maturing at `maturity`.

        Args:
            time_index: Index of the event time
            maturity: Maturity of the bond, not earlier than the event time
        """
        self._check_time(time_index)
        require(
            self.event_times[time_index] <= maturity,
            "maturity of the bond precedes the event time",
        )
        return self._discount(time_index, maturity)
