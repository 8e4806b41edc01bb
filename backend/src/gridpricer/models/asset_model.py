"""
Asset price models.

An AssetModel gives, at every event time, the prices of zero-coupon bonds
and forward contracts on a single asset as Slices of its Model.
"""

from abc import abstractmethod

from gridpricer.core.errors import require
from gridpricer.models.handle import ModelHandle
from gridpricer.models.slice import Slice


class AssetModel(ModelHandle):
    """Model of a single asset with deterministic or stochastic rates."""

    @abstractmethod
    def _forward(self, time_index: int, maturity: float) -> Slice:
        pass

    def forward(self, time_index: int, maturity: float) -> Slice:
        """
        Forward price for delivery at maturity.

        Args:
            time_index: Index of the event time
            maturity: Delivery time, not earlier than the event time
        """
        self._check_time(time_index)
        require(
            self.event_times[time_index] <= maturity,
            "maturity of the forward precedes the event time",
        )
        return self._forward(time_index, maturity)

    def spot(self, time_index: int) -> Slice:
        """Spot price at an event time."""
        self._check_time(time_index)
        return self.forward(time_index, self.event_times[time_index])
