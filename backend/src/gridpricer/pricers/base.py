"""
Pricing result shared by all grid pricers.
"""

import time
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from gridpricer.core.function import MultiFunction
from gridpricer.models.slice import Slice, at_origin, interpolate


@dataclass
class PricingResult:
    """
    Price of an instrument at the initial time.

    Attributes:
        value: Price at the origin of the state process
        function: Price as a function of the initial state
        event_times: Event times used by the backward induction
        computation_time_ms: Wall time of the pricing
    """

    value: float
    function: MultiFunction
    event_times: Tuple[float, ...] = ()
    computation_time_ms: float = 0.0

    def __call__(self, state: float) -> float:
        return self.function(state)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "value": self.value,
            "event_times": list(self.event_times),
            "computation_time_ms": self.computation_time_ms,
        }


def make_result(price: Slice, start_time: float) -> PricingResult:
    """
    Collect the price Slice at the initial time into a PricingResult.

    Args:
        price: Slice at time index 0
        start_time: Value of time.perf_counter() when pricing started
    """
    function = interpolate(price)
    value = at_origin(price)
    end_time = time.perf_counter()
    return PricingResult(
        value=value,
        function=function,
        event_times=price.model.event_times,
        computation_time_ms=(end_time - start_time) * 1000,
    )
