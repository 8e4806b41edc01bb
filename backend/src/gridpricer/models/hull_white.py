"""
Hull-White model of interest rates.

The state X is a Brownian motion with variance vol(t)^2 (t - t0). With
A = shape(t), B = shape(T) and C = shape(t_n), where t_n is the last event
time, the price at t of the zero-coupon bond maturing at T is

    P(t, T) = D(T) / D(t) exp(X(t) (B - A) - 0.5 (B - A)(A + B - 2C) var(t)).

Rollback works in the numeraire of the bond maturing at t_n: values are
divided by P(., t_n), rolled back as a Brownian motion and multiplied by
P(., t_n) at the earlier time.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from gridpricer.core.constants import EPS
from gridpricer.core.errors import require
from gridpricer.core.function import Function
from gridpricer.market.volatility import bond_shape, volatility as volatility_curve
from gridpricer.models.base import Model
from gridpricer.models.brownian import BrownianFactory, brownian
from gridpricer.models.interest_rate_model import InterestRateModel
from gridpricer.models.similar import TargetRollback, similar
from gridpricer.models.slice import Slice, exp


@dataclass(frozen=True)
class HullWhiteData:
    """
    Parameters of the Hull-White model.

    Attributes:
        discount: Initial discount curve D(t0, T)
        volatility: Volatility curve of the state process
        shape: Shape of the bond volatility, equal to 0 at t0
        initial_time: t0
    """

    discount: Function
    volatility: Function
    shape: Function
    initial_time: float

    def __post_init__(self) -> None:
        require(
            abs(self.shape(self.initial_time)) < EPS,
            "shape of the Hull-White model must be 0 at the initial time",
        )


def make_data(
    discount: Function,
    sigma: float,
    lambda_: float,
    initial_time: float,
) -> HullWhiteData:
    """
    Parameters of the Hull-White model with constant coefficients.

    Args:
        discount: Initial discount curve
        sigma: Volatility of the short rate
        lambda_: Mean reversion of the short rate
        initial_time: t0
    """
    return HullWhiteData(
        discount,
        volatility_curve(sigma, lambda_, initial_time),
        bond_shape(lambda_, initial_time),
        initial_time,
    )


def _bond(data: HullWhiteData, model: Model, time_index: int, maturity: float) -> Slice:
    """Zero-coupon bond prices on the grid of `model`."""
    times = model.event_times
    t = times[time_index]
    require(maturity >= t, "maturity of the bond precedes the event time")
    a = data.shape(t)
    b = data.shape(maturity)
    c = data.shape(times[-1])
    var = data.volatility(t) ** 2 * (t - data.initial_time)
    factor = data.discount(maturity) / data.discount(t)
    factor *= math.exp(-0.5 * (b - a) * (a + b - 2.0 * c) * var)
    return exp(model.state(time_index, 0) * (b - a)) * factor


def _bond_rollback(base: Model, data: HullWhiteData) -> TargetRollback:
    def _rollback(slice_: Slice, time_index: int) -> Slice:
        require(slice_.time_index >= time_index, "rollback to a later time")
        maturity = base.event_times[-1]
        forward = slice_ / _bond(data, base, slice_.time_index, maturity)
        return forward.rollback(time_index) * _bond(data, base, time_index, maturity)

    return _rollback


class HullWhiteModel(InterestRateModel):
    """
    InterestRateModel implemented as the Hull-White model.

    Attributes:
        data: Parameters of the model
        interval: Width of the interval of initial values of the state
    """

    def __init__(self, data: HullWhiteData, interval: float, factory: BrownianFactory):
        self.data = data
        self.interval = interval
        self._factory = factory
        super().__init__(data.initial_time)

    def _build(self, event_times: Tuple[float, ...]) -> Model:
        require(
            event_times[0] == self.data.initial_time,
            "first event time must be the initial time",
        )
        var = [self.data.volatility(t) ** 2 for t in event_times]
        base = self._factory(var, event_times, self.interval)
        return similar(_bond_rollback(base, self.data), base)

    def _discount(self, time_index: int, maturity: float) -> Slice:
        if self.event_times[time_index] == maturity:
            return Slice.constant(self.model, time_index, 1.0)
        return _bond(self.data, self.model, time_index, maturity)


def hull_white_model(
    data: HullWhiteData,
    interval: float,
    step_quality: Optional[float] = None,
    width_quality: Optional[float] = None,
    uniform_steps: int = 5,
    factory: Optional[BrownianFactory] = None,
) -> HullWhiteModel:
    """
    InterestRateModel implemented as the Hull-White model.

    Args:
        data: Parameters of the model
        interval: Interval of initial values of the short rate
        step_quality: Inverse of the largest step of the grid
        width_quality: Quality of the width of the grid
        uniform_steps: Minimal number of uniform steps between event times
        factory: Constructor of the Brownian model, overrides the qualities
    """
    if factory is None:
        require(
            step_quality is not None and width_quality is not None,
            "grid qualities or a Brownian factory are required",
        )
        factory = brownian(step_quality, width_quality, uniform_steps)
    return HullWhiteModel(data, interval, factory)
