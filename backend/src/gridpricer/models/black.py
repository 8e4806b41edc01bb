"""
Black model of a single asset.

The forward price for delivery at T follows

    F(t, T) = F(t0, T) exp(shape(T) X(t) - 0.5 (vol(t) shape(T))^2 (t - t0)),

where X is a Brownian motion with variance vol(t)^2 (t - t0) at t and
shape(t0) = 1. Interest rates are deterministic, so the rollback is the
rollback of the Brownian motion times the discount factor between the two
event times.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from gridpricer.core.constants import EPS
from gridpricer.core.errors import require
from gridpricer.core.function import Function, as_function
from gridpricer.market.volatility import exponential_shape, volatility as volatility_curve
from gridpricer.models.asset_model import AssetModel
from gridpricer.models.base import Model
from gridpricer.models.brownian import BrownianFactory, brownian
from gridpricer.models.similar import TargetRollback, similar
from gridpricer.models.slice import Slice, exp


@dataclass(frozen=True)
class BlackData:
    """
    Parameters of the Black model.

    Attributes:
        discount: Discount curve D(t0, T)
        forward: Forward curve F(t0, T)
        volatility: Volatility curve of the state process
        shape: Shape of the forward volatility, equal to 1 at t0
        initial_time: t0
    """

    discount: Function
    forward: Function
    volatility: Function
    shape: Function
    initial_time: float

    def __post_init__(self) -> None:
        require(
            abs(self.shape(self.initial_time) - 1.0) < EPS,
            "shape of the Black model must be 1 at the initial time",
        )


def make_data(
    discount: Function,
    forward: Function,
    volatility: Union[float, Function],
    initial_time: float,
    lambda_: Optional[float] = None,
    shape: Optional[Function] = None,
) -> BlackData:
    """
    Build the parameters of the Black model.

    Args:
        discount: Discount curve
        forward: Forward curve
        volatility: Constant volatility or volatility curve
        initial_time: t0
        lambda_: Mean reversion of the spot price; with it the volatility
            curve is sigma sqrt((exp(2 lambda t) - 1) / (2 lambda t)) and the
            shape is exp(-lambda (T - t0))
        shape: Explicit shape curve, 1 by default

    Returns:
        BlackData
    """
    if lambda_ is not None:
        require(not isinstance(volatility, Function), "mean reversion needs a constant sigma")
        require(shape is None, "shape is defined by the mean reversion")
        vol = volatility_curve(float(volatility), lambda_, initial_time)
        shape = exponential_shape(lambda_, initial_time)
    else:
        vol = as_function(volatility, initial_time)
        if shape is None:
            shape = Function.constant(1.0, initial_time)
    return BlackData(discount, forward, vol, shape, initial_time)


def _discounted_rollback(base: Model, discount: Function) -> TargetRollback:
    def _rollback(slice_: Slice, time_index: int) -> Slice:
        require(slice_.time_index >= time_index, "rollback to a later time")
        times = base.event_times
        factor = discount(times[slice_.time_index]) / discount(times[time_index])
        return slice_.rollback(time_index) * factor

    return _rollback


class BlackModel(AssetModel):
    """
    AssetModel implemented as the Black model.

    Attributes:
        data: Parameters of the model
        interval: Width of the interval of initial values of the state
    """

    def __init__(self, data: BlackData, interval: float, factory: BrownianFactory):
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
        return similar(_discounted_rollback(base, self.data.discount), base)

    def _discount(self, time_index: int, maturity: float) -> Slice:
        t = self.event_times[time_index]
        factor = self.data.discount(maturity) / self.data.discount(t)
        return Slice.constant(self.model, time_index, factor)

    def _forward(self, time_index: int, maturity: float) -> Slice:
        t = self.event_times[time_index]
        shape = self.data.shape(maturity)
        vol = self.data.volatility(t)
        c = (
            math.log(self.data.forward(maturity))
            - 0.5 * (vol * shape) ** 2 * (t - self.data.initial_time)
        )
        return exp(self.model.state(time_index, 0) * shape + c)


def black_model(
    data: BlackData,
    interval: float,
    step_quality: Optional[float] = None,
    width_quality: Optional[float] = None,
    uniform_steps: int = 1,
    factory: Optional[BrownianFactory] = None,
) -> BlackModel:
    """
    AssetModel implemented as the Black model.

    Either pass the quality parameters of the grid or a ready Brownian
    factory.

    Args:
        data: Parameters of the model
        interval: Interval of initial values for relative changes of the spot
        step_quality: Inverse of the largest step of the grid
        width_quality: Quality of the width of the grid
        uniform_steps: Minimal number of uniform steps between event times
        factory: Constructor of the Brownian model
    """
    if factory is None:
        require(
            step_quality is not None and width_quality is not None,
            "grid qualities or a Brownian factory are required",
        )
        factory = brownian(step_quality, width_quality, uniform_steps)
    return BlackModel(data, interval, factory)
