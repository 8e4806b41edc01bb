"""
Options on a single asset priced by backward induction.

Every pricer assigns its own event times to the model, builds the payoff
at maturity from Slices and rolls it back to the initial time.

Example:
    >>> model = black_model(BlackParams().data(), 0.2, 200, 100)
    >>> result = european(Option(1.0, 1.0, 100.0), model)
    >>> print(f"PV: {result.value:.4f}")
"""

import logging
import time
from typing import Sequence

from gridpricer.core.errors import require
from gridpricer.models.asset_model import AssetModel
from gridpricer.models.slice import indicator, maximum
from gridpricer.pricers.base import PricingResult, make_result
from gridpricer.products.instruments import Option

logger = logging.getLogger(__name__)


def _maturity_times(option: Option, model: AssetModel) -> None:
    require(
        option.maturity > model.initial_time,
        "maturity of the option must be after the initial time",
    )
    model.assign_event_times([model.initial_time, option.maturity])


def european(option: Option, model: AssetModel) -> PricingResult:
    """
    European call option.

    Args:
        option: Number of options, maturity and strike
        model: Model of the underlying asset

    Returns:
        PricingResult with the price as a function of the initial state
    """
    start_time = time.perf_counter()
    _maturity_times(option, model)
    payoff = maximum(model.spot(1) - option.strike, 0.0) * option.number
    result = make_result(payoff.rollback(0), start_time)
    logger.debug(f"European call K={option.strike}: {result.value:.6f}")
    return result


def european_put(option: Option, model: AssetModel) -> PricingResult:
    """European put option, same arguments as `european`."""
    start_time = time.perf_counter()
    _maturity_times(option, model)
    payoff = maximum(option.strike - model.spot(1), 0.0) * option.number
    result = make_result(payoff.rollback(0), start_time)
    logger.debug(f"European put K={option.strike}: {result.value:.6f}")
    return result


def digital_call(option: Option, model: AssetModel) -> PricingResult:
    """
    Cash-or-nothing call paying `number` if the spot at maturity is not
    below the strike.
    """
    start_time = time.perf_counter()
    _maturity_times(option, model)
    payoff = indicator(model.spot(1), option.strike) * option.number
    return make_result(payoff.rollback(0), start_time)


def american_put(
    option: Option, exercise_times: Sequence[float], model: AssetModel
) -> PricingResult:
    """
    Put option exercisable at a finite set of times.

    Args:
        option: Number of options and strike; the maturity has to be the
            last exercise time
        exercise_times: Strictly increasing exercise times after t0
        model: Model of the underlying asset

    Returns:
        PricingResult with the price as a function of the initial state
    """
    start_time = time.perf_counter()
    times = [float(t) for t in exercise_times]
    require(len(times) > 0, "at least one exercise time is required")
    require(times[0] > model.initial_time, "exercise times must be after the initial time")
    require(
        abs(times[-1] - option.maturity) < 1e-12,
        "last exercise time must be the maturity",
    )
    model.assign_event_times([model.initial_time] + times)

    n = len(times)
    value = maximum(option.strike - model.spot(n), 0.0) * option.number
    for i in range(n - 1, 0, -1):
        value = value.rollback(i)
        exercise = maximum(option.strike - model.spot(i), 0.0) * option.number
        value = maximum(value, exercise)
    result = make_result(value.rollback(0), start_time)
    logger.debug(f"American put K={option.strike}, {n} exercise times: {result.value:.6f}")
    return result
