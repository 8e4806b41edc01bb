"""
Interest rate instruments priced by backward induction.
"""

import logging
import time

from gridpricer.core.errors import require
from gridpricer.models.interest_rate_model import InterestRateModel
from gridpricer.models.slice import maximum
from gridpricer.pricers.base import PricingResult, make_result
from gridpricer.products.instruments import Option, Swap

logger = logging.getLogger(__name__)


def bond_option(
    option: Option,
    bond_maturity: float,
    model: InterestRateModel,
    is_call: bool = True,
) -> PricingResult:
    """
    Option on a zero-coupon bond with unit notional.

    Args:
        option: Number of options, exercise time and strike price of the bond
        bond_maturity: Maturity of the underlying bond
        model: Model of interest rates
        is_call: True for call, False for put

    Returns:
        PricingResult with the price as a function of the initial state
    """
    start_time = time.perf_counter()
    require(
        model.initial_time < option.maturity <= bond_maturity,
        "bond option needs t0 < maturity <= bond maturity",
    )
    model.assign_event_times([model.initial_time, option.maturity])

    bond = model.discount(1, bond_maturity)
    intrinsic = bond - option.strike if is_call else option.strike - bond
    payoff = maximum(intrinsic, 0.0) * option.number
    result = make_result(payoff.rollback(0), start_time)
    logger.debug(
        f"Bond option T={option.maturity}, S={bond_maturity}, K={option.strike}: "
        f"{result.value:.6f}"
    )
    return result


def swap(swap_: Swap, model: InterestRateModel) -> PricingResult:
    """
    Interest rate swap starting at the initial time.

    The float leg of a period starting at t and ending at t + period is
    worth notional (1 - P(t, t + period)) at t, the fixed leg is worth
    notional rate period P(t, t + period).

    Args:
        swap_: Parameters of the swap and the side of the contract
        model: Model of interest rates

    Returns:
        PricingResult with the price as a function of the initial state
    """
    start_time = time.perf_counter()
    resets = swap_.reset_times(model.initial_time)
    model.assign_event_times(resets)

    fixed_payment = swap_.notional * swap_.rate * swap_.period
    value = model.cash(len(resets) - 1, 0.0)
    for i in range(len(resets) - 1, -1, -1):
        value = value.rollback(i)
        bond = model.discount(i, resets[i] + swap_.period)
        fixed = bond * fixed_payment
        float_leg = (1.0 - bond) * swap_.notional
        value = value + (fixed - float_leg if swap_.pay_float else float_leg - fixed)

    result = make_result(value, start_time)
    logger.debug(
        f"Swap rate={swap_.rate}, {swap_.number_of_payments} payments: {result.value:.6f}"
    )
    return result
