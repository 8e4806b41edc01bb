"""
Closed-form reference prices.

All formulas are written on the quantities the grid models work with: a
discount factor to the payment time, the forward of the underlying for
that time and the total standard deviation of its logarithm. The
Jamshidian price of an option on a zero-coupon bond in the Hull-White
model reduces to the Black formula on the forward bond price.
"""

import math
from typing import Tuple

from scipy.stats import norm

from gridpricer.core.constants import EPS
from gridpricer.core.function import Function


def black_d(forward: float, strike: float, std: float) -> Tuple[float, float]:
    """
    Arguments of the normal distribution in the Black formula.

    Args:
        forward: Forward price of the underlying
        strike: Strike price
        std: Standard deviation of log(underlying) at maturity, positive

    Returns:
        Tuple (d1, d2) with d2 = d1 - std
    """
    d1 = (math.log(forward / strike) + 0.5 * std * std) / std
    return d1, d1 - std


def black_price(
    discount_factor: float,
    forward: float,
    strike: float,
    std: float,
    is_call: bool = True,
) -> float:
    """
    Black price of a European option.

    Args:
        discount_factor: Discount factor to the maturity
        forward: Forward price of the underlying for the maturity
        strike: Strike price
        std: Standard deviation of log(underlying) at maturity
        is_call: True for call, False for put

    Returns:
        Option price
    """
    sign = 1.0 if is_call else -1.0
    if std <= EPS:
        return discount_factor * max(sign * (forward - strike), 0.0)
    d1, d2 = black_d(forward, strike, std)
    value = sign * (forward * norm.cdf(sign * d1) - strike * norm.cdf(sign * d2))
    return float(discount_factor * value)


def black_digital_price(
    discount_factor: float, forward: float, strike: float, std: float
) -> float:
    """Cash-or-nothing call paying 1 if the underlying ends at or above the strike."""
    if std <= EPS:
        return discount_factor * float(forward >= strike)
    _, d2 = black_d(forward, strike, std)
    return float(discount_factor * norm.cdf(d2))


def hw_bond_option_price(
    discount: Function,
    sigma: float,
    lambda_: float,
    initial_time: float,
    option_maturity: float,
    bond_maturity: float,
    strike: float,
    is_call: bool = True,
) -> float:
    """
    Option on a zero-coupon bond in the Hull-White model.

    Args:
        discount: Initial discount curve
        sigma: Volatility of the short rate
        lambda_: Mean reversion of the short rate
        initial_time: t0
        option_maturity: T, exercise time of the option
        bond_maturity: S, maturity of the underlying bond, S >= T
        strike: Strike price of the bond
        is_call: True for call, False for put

    Returns:
        Option price per unit bond
    """
    p_t = discount(option_maturity)
    p_s = discount(bond_maturity)
    tau = option_maturity - initial_time
    if abs(lambda_) > EPS:
        b = -math.expm1(-lambda_ * (bond_maturity - option_maturity)) / lambda_
        spread = math.sqrt(-math.expm1(-2.0 * lambda_ * tau) / (2.0 * lambda_))
    else:
        b = bond_maturity - option_maturity
        spread = math.sqrt(tau)
    return black_price(p_t, p_s / p_t, strike, sigma * b * spread, is_call)
