"""
Discount and forward curves.

All curves are Functions of time (year fractions) defined from the
initial time onwards. Rates are continuously compounded.
"""

import math
from typing import Union

from gridpricer.core.function import Function, as_function

Rate = Union[float, Function]


def discount(yield_: Rate, initial_time: float) -> Function:
    """
    Discount curve D(t) = exp(-y(t) (t - t0)).
    
    Args:
        yield_: Constant yield or yield curve y(t)
        initial_time: t0
        
    Returns:
        Discount curve on [t0, inf)
    """
    y = as_function(yield_, initial_time)
    return Function(
        lambda t: math.exp(-y(t) * (t - initial_time)),
        initial_time,
    )


def forward(spot: float, cost_of_carry: Rate, initial_time: float) -> Function:
    """
    Forward curve F(t) = S(t0) exp(c(t) (t - t0)).
    
    Args:
        spot: Spot price at the initial time
        cost_of_carry: Constant cost of carry or its curve c(t)
        initial_time: t0
    """
    c = as_function(cost_of_carry, initial_time)
    return Function(
        lambda t: spot * math.exp(c(t) * (t - initial_time)),
        initial_time,
    )


def forward_from_dividend(
    spot: float,
    dividend_yield: float,
    discount_curve: Function,
    initial_time: float,
) -> Function:
    """
    Forward curve F(t) = S(t0) exp(-q (t - t0)) / D(t).
    
    Args:
        spot: Spot price at the initial time
        dividend_yield: Continuous dividend yield q
        discount_curve: Discount curve D(t)
        initial_time: t0
    """
    return Function(
        lambda t: spot * math.exp(-dividend_yield * (t - initial_time)) / discount_curve(t),
        max(initial_time, discount_curve.lower),
        discount_curve.upper,
    )
