"""Pricers: options on assets and interest rate instruments."""

from gridpricer.pricers.base import PricingResult, make_result
from gridpricer.pricers.options import american_put, digital_call, european, european_put
from gridpricer.pricers.rates import bond_option, swap

__all__ = [
    "PricingResult",
    "make_result",
    "american_put",
    "digital_call",
    "european",
    "european_put",
    "bond_option",
    "swap",
]
