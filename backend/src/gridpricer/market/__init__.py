"""Market curves: discount, forward, volatility and shape functions."""

from gridpricer.market.rates import discount, forward, forward_from_dividend
from gridpricer.market.volatility import bond_shape, exponential_shape, volatility

__all__ = [
    "discount",
    "forward",
    "forward_from_dividend",
    "volatility",
    "exponential_shape",
    "bond_shape",
]
