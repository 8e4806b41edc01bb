"""
Volatility and shape curves for one-factor models.
"""

import math

from gridpricer.core.constants import EPS
from gridpricer.core.errors import require
from gridpricer.core.function import Function


def volatility(sigma: float, lambda_: float, initial_time: float) -> Function:
    """
    Average volatility of an exponentially scaled Brownian motion.
    
    V(t) = sigma sqrt((exp(2 lambda (t - t0)) - 1) / (2 lambda (t - t0))),
    so that V(t)^2 (t - t0) is the variance of the integral of
    sigma exp(lambda s) dW(s) over [t0, t].
    
    Args:
        sigma: Volatility at the initial time
        lambda_: Exponential rate
        initial_time: t0
        
    Returns:
        Volatility curve on [t0, inf)
    """
    require(sigma >= 0, "volatility must be non-negative")

    def _vol(t: float) -> float:
        x = 2.0 * lambda_ * (t - initial_time)
        if abs(x) <= EPS:
            return sigma
        return sigma * math.sqrt(math.expm1(x) / x)

    return Function(_vol, initial_time)


def exponential_shape(lambda_: float, initial_time: float) -> Function:
    """Shape exp(-lambda (t - t0)), equal to one at t0."""
    return Function(lambda t: math.exp(-lambda_ * (t - initial_time)), initial_time)


def bond_shape(lambda_: float, initial_time: float) -> Function:
    """
    Shape (1 - exp(-lambda (t - t0))) / lambda, equal to zero at t0.
    
    For lambda close to zero the shape is t - t0.
    """

    def _shape(t: float) -> float:
        dt = t - initial_time
        if abs(lambda_) <= EPS:
            return dt
        return -math.expm1(-lambda_ * dt) / lambda_

    return Function(_shape, initial_time)
