"""Numerical engines: Gaussian rollback, grid sizing, indicators and interpolation."""

from gridpricer.engines.gauss_rollback import (
    FAST_SCHEMES,
    GaussRollback,
    chain,
    crank_nicolson,
    default_chain,
    expl,
    fft,
    fft2,
    impl,
)
from gridpricer.engines.grid import grid_state, size, size2, step, width_gauss
from gridpricer.engines.indicator import INDICATORS, Indicator
from gridpricer.engines.interp import INTERPOLATIONS, Interp
from gridpricer.engines.closed_form import (
    black_digital_price,
    black_price,
    hw_bond_option_price,
)

__all__ = [
    "FAST_SCHEMES",
    "GaussRollback",
    "chain",
    "crank_nicolson",
    "default_chain",
    "expl",
    "fft",
    "fft2",
    "impl",
    "grid_state",
    "size",
    "size2",
    "step",
    "width_gauss",
    "INDICATORS",
    "Indicator",
    "INTERPOLATIONS",
    "Interp",
    # Closed form
    "black_digital_price",
    "black_price",
    "hw_bond_option_price",
]
