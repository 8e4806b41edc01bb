"""
gridpricer - Backward induction on Gaussian grids.

A library for pricing derivatives by rolling payoffs back on a discretized
one-dimensional Brownian motion:
- Gaussian rollback schemes (explicit, implicit, Crank-Nicolson, FFT, chains)
- Grid sizing from accuracy targets
- Smoothed indicators and interpolation at the initial time
- Slice algebra over an abstract Model
- Black model of an asset and Hull-White model of interest rates

Example:
    >>> from gridpricer import BlackParams, GridConfig, Option, black_model, european
    >>> model = black_model(BlackParams().data(), 0.2, factory=GridConfig().brownian(1))
    >>> result = european(Option(1.0, 1.0, 100.0), model)
    >>> print(f"PV: {result.value:.4f}")
"""

__version__ = "0.1.0"

# Errors
from gridpricer.core.errors import (
    ErrorKind,
    GridPricerError,
    InvalidUsageError,
    NumericalError,
)
from gridpricer.core.function import Function, MultiFunction

# Configuration
from gridpricer.core.config import (
    BlackParams,
    GridConfig,
    HullWhiteParams,
    IndicatorType,
    InterpType,
    SchemeType,
)

# Engines
from gridpricer.engines.gauss_rollback import GaussRollback, default_chain
from gridpricer.engines.closed_form import black_price, hw_bond_option_price

# Models
from gridpricer.models import (
    AssetModel,
    InterestRateModel,
    Model,
    Slice,
    black_model,
    brownian,
    hull_white_model,
)

# Products and pricing
from gridpricer.products import CashFlow, Option, Swap
from gridpricer.pricers import (
    PricingResult,
    american_put,
    bond_option,
    digital_call,
    european,
    european_put,
    swap,
)

__all__ = [
    # Version
    "__version__",
    # Errors
    "ErrorKind",
    "GridPricerError",
    "InvalidUsageError",
    "NumericalError",
    "Function",
    "MultiFunction",
    # Configuration
    "BlackParams",
    "GridConfig",
    "HullWhiteParams",
    "IndicatorType",
    "InterpType",
    "SchemeType",
    # Engines
    "GaussRollback",
    "default_chain",
    "black_price",
    "hw_bond_option_price",
    # Models
    "AssetModel",
    "InterestRateModel",
    "Model",
    "Slice",
    "black_model",
    "brownian",
    "hull_white_model",
    # Products and pricing
    "CashFlow",
    "Option",
    "Swap",
    "PricingResult",
    "american_put",
    "bond_option",
    "digital_call",
    "european",
    "european_put",
    "swap",
]
