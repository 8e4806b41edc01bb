"""
Shared pytest fixtures for gridpricer tests.

Provides flat market parameters, grid configurations and models.
"""

import pytest

from gridpricer.core.config import BlackParams, GridConfig, HullWhiteParams
from gridpricer.models.black import BlackModel, black_model
from gridpricer.models.brownian import brownian
from gridpricer.models.hull_white import HullWhiteModel, hull_white_model
from gridpricer.products.instruments import Option

STEP_QUALITY = 200.0
WIDTH_QUALITY = 100.0
INTERVAL = 0.2


@pytest.fixture
def grid_config() -> GridConfig:
    """Standard grid configuration for tests."""
    return GridConfig(step_quality=STEP_QUALITY, width_quality=WIDTH_QUALITY)


@pytest.fixture
def black_params() -> BlackParams:
    """Flat market: yield 7%, spot 100, dividend yield 2%, volatility 20%."""
    return BlackParams(yield_=0.07, spot=100.0, dividend_yield=0.02, sigma=0.2)


@pytest.fixture
def hull_white_params() -> HullWhiteParams:
    """Flat yield 7% with sigma 1% and mean reversion 2%."""
    return HullWhiteParams(yield_=0.07, sigma=0.01, lambda_=0.02)


@pytest.fixture
def black(black_params: BlackParams) -> BlackModel:
    """Black model with the default grid settings."""
    return black_model(black_params.data(), INTERVAL, STEP_QUALITY, WIDTH_QUALITY)


@pytest.fixture
def hull_white(hull_white_params: HullWhiteParams) -> HullWhiteModel:
    """Hull-White model with the default grid settings."""
    return hull_white_model(hull_white_params.data(), INTERVAL, STEP_QUALITY, WIDTH_QUALITY)


@pytest.fixture
def brownian_factory():
    """Brownian factory with the default grid settings."""
    return brownian(STEP_QUALITY, WIDTH_QUALITY)


@pytest.fixture
def at_the_money() -> Option:
    """One at-the-money option maturing in one year."""
    return Option(number=1.0, maturity=1.0, strike=100.0)
