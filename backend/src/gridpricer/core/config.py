"""
Validated configuration of grids and flat market parameters.

Pydantic models turning plain numbers into Brownian factories and model
data objects.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from gridpricer.engines import grid
from gridpricer.engines.gauss_rollback import default_chain
from gridpricer.engines.indicator import INDICATORS
from gridpricer.engines.interp import INTERPOLATIONS
from gridpricer.market.rates import discount, forward_from_dividend
from gridpricer.models import black, hull_white
from gridpricer.models.brownian import BrownianFactory, brownian


# ============================================================================
# Enums for strict typing
# ============================================================================

class SchemeType(str, Enum):
    """Fast layer of the default chain rollback."""
    CRANK_NICOLSON = "crankNicolson"
    FFT2 = "fft2"
    FFT = "fft"


class IndicatorType(str, Enum):
    """Smoothing of indicator functions."""
    NAIVE = "naive"
    LINEAR = "linear"
    QUADRATIC = "quadratic"


class InterpType(str, Enum):
    """Interpolation at the initial time."""
    LINEAR = "linear"
    CSPLINE = "cspline"
    STEFFEN = "steffen"
    AKIMA = "akima"
    POLYNOMIAL = "polynomial"


# ============================================================================
# Grid
# ============================================================================

class GridConfig(BaseModel):
    """Numerical settings of the Brownian grid."""
    step_quality: float = Field(default=200.0, gt=0, description="Inverse of the largest step")
    width_quality: float = Field(default=100.0, gt=1, description="Tail quality R of the width")
    uniform_steps: int = Field(default=3, ge=1, description="Minimal uniform steps per interval")
    scheme: SchemeType = SchemeType.FFT2
    indicator: IndicatorType = IndicatorType.LINEAR
    interp: InterpType = InterpType.CSPLINE
    power_of_two: bool = Field(default=True, description="Round sizes up to powers of two")

    @model_validator(mode='after')
    def validate_scheme_size(self) -> 'GridConfig':
        """Radix-2 FFT needs grids whose size is a power of two."""
        if self.scheme == SchemeType.FFT2 and not self.power_of_two:
            raise ValueError("fft2 scheme requires power_of_two sizes")
        return self

    def brownian(self, uniform_steps: Optional[int] = None) -> BrownianFactory:
        """
        Brownian factory built from the settings.

        Args:
            uniform_steps: Overrides the configured number of uniform steps
        """
        return brownian(
            self.step_quality,
            self.width_quality,
            uniform_steps if uniform_steps is not None else self.uniform_steps,
            size=grid.size2() if self.power_of_two else grid.size(),
            rollback=default_chain(self.scheme.value),
            ind=INDICATORS[self.indicator.value](),
            interp=INTERPOLATIONS[self.interp.value](),
        )


# ============================================================================
# Flat market parameters
# ============================================================================

class BlackParams(BaseModel):
    """Flat market of a single asset."""
    yield_: float = Field(default=0.07, alias="yield", description="Continuous yield")
    spot: float = Field(default=100.0, gt=0)
    dividend_yield: float = Field(default=0.02, description="Continuous dividend yield")
    sigma: float = Field(default=0.2, ge=0, description="Volatility of the spot")
    lambda_: Optional[float] = Field(default=None, alias="lambda", description="Mean reversion")
    initial_time: float = 0.0

    model_config = {"populate_by_name": True}

    def data(self) -> black.BlackData:
        """Parameters of the Black model."""
        d = discount(self.yield_, self.initial_time)
        f = forward_from_dividend(self.spot, self.dividend_yield, d, self.initial_time)
        return black.make_data(d, f, self.sigma, self.initial_time, lambda_=self.lambda_)


class HullWhiteParams(BaseModel):
    """Flat yield curve with Hull-White dynamics of the short rate."""
    yield_: float = Field(default=0.07, alias="yield", description="Continuous yield")
    sigma: float = Field(default=0.01, ge=0, description="Volatility of the short rate")
    lambda_: float = Field(default=0.02, alias="lambda", description="Mean reversion")
    initial_time: float = 0.0

    model_config = {"populate_by_name": True}

    def data(self) -> hull_white.HullWhiteData:
        """Parameters of the Hull-White model."""
        d = discount(self.yield_, self.initial_time)
        return hull_white.make_data(d, self.sigma, self.lambda_, self.initial_time)
