"""Tests for configuration models."""

import math

import pytest
from pydantic import ValidationError

from gridpricer.core.config import (
    BlackParams,
    GridConfig,
    HullWhiteParams,
    IndicatorType,
    SchemeType,
)
from gridpricer.models.black import black_model
from gridpricer.models.slice import Slice, at_origin


class TestGridConfig:
    """Tests for grid settings."""

    def test_defaults(self) -> None:
        """Defaults are the reference settings."""
        config = GridConfig()
        assert config.step_quality == 200.0
        assert config.width_quality == 100.0
        assert config.uniform_steps == 3
        assert config.scheme == SchemeType.FFT2
        assert config.indicator == IndicatorType.LINEAR
        assert config.power_of_two

    def test_string_values(self) -> None:
        """Enums are accepted by value."""
        config = GridConfig(scheme="crankNicolson", indicator="quadratic", interp="akima")
        assert config.scheme == SchemeType.CRANK_NICOLSON

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"step_quality": 0.0},
            {"width_quality": 1.0},
            {"uniform_steps": 0},
            {"scheme": "trinomial"},
            {"scheme": "fft2", "power_of_two": False},
        ],
    )
    def test_invalid(self, kwargs) -> None:
        """Invalid settings are rejected."""
        with pytest.raises(ValidationError):
            GridConfig(**kwargs)

    def test_plain_sizes_with_fft(self) -> None:
        """General FFT works on grids of any size."""
        factory = GridConfig(scheme="fft", power_of_two=False).brownian()
        model = factory([0.04, 0.04], [0.0, 1.0], 0.2)
        assert any(n & (n - 1) != 0 for n in model.sizes)
        value = Slice.constant(model, 1, 1.0).rollback(0)
        assert value.is_scalar()

    def test_brownian_factory_prices(self, black_params: BlackParams) -> None:
        """Factory built from the settings prices a forward."""
        factory = GridConfig(scheme="crankNicolson", uniform_steps=1).brownian()
        model = black_model(black_params.data(), 0.2, factory=factory)
        model.assign_event_times([0.0, 1.0])
        value = model.spot(1).rollback(0)
        assert at_origin(value) == pytest.approx(100.0 * math.exp(-0.02), rel=1e-5)


class TestParams:
    """Tests for flat market parameters."""

    def test_black_aliases(self) -> None:
        """Parameters accept both field names and aliases."""
        params = BlackParams(**{"yield": 0.05, "lambda": 0.1})
        assert params.yield_ == 0.05
        assert params.lambda_ == 0.1

    def test_black_data(self, black_params: BlackParams) -> None:
        """Forward curve carries the cost of carry."""
        data = black_params.data()
        assert data.forward(1.0) == pytest.approx(100.0 * math.exp(0.05))
        assert data.discount(1.0) == pytest.approx(math.exp(-0.07))

    def test_negative_spot(self) -> None:
        """Spot must be positive."""
        with pytest.raises(ValidationError):
            BlackParams(spot=-1.0)

    def test_hull_white_data(self) -> None:
        """Hull-White parameters build a model with zero shape at t0."""
        data = HullWhiteParams().data()
        assert data.shape(0.0) == 0.0
        assert data.volatility(0.0) == pytest.approx(0.01)
