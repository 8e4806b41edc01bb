"""Tests for the interpolation engines."""

import numpy as np
import pytest

from gridpricer.core.errors import ErrorKind, InvalidUsageError, NumericalError
from gridpricer.engines.interp import INTERPOLATIONS, Interp, cspline, linear, polynomial


@pytest.fixture
def samples():
    """Samples of sin on [0, 3]."""
    x = np.linspace(0.0, 3.0, 31)
    return x, np.sin(x)


class TestInterp:
    """Tests for the fitted interpolants."""

    @pytest.mark.parametrize("method", ["linear", "cspline", "steffen", "akima"])
    def test_reproduces_samples(self, method: str, samples) -> None:
        """Interpolant passes through the samples."""
        x, y = samples
        f = INTERPOLATIONS[method]().assign(x, y).interp()
        for xi, yi in zip(x[::5], y[::5]):
            assert f(xi) == pytest.approx(yi, abs=1e-10)

    @pytest.mark.parametrize("method", ["cspline", "steffen", "akima"])
    def test_accuracy_between_samples(self, method: str, samples) -> None:
        """Cubic methods are accurate between the samples."""
        x, y = samples
        f = INTERPOLATIONS[method]().assign(x, y).interp()
        assert f(1.234) == pytest.approx(np.sin(1.234), abs=1e-3)

    def test_derivatives(self, samples) -> None:
        """Cubic spline derivatives approximate cos and -sin."""
        x, y = samples
        engine = cspline().assign(x, y)
        assert engine.deriv()(1.5) == pytest.approx(np.cos(1.5), abs=1e-3)
        assert engine.deriv2()(1.5) == pytest.approx(-np.sin(1.5), abs=1e-2)

    def test_linear_second_derivative_is_zero(self, samples) -> None:
        """Piecewise linear interpolant has no curvature."""
        x, y = samples
        assert linear().assign(x, y).deriv2()(1.25) == 0.0

    def test_polynomial_derivative(self) -> None:
        """Polynomial through samples of a cubic is exact."""
        x = np.array([0.0, 1.0, 2.0, 3.0, 4.0])
        engine = polynomial().assign(x, x ** 3)
        assert engine.interp()(1.5) == pytest.approx(1.5 ** 3)
        assert engine.deriv()(1.5) == pytest.approx(3.0 * 1.5 ** 2)
        assert engine.deriv2()(1.5) == pytest.approx(6.0 * 1.5)

    def test_domain(self, samples) -> None:
        """Interpolant is defined on [x0, xN] only."""
        x, y = samples
        f = cspline().assign(x, y).interp()
        assert f.lower == 0.0 and f.upper == 3.0
        with pytest.raises(InvalidUsageError):
            f(3.5)

    def test_few_points_fall_back_to_linear(self) -> None:
        """Akima with too few points interpolates linearly."""
        f = INTERPOLATIONS["akima"]().assign([0.0, 1.0, 2.0], [0.0, 1.0, 4.0]).interp()
        assert f(1.5) == pytest.approx(2.5)


class TestErrors:
    """Invalid samples."""

    def test_unsorted(self) -> None:
        """Decreasing arguments raise a sort error."""
        with pytest.raises(NumericalError) as exc_info:
            cspline().assign([0.0, 2.0, 1.0], [0.0, 1.0, 2.0])
        assert exc_info.value.kind == ErrorKind.SORT

    def test_mismatched_sizes(self) -> None:
        """Arguments and values of different length raise a size error."""
        with pytest.raises(NumericalError) as exc_info:
            cspline().assign([0.0, 1.0, 2.0], [0.0, 1.0])
        assert exc_info.value.kind == ErrorKind.SIZE

    def test_unknown_method(self) -> None:
        """Unknown method names are rejected."""
        with pytest.raises(ValueError):
            Interp("nearest")

    def test_not_fitted(self) -> None:
        """Unfitted engine has no interpolant."""
        with pytest.raises(InvalidUsageError):
            cspline().interp()
