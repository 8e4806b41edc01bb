"""Tests for errors, function objects and market curves."""

import math

import pytest

import gridpricer.core as core
from gridpricer.core import constants
from gridpricer.core.errors import (
    ErrorKind,
    GridPricerError,
    InvalidUsageError,
    NumericalError,
    range_error,
    require,
    size_error,
    sort_error,
)
from gridpricer.core.function import Function, MultiFunction, as_function
from gridpricer.market import discount, forward, forward_from_dividend, volatility


class TestErrors:
    """Tests for the error taxonomy."""

    def test_factories(self) -> None:
        """Factories set the kind and the call site."""
        for factory, kind in ((range_error, ErrorKind.RANGE), (sort_error, ErrorKind.SORT),
                              (size_error, ErrorKind.SIZE)):
            error = factory("somewhere")
            assert error.kind == kind
            assert error.where == "somewhere"
            assert str(error) == f"{kind.value} error in somewhere"

    def test_hierarchy(self) -> None:
        """Both tiers are GridPricerErrors and ValueErrors."""
        assert issubclass(NumericalError, GridPricerError)
        assert issubclass(InvalidUsageError, GridPricerError)
        assert issubclass(NumericalError, ValueError)
        assert not issubclass(InvalidUsageError, NumericalError)

    def test_require(self) -> None:
        """require raises InvalidUsageError with the message."""
        require(True, "never raised")
        with pytest.raises(InvalidUsageError, match="broken"):
            require(False, "broken")


class TestFunction:
    """Tests for Function and MultiFunction."""

    def test_domain(self) -> None:
        """Calls outside of the domain are usage errors."""
        f = Function(lambda t: t * t, 0.0, 2.0)
        assert f.belongs(1.0) and not f.belongs(3.0)
        assert f(1.5) == 2.25
        with pytest.raises(InvalidUsageError):
            f(-0.1)

    def test_arithmetic_intersects_domains(self) -> None:
        """Binary operations keep the common domain."""
        f = Function(lambda t: t, 0.0, 2.0)
        g = Function(lambda t: 1.0, 1.0, 3.0)
        h = f * 2.0 + g
        assert (h.lower, h.upper) == (1.0, 2.0)
        assert h(1.5) == 4.0
        assert (1.0 - f)(0.5) == 0.5
        assert (-f)(0.5) == -0.5

    def test_as_function(self) -> None:
        """Numbers become constants, Functions pass through."""
        f = as_function(0.3, 1.0)
        assert f(5.0) == 0.3 and f.lower == 1.0
        assert as_function(f) is f

    def test_multi_function(self) -> None:
        """MultiFunction checks the dimension of its argument."""
        f = MultiFunction(lambda x: float(x[0] + 2 * x[1]), 2)
        assert f([1.0, 2.0]) == 5.0
        with pytest.raises(InvalidUsageError):
            f(1.0)
        g = MultiFunction.from_function(Function(math.exp))
        assert g(0.0) == 1.0


class TestCurves:
    """Tests for the standard market curves."""

    def test_discount(self) -> None:
        """Discount curve from a flat yield."""
        d = discount(0.05, 1.0)
        assert d(1.0) == 1.0
        assert d(3.0) == pytest.approx(math.exp(-0.1))
        with pytest.raises(InvalidUsageError):
            d(0.5)

    def test_forward(self) -> None:
        """Forward from the cost of carry and from dividends agree."""
        d = discount(0.07, 0.0)
        f1 = forward(100.0, 0.05, 0.0)
        f2 = forward_from_dividend(100.0, 0.02, d, 0.0)
        assert f1(2.0) == pytest.approx(f2(2.0))

    def test_volatility(self) -> None:
        """Volatility equals sigma at t0 and grows with positive lambda."""
        v = volatility(0.2, 0.1, 0.0)
        assert v(0.0) == 0.2
        assert v(1.0) == pytest.approx(0.2 * math.sqrt(math.expm1(0.2) / 0.2))
        assert v(1.0) > 0.2


class TestConstants:
    """Tests for the shared tolerances."""

    def test_values(self) -> None:
        """Only the tolerances in use are defined."""
        names = {name for name in vars(constants) if name.isupper()}
        assert names == {"EPS", "VAR_EPS", "OMEGA"}
        assert constants.EPS == 1e-10
        assert constants.VAR_EPS == 1e-12
        assert constants.OMEGA == 1e20

    def test_exports(self) -> None:
        """Every exported name of the core package exists."""
        for name in core.__all__:
            assert hasattr(core, name), name
