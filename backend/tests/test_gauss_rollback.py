"""Tests for the Gaussian rollback schemes."""

import math

import numpy as np
import pytest

from gridpricer.core.errors import ErrorKind, InvalidUsageError, NumericalError
from gridpricer.engines import gauss_rollback as gr
from gridpricer.engines.grid import grid_state

SIZE = 256
STEP = 0.02
VAR = 0.04
WIDTH = 0.3  # standard deviation of the Gaussian bump


def bump(x: np.ndarray, var: float = 0.0) -> np.ndarray:
    """E[f(x + X)] for f(x) = exp(-x^2 / (2 s^2)) and X ~ N(0, var)."""
    s2 = WIDTH * WIDTH + var
    return WIDTH / math.sqrt(s2) * np.exp(-x * x / (2.0 * s2))


SCHEMES = {
    "explicit": (gr.expl, 5e-3),
    "implicit": (gr.impl, 5e-3),
    "crankNicolson": (gr.crank_nicolson, 1e-2),
    "fft2": (gr.fft2, 1e-8),
    "fft": (gr.fft, 1e-8),
    "chain_fft2": (lambda: gr.default_chain("fft2"), 5e-3),
    "chain_cn": (lambda: gr.default_chain("crankNicolson"), 5e-3),
}


class TestSchemes:
    """Accuracy of every scheme against the exact Gaussian convolution."""

    @pytest.mark.parametrize("name", sorted(SCHEMES))
    def test_constant_is_preserved(self, name: str) -> None:
        """Rollback of a constant is the same constant."""
        factory, _ = SCHEMES[name]
        roll = factory().assign(SIZE, STEP, VAR)
        np.testing.assert_allclose(roll.rollback(np.ones(SIZE)), 1.0, rtol=1e-10)

    @pytest.mark.parametrize("name", sorted(SCHEMES))
    def test_gaussian_bump(self, name: str) -> None:
        """Rollback of a Gaussian bump matches the closed-form convolution."""
        factory, tol = SCHEMES[name]
        roll = factory().assign(SIZE, STEP, VAR)
        x = roll.state()
        np.testing.assert_allclose(roll.rollback(bump(x)), bump(x, VAR), atol=tol)

    def test_input_is_not_modified(self) -> None:
        """Rollback works on a copy of the values."""
        roll = gr.expl().assign(SIZE, STEP, VAR)
        values = bump(roll.state())
        original = values.copy()
        roll.rollback(values)
        np.testing.assert_array_equal(values, original)

    @pytest.mark.parametrize("name", sorted(SCHEMES))
    def test_variance_additivity(self, name: str) -> None:
        """Two rollbacks equal one rollback of the total variance."""
        factory, tol = SCHEMES[name]
        x = grid_state(SIZE, STEP)
        twice = factory().assign(SIZE, STEP, 0.01).rollback(
            factory().assign(SIZE, STEP, 0.03).rollback(bump(x))
        )
        once = factory().assign(SIZE, STEP, 0.04).rollback(bump(x))
        np.testing.assert_allclose(twice, once, atol=tol)

    @pytest.mark.parametrize("name", sorted(SCHEMES))
    def test_wrong_number_of_values(self, name: str) -> None:
        """Values must have the size of the grid."""
        factory, _ = SCHEMES[name]
        roll = factory().assign(SIZE, STEP, VAR)
        with pytest.raises(NumericalError) as exc_info:
            roll.rollback(np.ones(SIZE - 1))
        assert exc_info.value.kind == ErrorKind.SIZE


class TestErrors:
    """Invalid parameters of the schemes."""

    def test_fft2_needs_power_of_two(self) -> None:
        """Radix-2 FFT refuses a grid of 100 nodes."""
        with pytest.raises(InvalidUsageError):
            gr.fft2().assign(100, STEP, VAR)

    def test_fft_accepts_any_size(self) -> None:
        """General FFT works on a grid of 100 nodes."""
        roll = gr.fft().assign(100, STEP, VAR)
        np.testing.assert_allclose(roll.rollback(np.ones(100)), 1.0, rtol=1e-12)

    @pytest.mark.parametrize("p", [0.6, 0.0, -0.1])
    def test_explicit_out_of_range(self, p: float) -> None:
        """Explicit scheme is unstable beyond p = 0.5."""
        with pytest.raises(NumericalError) as exc_info:
            gr.expl(p)
        assert exc_info.value.kind == ErrorKind.RANGE

    @pytest.mark.parametrize("name", sorted(SCHEMES))
    @pytest.mark.parametrize("var", [0.0, -0.01])
    def test_variance_must_be_positive(self, name: str, var: float) -> None:
        """Binding to a non-positive variance is a range error."""
        factory, _ = SCHEMES[name]
        with pytest.raises(NumericalError) as exc_info:
            factory().assign(SIZE, STEP, var)
        assert exc_info.value.kind == ErrorKind.RANGE

    @pytest.mark.parametrize("factory", [gr.expl, gr.fft, lambda: gr.default_chain("fft")])
    def test_step_must_be_positive(self, factory) -> None:
        """Binding to a non-positive step is a range error."""
        with pytest.raises(NumericalError) as exc_info:
            factory().assign(SIZE, 0.0, VAR)
        assert exc_info.value.kind == ErrorKind.RANGE

    @pytest.mark.parametrize(
        "scheme",
        [
            gr.ExplicitScheme(1.0 / 3.0, 16, 0.1, 0.04),
            gr.ThetaScheme(0.5, lambda h: 1.0, 16, 0.1, 0.04),
            gr.SpectralScheme(True, 16, 0.1, 0.04),
        ],
    )
    def test_scheme_checks_its_size(self, scheme) -> None:
        """Bound schemes refuse values of another length."""
        with pytest.raises(NumericalError) as exc_info:
            scheme.apply(np.ones(15))
        assert exc_info.value.kind == ErrorKind.SIZE

    def test_explicit_bound_is_inclusive(self) -> None:
        """p = 0.5 is still stable."""
        roll = gr.expl(0.5).assign(SIZE, STEP, VAR)
        assert roll.size == SIZE

    def test_unknown_fast_scheme(self) -> None:
        """Default chain knows three fast schemes."""
        with pytest.raises(InvalidUsageError):
            gr.default_chain("trinomial")


class TestChain:
    """Tests for the chain of schemes."""

    def test_small_variance_uses_explicit_only(self) -> None:
        """Below the brackets the chain equals the explicit scheme."""
        x = grid_state(64, 0.1)
        values = np.maximum(x, 0.0)
        chained = gr.chain(10, gr.fft2(), 5).assign(64, 0.1, 0.01).rollback(values)
        explicit = gr.expl().assign(64, 0.1, 0.01).rollback(values)
        np.testing.assert_allclose(chained, explicit, rtol=1e-14)

    def test_zero_brackets(self) -> None:
        """Chain without explicit and implicit steps is the fast scheme."""
        x = grid_state(SIZE, STEP)
        chained = gr.chain(0, gr.fft2(), 0).assign(SIZE, STEP, VAR).rollback(bump(x))
        fast = gr.fft2().assign(SIZE, STEP, VAR).rollback(bump(x))
        np.testing.assert_allclose(chained, fast, atol=1e-14)

    def test_smooths_kink(self) -> None:
        """Rollback of max(x, 0) matches the Bachelier formula in the interior."""
        from scipy.stats import norm

        roll = gr.default_chain("fft2").assign(SIZE, STEP, VAR)
        x = roll.state()
        rolled = roll.rollback(np.maximum(x, 0.0))
        sd = math.sqrt(VAR)
        exact = x * norm.cdf(x / sd) + sd * norm.pdf(x / sd)
        middle = slice(SIZE // 4, 3 * SIZE // 4)
        np.testing.assert_allclose(rolled[middle], exact[middle], atol=1e-3)


class TestGreeks:
    """Derivatives computed with the rollback."""

    def test_delta(self) -> None:
        """Delta matches the derivative of the convolution."""
        roll = gr.fft2().assign(SIZE, STEP, VAR)
        x = roll.state()
        rolled, delta = roll.rollback_with_delta(bump(x))
        s2 = WIDTH * WIDTH + VAR
        np.testing.assert_allclose(rolled, bump(x, VAR), atol=1e-8)
        np.testing.assert_allclose(delta, -x / s2 * bump(x, VAR), atol=1e-6)

    def test_delta_against_finite_difference(self) -> None:
        """Delta agrees with central differences of the rolled values."""
        roll = gr.default_chain("fft2").assign(SIZE, STEP, VAR)
        x = roll.state()
        rolled, delta = roll.rollback_with_delta(bump(x))
        fd = (rolled[2:] - rolled[:-2]) / (2.0 * STEP)
        middle = slice(SIZE // 4, 3 * SIZE // 4)
        np.testing.assert_allclose(delta[1:-1][middle], fd[middle], atol=5e-3)

    def test_gamma(self) -> None:
        """Gamma matches the second derivative of the convolution."""
        roll = gr.fft2().assign(SIZE, STEP, VAR)
        x = roll.state()
        rolled, delta, gamma = roll.rollback_with_gamma(bump(x))
        s2 = WIDTH * WIDTH + VAR
        expected = (x * x / (s2 * s2) - 1.0 / s2) * bump(x, VAR)
        np.testing.assert_allclose(gamma, expected, atol=1e-5)
        np.testing.assert_allclose(delta, -x / s2 * bump(x, VAR), atol=1e-6)

    def test_vega(self) -> None:
        """Vega is gamma times the standard deviation."""
        roll = gr.fft2().assign(SIZE, STEP, VAR)
        gamma = np.linspace(-1.0, 1.0, SIZE)
        np.testing.assert_allclose(roll.vega(gamma), gamma * math.sqrt(VAR))
