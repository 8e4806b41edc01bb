"""
Gaussian rollback schemes.

A rollback scheme computes, on a symmetric equally spaced grid, the
conditional expectation of grid values with respect to a centered Gaussian
increment of a given variance, i.e. it solves the heat equation over the
"time" equal to this variance. Beyond the boundary the grid is extended
flat (second derivative of the boundary node equals that of its neighbor).

Available schemes:
- Explicit finite differences
- Theta schemes (fully implicit and Crank-Nicolson)
- Spectral schemes based on the real FFT (radix-2 and general size)
- Chain of explicit, fast and implicit schemes

Every scheme is used in two phases: an unbound recipe is turned into a
bound instance with `GaussRollback.assign(size, h, var)`.

Example:
    >>> roll = default_chain("fft2").assign(256, 0.01, 0.04)
    >>> values = roll.rollback(np.maximum(roll.state(), 0.0))
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Callable, Tuple, Union

import numpy as np
from scipy import fft as sp_fft
from scipy.linalg import solve_banded

from gridpricer.core.constants import EPS
from gridpricer.core.errors import range_error, require, size_error
from gridpricer.engines.grid import grid_state

logger = logging.getLogger(__name__)

FAST_SCHEMES = ("crankNicolson", "fft2", "fft")


class RollbackScheme(ABC):
    """One-step conditional expectation operator for a Gaussian increment."""

    @abstractmethod
    def bind(self, size: int, h: float, var: float) -> "RollbackScheme":
        """Create a new instance of the same scheme for concrete grid parameters."""
        pass

    @abstractmethod
    def apply(self, values: np.ndarray) -> np.ndarray:
        """
        Roll back grid values.

        Args:
            values: Private copy of the grid values, may be overwritten

        Returns:
            Rolled back values
        """
        pass


class GaussRollback:
    """
    Handle of a Gaussian rollback scheme.

    An unbound handle (size 0) is a recipe. Calling `assign` returns a bound
    handle for a grid of `size` nodes with step `h` that integrates the
    variance `var`. Handles are immutable and cheap to copy.
    """

    def __init__(
        self,
        scheme: RollbackScheme,
        size: int = 0,
        h: float = 0.0,
        var: float = 0.0,
    ):
        self._scheme = scheme
        self._size = size
        self._h = h
        self._var = var

    @property
    def size(self) -> int:
        return self._size

    @property
    def step(self) -> float:
        return self._h

    @property
    def var(self) -> float:
        return self._var

    def assign(self, size: int, h: float, var: float) -> "GaussRollback":
        """
        Bind the scheme to concrete grid parameters.

        Args:
            size: Number of nodes of the grid
            h: Step of the grid
            var: Variance of the Gaussian increment

        Returns:
            New bound handle
        """
        return GaussRollback(self._scheme.bind(size, h, var), size, h, var)

    def state(self) -> np.ndarray:
        """Coordinates of the grid nodes."""
        return grid_state(self._size, self._h)

    def rollback(self, values: np.ndarray) -> np.ndarray:
        """
        Conditional expectation of the grid values.

        Args:
            values: Values on the grid, length must equal `size`

        Returns:
            New array with the rolled back values
        """
        work = np.array(values, dtype=float)
        if work.ndim != 1 or work.size != self._size:
            raise size_error(f"rollback of {work.size} values on a grid of {self._size} nodes")
        return self._scheme.apply(work)

    def rollback_with_delta(self, values: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Rolled back values together with their first derivative in the state.

        Uses the identity dE[f(x + X)]/dx = E[f(x + X) X] / var, which
        costs two rollbacks.

        Returns:
            Tuple (values, delta)
        """
        require(self._var > EPS, "variance of the rollback is too small")
        x = self.state()
        values = np.asarray(values, dtype=float)
        delta = self.rollback(values * x)
        rolled = self.rollback(values)
        delta = (delta - rolled * x) / self._var
        return rolled, delta

    def rollback_with_gamma(
        self, values: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Rolled back values with their first and second derivatives in the state.

        Costs three rollbacks.

        Returns:
            Tuple (values, delta, gamma)
        """
        require(self._var > EPS, "variance of the rollback is too small")
        x = self.state()
        x2 = x * x
        values = np.asarray(values, dtype=float)
        delta = self.rollback(values * x)
        gamma = self.rollback(values * x2)
        rolled = self.rollback(values)
        gamma += -2.0 * x * delta + x2 * rolled
        gamma /= self._var
        gamma -= rolled
        gamma /= self._var
        delta = (delta - rolled * x) / self._var
        return rolled, delta, gamma

    def vega(self, gamma: np.ndarray) -> np.ndarray:
        """
        Derivative with respect to the standard deviation.

        Args:
            gamma: Second derivative computed by `rollback_with_gamma`

        Returns:
            gamma * sqrt(var)
        """
        require(self._var > EPS, "variance of the rollback is too small")
        return np.asarray(gamma, dtype=float) * math.sqrt(self._var)


def _explicit_step(values: np.ndarray, q: float) -> None:
    """One explicit step in place; boundary nodes copy their neighbor's second difference."""
    d2 = np.empty_like(values)
    d2[1:-1] = values[:-2] - 2.0 * values[1:-1] + values[2:]
    d2[0] = d2[1]
    d2[-1] = d2[-2]
    values += q * d2


def _micro_steps(h: float, var: float, p: float) -> Tuple[int, float]:
    """Number of micro steps of size at most p and the actual step."""
    x = 2.0 * h * h
    steps = int(math.ceil(var / (x * p)))
    return steps, min(var / (x * steps), p)


class ExplicitScheme(RollbackScheme):
    """
    Explicit finite-difference scheme.

    Stable only for p = dvar / (2 h^2) <= 0.5 per micro step. The total
    variance is split evenly into the smallest number of such steps.
    """

    def __init__(self, p: float, size: int = 0, h: float = 0.0, var: float = 0.0):
        if not (0 < p <= 0.5):
            raise range_error("step of explicit scheme")
        self.p = p
        self.size = size
        self.steps = 0
        self.q = 0.0
        if size >= 3:
            if not (var > 0 and h > 0):
                raise range_error("variance or step of explicit scheme")
            self.steps, self.q = _micro_steps(h, var, p)
            require(0 < self.q <= p, "explicit step exceeds its stability bound")

    def bind(self, size: int, h: float, var: float) -> "ExplicitScheme":
        return ExplicitScheme(self.p, size, h, var)

    def apply(self, values: np.ndarray) -> np.ndarray:
        if values.size != self.size:
            raise size_error("values of explicit scheme")
        if self.size >= 3:
            for _ in range(self.steps):
                _explicit_step(values, self.q)
        return values


class ThetaScheme(RollbackScheme):
    """
    Theta scheme: theta = 1 is fully implicit, theta = 0.5 is Crank-Nicolson.

    Each micro step takes an explicit step for the (1 - theta) portion and
    then solves a tridiagonal system for the theta portion. The first and
    last rows of the system are identity rows.
    """

    def __init__(
        self,
        theta: float,
        p: Callable[[float], float],
        size: int = 0,
        h: float = 0.0,
        var: float = 0.0,
    ):
        self.theta = theta
        self.p = p
        self.size = size
        self.steps = 0
        self.q = 0.0
        self._banded = None
        if size >= 2:
            p_h = p(h)
            require(p_h > 0 and 0 < theta <= 1, "invalid parameters of theta scheme")
            if not (var > 0 and h > 0):
                raise range_error("variance or step of theta scheme")
            self.steps, self.q = _micro_steps(h, var, p_h)

            off = -self.q * theta
            banded = np.empty((3, size))
            banded[0, :] = off                        # upper diagonal
            banded[1, :] = 1.0 + 2.0 * self.q * theta
            banded[2, :] = off                        # lower diagonal
            banded[1, 0] = banded[1, -1] = 1.0
            banded[0, 1] = 0.0
            banded[2, -2] = 0.0
            banded[0, 0] = banded[2, -1] = 0.0        # unused corners
            self._banded = banded

    def bind(self, size: int, h: float, var: float) -> "ThetaScheme":
        return ThetaScheme(self.theta, self.p, size, h, var)

    def apply(self, values: np.ndarray) -> np.ndarray:
        if values.size != self.size:
            raise size_error("values of theta scheme")
        if self.size < 2 or self.steps == 0:
            return values
        explicit_q = self.q * (1.0 - self.theta)
        for _ in range(self.steps):
            if self.size >= 3 and self.theta < 1:
                _explicit_step(values, explicit_q)
            values = solve_banded((1, 1), self._banded, values, check_finite=False)
        return values


def _spectral_weights(size: int, h: float, var: float) -> np.ndarray:
    """Damping factors exp(-var (2 pi k / (size h))^2 / 2) for k = 0, ..., size // 2."""
    a = 2.0 * var * (math.pi / (size * h)) ** 2
    k = np.arange(size // 2 + 1, dtype=float)
    return np.exp(-(k * k) * a)


class SpectralScheme(RollbackScheme):
    """
    Gaussian convolution in frequency space.

    The Gaussian kernel is diagonal in the Fourier basis, so a single
    forward transform, a multiplication by the damping weights and an
    inverse transform integrate any variance at once.

    Attributes:
        radix2: If true, the size of the grid has to be a power of two
    """

    def __init__(self, radix2: bool, size: int = 0, h: float = 0.0, var: float = 0.0):
        self.radix2 = radix2
        self.size = size
        self._weights = None
        if size > 0:
            if not (var > 0 and h > 0):
                raise range_error("variance or step of spectral scheme")
            if radix2:
                require(size & (size - 1) == 0, f"size {size} is not a power of two")
            self._weights = _spectral_weights(size, h, var)

    def bind(self, size: int, h: float, var: float) -> "SpectralScheme":
        return SpectralScheme(self.radix2, size, h, var)

    def apply(self, values: np.ndarray) -> np.ndarray:
        if values.size != self.size:
            raise size_error("values of spectral scheme")
        spectrum = sp_fft.rfft(values)
        spectrum *= self._weights
        return sp_fft.irfft(spectrum, n=self.size)


class ChainScheme(RollbackScheme):
    """
    Explicit steps, then a fast scheme, then implicit steps.

    The explicit layer smooths discontinuous payoffs, the implicit layer
    damps oscillations left by the fast scheme. If the variance does not
    cover both brackets, only the explicit scheme is used.
    """

    def __init__(
        self,
        expl_steps: int,
        fast: GaussRollback,
        impl_steps: int,
        expl_p: float,
        impl_p: float,
        size: int = 0,
        h: float = 0.0,
        var: float = 0.0,
    ):
        self.expl_steps = expl_steps
        self.impl_steps = impl_steps
        self.expl_p = expl_p
        self.impl_p = impl_p
        self.recipe = fast
        self.fast = fast
        self._expl = expl(expl_p)
        self._impl = impl(impl_p)
        self._main = False
        if size > 0:
            expl_var = 2.0 * h * h * expl_p * expl_steps
            impl_var = 2.0 * h * h * impl_p * impl_steps
            rest = var - (expl_var + impl_var)
            if rest > 0:
                self._main = True
                self.fast = fast.assign(size, h, rest)
                if expl_steps > 0:
                    self._expl = self._expl.assign(size, h, expl_var)
                if impl_steps > 0:
                    self._impl = self._impl.assign(size, h, impl_var)
            else:
                logger.debug(
                    f"Variance {var:.3e} below chain brackets {expl_var + impl_var:.3e}, "
                    f"using explicit scheme only"
                )
                self._expl = self._expl.assign(size, h, var)

    def bind(self, size: int, h: float, var: float) -> "ChainScheme":
        return ChainScheme(
            self.expl_steps, self.recipe, self.impl_steps, self.expl_p, self.impl_p,
            size, h, var,
        )

    def apply(self, values: np.ndarray) -> np.ndarray:
        if self.expl_steps > 0 or not self._main:
            values = self._expl.rollback(values)
        if self._main:
            values = self.fast.rollback(values)
            if self.impl_steps > 0:
                values = self._impl.rollback(values)
        return values


class DefaultChainScheme(RollbackScheme):
    """
    Chain scheme whose bracket lengths depend on the grid.

    The numbers of explicit and implicit steps balance the cost of the
    three layers: they grow with var / h for Crank-Nicolson and with
    log2(size) for the FFT schemes.
    """

    def __init__(self, fast: str, size: int = 0, h: float = 0.0, var: float = 0.0):
        require(fast in FAST_SCHEMES, f"unknown fast scheme {fast!r}")
        self.fast = fast
        self._rollback = None
        if size > 0:
            if not (var > 0 and h > 0):
                raise range_error("variance or step of chain scheme")
            if fast == "crankNicolson":
                n_expl = 2 * (int(math.ceil(var / h)) + 1)
                main = crank_nicolson()
            else:
                n_expl = 2 * int(math.ceil(math.log2(size))) + 10
                main = fft2() if fast == "fft2" else fft()
            n_impl = n_expl // 2
            self._rollback = chain(n_expl, main, n_impl).assign(size, h, var)

    def bind(self, size: int, h: float, var: float) -> "DefaultChainScheme":
        return DefaultChainScheme(self.fast, size, h, var)

    def apply(self, values: np.ndarray) -> np.ndarray:
        require(self._rollback is not None, "chain scheme is not bound to a grid")
        return self._rollback.rollback(values)


def expl(p: float = 1.0 / 3.0) -> GaussRollback:
    """
    Explicit finite-difference scheme.

    Args:
        p: Upper bound on var / (2 h^2) for one micro step, 0 < p <= 0.5
    """
    return GaussRollback(ExplicitScheme(p))


def impl(p: float = 1.0) -> GaussRollback:
    """
    Fully implicit scheme.

    Args:
        p: Upper bound on var / (2 h^2) for one micro step
    """
    require(p > 0, "step of implicit scheme must be positive")
    return GaussRollback(ThetaScheme(1.0, lambda h: p))


def crank_nicolson(r: float = 1.0) -> GaussRollback:
    """
    Crank-Nicolson scheme with micro step var / (2 h^2) <= r / (2 h).

    Args:
        r: Ratio between the time step and the step of the grid
    """
    require(r > 0, "ratio of Crank-Nicolson scheme must be positive")
    return GaussRollback(ThetaScheme(0.5, lambda h: r / (2.0 * h)))


def fft2() -> GaussRollback:
    """Radix-2 FFT scheme, the size of the grid has to be a power of two."""
    return GaussRollback(SpectralScheme(radix2=True))


def fft() -> GaussRollback:
    """FFT scheme for grids of arbitrary size."""
    return GaussRollback(SpectralScheme(radix2=False))


def chain(
    expl_steps: int,
    fast: GaussRollback,
    impl_steps: int,
    expl_p: float = 1.0 / 3.0,
    impl_p: float = 1.0,
) -> GaussRollback:
    """
    Chain of explicit, fast and implicit schemes.

    Args:
        expl_steps: Number of explicit steps at the start
        fast: Scheme used for the bulk of the variance
        impl_steps: Number of implicit steps at the end
        expl_p: Parameter of the explicit scheme
        impl_p: Parameter of the implicit scheme
    """
    require(expl_p > 0 and impl_p > 0, "chain scheme needs positive parameters")
    return GaussRollback(ChainScheme(expl_steps, fast, impl_steps, expl_p, impl_p))


def default_chain(fast: str = "fft2") -> GaussRollback:
    """
    Chain scheme with bracket lengths chosen from the grid.

    Args:
        fast: One of "crankNicolson", "fft2" or "fft"
    """
    return GaussRollback(DefaultChainScheme(fast))


def scheme(name: Union[str, GaussRollback]) -> GaussRollback:
    """Look up a rollback scheme by its symbolic name."""
    if isinstance(name, GaussRollback):
        return name
    return default_chain(name)
