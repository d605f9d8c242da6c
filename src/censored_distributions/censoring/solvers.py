"""
Solver Methods and Numerical Integrators
========================================

A primary-censored CDF is either evaluated from a closed form registered for
the (delay family, primary family) pair, or by integrating the delay CDF
against the primary-event density. The choice is carried by an immutable
solver value:

- :class:`AnalyticalSolver` uses a closed form when one is registered and
  falls back to numerical integration otherwise;
- :class:`NumericSolver` always integrates.

Both carry the :class:`Integrator` used by the numerical path.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np
from scipy import integrate as _sp_integrate

if TYPE_CHECKING:
    import numpy.typing as npt

    from censored_distributions.types import ScalarFunc


@runtime_checkable
class Integrator(Protocol):
    """Definite integral of a scalar function over ``[lower, upper]``."""

    def integrate(self, integrand: ScalarFunc, lower: float, upper: float) -> float: ...


@dataclass(frozen=True, slots=True)
class QuadIntegrator:
    """
    Adaptive Gauss-Kronrod quadrature via :func:`scipy.integrate.quad`.

    Parameters
    ----------
    epsabs, epsrel : float
        Absolute and relative error tolerances.
    limit : int
        Upper bound on the number of subintervals.
    """

    epsabs: float = 1e-12
    epsrel: float = 1e-10
    limit: int = 200

    def integrate(self, integrand: ScalarFunc, lower: float, upper: float) -> float:
        value, _ = _sp_integrate.quad(
            integrand, lower, upper, epsabs=self.epsabs, epsrel=self.epsrel, limit=self.limit
        )
        return float(value)


@dataclass(frozen=True, slots=True)
class FixedQuadIntegrator:
    """
    Fixed-order Gauss-Legendre quadrature via :func:`scipy.integrate.fixed_quad`.

    Cheaper than :class:`QuadIntegrator` and accurate for smooth integrands;
    the integrand is evaluated point by point.

    Parameters
    ----------
    n : int
        Order of the quadrature rule.
    """

    n: int = 64

    def integrate(self, integrand: ScalarFunc, lower: float, upper: float) -> float:
        def _vectorised(u: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
            return np.array([integrand(float(ui)) for ui in u], dtype=np.float64)

        value, _ = _sp_integrate.fixed_quad(_vectorised, lower, upper, n=self.n)
        return float(value)


@dataclass(frozen=True, slots=True)
class AnalyticalSolver:
    """Use a registered closed form; integrate numerically when none exists."""

    integrator: Integrator = field(default_factory=QuadIntegrator)


@dataclass(frozen=True, slots=True)
class NumericSolver:
    """Always integrate numerically."""

    integrator: Integrator = field(default_factory=QuadIntegrator)


type SolverMethod = AnalyticalSolver | NumericSolver
