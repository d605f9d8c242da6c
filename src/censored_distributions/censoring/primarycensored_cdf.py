"""
Primary-censored CDF dispatch.

``P(D + P <= x)`` for a delay ``D`` and an independent primary event ``P``
is evaluated by a registered closed form when the solver allows it and one
exists, and otherwise by the convolution integral

    F(x) = ∫ F_D(u) f_P(x - u) du,   u ∈ [max(x - max P, min D), x - min P]

with the integrand evaluated as ``exp(logcdf_D(u) + logpdf_P(x - u))``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

from censored_distributions.censoring.analytical import (
    AnalyticalCDFRegister,
    configure_analytical_cdfs,
)
from censored_distributions.censoring.solvers import AnalyticalSolver, NumericSolver

if TYPE_CHECKING:
    from censored_distributions.censoring.solvers import SolverMethod
    from censored_distributions.distributions.distribution import Distribution

#: Exceptions treated as "the probability is zero" by the log-space functions.
RECOVERABLE_ERRORS: tuple[type[Exception], ...] = (ValueError, ArithmeticError, IndexError)


def numeric_primarycensored_cdf(
    delay: Distribution, primary_event: Distribution, x: float, method: SolverMethod
) -> float:
    """Evaluate the convolution integral with the solver's integrator."""
    lower = max(x - primary_event.maximum, delay.minimum)
    upper = x - primary_event.minimum
    if upper <= lower or math.isclose(upper, lower, rel_tol=1e-12, abs_tol=1e-12):
        return 0.0

    def integrand(u: float) -> float:
        log_value = float(delay.logcdf(u)) + float(primary_event.logpdf(x - u))
        return math.exp(log_value) if log_value > -math.inf else 0.0

    value = method.integrator.integrate(integrand, lower, upper)
    return min(max(value, 0.0), 1.0)


def primarycensored_cdf(
    delay: Distribution, primary_event: Distribution, x: float, method: SolverMethod
) -> float:
    """
    CDF of the primary-censored delay at ``x``.

    Parameters
    ----------
    delay : Distribution
        Delay from the primary to the secondary event.
    primary_event : Distribution
        Primary-event time within its window.
    x : float
        Evaluation point.
    method : AnalyticalSolver or NumericSolver
        ``AnalyticalSolver`` uses a registered closed form when one exists for
        the (delay, primary) family pair; ``NumericSolver`` always integrates.

    Returns
    -------
    float
        ``0`` for ``x`` at or below the delay minimum, ``1`` at ``+inf``.
    """
    x = float(x)
    if x <= delay.minimum:
        return 0.0
    if x == math.inf:
        return 1.0

    if isinstance(method, AnalyticalSolver):
        configure_analytical_cdfs()
        solution = AnalyticalCDFRegister.lookup(delay, primary_event)
        if solution is not None:
            return solution(delay, primary_event, x)  # type: ignore[arg-type]
        method = NumericSolver(method.integrator)

    return numeric_primarycensored_cdf(delay, primary_event, x, method)


def primarycensored_logcdf(
    delay: Distribution, primary_event: Distribution, x: float, method: SolverMethod
) -> float:
    """
    Log-CDF of the primary-censored delay at ``x``.

    ``-inf`` at or below the delay minimum and wherever evaluation fails with
    one of :data:`RECOVERABLE_ERRORS`; ``0`` at ``+inf``.
    """
    x = float(x)
    if x <= delay.minimum:
        return -math.inf
    if x == math.inf:
        return 0.0
    try:
        value = primarycensored_cdf(delay, primary_event, x, method)
    except RECOVERABLE_ERRORS:
        return -math.inf
    return math.log(value) if value > 0.0 else -math.inf
