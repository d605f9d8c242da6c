"""
Quantiles by numerical optimisation.

Censored distributions rarely have a closed-form inverse CDF; their quantile
is found by minimising ``(cdf(q) - p)²`` with Nelder-Mead.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
import warnings
from collections.abc import Callable
from typing import TYPE_CHECKING

import numpy as np
from scipy import optimize as _sp_optimize

if TYPE_CHECKING:
    from censored_distributions.distributions.distribution import Distribution

#: Penalty added to the objective outside the support.
OUT_OF_SUPPORT_PENALTY = 1e10


class QuantileConvergenceWarning(UserWarning):
    """Nelder-Mead did not converge; the best point found is returned."""


def validate_probability(p: float, *, check_nan: bool = True) -> float:
    """
    Check that ``p`` is a probability.

    Raises
    ------
    ValueError
        If ``p`` is NaN (when ``check_nan``) or outside ``[0, 1]``.
    """
    p = float(p)
    if check_nan and math.isnan(p):
        raise ValueError("p must be in [0, 1], got NaN")
    if p < 0.0 or p > 1.0:
        raise ValueError(f"p must be in [0, 1], got {p}")
    return p


def optimize_quantile(
    d: Distribution,
    p: float,
    *,
    initial_guess: Callable[[Distribution, float], float] | None = None,
    postprocess: Callable[[float], float] | None = None,
    check_nan: bool = False,
    tol: float = 1e-8,
    maxiter: int = 10_000,
) -> float:
    """
    Solve ``cdf(d, q) = p`` for ``q``.

    Parameters
    ----------
    d : Distribution
        Distribution whose quantile is sought.
    p : float
        Probability in ``[0, 1]``.
    initial_guess : callable, optional
        ``(d, p) -> q0``; defaults to the quantile of the innermost wrapped
        distribution.
    postprocess : callable, optional
        Applied to the optimiser's result (e.g. snapping to an interval edge).
    check_nan : bool
        Reject NaN explicitly.
    tol : float
        Absolute tolerance on both ``q`` and the objective.
    maxiter : int
        Iteration cap of the optimiser.

    Returns
    -------
    float
        The support minimum for ``p = 0``, its maximum for ``p = 1``.

    Warns
    -----
    QuantileConvergenceWarning
        If the optimiser stops without converging.
    """
    p = validate_probability(p, check_nan=check_nan)
    if p == 0.0:
        return d.minimum
    if p == 1.0:
        return d.maximum

    lower = d.minimum

    def objective(q: np.ndarray) -> float:
        q_val = float(q[0])
        if not d.insupport(q_val):
            return OUT_OF_SUPPORT_PENALTY + (q_val - lower) ** 2
        return (float(d.cdf(q_val)) - p) ** 2

    if initial_guess is None:
        from censored_distributions.censoring.get_dist import get_dist

        x0 = float(get_dist(d).ppf(p))
    else:
        x0 = float(initial_guess(d, p))

    result = _sp_optimize.minimize(
        objective,
        x0=np.array([x0]),
        method="Nelder-Mead",
        options={"xatol": tol, "fatol": tol, "maxiter": maxiter},
    )
    if not result.success:
        warnings.warn(
            f"Quantile optimisation did not converge for p = {p}: {result.message}",
            QuantileConvergenceWarning,
            stacklevel=3,
        )

    q = float(result.x[0])
    return postprocess(q) if postprocess is not None else q
