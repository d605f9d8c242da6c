"""
Censoring of delay distributions.

Wrappers implementing the :class:`~censored_distributions.distributions.Distribution`
protocol on top of a delay distribution:

- :class:`PrimaryCensored` marginalises the delay over the primary-event time,
- :class:`Truncated` restricts a distribution to an interval,
- :class:`IntervalCensored` discretises a distribution into intervals.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .analytical import (
    AnalyticalCDFRegister,
    configure_analytical_cdfs,
    gamma_uniform_cdf,
    lognormal_uniform_cdf,
    reset_analytical_cdfs,
    weibull_uniform_cdf,
)
from .double_interval_censored import double_interval_censored
from .get_dist import get_dist
from .interval_censored import (
    IntervalCensored,
    find_interval_index,
    floor_to_interval,
    interval_censored,
)
from .primary_censored import PrimaryCensored, primary_censored
from .primarycensored_cdf import (
    numeric_primarycensored_cdf,
    primarycensored_cdf,
    primarycensored_logcdf,
)
from .quantile import QuantileConvergenceWarning, optimize_quantile, validate_probability
from .solvers import (
    AnalyticalSolver,
    FixedQuadIntegrator,
    Integrator,
    NumericSolver,
    QuadIntegrator,
    SolverMethod,
)
from .truncated import Truncated, truncated

__all__ = [
    "AnalyticalCDFRegister",
    "AnalyticalSolver",
    "FixedQuadIntegrator",
    "Integrator",
    "IntervalCensored",
    "NumericSolver",
    "PrimaryCensored",
    "QuadIntegrator",
    "QuantileConvergenceWarning",
    "SolverMethod",
    "Truncated",
    "configure_analytical_cdfs",
    "double_interval_censored",
    "find_interval_index",
    "floor_to_interval",
    "gamma_uniform_cdf",
    "get_dist",
    "interval_censored",
    "lognormal_uniform_cdf",
    "numeric_primarycensored_cdf",
    "optimize_quantile",
    "primary_censored",
    "primarycensored_cdf",
    "primarycensored_logcdf",
    "reset_analytical_cdfs",
    "truncated",
    "validate_probability",
    "weibull_uniform_cdf",
]
