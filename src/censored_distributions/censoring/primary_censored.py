"""
Primary Event Censored Distribution
===================================

Distribution of ``D + P`` where ``D`` is a delay and ``P`` is the time of the
primary event within its (uncertain) window. The CDF is computed by
:mod:`censored_distributions.censoring.primarycensored_cdf`; the density is a
finite difference of the log-CDF and the quantile is found numerically.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from censored_distributions.censoring.base import CensoredDistribution
from censored_distributions.censoring.primarycensored_cdf import (
    RECOVERABLE_ERRORS,
    primarycensored_cdf,
    primarycensored_logcdf,
)
from censored_distributions.censoring.quantile import optimize_quantile
from censored_distributions.censoring.solvers import (
    AnalyticalSolver,
    NumericSolver,
    QuadIntegrator,
)
from censored_distributions.distributions.sampling import ArraySample
from censored_distributions.distributions.strategies import SamplingStrategy, resolve_rng
from censored_distributions.families.configuration import family_distribution
from censored_distributions.logexp import log1mexp, log_sub_exp
from censored_distributions.types import CharacteristicName, FamilyName

if TYPE_CHECKING:
    from censored_distributions.censoring.solvers import Integrator, SolverMethod
    from censored_distributions.distributions.distribution import Distribution
    from censored_distributions.distributions.support import ContinuousSupport
    from censored_distributions.types import GenericCharacteristicName, ScalarFunc

#: Step of the finite-difference density.
LOGPDF_STEP = 1e-8


class PrimaryCensoredSamplingStrategy(SamplingStrategy):
    """Draw the delay and the primary event independently and add them."""

    def sample(self, n: int, distr: Distribution, **options: Any) -> ArraySample:
        if not isinstance(distr, PrimaryCensored):
            raise TypeError("PrimaryCensoredSamplingStrategy samples PrimaryCensored only")
        rng = resolve_rng(options)
        delays = distr.delay.sample(n, rng=rng).values
        primaries = distr.primary_event.sample(n, rng=rng).values
        return ArraySample.from_values(delays + primaries)


_SAMPLING_STRATEGY = PrimaryCensoredSamplingStrategy()


@dataclass(frozen=True, slots=True)
class PrimaryCensored(CensoredDistribution):
    """
    Primary event censored distribution.

    Parameters
    ----------
    delay : Distribution
        Delay from the primary to the secondary event. Its support must start
        at 0.
    primary_event : Distribution
        Time of the primary event within its window.
    method : AnalyticalSolver or NumericSolver
        How the CDF is evaluated.

    Raises
    ------
    ValueError
        If the delay's support does not start at 0.
    """

    delay: Distribution
    primary_event: Distribution
    method: SolverMethod

    def __post_init__(self) -> None:
        if self.delay.minimum != 0.0:
            raise ValueError(
                "Delay distribution must have minimum support of 0, "
                f"got {self.delay.minimum}"
            )

    @property
    def support(self) -> ContinuousSupport:
        return self.delay.support

    @property
    def sampling_strategy(self) -> SamplingStrategy:
        return _SAMPLING_STRATEGY

    @property
    def params(self) -> tuple[Any, ...]:
        """Parameters of the delay followed by those of the primary event."""
        return (*getattr(self.delay, "params", ()), *getattr(self.primary_event, "params", ()))

    def _cdf(self, x: float) -> float:
        return primarycensored_cdf(self.delay, self.primary_event, x, self.method)

    def _logcdf(self, x: float) -> float:
        return primarycensored_logcdf(self.delay, self.primary_event, x, self.method)

    def _sf(self, x: float) -> float:
        return 1.0 - self._cdf(x)

    def _logsf(self, x: float) -> float:
        logcdf = self._logcdf(x)
        if logcdf == -math.inf:
            return 0.0
        if logcdf >= 0.0:
            return -math.inf
        return float(log1mexp(logcdf))

    def _logpdf(self, x: float) -> float:
        h = LOGPDF_STEP
        try:
            if not self.insupport(x):
                return -math.inf
            x_lower = max(x - h / 2, self.minimum)
            x_upper = min(x + h / 2, self.maximum)
            if x_lower == self.minimum:
                return log_sub_exp(self._logcdf(x + h), self._logcdf(x)) - math.log(h)
            if x_upper == self.maximum:
                return log_sub_exp(self._logcdf(x), self._logcdf(x - h)) - math.log(h)
            return log_sub_exp(self._logcdf(x_upper), self._logcdf(x_lower)) - math.log(
                x_upper - x_lower
            )
        except RECOVERABLE_ERRORS:
            return -math.inf

    def _pdf(self, x: float) -> float:
        return math.exp(self._logpdf(x))

    def _initial_quantile_guess(self, d: Distribution, p: float) -> float:
        try:
            primary_centre = float(self.primary_event.mean())
        except RuntimeError:
            primary_centre = float(self.primary_event.ppf(0.5))
        return float(self.delay.ppf(p)) + primary_centre

    def _ppf(self, p: float) -> float:
        return optimize_quantile(
            self, p, initial_guess=self._initial_quantile_guess, check_nan=True
        )

    def _scalar_characteristics(self) -> dict[GenericCharacteristicName, ScalarFunc]:
        return {
            CharacteristicName.CDF: self._cdf,
            CharacteristicName.LOGCDF: self._logcdf,
            CharacteristicName.SF: self._sf,
            CharacteristicName.LOGSF: self._logsf,
            CharacteristicName.PDF: self._pdf,
            CharacteristicName.LOGPDF: self._logpdf,
            CharacteristicName.PPF: self._ppf,
        }


def primary_censored(
    delay: Distribution,
    primary_event: Distribution | None = None,
    *,
    integrator: Integrator | None = None,
    force_numeric: bool = False,
) -> PrimaryCensored:
    """
    Create a primary event censored distribution.

    Parameters
    ----------
    delay : Distribution
        Delay distribution with support starting at 0.
    primary_event : Distribution, optional
        Primary-event time distribution; ``Uniform(0, 1)`` when omitted.
    integrator : Integrator, optional
        Integrator for the numerical path; :class:`QuadIntegrator` by default.
    force_numeric : bool
        Integrate numerically even where a closed form exists.

    Returns
    -------
    PrimaryCensored

    Examples
    --------
    >>> delay = family_distribution("Gamma", shape=3.0, scale=2.0)
    >>> d = primary_censored(delay)
    >>> d.cdf(5.0)  # doctest: +SKIP
    """
    if primary_event is None:
        primary_event = family_distribution(
            FamilyName.CONTINUOUS_UNIFORM, lower_bound=0.0, upper_bound=1.0
        )
    if integrator is None:
        integrator = QuadIntegrator()
    method: SolverMethod = (
        NumericSolver(integrator) if force_numeric else AnalyticalSolver(integrator)
    )
    return PrimaryCensored(delay, primary_event, method)
