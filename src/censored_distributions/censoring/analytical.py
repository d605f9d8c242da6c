"""
Analytical Primary-Censored CDFs
================================

Closed forms of ``P(D + P <= x)`` for a delay ``D`` and a primary event ``P``
uniform on ``[pmin, pmin + w]``. With ``t = x - pmin`` and
``q = max(t - w, 0)`` every supported delay family reduces to

    F_S(x) = F(t) - [M(q, t) - (t - w) (F(t) - F(q))] / w        (q > 0)
    F_S(x) = F(t) - [M(0, t) + (w - t) F(t)] / w                   (q = 0)

where ``M(a, b) = ∫_a^b u f(u) du`` is the partial first moment of the delay.
Only ``log M`` differs between families; the bracket is combined in log-space.

Closed forms are stored in :class:`AnalyticalCDFRegister` keyed by the pair
``(delay family name, primary family name)`` and are registered once by
:func:`configure_analytical_cdfs`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from collections.abc import Callable
from functools import lru_cache
from typing import TYPE_CHECKING, ClassVar

from scipy.special import gamma as gamma_fn, gammainc

from censored_distributions.families.distribution import ParametricFamilyDistribution
from censored_distributions.logexp import log_add_exp, log_sub_exp, safe_log
from censored_distributions.types import FamilyName

if TYPE_CHECKING:
    from censored_distributions.distributions.distribution import Distribution

type AnalyticalCDF = Callable[
    [ParametricFamilyDistribution, ParametricFamilyDistribution, float], float
]
type LogPartialMoment = Callable[[float, float], float]


class AnalyticalCDFRegister:
    """
    Singleton registry of closed-form primary-censored CDFs.
    """

    _instance: ClassVar[AnalyticalCDFRegister | None] = None
    _solutions: dict[tuple[str, str], AnalyticalCDF]

    def __new__(cls) -> AnalyticalCDFRegister:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._solutions = {}
        return cls._instance

    @classmethod
    def register(cls, delay_family: str, primary_family: str, solution: AnalyticalCDF) -> None:
        """
        Register a closed form for a family pair.

        Raises
        ------
        ValueError
            If the pair already has a registered solution.
        """
        self = cls()
        key = (str(delay_family), str(primary_family))
        if key in self._solutions:
            raise ValueError(
                f"Analytical CDF for ({delay_family}, {primary_family}) already registered"
            )
        self._solutions[key] = solution

    @classmethod
    def contains(cls, delay_family: str, primary_family: str) -> bool:
        return (str(delay_family), str(primary_family)) in cls()._solutions

    @classmethod
    def pairs(cls) -> list[tuple[str, str]]:
        return list(cls()._solutions)

    @classmethod
    def lookup(cls, delay: Distribution, primary_event: Distribution) -> AnalyticalCDF | None:
        """
        Return the closed form for the pair, or ``None``.

        Anything other than two parametric-family distributions (e.g. a
        censoring wrapper used as delay) has no closed form.
        """
        if not isinstance(delay, ParametricFamilyDistribution) or not isinstance(
            primary_event, ParametricFamilyDistribution
        ):
            return None
        return cls()._solutions.get((delay.family_name, primary_event.family_name))

    @classmethod
    def _reset(cls) -> None:
        cls._instance = None


def _uniform_primary_cdf(
    delay: ParametricFamilyDistribution,
    primary_event: ParametricFamilyDistribution,
    x: float,
    log_partial_moment: LogPartialMoment,
) -> float:
    pmin = primary_event.minimum
    w = primary_event.maximum - pmin
    t = x - pmin
    if t <= 0:
        return 0.0
    q = max(t - w, 0.0)

    F_t = float(delay.cdf(t))
    if q > 0:
        delta_F = max(F_t - float(delay.cdf(q)), 0.0)
        log_bracket = log_sub_exp(
            log_partial_moment(q, t), math.log(t - w) + safe_log(delta_F)
        )
    else:
        log_bracket = log_add_exp(log_partial_moment(0.0, t), safe_log(w - t) + safe_log(F_t))

    result = F_t - math.exp(log_bracket - math.log(w))
    return min(max(result, 0.0), 1.0)


def _shifted_family_moment(
    shifted: ParametricFamilyDistribution, log_scale: float
) -> LogPartialMoment:
    """``log M(a, b) = log_scale + log(G(b) - G(a))`` for the size-biased distribution ``G``."""

    def log_moment(a: float, b: float) -> float:
        delta = float(shifted.cdf(b)) - (float(shifted.cdf(a)) if a > 0 else 0.0)
        return log_scale + safe_log(max(delta, 0.0))

    return log_moment


def gamma_uniform_cdf(
    delay: ParametricFamilyDistribution, primary_event: ParametricFamilyDistribution, x: float
) -> float:
    """Gamma(k, θ) delay: ``M(a, b) = kθ [G_{k+1}(b) - G_{k+1}(a)]``."""
    params = delay.base_parameters.parameters
    k, theta = float(params["shape"]), float(params["scale"])
    shifted = delay.family.distribution(shape=k + 1.0, scale=theta)
    moment = _shifted_family_moment(shifted, math.log(k * theta))
    return _uniform_primary_cdf(delay, primary_event, x, moment)


def lognormal_uniform_cdf(
    delay: ParametricFamilyDistribution, primary_event: ParametricFamilyDistribution, x: float
) -> float:
    """
    LogNormal(μ, σ) delay: ``M(a, b) = e^{μ + σ²/2} [G(b) - G(a)]`` with
    ``G = LogNormal(μ + σ², σ)``.
    """
    params = delay.base_parameters.parameters
    mu, sigma = float(params["mu"]), float(params["sigma"])
    shifted = delay.family.distribution(mu=mu + sigma**2, sigma=sigma)
    moment = _shifted_family_moment(shifted, mu + sigma**2 / 2)
    return _uniform_primary_cdf(delay, primary_event, x, moment)


def weibull_uniform_cdf(
    delay: ParametricFamilyDistribution, primary_event: ParametricFamilyDistribution, x: float
) -> float:
    """
    Weibull(k, λ) delay: ``M(a, b) = λ [g(b) - g(a)]`` with
    ``g(u) = γ(1 + 1/k, (u/λ)^k)``, the lower incomplete gamma function.
    """
    params = delay.base_parameters.parameters
    k, lam = float(params["shape"]), float(params["scale"])
    a = 1.0 + 1.0 / k
    gamma_a = float(gamma_fn(a))

    def g(u: float) -> float:
        if u <= 0:
            return 0.0
        return gamma_a * float(gammainc(a, (u / lam) ** k))

    def log_moment(lo: float, hi: float) -> float:
        return math.log(lam) + safe_log(max(g(hi) - g(lo), 0.0))

    return _uniform_primary_cdf(delay, primary_event, x, log_moment)


@lru_cache(maxsize=1)
def configure_analytical_cdfs() -> AnalyticalCDFRegister:
    """
    Register the built-in closed forms (Gamma, LogNormal and Weibull delays
    with a uniform primary event).
    """
    reg = AnalyticalCDFRegister()
    uniform = FamilyName.CONTINUOUS_UNIFORM
    reg.register(FamilyName.GAMMA, uniform, gamma_uniform_cdf)
    reg.register(FamilyName.LOGNORMAL, uniform, lognormal_uniform_cdf)
    reg.register(FamilyName.WEIBULL, uniform, weibull_uniform_cdf)
    return reg


def reset_analytical_cdfs() -> None:
    """Drop registered closed forms (test helper)."""
    configure_analytical_cdfs.cache_clear()
    AnalyticalCDFRegister._reset()
