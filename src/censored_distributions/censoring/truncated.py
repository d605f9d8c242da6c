"""
Truncation
==========

Restriction of a distribution to ``[lower, upper]`` with renormalised
probability mass ``Z = F(upper) - F(lower)``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np

from censored_distributions.censoring.base import CensoredDistribution
from censored_distributions.distributions.sampling import ArraySample
from censored_distributions.distributions.strategies import SamplingStrategy, resolve_rng
from censored_distributions.families.builtins.continuous._numeric import (
    as_array,
    as_output,
    check_probabilities,
)
from censored_distributions.logexp import log1mexp, log_sub_exp
from censored_distributions.types import CharacteristicName, Kind

if TYPE_CHECKING:
    from censored_distributions.distributions.distribution import Distribution
    from censored_distributions.distributions.support import ContinuousSupport
    from censored_distributions.types import DistributionType, GenericCharacteristicName, ScalarFunc

#: Lower bound on the draws per rejection round.
_MIN_BATCH = 64


def _is_discrete(dist: Distribution) -> bool:
    return getattr(dist.distribution_type, "kind", None) == Kind.DISCRETE


def _log_diff(hi: np.ndarray, lo: float) -> np.ndarray:
    """``log(exp(hi) - exp(lo))`` elementwise; ``-inf`` where ``hi <= lo``."""
    with np.errstate(invalid="ignore"):
        gap = np.minimum(lo - hi, 0.0)
        out = hi + as_array(log1mexp(gap))
    return np.where(hi > lo, out, -np.inf)


class RejectionSamplingStrategy(SamplingStrategy):
    """
    Draw from the untruncated distribution and keep draws in ``[lower, upper]``.

    Each round draws about ``remaining / Z`` values so that a single round
    usually suffices.
    """

    def sample(self, n: int, distr: Distribution, **options: Any) -> ArraySample:
        if not isinstance(distr, Truncated):
            raise TypeError("RejectionSamplingStrategy samples Truncated only")
        rng = resolve_rng(options)
        lo, hi = distr.lower_bound, distr.upper_bound

        accepted: list[np.ndarray] = []
        remaining = n
        while remaining > 0:
            batch = max(_MIN_BATCH, math.ceil(1.2 * remaining / distr.mass))
            draws = distr.dist.sample(batch, rng=rng).values
            kept = draws[(draws >= lo) & (draws <= hi)][:remaining]
            accepted.append(kept)
            remaining -= kept.size
        values = np.concatenate(accepted) if accepted else np.empty(0)
        return ArraySample.from_values(values)


_SAMPLING_STRATEGY = RejectionSamplingStrategy()


@dataclass(frozen=True, slots=True)
class Truncated(CensoredDistribution):
    """
    Distribution truncated to ``[lower, upper]``.

    Parameters
    ----------
    dist : Distribution
        Distribution to truncate.
    lower, upper : float or None
        Truncation bounds; ``None`` leaves the side untruncated.

    Raises
    ------
    ValueError
        If neither bound is given, if ``lower >= upper``, or if the
        distribution puts no mass on ``[lower, upper]``.
    """

    dist: Distribution
    lower: float | None = None
    upper: float | None = None
    _cdf_lower: float = field(init=False, repr=False, compare=False)
    _mass: float = field(init=False, repr=False, compare=False)
    _logcdf_lower: float = field(init=False, repr=False, compare=False)
    _log_mass: float = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.lower is None and self.upper is None:
            raise ValueError("At least one of lower and upper must be given")
        if self.lower is not None and self.upper is not None and self.lower >= self.upper:
            raise ValueError(
                f"Lower bound must be below upper bound, got [{self.lower}, {self.upper}]"
            )
        cdf_lower = 0.0 if self.lower is None else float(self.dist.cdf(self.lower))
        cdf_upper = 1.0 if self.upper is None else float(self.dist.cdf(self.upper))
        mass = cdf_upper - cdf_lower
        if not mass > 0.0:
            raise ValueError(
                f"Truncation to [{self.lower}, {self.upper}] leaves no probability mass"
            )
        object.__setattr__(self, "_cdf_lower", cdf_lower)
        logcdf_lower = -math.inf if self.lower is None else float(self.dist.logcdf(self.lower))
        logcdf_upper = 0.0 if self.upper is None else float(self.dist.logcdf(self.upper))
        object.__setattr__(self, "_mass", mass)
        object.__setattr__(self, "_logcdf_lower", logcdf_lower)
        object.__setattr__(self, "_log_mass", log_sub_exp(logcdf_upper, logcdf_lower))

    @property
    def mass(self) -> float:
        """Probability ``Z`` of the untruncated distribution on ``[lower, upper]``."""
        return self._mass

    @property
    def lower_bound(self) -> float:
        return -math.inf if self.lower is None else float(self.lower)

    @property
    def upper_bound(self) -> float:
        return math.inf if self.upper is None else float(self.upper)

    @property
    def distribution_type(self) -> DistributionType:
        return self.dist.distribution_type

    @property
    def support(self) -> ContinuousSupport:
        return self.dist.support.restrict(self.lower, self.upper)

    @property
    def sampling_strategy(self) -> SamplingStrategy:
        return _SAMPLING_STRATEGY

    @property
    def params(self) -> tuple[Any, ...]:
        return tuple(getattr(self.dist, "params", ()))

    def _cdf(self, x: Any) -> Any:
        arr = as_array(x)
        support = self.support
        with np.errstate(invalid="ignore"):
            scaled = (as_array(self.dist.cdf(arr)) - self._cdf_lower) / self._mass
        out = np.clip(scaled, 0.0, 1.0)
        out = np.where(arr < support.left, 0.0, out)
        out = np.where(arr >= support.right, 1.0, out)
        return as_output(out)

    def _logcdf(self, x: Any) -> Any:
        arr = as_array(x)
        support = self.support
        base = as_array(self.dist.logcdf(arr))
        out = np.minimum(_log_diff(base, self._logcdf_lower) - self._log_mass, 0.0)
        out = np.where(arr < support.left, -np.inf, out)
        out = np.where(arr >= support.right, 0.0, out)
        return as_output(out)

    def _sf(self, x: Any) -> Any:
        return as_output(1.0 - as_array(self._cdf(x)))

    def _logsf(self, x: Any) -> Any:
        with np.errstate(divide="ignore"):
            return as_output(np.log1p(-as_array(self._cdf(x))))

    def _density(self, x: Any) -> Any:
        arr = as_array(x)
        inside = np.asarray(self.support.contains(arr))
        base = as_array(self.dist.calculate_characteristic(self._density_name, arr))
        return as_output(np.where(inside, base / self._mass, 0.0))

    def _log_density(self, x: Any) -> Any:
        arr = as_array(x)
        inside = np.asarray(self.support.contains(arr))
        base = as_array(self.dist.calculate_characteristic(self._log_density_name, arr))
        return as_output(np.where(inside, base - math.log(self._mass), -np.inf))

    @property
    def _density_name(self) -> str:
        if _is_discrete(self.dist):
            return CharacteristicName.PMF
        return CharacteristicName.PDF

    @property
    def _log_density_name(self) -> str:
        if _is_discrete(self.dist):
            return CharacteristicName.LOGPMF
        return CharacteristicName.LOGPDF

    def _ppf(self, p: Any) -> Any:
        q = check_probabilities(p)
        if np.any(np.isnan(q)):
            raise ValueError("Probability must be in [0, 1]")
        target = np.clip(self._cdf_lower + q * self._mass, 0.0, 1.0)
        values = as_array(self.dist.ppf(target))
        return as_output(np.clip(values, self.lower_bound, self.upper_bound))

    def _scalar_characteristics(self) -> dict[GenericCharacteristicName, ScalarFunc]:
        return {}

    def _batched_characteristics(self) -> dict[GenericCharacteristicName, Callable[..., Any]]:
        return {
            CharacteristicName.CDF: self._cdf,
            CharacteristicName.LOGCDF: self._logcdf,
            CharacteristicName.SF: self._sf,
            CharacteristicName.LOGSF: self._logsf,
            self._density_name: self._density,
            self._log_density_name: self._log_density,
            CharacteristicName.PPF: self._ppf,
        }


def truncated(
    dist: Distribution, lower: float | None = None, upper: float | None = None
) -> Truncated:
    """
    Truncate ``dist`` to ``[lower, upper]``.

    See Also
    --------
    Truncated
    """
    return Truncated(dist, lower, upper)
