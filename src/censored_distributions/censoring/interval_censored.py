"""
Interval Censoring
==================

Discretisation of a distribution into the intervals it is observed in.
Intervals are either regular, ``[k w, (k + 1) w)`` for a width ``w``, or the
half-open intervals between consecutive entries of an increasing boundary
sequence. The probability mass of an interval is attributed to its left edge.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, cast

import numpy as np

from censored_distributions.censoring.base import CensoredDistribution
from censored_distributions.distributions.sampling import ArraySample
from censored_distributions.distributions.strategies import SamplingStrategy, resolve_rng
from censored_distributions.distributions.support import ContinuousSupport
from censored_distributions.families.builtins.continuous._numeric import as_array, as_output
from censored_distributions.logexp import log1mexp, log_sub_exp
from censored_distributions.types import CharacteristicName, UnivariateDiscrete

if TYPE_CHECKING:
    from censored_distributions.distributions.distribution import Distribution
    from censored_distributions.types import DistributionType, GenericCharacteristicName, ScalarFunc

#: Probability slack within which a quantile landing just below an edge is moved onto it.
QUANTILE_EDGE_TOLERANCE = 1e-8


def floor_to_interval(x: float, width: float) -> float:
    """Left edge of the regular interval of ``width`` containing ``x``."""
    return float(np.floor(x / width) * width)


def find_interval_index(x: float, boundaries: tuple[float, ...]) -> int:
    """
    Position of ``x`` relative to ``boundaries``.

    Returns
    -------
    int
        ``0`` if ``x < boundaries[0]``, ``len(boundaries)`` if
        ``x >= boundaries[-1]`` and otherwise ``i`` such that
        ``boundaries[i - 1] <= x < boundaries[i]``.
    """
    return int(np.searchsorted(boundaries, x, side="right"))


class IntervalCensoredSamplingStrategy(SamplingStrategy):
    """Sample the underlying distribution and snap each draw to its interval's left edge."""

    def sample(self, n: int, distr: Distribution, **options: Any) -> ArraySample:
        if not isinstance(distr, IntervalCensored):
            raise TypeError("IntervalCensoredSamplingStrategy samples IntervalCensored only")
        rng = resolve_rng(options)
        draws = distr.dist.sample(n, rng=rng).values
        return ArraySample.from_values(distr.snap_many(draws))


_SAMPLING_STRATEGY = IntervalCensoredSamplingStrategy()


@dataclass(frozen=True, slots=True)
class IntervalCensored(CensoredDistribution):
    """
    Interval-censored (discretised) distribution.

    Exactly one of ``width`` and ``boundaries`` is set.

    Parameters
    ----------
    dist : Distribution
        Continuous distribution being observed in intervals.
    width : float, optional
        Width of regular intervals ``[k w, (k + 1) w)``.
    boundaries : tuple of float, optional
        Strictly increasing interval edges; the intervals are
        ``[b[i], b[i + 1])``.

    Raises
    ------
    ValueError
        On a non-positive width, fewer than two boundaries or boundaries
        that are not strictly increasing.

    Notes
    -----
    Values outside ``[b[0], b[-1])`` fall in no interval and carry zero mass.
    """

    dist: Distribution
    width: float | None = None
    boundaries: tuple[float, ...] | None = None

    def __post_init__(self) -> None:
        if (self.width is None) == (self.boundaries is None):
            raise ValueError("Exactly one of width and boundaries must be given")
        if self.width is not None:
            if not (self.width > 0 and math.isfinite(self.width)):
                raise ValueError(f"Interval width must be positive and finite, got {self.width}")
            return
        boundaries = tuple(float(b) for b in self.boundaries)  # type: ignore[union-attr]
        if len(boundaries) < 2:
            raise ValueError("Need at least two boundaries to define an interval")
        if any(b >= c for b, c in zip(boundaries, boundaries[1:], strict=False)):
            raise ValueError("Boundaries must be strictly increasing")
        object.__setattr__(self, "boundaries", boundaries)

    @property
    def is_regular(self) -> bool:
        """Whether the intervals have a common width."""
        return self.width is not None

    @property
    def interval_width(self) -> float | None:
        """Common width of the intervals, or ``None`` for arbitrary boundaries."""
        return self.width

    @property
    def distribution_type(self) -> DistributionType:
        return UnivariateDiscrete

    @property
    def sampling_strategy(self) -> SamplingStrategy:
        return _SAMPLING_STRATEGY

    @property
    def params(self) -> tuple[Any, ...]:
        return tuple(getattr(self.dist, "params", ()))

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(left=self._lowest_edge(), right=self._highest_edge())

    def _lowest_edge(self) -> float:
        base_min = self.dist.minimum
        if self.width is not None:
            return floor_to_interval(base_min, self.width)
        b = cast(tuple[float, ...], self.boundaries)
        idx = find_interval_index(base_min, b)
        return b[idx - 1] if idx > 0 else b[0]

    def _highest_edge(self) -> float:
        base_max = self.dist.maximum
        if self.width is not None:
            return floor_to_interval(base_max, self.width)
        b = cast(tuple[float, ...], self.boundaries)
        idx = find_interval_index(base_max, b)
        if idx < len(b):
            return b[idx - 1] if idx > 0 else b[0]
        return b[-2]

    def interval(self, x: float) -> tuple[float, float] | None:
        """
        The interval ``[lower, upper)`` containing ``x``.

        Returns
        -------
        tuple of float or None
            ``None`` if ``x`` lies outside every interval.
        """
        if math.isnan(x):
            return None
        if self.width is not None:
            if math.isinf(x):
                return None
            lower = floor_to_interval(x, self.width)
            return lower, lower + self.width
        b = cast(tuple[float, ...], self.boundaries)
        idx = find_interval_index(x, b)
        if idx == 0 or idx >= len(b):
            return None
        return b[idx - 1], b[idx]

    def snap(self, x: float) -> float:
        """
        Map a value of the underlying distribution to its interval's left edge.

        With boundaries, values below the first boundary map to it and values
        at or above the last boundary map to the last boundary.
        """
        if self.width is not None:
            return floor_to_interval(x, self.width)
        b = cast(tuple[float, ...], self.boundaries)
        idx = find_interval_index(x, b)
        if idx == 0:
            return b[0]
        if idx >= len(b):
            return b[-1]
        return b[idx - 1]

    def snap_many(self, x: Any) -> np.ndarray:
        """Vectorised :meth:`snap`."""
        arr = as_array(x)
        if self.width is not None:
            return np.floor(arr / self.width) * self.width
        b = np.asarray(self.boundaries, dtype=np.float64)
        idx = np.searchsorted(b, arr, side="right")
        return b[np.clip(idx - 1, 0, b.size - 1)]

    def _edge_cdf(self, edge: float) -> float:
        if edge <= self.dist.minimum:
            return 0.0
        if edge >= self.dist.maximum:
            return 1.0
        return float(self.dist.cdf(edge))

    def _edge_logcdf(self, edge: float) -> float:
        if edge <= self.dist.minimum:
            return -math.inf
        if edge >= self.dist.maximum:
            return 0.0
        return float(self.dist.logcdf(edge))

    def _left_edge_for_cdf(self, x: float) -> float | None:
        """Edge whose underlying CDF equals the censored CDF at ``x``; ``None`` means zero."""
        if self.width is not None:
            return floor_to_interval(x, self.width)
        b = cast(tuple[float, ...], self.boundaries)
        idx = find_interval_index(x, b)
        if idx == 0:
            return None
        if idx >= len(b):
            return b[-1]
        return b[idx - 1]

    def _pmf(self, x: float) -> float:
        bounds = self.interval(x)
        if bounds is None:
            return 0.0
        lower, upper = bounds
        return max(self._edge_cdf(upper) - self._edge_cdf(lower), 0.0)

    def _logpmf(self, x: float) -> float:
        if not self.dist.insupport(x):
            return -math.inf
        bounds = self.interval(x)
        if bounds is None:
            return -math.inf
        lower, upper = bounds
        log_upper, log_lower = self._edge_logcdf(upper), self._edge_logcdf(lower)
        if log_upper <= log_lower:
            return -math.inf
        return log_sub_exp(log_upper, log_lower)

    def _cdf(self, x: float) -> float:
        if x < self.dist.minimum:
            return 0.0
        if x >= self.dist.maximum:
            return 1.0
        edge = self._left_edge_for_cdf(x)
        return 0.0 if edge is None else self._edge_cdf(edge)

    def _logcdf(self, x: float) -> float:
        if x < self.dist.minimum:
            return -math.inf
        if x >= self.dist.maximum:
            return 0.0
        edge = self._left_edge_for_cdf(x)
        return -math.inf if edge is None else self._edge_logcdf(edge)

    def _sf(self, x: float) -> float:
        return 1.0 - self._cdf(x)

    def _logsf(self, x: float) -> float:
        logcdf = self._logcdf(x)
        if logcdf == -math.inf:
            return 0.0
        if logcdf >= 0.0:
            return -math.inf
        return float(log1mexp(logcdf))

    def _batched_mass(self, x: Any, *, log: bool) -> Any:
        """
        Interval masses for an array of points.

        Shared interval edges are evaluated once.
        """
        arr = as_array(x)
        if arr.ndim == 0:
            return self._logpmf(float(arr)) if log else self._pmf(float(arr))

        edge_value = self._edge_logcdf if log else self._edge_cdf
        cache: dict[float, float] = {}

        def cached(edge: float) -> float:
            if edge not in cache:
                cache[edge] = edge_value(edge)
            return cache[edge]

        out = np.empty(arr.size, dtype=np.float64)
        for i, value in enumerate(arr.ravel()):
            bounds = self.interval(float(value))
            if log and not self.dist.insupport(float(value)):
                bounds = None
            if bounds is None:
                out[i] = -math.inf if log else 0.0
                continue
            hi, lo = cached(bounds[1]), cached(bounds[0])
            if log:
                out[i] = log_sub_exp(hi, lo) if hi > lo else -math.inf
            else:
                out[i] = max(hi - lo, 0.0)
        return out.reshape(arr.shape)

    def _pmf_batched(self, x: Any) -> Any:
        return self._batched_mass(x, log=False)

    def _logpmf_batched(self, x: Any) -> Any:
        return self._batched_mass(x, log=True)

    def _ppf(self, p: Any) -> Any:
        q = as_array(p)
        if np.any(np.isnan(q)):
            raise ValueError("p must be in [0, 1], got NaN")
        if np.any((q < 0) | (q > 1)):
            raise ValueError("p must be in [0, 1]")
        continuous = as_array(self.dist.ppf(q))
        snapped = self.snap_many(continuous)
        upper = self._next_edges(continuous)

        # A base quantile that falls short of an edge by rounding still belongs to it.
        out = np.array(snapped, dtype=np.float64).ravel()
        flat_q, flat_upper = np.ravel(q), np.ravel(upper)
        for i, (prob, lower, edge) in enumerate(zip(flat_q, out.copy(), flat_upper, strict=True)):
            if not math.isfinite(edge) or edge <= lower:
                continue
            if (
                self._edge_cdf(float(lower)) < prob
                and self._edge_cdf(float(edge)) <= prob + QUANTILE_EDGE_TOLERANCE
            ):
                out[i] = edge
        return as_output(out.reshape(np.shape(snapped)))

    def _next_edges(self, x: np.ndarray) -> np.ndarray:
        """Right edge of the interval containing each ``x``; NaN past the last boundary."""
        if self.width is not None:
            return (np.floor(x / self.width) + 1.0) * self.width
        b = np.asarray(self.boundaries, dtype=np.float64)
        idx = np.searchsorted(b, x, side="right")
        return np.where(idx < b.size, b[np.minimum(idx, b.size - 1)], np.nan)

    def _scalar_characteristics(self) -> dict[GenericCharacteristicName, ScalarFunc]:
        return {
            CharacteristicName.CDF: self._cdf,
            CharacteristicName.LOGCDF: self._logcdf,
            CharacteristicName.SF: self._sf,
            CharacteristicName.LOGSF: self._logsf,
        }

    def _batched_characteristics(self) -> dict[GenericCharacteristicName, Callable[..., Any]]:
        return {
            CharacteristicName.PMF: self._pmf_batched,
            CharacteristicName.LOGPMF: self._logpmf_batched,
            CharacteristicName.PPF: self._ppf,
        }


def interval_censored(
    dist: Distribution, width_or_boundaries: float | Iterable[float]
) -> IntervalCensored:
    """
    Interval-censor ``dist``.

    Parameters
    ----------
    dist : Distribution
        Distribution to discretise.
    width_or_boundaries : float or iterable of float
        A number gives regular intervals of that width; a sequence gives
        the interval boundaries.

    Returns
    -------
    IntervalCensored

    Examples
    --------
    >>> d = interval_censored(delay, 1.0)  # doctest: +SKIP
    >>> d = interval_censored(delay, [0, 2, 5, 10])  # doctest: +SKIP
    """
    if isinstance(width_or_boundaries, int | float | np.number):
        return IntervalCensored(dist, width=float(width_or_boundaries))
    return IntervalCensored(dist, boundaries=tuple(float(b) for b in width_or_boundaries))
