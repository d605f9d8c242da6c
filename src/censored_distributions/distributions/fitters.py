"""
Characteristic conversions.

Fitters turn one resolvable characteristic of a distribution into another
(``cdf -> logcdf``, ``cdf -> ppf``, ...). They are registered as edges of
the characteristic graph in :mod:`censored_distributions.distributions.registry`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable
from math import isfinite
from typing import TYPE_CHECKING, Any, cast

import numpy as np
from mypy_extensions import KwArg
from scipy import (
    integrate as _sp_integrate,
    optimize as _sp_optimize,
)

from censored_distributions.distributions.computation import FittedComputationMethod
from censored_distributions.logexp import log1mexp
from censored_distributions.types import CharacteristicName

if TYPE_CHECKING:
    from censored_distributions.distributions.distribution import Distribution
    from censored_distributions.types import GenericCharacteristicName, ScalarFunc


def _resolve(distribution: Distribution, name: GenericCharacteristicName) -> Callable[..., Any]:
    """
    Resolve a characteristic from the distribution.

    Raises
    ------
    RuntimeError
        If the distribution does not provide a suitable computation strategy.
    """
    try:
        return distribution.query_method(name)
    except AttributeError as e:
        raise RuntimeError(
            "Distribution must provide computation_strategy.query_method(name, distribution)."
        ) from e


def _scalar_or_array(values: Any, like: Any) -> Any:
    arr = np.asarray(values, dtype=np.float64)
    return float(arr) if np.ndim(like) == 0 else arr


def _ppf_bisect_from_cdf(
    cdf: ScalarFunc,
    *,
    x0: float = 0.0,
    init_step: float = 1.0,
    expand_factor: float = 2.0,
    max_expand: int = 60,
    x_tol: float = 1e-12,
    max_iter: int = 200,
) -> ScalarFunc:
    """
    Build a scalar ``ppf`` from a scalar ``cdf`` using bracket expansion
    and bisection.

    Returns the leftmost ``x`` with ``cdf(x) >= q``; ``q <= 0`` maps to
    ``-inf`` and ``q >= 1`` to ``+inf``.
    """

    def _ppf(q: float) -> float:
        if q <= 0.0:
            return float("-inf")
        if q >= 1.0:
            return float("inf")

        step = init_step
        L, R = x0 - step, x0 + step
        FL, FR = float(cdf(L)), float(cdf(R))
        for _ in range(max_expand):
            if FL < q <= FR:
                break
            step *= expand_factor
            if q <= FL:
                L -= step
                FL = float(cdf(L))
            if q > FR:
                R += step
                FR = float(cdf(R))

        it = 0
        while it < max_iter and x_tol * (1.0 + max(abs(L), abs(R))) < (R - L):
            M = 0.5 * (L + R)
            if q <= float(cdf(M)):
                R = M
            else:
                L = M
            it += 1
        return R

    return _ppf


def _num_derivative(f: ScalarFunc, x: float, h: float = 1e-5) -> float:
    """5-point central numerical derivative used for ``cdf -> pdf``."""
    if not isfinite(x):
        return float("nan")
    f1 = float(f(x + h))
    f_1 = float(f(x - h))
    f2 = float(f(x + 2 * h))
    f_2 = float(f(x - 2 * h))
    return float((-f2 + 8 * f1 - 8 * f_1 + f_2) / (12.0 * h))


def fit_pdf_to_cdf_1C(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[float, float]:
    """Fit ``cdf`` by integrating ``pdf`` from the left end of the support."""
    pdf_func = _resolve(distribution, CharacteristicName.PDF)
    left = distribution.support.left

    def _cdf(x: float, **options: Any) -> float:
        if x <= left:
            return 0.0
        val, _ = _sp_integrate.quad(lambda t: float(pdf_func(t)), left, x, limit=200)
        return float(np.clip(val, 0.0, 1.0))

    return FittedComputationMethod[float, float](
        target=CharacteristicName.CDF,
        sources=[CharacteristicName.PDF],
        func=cast(Callable[[float, KwArg(Any)], float], _cdf),
    )


def fit_cdf_to_pdf_1C(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[float, float]:
    """Fit ``pdf`` as a clipped numerical derivative of ``cdf``."""
    cdf_func = _resolve(distribution, CharacteristicName.CDF)

    def _pdf(x: float, **options: Any) -> float:
        d = _num_derivative(lambda t: float(cdf_func(t)), x, h=1e-5)
        return float(max(d, 0.0))

    return FittedComputationMethod[float, float](
        target=CharacteristicName.PDF,
        sources=[CharacteristicName.CDF],
        func=cast(Callable[[float, KwArg(Any)], float], _pdf),
    )


def fit_cdf_to_ppf_1C(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[float, float]:
    """Fit ``ppf`` from a resolvable ``cdf`` by bracketing and bisection."""
    cdf_func = _resolve(distribution, CharacteristicName.CDF)
    support = distribution.support
    x0 = 0.0
    if isfinite(support.left) and isfinite(support.right):
        x0 = 0.5 * (support.left + support.right)
    elif isfinite(support.left):
        x0 = support.left + 1.0
    elif isfinite(support.right):
        x0 = support.right - 1.0

    ppf_func = _ppf_bisect_from_cdf(lambda t: float(cdf_func(t)), x0=x0)

    def _ppf(q: float, **options: Any) -> float:
        if q <= 0.0:
            return float(support.left)
        if q >= 1.0:
            return float(support.right)
        return ppf_func(q)

    return FittedComputationMethod[float, float](
        target=CharacteristicName.PPF,
        sources=[CharacteristicName.CDF],
        func=cast(Callable[[float, KwArg(Any)], float], _ppf),
    )


def fit_ppf_to_cdf_1C(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[float, float]:
    """Fit ``cdf`` by numerically inverting a resolvable ``ppf`` with a root solver."""
    ppf_func = _resolve(distribution, CharacteristicName.PPF)

    def _cdf(x: float, **options: Any) -> float:
        if not isfinite(x):
            return 0.0 if x == float("-inf") else 1.0

        def f(q: float) -> float:
            return float(ppf_func(q) - x)

        lo, hi = 1e-12, 1.0 - 1e-12
        if f(lo) > 0.0:
            return 0.0
        if f(hi) < 0.0:
            return 1.0
        q = float(_sp_optimize.brentq(f, lo, hi, maxiter=256))
        return float(np.clip(q, 0.0, 1.0))

    return FittedComputationMethod[float, float](
        target=CharacteristicName.CDF,
        sources=[CharacteristicName.PPF],
        func=cast(Callable[[float, KwArg(Any)], float], _cdf),
    )


# --- log-space and survival conversions (any kind) -------------------------


def _fit_log(
    source: CharacteristicName, target: CharacteristicName
) -> Callable[..., FittedComputationMethod[Any, Any]]:
    def fitter(distribution: Distribution, /, **_: Any) -> FittedComputationMethod[Any, Any]:
        func = _resolve(distribution, source)

        def _log(x: Any, **options: Any) -> Any:
            with np.errstate(divide="ignore"):
                values = np.log(np.clip(np.asarray(func(x), dtype=np.float64), 0.0, None))
            return _scalar_or_array(values, x)

        return FittedComputationMethod[Any, Any](target=target, sources=[source], func=_log)

    return fitter


def _fit_exp(
    source: CharacteristicName, target: CharacteristicName
) -> Callable[..., FittedComputationMethod[Any, Any]]:
    def fitter(distribution: Distribution, /, **_: Any) -> FittedComputationMethod[Any, Any]:
        func = _resolve(distribution, source)

        def _exp(x: Any, **options: Any) -> Any:
            return _scalar_or_array(np.exp(np.asarray(func(x), dtype=np.float64)), x)

        return FittedComputationMethod[Any, Any](target=target, sources=[source], func=_exp)

    return fitter


fit_cdf_to_logcdf = _fit_log(CharacteristicName.CDF, CharacteristicName.LOGCDF)
fit_logcdf_to_cdf = _fit_exp(CharacteristicName.LOGCDF, CharacteristicName.CDF)
fit_pdf_to_logpdf = _fit_log(CharacteristicName.PDF, CharacteristicName.LOGPDF)
fit_logpdf_to_pdf = _fit_exp(CharacteristicName.LOGPDF, CharacteristicName.PDF)


def fit_cdf_to_sf(distribution: Distribution, /, **_: Any) -> FittedComputationMethod[Any, Any]:
    """Fit the survival function ``1 - cdf``."""
    cdf_func = _resolve(distribution, CharacteristicName.CDF)

    def _sf(x: Any, **options: Any) -> Any:
        return _scalar_or_array(1.0 - np.asarray(cdf_func(x), dtype=np.float64), x)

    return FittedComputationMethod[Any, Any](
        target=CharacteristicName.SF, sources=[CharacteristicName.CDF], func=_sf
    )


def fit_logcdf_to_logsf(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[Any, Any]:
    """
    Fit ``log(1 - cdf)`` from ``logcdf`` through :func:`log1mexp`.

    ``logcdf = -inf`` maps to ``0`` and ``logcdf >= 0`` maps to ``-inf``.
    """
    logcdf_func = _resolve(distribution, CharacteristicName.LOGCDF)

    def _logsf(x: Any, **options: Any) -> Any:
        logcdf = np.asarray(logcdf_func(x), dtype=np.float64)
        values = np.where(
            logcdf >= 0.0, -np.inf, log1mexp(np.minimum(logcdf, 0.0))
        )
        return _scalar_or_array(values, x)

    return FittedComputationMethod[Any, Any](
        target=CharacteristicName.LOGSF, sources=[CharacteristicName.LOGCDF], func=_logsf
    )
