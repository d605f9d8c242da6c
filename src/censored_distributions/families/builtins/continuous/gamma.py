"""
Gamma distribution family implementation.

Contains the Gamma family with shape/scale (base) and shape/rate
parameterizations. The closed-form primary-censored CDF for a Gamma delay
with a uniform primary window needs the CDF of ``Gamma(shape + 1, scale)``,
which is built from this family as well.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import gammainc, gammaincinv, gammaln, xlogy

from censored_distributions.distributions.support import ContinuousSupport
from censored_distributions.families.builtins.continuous._numeric import (
    as_array,
    as_output,
    check_probabilities,
)
from censored_distributions.families.parametric_family import ParametricFamily
from censored_distributions.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from censored_distributions.families.registry import ParametricFamilyRegister
from censored_distributions.types import (
    CharacteristicName,
    FamilyName,
    NumericArray,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from typing import Any

_LOG_TINY = math.log(np.finfo(np.float64).tiny)
_SERIES_TERMS = 200


def _log_lower_gamma_series(k: float, z: np.ndarray) -> np.ndarray:
    """
    ``log P(k, z)`` from the lower power series.

    ``P(k, z) = z^k e^(-z) / Γ(k+1) * (1 + z/(k+1) + z^2/((k+1)(k+2)) + ...)``,
    summed for ``z`` far enough below ``k`` that ``gammainc`` underflows.
    """
    term = np.ones_like(z)
    series = np.ones_like(z)
    for n in range(1, _SERIES_TERMS):
        term = term * z / (k + n)
        series = series + term
    return cast(np.ndarray, xlogy(k, z) - z - gammaln(k + 1.0) + np.log(series))


def configure_gamma_family() -> None:
    """
    Configure and register the Gamma distribution family.
    """
    if ParametricFamilyRegister.contains(FamilyName.GAMMA):
        return

    GAMMA_DOC = """
    Gamma distribution with shape k and scale θ.

    Probability density function:
        f(x) = x^(k-1) * exp(-x/θ) / (Γ(k) * θ^k) for x ≥ 0

    A common model for incubation periods and serial intervals.
    """

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Log-density of the gamma distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - shape: float (k)
            - scale: float (θ)
        x : NumericArray
            Points at which to evaluate the log-density

        Returns
        -------
        NumericArray
            ``(k-1) log x - x/θ - log Γ(k) - k log θ`` for ``x ≥ 0``, ``-inf`` below 0
        """
        parameters = cast(_ShapeScale, parameters)
        k, theta = parameters.shape, parameters.scale
        x = as_array(x)
        xs = np.maximum(x, 0.0)
        with np.errstate(divide="ignore", invalid="ignore"):
            values = xlogy(k - 1.0, xs) - xs / theta - gammaln(k) - k * math.log(theta)
        return cast(NumericArray, as_output(np.where((x >= 0) & (x < np.inf), values, -np.inf)))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cast(NumericArray, as_output(np.exp(logpdf(parameters, x))))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Regularized lower incomplete gamma ``P(k, x/θ)``, 0 for ``x ≤ 0``."""
        parameters = cast(_ShapeScale, parameters)
        x = as_array(x)
        values = gammainc(parameters.shape, np.maximum(x, 0.0) / parameters.scale)
        return cast(NumericArray, as_output(np.where(x > 0, values, 0.0)))

    def logcdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Log of ``P(k, x/θ)``; the power series takes over where ``gammainc`` underflows."""
        parameters = cast(_ShapeScale, parameters)
        x = as_array(x)
        z = np.atleast_1d(np.maximum(x, 0.0) / parameters.scale)
        with np.errstate(divide="ignore"):
            values = np.log(gammainc(parameters.shape, z))
        underflow = (values <= _LOG_TINY) & (z > 0)
        if np.any(underflow):
            values[underflow] = _log_lower_gamma_series(parameters.shape, z[underflow])
        values = values.reshape(np.shape(x))
        return cast(NumericArray, as_output(np.where(x > 0, values, -np.inf)))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function through ``scipy.special.gammaincinv``.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probabilities(p)
        parameters = cast(_ShapeScale, parameters)
        return cast(NumericArray, as_output(gammaincinv(parameters.shape, p) * parameters.scale))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of gamma distribution."""
        parameters = cast(_ShapeScale, parameters)
        return parameters.shape * parameters.scale

    def _support(_: Parametrization) -> ContinuousSupport:
        return ContinuousSupport(left=0.0)

    Gamma = ParametricFamily(
        name=FamilyName.GAMMA,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["shapeScale", "shapeRate"],
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.LOGPDF: logpdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.LOGCDF: logcdf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.MEAN: mean_func,
        },
        support_by_parametrization=_support,
    )
    Gamma.__doc__ = GAMMA_DOC

    @parametrization(family=Gamma, name="shapeScale")
    class _ShapeScale(Parametrization):
        """
        Shape-scale parametrization of gamma distribution.

        Parameters
        ----------
        shape : float
            Shape parameter k
        scale : float
            Scale parameter θ
        """

        shape: float
        scale: float

        @constraint(description="shape > 0")
        def check_shape_positive(self) -> bool:
            return self.shape > 0

        @constraint(description="scale > 0")
        def check_scale_positive(self) -> bool:
            return self.scale > 0

    @parametrization(family=Gamma, name="shapeRate")
    class _ShapeRate(Parametrization):
        """
        Shape-rate parametrization of gamma distribution.

        Parameters
        ----------
        shape : float
            Shape parameter k
        rate : float
            Rate parameter β = 1/θ
        """

        shape: float
        rate: float

        @constraint(description="shape > 0")
        def check_shape_positive(self) -> bool:
            return self.shape > 0

        @constraint(description="rate > 0")
        def check_rate_positive(self) -> bool:
            return self.rate > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            return _ShapeScale(shape=self.shape, scale=1.0 / self.rate)

    ParametricFamilyRegister.register(Gamma)
