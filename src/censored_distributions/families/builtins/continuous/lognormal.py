"""
Log-normal distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import log_ndtr, ndtr, ndtri

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

_LOG_SQRT_2PI = 0.5 * math.log(2 * math.pi)


def configure_lognormal_family() -> None:
    """
    Configure and register the LogNormal distribution family.
    """
    if ParametricFamilyRegister.contains(FamilyName.LOGNORMAL):
        return

    LOGNORMAL_DOC = """
    Log-normal distribution: ``log X ~ Normal(μ, σ)``.

    Probability density function:
        f(x) = 1/(xσ√(2π)) * exp(-(log x - μ)²/(2σ²)) for x > 0
    """

    def _log_z(parameters: _MuSigma, x: NumericArray) -> tuple[NumericArray, NumericArray]:
        x = as_array(x)
        positive = x > 0
        with np.errstate(divide="ignore"):
            log_x = np.log(np.where(positive, x, 1.0))
        return cast(NumericArray, positive), cast(
            NumericArray, (log_x - parameters.mu) / parameters.sigma
        )

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Log-density of the log-normal distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - mu: float (mean of log X)
            - sigma: float (standard deviation of log X)
        x : NumericArray
            Points at which to evaluate the log-density

        Returns
        -------
        NumericArray
            Log-density values; ``-inf`` for ``x ≤ 0``
        """
        parameters = cast(_MuSigma, parameters)
        positive, z = _log_z(parameters, x)
        log_x = z * parameters.sigma + parameters.mu
        values = -0.5 * z**2 - log_x - math.log(parameters.sigma) - _LOG_SQRT_2PI
        return cast(NumericArray, as_output(np.where(positive, values, -np.inf)))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cast(NumericArray, as_output(np.exp(logpdf(parameters, x))))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Cumulative distribution function ``Φ((log x - μ)/σ)``, 0 for ``x ≤ 0``."""
        positive, z = _log_z(cast(_MuSigma, parameters), x)
        return cast(NumericArray, as_output(np.where(positive, ndtr(z), 0.0)))

    def logcdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        positive, z = _log_z(cast(_MuSigma, parameters), x)
        return cast(NumericArray, as_output(np.where(positive, log_ndtr(z), -np.inf)))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function ``exp(μ + σ Φ⁻¹(p))``.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probabilities(p)
        parameters = cast(_MuSigma, parameters)
        return cast(NumericArray, as_output(np.exp(parameters.mu + parameters.sigma * ndtri(p))))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of log-normal distribution, ``exp(μ + σ²/2)``."""
        parameters = cast(_MuSigma, parameters)
        return math.exp(parameters.mu + parameters.sigma**2 / 2)

    def _support(_: Parametrization) -> ContinuousSupport:
        return ContinuousSupport(left=0.0)

    LogNormal = ParametricFamily(
        name=FamilyName.LOGNORMAL,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["muSigma"],
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
    LogNormal.__doc__ = LOGNORMAL_DOC

    @parametrization(family=LogNormal, name="muSigma")
    class _MuSigma(Parametrization):
        """
        Log-scale parametrization of log-normal distribution.

        Parameters
        ----------
        mu : float
            Mean of log X
        sigma : float
            Standard deviation of log X
        """

        mu: float
        sigma: float

        @constraint(description="sigma > 0")
        def check_sigma_positive(self) -> bool:
            return self.sigma > 0

    ParametricFamilyRegister.register(LogNormal)
