"""
Normal distribution family implementation.

Contains the Normal family with mean/standard-deviation and mean/precision
parameterizations. Normal delays have unbounded support and so cannot be
primary-censored directly; the family serves as a primary-event distribution
and as a base for interval censoring and truncation.
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


def configure_normal_family() -> None:
    """
    Configure and register the Normal distribution family.
    """
    if ParametricFamilyRegister.contains(FamilyName.NORMAL):
        return

    NORMAL_DOC = """
    Normal (Gaussian) distribution.

    Defined by its mean (μ) and standard deviation (σ).

    Probability density function:
        f(x) = 1/(σ√(2π)) * exp(-(x-μ)²/(2σ²))
    """

    def _z(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_MeanStd, parameters)
        return cast(NumericArray, (as_array(x) - parameters.mu) / parameters.sigma)

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Log-density of the normal distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - mu: float (mean)
            - sigma: float (standard deviation)
        x : NumericArray
            Points at which to evaluate the log-density

        Returns
        -------
        NumericArray
            ``-z²/2 - log σ - log √(2π)`` with ``z = (x - μ)/σ``
        """
        sigma = cast(_MeanStd, parameters).sigma
        z = _z(parameters, x)
        return cast(NumericArray, as_output(-0.5 * z**2 - math.log(sigma) - _LOG_SQRT_2PI))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cast(NumericArray, as_output(np.exp(logpdf(parameters, x))))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Cumulative distribution function ``Φ((x - μ)/σ)``."""
        return cast(NumericArray, as_output(ndtr(_z(parameters, x))))

    def logcdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Log-CDF through ``scipy.special.log_ndtr``, accurate far in the left tail."""
        return cast(NumericArray, as_output(log_ndtr(_z(parameters, x))))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function (inverse CDF) for normal distribution.

        If p is 0 or 1, the result is -inf and inf correspondingly.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probabilities(p)
        parameters = cast(_MeanStd, parameters)
        return cast(NumericArray, as_output(parameters.mu + parameters.sigma * ndtri(p)))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of normal distribution."""
        return cast(_MeanStd, parameters).mu

    def _support(_: Parametrization) -> ContinuousSupport:
        return ContinuousSupport()

    Normal = ParametricFamily(
        name=FamilyName.NORMAL,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["meanStd", "meanPrec"],
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
    Normal.__doc__ = NORMAL_DOC

    @parametrization(family=Normal, name="meanStd")
    class _MeanStd(Parametrization):
        """
        Standard parametrization of normal distribution.

        Parameters
        ----------
        mu : float
            Mean of the distribution
        sigma : float
            Standard deviation of the distribution
        """

        mu: float
        sigma: float

        @constraint(description="sigma > 0")
        def check_sigma_positive(self) -> bool:
            return self.sigma > 0

    @parametrization(family=Normal, name="meanPrec")
    class _MeanPrec(Parametrization):
        """
        Mean-precision parametrization of normal distribution.

        Parameters
        ----------
        mu : float
            Mean of the distribution
        tau : float
            Precision parameter (inverse variance)
        """

        mu: float
        tau: float

        @constraint(description="tau > 0")
        def check_tau_positive(self) -> bool:
            return self.tau > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            return _MeanStd(mu=self.mu, sigma=math.sqrt(1 / self.tau))

    ParametricFamilyRegister.register(Normal)
