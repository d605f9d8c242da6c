"""
Exponential distribution family implementation.

Contains the Exponential family with rate and scale parameterizations.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np

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


def configure_exponential_family() -> None:
    """
    Configure and register the Exponential distribution family.
    """
    if ParametricFamilyRegister.contains(FamilyName.EXPONENTIAL):
        return

    EXPONENTIAL_DOC = """
    Exponential distribution.

    Describes the time between events in a Poisson process. It has a single
    parameter: rate (λ) or scale (β = 1/λ).

    Probability density function (rate parametrization):
        f(x) = λ * exp(-λ * x) for x ≥ 0
    """

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Log-density of the exponential distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - lambda_: float (rate parameter)
        x : NumericArray
            Points at which to evaluate the log-density

        Returns
        -------
        NumericArray
            ``log λ - λx`` for ``x ≥ 0``, ``-inf`` otherwise
        """
        lambda_ = cast(_Rate, parameters).lambda_
        x = as_array(x)
        return cast(
            NumericArray, as_output(np.where(x >= 0, math.log(lambda_) - lambda_ * x, -np.inf))
        )

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        lambda_ = cast(_Rate, parameters).lambda_
        x = as_array(x)
        return cast(NumericArray, as_output(np.where(x >= 0, lambda_ * np.exp(-lambda_ * x), 0.0)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Cumulative distribution function ``1 - exp(-λx)`` computed with ``expm1``."""
        lambda_ = cast(_Rate, parameters).lambda_
        x = as_array(x)
        return cast(
            NumericArray, as_output(np.where(x > 0, -np.expm1(-lambda_ * np.maximum(x, 0)), 0.0))
        )

    def logcdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        lambda_ = cast(_Rate, parameters).lambda_
        x = as_array(x)
        with np.errstate(divide="ignore"):
            values = np.where(x > 0, np.log(-np.expm1(-lambda_ * np.maximum(x, 0))), -np.inf)
        return cast(NumericArray, as_output(values))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function (inverse CDF) for exponential distribution.

        Returns
        -------
        NumericArray
            Quantiles corresponding to probabilities p:
            - For p = 0: returns 0.0
            - For p = 1: returns np.inf
            - For p in (0, 1): returns -ln(1-p)/λ

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probabilities(p)
        lambda_ = cast(_Rate, parameters).lambda_
        with np.errstate(divide="ignore", invalid="ignore"):
            return cast(NumericArray, as_output(np.where(p < 1.0, -np.log1p(-p) / lambda_, np.inf)))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of exponential distribution."""
        return 1.0 / cast(_Rate, parameters).lambda_

    def _support(_: Parametrization) -> ContinuousSupport:
        return ContinuousSupport(left=0.0)

    Exponential = ParametricFamily(
        name=FamilyName.EXPONENTIAL,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["rate", "scale"],
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
    Exponential.__doc__ = EXPONENTIAL_DOC

    @parametrization(family=Exponential, name="rate")
    class _Rate(Parametrization):
        """
        Rate parametrization of exponential distribution.

        Parameters
        ----------
        lambda_ : float
            Rate parameter (λ) of the distribution
        """

        lambda_: float

        @constraint(description="lambda_ > 0")
        def check_lambda_positive(self) -> bool:
            return self.lambda_ > 0

    @parametrization(family=Exponential, name="scale")
    class _Scale(Parametrization):
        """
        Scale parametrization of exponential distribution.

        Parameters
        ----------
        beta : float
            Scale parameter (β) of the distribution, β = 1/λ
        """

        beta: float

        @constraint(description="beta > 0")
        def check_beta_positive(self) -> bool:
            return self.beta > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            return _Rate(lambda_=1.0 / self.beta)

    ParametricFamilyRegister.register(Exponential)
