"""
Uniform distribution family implementation.

The continuous uniform is the default primary-event window of a
primary-censored distribution, and the only primary family with closed-form
censored CDFs.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

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


def configure_uniform_family() -> None:
    """
    Configure and register the Uniform distribution family.
    """
    if ParametricFamilyRegister.contains(FamilyName.CONTINUOUS_UNIFORM):
        return

    UNIFORM_DOC = """
    Uniform (continuous) distribution on [lower_bound, upper_bound].

    Probability density function:
        f(x) = 1/(upper_bound - lower_bound) for x in [lower_bound, upper_bound], 0 otherwise
    """

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for uniform distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - lower_bound: float (lower bound)
            - upper_bound: float (upper bound)
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            ``1 / (upper_bound - lower_bound)`` inside the bounds, 0 outside
        """
        parameters = cast(_Standard, parameters)
        a, b = parameters.lower_bound, parameters.upper_bound
        x = as_array(x)
        return cast(NumericArray, as_output(np.where((x >= a) & (x <= b), 1.0 / (b - a), 0.0)))

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Log-density: ``-log(upper_bound - lower_bound)`` inside the bounds, ``-inf`` outside."""
        parameters = cast(_Standard, parameters)
        a, b = parameters.lower_bound, parameters.upper_bound
        x = as_array(x)
        return cast(
            NumericArray, as_output(np.where((x >= a) & (x <= b), -np.log(b - a), -np.inf))
        )

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Cumulative distribution function for uniform distribution.

        Uses np.clip for vectorized computation:
            - For x < lower_bound: returns 0
            - For x > upper_bound: returns 1
        """
        parameters = cast(_Standard, parameters)
        a, b = parameters.lower_bound, parameters.upper_bound
        return cast(NumericArray, as_output(np.clip((as_array(x) - a) / (b - a), 0.0, 1.0)))

    def logcdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Standard, parameters)
        a, b = parameters.lower_bound, parameters.upper_bound
        with np.errstate(divide="ignore"):
            values = np.log(np.clip((as_array(x) - a) / (b - a), 0.0, 1.0))
        return cast(NumericArray, as_output(values))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function (inverse CDF) for uniform distribution.

        Returns ``lower_bound + p * (upper_bound - lower_bound)``.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probabilities(p)
        parameters = cast(_Standard, parameters)
        a, b = parameters.lower_bound, parameters.upper_bound
        return cast(NumericArray, as_output(a + p * (b - a)))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of uniform distribution."""
        parameters = cast(_Standard, parameters)
        return (parameters.lower_bound + parameters.upper_bound) / 2

    def _support(parameters: Parametrization) -> ContinuousSupport:
        parameters = cast(_Standard, parameters)
        return ContinuousSupport(left=parameters.lower_bound, right=parameters.upper_bound)

    Uniform = ParametricFamily(
        name=FamilyName.CONTINUOUS_UNIFORM,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["standard", "meanWidth"],
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
    Uniform.__doc__ = UNIFORM_DOC

    @parametrization(family=Uniform, name="standard")
    class _Standard(Parametrization):
        """
        Standard parametrization of uniform distribution.

        Parameters
        ----------
        lower_bound : float
            Lower bound of the distribution
        upper_bound : float
            Upper bound of the distribution
        """

        lower_bound: float
        upper_bound: float

        @constraint(description="lower_bound < upper_bound")
        def check_lower_less_than_upper(self) -> bool:
            return self.lower_bound < self.upper_bound

    @parametrization(family=Uniform, name="meanWidth")
    class _MeanWidth(Parametrization):
        """
        Mean-width parametrization of uniform distribution.

        Parameters
        ----------
        mean : float
            Center of the window
        width : float
            Width of the window (upper_bound - lower_bound)
        """

        mean: float
        width: float

        @constraint(description="width > 0")
        def check_width_positive(self) -> bool:
            return self.width > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            half_width = self.width / 2
            return _Standard(lower_bound=self.mean - half_width, upper_bound=self.mean + half_width)

    ParametricFamilyRegister.register(Uniform)
