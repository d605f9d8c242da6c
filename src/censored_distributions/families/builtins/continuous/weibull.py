"""
Weibull distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import xlogy

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


def configure_weibull_family() -> None:
    """
    Configure and register the Weibull distribution family.
    """
    if ParametricFamilyRegister.contains(FamilyName.WEIBULL):
        return

    WEIBULL_DOC = """
    Weibull distribution with shape k and scale λ.

    Cumulative distribution function:
        F(x) = 1 - exp(-(x/λ)^k) for x ≥ 0
    """

    def _scaled(parameters: _ShapeScale, x: NumericArray) -> NumericArray:
        return cast(NumericArray, np.maximum(as_array(x), 0.0) / parameters.scale)

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Log-density ``log k - log λ + (k-1) log(x/λ) - (x/λ)^k`` for ``x ≥ 0``.
        """
        parameters = cast(_ShapeScale, parameters)
        k = parameters.shape
        x = as_array(x)
        y = _scaled(parameters, x)
        with np.errstate(divide="ignore"):
            values = math.log(k) - math.log(parameters.scale) + xlogy(k - 1.0, y) - y**k
        return cast(NumericArray, as_output(np.where(x >= 0, values, -np.inf)))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cast(NumericArray, as_output(np.exp(logpdf(parameters, x))))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_ShapeScale, parameters)
        y = _scaled(parameters, x)
        return cast(NumericArray, as_output(-np.expm1(-(y**parameters.shape))))

    def logcdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        with np.errstate(divide="ignore"):
            return cast(NumericArray, as_output(np.log(as_array(cdf(parameters, x)))))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function ``λ (-log(1 - p))^(1/k)``.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probabilities(p)
        parameters = cast(_ShapeScale, parameters)
        with np.errstate(divide="ignore"):
            values = parameters.scale * (-np.log1p(-p)) ** (1.0 / parameters.shape)
        return cast(NumericArray, as_output(values))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of Weibull distribution, ``λ Γ(1 + 1/k)``."""
        parameters = cast(_ShapeScale, parameters)
        return parameters.scale * math.gamma(1.0 + 1.0 / parameters.shape)

    def _support(_: Parametrization) -> ContinuousSupport:
        return ContinuousSupport(left=0.0)

    Weibull = ParametricFamily(
        name=FamilyName.WEIBULL,
        distr_type=UnivariateContinuous,
        distr_parametrizations=["shapeScale"],
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
    Weibull.__doc__ = WEIBULL_DOC

    @parametrization(family=Weibull, name="shapeScale")
    class _ShapeScale(Parametrization):
        """
        Shape-scale parametrization of Weibull distribution.

        Parameters
        ----------
        shape : float
            Shape parameter k
        scale : float
            Scale parameter λ
        """

        shape: float
        scale: float

        @constraint(description="shape > 0")
        def check_shape_positive(self) -> bool:
            return self.shape > 0

        @constraint(description="scale > 0")
        def check_scale_positive(self) -> bool:
            return self.scale > 0

    ParametricFamilyRegister.register(Weibull)
