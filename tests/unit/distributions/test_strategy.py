from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from collections.abc import Callable
from typing import Any, cast

import numpy as np
import pytest
from mypy_extensions import KwArg

from censored_distributions.distributions.computation import (
    AnalyticalComputation,
    FittedComputationMethod,
)
from censored_distributions.distributions.support import ContinuousSupport
from censored_distributions.types import CharacteristicName, Kind
from tests.utils.mocks import StandaloneEuclideanUnivariateDistribution

C = CharacteristicName


def _analytical(target: str, func: Callable[..., float]) -> AnalyticalComputation[float, float]:
    return AnalyticalComputation[float, float](
        target=target, func=cast(Callable[[float, KwArg(Any)], float], func)
    )


def make_uniform_ppf_distribution() -> StandaloneEuclideanUnivariateDistribution:
    return StandaloneEuclideanUnivariateDistribution(
        kind=Kind.CONTINUOUS,
        analytical_computations=[_analytical(C.PPF, lambda q, **_: q)],
        support=ContinuousSupport(0.0, 1.0),
    )


def make_logistic_cdf_distribution() -> StandaloneEuclideanUnivariateDistribution:
    def logistic_cdf(x: float, **_: Any) -> float:
        return 1.0 / (1.0 + math.exp(-x))

    return StandaloneEuclideanUnivariateDistribution(
        kind=Kind.CONTINUOUS,
        analytical_computations=[_analytical(C.CDF, logistic_cdf)],
    )


def make_exponential_pdf_distribution() -> StandaloneEuclideanUnivariateDistribution:
    def exponential_pdf(x: float, **_: Any) -> float:
        return math.exp(-x) if x >= 0 else 0.0

    return StandaloneEuclideanUnivariateDistribution(
        kind=Kind.CONTINUOUS,
        analytical_computations=[_analytical(C.PDF, exponential_pdf)],
        support=ContinuousSupport(left=0.0),
    )


class TestComputationStrategy:
    def test_analytical_is_returned_as_is(self) -> None:
        distr = make_logistic_cdf_distribution()
        method = distr.query_method(C.CDF)

        assert isinstance(method, AnalyticalComputation)
        assert method(0.0) == pytest.approx(0.5)

    def test_uniform_ppf_only(self) -> None:
        distr = make_uniform_ppf_distribution()

        cdf = distr.query_method(C.CDF)
        pdf = distr.query_method(C.PDF)

        assert isinstance(cdf, FittedComputationMethod)
        for x, expected in [(-0.5, 0.0), (0.2, 0.2), (0.9, 0.9), (1.5, 1.0)]:
            assert cdf(x) == pytest.approx(expected, rel=5e-3, abs=5e-4)
        for x, expected in [(0.25, 1.0), (0.75, 1.0), (-0.1, 0.0), (1.1, 0.0)]:
            assert pdf(x) == pytest.approx(expected, rel=5e-3, abs=5e-3)

    def test_logistic_cdf_only(self) -> None:
        distr = make_logistic_cdf_distribution()

        ppf = distr.query_method(C.PPF)
        logcdf = distr.query_method(C.LOGCDF)
        sf = distr.query_method(C.SF)
        logsf = distr.query_method(C.LOGSF)

        assert ppf(0.5) == pytest.approx(0.0, abs=1e-9)
        assert ppf(0.9) == pytest.approx(math.log(9.0), rel=1e-8)
        assert logcdf(1.0) == pytest.approx(-math.log1p(math.exp(-1.0)))
        assert sf(1.0) == pytest.approx(1.0 / (1.0 + math.e))
        assert logsf(1.0) == pytest.approx(-math.log1p(math.e))

    def test_exponential_pdf_only(self) -> None:
        distr = make_exponential_pdf_distribution()

        assert distr.cdf(1.0) == pytest.approx(1.0 - math.exp(-1.0), rel=1e-8)
        assert distr.cdf(-1.0) == 0.0
        assert distr.logpdf(2.0) == pytest.approx(-2.0)
        assert distr.ppf(0.5) == pytest.approx(math.log(2.0), rel=1e-6)
        assert distr.ppf(0.0) == 0.0

    def test_logsf_is_minus_inf_where_cdf_is_one(self) -> None:
        distr = make_uniform_ppf_distribution()
        assert distr.logccdf(2.0) == -math.inf
        assert distr.logccdf(-1.0) == 0.0

    def test_no_analytical_computations(self) -> None:
        distr = StandaloneEuclideanUnivariateDistribution(kind=Kind.CONTINUOUS)

        with pytest.raises(RuntimeError, match="no analytical computations"):
            distr.query_method(C.CDF)

    def test_unreachable_characteristic(self) -> None:
        distr = make_logistic_cdf_distribution()

        with pytest.raises(RuntimeError, match="No conversion path"):
            distr.mean()

    def test_fitted_log_conversion_handles_arrays(self) -> None:
        distr = StandaloneEuclideanUnivariateDistribution(
            kind=Kind.CONTINUOUS,
            analytical_computations=[
                _analytical(C.CDF, lambda x, **_: np.clip(np.asarray(x), 0.0, 1.0))
            ],
            support=ContinuousSupport(0.0, 1.0),
        )

        values = distr.logcdf(np.array([-1.0, 0.5, 2.0]))

        assert values[0] == -np.inf
        assert values[1] == pytest.approx(math.log(0.5))
        assert values[2] == 0.0
