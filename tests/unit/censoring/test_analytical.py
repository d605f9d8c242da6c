from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import pytest

from censored_distributions.censoring.analytical import (
    AnalyticalCDFRegister,
    configure_analytical_cdfs,
    gamma_uniform_cdf,
    lognormal_uniform_cdf,
    reset_analytical_cdfs,
    weibull_uniform_cdf,
)
from censored_distributions.censoring.primary_censored import primary_censored
from censored_distributions.censoring.primarycensored_cdf import (
    numeric_primarycensored_cdf,
    primarycensored_cdf,
)
from censored_distributions.censoring.solvers import AnalyticalSolver, NumericSolver
from censored_distributions.families.configuration import family_distribution
from censored_distributions.types import FamilyName

UNIFORM = FamilyName.CONTINUOUS_UNIFORM
POINTS = [1.0, 2.0, 5.0, 10.0, 20.0]


def _uniform(lower: float = 0.0, upper: float = 1.0):
    return family_distribution(UNIFORM, lower_bound=lower, upper_bound=upper)


DELAYS = {
    "gamma": lambda: family_distribution(FamilyName.GAMMA, shape=3.0, scale=2.0),
    "lognormal": lambda: family_distribution(FamilyName.LOGNORMAL, mu=1.5, sigma=0.5),
    "weibull": lambda: family_distribution(FamilyName.WEIBULL, shape=2.0, scale=3.0),
}


class TestAnalyticalCDFRegister:
    def test_builtin_pairs(self) -> None:
        reg = configure_analytical_cdfs()

        assert set(reg.pairs()) == {
            (FamilyName.GAMMA, UNIFORM),
            (FamilyName.LOGNORMAL, UNIFORM),
            (FamilyName.WEIBULL, UNIFORM),
        }
        assert reg.contains(FamilyName.GAMMA, UNIFORM)
        assert not reg.contains(FamilyName.EXPONENTIAL, UNIFORM)

    def test_configure_is_cached(self) -> None:
        assert configure_analytical_cdfs() is configure_analytical_cdfs()

    def test_duplicate_registration_fails(self) -> None:
        configure_analytical_cdfs()
        with pytest.raises(ValueError, match="already registered"):
            AnalyticalCDFRegister.register(FamilyName.GAMMA, UNIFORM, gamma_uniform_cdf)

    def test_lookup(self) -> None:
        configure_analytical_cdfs()
        gamma = DELAYS["gamma"]()

        assert AnalyticalCDFRegister.lookup(gamma, _uniform()) is gamma_uniform_cdf
        exponential = family_distribution(FamilyName.EXPONENTIAL, lambda_=1.0)
        assert AnalyticalCDFRegister.lookup(exponential, _uniform()) is None
        assert AnalyticalCDFRegister.lookup(gamma, gamma) is None

    def test_lookup_rejects_wrapped_distributions(self) -> None:
        configure_analytical_cdfs()
        wrapped = primary_censored(DELAYS["gamma"]())

        assert AnalyticalCDFRegister.lookup(wrapped, _uniform()) is None

    def test_reset_drops_solutions(self) -> None:
        configure_analytical_cdfs()
        reset_analytical_cdfs()

        assert AnalyticalCDFRegister.pairs() == []
        assert len(configure_analytical_cdfs().pairs()) == 3


class TestClosedForms:
    @pytest.mark.parametrize("name", sorted(DELAYS))
    @pytest.mark.parametrize("x", POINTS)
    def test_matches_numeric_integration(self, name: str, x: float) -> None:
        delay = DELAYS[name]()
        analytical = primarycensored_cdf(delay, _uniform(), x, AnalyticalSolver())
        numeric = primarycensored_cdf(delay, _uniform(), x, NumericSolver())

        assert analytical == pytest.approx(numeric, rel=1e-6, abs=1e-12)

    @pytest.mark.parametrize("name", sorted(DELAYS))
    @pytest.mark.parametrize("x", [0.5, 1.5, 3.0, 4.0, 12.0])
    def test_wide_shifted_window(self, name: str, x: float) -> None:
        delay = DELAYS[name]()
        window = _uniform(1.0, 3.0)
        analytical = primarycensored_cdf(delay, window, x, AnalyticalSolver())
        numeric = numeric_primarycensored_cdf(delay, window, x, NumericSolver())

        assert analytical == pytest.approx(numeric, rel=1e-6, abs=1e-12)

    def test_zero_before_window(self) -> None:
        delay = DELAYS["gamma"]()
        assert gamma_uniform_cdf(delay, _uniform(1.0, 3.0), 0.5) == 0.0

    @pytest.mark.parametrize(
        "solution, name",
        [
            (gamma_uniform_cdf, "gamma"),
            (lognormal_uniform_cdf, "lognormal"),
            (weibull_uniform_cdf, "weibull"),
        ],
    )
    def test_monotone_and_bounded(self, solution, name: str) -> None:
        delay = DELAYS[name]()
        values = [solution(delay, _uniform(), x) for x in [0.1, 0.5, 1.0, 2.0, 5.0, 200.0]]

        assert all(0.0 <= v <= 1.0 for v in values)
        assert values == sorted(values)
        assert values[-1] == pytest.approx(1.0)


class TestNumericFallback:
    def test_exponential_uses_integration(self) -> None:
        delay = family_distribution(FamilyName.EXPONENTIAL, lambda_=1.0)

        for x in [0.25, 0.5, 0.9]:
            expected = x - 1.0 + math.exp(-x)
            assert primarycensored_cdf(delay, _uniform(), x, AnalyticalSolver()) == pytest.approx(
                expected, rel=1e-8
            )
        for x in [1.0, 2.0, 6.0]:
            expected = 1.0 - (math.e - 1.0) * math.exp(-x)
            assert primarycensored_cdf(delay, _uniform(), x, AnalyticalSolver()) == pytest.approx(
                expected, rel=1e-8
            )

    def test_boundaries(self) -> None:
        delay = DELAYS["gamma"]()

        assert primarycensored_cdf(delay, _uniform(), 0.0, AnalyticalSolver()) == 0.0
        assert primarycensored_cdf(delay, _uniform(), -3.0, NumericSolver()) == 0.0
        assert primarycensored_cdf(delay, _uniform(), math.inf, NumericSolver()) == 1.0
