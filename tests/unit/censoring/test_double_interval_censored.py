from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np
import pytest

from censored_distributions.censoring.double_interval_censored import double_interval_censored
from censored_distributions.censoring.interval_censored import IntervalCensored, interval_censored
from censored_distributions.censoring.primary_censored import PrimaryCensored, primary_censored
from censored_distributions.censoring.solvers import FixedQuadIntegrator, NumericSolver
from censored_distributions.censoring.truncated import Truncated, truncated
from censored_distributions.families.configuration import family_distribution
from censored_distributions.types import FamilyName


def _delay():
    return family_distribution(FamilyName.LOGNORMAL, mu=1.0, sigma=0.6)


def _window():
    return family_distribution(FamilyName.CONTINUOUS_UNIFORM, lower_bound=0.0, upper_bound=2.0)


class TestComposition:
    def test_full_stack_order(self) -> None:
        d = double_interval_censored(_delay(), _window(), upper=15.0, interval=1.0)

        assert isinstance(d, IntervalCensored)
        assert isinstance(d.dist, Truncated)
        assert isinstance(d.dist.dist, PrimaryCensored)

    def test_matches_manual_composition(self) -> None:
        composed = double_interval_censored(
            _delay(), _window(), lower=0.5, upper=15.0, interval=1.0
        )
        manual = interval_censored(truncated(primary_censored(_delay(), _window()), 0.5, 15.0), 1.0)

        assert composed == manual
        ks = np.arange(16)
        np.testing.assert_allclose(composed.pmf(ks), manual.pmf(ks))

    def test_primary_only(self) -> None:
        d = double_interval_censored(_delay())

        assert d == primary_censored(_delay())

    def test_without_truncation(self) -> None:
        d = double_interval_censored(_delay(), interval=[0.0, 2.0, 5.0, 10.0])

        assert isinstance(d, IntervalCensored)
        assert isinstance(d.dist, PrimaryCensored)
        assert d.boundaries == (0.0, 2.0, 5.0, 10.0)

    def test_without_interval(self) -> None:
        d = double_interval_censored(_delay(), lower=1.0)

        assert isinstance(d, Truncated)
        assert d.upper is None

    def test_solver_options_reach_primary_stage(self) -> None:
        integrator = FixedQuadIntegrator(n=32)
        d = double_interval_censored(
            _delay(), upper=10.0, integrator=integrator, force_numeric=True
        )

        assert d.dist.method == NumericSolver(integrator)


class TestDoublyCensoredMass:
    def test_truncated_pmf_sums_to_one(self) -> None:
        d = double_interval_censored(_delay(), _window(), upper=10.0, interval=1.0)
        pmf = d.pmf(np.arange(11))

        assert float(np.sum(pmf)) == pytest.approx(1.0, abs=1e-10)
        assert pmf[10] == 0.0
        assert np.all(pmf >= 0.0)

    def test_mass_is_renormalised(self) -> None:
        untruncated = double_interval_censored(_delay(), _window(), interval=1.0)
        truncated_d = double_interval_censored(_delay(), _window(), upper=10.0, interval=1.0)
        scale = float(primary_censored(_delay(), _window()).cdf(10.0))

        np.testing.assert_allclose(
            truncated_d.pmf(np.arange(10)), untruncated.pmf(np.arange(10)) / scale, rtol=1e-10
        )
