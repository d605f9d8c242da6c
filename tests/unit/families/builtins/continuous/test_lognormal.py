"""
Tests for LogNormal Distribution Family
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math

import numpy as np
import pytest
from scipy.special import log_ndtr
from scipy.stats import lognorm

from censored_distributions.families.configuration import configure_families_register
from censored_distributions.types import FamilyName

from .base import BaseDistributionTest


class TestLogNormalFamily(BaseDistributionTest):
    """Test suite for LogNormal distribution family."""

    def setup_method(self):
        registry = configure_families_register()
        self.lognormal_family = registry.get(FamilyName.LOGNORMAL)

    @pytest.mark.parametrize("mu, sigma", [(0.0, 1.0), (1.5, 0.5), (-1.0, 2.0)])
    def test_characteristics_match_scipy(self, mu, sigma):
        dist = self.lognormal_family(mu=mu, sigma=sigma)
        x = np.array([-1.0, 0.01, 0.5, 1.0, 4.0, 30.0])

        self.assert_matches_reference(dist, lognorm(s=sigma, scale=math.exp(mu)), x)
        assert dist.cdf(0.0) == 0.0
        assert dist.logcdf(0.0) == -np.inf
        assert dist.mean() == pytest.approx(math.exp(mu + sigma**2 / 2))

    def test_parametrization_constraints(self):
        with pytest.raises(ValueError, match="sigma > 0"):
            self.lognormal_family(mu=0.0, sigma=-1.0)

    def test_support_starts_at_zero(self):
        assert self.lognormal_family(mu=0.0, sigma=1.0).minimum == 0.0

    def test_logcdf_left_tail(self):
        dist = self.lognormal_family(mu=0.0, sigma=1.0)

        assert dist.cdf(math.exp(-40.0)) == 0.0
        assert dist.logcdf(math.exp(-40.0)) == pytest.approx(log_ndtr(-40.0), rel=1e-12)
