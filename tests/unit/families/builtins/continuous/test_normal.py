"""
Tests for Normal Distribution Family
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math

import numpy as np
import pytest
from scipy.stats import norm

from censored_distributions.families.configuration import configure_families_register
from censored_distributions.types import FamilyName

from .base import BaseDistributionTest


class TestNormalFamily(BaseDistributionTest):
    """Test suite for Normal distribution family."""

    def setup_method(self):
        registry = configure_families_register()
        self.normal_family = registry.get(FamilyName.NORMAL)
        self.normal_dist_example = self.normal_family(mu=1.0, sigma=2.0)

    def test_family_properties(self):
        assert self.normal_family.name == FamilyName.NORMAL
        assert set(self.normal_family.parametrization_names) == {"meanStd", "meanPrec"}

    def test_mean_prec_parametrization(self):
        dist = self.normal_family(parametrization_name="meanPrec", mu=1.0, tau=0.25)

        assert dist.base_parameters.parameters["sigma"] == pytest.approx(2.0)
        assert dist.cdf(1.0) == pytest.approx(0.5)

    def test_parametrization_constraints(self):
        with pytest.raises(ValueError, match="sigma > 0"):
            self.normal_family(mu=0.0, sigma=0.0)

    def test_characteristics_match_scipy(self):
        x = np.array([-5.0, -1.0, 0.0, 1.0, 2.5, 7.0])
        self.assert_matches_reference(self.normal_dist_example, norm(loc=1.0, scale=2.0), x)

    def test_far_tail_logcdf_is_finite(self):
        assert self.normal_dist_example.logcdf(-60.0) == pytest.approx(
            norm(loc=1.0, scale=2.0).logcdf(-60.0), rel=1e-10
        )

    def test_support_is_real_line(self):
        assert self.normal_dist_example.minimum == -math.inf
        assert self.normal_dist_example.maximum == math.inf
