"""
Tests for Uniform Distribution Family

This module tests the functionality of the uniform distribution family,
including parameterizations, characteristics, and sampling.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import numpy as np
import pytest
from scipy.stats import uniform

from censored_distributions.families.configuration import configure_families_register
from censored_distributions.types import CharacteristicName, FamilyName

from .base import BaseDistributionTest


class TestUniformFamily(BaseDistributionTest):
    """Test suite for Uniform distribution family."""

    def setup_method(self):
        registry = configure_families_register()
        self.uniform_family = registry.get(FamilyName.CONTINUOUS_UNIFORM)
        self.uniform_dist_example = self.uniform_family(lower_bound=2.0, upper_bound=5.0)

    def test_family_properties(self):
        assert self.uniform_family.name == FamilyName.CONTINUOUS_UNIFORM
        assert set(self.uniform_family.parametrization_names) == {"standard", "meanWidth"}
        assert self.uniform_family.base_parametrization_name == "standard"

    def test_mean_width_parametrization(self):
        dist = self.uniform_family(parametrization_name="meanWidth", mean=1.0, width=2.0)

        assert dist.base_parameters.parameters == {"lower_bound": 0.0, "upper_bound": 2.0}
        assert dist.minimum == 0.0
        assert dist.maximum == 2.0

    def test_parametrization_constraints(self):
        with pytest.raises(ValueError, match="lower_bound < upper_bound"):
            self.uniform_family(lower_bound=1.0, upper_bound=1.0)

        with pytest.raises(ValueError, match="width > 0"):
            self.uniform_family(parametrization_name="meanWidth", mean=0.0, width=-1.0)

    def test_characteristics_match_scipy(self):
        x = np.array([0.0, 2.0, 2.5, 3.5, 4.9, 6.0])
        self.assert_matches_reference(self.uniform_dist_example, uniform(loc=2.0, scale=3.0), x)

    def test_mean(self):
        mean = self.uniform_dist_example.query_method(CharacteristicName.MEAN)(None)
        assert mean == pytest.approx(3.5)

    def test_support_is_closed(self):
        assert self.uniform_dist_example.insupport(2.0)
        assert self.uniform_dist_example.insupport(5.0)
        assert not self.uniform_dist_example.insupport(5.0 + 1e-12)

    def test_sampling_stays_in_bounds(self):
        sample = self.uniform_dist_example.sample(1000, rng=np.random.default_rng(3))

        assert sample.shape == (1000, 1)
        assert np.all((sample.values >= 2.0) & (sample.values <= 5.0))
