"""
Tests for Exponential Distribution Family

This module tests the functionality of the exponential distribution family,
including parameterizations, characteristics, and sampling.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import numpy as np
import pytest
from scipy.stats import expon

from censored_distributions.families.configuration import configure_families_register
from censored_distributions.types import CharacteristicName, FamilyName, UnivariateContinuous

from .base import BaseDistributionTest


class TestExponentialFamily(BaseDistributionTest):
    """Test suite for Exponential distribution family."""

    def setup_method(self):
        """Setup before each test method."""
        registry = configure_families_register()
        self.exponential_family = registry.get(FamilyName.EXPONENTIAL)
        self.exponential_dist_example = self.exponential_family(lambda_=0.5)

    def test_family_properties(self):
        """Test basic properties of exponential family."""
        assert self.exponential_family.name == FamilyName.EXPONENTIAL

        expected_parametrizations = {"rate", "scale"}
        assert set(self.exponential_family.parametrization_names) == expected_parametrizations
        assert self.exponential_family.base_parametrization_name == "rate"

    def test_rate_parametrization_creation(self):
        dist = self.exponential_family(lambda_=0.5)

        assert dist.family_name == FamilyName.EXPONENTIAL
        assert dist.distribution_type == UnivariateContinuous
        assert dist.parameters.parameters == {"lambda_": 0.5}
        assert dist.parametrization_name == "rate"
        assert dist.params == (0.5,)

    def test_scale_parametrization_creation(self):
        dist = self.exponential_family(parametrization_name="scale", beta=2.0)

        assert dist.parameters.parameters == {"beta": 2.0}
        assert dist.parametrization_name == "scale"
        assert dist.base_parameters.parameters == {"lambda_": 0.5}

    def test_parametrization_constraints(self):
        with pytest.raises(ValueError, match="lambda_ > 0"):
            self.exponential_family(lambda_=-1.0)

        with pytest.raises(ValueError, match="beta > 0"):
            self.exponential_family(parametrization_name="scale", beta=0.0)

    def test_mean(self):
        mean_func = self.exponential_dist_example.query_method(CharacteristicName.MEAN)
        assert abs(mean_func(None) - 2.0) < self.CALCULATION_PRECISION
        assert self.exponential_dist_example.mean() == pytest.approx(2.0)

    def test_characteristics_match_scipy(self):
        x = np.array([-1.0, 0.0, 0.1, 1.0, 2.5, 10.0])
        self.assert_matches_reference(self.exponential_dist_example, expon(scale=2.0), x)

    def test_support(self):
        dist = self.exponential_dist_example

        assert dist.minimum == 0.0
        assert dist.maximum == np.inf
        assert dist.insupport(0.0)
        assert not dist.insupport(-0.1)

    def test_ppf_edges(self):
        assert self.exponential_dist_example.ppf(0.0) == 0.0
        assert self.exponential_dist_example.ppf(1.0) == np.inf
        with pytest.raises(ValueError, match="Probability must be in"):
            self.exponential_dist_example.ppf(1.5)

    def test_scale_parametrization_uses_base_characteristics(self):
        dist = self.exponential_family(parametrization_name="scale", beta=2.0)
        x = np.array([0.5, 1.0, 3.0])

        self.assert_arrays_almost_equal(dist.cdf(x), self.exponential_dist_example.cdf(x))
