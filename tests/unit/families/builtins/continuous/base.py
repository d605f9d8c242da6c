"""
Common fixtures and utilities for continuous distribution tests.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math
from typing import Any

import numpy as np

from censored_distributions.families.distribution import ParametricFamilyDistribution


class BaseDistributionTest:
    """Base class for all distribution families' tests"""

    # Precision for floating point comparisons
    CALCULATION_PRECISION = 1e-10

    # Points shared by the reference comparisons
    PROBABILITIES = np.array([0.0, 0.01, 0.25, 0.5, 0.75, 0.99])

    @staticmethod
    def assert_arrays_almost_equal(
        actual: np.ndarray[Any, Any], expected: np.ndarray[Any, Any], precision: float | None = None
    ) -> None:
        """Helper method to assert arrays are almost equal."""
        if precision is None:
            precision = BaseDistributionTest.CALCULATION_PRECISION

        np.testing.assert_array_almost_equal(actual, expected, decimal=int(-math.log10(precision)))

    def assert_matches_reference(
        self, dist: ParametricFamilyDistribution, reference: Any, x: np.ndarray[Any, Any]
    ) -> None:
        """Compare every analytical characteristic with a frozen ``scipy.stats`` distribution."""
        self.assert_arrays_almost_equal(dist.pdf(x), reference.pdf(x))
        self.assert_arrays_almost_equal(dist.cdf(x), reference.cdf(x))
        self.assert_arrays_almost_equal(dist.ccdf(x), reference.sf(x))
        self.assert_arrays_almost_equal(
            dist.ppf(self.PROBABILITIES), reference.ppf(self.PROBABILITIES)
        )

        inside = reference.pdf(x) > 0
        self.assert_arrays_almost_equal(dist.logpdf(x[inside]), reference.logpdf(x[inside]))
        assert np.all(np.isneginf(dist.logpdf(x[~inside])))
        positive = reference.cdf(x) > 0
        self.assert_arrays_almost_equal(dist.logcdf(x[positive]), reference.logcdf(x[positive]))
