from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest

from censored_distributions.logexp import log1mexp, log_add_exp, log_sub_exp, safe_log


class TestLog1mexp:
    @pytest.mark.parametrize("x", [-1e-10, -0.1, -math.log(2.0), -1.0, -30.0])
    def test_matches_direct_formula(self, x: float) -> None:
        assert log1mexp(x) == pytest.approx(math.log(1.0 - math.exp(x)), rel=1e-6)

    def test_is_accurate_near_zero(self) -> None:
        assert log1mexp(-1e-20) == pytest.approx(math.log(1e-20), rel=1e-12)

    def test_limits(self) -> None:
        assert log1mexp(0.0) == -math.inf
        assert log1mexp(-math.inf) == 0.0

    def test_vectorised(self) -> None:
        values = log1mexp(np.array([-1.0, -2.0]))

        assert isinstance(values, np.ndarray)
        np.testing.assert_allclose(values, np.log1p(-np.exp([-1.0, -2.0])))

    def test_scalar_returns_float(self) -> None:
        assert isinstance(log1mexp(-1.0), float)

    def test_positive_argument_raises(self) -> None:
        with pytest.raises(ValueError):
            log1mexp(0.5)


class TestLogAddSubExp:
    def test_log_add_exp(self) -> None:
        assert log_add_exp(math.log(2.0), math.log(3.0)) == pytest.approx(math.log(5.0))
        assert log_add_exp(-math.inf, 1.0) == pytest.approx(1.0)

    def test_log_sub_exp_is_symmetric(self) -> None:
        expected = math.log(3.0)
        assert log_sub_exp(math.log(5.0), math.log(2.0)) == pytest.approx(expected)
        assert log_sub_exp(math.log(2.0), math.log(5.0)) == pytest.approx(expected)

    def test_log_sub_exp_edge_cases(self) -> None:
        assert log_sub_exp(1.0, 1.0) == -math.inf
        assert log_sub_exp(-math.inf, -math.inf) == -math.inf
        assert log_sub_exp(2.0, -math.inf) == 2.0

    def test_log_sub_exp_small_difference(self) -> None:
        a = math.log(1.0 + 1e-12)
        assert log_sub_exp(a, 0.0) == pytest.approx(math.log(1e-12), rel=1e-3)


def test_safe_log() -> None:
    assert safe_log(0.0) == -math.inf
    assert safe_log(-1.0) == -math.inf
    assert safe_log(math.e) == pytest.approx(1.0)
