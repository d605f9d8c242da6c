from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import dataclasses
import math

import pytest

from censored_distributions.censoring.solvers import (
    AnalyticalSolver,
    FixedQuadIntegrator,
    Integrator,
    NumericSolver,
    QuadIntegrator,
)


class TestIntegrators:
    @pytest.mark.parametrize("integrator", [QuadIntegrator(), FixedQuadIntegrator()])
    def test_polynomial(self, integrator: Integrator) -> None:
        assert integrator.integrate(lambda u: u * u, 0.0, 1.0) == pytest.approx(1.0 / 3.0)

    def test_quad_handles_smooth_integrand(self) -> None:
        value = QuadIntegrator().integrate(math.exp, 0.0, 2.0)
        assert value == pytest.approx(math.e**2 - 1.0, rel=1e-12)

    def test_fixed_quad_order_matters_for_rough_integrand(self) -> None:
        coarse = FixedQuadIntegrator(n=2).integrate(math.sqrt, 0.0, 1.0)
        fine = FixedQuadIntegrator(n=64).integrate(math.sqrt, 0.0, 1.0)

        assert abs(fine - 2.0 / 3.0) < abs(coarse - 2.0 / 3.0)
        assert fine == pytest.approx(2.0 / 3.0, rel=1e-4)

    def test_integrators_satisfy_protocol(self) -> None:
        assert isinstance(QuadIntegrator(), Integrator)
        assert isinstance(FixedQuadIntegrator(), Integrator)
        assert not isinstance(object(), Integrator)

    def test_integrators_are_immutable_values(self) -> None:
        assert QuadIntegrator() == QuadIntegrator()
        assert QuadIntegrator(epsrel=1e-6) != QuadIntegrator()
        with pytest.raises(dataclasses.FrozenInstanceError):
            QuadIntegrator().limit = 10  # type: ignore[misc]


class TestSolverMethods:
    def test_default_integrator(self) -> None:
        assert AnalyticalSolver().integrator == QuadIntegrator()
        assert NumericSolver().integrator == QuadIntegrator()

    def test_carry_custom_integrator(self) -> None:
        integrator = FixedQuadIntegrator(n=16)

        assert AnalyticalSolver(integrator).integrator is integrator
        assert NumericSolver(integrator).integrator is integrator

    def test_solvers_are_distinct(self) -> None:
        assert AnalyticalSolver() != NumericSolver()
        with pytest.raises(dataclasses.FrozenInstanceError):
            NumericSolver().integrator = FixedQuadIntegrator()  # type: ignore[misc]
