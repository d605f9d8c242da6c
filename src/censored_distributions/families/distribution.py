"""
Concrete distribution instances with specific parameter values.

These are the base distributions wrapped by the censoring layer: the delay
and the primary-event window of a primary-censored distribution.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from censored_distributions.distributions.distribution import Distribution
from censored_distributions.families.registry import ParametricFamilyRegister

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    from censored_distributions.distributions.computation import AnalyticalComputation
    from censored_distributions.distributions.strategies import (
        ComputationStrategy,
        SamplingStrategy,
    )
    from censored_distributions.distributions.support import ContinuousSupport
    from censored_distributions.families.parametric_family import ParametricFamily
    from censored_distributions.families.parametrizations import Parametrization
    from censored_distributions.types import (
        DistributionType,
        GenericCharacteristicName,
    )


@dataclass(slots=True)
class ParametricFamilyDistribution(Distribution):
    """
    A specific distribution instance from a parametric family.

    Parameters
    ----------
    family_name : str
        Name of the distribution family.
    _distribution_type : DistributionType
        Type of this distribution.
    parameters : Parametrization
        Parameter values for this distribution.
    _support : ContinuousSupport
        Support of this distribution.

    Notes
    -----
    Two instances compare equal when they come from the same family with equal
    parameters in the same parametrization.
    """

    family_name: str
    _distribution_type: DistributionType
    parameters: Parametrization
    _support: ContinuousSupport
    _analytical_cache: dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]] | None = (
        field(default=None, init=False, repr=False, compare=False)
    )

    @property
    def distribution_type(self) -> DistributionType:
        return self._distribution_type

    @property
    def family(self) -> ParametricFamily:
        """The parametric family this distribution belongs to."""
        return ParametricFamilyRegister.get(self.family_name)

    @property
    def parametrization_name(self) -> str:
        return self.parameters.name

    @property
    def base_parameters(self) -> Parametrization:
        """Parameters converted to the family's base parametrization."""
        return self.family.to_base(self.parameters)

    @property
    def params(self) -> tuple[float, ...]:
        """Parameter values of the base parametrization, in declaration order."""
        return tuple(self.base_parameters.parameters.values())

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        """
        Analytical computations for this distribution.

        Built lazily on first access and reused afterwards; parameters are
        immutable so the cache never goes stale.
        """
        if self._analytical_cache is None:
            self._analytical_cache = self.family._build_analytical_computations(self.parameters)
        return self._analytical_cache

    @property
    def sampling_strategy(self) -> SamplingStrategy:
        return self.family.sampling_strategy

    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]:
        return self.family.computation_strategy

    @property
    def support(self) -> ContinuousSupport:
        return self._support
