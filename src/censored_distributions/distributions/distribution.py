"""
Distribution Interface
======================

This module defines the public :class:`Distribution` protocol: the fixed
capability set every base distribution and every censoring wrapper exposes.

Notes
-----
- Characteristics are resolved by name through the distribution's
  computation strategy: analytical implementations first, registered
  conversions otherwise.
- Convenience methods (``cdf``, ``logpdf``, ``ppf``, ...) are thin shortcuts
  over :meth:`Distribution.calculate_characteristic`, so wrappers compose
  recursively without knowing what they wrap.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from censored_distributions.types import CharacteristicName

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    from censored_distributions.distributions.computation import AnalyticalComputation
    from censored_distributions.distributions.sampling import Sample
    from censored_distributions.distributions.strategies import (
        ComputationStrategy,
        Method,
        SamplingStrategy,
    )
    from censored_distributions.distributions.support import ContinuousSupport
    from censored_distributions.types import (
        DistributionType,
        GenericCharacteristicName,
    )


@runtime_checkable
class Distribution(Protocol):
    """Public distribution interface used by strategies, fitters and censoring wrappers."""

    @property
    def distribution_type(self) -> DistributionType: ...

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]: ...

    @property
    def sampling_strategy(self) -> SamplingStrategy: ...
    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]: ...

    @property
    def support(self) -> ContinuousSupport: ...

    def query_method(
        self, characteristic_name: GenericCharacteristicName, **options: Any
    ) -> Method[Any, Any]:
        return self.computation_strategy.query_method(characteristic_name, self, **options)

    def calculate_characteristic(
        self, characteristic_name: GenericCharacteristicName, value: Any, **options: Any
    ) -> Any:
        return self.query_method(characteristic_name, **options)(value)

    def sample(self, n: int, **options: Any) -> Sample:
        return self.sampling_strategy.sample(n, distr=self, **options)

    @property
    def minimum(self) -> float:
        """Left endpoint of the support."""
        return float(self.support.left)

    @property
    def maximum(self) -> float:
        """Right endpoint of the support."""
        return float(self.support.right)

    def insupport(self, x: float) -> bool:
        return bool(self.support.contains(x))

    def cdf(self, x: Any) -> Any:
        return self.calculate_characteristic(CharacteristicName.CDF, x)

    def logcdf(self, x: Any) -> Any:
        return self.calculate_characteristic(CharacteristicName.LOGCDF, x)

    def ccdf(self, x: Any) -> Any:
        return self.calculate_characteristic(CharacteristicName.SF, x)

    def logccdf(self, x: Any) -> Any:
        return self.calculate_characteristic(CharacteristicName.LOGSF, x)

    def pdf(self, x: Any) -> Any:
        return self.calculate_characteristic(CharacteristicName.PDF, x)

    def logpdf(self, x: Any) -> Any:
        return self.calculate_characteristic(CharacteristicName.LOGPDF, x)

    def pmf(self, x: Any) -> Any:
        return self.calculate_characteristic(CharacteristicName.PMF, x)

    def logpmf(self, x: Any) -> Any:
        return self.calculate_characteristic(CharacteristicName.LOGPMF, x)

    def ppf(self, p: Any) -> Any:
        return self.calculate_characteristic(CharacteristicName.PPF, p)

    quantile = ppf

    def mean(self) -> float:
        return float(self.calculate_characteristic(CharacteristicName.MEAN, None))
