"""
Common plumbing of the censoring wrappers.

Every wrapper implements the :class:`~censored_distributions.distributions.Distribution`
protocol on top of scalar characteristic functions; array arguments are
evaluated element by element unless the wrapper supplies a batched
implementation. Missing characteristics are resolved through the shared
:class:`~censored_distributions.distributions.DefaultComputationStrategy`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import numpy as np

from censored_distributions.distributions.computation import AnalyticalComputation
from censored_distributions.distributions.distribution import Distribution
from censored_distributions.distributions.strategies import DefaultComputationStrategy
from censored_distributions.types import UnivariateContinuous

if TYPE_CHECKING:
    from collections.abc import Mapping

    from censored_distributions.distributions.strategies import ComputationStrategy
    from censored_distributions.types import (
        DistributionType,
        GenericCharacteristicName,
        ScalarFunc,
    )

_COMPUTATION_STRATEGY: DefaultComputationStrategy[Any, Any] = DefaultComputationStrategy()


def elementwise(func: ScalarFunc) -> Callable[..., Any]:
    """Lift a scalar characteristic to scalars and arrays of any shape."""

    def _apply(x: Any, **options: Any) -> Any:
        arr = np.asarray(x, dtype=np.float64)
        if arr.ndim == 0:
            return func(float(arr))
        out = np.fromiter((func(float(v)) for v in arr.ravel()), dtype=np.float64, count=arr.size)
        return out.reshape(arr.shape)

    return _apply


class CensoredDistribution(Distribution):
    """
    Base class of the censoring wrappers.

    Subclasses provide :meth:`_scalar_characteristics` (and optionally
    :meth:`_batched_characteristics` for characteristics with a faster
    vectorised path), a ``support`` and a ``sampling_strategy``.
    """

    __slots__ = ()

    def _scalar_characteristics(self) -> dict[GenericCharacteristicName, ScalarFunc]:
        raise NotImplementedError

    def _batched_characteristics(
        self,
    ) -> dict[GenericCharacteristicName, Callable[..., Any]]:
        return {}

    @property
    def distribution_type(self) -> DistributionType:
        return UnivariateContinuous

    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]:
        return _COMPUTATION_STRATEGY

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        funcs: dict[GenericCharacteristicName, Callable[..., Any]] = {
            name: elementwise(f) for name, f in self._scalar_characteristics().items()
        }
        funcs.update(self._batched_characteristics())
        return {name: AnalyticalComputation(target=name, func=f) for name, f in funcs.items()}
