"""
Computation Primitives
======================

Callables the computation strategy hands out:

- :class:`AnalyticalComputation` wraps a function supplied by the distribution
  itself, either a family's closed form or a censoring wrapper's algorithm;
- :class:`FittedComputationMethod` is a graph conversion already bound to a
  distribution (for instance ``logcdf`` derived from ``cdf``);
- :class:`ComputationMethod` is an unbound conversion whose ``fit`` produces a
  :class:`FittedComputationMethod`.

Parametric families evaluate whole numpy arrays at once. Censoring wrappers
write scalar functions and lift them with
:func:`censored_distributions.censoring.base.elementwise`.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from mypy_extensions import KwArg

from censored_distributions.types import (
    GenericCharacteristicName,
)

if TYPE_CHECKING:
    from censored_distributions.distributions.distribution import Distribution


@dataclass(frozen=True, slots=True)
class AnalyticalComputation[In, Out]:
    """A characteristic the distribution evaluates itself.

    Parameters
    ----------
    target : str
        Characteristic produced, e.g. ``"logcdf"``.
    func : Callable[[In, KwArg(Any)], Out]
        Function evaluating it at a point or an array of points.
    """

    target: GenericCharacteristicName
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        """Evaluate ``func`` at ``data``."""
        return self.func(data, **options)


@dataclass(frozen=True, slots=True)
class FittedComputationMethod[In, Out]:
    """A graph conversion bound to one distribution.

    Parameters
    ----------
    target : str
        Destination characteristic name.
    sources : Sequence[str]
        Characteristics the conversion reads; one entry per graph edge.
    func : Callable[[In, KwArg(Any)], Out]
        The bound conversion.
    """

    target: GenericCharacteristicName
    sources: Sequence[GenericCharacteristicName]
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        """Evaluate the conversion at ``data``."""
        return self.func(data, **options)


@dataclass(frozen=True, slots=True)
class ComputationMethod[In, Out]:
    """A graph edge that still has to be bound to a distribution.

    Parameters
    ----------
    target : str
        Destination characteristic name.
    sources : Sequence[str]
        Characteristics the edge starts from.
    fitter : Callable[[Distribution, KwArg(Any)], FittedComputationMethod]
        Binds the edge to a distribution.
    """

    target: GenericCharacteristicName
    sources: Sequence[GenericCharacteristicName]
    fitter: Callable[["Distribution", KwArg(Any)], FittedComputationMethod[In, Out]]

    def fit(self, distribution: "Distribution", **options: Any) -> FittedComputationMethod[In, Out]:
        """Bind the edge to ``distribution``."""
        return self.fitter(distribution, **options)
