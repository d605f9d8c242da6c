"""
Computation and Sampling Strategies
===================================

This module defines the pluggable strategy interfaces and default implementations:

- :class:`ComputationStrategy` resolves characteristic methods.
- :class:`DefaultComputationStrategy` resolves analyticals and walks the
  characteristic graph on demand.
- :class:`SamplingStrategy` draws samples from a distribution.
- :class:`DefaultSamplingUnivariateStrategy` draws ``(n, 1)`` samples using
  ``ppf`` and i.i.d. uniform variates.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any, Protocol

import numpy as np

from censored_distributions.distributions.computation import (
    AnalyticalComputation,
    FittedComputationMethod,
)
from censored_distributions.types import (
    CharacteristicName,
    GenericCharacteristicName,
)

from .registry import characteristic_registry
from .sampling import ArraySample, Sample

if TYPE_CHECKING:
    from .distribution import Distribution

type Method[In, Out] = AnalyticalComputation[In, Out] | FittedComputationMethod[In, Out]


def resolve_rng(options: dict[str, Any]) -> np.random.Generator:
    """Return the ``rng`` sampling option or a fresh default generator."""
    rng = options.get("rng")
    if rng is None:
        return np.random.default_rng()
    return rng


class ComputationStrategy[In, Out](Protocol):
    """Protocol for characteristic resolution strategies."""

    def query_method(
        self, state: GenericCharacteristicName, distr: "Distribution", **options: Any
    ) -> Method[In, Out]: ...


class DefaultComputationStrategy[In, Out]:
    """
    Resolve a characteristic analytically, or by walking the characteristic graph.

    A characteristic the distribution implements itself is returned as is.
    Otherwise the graph registered for the distribution's type is searched
    for a path from one of its analytical characteristics, tried in the
    order the distribution lists them, and the last edge of the path is
    fitted. Fitters resolve their sources through the same strategy, so the
    rest of the path is resolved recursively.

    The strategy keeps no per-distribution state between calls and one
    instance is shared by all censoring wrappers.

    Raises
    ------
    RuntimeError
        If the distribution has no analytical characteristic, if no path
        reaches the target, or if resolving the target requires itself.
    """

    def __init__(self) -> None:
        self._resolving: dict[int, set[GenericCharacteristicName]] = {}

    def _push_guard(self, distr: "Distribution", state: GenericCharacteristicName) -> None:
        seen = self._resolving.setdefault(id(distr), set())
        if state in seen:
            raise RuntimeError(
                f"Cycle detected while resolving '{state}'. "
                "Provide at least one analytical base characteristic in the distribution."
            )
        seen.add(state)

    def _pop_guard(self, distr: "Distribution", state: GenericCharacteristicName) -> None:
        key = id(distr)
        seen = self._resolving.get(key)
        if seen is not None:
            seen.discard(state)
            if not seen:
                self._resolving.pop(key, None)

    def query_method(
        self, state: GenericCharacteristicName, distr: "Distribution", **options: Any
    ) -> Method[In, Out]:
        """
        Return a callable computing ``state`` for ``distr``.

        Parameters
        ----------
        state : str
            Characteristic to compute.
        distr : Distribution
            Supplies the analytical characteristics and the distribution type.
        **options
            Forwarded to the fitters of the graph edges.
        """
        analytical = distr.analytical_computations
        if state in analytical:
            return analytical[state]
        if not analytical:
            raise RuntimeError(
                "Distribution provides no analytical computations to ground conversions."
            )

        reg = characteristic_registry().get(distr.distribution_type)

        self._push_guard(distr, state)
        try:
            for src in analytical:
                path = reg.find_path(src, state)
                if not path:
                    continue
                # Fitters resolve their own sources, so binding the last edge suffices.
                return path[-1].fit(distr, **options)

            raise RuntimeError(
                f"No conversion path from any analytical characteristic to '{state}'."
            )
        finally:
            self._pop_guard(distr, state)


class SamplingStrategy(Protocol):
    """Protocol for sampling strategies (return a :class:`Sample`)."""

    def sample(self, n: int, distr: "Distribution", **options: Any) -> Sample: ...


class DefaultSamplingUnivariateStrategy(SamplingStrategy):
    """
    Default univariate sampler using inverse transform sampling.

    The strategy resolves the distribution's ``ppf`` and applies it to i.i.d.
    uniforms ``U ~ U(0, 1)`` drawn from the ``rng`` option (a fresh
    :func:`numpy.random.default_rng` when omitted).

    Returns
    -------
    ArraySample
        A 2D sample of shape ``(n, 1)``.
    """

    def sample(self, n: int, distr: "Distribution", **options: Any) -> ArraySample:
        rng = resolve_rng(options)
        ppf = distr.query_method(CharacteristicName.PPF)
        U = rng.random(n)
        return ArraySample.from_values(ppf(U))
