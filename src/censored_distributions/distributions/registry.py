"""
Characteristic Graph Registry
=============================

A directed graph over characteristic names for a fixed
:class:`~censored_distributions.types.DistributionType`.

- Nodes: ``GenericCharacteristicName``.
- Edges: unary :class:`~censored_distributions.distributions.computation.ComputationMethod`
  (``1 source -> 1 target``).

Invariants
----------
1. There is at least one *definitive* node.
2. The subgraph induced by the *definitive* nodes is **strongly connected**.
3. Every *indefinitive* node is reachable from at least one *definitive* node.
4. No path from any *indefinitive* node back to any *definitive* node is allowed.

The default configuration covers the two univariate kinds used by the
censoring wrappers:

- continuous: ``pdf``, ``logpdf``, ``cdf``, ``logcdf``, ``ppf`` are definitive;
  ``sf`` and ``logsf`` are derived;
- discrete: ``cdf`` and ``logcdf`` are definitive; ``sf`` and ``logsf`` are
  derived (``pmf`` and ``logpmf`` are always provided analytically).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections import deque
from dataclasses import dataclass, field
from functools import lru_cache
from typing import TYPE_CHECKING, Any, ClassVar, Self

from censored_distributions.distributions import fitters
from censored_distributions.distributions.computation import ComputationMethod
from censored_distributions.types import (
    CharacteristicName,
    UnivariateContinuous,
    UnivariateDiscrete,
)

if TYPE_CHECKING:
    from censored_distributions.types import DistributionType, GenericCharacteristicName

DEFAULT_COMPUTATION_KEY: str = "default_computation"


class GraphInvariantError(RuntimeError):
    """Raised when the characteristic graph invariants are violated."""


@dataclass(slots=True, frozen=True)
class GenericCharacteristicRegister:
    """
    Directed characteristic graph for a fixed :class:`DistributionType`.

    Notes
    -----
    Edges are stored as nested mappings:
    ``adjacency[src][dst] = dict[method_name, ComputationMethod]``
    with a reserved key :data:`DEFAULT_COMPUTATION_KEY` for the default method.
    """

    distribution_type: DistributionType

    _adjacency: dict[
        GenericCharacteristicName,
        dict[GenericCharacteristicName, dict[str, ComputationMethod[Any, Any]]],
    ] = field(default_factory=dict, init=False, repr=False)
    _definitive: set[GenericCharacteristicName] = field(
        default_factory=set, init=False, repr=False
    )

    def _ensure_vertex(self, v: GenericCharacteristicName) -> None:
        self._adjacency.setdefault(v, {})

    def _pick_method(
        self, methods: dict[str, ComputationMethod[Any, Any]]
    ) -> ComputationMethod[Any, Any]:
        """Pick a deterministic method for an edge (prefer default key)."""
        if DEFAULT_COMPUTATION_KEY in methods:
            return methods[DEFAULT_COMPUTATION_KEY]
        return methods[min(methods)]

    def _add_edge_unary(self, method: ComputationMethod[Any, Any], name: str) -> None:
        if len(method.sources) != 1:
            raise GraphInvariantError(
                "Only unary methods are supported for edges (1 source -> 1 target)."
            )
        source = method.sources[0]
        self._ensure_vertex(source)
        self._ensure_vertex(method.target)
        self._adjacency[source].setdefault(method.target, {})[name] = method

    def add_bidirectional_definitive(
        self,
        a_to_b: ComputationMethod[Any, Any],
        b_to_a: ComputationMethod[Any, Any],
        name_ab: str = DEFAULT_COMPUTATION_KEY,
        name_ba: str = DEFAULT_COMPUTATION_KEY,
    ) -> None:
        """
        Add a bidirectional linkage between two *definitive* nodes.

        Raises
        ------
        GraphInvariantError
            If the methods do not form a proper inverse pair or invariants break.
        """
        a = a_to_b.sources[0]
        b = a_to_b.target
        if b_to_a.sources[0] != b or b_to_a.target != a:
            raise GraphInvariantError(
                "Inverse methods must link the same pair of definitive nodes "
                "in opposite directions."
            )

        self._definitive.add(a)
        self._definitive.add(b)
        self._add_edge_unary(a_to_b, name=name_ab)
        self._add_edge_unary(b_to_a, name=name_ba)
        self._validate_invariants()

    def add_conversion(
        self, method: ComputationMethod[Any, Any], *, name: str = DEFAULT_COMPUTATION_KEY
    ) -> None:
        """
        Add a one-way unary conversion (``source -> target``).

        Any link that creates a path from an indefinitive node back to a
        definitive node is rejected by the invariant check.
        """
        self._add_edge_unary(method, name=name)
        self._validate_invariants()

    def is_definitive(self, name: GenericCharacteristicName) -> bool:
        """Return ``True`` if ``name`` is definitive."""
        return name in self._definitive

    def all_nodes(self) -> frozenset[GenericCharacteristicName]:
        """Return the set of all graph nodes."""
        verts = set(self._adjacency)
        for nbrs in self._adjacency.values():
            verts.update(nbrs)
        verts.update(self._definitive)
        return frozenset(verts)

    def indefinitive_nodes(self) -> frozenset[GenericCharacteristicName]:
        """Return the set of non-definitive nodes."""
        return self.all_nodes() - self._definitive

    def find_path(
        self,
        src: GenericCharacteristicName,
        dst: GenericCharacteristicName,
    ) -> list[ComputationMethod[Any, Any]] | None:
        """
        Find any conversion chain ``src -> ... -> dst`` using BFS.

        Returns
        -------
        list[ComputationMethod] or None
            A list of conversions if a path exists, otherwise ``None``.
        """
        if src == dst:
            return []

        visited: set[GenericCharacteristicName] = {src}
        parent: dict[
            GenericCharacteristicName, tuple[GenericCharacteristicName, ComputationMethod[Any, Any]]
        ] = {}
        q: deque[GenericCharacteristicName] = deque([src])

        while q:
            v = q.popleft()
            for w, methods in self._adjacency.get(v, {}).items():
                if w in visited or not methods:
                    continue
                visited.add(w)
                parent[w] = (v, self._pick_method(methods))
                if w == dst:
                    path: list[ComputationMethod[Any, Any]] = []
                    cur = dst
                    while cur != src:
                        pv, m = parent[cur]
                        path.append(m)
                        cur = pv
                    path.reverse()
                    return path
                q.append(w)
        return None

    def _reachable_from(
        self,
        start: GenericCharacteristicName,
        allowed: set[GenericCharacteristicName] | None = None,
        *,
        reverse: bool = False,
    ) -> set[GenericCharacteristicName]:
        adjacency: dict[GenericCharacteristicName, set[GenericCharacteristicName]] = {}
        for u, nbrs in self._adjacency.items():
            for v, methods in nbrs.items():
                if not methods:
                    continue
                if reverse:
                    adjacency.setdefault(v, set()).add(u)
                else:
                    adjacency.setdefault(u, set()).add(v)

        seen: set[GenericCharacteristicName] = {start}
        q: deque[GenericCharacteristicName] = deque([start])
        while q:
            v = q.popleft()
            for w in adjacency.get(v, ()):
                if allowed is not None and w not in allowed:
                    continue
                if w not in seen:
                    seen.add(w)
                    q.append(w)
        return seen

    def _validate_invariants(self) -> None:
        """Validate all graph invariants; raise :class:`GraphInvariantError` on failure."""
        if not self._definitive:
            raise GraphInvariantError("There must be at least one definitive characteristic.")

        start = next(iter(self._definitive))
        forward = self._reachable_from(start, allowed=self._definitive)
        backward = self._reachable_from(start, allowed=self._definitive, reverse=True)
        if forward != self._definitive or backward != self._definitive:
            raise GraphInvariantError("Definitive subgraph must be strongly connected.")

        reachable: set[GenericCharacteristicName] = set()
        for d in self._definitive:
            reachable |= self._reachable_from(d)
        indefinitive = self.indefinitive_nodes()
        if not indefinitive.issubset(reachable):
            raise GraphInvariantError(
                "Every indefinitive node must be reachable from some definitive node."
            )

        for i in indefinitive:
            if self._reachable_from(i) & self._definitive:
                raise GraphInvariantError(
                    "No path from any indefinitive node back to a definitive node is allowed."
                )


class DistributionTypeRegister:
    """Singleton-like registry that maps :class:`DistributionType` to its graph."""

    _instance: ClassVar[Self | None] = None
    _register_kinds: dict[DistributionType, GenericCharacteristicRegister]

    def __new__(cls) -> Self:
        if cls._instance is None:
            self = super().__new__(cls)
            self._register_kinds = {}
            cls._instance = self
        return cls._instance

    def get(self, distribution_type: DistributionType) -> GenericCharacteristicRegister:
        """
        Get (or create) the :class:`GenericCharacteristicRegister` for a distribution type.
        """
        reg = self._register_kinds.get(distribution_type)
        if reg is None:
            reg = GenericCharacteristicRegister(distribution_type=distribution_type)
            self._register_kinds[distribution_type] = reg
        return reg

    __call__ = get

    @classmethod
    def _reset(cls) -> None:
        cls._instance = None


def _method(
    source: CharacteristicName, target: CharacteristicName, fitter: Any
) -> ComputationMethod[Any, Any]:
    return ComputationMethod[Any, Any](target=target, sources=[source], fitter=fitter)


def _configure(reg: DistributionTypeRegister) -> None:
    C = CharacteristicName

    reg1C = reg.get(UnivariateContinuous)
    reg1C.add_bidirectional_definitive(
        _method(C.PDF, C.CDF, fitters.fit_pdf_to_cdf_1C),
        _method(C.CDF, C.PDF, fitters.fit_cdf_to_pdf_1C),
    )
    reg1C.add_bidirectional_definitive(
        _method(C.CDF, C.PPF, fitters.fit_cdf_to_ppf_1C),
        _method(C.PPF, C.CDF, fitters.fit_ppf_to_cdf_1C),
    )
    reg1C.add_bidirectional_definitive(
        _method(C.CDF, C.LOGCDF, fitters.fit_cdf_to_logcdf),
        _method(C.LOGCDF, C.CDF, fitters.fit_logcdf_to_cdf),
    )
    reg1C.add_bidirectional_definitive(
        _method(C.PDF, C.LOGPDF, fitters.fit_pdf_to_logpdf),
        _method(C.LOGPDF, C.PDF, fitters.fit_logpdf_to_pdf),
    )
    reg1C.add_conversion(_method(C.CDF, C.SF, fitters.fit_cdf_to_sf))
    reg1C.add_conversion(_method(C.LOGCDF, C.LOGSF, fitters.fit_logcdf_to_logsf))

    reg1D = reg.get(UnivariateDiscrete)
    reg1D.add_bidirectional_definitive(
        _method(C.CDF, C.LOGCDF, fitters.fit_cdf_to_logcdf),
        _method(C.LOGCDF, C.CDF, fitters.fit_logcdf_to_cdf),
    )
    reg1D.add_conversion(_method(C.CDF, C.SF, fitters.fit_cdf_to_sf))
    reg1D.add_conversion(_method(C.LOGCDF, C.LOGSF, fitters.fit_logcdf_to_logsf))


@lru_cache(maxsize=1)
def characteristic_registry() -> DistributionTypeRegister:
    """Return a cached :class:`DistributionTypeRegister` configured with the default graphs."""
    reg = DistributionTypeRegister()
    _configure(reg)
    return reg


def reset_characteristic_registry() -> None:
    """Drop the configured graphs (test helper)."""
    characteristic_registry.cache_clear()
    DistributionTypeRegister._reset()
