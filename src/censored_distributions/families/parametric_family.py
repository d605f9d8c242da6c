"""
Parametric family definitions.

A :class:`ParametricFamily` bundles the parametrizations of one family of
distributions with the analytical characteristic functions written for its
base parametrization, and builds :class:`ParametricFamilyDistribution`
instances on demand.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from functools import partial
from typing import TYPE_CHECKING, dataclass_transform

from censored_distributions.distributions.computation import AnalyticalComputation
from censored_distributions.distributions.strategies import (
    DefaultComputationStrategy,
    DefaultSamplingUnivariateStrategy,
)
from censored_distributions.distributions.support import ContinuousSupport
from censored_distributions.families.distribution import ParametricFamilyDistribution
from censored_distributions.types import DistributionType

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    from censored_distributions.distributions.strategies import (
        ComputationStrategy,
        SamplingStrategy,
    )
    from censored_distributions.families.parametrizations import Parametrization
    from censored_distributions.types import (
        GenericCharacteristicName,
        ParametrizationName,
    )

    type ParametrizedFunction = Callable[[Parametrization, Any], Any]
    type SupportResolver = Callable[[Parametrization], ContinuousSupport]


class ParametricFamily:
    """
    A family of distributions with one or more parametrizations.

    Parameters
    ----------
    name : str
        Name of the distribution family.
    distr_type : DistributionType or Callable[[Parametrization], DistributionType]
        Distribution type or function that infers type from base parametrization.
    distr_parametrizations : list[ParametrizationName]
        List of parametrization names (first is base parametrization).
    distr_characteristics : dict[str, dict[str, Callable] or Callable]
        Mapping from characteristic names to computation functions
        ``f(parameters, x)``. Single functions are treated as defined for the
        base parametrization.
    sampling_strategy : SamplingStrategy, optional
        Strategy for sampling from distributions (inverse transform by default).
    computation_strategy : ComputationStrategy, optional
        Strategy for computing distribution characteristics.
    support_by_parametrization : Callable, optional
        Function returning the support for given base parameters; the whole
        real line when omitted.
    """

    def __init__(
        self,
        name: str,
        distr_type: DistributionType | Callable[[Parametrization], DistributionType],
        distr_parametrizations: list[ParametrizationName],
        distr_characteristics: dict[
            GenericCharacteristicName,
            dict[ParametrizationName, ParametrizedFunction] | ParametrizedFunction,
        ],
        sampling_strategy: SamplingStrategy | None = None,
        computation_strategy: ComputationStrategy[Any, Any] | None = None,
        support_by_parametrization: SupportResolver | None = None,
    ):
        self._name = name
        self._distr_type: Callable[[Parametrization], DistributionType] = (
            (lambda params: distr_type) if isinstance(distr_type, DistributionType) else distr_type
        )
        self._support_resolver: SupportResolver = (
            (lambda _params: ContinuousSupport())
            if support_by_parametrization is None
            else support_by_parametrization
        )
        self.computation_strategy = (
            DefaultComputationStrategy() if computation_strategy is None else computation_strategy
        )
        self.sampling_strategy = (
            DefaultSamplingUnivariateStrategy() if sampling_strategy is None else sampling_strategy
        )

        self.parametrization_names: list[ParametrizationName] = distr_parametrizations
        self.base_parametrization_name: ParametrizationName = distr_parametrizations[0]
        self._parametrizations: dict[ParametrizationName, type[Parametrization]] = {}

        self.distr_characteristics: dict[
            GenericCharacteristicName, dict[ParametrizationName, ParametrizedFunction]
        ] = {
            key: val if isinstance(val, dict) else {self.base_parametrization_name: val}
            for key, val in distr_characteristics.items()
        }

        # For every parametrization: which parametrization provides each characteristic
        self._analytical_plan: dict[
            ParametrizationName, dict[GenericCharacteristicName, ParametrizationName]
        ] = {}
        for pname in self.parametrization_names:
            plan: dict[GenericCharacteristicName, ParametrizationName] = {}
            for characteristic, forms in self.distr_characteristics.items():
                if pname in forms:
                    plan[characteristic] = pname
                elif self.base_parametrization_name in forms:
                    plan[characteristic] = self.base_parametrization_name
            self._analytical_plan[pname] = plan

    @property
    def name(self) -> str:
        return self._name

    @property
    def parametrizations(self) -> dict[ParametrizationName, type[Parametrization]]:
        return self._parametrizations

    @property
    def base(self) -> type[Parametrization]:
        """
        The base parametrization class.

        Raises
        ------
        ValueError
            If base parametrization is not registered.
        """
        try:
            return self._parametrizations[self.base_parametrization_name]
        except KeyError as exc:
            raise ValueError(
                f"Base parametrization '{self.base_parametrization_name}' is not registered."
            ) from exc

    def register_parametrization(
        self,
        name: ParametrizationName,
        parametrization_class: type[Parametrization],
    ) -> None:
        """
        Register a parametrization class.

        Raises
        ------
        ValueError
            If name is already registered.
        """
        if name in self._parametrizations:
            raise ValueError(f"Parametrization '{name}' is already registered.")
        self._parametrizations[name] = parametrization_class

    def to_base(self, parameters: Parametrization) -> Parametrization:
        """Convert parameters to the base parametrization."""
        if parameters.name == self.base_parametrization_name:
            return parameters
        return parameters.transform_to_base_parametrization()

    def _build_analytical_computations(
        self, parameters: Parametrization
    ) -> dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        plan = self._analytical_plan.get(parameters.name, {})
        result: dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]] = {}
        base_params: Parametrization | None = None

        for characteristic, provider_name in plan.items():
            if provider_name == parameters.name:
                params_obj = parameters
            else:
                if base_params is None:
                    base_params = self.to_base(parameters)
                params_obj = base_params

            func_factory = self.distr_characteristics[characteristic][provider_name]
            result[characteristic] = AnalyticalComputation(
                target=characteristic,
                func=partial(func_factory, params_obj),
            )

        return result

    def distribution(
        self,
        parametrization_name: str | None = None,
        **parameters_values: Any,
    ) -> ParametricFamilyDistribution:
        """
        Create a distribution instance with given parameters.

        Parameters
        ----------
        parametrization_name : str, optional
            Name of parametrization to use (defaults to base).
        **parameters_values
            Parameter values for the distribution.

        Raises
        ------
        KeyError
            If parametrization name is not registered.
        ValueError
            If parameters don't satisfy constraints.
        """
        if parametrization_name is None:
            parametrization_class = self.base
        else:
            parametrization_class = self._parametrizations[parametrization_name]

        parameters = parametrization_class(**parameters_values)
        parameters.validate()
        base_parameters = self.to_base(parameters)
        return ParametricFamilyDistribution(
            self.name,
            self._distr_type(base_parameters),
            parameters,
            self._support_resolver(base_parameters),
        )

    @dataclass_transform()
    def parametrization(
        self, *, name: str
    ) -> Callable[[type[Parametrization]], type[Parametrization]]:
        """Class decorator registering a parametrization of this family."""
        from censored_distributions.families.parametrizations import parametrization as _deco

        return _deco(family=self, name=name)

    __call__ = distribution
