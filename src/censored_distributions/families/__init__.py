"""
Parametric families of base distributions.

Delays and primary-event windows wrapped by the censoring layer are built
from the families registered here.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from .configuration import (
    configure_families_register,
    family_distribution,
    reset_families_register,
)
from .distribution import ParametricFamilyDistribution
from .parametric_family import ParametricFamily
from .parametrizations import (
    Parametrization,
    ParametrizationConstraint,
    constraint,
    parametrization,
)
from .registry import ParametricFamilyRegister

__all__ = [
    "ParametricFamilyRegister",
    "ParametrizationConstraint",
    "Parametrization",
    "ParametricFamily",
    "ParametricFamilyDistribution",
    "constraint",
    "parametrization",
    "configure_families_register",
    "reset_families_register",
    "family_distribution",
]
