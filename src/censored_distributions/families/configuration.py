"""
Distribution Families Configuration
====================================

Registers the built-in parametric families in the global
:class:`ParametricFamilyRegister`:

- ``ContinuousUniform`` and ``Normal``,
- ``Exponential``, ``Gamma``, ``LogNormal`` and ``Weibull`` delays.

Notes
-----
Configuration runs once and is cached; :func:`reset_families_register`
drops both the cache and the register (used by the test suite).
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache
from typing import TYPE_CHECKING

from censored_distributions.families.builtins import (
    configure_exponential_family,
    configure_gamma_family,
    configure_lognormal_family,
    configure_normal_family,
    configure_uniform_family,
    configure_weibull_family,
)
from censored_distributions.families.registry import ParametricFamilyRegister

if TYPE_CHECKING:
    from typing import Any

    from censored_distributions.families.distribution import ParametricFamilyDistribution


@lru_cache(maxsize=1)
def configure_families_register() -> ParametricFamilyRegister:
    """
    Configure and register all built-in families in the global registry.

    Returns
    -------
    ParametricFamilyRegister
        The global registry of parametric families.
    """
    configure_uniform_family()
    configure_normal_family()
    configure_exponential_family()
    configure_gamma_family()
    configure_lognormal_family()
    configure_weibull_family()
    return ParametricFamilyRegister()


def reset_families_register() -> None:
    """
    Reset the cached families registry.
    """
    configure_families_register.cache_clear()
    ParametricFamilyRegister._reset()


def family_distribution(
    family_name: str, parametrization_name: str | None = None, **parameters: Any
) -> ParametricFamilyDistribution:
    """
    Build a distribution of a built-in family, configuring the register if needed.

    Examples
    --------
    >>> delay = family_distribution("Gamma", shape=2.0, scale=1.5)
    >>> window = family_distribution("ContinuousUniform", lower_bound=0.0, upper_bound=1.0)
    """
    family = configure_families_register().get(family_name)
    return family.distribution(parametrization_name, **parameters)
