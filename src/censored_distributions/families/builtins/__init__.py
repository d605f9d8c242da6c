"""
Built-in distribution families available by default.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from censored_distributions.families.builtins.continuous import (
    configure_exponential_family,
    configure_gamma_family,
    configure_lognormal_family,
    configure_normal_family,
    configure_uniform_family,
    configure_weibull_family,
)

__all__ = [
    "configure_normal_family",
    "configure_uniform_family",
    "configure_exponential_family",
    "configure_gamma_family",
    "configure_lognormal_family",
    "configure_weibull_family",
]
