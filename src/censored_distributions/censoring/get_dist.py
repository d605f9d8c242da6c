"""
Unwrapping of censoring wrappers.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

from censored_distributions.censoring.interval_censored import IntervalCensored
from censored_distributions.censoring.primary_censored import PrimaryCensored
from censored_distributions.censoring.truncated import Truncated

if TYPE_CHECKING:
    from censored_distributions.distributions.distribution import Distribution


def get_dist(d: Distribution) -> Distribution:
    """
    Return the distribution wrapped by ``d``.

    Parameters
    ----------
    d : Distribution
        Any distribution.

    Returns
    -------
    Distribution
        The delay of a :class:`PrimaryCensored`, the untruncated distribution
        of a :class:`Truncated`, the inner distribution of an
        :class:`IntervalCensored` and ``d`` itself otherwise. Only one layer
        is removed.
    """
    if isinstance(d, PrimaryCensored):
        return d.delay
    if isinstance(d, Truncated | IntervalCensored):
        return d.dist
    return d
