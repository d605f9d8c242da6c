"""
Double censoring
================

Composition of primary-event censoring, optional truncation and optional
interval censoring, always applied in that order.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Iterable
from typing import TYPE_CHECKING

from censored_distributions.censoring.interval_censored import interval_censored
from censored_distributions.censoring.primary_censored import primary_censored
from censored_distributions.censoring.truncated import truncated

if TYPE_CHECKING:
    from censored_distributions.censoring.solvers import Integrator
    from censored_distributions.distributions.distribution import Distribution


def double_interval_censored(
    delay: Distribution,
    primary_event: Distribution | None = None,
    *,
    lower: float | None = None,
    upper: float | None = None,
    interval: float | Iterable[float] | None = None,
    integrator: Integrator | None = None,
    force_numeric: bool = False,
) -> Distribution:
    """
    Build a doubly censored delay distribution.

    Parameters
    ----------
    delay : Distribution
        Delay distribution with support starting at 0.
    primary_event : Distribution, optional
        Primary-event time distribution; ``Uniform(0, 1)`` when omitted.
    lower, upper : float, optional
        Truncation bounds; truncation is applied if either is given.
    interval : float or iterable of float, optional
        Interval width or boundaries; interval censoring is applied if given.
    integrator : Integrator, optional
        Integrator of the numerical CDF path.
    force_numeric : bool
        Integrate numerically even where a closed form exists.

    Returns
    -------
    Distribution
        ``PrimaryCensored``, optionally wrapped in ``Truncated`` and then in
        ``IntervalCensored``.

    Examples
    --------
    >>> d = double_interval_censored(delay, upper=10.0, interval=1.0)  # doctest: +SKIP
    """
    result: Distribution = primary_censored(
        delay, primary_event, integrator=integrator, force_numeric=force_numeric
    )
    if lower is not None or upper is not None:
        result = truncated(result, lower, upper)
    if interval is not None:
        result = interval_censored(result, interval)
    return result
