from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import Protocol, overload, runtime_checkable

from censored_distributions.types import BoolArray, Interval1D, Number, NumericArray


@runtime_checkable
class Support(Protocol):
    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...


class ContinuousSupport(Interval1D, Support):
    """Closed (or half-open, or unbounded) interval support of a univariate distribution."""

    def restrict(self, lower: float | None = None, upper: float | None = None) -> ContinuousSupport:
        """
        Intersect the support with ``[lower, upper]``.

        Parameters
        ----------
        lower, upper : float or None
            Optional bounds; ``None`` leaves the corresponding endpoint untouched.

        Returns
        -------
        ContinuousSupport
            The restricted support.
        """
        left, left_closed = self.left, self.left_closed
        right, right_closed = self.right, self.right_closed
        if lower is not None and lower > left:
            left, left_closed = float(lower), True
        if upper is not None and upper < right:
            right, right_closed = float(upper), True
        return ContinuousSupport(
            left=left, right=right, left_closed=left_closed, right_closed=right_closed
        )
