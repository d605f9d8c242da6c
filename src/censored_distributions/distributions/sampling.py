"""
Samples
=======

Containers returned by :meth:`Distribution.sample`. Draws of a univariate
distribution are kept as a single column so that every sampling strategy
(inverse transform, delay plus primary event, rejection, snapping to interval
edges) hands back the same shape.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import Any

    import numpy.typing as npt


class Sample(Protocol):
    """
    What a sampling strategy returns.

    Attributes
    ----------
    array : numpy.ndarray
        Draws as an ``(n, 1)`` array.
    values : numpy.ndarray
        Draws as a flat array of length ``n``.
    shape : tuple[int, ...]
        ``(n, 1)``.
    """

    def __len__(self) -> int: ...
    @property
    def array(self) -> npt.NDArray[np.floating[Any]]: ...
    @property
    def values(self) -> npt.NDArray[np.floating[Any]]: ...
    @property
    def shape(self) -> tuple[int, ...]: ...


class ArraySample:
    """
    Column of draws backed by a numpy array.

    Parameters
    ----------
    data : numpy.ndarray
        Array of shape ``(n, 1)``. Use :meth:`from_values` for flat draws.

    Raises
    ------
    ValueError
        If ``data`` is not two-dimensional.
    """

    data: npt.NDArray[np.floating[Any]]

    def __init__(self, data: npt.NDArray[np.floating[Any]]) -> None:
        if data.ndim != 2:
            raise ValueError("ArraySample expects 2D array of shape (n, 1).")
        self.data = data

    @classmethod
    def from_values(cls, values: npt.ArrayLike) -> ArraySample:
        """Wrap flat draws as an ``(n, 1)`` sample."""
        return cls(np.asarray(values, dtype=np.float64).reshape(-1, 1))

    def __len__(self) -> int:
        return int(self.data.shape[0])

    def __iter__(self) -> Iterator[npt.NDArray[np.floating[Any]]]:
        yield from self.data

    @property
    def array(self) -> npt.NDArray[np.floating[Any]]:
        return self.data

    @property
    def values(self) -> npt.NDArray[np.floating[Any]]:
        """Flat view of the draws."""
        return self.data[:, 0]

    @property
    def shape(self) -> tuple[int, ...]:
        n, d = self.data.shape
        return int(n), int(d)
