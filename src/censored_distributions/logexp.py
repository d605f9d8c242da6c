"""
Log-space arithmetic primitives.

Helpers for combining probabilities stored as logarithms without leaving
log-space. Scalar inputs give Python floats; array inputs give arrays.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

LOG_HALF = -math.log(2.0)


def _scalar_or_array(values: npt.NDArray[np.floating[Any]]) -> Any:
    return float(values) if values.ndim == 0 else values


def safe_log(value: float) -> float:
    """Natural logarithm mapping non-positive arguments to ``-inf``."""
    if value <= 0.0:
        return -math.inf
    return math.log(value)


def log1mexp(x: Any) -> Any:
    """
    Compute ``log(1 - exp(x))`` for ``x <= 0``.

    Switches between ``log(-expm1(x))`` and ``log1p(-exp(x))`` at ``-log 2``
    (Mächler, 2012).

    Raises
    ------
    ValueError
        If any ``x`` is positive.
    """
    arr = np.asarray(x, dtype=np.float64)
    if np.any(arr > 0.0):
        raise ValueError("log1mexp is only defined for non-positive arguments")
    with np.errstate(divide="ignore", invalid="ignore"):
        out = np.where(arr > LOG_HALF, np.log(-np.expm1(arr)), np.log1p(-np.exp(arr)))
    return _scalar_or_array(out)


def log_add_exp(a: float, b: float) -> float:
    """Compute ``log(exp(a) + exp(b))``."""
    return float(np.logaddexp(a, b))


def log_sub_exp(a: float, b: float) -> float:
    """
    Compute ``log|exp(a) - exp(b)|``.

    Returns ``-inf`` when both terms are equal (including both ``-inf``).
    """
    hi, lo = (a, b) if a >= b else (b, a)
    if lo == -math.inf:
        return hi
    if hi == lo:
        return -math.inf
    return hi + float(log1mexp(lo - hi))
