"""
Array helpers shared by the built-in continuous families.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import Any

import numpy as np


def as_array(x: Any) -> np.ndarray[Any, np.dtype[np.float64]]:
    """Convert scalar or array-like input to a float64 array."""
    return np.asarray(x, dtype=np.float64)


def as_output(values: Any) -> Any:
    """Return a Python float for 0-d results and the array otherwise."""
    arr = np.asarray(values, dtype=np.float64)
    return float(arr) if arr.ndim == 0 else arr


def check_probabilities(p: Any) -> np.ndarray[Any, np.dtype[np.float64]]:
    """
    Validate probabilities for a percent point function.

    Raises
    ------
    ValueError
        If probability is outside [0, 1]
    """
    p = as_array(p)
    if np.any((p < 0) | (p > 1)):
        raise ValueError("Probability must be in [0, 1]")
    return p
