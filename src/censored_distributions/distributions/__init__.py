"""
Distributions subpackage

Interfaces and default implementations shared by parametric families and
censoring wrappers:

- distribution protocol (:mod:`.distribution`);
- numerical fitters (:mod:`.fitters`);
- characteristic graph registry (:mod:`.registry`);
- sampling protocol and array-backed samples (:mod:`.sampling`);
- pluggable strategies (:mod:`.strategies`);
- interval supports (:mod:`.support`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .computation import (
    AnalyticalComputation,
    ComputationMethod,
    FittedComputationMethod,
)
from .distribution import Distribution
from .registry import (
    DEFAULT_COMPUTATION_KEY,
    characteristic_registry,
    reset_characteristic_registry,
)
from .sampling import ArraySample, Sample
from .strategies import (
    ComputationStrategy,
    DefaultComputationStrategy,
    DefaultSamplingUnivariateStrategy,
    SamplingStrategy,
)
from .support import ContinuousSupport, Support

__all__ = [
    # computation primitives
    "AnalyticalComputation",
    "ComputationMethod",
    "FittedComputationMethod",
    # distribution
    "Distribution",
    # sampling
    "Sample",
    "ArraySample",
    # strategies
    "ComputationStrategy",
    "DefaultComputationStrategy",
    "SamplingStrategy",
    "DefaultSamplingUnivariateStrategy",
    # registry
    "DEFAULT_COMPUTATION_KEY",
    "characteristic_registry",
    "reset_characteristic_registry",
    # supports
    "Support",
    "ContinuousSupport",
]
