"""
censored-distributions
======================

Primary-event censored, truncated and interval-censored delay distributions
built on a small characteristic-oriented distribution framework: type
definitions, distribution abstractions, characteristic computation graphs,
parametric families and censoring wrappers.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from importlib.metadata import version

from .censoring import *
from .censoring import __all__ as _censoring_all
from .distributions import *
from .distributions import __all__ as _distr_all
from .families import *
from .families import __all__ as _family_all
from .logexp import log1mexp, log_add_exp, log_sub_exp
from .types import *
from .types import __all__ as _types_all

__version__ = version("censored-distributions")
__all__ = [
    "__version__",
    "log1mexp",
    "log_add_exp",
    "log_sub_exp",
    *_censoring_all,
    *_distr_all,
    *_family_all,
    *_types_all,
]

del _censoring_all
del _distr_all
del _family_all
del _types_all
