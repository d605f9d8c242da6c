from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Generator
from typing import Any

import pytest

from censored_distributions.censoring.analytical import reset_analytical_cdfs
from censored_distributions.distributions.registry import reset_characteristic_registry
from censored_distributions.families.configuration import reset_families_register

pytest.importorskip("scipy")


@pytest.fixture(autouse=True)
def _fresh_registries() -> Generator[None, Any, None]:
    reset_characteristic_registry()
    reset_families_register()
    reset_analytical_cdfs()
    yield
