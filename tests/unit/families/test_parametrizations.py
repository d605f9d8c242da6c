from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import dataclasses

import pytest

from censored_distributions.families import (
    ParametricFamily,
    ParametricFamilyRegister,
    Parametrization,
    constraint,
    parametrization,
)
from censored_distributions.types import UnivariateContinuous


def _make_family() -> ParametricFamily:
    family = ParametricFamily(
        name="Shifted",
        distr_type=UnivariateContinuous,
        distr_parametrizations=["locScale", "locPrec"],
        distr_characteristics={
            "mean": lambda params, _: params.loc,
        },
    )

    @parametrization(family=family, name="locScale")
    class LocScale(Parametrization):
        loc: float
        scale: float

        @constraint(description="scale > 0")
        def check_scale_positive(self) -> bool:
            return self.scale > 0

    @parametrization(family=family, name="locPrec")
    class LocPrec(Parametrization):
        loc: float
        prec: float

        @constraint(description="prec > 0")
        def check_prec_positive(self) -> bool:
            return self.prec > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            return LocScale(loc=self.loc, scale=1.0 / self.prec)

    return family


class TestParametrization:
    def test_decorator_builds_frozen_dataclass(self) -> None:
        family = _make_family()
        params = family.base(loc=1.0, scale=2.0)

        assert dataclasses.is_dataclass(params)
        assert params.name == "locScale"
        assert params.parameters == {"loc": 1.0, "scale": 2.0}
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.loc = 3.0  # type: ignore[misc]

    def test_constraints_are_collected(self) -> None:
        family = _make_family()
        params = family.base(loc=0.0, scale=1.0)

        assert [c.description for c in params.constraints] == ["scale > 0"]

    def test_validate(self) -> None:
        family = _make_family()

        family.base(loc=0.0, scale=1.0).validate()
        with pytest.raises(ValueError, match='"scale > 0"'):
            family.base(loc=0.0, scale=-1.0).validate()

    def test_transform_to_base(self) -> None:
        family = _make_family()
        params = family.parametrizations["locPrec"](loc=2.0, prec=4.0)

        base = family.to_base(params)
        assert base.name == "locScale"
        assert base.parameters == {"loc": 2.0, "scale": 0.25}

    def test_alternative_parametrization_uses_base_characteristics(self) -> None:
        family = _make_family()
        ParametricFamilyRegister.register(family)
        dist = family.distribution("locPrec", loc=2.0, prec=4.0)

        assert dist.query_method("mean")(None) == 2.0

    def test_duplicate_parametrization_is_rejected(self) -> None:
        family = _make_family()

        with pytest.raises(ValueError, match="already registered"):
            family.register_parametrization("locScale", family.base)

    def test_constraint_must_be_instance_method(self) -> None:
        family = _make_family()

        with pytest.raises(TypeError, match="instance method"):

            @parametrization(family=family, name="broken")
            class Broken(Parametrization):
                value: float

                @staticmethod
                @constraint(description="always")
                def check() -> bool:
                    return True
