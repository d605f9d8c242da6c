"""
Parametrizations of distribution families.

A parametrization is a frozen dataclass of parameter values registered on a
family with :func:`parametrization`; predicates decorated with
:func:`constraint` are checked when a distribution is built.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from abc import ABC
from dataclasses import dataclass, fields, is_dataclass
from functools import wraps
from inspect import isfunction
from typing import TYPE_CHECKING, ParamSpec

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any, ClassVar

    from censored_distributions.families.parametric_family import ParametricFamily
    from censored_distributions.types import ParametrizationName


@dataclass(slots=True, frozen=True)
class ParametrizationConstraint:
    """
    Constraint on parameter values.

    Parameters
    ----------
    description : str
        Human-readable description, used as the validation error message.
    check : Callable[[Any], bool]
        Predicate returning ``True`` if the constraint holds.
    """

    description: str
    check: Callable[[Any], bool]


class Parametrization(ABC):
    """
    Base class for distribution parametrizations.

    Subclasses are turned into frozen dataclasses by :func:`parametrization`.
    """

    # Set by the @parametrization decorator
    __family__: ClassVar[ParametricFamily]
    __param_name__: ClassVar[ParametrizationName]

    _constraints: ClassVar[list[ParametrizationConstraint]] = []

    @property
    def name(self) -> str:
        """Name of this parametrization."""
        return self.__class__.__param_name__

    @property
    def parameters(self) -> dict[str, Any]:
        """Parameter values keyed by field name, in declaration order."""
        return {f.name: getattr(self, f.name) for f in fields(self)}  # type: ignore[arg-type]

    @property
    def constraints(self) -> list[ParametrizationConstraint]:
        return self._constraints

    def validate(self) -> None:
        """
        Check every registered constraint.

        Raises
        ------
        ValueError
            If any constraint is not satisfied.
        """
        for c in self._constraints:
            if not c.check(self):
                raise ValueError(f'Constraint "{c.description}" does not hold')

    def transform_to_base_parametrization(self) -> Parametrization:
        """
        Convert to the family's base parametrization.

        The base parametrization itself returns ``self``; alternative
        parametrizations override this.
        """
        return self


P = ParamSpec("P")


def constraint(description: str) -> Callable[[Callable[P, bool]], Callable[P, bool]]:
    """
    Mark an instance method as a parameter constraint.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.
    """

    def decorator(func: Callable[P, bool]) -> Callable[P, bool]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> bool:
            return func(*args, **kwargs)

        setattr(wrapper, "__is_constraint", True)
        setattr(wrapper, "__constraint_description", description)
        return wrapper

    return decorator


def _collect_constraints(cls: type[Parametrization]) -> list[ParametrizationConstraint]:
    collected: list[ParametrizationConstraint] = []
    for attr_name, attr in cls.__dict__.items():
        if isinstance(attr, staticmethod | classmethod):
            if getattr(attr.__func__, "__is_constraint", False):
                raise TypeError(f"@constraint '{attr_name}' must be an instance method")
            continue
        if isfunction(attr) and getattr(attr, "__is_constraint", False):
            desc = getattr(attr, "__constraint_description", attr.__name__)
            collected.append(ParametrizationConstraint(description=desc, check=attr))
    return collected


def parametrization(
    *,
    family: ParametricFamily,
    name: str,
) -> Callable[[type[Parametrization]], type[Parametrization]]:
    """
    Register a class as a parametrization of ``family``.

    The class is converted into a frozen, slotted dataclass when it is not a
    dataclass already, and its ``@constraint`` methods are collected.
    """

    def decorator(cls: type[Parametrization]) -> type[Parametrization]:
        if not is_dataclass(cls):
            cls = dataclass(slots=True, frozen=True)(cls)

        cls.__family__ = family
        cls.__param_name__ = name
        cls._constraints = _collect_constraints(cls)

        family.register_parametrization(name, cls)
        return cls

    return decorator
