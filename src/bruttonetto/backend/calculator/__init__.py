"""Gross-to-net calculator contract and backend loading.

The HTTP layer treats the calculator as an opaque, stateless function from a
mapping of ``input*`` parameters to a :class:`CalculationResult`. Backends are
selected by import path so deployments can plug in an alternative engine
without touching the request pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib import import_module
from typing import Any, Mapping, Protocol, runtime_checkable

from bruttonetto.backend.config.schema import ConfigurationError


@dataclass(frozen=True, slots=True)
class CalculationResult:
    """Raw calculator output for a single gross wage.

    Monthly figures and the ``total_*`` sums refer to one calendar month.
    """

    net_wage_month: float
    net_wage_year: float
    income_tax_month: float
    solidarity_surcharge_month: float
    church_tax_month: float
    total_taxes: float
    health_insurance_month: float
    care_insurance_month: float
    pension_insurance_month: float
    unemployment_insurance_month: float
    total_insurances: float
    gross_wage_month: float = 0.0
    gross_wage_year: float = 0.0
    income_tax_year: float = 0.0
    employer_costs_month: float = 0.0


@runtime_checkable
class GrossToNetCalculator(Protocol):
    """Anything able to turn canonical ``input*`` parameters into a result."""

    def validate_and_calculate(self, parameters: Mapping[str, Any]) -> CalculationResult:
        ...


def load_calculator(path: str) -> GrossToNetCalculator:
    """Import and instantiate the calculator referenced by ``module:attribute``."""

    module_name, separator, attribute = path.partition(":")
    if not separator or not module_name or not attribute:
        raise ConfigurationError(
            f"Calculator path must look like 'package.module:attribute', got {path!r}"
        )

    try:
        module = import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(f"Unable to import calculator module {module_name!r}") from exc

    try:
        target = getattr(module, attribute)
    except AttributeError as exc:
        raise ConfigurationError(
            f"Module {module_name!r} has no attribute {attribute!r}"
        ) from exc

    calculator = target() if isinstance(target, type) else target
    if not isinstance(calculator, GrossToNetCalculator):
        raise ConfigurationError(
            f"{path!r} does not provide a 'validate_and_calculate' method"
        )
    return calculator


__all__ = ["CalculationResult", "GrossToNetCalculator", "load_calculator"]
