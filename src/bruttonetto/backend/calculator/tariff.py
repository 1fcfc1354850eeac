"""Income tax tariff helpers used by the reference calculator."""

from __future__ import annotations

import math

from bruttonetto.backend.config.schema import IncomeTaxConfig, SolidarityConfig

SPLITTING_CLASS = 3
SECONDARY_CLASSES = frozenset({5, 6})


def calculate_tariff(taxable_income: float, config: IncomeTaxConfig) -> float:
    """Return the annual income tax for ``taxable_income`` in full euros."""

    income = math.floor(taxable_income)
    if income <= config.basic_allowance:
        return 0.0

    lower_bound = config.basic_allowance
    for zone in config.progression_zones:
        if income <= zone.upper_bound:
            step = (income - lower_bound) / 10_000
            tax = (zone.quadratic * step + zone.linear) * step + zone.constant
            return float(math.floor(tax))
        lower_bound = zone.upper_bound

    for zone in config.proportional_zones:
        if zone.upper_bound is None or income <= zone.upper_bound:
            return float(math.floor(zone.rate * income - zone.deduction))

    raise AssertionError("tariff zones must end with an open bound")  # pragma: no cover


def calculate_income_tax(
    taxable_income: float, tax_class: int, config: IncomeTaxConfig
) -> float:
    """Apply the tax class specific procedure on top of the base tariff."""

    if taxable_income <= 0:
        return 0.0

    if tax_class == SPLITTING_CLASS:
        return 2 * calculate_tariff(taxable_income / 2, config)

    if tax_class in SECONDARY_CLASSES:
        doubled_difference = 2 * (
            calculate_tariff(taxable_income * 1.25, config)
            - calculate_tariff(taxable_income * 0.75, config)
        )
        minimum = taxable_income * config.minimum_rate_secondary_classes
        return float(math.floor(max(doubled_difference, minimum)))

    return calculate_tariff(taxable_income, config)


def calculate_solidarity_surcharge(
    income_tax: float, tax_class: int, config: SolidarityConfig
) -> float:
    """Return the annual solidarity surcharge for an annual ``income_tax``."""

    threshold = config.exemption_threshold
    if tax_class == SPLITTING_CLASS:
        threshold *= 2

    if income_tax <= threshold:
        return 0.0

    surcharge = income_tax * config.rate
    if config.phase_in_rate is not None:
        surcharge = min(surcharge, (income_tax - threshold) * config.phase_in_rate)
    return surcharge


def round_currency(value: float) -> float:
    """Round monetary amounts to two decimals."""

    return round(value, 2)


__all__ = [
    "SECONDARY_CLASSES",
    "SPLITTING_CLASS",
    "calculate_income_tax",
    "calculate_solidarity_surcharge",
    "calculate_tariff",
    "round_currency",
]
